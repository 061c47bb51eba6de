from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.zatca_qr_code_service import ZatcaQrCodeService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_qr_code_service() -> ZatcaQrCodeService:
    return ZatcaQrCodeService(
        seller_name=ApplicationConfig.COMPANY_NAME,
        vat_number=ApplicationConfig.COMPANY_VAT_NUMBER,
    )
