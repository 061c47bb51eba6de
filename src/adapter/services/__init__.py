from .unit_of_work import SqlAlchemyUnitOfWork
from .zatca_qr_code_service import ZatcaQrCodeService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ZatcaQrCodeService",
]
