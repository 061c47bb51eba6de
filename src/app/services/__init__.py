from .unit_of_work import UnitOfWork
from .qr_code_service import QrCodeService

__all__ = [
    "UnitOfWork",
    "QrCodeService",
]
