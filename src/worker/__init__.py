"""Background workers for the sales documents service"""
from .document_expiry import DocumentExpiryWorker

__all__ = ["DocumentExpiryWorker"]
