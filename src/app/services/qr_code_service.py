"""QR Code Service Interface

Defines the contract for e-invoice QR payload generation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal


class QrCodeService(ABC):
    """
    Service interface for tax invoice QR payloads

    Implementations encode the seller identity and invoice totals into the
    string printed as a QR code on the invoice.
    """

    @abstractmethod
    def generate_invoice_qr(
        self,
        timestamp: datetime,
        total_amount: Decimal,
        vat_total: Decimal,
    ) -> str:
        """
        Build the QR payload for a tax invoice

        Args:
            timestamp: Invoice issue timestamp
            total_amount: Invoice total including VAT
            vat_total: VAT total

        Returns:
            QR payload string
        """
        pass
