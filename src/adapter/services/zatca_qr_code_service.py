"""ZATCA QR Code Service Implementation

Builds the phase-1 e-invoice QR payload required on Saudi tax invoices:
base64 of five TLV records (seller name, VAT number, timestamp, total, VAT).
"""

import base64
import logging
from datetime import datetime
from decimal import Decimal
from src.app.services.qr_code_service import QrCodeService
from src.domain.amounts import round_money

logger = logging.getLogger(__name__)

SELLER_NAME_TAG = 1
VAT_NUMBER_TAG = 2
TIMESTAMP_TAG = 3
TOTAL_AMOUNT_TAG = 4
VAT_TOTAL_TAG = 5


def encode_tlv(tag: int, value: str) -> bytes:
    """
    Encode one TLV record

    Tag and length are single bytes; the value is UTF-8.

    Raises:
        ValueError: If the encoded value is longer than 255 bytes
    """
    encoded = value.encode("utf-8")
    if len(encoded) > 255:
        raise ValueError(f"TLV value for tag {tag} exceeds 255 bytes")
    return bytes([tag, len(encoded)]) + encoded


def decode_tlv(payload: str) -> dict[int, str]:
    """Decode a base64 TLV payload back into {tag: value}"""
    raw = base64.b64decode(payload)
    records = {}
    index = 0
    while index < len(raw):
        tag = raw[index]
        length = raw[index + 1]
        records[tag] = raw[index + 2:index + 2 + length].decode("utf-8")
        index += 2 + length
    return records


class ZatcaQrCodeService(QrCodeService):
    """
    QR payload generator for ZATCA simplified tax invoices

    Seller identity is fixed per deployment and read from configuration.
    """

    def __init__(self, seller_name: str, vat_number: str):
        self.seller_name = seller_name
        self.vat_number = vat_number

    def generate_invoice_qr(
        self,
        timestamp: datetime,
        total_amount: Decimal,
        vat_total: Decimal,
    ) -> str:
        """
        Build the base64 TLV payload for a tax invoice

        Args:
            timestamp: Invoice issue timestamp
            total_amount: Invoice total including VAT
            vat_total: VAT total

        Returns:
            Base64 encoded TLV string
        """
        payload = b"".join([
            encode_tlv(SELLER_NAME_TAG, self.seller_name),
            encode_tlv(VAT_NUMBER_TAG, self.vat_number),
            encode_tlv(TIMESTAMP_TAG, timestamp.strftime("%Y-%m-%dT%H:%M:%SZ")),
            encode_tlv(TOTAL_AMOUNT_TAG, f"{round_money(total_amount):.2f}"),
            encode_tlv(VAT_TOTAL_TAG, f"{round_money(vat_total):.2f}"),
        ])

        logger.debug(f"Generated ZATCA QR payload ({len(payload)} bytes) for seller {self.vat_number}")
        return base64.b64encode(payload).decode("ascii")
