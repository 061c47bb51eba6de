"""Reference numbering format

Human-readable document references: a type prefix followed by a
zero-padded sequence number (QUO00001, PRO00012, INV00345).
"""

import re
from typing import Optional
from src.domain.document import DocumentType

REFERENCE_NUMBER_WIDTH = 5

REFERENCE_PREFIXES: dict[DocumentType, str] = {
    DocumentType.QUOTATION: "QUO",
    DocumentType.PROFORMA_INVOICE: "PRO",
    DocumentType.INVOICE: "INV",
}


def format_reference(document_type: DocumentType, number: int) -> str:
    """Render sequence number `number` as a reference for `document_type`"""
    if number < 1:
        raise ValueError(f"Reference number must be >= 1, got {number}")
    return f"{REFERENCE_PREFIXES[document_type]}{number:0{REFERENCE_NUMBER_WIDTH}d}"


def parse_reference(document_type: DocumentType, reference_id: str) -> Optional[int]:
    """
    Extract the sequence number from a reference

    Returns None when the reference does not carry the prefix of
    `document_type` followed by ASCII digits. Any padding is accepted
    (QUO12, QUO00012 and QUO123456); callers store the canonical form
    from format_reference so equal numbers always compare equal.
    """
    prefix = REFERENCE_PREFIXES[document_type]
    match = re.fullmatch(rf"{prefix}([0-9]+)", reference_id.strip())
    if not match:
        return None
    number = int(match.group(1))
    return number if number >= 1 else None
