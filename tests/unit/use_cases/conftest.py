import pytest
from datetime import date, datetime
from decimal import Decimal
from src.domain.document import SalesDocument, DocumentType
from src.domain.document_line import DocumentLine


@pytest.fixture
def sample_document():
    """Draft quotation QUO00001 with one line"""
    return SalesDocument(
        id=1,
        tenant_id="tenant_123",
        document_type=DocumentType.QUOTATION,
        reference_id="QUO00001",
        customer_id=None,
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 8),
        subtotal=Decimal("200.00"),
        discount_total=Decimal("20.00"),
        vat_total=Decimal("27.00"),
        total_amount=Decimal("207.00"),
        status="draft",
        created_at=datetime(2024, 1, 1, 9, 0, 0),
        updated_at=datetime(2024, 1, 1, 9, 0, 0),
    )


@pytest.fixture
def sample_lines():
    return [
        DocumentLine(
            id=1,
            document_id=1,
            position=1,
            description="Consulting",
            quantity=Decimal("2"),
            unit_price=Decimal("100.00"),
            discount_percent=Decimal("10"),
            vat_percent=Decimal("15"),
            vat_amount=Decimal("27.00"),
            line_amount=Decimal("207.00"),
        )
    ]
