"""Unit tests for CreateDocument use case

Tests cover:
- Successful creation with server-side calculation
- Reference allocation and caller-supplied references
- Date and customer validation
- Reference conflicts and allocation failures
- ZATCA QR for tax invoices
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.sales.create_document import CreateDocument
from src.app.use_cases.sales.dtos import CreateDocumentCommandDTO, LineItemInputDTO
from src.domain.customer import Customer
from src.domain.document import DocumentType


def _assign_id(document):
    document.id = 1
    return document


def _return_lines(lines):
    for index, line in enumerate(lines, start=1):
        line.id = index
    return lines


@pytest.fixture
def mock_document_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_assign_id)
    return repo


@pytest.fixture
def mock_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=_return_lines)
    return repo


@pytest.fixture
def mock_counter_repo():
    repo = MagicMock()
    repo.allocate_next = AsyncMock(return_value=6)
    repo.ensure_at_least = AsyncMock()
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Customer(
            id=7,
            tenant_id="tenant_123",
            code="C-007",
            customer_name="Al Noor Trading",
            phone="+966500000000",
            email="billing@alnoor.sa",
            city="Riyadh",
            country="Saudi Arabia",
        )
    )
    return repo


@pytest.fixture
def mock_qr_service():
    service = MagicMock()
    service.generate_invoice_qr = MagicMock(return_value="AQxBY21lIFRyYWRpbmc=")
    return service


@pytest.fixture
def use_case(mock_uow, mock_document_repo, mock_line_repo, mock_counter_repo, mock_customer_repo, mock_qr_service):
    return CreateDocument(
        uow=mock_uow,
        document_repo=mock_document_repo,
        line_repo=mock_line_repo,
        reference_counter_repo=mock_counter_repo,
        customer_repo=mock_customer_repo,
        qr_code_service=mock_qr_service,
    )


def _command(**overrides):
    fields = dict(
        tenant_id="tenant_123",
        document_type=DocumentType.QUOTATION,
        customer_id=7,
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 8),
        lines=[
            LineItemInputDTO(description="Consulting", quantity=Decimal("2"), unit_price=Decimal("100.00"),
                             discount_percent=Decimal("10"), vat_percent=Decimal("15")),
            LineItemInputDTO(description="Travel", quantity=Decimal("1"), unit_price=Decimal("50.00"),
                             discount_percent=Decimal("0"), vat_percent=Decimal("5")),
        ],
    )
    fields.update(overrides)
    return CreateDocumentCommandDTO(**fields)


@pytest.mark.asyncio
class TestCreateDocumentSuccess:
    """Test successful document creation"""

    async def test_create_quotation(self, use_case, mock_document_repo, mock_line_repo, mock_uow):
        """
        Given: A quotation with two lines and no reference
        When: create is called
        Then: QUO00006 is allocated, totals computed, document saved as draft
        """
        # Act
        result = await use_case.execute(_command())

        # Assert
        assert result.is_ok()
        document = result.value
        assert document.reference_id == "QUO00006"
        assert document.status == "draft"
        assert document.subtotal == Decimal("250.00")
        assert document.discount_total == Decimal("20.00")
        assert document.vat_total == Decimal("29.50")
        assert document.total_amount == Decimal("259.50")
        assert [line.line_amount for line in document.lines] == [Decimal("207.00"), Decimal("52.50")]
        assert document.customer.customer_name == "Al Noor Trading"
        assert document.customer.address == "Riyadh, Saudi Arabia"
        assert document.qr_code is None

        mock_document_repo.create.assert_called_once()
        saved_lines = mock_line_repo.create_many.call_args[0][0]
        assert [line.document_id for line in saved_lines] == [1, 1]
        assert [line.position for line in saved_lines] == [1, 2]
        mock_uow.commit.assert_called_once()

    async def test_caller_supplied_reference_reserved(self, use_case, mock_counter_repo):
        """
        Given: A reference previously fetched from next-reference
        When: create is called with it
        Then: The reference is kept and the counter raised to its number
        """
        # Act
        result = await use_case.execute(_command(reference_id="QUO00012"))

        # Assert
        assert result.value.reference_id == "QUO00012"
        mock_counter_repo.allocate_next.assert_not_called()
        mock_counter_repo.ensure_at_least.assert_called_once_with("tenant_123", DocumentType.QUOTATION, 12)

    async def test_supplied_reference_stored_zero_padded(self, use_case, mock_counter_repo):
        """
        Given: A reference typed without padding
        When: create is called with it
        Then: The document is stored under the canonical 5-digit reference
        """
        # Act
        result = await use_case.execute(_command(reference_id="QUO12"))

        # Assert
        assert result.value.reference_id == "QUO00012"
        mock_counter_repo.ensure_at_least.assert_called_once_with("tenant_123", DocumentType.QUOTATION, 12)

    async def test_empty_document_accepted(self, use_case):
        result = await use_case.execute(_command(lines=[]))

        assert result.is_ok()
        assert result.value.total_amount == Decimal("0.00")
        assert result.value.lines == []

    async def test_without_customer(self, use_case, mock_customer_repo):
        result = await use_case.execute(_command(customer_id=None))

        assert result.is_ok()
        assert result.value.customer is None
        mock_customer_repo.get_by_id.assert_not_called()

    async def test_tax_invoice_gets_qr_code(self, use_case, mock_qr_service, mock_counter_repo):
        # Arrange
        mock_counter_repo.allocate_next = AsyncMock(return_value=1)

        # Act
        result = await use_case.execute(_command(document_type=DocumentType.INVOICE))

        # Assert
        assert result.value.reference_id == "INV00001"
        assert result.value.qr_code == "AQxBY21lIFRyYWRpbmc="
        kwargs = mock_qr_service.generate_invoice_qr.call_args.kwargs
        assert kwargs["total_amount"] == Decimal("259.50")
        assert kwargs["vat_total"] == Decimal("29.50")
        assert kwargs["timestamp"].date() == date(2024, 1, 1)

    async def test_proforma_has_no_qr_code(self, use_case, mock_qr_service):
        result = await use_case.execute(_command(document_type=DocumentType.PROFORMA_INVOICE))

        assert result.value.reference_id == "PRO00006"
        mock_qr_service.generate_invoice_qr.assert_not_called()

    async def test_document_level_discount(self, use_case):
        result = await use_case.execute(_command(discount_percent=Decimal("10")))

        assert result.value.discount_percent == Decimal("10")
        assert result.value.discount_total == Decimal("45.00")
        assert result.value.total_amount == Decimal("234.50")


@pytest.mark.asyncio
class TestCreateDocumentValidation:
    """Test business validation"""

    async def test_due_date_before_issue_date(self, use_case, mock_document_repo, mock_counter_repo):
        # Act
        result = await use_case.execute(_command(issue_date=date(2024, 1, 8), due_date=date(2024, 1, 1)))

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_DUE_DATE"
        mock_counter_repo.allocate_next.assert_not_called()
        mock_document_repo.create.assert_not_called()

    async def test_due_date_equal_to_issue_date_allowed(self, use_case):
        result = await use_case.execute(_command(issue_date=date(2024, 1, 1), due_date=date(2024, 1, 1)))

        assert result.is_ok()

    async def test_customer_not_found(self, use_case, mock_customer_repo, mock_document_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(_command())

        assert result.is_err()
        assert result.error.code == "CUSTOMER_NOT_FOUND"
        mock_document_repo.create.assert_not_called()

    @pytest.mark.parametrize("reference_id", ["PRO00001", "QUO-1", "ABC"])
    async def test_malformed_reference(self, use_case, reference_id):
        result = await use_case.execute(_command(reference_id=reference_id))

        assert result.is_err()
        assert result.error.code == "INVALID_REFERENCE"


@pytest.mark.asyncio
class TestCreateDocumentErrorHandling:
    """Test storage failures"""

    async def test_duplicate_reference_is_conflict(self, use_case, mock_document_repo, mock_uow):
        """
        Given: The reference already exists for the tenant and type
        When: create is called
        Then: REFERENCE_CONFLICT is returned and the transaction rolled back
        """
        # Arrange
        mock_document_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT INTO sales_documents", {}, Exception("UNIQUE constraint failed"))
        )

        # Act
        result = await use_case.execute(_command(reference_id="QUO00003"))

        # Assert
        assert result.is_err()
        assert result.error.code == "REFERENCE_CONFLICT"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_allocation_failure(self, use_case, mock_counter_repo, mock_document_repo, mock_uow):
        mock_counter_repo.allocate_next = AsyncMock(side_effect=Exception("connection lost"))

        result = await use_case.execute(_command())

        assert result.is_err()
        assert result.error.code == "REFERENCE_ALLOCATION_FAILED"
        mock_document_repo.create.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_unexpected_error(self, use_case, mock_line_repo, mock_uow):
        mock_line_repo.create_many = AsyncMock(side_effect=Exception("disk full"))

        result = await use_case.execute(_command())

        assert result.is_err()
        assert result.error.code == "CREATE_DOCUMENT_FAILED"
        assert result.error.reason == "disk full"
        mock_uow.rollback.assert_called_once()
