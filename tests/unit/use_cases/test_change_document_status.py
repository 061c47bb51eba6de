"""Unit tests for ChangeDocumentStatus use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.sales.change_document_status import ChangeDocumentStatus
from src.app.use_cases.sales.dtos import ChangeStatusCommandDTO
from src.domain.document import DocumentType


@pytest.fixture
def mock_document_repo(sample_document):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_document)
    repo.update = AsyncMock(side_effect=lambda document: document)
    return repo


@pytest.fixture
def mock_line_repo(sample_lines):
    repo = MagicMock()
    repo.get_by_document_id = AsyncMock(return_value=sample_lines)
    return repo


@pytest.fixture
def use_case(mock_uow, mock_document_repo, mock_line_repo):
    customer_repo = MagicMock()
    customer_repo.get_by_id = AsyncMock(return_value=None)
    return ChangeDocumentStatus(mock_uow, mock_document_repo, mock_line_repo, customer_repo)


def _command(status, document_type=DocumentType.QUOTATION):
    return ChangeStatusCommandDTO(
        tenant_id="tenant_123", document_type=document_type, document_id=1, status=status
    )


@pytest.mark.asyncio
class TestChangeDocumentStatus:
    """Test lifecycle transitions"""

    async def test_draft_to_sent(self, use_case, mock_uow):
        # Act
        result = await use_case.execute(_command("sent"))

        # Assert
        assert result.is_ok()
        assert result.value.status == "sent"
        assert len(result.value.lines) == 1
        mock_uow.commit.assert_called_once()

    async def test_sent_to_accepted(self, use_case, sample_document):
        sample_document.status = "sent"

        result = await use_case.execute(_command("accepted"))

        assert result.value.status == "accepted"

    async def test_terminal_status_cannot_change(self, use_case, sample_document, mock_document_repo):
        """
        Given: An accepted quotation
        When: It is moved back to draft
        Then: INVALID_STATUS_TRANSITION is returned and nothing is saved
        """
        # Arrange
        sample_document.status = "accepted"

        # Act
        result = await use_case.execute(_command("draft"))

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        mock_document_repo.update.assert_not_called()

    async def test_invoice_not_paid_to_paid(self, use_case, sample_document):
        sample_document.document_type = DocumentType.INVOICE
        sample_document.status = "not_paid"

        result = await use_case.execute(_command("paid", DocumentType.INVOICE))

        assert result.value.status == "paid"

    async def test_status_from_other_type_rejected(self, use_case, mock_document_repo):
        result = await use_case.execute(_command("paid"))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS"
        mock_document_repo.get_by_id.assert_not_called()

    async def test_document_not_found(self, use_case, mock_document_repo):
        mock_document_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(_command("sent"))

        assert result.is_err()
        assert result.error.code == "DOCUMENT_NOT_FOUND"

    async def test_failure_rolls_back(self, use_case, mock_document_repo, mock_uow):
        mock_document_repo.update = AsyncMock(side_effect=Exception("connection reset"))

        result = await use_case.execute(_command("sent"))

        assert result.is_err()
        assert result.error.code == "CHANGE_STATUS_FAILED"
        mock_uow.rollback.assert_called_once()
