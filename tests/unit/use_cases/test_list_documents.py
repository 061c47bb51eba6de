"""Unit tests for ListDocuments use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.repositories.sales_document_repository import DocumentFilter
from src.app.use_cases.sales.list_documents import ListDocuments
from src.domain.document import DocumentType


class TestListDocuments:
    """Test suite for ListDocuments use case"""

    @pytest.fixture
    def mock_document_repo(self):
        return AsyncMock()

    @pytest.fixture
    def use_case(self, mock_document_repo):
        return ListDocuments(document_repo=mock_document_repo)

    @pytest.mark.asyncio
    async def test_returns_page_and_total(self, use_case, mock_document_repo, sample_document):
        # Arrange
        mock_document_repo.list.return_value = ([sample_document], 12)

        # Act
        result = await use_case.execute("tenant_123", DocumentType.QUOTATION, limit=1, offset=3)

        # Assert
        assert result.is_ok()
        assert result.value.total == 12
        assert result.value.limit == 1
        assert result.value.offset == 3
        summary = result.value.documents[0]
        assert summary.reference_id == "QUO00001"
        assert summary.total_amount == Decimal("207.00")
        assert summary.status == "draft"

    @pytest.mark.asyncio
    async def test_passes_filters_through(self, use_case, mock_document_repo):
        # Arrange
        mock_document_repo.list.return_value = ([], 0)
        filters = DocumentFilter(customer_id=7, status="sent", min_amount=Decimal("100"))

        # Act
        result = await use_case.execute("tenant_123", DocumentType.INVOICE, filters=filters)

        # Assert
        assert result.value.documents == []
        assert result.value.total == 0
        mock_document_repo.list.assert_called_once_with(
            tenant_id="tenant_123",
            document_type=DocumentType.INVOICE,
            filters=filters,
            limit=20,
            offset=0,
        )
