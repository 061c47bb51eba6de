"""Integration tests for document use cases against a real database"""

import pytest
from datetime import date
from decimal import Decimal

from src.adapter.repositories import (
    SqlAlchemySalesDocumentRepository,
    SqlAlchemyDocumentLineRepository,
    SqlAlchemyReferenceCounterRepository,
    SqlAlchemyCustomerRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.repositories.sales_document_repository import DocumentFilter
from src.app.use_cases.sales import (
    CreateDocument,
    ExpireOverdueDocuments,
    GetDocument,
    ListDocuments,
)
from src.app.use_cases.sales.dtos import CreateDocumentCommandDTO, LineItemInputDTO
from src.domain.document import DocumentType
from src.domain.line_item import calculate_line

TENANT = "tenant_it"


def _create_use_case(session):
    return CreateDocument(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemySalesDocumentRepository(session),
        SqlAlchemyDocumentLineRepository(session),
        SqlAlchemyReferenceCounterRepository(session),
        SqlAlchemyCustomerRepository(session),
    )


def _command(document_type=DocumentType.QUOTATION, **overrides):
    values = dict(
        tenant_id=TENANT,
        document_type=document_type,
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 8),
        lines=[
            LineItemInputDTO(
                description="Consulting",
                quantity=Decimal("3"),
                unit_price=Decimal("125.50"),
                discount_percent=Decimal("0"),
                vat_percent=Decimal("15"),
            )
        ],
    )
    values.update(overrides)
    return CreateDocumentCommandDTO(**values)


@pytest.mark.asyncio
class TestCreateAndRead:

    async def test_create_persists_lines_and_totals(self, db_session, customer):
        """
        Given: One line of 3 x 125.50 at 15% VAT
        When: The quotation is saved and read back
        Then: Stored amounts match the calculation (vat 56.48, total 432.98)
        """
        # Act
        created = await _create_use_case(db_session).execute(_command(customer_id=customer.id))
        get_use_case = GetDocument(
            SqlAlchemySalesDocumentRepository(db_session),
            SqlAlchemyDocumentLineRepository(db_session),
            SqlAlchemyCustomerRepository(db_session),
        )
        loaded = await get_use_case.execute(TENANT, DocumentType.QUOTATION, created.value.document_id)

        # Assert
        assert created.is_ok()
        assert loaded.is_ok()
        document = loaded.value
        assert document.reference_id == "QUO00001"
        assert document.status == "draft"
        assert document.subtotal == Decimal("376.50")
        assert document.vat_total == Decimal("56.48")
        assert document.total_amount == Decimal("432.98")
        assert len(document.lines) == 1
        assert document.lines[0].line_amount == Decimal("432.98")
        assert document.customer.customer_name == "Acme Trading"

    async def test_duplicate_reference_is_conflict(self, db_session):
        use_case = _create_use_case(db_session)
        await use_case.execute(_command(reference_id="QUO00004"))

        result = await use_case.execute(_command(reference_id="QUO00004"))

        assert result.is_err()
        assert result.error.code == "REFERENCE_CONFLICT"

    async def test_differently_padded_reference_is_conflict(self, db_session):
        use_case = _create_use_case(db_session)
        first = await use_case.execute(_command(reference_id="QUO12"))

        second = await use_case.execute(_command(reference_id="QUO00012"))
        third = await use_case.execute(_command(reference_id="QUO012"))

        assert first.value.reference_id == "QUO00012"
        assert second.error.code == "REFERENCE_CONFLICT"
        assert third.error.code == "REFERENCE_CONFLICT"

    async def test_supplied_reference_advances_counter(self, db_session):
        use_case = _create_use_case(db_session)
        await use_case.execute(_command(reference_id="QUO00009"))

        result = await use_case.execute(_command())

        assert result.value.reference_id == "QUO00010"

    async def test_invoice_gets_qr_code_only_with_service(self, db_session):
        result = await _create_use_case(db_session).execute(_command(DocumentType.INVOICE))

        assert result.value.reference_id == "INV00001"
        assert result.value.qr_code is None


    async def test_stored_line_recomputes_to_stored_amounts(self, db_session, session_factory):
        """
        Given: A line with a three-decimal discount percentage
        When: The saved line is read back in a fresh session and recalculated
        Then: The stored percentage reproduces the stored VAT and line amount
        """
        # Arrange
        line = LineItemInputDTO(
            description="Licence",
            quantity=Decimal("1"),
            unit_price=Decimal("10000"),
            discount_percent=Decimal("12.345"),
            vat_percent=Decimal("15"),
        )

        # Act
        created = await _create_use_case(db_session).execute(_command(lines=[line]))
        async with session_factory() as session:
            stored = await SqlAlchemyDocumentLineRepository(session).get_by_document_id(
                created.value.document_id
            )

        # Assert
        assert stored[0].discount_percent == Decimal("12.35")
        recomputed = calculate_line(stored[0].to_line_item())
        assert recomputed.vat_amount == stored[0].vat_amount == Decimal("1314.75")
        assert recomputed.line_amount == stored[0].line_amount == Decimal("10079.75")
        assert created.value.total_amount == Decimal("10079.75")

@pytest.mark.asyncio
class TestListAndExpire:

    async def _seed(self, db_session, customer):
        use_case = _create_use_case(db_session)
        await use_case.execute(_command(customer_id=customer.id))
        await use_case.execute(_command(issue_date=date(2024, 2, 1), due_date=date(2024, 2, 8)))
        await use_case.execute(_command(issue_date=date(2024, 3, 1), due_date=date(2024, 3, 8), lines=[]))

    async def test_list_filters(self, db_session, customer):
        await self._seed(db_session, customer)
        repo = SqlAlchemySalesDocumentRepository(db_session)
        use_case = ListDocuments(repo)

        by_customer = await use_case.execute(
            TENANT, DocumentType.QUOTATION, DocumentFilter(customer_id=customer.id)
        )
        by_issue_date = await use_case.execute(
            TENANT, DocumentType.QUOTATION, DocumentFilter(issue_date_from=date(2024, 2, 1))
        )
        by_amount = await use_case.execute(
            TENANT, DocumentType.QUOTATION, DocumentFilter(min_amount=Decimal("1.00"))
        )
        paged = await use_case.execute(TENANT, DocumentType.QUOTATION, limit=2, offset=2)

        assert by_customer.value.total == 1
        assert by_issue_date.value.total == 2
        assert by_amount.value.total == 2
        assert paged.value.total == 3
        assert [d.reference_id for d in paged.value.documents] == ["QUO00003"]

    async def test_list_is_scoped_by_type(self, db_session, customer):
        await self._seed(db_session, customer)

        result = await ListDocuments(SqlAlchemySalesDocumentRepository(db_session)).execute(
            TENANT, DocumentType.INVOICE
        )

        assert result.value.total == 0

    async def test_expire_sent_quotations(self, db_session):
        """
        Given: A sent quotation due 2024-01-08 and a draft one
        When: Expiry runs as of 2024-01-09
        Then: Only the sent quotation is expired
        """
        # Arrange
        use_case = _create_use_case(db_session)
        sent = await use_case.execute(_command())
        draft = await use_case.execute(_command())
        repo = SqlAlchemySalesDocumentRepository(db_session)
        document = await repo.get_by_id(TENANT, DocumentType.QUOTATION, sent.value.document_id)
        document.status = "sent"
        await repo.update(document)
        await db_session.commit()

        # Act
        result = await ExpireOverdueDocuments(SqlAlchemyUnitOfWork(db_session), repo).execute(date(2024, 1, 9))

        # Assert
        assert result.value.expired_quotations == 1
        expired = await repo.get_by_id(TENANT, DocumentType.QUOTATION, sent.value.document_id)
        untouched = await repo.get_by_id(TENANT, DocumentType.QUOTATION, draft.value.document_id)
        assert expired.status == "expired"
        assert untouched.status == "draft"
