"""Document Expiry Background Worker

Marks past-due documents once a day: sent quotations and proforma invoices
become expired, sent or unpaid tax invoices become overdue.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.sales_document_repository import SqlAlchemySalesDocumentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.sales import ExpireOverdueDocuments, ExpiryResultDTO

logger = logging.getLogger(__name__)


class DocumentExpiryWorker:
    """
    Background worker for document expiry

    Features:
    - One pass over all tenants per run
    - Idempotent: a second run on the same day finds nothing to change
    - Can run once or continuously

    Usage:
        # Run once for today
        worker = DocumentExpiryWorker()
        result = await worker.run_once()

        # Run once as of a given date
        result = await worker.run_once(as_of=date(2024, 3, 1))

        # Run continuously
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        interval_seconds: Optional[int] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            interval_seconds: Seconds between runs in continuous mode
                (defaults to ApplicationConfig.DOCUMENT_EXPIRY_INTERVAL_SECONDS)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.interval_seconds = interval_seconds or ApplicationConfig.DOCUMENT_EXPIRY_INTERVAL_SECONDS

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("DocumentExpiryWorker initialized")

    async def run_once(self, as_of: Optional[date] = None) -> Optional[ExpiryResultDTO]:
        """
        Run one expiry pass

        Args:
            as_of: Reference date (defaults to today, UTC)

        Returns:
            ExpiryResultDTO with counts, or None if the pass failed
        """
        as_of = as_of or datetime.utcnow().date()
        logger.info(f"Starting document expiry as of {as_of.isoformat()}")

        async with self.async_session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            document_repo = SqlAlchemySalesDocumentRepository(session)

            use_case = ExpireOverdueDocuments(uow, document_repo)
            result = await use_case.execute(as_of)

        if result.is_err():
            logger.error(f"Document expiry failed: {result.error.message} ({result.error.reason})")
            return None

        summary = result.value
        logger.info(
            f"Document expiry complete: "
            f"{summary.expired_quotations} quotations expired, "
            f"{summary.expired_proforma_invoices} proforma invoices expired, "
            f"{summary.overdue_invoices} invoices overdue, "
            f"{summary.execution_time_ms}ms"
        )
        return summary

    async def run_forever(self):
        """Run expiry passes continuously"""
        logger.info(f"Starting continuous document expiry with {self.interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Expiry cycle failed: {e}")

            await asyncio.sleep(self.interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("DocumentExpiryWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once for today
        python -m src.worker.document_expiry

        # Run once as of a given date
        python -m src.worker.document_expiry --as-of 2024-03-01

        # Run continuously
        python -m src.worker.document_expiry --continuous
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Sales Document Expiry Worker")
    parser.add_argument("--as-of", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    if not ApplicationConfig.DOCUMENT_EXPIRY_ENABLED:
        logger.info("Document expiry disabled by configuration")
        return

    worker = DocumentExpiryWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            await worker.run_once(as_of=args.as_of)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
