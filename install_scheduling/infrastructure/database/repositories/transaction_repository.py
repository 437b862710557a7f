"""
Transaction service wrapping multi-step scheduling writes.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.config.logging import get_logger
from install_scheduling.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """Runs a unit of work against one session, all or nothing."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def execute_in_transaction(
        self, operation: Callable[[], Awaitable[T]], name: str = "operation"
    ) -> T:
        """
        Run the operation and commit, or roll back every write it made.

        Args:
            operation: Async callable performing the writes
            name: Label used in logs

        Raises:
            Exception: whatever the operation raised, after rollback
        """
        try:
            result = await operation()
            await self.session.commit()
            self.logger.debug("Transaction committed", operation=name)
            return result
        except Exception as e:
            await self.session.rollback()
            record_error(type(e).__name__, "transaction")
            self.logger.error(
                "Transaction rolled back", operation=name, error=str(e), exc_info=True
            )
            raise
