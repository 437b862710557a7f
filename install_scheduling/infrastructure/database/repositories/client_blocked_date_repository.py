"""Client blocked date repository implementation."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import (
    ClientBlockedDateRepositoryInterface,
)
from install_scheduling.domain.entities.client_blocked_date import ClientBlockedDate
from install_scheduling.infrastructure.database.models.scheduling import (
    ClientBlockedDateModel,
)


class ClientBlockedDateRepository(ClientBlockedDateRepositoryInterface):
    """Client blocked date repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_client_id(self, client_id: UUID) -> List[ClientBlockedDate]:
        stmt = (
            select(ClientBlockedDateModel)
            .where(ClientBlockedDateModel.client_id == client_id)
            .order_by(ClientBlockedDateModel.blocked_date)
        )
        result = await self.db.execute(stmt)
        return [
            ClientBlockedDate(
                id=model.id,
                client_id=model.client_id,
                blocked_date=model.blocked_date,
                reason=model.reason,
            )
            for model in result.scalars().all()
        ]
