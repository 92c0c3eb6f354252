"""
Agent repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from realty.repositories.base import BaseRepository
from realty.models.agent import Agent
from typing import List


class AgentRepository(BaseRepository[Agent]):

    def __init__(self, db: AsyncSession):
        super().__init__(Agent, db)

    async def get_top_rated(self, skip: int = 0, limit: int = 100) -> List[Agent]:
        """Agents ordered by rating, best first."""
        return await self.get_multi(skip=skip, limit=limit, order_by="-rating")
