"""
Agent service for agent profiles.
"""

from decimal import Decimal
from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession
from realty.repositories.agent import AgentRepository
from realty.models.agent import Agent
from realty.schemas.agent import AgentCreate
from realty.validation import EntityKind, validate_insert
from realty.utils.exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)


class AgentService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.agent_repo = AgentRepository(db_session)

    async def create_agent(self, payload: Any) -> Agent:
        """
        Create an agent profile from a mapping or AgentCreate instance.

        Raises:
            PayloadValidationError: If the payload does not validate
        """
        agent_data = payload if isinstance(payload, AgentCreate) else validate_insert(EntityKind.AGENT, payload)

        data = agent_data.model_dump()
        data["rating"] = Decimal(data["rating"])
        agent = await self.agent_repo.create(data)
        logger.info(f"Created agent: {agent.name} (ID: {agent.id})")
        return agent

    async def get_agent(self, agent_id: int) -> Agent:
        agent = await self.agent_repo.get_by_id(agent_id)
        if not agent:
            raise NotFoundError("Agent", agent_id)
        return agent

    async def list_agents(self, skip: int = 0, limit: int = 100) -> List[Agent]:
        """Agents ordered by rating, best first."""
        return await self.agent_repo.get_top_rated(skip=skip, limit=limit)
