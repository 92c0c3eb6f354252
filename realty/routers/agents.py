"""
Agent profile API endpoints.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List

from realty.services.agent import AgentService
from realty.schemas.agent import AgentCreate, AgentResponse
from realty.utils.dependencies import get_agent_service
from realty.schemas.common import MAX_INT
from realty.schemas.error import get_error_responses


router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get(
    "",
    response_model=List[AgentResponse],
    summary="List agents",
    description="Agent profiles, highest rated first"
)
async def list_agents(
    limit: int = Query(100, ge=1, le=500),
    agent_service: AgentService = Depends(get_agent_service)
) -> List[AgentResponse]:
    agents = await agent_service.list_agents(limit=limit)
    return [AgentResponse.model_validate(agent) for agent in agents]


@router.get(
    "/{agent_id}",
    response_model=AgentResponse,
    summary="Get agent",
    responses=get_error_responses(404)
)
async def get_agent(
    agent_id: int = Path(..., le=MAX_INT, description="Agent ID"),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentResponse:
    agent = await agent_service.get_agent(agent_id)
    return AgentResponse.model_validate(agent)


@router.post(
    "",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create agent profile",
    responses=get_error_responses(422)
)
async def create_agent(
    agent_data: AgentCreate,
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentResponse:
    agent = await agent_service.create_agent(agent_data)
    return AgentResponse.model_validate(agent)
