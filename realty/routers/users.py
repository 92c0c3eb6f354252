"""
User API endpoints for registration, credential checks and saved listings.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List

from realty.services.user import UserService
from realty.schemas.user import (
    UserCreate,
    UserResponse,
    LoginRequest,
    SavedPropertiesResponse
)
from realty.schemas.property import PropertyResponse
from realty.utils.dependencies import get_user_service
from realty.schemas.common import MAX_INT
from realty.schemas.error import get_crud_error_responses, get_error_responses


router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create an account. Username and email must be unique.",
    responses=get_crud_error_responses()
)
async def register_user(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    """
    Register a new user.

    Raises:
        DuplicateResourceError: If the username or email is already registered
    """
    user = await user_service.register_user(user_data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=UserResponse,
    summary="Check credentials",
    description="Verify a username and password pair and return the account.",
    responses=get_error_responses(422)
)
async def login(
    credentials: LoginRequest,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.authenticate(credentials.username, credentials.password)
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
    responses=get_error_responses(404)
)
async def get_user(
    user_id: int = Path(..., le=MAX_INT, description="User ID"),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}/saved-properties",
    response_model=List[PropertyResponse],
    summary="List saved properties",
    description="Saved listings in the order they were saved",
    responses=get_error_responses(404)
)
async def list_saved_properties(
    user_id: int = Path(..., le=MAX_INT, description="User ID"),
    user_service: UserService = Depends(get_user_service)
) -> List[PropertyResponse]:
    properties = await user_service.list_saved_properties(user_id)
    return [PropertyResponse.model_validate(prop) for prop in properties]


@router.put(
    "/{user_id}/saved-properties/{property_id}",
    response_model=SavedPropertiesResponse,
    summary="Save property",
    description="Add a listing to the saved list. Saving twice keeps one entry.",
    responses=get_error_responses(404)
)
async def save_property(
    user_id: int = Path(..., le=MAX_INT, description="User ID"),
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    user_service: UserService = Depends(get_user_service)
) -> SavedPropertiesResponse:
    saved = await user_service.save_property(user_id, property_id)
    return SavedPropertiesResponse(user_id=user_id, saved_properties=saved)


@router.delete(
    "/{user_id}/saved-properties/{property_id}",
    response_model=SavedPropertiesResponse,
    summary="Remove saved property",
    responses=get_error_responses(404)
)
async def unsave_property(
    user_id: int = Path(..., le=MAX_INT, description="User ID"),
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    user_service: UserService = Depends(get_user_service)
) -> SavedPropertiesResponse:
    saved = await user_service.unsave_property(user_id, property_id)
    return SavedPropertiesResponse(user_id=user_id, saved_properties=saved)
