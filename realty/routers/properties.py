"""
Property listing API endpoints for search, creation, status changes and ratings.
"""

from fastapi import APIRouter, Depends, Request, status, Query, Path
from typing import List, Optional
import math

from realty.services.property import PropertyService
from realty.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertyListResponse,
    PropertyStatusUpdate,
    PropertyRatingCreate
)
from realty.utils.dependencies import Pagination, get_property_service
from realty.utils.exceptions import APIException, BadRequestError, NotFoundError
from realty.schemas.common import MAX_INT
from realty.schemas.error import get_crud_error_responses, get_error_responses


router = APIRouter(prefix="/properties", tags=["Properties"])

# Query parameters consumed by pagination rather than the search filter
PAGINATION_PARAMS = ("page", "pageSize", "page_size")


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Search properties",
    description=(
        "Paginated listing search. Filter parameters (city, minPrice, maxPrice, minBeds, "
        "minBaths, propertyType, listingType, minSqft, maxSqft, minYear, maxYear) are all "
        "optional; empty values are ignored and unknown parameters are rejected."
    ),
    responses=get_error_responses(422, 500)
)
async def list_properties(
    request: Request,
    pagination: Pagination = Depends(),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    """
    Search properties with the text filter contract.

    Args:
        request: Incoming request; its query string carries the filter
        pagination: Page and page size
        property_service: Property service instance

    Returns:
        Paginated list of properties with metadata
    """
    raw_filter = {
        key: value
        for key, value in request.query_params.items()
        if key not in PAGINATION_PARAMS
    }

    try:
        properties, total_count = await property_service.search_properties(
            raw_filter, page=pagination.page, page_size=pagination.page_size
        )
    except APIException:
        raise
    except Exception as e:
        raise BadRequestError(f"Failed to search properties: {str(e)}")

    total_pages = math.ceil(total_count / pagination.page_size) if total_count > 0 else 1

    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(prop) for prop in properties],
        total=total_count,
        page=pagination.page,
        page_size=pagination.page_size,
        total_pages=total_pages,
        has_next=pagination.page < total_pages,
        has_previous=pagination.page > 1
    )


@router.get(
    "/featured",
    response_model=List[PropertyResponse],
    summary="Featured properties",
    description="Featured listings that are still available, newest first"
)
async def get_featured_properties(
    limit: Optional[int] = Query(None, ge=1, le=50, description="Maximum number of listings"),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_featured(limit)
    return [PropertyResponse.model_validate(prop) for prop in properties]


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property details",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj)


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a listing. Numeric fields accept numbers or numeric strings.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Raises:
        UserNotFoundError: If the owner does not exist
    """
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj)


@router.patch(
    "/{property_id}/status",
    response_model=PropertyResponse,
    summary="Change property status",
    description="Mark a listing available, pending, sold or rented. Owner only.",
    responses=get_error_responses(403, 404, 422)
)
async def update_property_status(
    status_update: PropertyStatusUpdate,
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_status(
        property_id, status_update.status, status_update.user_id
    )
    return PropertyResponse.model_validate(property_obj)


@router.post(
    "/{property_id}/ratings",
    response_model=PropertyResponse,
    summary="Rate a property",
    description="Add a 1-5 rating; the average and count are updated together.",
    responses=get_error_responses(404, 422)
)
async def rate_property(
    rating: PropertyRatingCreate,
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.rate_property(property_id, rating.rating)
    return PropertyResponse.model_validate(property_obj)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete a listing and its appointments. Only the owner can delete.",
    responses=get_error_responses(403, 404)
)
async def delete_property(
    property_id: int = Path(..., le=MAX_INT, description="Property ID"),
    user_id: int = Query(..., alias="userId", le=MAX_INT, description="ID of the user deleting the listing"),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    """
    Delete property listing.

    Raises:
        NotFoundError: If property doesn't exist
        PropertyOwnershipError: If the user is not the owner
    """
    deleted = await property_service.delete_property(property_id, user_id)

    if not deleted:
        raise NotFoundError("Property", property_id)
