"""
Property repository for managing listings with search and filtering.
Translates the text-only filter contract into typed range conditions.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc
from realty.repositories.base import BaseRepository
from realty.models.property import Property
from realty.models.enums import ListingType, PropertyStatus
from realty.schemas.filters import PropertyFilter
from realty.utils.exceptions import FieldError, FieldErrorKind, PayloadValidationError
from realty.utils.validators import MAX_INT
from typing import Callable, Optional, List, Dict, Any, Tuple
from decimal import Decimal, InvalidOperation
from pydantic.alias_generators import to_camel
import logging

logger = logging.getLogger(__name__)


def _parse_decimal(text: str) -> Decimal:
    value = Decimal(text)
    if not value.is_finite():
        raise ValueError(f"'{text}' is not a finite number")
    return value


def _parse_int(text: str) -> int:
    try:
        number = int(text)
    except ValueError:
        value = _parse_decimal(text)
        if value != value.to_integral_value():
            raise ValueError(f"'{text}' is not a whole number")
        number = int(value)
    # Bounds are compared against INTEGER columns
    if abs(number) > MAX_INT:
        raise ValueError(f"'{text}' is out of range")
    return number


class PropertySearchCriteria:
    """
    Typed search bounds parsed from a PropertyFilter.
    A None bound means no constraint on that dimension.
    """

    def __init__(
        self,
        city: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        min_beds: Optional[int] = None,
        min_baths: Optional[int] = None,
        property_type: Optional[str] = None,
        listing_type: Optional[ListingType] = None,
        min_sqft: Optional[int] = None,
        max_sqft: Optional[int] = None,
        min_year: Optional[int] = None,
        max_year: Optional[int] = None
    ):
        self.city = city
        self.min_price = min_price
        self.max_price = max_price
        self.min_beds = min_beds
        self.min_baths = min_baths
        self.property_type = property_type
        self.listing_type = listing_type
        self.min_sqft = min_sqft
        self.max_sqft = max_sqft
        self.min_year = min_year
        self.max_year = max_year

    PARSERS: Dict[str, Callable[[str], Any]] = {
        "min_price": _parse_decimal,
        "max_price": _parse_decimal,
        "min_beds": _parse_int,
        "min_baths": _parse_int,
        "listing_type": lambda text: ListingType(text.strip().lower()),
        "min_sqft": _parse_int,
        "max_sqft": _parse_int,
        "min_year": _parse_int,
        "max_year": _parse_int,
    }

    @classmethod
    def from_filter(cls, search_filter: PropertyFilter) -> "PropertySearchCriteria":
        """
        Parse every present filter value, collecting all failures.

        Raises:
            PayloadValidationError: If any bound does not parse
        """
        values: Dict[str, Any] = {}
        errors: List[FieldError] = []

        for name, text in search_filter.active().items():
            parser = cls.PARSERS.get(name)
            if parser is None:
                values[name] = text
                continue
            try:
                values[name] = parser(text)
            except (ValueError, InvalidOperation):
                errors.append(FieldError(
                    field=to_camel(name),
                    kind=FieldErrorKind.SHAPE_MISMATCH,
                    message=f"'{text}' is not a valid {to_camel(name)} value",
                ))

        if errors:
            raise PayloadValidationError(errors, detail="Invalid property filter")

        return cls(**values)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings with filtering and pagination.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property listing.

        Args:
            property_data: Canonical listing fields; decimal text is stored as numeric

        Returns:
            Created property instance
        """
        data = dict(property_data)
        for field in ("price", "lat", "lng", "avg_rating"):
            if isinstance(data.get(field), str):
                data[field] = Decimal(data[field])

        created_property = await self.create(data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def search_properties(
        self,
        criteria: PropertySearchCriteria,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Property], int]:
        """
        Search properties with filtering and pagination.

        Args:
            criteria: Parsed search bounds
            skip: Number of records to skip for pagination
            limit: Maximum number of records to return

        Returns:
            Tuple of (properties list, total count)
        """
        try:
            query = select(Property)
            count_query = select(func.count(Property.id))

            conditions = self._build_filter_conditions(criteria)
            if conditions:
                query = query.where(and_(*conditions))
                count_query = count_query.where(and_(*conditions))

            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar()

            query = (
                query.order_by(desc(Property.featured), desc(Property.created_at), desc(Property.id))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(f"Property search returned {len(properties)} of {total_count} total results")
            return list(properties), total_count
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    def _build_filter_conditions(self, criteria: PropertySearchCriteria) -> List:
        """
        Build SQLAlchemy filter conditions from search criteria.

        Args:
            criteria: PropertySearchCriteria instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = []

        # City filter (case-insensitive partial match)
        if criteria.city:
            conditions.append(Property.city.ilike(f"%{criteria.city}%"))

        # Price range filters
        if criteria.min_price is not None:
            conditions.append(Property.price >= criteria.min_price)
        if criteria.max_price is not None:
            conditions.append(Property.price <= criteria.max_price)

        # Room filters are lower bounds
        if criteria.min_beds is not None:
            conditions.append(Property.bedrooms >= criteria.min_beds)
        if criteria.min_baths is not None:
            conditions.append(Property.bathrooms >= criteria.min_baths)

        # Tags
        if criteria.property_type:
            conditions.append(func.lower(Property.property_type) == criteria.property_type.lower())
        if criteria.listing_type is not None:
            conditions.append(Property.listing_type == criteria.listing_type)

        # Area filters
        if criteria.min_sqft is not None:
            conditions.append(Property.square_feet >= criteria.min_sqft)
        if criteria.max_sqft is not None:
            conditions.append(Property.square_feet <= criteria.max_sqft)

        # Year filters; listings without a year never match a year bound
        if criteria.min_year is not None:
            conditions.append(Property.year_built >= criteria.min_year)
        if criteria.max_year is not None:
            conditions.append(Property.year_built <= criteria.max_year)

        return conditions

    async def get_featured(self, limit: int = 6) -> List[Property]:
        """
        Get featured listings that are still available, newest first.

        Args:
            limit: Maximum number of listings to return

        Returns:
            List of featured properties
        """
        query = (
            select(Property)
            .where(Property.featured.is_(True), Property.status == PropertyStatus.AVAILABLE)
            .order_by(desc(Property.created_at), desc(Property.id))
            .limit(limit)
        )
        result = await self.db.execute(query)
        properties = result.scalars().all()
        logger.debug(f"Retrieved {len(properties)} featured properties")
        return list(properties)

    async def get_by_ids(self, property_ids: List[int]) -> List[Property]:
        """
        Get properties by ID, preserving the order of property_ids.
        IDs with no matching row are skipped.
        """
        if not property_ids:
            return []
        result = await self.db.execute(select(Property).where(Property.id.in_(property_ids)))
        by_id = {prop.id: prop for prop in result.scalars().all()}
        return [by_id[property_id] for property_id in property_ids if property_id in by_id]

    async def get_for_update(self, property_id: int) -> Optional[Property]:
        """Load a property with a row lock where the database supports it."""
        query = (
            select(Property)
            .where(Property.id == property_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add_rating(self, property_id: int, rating: int) -> Optional[Property]:
        """
        Fold a rating into the property's running average in one transaction.

        Args:
            property_id: Property to rate
            rating: Value between 1 and 5

        Returns:
            Updated property, or None if it does not exist
        """
        try:
            property_obj = await self.get_for_update(property_id)
            if property_obj is None:
                return None

            property_obj.add_rating(rating)
            await self.db.commit()
            await self.db.refresh(property_obj)
            logger.info(
                f"Rated property {property_id}: avg={property_obj.avg_rating} count={property_obj.rating_count}"
            )
            return property_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to rate property {property_id}: {e}")
            raise
