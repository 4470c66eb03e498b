"""Pantry schemas."""

from datetime import date

from pydantic import Field, field_validator

from src.models.enums import PantryItemType, PantryLocation
from src.schemas.base import CamelModel

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
OPTIONAL_DATE_PATTERN = r"^(\d{4}-\d{2}-\d{2})?$"


def _check_calendar_date(value: str | None) -> str | None:
    if value:
        try:
            date.fromisoformat(value)
        except ValueError:
            raise ValueError("Expiry date must be a valid calendar date") from None
    return value


def _check_title(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("Title must not be blank")
    return value


def _check_optional_title(value: str | None) -> str | None:
    # Empty means "leave unchanged"
    if value and not value.strip():
        raise ValueError("Title must not be blank")
    return value


class PantryItemCreate(CamelModel):
    """Create a pantry item."""

    title: str = Field(..., min_length=1, max_length=50)
    type: PantryItemType
    location: PantryLocation
    expiry_date: str = Field(..., pattern=DATE_PATTERN)
    count: int = Field(..., ge=1)
    notes: str | None = Field(None, max_length=200)

    check_title = field_validator("title")(_check_title)
    check_expiry_date = field_validator("expiry_date")(_check_calendar_date)


class PantryItemUpdate(CamelModel):
    """Update a pantry item. Omitted fields keep their stored value."""

    title: str | None = Field(None, max_length=50)
    type: PantryItemType | None = None
    location: PantryLocation | None = None
    expiry_date: str | None = Field(None, pattern=OPTIONAL_DATE_PATTERN)
    count: int | None = Field(None, ge=1)
    notes: str | None = Field(None, max_length=200)

    check_title = field_validator("title")(_check_optional_title)
    check_expiry_date = field_validator("expiry_date")(_check_calendar_date)


class PantryItem(CamelModel):
    """A stored pantry item."""

    user_id: str
    sort_key: str
    item_id: str
    title: str
    type: PantryItemType
    location: PantryLocation
    expiry_date: str
    count: int
    notes: str | None = None

    def to_record(self) -> dict:
        """Item attributes as written to the store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PantryItemPage(CamelModel):
    """One page of pantry items."""

    items: list[PantryItem]
    last_evaluated_key: str | None = None


class SortKeyIssue(CamelModel):
    """A stored pantry item whose sort key disagrees with its fields."""

    item_id: str | None
    sort_key: str
    expected_sort_key: str | None
    problem: str
