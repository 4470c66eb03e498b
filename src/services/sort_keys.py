"""Composite sort key codec for pantry items.

Pantry items live in one partition per user. Their sort key packs
``type``, ``location`` and ``itemId`` into ``"{type}#{location}#{itemId}"`` so
that a type, or a type and location pair, can be selected with a key prefix.
Location alone is the middle segment and cannot be expressed as a prefix;
callers filter on the ``location`` attribute instead.
"""

from typing import NamedTuple

from src.models.enums import PantryItemType, PantryLocation
from src.services.errors import MalformedKeyError

SEPARATOR = "#"


class SortKeyParts(NamedTuple):
    """Decoded components of a pantry sort key."""

    type: str
    location: str
    item_id: str


def _value(member: PantryItemType | PantryLocation | str) -> str:
    return member.value if isinstance(member, PantryItemType | PantryLocation) else member


def encode(
    item_type: PantryItemType | str, location: PantryLocation | str, item_id: str
) -> str:
    """Build the sort key for an item. No escaping is performed."""
    return SEPARATOR.join((_value(item_type), _value(location), item_id))


def decode(sort_key: str) -> SortKeyParts:
    """Split a sort key back into its parts."""
    parts = sort_key.split(SEPARATOR)
    if len(parts) != 3:
        raise MalformedKeyError(sort_key)
    return SortKeyParts(*parts)


def prefix(
    item_type: PantryItemType | str | None = None,
    location: PantryLocation | str | None = None,
) -> str:
    """Key prefix selecting a type, or a type and location pair.

    A location without a type has no prefix form and yields ``""``.
    """
    if item_type and location:
        return f"{_value(item_type)}{SEPARATOR}{_value(location)}{SEPARATOR}"
    if item_type:
        return f"{_value(item_type)}{SEPARATOR}"
    return ""


def parse_type(value: str | None) -> PantryItemType | None:
    """Coerce a filter value to a type; unknown values mean no filter."""
    try:
        return PantryItemType(value) if value else None
    except ValueError:
        return None


def parse_location(value: str | None) -> PantryLocation | None:
    """Coerce a filter value to a location; unknown values mean no filter."""
    try:
        return PantryLocation(value) if value else None
    except ValueError:
        return None
