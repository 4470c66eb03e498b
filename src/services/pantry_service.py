"""Pantry service: create, read, update, delete and list pantry items."""

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from src.config import get_settings
from src.schemas import validate_payload
from src.schemas.pantry import (
    PantryItem,
    PantryItemCreate,
    PantryItemPage,
    PantryItemUpdate,
    SortKeyIssue,
)
from src.services import sort_keys
from src.services.errors import (
    ConditionFailedError,
    MalformedKeyError,
    NotFoundError,
    ValidationError,
)
from src.services.item_store import ItemStore

logger = logging.getLogger(__name__)


class PantryService:
    """Service for pantry item lifecycle operations."""

    def __init__(self, store: ItemStore):
        self.store = store
        self.page_size = get_settings().pantry_page_size

    def create_item(
        self, user_id: str, data: PantryItemCreate | Mapping[str, Any]
    ) -> PantryItem:
        """Validate and store a new pantry item under a fresh itemId."""
        payload = validate_payload(PantryItemCreate, data)
        item_id = str(uuid.uuid4())
        item = PantryItem(
            user_id=user_id,
            sort_key=sort_keys.encode(payload.type, payload.location, item_id),
            item_id=item_id,
            title=payload.title,
            type=payload.type,
            location=payload.location,
            expiry_date=payload.expiry_date,
            count=payload.count,
            notes=payload.notes,
        )
        self.store.put_item(item.to_record())
        logger.info(f"Created pantry item {item_id} for user {user_id}")
        return item

    def _locate(self, user_id: str, item_id: str) -> dict[str, Any]:
        """Find an item's stored record by scanning the user's partition.

        The itemId is not part of the store key, so every page of the
        partition is read. The first match wins.
        """
        if not item_id or not item_id.strip():
            raise ValidationError("Item ID is required")
        matches = self.store.query_all(user_id, filters={"itemId": item_id})
        if not matches:
            raise NotFoundError("Item not found")
        if len(matches) > 1:
            logger.warning(f"Duplicate itemId {item_id} for user {user_id}; using first match")
        return matches[0]

    def get_item(self, user_id: str, item_id: str) -> PantryItem:
        """Get a pantry item by its itemId."""
        return PantryItem.model_validate(self._locate(user_id, item_id))

    def update_item(
        self,
        user_id: str,
        item_id: str,
        data: PantryItemUpdate | Mapping[str, Any],
    ) -> PantryItem:
        """Merge the supplied fields into an item.

        Supplying ``type`` or ``location`` re-derives the sort key from the
        merged values, which moves the item to its new key.
        """
        payload = validate_payload(PantryItemUpdate, data)
        changes = {
            key: value
            for key, value in payload.model_dump(
                mode="json", by_alias=True, exclude_unset=True, exclude_none=True
            ).items()
            if value != ""
        }
        if not changes:
            raise ValidationError("No valid fields to update")

        existing = self._locate(user_id, item_id)
        if "type" in changes or "location" in changes:
            changes["sortKey"] = sort_keys.encode(
                changes.get("type", existing["type"]),
                changes.get("location", existing["location"]),
                existing["itemId"],
            )

        try:
            updated = self.store.update_item(
                user_id, existing["sortKey"], changes, require_exists=True
            )
        except ConditionFailedError:
            # Deleted between locate and write
            raise NotFoundError("Item not found") from None
        return PantryItem.model_validate(updated)

    def delete_item(self, user_id: str, item_id: str) -> None:
        """Delete a pantry item by its itemId."""
        existing = self._locate(user_id, item_id)
        self.store.delete_item(user_id, existing["sortKey"])
        logger.info(f"Deleted pantry item {item_id} for user {user_id}")

    def list_items(
        self,
        user_id: str,
        item_type: str | None = None,
        location: str | None = None,
        limit: int | None = None,
        continuation_token: str | None = None,
    ) -> PantryItemPage:
        """List one page of a user's pantry.

        Unknown type or location values are ignored. A type narrows the key
        range; a location without a type is applied as a filter on the page
        that was read.
        """
        if limit is not None and limit < 1:
            raise ValidationError("Limit must be a positive number")
        parsed_type = sort_keys.parse_type(item_type)
        parsed_location = sort_keys.parse_location(location)

        filters = None
        if parsed_location and not parsed_type:
            filters = {"location": parsed_location.value}

        page = self.store.query(
            user_id,
            sort_key_prefix=sort_keys.prefix(parsed_type, parsed_location),
            filters=filters,
            limit=limit or self.page_size,
            continuation_token=continuation_token,
        )
        return PantryItemPage(
            items=[PantryItem.model_validate(item) for item in page.items],
            last_evaluated_key=page.next_token,
        )

    def list_all_items(self, user_id: str) -> list[PantryItem]:
        """Every pantry item a user has."""
        return [PantryItem.model_validate(item) for item in self.store.query_all(user_id)]

    def audit_sort_keys(self, user_id: str) -> list[SortKeyIssue]:
        """Report stored items whose sort key cannot be decoded or has drifted."""
        issues = []
        for record in self.store.query_all(user_id):
            sort_key = record.get("sortKey", "")
            item_id = record.get("itemId")
            expected = None
            if record.get("type") and record.get("location") and item_id:
                expected = sort_keys.encode(record["type"], record["location"], item_id)
            try:
                parts = sort_keys.decode(sort_key)
            except MalformedKeyError as e:
                issues.append(
                    SortKeyIssue(
                        item_id=item_id,
                        sort_key=sort_key,
                        expected_sort_key=expected,
                        problem=e.message,
                    )
                )
                continue
            if parts.item_id != item_id:
                problem = "itemId does not match sort key"
            elif sort_key != expected:
                problem = "type or location does not match sort key"
            else:
                continue
            issues.append(
                SortKeyIssue(
                    item_id=item_id,
                    sort_key=sort_key,
                    expected_sort_key=expected,
                    problem=problem,
                )
            )
        if issues:
            logger.warning(f"Found {len(issues)} sort key issues for user {user_id}")
        return issues
