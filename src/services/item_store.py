"""Key-value item store over the ``store_records`` table.

Each logical table is a partition/sort key space inside ``store_records``.
Items are plain dicts that carry their own key attributes, so a record read
back from the store can be written again unchanged.
"""

import base64
import binascii
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.store_record import StoreRecord
from src.services.errors import ConditionFailedError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSpec:
    """Key schema of a logical table."""

    name: str
    partition_key: str
    sort_key: str
    ttl_attribute: str | None = None


@dataclass
class QueryPage:
    """One page of query results."""

    items: list[dict[str, Any]]
    next_token: str | None = None


def pantry_table() -> TableSpec:
    """Pantry items keyed by user and composite sort key."""
    return TableSpec(get_settings().pantry_table, "userId", "sortKey")


def starred_recipes_table() -> TableSpec:
    """Generated recipes keyed by user and recipe id, expiring via ``ttlExpiration``."""
    return TableSpec(
        get_settings().starred_recipes_table, "userId", "recipeId", ttl_attribute="ttlExpiration"
    )


def encode_token(partition_key: str, sort_key: str) -> str:
    """Serialize the last evaluated key into an opaque continuation token."""
    raw = json.dumps({"pk": partition_key, "sk": sort_key}, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_token(token: str) -> tuple[str, str]:
    """Parse a continuation token produced by :func:`encode_token`."""
    try:
        data = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        return str(data["pk"]), str(data["sk"])
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError):
        raise ValidationError("Invalid continuation token") from None


class ItemStore:
    """Get/put/update/delete/query access to one logical table."""

    def __init__(self, db: Session, table: TableSpec):
        self.db = db
        self.table = table

    @contextmanager
    def _store_call(self, operation: str, **params: Any) -> Iterator[None]:
        """Roll back and surface store failures as ``StoreUnavailableError``."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Item store {operation} error on {self.table.name}: {e} params={params}")
            raise StoreUnavailableError(f"Item store {operation} failed") from e

    def _row(self, partition_key: str, sort_key: str) -> StoreRecord | None:
        return self.db.get(StoreRecord, (self.table.name, partition_key, sort_key))

    def _ttl_value(self, item: dict[str, Any]) -> int | None:
        if not self.table.ttl_attribute:
            return None
        value = item.get(self.table.ttl_attribute)
        return int(value) if value is not None else None

    def get_item(self, partition_key: str, sort_key: str) -> dict[str, Any] | None:
        """Fetch one item by its full key."""
        with self._store_call("get", pk=partition_key, sk=sort_key):
            row = self._row(partition_key, sort_key)
            return dict(row.attributes) if row else None

    def put_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Write an item unconditionally, replacing any item at the same key."""
        partition_key = item[self.table.partition_key]
        sort_key = item[self.table.sort_key]
        with self._store_call("put", pk=partition_key, sk=sort_key):
            row = self._row(partition_key, sort_key)
            if row is None:
                row = StoreRecord(
                    table_name=self.table.name,
                    partition_key=partition_key,
                    sort_key=sort_key,
                )
                self.db.add(row)
            row.attributes = dict(item)
            row.ttl_expiration = self._ttl_value(item)
            self.db.commit()
        return dict(item)

    def update_item(
        self,
        partition_key: str,
        sort_key: str,
        changes: dict[str, Any],
        require_exists: bool = True,
    ) -> dict[str, Any]:
        """Apply field changes to an item and return its new state.

        ``None`` and empty-string values are skipped rather than written.
        Changing the sort key attribute moves the item to its new key.

        Raises:
            ConditionFailedError: ``require_exists`` is set and the item is missing.
        """
        changes = {k: v for k, v in changes.items() if v is not None and v != ""}
        if self.table.partition_key in changes and changes[self.table.partition_key] != partition_key:
            raise ValueError(f"{self.table.partition_key} cannot be changed")

        with self._store_call("update", pk=partition_key, sk=sort_key, changes=changes):
            row = self._row(partition_key, sort_key)
            if row is None:
                if require_exists:
                    raise ConditionFailedError(
                        f"{self.table.name} item {partition_key}/{sort_key} does not exist"
                    )
                row = StoreRecord(
                    table_name=self.table.name,
                    partition_key=partition_key,
                    sort_key=sort_key,
                    attributes={
                        self.table.partition_key: partition_key,
                        self.table.sort_key: sort_key,
                    },
                )
                self.db.add(row)

            attributes = dict(row.attributes)
            attributes.update(changes)
            new_sort_key = attributes[self.table.sort_key]
            if new_sort_key != row.sort_key:
                row.sort_key = new_sort_key
            row.attributes = attributes
            row.ttl_expiration = self._ttl_value(attributes)
            self.db.commit()
        return attributes

    def delete_item(self, partition_key: str, sort_key: str) -> None:
        """Delete an item; deleting a missing item is a no-op."""
        with self._store_call("delete", pk=partition_key, sk=sort_key):
            row = self._row(partition_key, sort_key)
            if row is not None:
                self.db.delete(row)
                self.db.commit()

    def query(
        self,
        partition_key: str,
        sort_key_prefix: str = "",
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        continuation_token: str | None = None,
    ) -> QueryPage:
        """Read one page of a partition in sort key order.

        ``limit`` bounds the number of items evaluated, and ``filters``
        (attribute equality) are applied afterwards, so a page can hold fewer
        than ``limit`` items while more pages remain. ``next_token`` is None
        once the partition is exhausted.
        """
        start_after = None
        if continuation_token:
            token_pk, start_after = decode_token(continuation_token)
            if token_pk != partition_key:
                raise ValidationError("Invalid continuation token")

        stmt = select(StoreRecord).where(
            StoreRecord.table_name == self.table.name,
            StoreRecord.partition_key == partition_key,
        )
        if sort_key_prefix:
            stmt = stmt.where(StoreRecord.sort_key.startswith(sort_key_prefix, autoescape=True))
        if start_after is not None:
            stmt = stmt.where(StoreRecord.sort_key > start_after)
        stmt = stmt.order_by(StoreRecord.sort_key)
        if limit is not None:
            stmt = stmt.limit(limit + 1)

        with self._store_call(
            "query", pk=partition_key, prefix=sort_key_prefix, filters=filters, limit=limit
        ):
            rows = list(self.db.scalars(stmt))

        next_token = None
        if limit is not None and len(rows) > limit:
            rows = rows[:limit]
            next_token = encode_token(partition_key, rows[-1].sort_key)

        items = [dict(row.attributes) for row in rows]
        if filters:
            items = [
                item for item in items if all(item.get(k) == v for k, v in filters.items())
            ]
        return QueryPage(items=items, next_token=next_token)

    def query_all(
        self,
        partition_key: str,
        sort_key_prefix: str = "",
        filters: dict[str, Any] | None = None,
        page_size: int = 1000,
    ) -> list[dict[str, Any]]:
        """Collect every matching item by following continuation tokens."""
        items: list[dict[str, Any]] = []
        token = None
        while True:
            page = self.query(
                partition_key,
                sort_key_prefix=sort_key_prefix,
                filters=filters,
                limit=page_size,
                continuation_token=token,
            )
            items.extend(page.items)
            token = page.next_token
            if token is None:
                return items

    def delete_expired(self, now: int) -> int:
        """Remove items whose TTL attribute is at or before ``now``.

        Returns the number of items deleted. Tables without a TTL attribute
        are never swept.
        """
        if not self.table.ttl_attribute:
            return 0
        with self._store_call("sweep", now=now):
            deleted = (
                self.db.query(StoreRecord)
                .filter(
                    StoreRecord.table_name == self.table.name,
                    StoreRecord.ttl_expiration.isnot(None),
                    StoreRecord.ttl_expiration <= now,
                )
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted
