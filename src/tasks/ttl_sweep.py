"""Celery task for the item store's time-to-live sweep."""

import logging
import time

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.services.errors import StoreUnavailableError
from src.services.item_store import ItemStore, TableSpec, pantry_table, starred_recipes_table

logger = logging.getLogger(__name__)


def ttl_tables() -> list[TableSpec]:
    """Logical tables that declare a TTL attribute."""
    return [table for table in (pantry_table(), starred_recipes_table()) if table.ttl_attribute]


@celery_app.task(bind=True, max_retries=3)
def sweep_expired_records(self, now: int | None = None) -> dict:
    """Delete items whose TTL attribute has passed.

    This task runs on the celery-beat schedule. Expired temporary recipes
    are only ever removed here.

    Returns:
        dict mapping table name to number of items deleted
    """
    now = int(time.time()) if now is None else now
    db = SessionLocal()
    try:
        stats = {}
        for table in ttl_tables():
            deleted = ItemStore(db, table).delete_expired(now)
            stats[table.name] = deleted
            if deleted:
                logger.info(f"TTL sweep removed {deleted} expired items from {table.name}")
        return stats
    except StoreUnavailableError as e:
        logger.error(f"TTL sweep failed: {e}", exc_info=True)
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60) from e
        raise
    finally:
        db.close()
