"""Dashboard statistics computed over a user's whole pantry."""

import math
from collections import Counter
from datetime import date

from src.models.enums import PantryItemType, PantryLocation
from src.schemas.dashboard import (
    DashboardOverview,
    DashboardStats,
    ExpiryAlerts,
    InventoryInsights,
)
from src.schemas.pantry import PantryItem
from src.services.pantry_service import PantryService

LOW_STOCK_MAX = 2
HIGH_STOCK_MIN = 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _most_common(counts: Counter) -> str:
    """Key with the highest total; earliest seen wins ties, ``"None"`` if empty."""
    best, best_count = "None", 0
    for key, count in counts.items():
        if count > best_count:
            best, best_count = key, count
    return best


def _expiry_alerts(items: list[PantryItem], today: date) -> ExpiryAlerts:
    alerts = {"urgent": 0, "warning": 0, "notice": 0, "expired": 0}
    for item in items:
        days_left = (date.fromisoformat(item.expiry_date) - today).days
        if days_left < 0:
            alerts["expired"] += 1
        elif days_left <= 7:
            alerts["urgent"] += 1
        elif days_left <= 14:
            alerts["warning"] += 1
        elif days_left <= 30:
            alerts["notice"] += 1
    return ExpiryAlerts(**alerts)


class DashboardService:
    """Service for pantry dashboard statistics."""

    def __init__(self, pantry_service: PantryService):
        self.pantry_service = pantry_service

    def get_stats(self, user_id: str, today: date | None = None) -> DashboardStats:
        """Aggregate counts, breakdowns and expiry alerts for a user."""
        today = today or date.today()
        items = self.pantry_service.list_all_items(user_id)

        location_counts: Counter = Counter()
        type_counts: Counter = Counter()
        for item in items:
            location_counts[item.location.value] += item.count
            type_counts[item.type.value] += item.count

        total_items = sum(item.count for item in items)
        populated_locations = len(location_counts)

        return DashboardStats(
            overview=DashboardOverview(
                total_items=total_items,
                unique_items=len(items),
                average_items_per_location=(
                    _round_half_up(total_items / populated_locations) if populated_locations else 0
                ),
                most_populated_location=_most_common(location_counts),
            ),
            location_breakdown={loc.value: location_counts[loc.value] for loc in PantryLocation},
            type_breakdown={t.value: type_counts[t.value] for t in PantryItemType},
            expiry_alerts=_expiry_alerts(items, today),
            inventory_insights=InventoryInsights(
                low_stock_items=sum(1 for item in items if item.count <= LOW_STOCK_MAX),
                high_stock_items=sum(1 for item in items if item.count >= HIGH_STOCK_MIN),
                most_common_type=_most_common(type_counts),
            ),
        )
