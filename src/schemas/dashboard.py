"""Dashboard schemas."""

from src.schemas.base import CamelModel


class DashboardOverview(CamelModel):
    total_items: int
    unique_items: int
    average_items_per_location: int
    most_populated_location: str


class ExpiryAlerts(CamelModel):
    """Item counts by how soon they expire."""

    urgent: int  # within 7 days
    warning: int  # 8 to 14 days
    notice: int  # 15 to 30 days
    expired: int


class InventoryInsights(CamelModel):
    low_stock_items: int  # count <= 2
    high_stock_items: int  # count >= 5
    most_common_type: str


class DashboardStats(CamelModel):
    """Aggregated view of a user's pantry."""

    overview: DashboardOverview
    location_breakdown: dict[str, int]
    type_breakdown: dict[str, int]
    expiry_alerts: ExpiryAlerts
    inventory_insights: InventoryInsights
