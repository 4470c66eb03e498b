"""Debug API endpoints for development and troubleshooting."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user_id, get_pantry_service
from src.schemas.base import CamelModel
from src.schemas.pantry import SortKeyIssue
from src.services.pantry_service import PantryService

router = APIRouter(prefix="/debug", tags=["debug"])


class SortKeyAuditResponse(CamelModel):
    """Response for the pantry sort key audit."""

    issues: list[SortKeyIssue]
    total: int


@router.get("/pantry-keys", response_model=SortKeyAuditResponse)
def audit_pantry_keys(
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Check every stored pantry sort key against the item's fields.

    Reports keys that cannot be decoded and keys whose type, location or
    itemId segment no longer matches the item body.
    """
    issues = pantry_service.audit_sort_keys(user_id)
    return SortKeyAuditResponse(issues=issues, total=len(issues))
