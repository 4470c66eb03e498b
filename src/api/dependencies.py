"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.auth import get_user_id
from src.services.dashboard_service import DashboardService
from src.services.image_search import ImageSearchService
from src.services.item_store import ItemStore, pantry_table, starred_recipes_table
from src.services.llm import LLMService
from src.services.pantry_service import PantryService
from src.services.recipe_service import RecipeService

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Get the authenticated user's id from the bearer token."""
    user_id = get_user_id(credentials.credentials) if credentials else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    return LLMService()


def get_image_search_service() -> ImageSearchService:
    """Get image search service instance."""
    return ImageSearchService()


def get_pantry_service(
    db: Annotated[Session, Depends(get_db)],
) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(ItemStore(db, pantry_table()))


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
    image_service: Annotated[ImageSearchService, Depends(get_image_search_service)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(
        ItemStore(db, starred_recipes_table()),
        PantryService(ItemStore(db, pantry_table())),
        llm_service=llm_service,
        image_service=image_service,
    )


def get_dashboard_service(
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
) -> DashboardService:
    """Get dashboard service with dependencies."""
    return DashboardService(pantry_service)
