"""Pydantic schemas for API requests and responses."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.schemas.dashboard import DashboardStats
from src.schemas.pantry import (
    PantryItem,
    PantryItemCreate,
    PantryItemPage,
    PantryItemUpdate,
    SortKeyIssue,
)
from src.schemas.recipe import (
    GenerateRecipeRequest,
    IngredientSummary,
    PermanentRecipe,
    RecipePage,
    RecipeView,
    StarredRecipe,
    TemporaryRecipe,
    UnstarResponse,
)
from src.services.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic error as ``"field: message"``."""
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


def validate_payload(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """Validate raw input, reporting every violated constraint at once."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError([format_error(err) for err in e.errors()]) from None


__all__ = [
    "DashboardStats",
    "GenerateRecipeRequest",
    "IngredientSummary",
    "PantryItem",
    "PantryItemCreate",
    "PantryItemPage",
    "PantryItemUpdate",
    "PermanentRecipe",
    "RecipePage",
    "RecipeView",
    "SortKeyIssue",
    "StarredRecipe",
    "TemporaryRecipe",
    "UnstarResponse",
    "format_error",
    "validate_payload",
]
