"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_current_user_id, get_recipe_service
from src.schemas.recipe import GenerateRecipeRequest, RecipePage, RecipeView, UnstarResponse
from src.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


# --- Static routes first (before /{recipe_id}) ---


@router.post("/generate", response_model=RecipeView, response_model_exclude_none=True)
async def generate_recipe(
    user_id: Annotated[str, Depends(get_current_user_id)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
    request: GenerateRecipeRequest | None = None,
):
    """Generate a recipe from the user's pantry.

    The recipe is stored as temporary and expires after the configured number
    of days unless it is starred.
    """
    request = request or GenerateRecipeRequest()
    recipe = await recipe_service.generate_from_pantry(user_id, request.constraint)
    return RecipeView.from_recipe(recipe)


@router.get("", response_model=RecipePage, response_model_exclude_none=True)
def list_recipes(
    user_id: Annotated[str, Depends(get_current_user_id)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    last_evaluated_key: Annotated[str | None, Query(alias="lastEvaluatedKey")] = None,
):
    """List the user's generated recipes, temporary and starred."""
    return recipe_service.list_recipes(
        user_id, limit=limit, continuation_token=last_evaluated_key
    )


@router.get("/{recipe_id}", response_model=RecipeView, response_model_exclude_none=True)
def get_recipe(
    recipe_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a specific generated recipe."""
    return RecipeView.from_recipe(recipe_service.get_recipe(user_id, recipe_id))


@router.post("/{recipe_id}/star", response_model=RecipeView, response_model_exclude_none=True)
def star_recipe(
    recipe_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Star a generated recipe so it is kept permanently."""
    return RecipeView.from_recipe(recipe_service.star_recipe(user_id, recipe_id))


@router.delete(
    "/{recipe_id}/star", response_model=UnstarResponse, response_model_exclude_none=True
)
def unstar_recipe(
    recipe_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Unstar a recipe. Unstarring a recipe that is not starred changes nothing."""
    result = recipe_service.unstar_recipe(user_id, recipe_id)
    return UnstarResponse(
        recipe=RecipeView.from_recipe(result.recipe),
        changed=result.changed,
        message="Recipe unstarred" if result.changed else "Recipe is not starred",
    )
