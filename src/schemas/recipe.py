"""Recipe schemas.

A generated recipe is either temporary (it carries ``ttlExpiration`` and the
store sweeps it once that passes) or permanent (starred, with no expiry
field at all). ``status`` selects the variant.
"""

import math
from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from src.models.enums import RecipeConstraint, RecipeStatus
from src.schemas.base import CamelModel


class GenerateRecipeRequest(CamelModel):
    """Generate a recipe from the current pantry."""

    constraint: RecipeConstraint = RecipeConstraint.NO_CONSTRAINT


class IngredientSummary(CamelModel):
    """Ingredient passed to the recipe text generator."""

    name: str
    quantity: int


class GeneratedRecipeText(CamelModel):
    """Title and description returned by the recipe text generator."""

    title: str
    description: str


class _RecipeBase(CamelModel):
    user_id: str
    recipe_id: str
    title: str
    description: str
    image_url: str = ""
    constraint: str = RecipeConstraint.NO_CONSTRAINT.value

    def to_record(self) -> dict:
        """Recipe attributes as written to the store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TemporaryRecipe(_RecipeBase):
    """A generated recipe that expires unless starred."""

    status: Literal["temporary"] = "temporary"
    ttl_expiration: int

    def promote(self) -> "PermanentRecipe":
        """The starred form of this recipe, without an expiry."""
        return PermanentRecipe.model_validate(
            self.model_dump(exclude={"status", "ttl_expiration"})
        )


class PermanentRecipe(_RecipeBase):
    """A starred recipe. It has no expiry field."""

    status: Literal["permanent"] = "permanent"

    def demote(self, ttl_expiration: int) -> TemporaryRecipe:
        """The unstarred form of this recipe, expiring at ``ttl_expiration``."""
        return TemporaryRecipe.model_validate(
            {**self.model_dump(exclude={"status"}), "ttl_expiration": ttl_expiration}
        )


StarredRecipe = Annotated[TemporaryRecipe | PermanentRecipe, Field(discriminator="status")]

starred_recipe_adapter: TypeAdapter[TemporaryRecipe | PermanentRecipe] = TypeAdapter(
    StarredRecipe
)


def parse_recipe(record: dict) -> TemporaryRecipe | PermanentRecipe:
    """Build the recipe variant matching a stored record's status."""
    return starred_recipe_adapter.validate_python(record)


class RecipeView(CamelModel):
    """Recipe as returned by the API, with expiry metadata."""

    user_id: str
    recipe_id: str
    title: str
    description: str
    image_url: str
    constraint: str
    status: RecipeStatus
    ttl_expiration: int | None = None
    is_temporary: bool
    expires_at: datetime | None = None
    days_until_expiry: int | None = None

    @classmethod
    def from_recipe(
        cls, recipe: TemporaryRecipe | PermanentRecipe, now: float | None = None
    ) -> "RecipeView":
        """Build the view, computing expiry metadata for temporary recipes."""
        data = recipe.model_dump()
        if isinstance(recipe, TemporaryRecipe):
            now = datetime.now(UTC).timestamp() if now is None else now
            data.update(
                is_temporary=True,
                expires_at=datetime.fromtimestamp(recipe.ttl_expiration, UTC),
                days_until_expiry=math.ceil((recipe.ttl_expiration - now) / 86400),
            )
        else:
            data["is_temporary"] = False
        return cls.model_validate(data)


class RecipePage(CamelModel):
    """One page of generated recipes, split by status."""

    items: list[RecipeView]
    temporary_recipes: list[RecipeView]
    permanent_recipes: list[RecipeView]
    last_evaluated_key: str | None = None
    total_count: int
    temporary_count: int
    permanent_count: int
    has_more: bool


class UnstarResponse(CamelModel):
    """Result of an unstar request."""

    recipe: RecipeView
    changed: bool
    message: str
