"""Recipe service: generation, starring and listing of generated recipes.

Every generated recipe is stored straight away as temporary, with a
``ttlExpiration`` the store's sweep acts on. Starring promotes the stored
record to permanent and drops the expiry; request handlers never delete
expired recipes themselves.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from src.config import get_settings
from src.models.enums import RecipeConstraint
from src.schemas.recipe import (
    IngredientSummary,
    PermanentRecipe,
    RecipePage,
    RecipeView,
    TemporaryRecipe,
    parse_recipe,
)
from src.services.errors import NotFoundError, ValidationError
from src.services.image_search import ImageSearchService
from src.services.item_store import ItemStore
from src.services.llm import LLMService
from src.services.pantry_service import PantryService

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def parse_constraint(constraint: RecipeConstraint | str) -> RecipeConstraint:
    """Coerce a constraint, rejecting values outside the allowed set."""
    try:
        return RecipeConstraint(constraint)
    except ValueError:
        allowed = ", ".join(c.value for c in RecipeConstraint)
        raise ValidationError(f"Invalid constraint. Must be one of: {allowed}") from None


def utc_now() -> float:
    """Current Unix time."""
    return datetime.now(UTC).timestamp()


@dataclass
class UnstarResult:
    """Outcome of an unstar request."""

    recipe: TemporaryRecipe | PermanentRecipe
    changed: bool


class RecipeService:
    """Service for the generated recipe lifecycle."""

    def __init__(
        self,
        store: ItemStore,
        pantry_service: PantryService,
        llm_service: LLMService | None = None,
        image_service: ImageSearchService | None = None,
        clock: Callable[[], float] = utc_now,
    ):
        settings = get_settings()
        self.store = store
        self.pantry_service = pantry_service
        self.llm_service = llm_service or LLMService()
        self.image_service = image_service or ImageSearchService()
        self.clock = clock
        self.ttl_seconds = settings.recipe_ttl_days * SECONDS_PER_DAY
        self.page_size = settings.recipes_page_size

    def _expiry(self) -> int:
        return int(self.clock()) + self.ttl_seconds

    async def generate_and_persist(
        self,
        user_id: str,
        constraint: RecipeConstraint | str,
        ingredients: list[IngredientSummary],
    ) -> TemporaryRecipe:
        """Generate a recipe and store it as temporary.

        Raises:
            ValidationError: the constraint is not one of the allowed values.
            GenerationFailedError: the text generator failed; nothing is stored.
        """
        constraint = parse_constraint(constraint).value
        logger.info(f"Generating recipe for user {user_id} with constraint {constraint!r}")
        text = await self.llm_service.generate_recipe(constraint, ingredients)

        image_url = await self.image_service.search_recipe_image(text.title)

        recipe = TemporaryRecipe(
            user_id=user_id,
            recipe_id=str(uuid.uuid4()),
            title=text.title,
            description=text.description,
            image_url=image_url or "",
            constraint=constraint,
            ttl_expiration=self._expiry(),
        )
        self.store.put_item(recipe.to_record())
        logger.info(
            f"Stored temporary recipe {recipe.recipe_id} ({recipe.title!r}, "
            f"has_image={bool(image_url)})"
        )
        return recipe

    async def generate_from_pantry(
        self, user_id: str, constraint: RecipeConstraint | str = RecipeConstraint.NO_CONSTRAINT
    ) -> TemporaryRecipe:
        """Generate a recipe from everything in the user's pantry."""
        constraint = parse_constraint(constraint)
        items = self.pantry_service.list_all_items(user_id)
        if not items:
            raise ValidationError(
                "No pantry items found. Please add some items to your pantry first."
            )
        ingredients = [IngredientSummary(name=item.title, quantity=item.count) for item in items]
        return await self.generate_and_persist(user_id, constraint, ingredients)

    def get_recipe(self, user_id: str, recipe_id: str) -> TemporaryRecipe | PermanentRecipe:
        """Get a generated recipe by id."""
        if not recipe_id or not recipe_id.strip():
            raise ValidationError("Recipe ID is required")
        record = self.store.get_item(user_id, recipe_id)
        if record is None:
            raise NotFoundError("Recipe not found")
        return parse_recipe(record)

    def star_recipe(self, user_id: str, recipe_id: str) -> PermanentRecipe:
        """Promote a generated recipe to permanent.

        Starring an already permanent recipe returns it without writing.
        """
        recipe = self.get_recipe(user_id, recipe_id)
        if isinstance(recipe, PermanentRecipe):
            return recipe

        starred = recipe.promote()
        # Full replacement so the stored item no longer has a ttlExpiration
        self.store.put_item(starred.to_record())
        logger.info(f"Starred recipe {recipe_id} for user {user_id}")
        return starred

    def unstar_recipe(self, user_id: str, recipe_id: str) -> UnstarResult:
        """Return a starred recipe to temporary with a fresh expiry.

        A recipe that is not starred is left untouched. Unstarring demotes
        rather than deletes; DESIGN.md records this choice.
        """
        recipe = self.get_recipe(user_id, recipe_id)
        if not isinstance(recipe, PermanentRecipe):
            return UnstarResult(recipe=recipe, changed=False)

        unstarred = recipe.demote(self._expiry())
        self.store.put_item(unstarred.to_record())
        logger.info(f"Unstarred recipe {recipe_id} for user {user_id}")
        return UnstarResult(recipe=unstarred, changed=True)

    def list_recipes(
        self,
        user_id: str,
        limit: int | None = None,
        continuation_token: str | None = None,
    ) -> RecipePage:
        """List one page of a user's generated recipes, split by status."""
        if limit is not None and limit < 1:
            raise ValidationError("Limit must be a positive number")
        page = self.store.query(
            user_id, limit=limit or self.page_size, continuation_token=continuation_token
        )
        now = self.clock()
        views = [RecipeView.from_recipe(parse_recipe(item), now) for item in page.items]
        temporary = [view for view in views if view.is_temporary]
        permanent = [view for view in views if not view.is_temporary]
        return RecipePage(
            items=views,
            temporary_recipes=temporary,
            permanent_recipes=permanent,
            last_evaluated_key=page.next_token,
            total_count=len(views),
            temporary_count=len(temporary),
            permanent_count=len(permanent),
            has_more=page.next_token is not None,
        )
