"""Stock photo search for generated recipes using the Pexels API.

Images are a best-effort enhancement: every failure here is logged and
reported as "no image", never raised.
"""

import logging
import re

import httpx

from src.config import get_settings
from src.services.secrets import SecretCache, get_secret_cache

logger = logging.getLogger(__name__)

MAIN_INGREDIENTS = {
    "chicken", "beef", "pork", "fish", "salmon", "shrimp", "pasta", "rice",
    "quinoa", "salad", "soup", "stew", "curry", "stir-fry", "pizza", "burger",
    "sandwich", "taco", "burrito", "lasagna", "noodles", "bread", "cake",
    "cookie", "pie", "smoothie",
}  # fmt: skip
STOP_WORDS = {"with", "and", "the", "for", "from"}
_FILLER_WORDS = re.compile(r"\b(recipe|dish|meal|food|cooking|kitchen)\b", re.IGNORECASE)


def clean_recipe_title(title: str) -> str:
    """Strip filler words and punctuation from a recipe title."""
    cleaned = _FILLER_WORDS.sub("", title)
    cleaned = re.sub(r"[^\w\s]", " ", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def extract_main_ingredient(title: str) -> str:
    """Pick a well-known ingredient or dish word from a title, else the first long word."""
    words = title.lower().split()
    for word in words:
        if word in MAIN_INGREDIENTS:
            return word
    significant = [w for w in words if len(w) > 3 and w not in STOP_WORDS]
    return significant[0] if significant else ""


class ImageSearchService:
    """Service for finding a photo that illustrates a recipe."""

    def __init__(self, secrets: SecretCache | None = None) -> None:
        settings = get_settings()
        self.secrets = secrets or get_secret_cache()
        self.base_url = settings.pexels_base_url.rstrip("/")
        self.timeout = settings.image_search_timeout_seconds

    async def search_image(self, query: str) -> str | None:
        """Return the URL of the first landscape photo for a query, if any."""
        api_key = self.secrets.get("PEXELS_API_KEY")
        if not api_key:
            logger.warning("PEXELS_API_KEY not configured - skipping image search")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.base_url}/search",
                    params={"query": query, "per_page": 1, "orientation": "landscape"},
                    headers={"Authorization": api_key},
                )
                response.raise_for_status()
                photos = response.json().get("photos") or []
        except httpx.HTTPStatusError as e:
            logger.warning(f"Pexels returned {e.response.status_code} for {query!r}")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Pexels search failed for {query!r}: {e}")
            return None

        if photos:
            return photos[0].get("src", {}).get("large2x")
        return None

    async def search_recipe_image(self, recipe_title: str) -> str | None:
        """Search by the cleaned title, then by its main ingredient."""
        query = clean_recipe_title(recipe_title)
        image_url = await self.search_image(query) if query else None

        if not image_url:
            simplified = extract_main_ingredient(recipe_title)
            if simplified and simplified != query:
                image_url = await self.search_image(simplified)

        return image_url
