"""LLM service for recipe text generation over an OpenAI-compatible API."""

import logging

import httpx

from src.config import get_settings
from src.schemas.recipe import GeneratedRecipeText, IngredientSummary
from src.services.errors import GenerationFailedError, GenerationFailureReason
from src.services.llm_prompts import RECIPE_SYSTEM_PROMPT, get_recipe_prompt
from src.services.secrets import SecretCache, get_secret_cache

logger = logging.getLogger(__name__)


def parse_recipe_response(content: str) -> GeneratedRecipeText:
    """Extract the ``Title:`` and ``Description:`` lines from model output."""
    title = ""
    description = ""
    for line in (line.strip() for line in content.splitlines()):
        if line.startswith("Title:"):
            title = line.removeprefix("Title:").strip()
        elif line.startswith("Description:"):
            description = line.removeprefix("Description:").strip()

    if not title or not description:
        raise GenerationFailedError(
            GenerationFailureReason.MALFORMED_OUTPUT,
            "Invalid recipe format received from the model",
        )
    return GeneratedRecipeText(title=title, description=description)


class LLMService:
    """Service for generating recipe text with a chat completions model."""

    def __init__(self, secrets: SecretCache | None = None) -> None:
        self.settings = get_settings()
        self.secrets = secrets or get_secret_cache()
        self.base_url = self.settings.openai_base_url.rstrip("/")
        self.model = self.settings.llm_model
        self.timeout = self.settings.llm_timeout_seconds

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Generate a response from the LLM.

        Raises:
            GenerationFailedError: on missing credentials or any upstream failure.
        """
        api_key = self.secrets.get("OPENAI_API_KEY")
        if not api_key:
            raise GenerationFailedError(
                GenerationFailureReason.INVALID_CREDENTIALS, "OPENAI_API_KEY is not configured"
            )

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {api_key}"},
                    json={
                        "model": self.model,
                        "messages": messages,
                        "max_tokens": max_tokens,
                        "temperature": temperature,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            code = e.response.status_code
            logger.error(f"Recipe generation API returned {code}: {e}")
            if code == 429:
                reason = GenerationFailureReason.RATE_LIMITED
            elif code in (401, 403):
                reason = GenerationFailureReason.INVALID_CREDENTIALS
            else:
                reason = GenerationFailureReason.UPSTREAM_REJECTED
            raise GenerationFailedError(reason, f"HTTP {code}") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling recipe generation API: {e}")
            raise GenerationFailedError(GenerationFailureReason.UPSTREAM_REJECTED, str(e)) from e
        except ValueError as e:
            logger.error(f"Recipe generation API returned invalid JSON: {e}")
            raise GenerationFailedError(GenerationFailureReason.MALFORMED_OUTPUT, str(e)) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise GenerationFailedError(
                GenerationFailureReason.MALFORMED_OUTPUT, "No content received from the model"
            )
        return content

    async def generate_recipe(
        self, constraint: str, ingredients: list[IngredientSummary]
    ) -> GeneratedRecipeText:
        """Generate a recipe title and description from pantry ingredients."""
        prompt = get_recipe_prompt(
            constraint, [{"name": ing.name, "quantity": ing.quantity} for ing in ingredients]
        )
        content = await self.generate(prompt=prompt, system_prompt=RECIPE_SYSTEM_PROMPT)
        try:
            return parse_recipe_response(content)
        except GenerationFailedError:
            logger.warning(f"Unparseable recipe response: {content!r}")
            raise


def get_llm_service() -> LLMService:
    """Get an LLM service instance."""
    return LLMService()
