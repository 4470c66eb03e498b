"""Time-boxed cache for third-party API keys."""

import json
import logging
import threading
import time
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from src.config import get_settings

logger = logging.getLogger(__name__)

SECRET_NAMES = ("OPENAI_API_KEY", "PEXELS_API_KEY")


def load_api_keys() -> dict[str, str]:
    """Read API keys from the secrets file, falling back to settings.

    The secrets file is a JSON object such as
    ``{"OPENAI_API_KEY": "...", "PEXELS_API_KEY": "..."}``.
    """
    settings = get_settings()
    keys = {
        "OPENAI_API_KEY": settings.openai_api_key,
        "PEXELS_API_KEY": settings.pexels_api_key,
    }
    if settings.secrets_file:
        data = json.loads(Path(settings.secrets_file).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Secrets file must contain a JSON object")
        keys.update({name: data[name] for name in SECRET_NAMES if data.get(name)})
    return {name: value for name, value in keys.items() if value}


class SecretCache:
    """Caches fetched API keys for a fixed age.

    If a refresh fails while an older copy is held, the older copy is served
    and the failure is logged.
    """

    def __init__(
        self,
        loader: Callable[[], dict[str, str]] = load_api_keys,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.loader = loader
        self.ttl_seconds = (
            get_settings().secrets_cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        )
        self.clock = clock
        self._cached: dict[str, str] | None = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def get_all(self) -> dict[str, str]:
        """Return all API keys, refreshing them once the cache has aged out."""
        with self._lock:
            now = self.clock()
            if self._cached is not None and now - self._fetched_at < self.ttl_seconds:
                return self._cached
            try:
                self._cached = self.loader()
                self._fetched_at = now
            except (OSError, ValueError) as e:
                if self._cached is None:
                    raise
                logger.warning(f"Failed to refresh API keys, using cached copy: {e}")
            return self._cached

    def get(self, name: str) -> str | None:
        """Return one API key, or None if it is not configured."""
        return self.get_all().get(name)

    def invalidate(self) -> None:
        """Force the next lookup to reload."""
        with self._lock:
            self._cached = None


@lru_cache
def get_secret_cache() -> SecretCache:
    """Get the process-wide secret cache."""
    return SecretCache()
