"""Process-wide store used by the API layer."""

from functools import lru_cache

from codetutor.config import get_settings

from .base import AbstractStorage
from .memory import MemoryStorage


@lru_cache
def get_storage() -> AbstractStorage:
    """Get the shared store instance.

    Cached so every request sees the same records; tests override the
    FastAPI dependency instead of clearing this cache.
    """
    settings = get_settings()
    return MemoryStorage(seed=settings.SEED_SAMPLE_DATA)
