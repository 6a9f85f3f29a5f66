"""CharacterCatalog singleton, created once, shared across all requests."""
from functools import lru_cache

from nikkedex import CharacterCatalog

from app.core.config import settings


@lru_cache(maxsize=1)
def get_catalog() -> CharacterCatalog:
    return CharacterCatalog(
        list_url=settings.CHARACTER_LIST_URL,
        detail_url=settings.CHARACTER_DETAIL_URL,
        base_url=settings.PRYDWEN_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
    )
