"""
Character catalog: reads the Nikke roster from prydwen.gg page-data JSON.

The list is fetched once per process and shared across all requests
(read-through cache, single in-flight fetch). Constructor takes the URLs and
an optional httpx transport so tests can serve canned payloads.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional
from urllib.parse import quote

import httpx
import orjson

from nikkedex.constants import CHARACTER_DETAIL_URL, CHARACTER_LIST_URL, PRYDWEN_BASE_URL
from nikkedex.models import CharacterDetail, CharacterSummary, Skill, SkillDetail, VoiceCast

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The character list could not be loaded."""


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------

def _dig(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _gatsby_image(image: Any) -> Any:
    return _dig(image, "localFile", "childImageSharp", "gatsbyImageData")


def build_absolute_image_url(image: Any, base_url: str = PRYDWEN_BASE_URL) -> str:
    """Absolute URL of a Gatsby image's fallback src, or "" when absent."""
    src = _dig(_gatsby_image(image), "images", "fallback", "src")
    if not src:
        return ""
    return f"{base_url}{src}"


def image_size(image: Any) -> tuple[Optional[int], Optional[int]]:
    data = _gatsby_image(image)
    return _dig(data, "width"), _dig(data, "height")


def parse_character_node(node: dict, base_url: str = PRYDWEN_BASE_URL) -> CharacterSummary:
    """Map one `allContentfulNikkeCharacter` node onto a CharacterSummary."""
    small_w, small_h = image_size(node.get("smallImage"))
    card_w, card_h = image_size(node.get("cardImage"))
    return CharacterSummary(
        id=node["id"],
        name=node["name"],
        slug=node["slug"],
        rarity=node["rarity"],
        element=node["element"],
        weapon=node["weapon"],
        role=node["class"],
        manufacturer=node["manufacturer"],
        squad=node["squad"],
        burst_type=node["burstType"],
        is_limited=node.get("isLimited"),
        limited_event=node.get("limitedEvent"),
        small_image_url=build_absolute_image_url(node.get("smallImage"), base_url),
        small_image_width=small_w or 0,
        small_image_height=small_h or 0,
        card_image_url=build_absolute_image_url(node.get("cardImage"), base_url),
        card_image_width=card_w or 0,
        card_image_height=card_h or 0,
        skills=[Skill.model_validate(s) for s in node.get("skills") or []],
    )


def parse_detail_skills(unit: dict) -> list[SkillDetail]:
    return [
        SkillDetail(
            cooldown=s.get("cooldown"),
            type=s["type"],
            slot=s["slot"],
            name=s.get("name"),
            description_raw=_dig(s, "descriptionLevel10", "raw"),
        )
        for s in unit.get("skills") or []
    ]


def merge_detail(summary: CharacterSummary, unit: dict,
                 base_url: str = PRYDWEN_BASE_URL) -> CharacterDetail:
    """Overlay a detail page's `currentUnit` node on a summary."""
    full_w, full_h = image_size(unit.get("fullImage"))
    cv = unit.get("cv") or {}
    return CharacterDetail(
        **summary.model_dump(),
        full_image_url=build_absolute_image_url(unit.get("fullImage"), base_url),
        full_image_width=full_w,
        full_image_height=full_h,
        release_date=unit.get("releaseDate"),
        weapon_name=unit.get("weaponName"),
        ammo_capacity=unit.get("ammoCapacity"),
        reload_time=unit.get("reloadTime"),
        control_mode=unit.get("controlMode"),
        backstory=_dig(unit, "backstory", "backstory"),
        cv=VoiceCast(kr=cv.get("kr"), jpn=cv.get("jpn"), en=cv.get("en")),
        basic_attack_raw=_dig(unit, "basicAttack", "raw"),
        harmony_cubes_raw=_dig(unit, "harmonyCubesInfo", "raw"),
        review_raw=_dig(unit, "review", "raw"),
        skills_with_detail=parse_detail_skills(unit),
        specialities=unit.get("specialities"),
    )


# ---------------------------------------------------------------------------
# Remote fetches
# ---------------------------------------------------------------------------

def detail_url_for(detail_url: str, slug: str) -> str:
    return f"{detail_url}{quote(slug, safe='')}/page-data.json"


def fetch_character_list(client: httpx.Client, list_url: str = CHARACTER_LIST_URL) -> list[dict]:
    """Raw character nodes from the roster page-data. Raises CatalogError."""
    try:
        response = client.get(list_url)
    except httpx.HTTPError as e:
        raise CatalogError(f"Failed to load character data: {e}") from e
    if response.status_code != 200:
        raise CatalogError(f"Failed to load character data: {response.status_code}")
    try:
        payload = orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        raise CatalogError("Invalid character data shape from prydwen API") from e
    nodes = _dig(payload, "data", "allContentfulNikkeCharacter", "nodes")
    if not isinstance(nodes, list):
        raise CatalogError("Invalid character data shape from prydwen API")
    return nodes


def fetch_character_detail(client: httpx.Client, slug: str,
                           detail_url: str = CHARACTER_DETAIL_URL) -> Optional[dict]:
    """The `currentUnit` node of a character page, or None on any failure."""
    try:
        response = client.get(detail_url_for(detail_url, slug))
        if response.status_code != 200:
            return None
        payload = orjson.loads(response.content)
    except (httpx.HTTPError, orjson.JSONDecodeError) as e:
        logger.warning("Detail fetch failed for %s: %s", slug, e)
        return None
    nodes = _dig(payload, "result", "data", "currentUnit", "nodes")
    if not isinstance(nodes, list) or not nodes or not isinstance(nodes[0], dict):
        return None
    return nodes[0]


def fetch_all_details(client: httpx.Client, slugs: list[str],
                      detail_url: str = CHARACTER_DETAIL_URL,
                      concurrency: int = 5) -> dict[str, dict]:
    """Fetch detail nodes in fixed-size batches; each batch finishes before the next.

    Slugs whose detail could not be fetched are absent from the result.
    """
    results: dict[str, dict] = {}
    logger.info("Fetching details for %d characters (concurrency=%d)...",
                len(slugs), concurrency)
    with ThreadPoolExecutor(max_workers=max(1, concurrency)) as pool:
        for i in range(0, len(slugs), concurrency):
            batch = slugs[i:i + concurrency]
            details = list(pool.map(
                lambda s: fetch_character_detail(client, s, detail_url), batch))
            for slug, detail in zip(batch, details):
                if detail is not None:
                    results[slug] = detail
            logger.info("  %d/%d", min(i + concurrency, len(slugs)), len(slugs))
    logger.info("Fetched details for %d characters", len(results))
    return results


# ---------------------------------------------------------------------------
# Sorting / search
# ---------------------------------------------------------------------------

def sort_characters(characters: list[Any]) -> list[Any]:
    """Case-insensitive name order; works for any model with a `name`."""
    return sorted(characters, key=lambda c: c.name.casefold())


def filter_characters(characters: list[Any], query: Optional[str]) -> list[Any]:
    normalized = (query or "").strip().lower()
    if not normalized:
        return list(characters)
    return [c for c in characters if normalized in c.name.lower()]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class CharacterCatalog:
    """Process-wide read-through cache over the remote roster."""

    def __init__(self, list_url: str = CHARACTER_LIST_URL,
                 detail_url: str = CHARACTER_DETAIL_URL,
                 base_url: str = PRYDWEN_BASE_URL,
                 timeout: float = 10.0,
                 transport: httpx.BaseTransport | None = None):
        self.list_url = list_url
        self.detail_url = detail_url
        self.base_url = base_url
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._lock = threading.Lock()
        self._characters: Optional[list[CharacterSummary]] = None
        self._by_slug: dict[str, CharacterSummary] = {}
        self._details: dict[str, CharacterDetail] = {}

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def get_characters(self) -> list[CharacterSummary]:
        """All characters in catalog order. Raises CatalogError on first-load failure."""
        with self._lock:
            if self._characters is None:
                nodes = fetch_character_list(self._client, self.list_url)
                try:
                    characters = [parse_character_node(n, self.base_url) for n in nodes]
                except (KeyError, TypeError, ValueError) as e:
                    raise CatalogError("Invalid character data shape from prydwen API") from e
                self._characters = characters
                self._by_slug = {c.slug: c for c in characters}
                logger.info("Loaded %d characters from %s", len(characters), self.list_url)
            return self._characters

    def get_character_by_slug(self, slug: str) -> Optional[CharacterSummary]:
        self.get_characters()
        return self._by_slug.get(slug)

    def get_character_slugs(self) -> list[str]:
        return [c.slug for c in self.get_characters()]

    def get_character_detail_by_slug(self, slug: str) -> Optional[CharacterDetail]:
        """Summary merged with its detail page; None if either is unavailable."""
        summary = self.get_character_by_slug(slug)
        if summary is None:
            return None
        cached = self._details.get(slug)
        if cached is not None:
            return cached
        unit = fetch_character_detail(self._client, slug, self.detail_url)
        if unit is None:
            return None
        try:
            detail = merge_detail(summary, unit, self.base_url)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Unusable detail payload for %s: %s", slug, e)
            return None
        self._details[slug] = detail
        return detail

    def invalidate(self) -> None:
        """Drop cached data; the next read refetches."""
        with self._lock:
            self._characters = None
            self._by_slug = {}
            self._details = {}

    def close(self) -> None:
        self._client.close()
