"""Pydantic models for characters, tiers, and drag payloads.

These are the FastAPI-ready schemas; keep field names stable.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from nikkedex.constants import TIER_KEYS


# ---------------------------------------------------------------------------
# Tier system
# ---------------------------------------------------------------------------

class TierConfig(BaseModel):
    """Immutable definition of a single tier-list row."""
    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    color: str

    @computed_field
    @property
    def rank(self) -> int:
        return TIER_KEYS.index(self.key)


TIERS: list[TierConfig] = [
    TierConfig(key="s", title="S", color="#67E8F9"),
    TierConfig(key="a", title="A", color="#6EE7B7"),
    TierConfig(key="b", title="B", color="#93C5FD"),
    TierConfig(key="c", title="C", color="#FCD34D"),
    TierConfig(key="d", title="D", color="#D8B4FE"),
    TierConfig(key="e", title="E", color="#FDA4AF"),
]

TIER_MAP: dict[str, TierConfig] = {t.key: t for t in TIERS}

# Ordered slugs per tier key
TierState = dict[str, list[str]]
# Encoded slugs per tier key; None means the URL omits the key
TierQuery = dict[str, Optional[str]]


class DragPayload(BaseModel):
    """Move descriptor carried from drag start to drop."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slug: str
    from_: str = Field(alias="from")


# ---------------------------------------------------------------------------
# Character models
# ---------------------------------------------------------------------------

class Skill(BaseModel):
    cooldown: Optional[float] = None  # None = passive
    type: str
    slot: str
    name: Optional[str] = None


class SkillDetail(Skill):
    description_raw: Optional[str] = None


class VoiceCast(BaseModel):
    kr: Optional[str] = None
    jpn: Optional[str] = None
    en: Optional[str] = None


class CharacterSummary(BaseModel):
    """One roster entry as listed by the catalog."""
    id: str
    name: str
    slug: str
    rarity: str
    element: str
    weapon: str
    role: str
    manufacturer: str
    squad: str
    burst_type: str
    is_limited: Optional[bool] = None
    limited_event: Optional[str] = None
    small_image_url: str
    small_image_width: int
    small_image_height: int
    card_image_url: str
    card_image_width: int
    card_image_height: int
    skills: list[Skill] = Field(default_factory=list)


class CharacterDetail(CharacterSummary):
    """Summary merged with the per-character detail page."""
    full_image_url: Optional[str] = None
    full_image_width: Optional[int] = None
    full_image_height: Optional[int] = None
    release_date: Optional[str] = None
    weapon_name: Optional[str] = None
    ammo_capacity: Optional[int] = None
    reload_time: Optional[float] = None
    control_mode: Optional[str] = None
    backstory: Optional[str] = None
    cv: VoiceCast = Field(default_factory=VoiceCast)
    basic_attack_raw: Optional[str] = None
    harmony_cubes_raw: Optional[str] = None
    review_raw: Optional[str] = None
    skills_with_detail: list[SkillDetail] = Field(default_factory=list)
    specialities: Optional[list[str]] = None

    @computed_field
    @property
    def display_skills(self) -> list[Skill]:
        """Detailed skills when present, else the summary skills."""
        if self.skills_with_detail:
            return list(self.skills_with_detail)
        return list(self.skills)


class TierListCharacter(BaseModel):
    """The card shown on the tier board and in the pool."""
    slug: str
    name: str
    small_image_url: str
    small_image_width: int
    small_image_height: int

    @classmethod
    def from_summary(cls, character: CharacterSummary) -> "TierListCharacter":
        return cls(
            slug=character.slug,
            name=character.name,
            small_image_url=character.small_image_url,
            small_image_width=character.small_image_width,
            small_image_height=character.small_image_height,
        )
