from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import field_validator
from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, Relationship, SQLModel

from nikkedex import CharacterDetail, TierListCharacter
from nikkedex.constants import (
    RATING_MAX, RATING_MIN, REVIEW_CONTENT_MAX, REVIEW_NICKNAME_MAX,
)


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Character models (synced catalog rows)
# ---------------------------------------------------------------------------

class Character(SQLModel, table=True):
    __tablename__ = "characters"

    slug: str = Field(primary_key=True, max_length=255)
    external_id: str = Field(max_length=255)
    name: str = Field(max_length=255)
    rarity: str = Field(max_length=10)  # "SSR" | "SR" | "R"
    element: str = Field(max_length=50)
    weapon: str = Field(max_length=50)
    role: str = Field(max_length=50)
    manufacturer: str = Field(max_length=100)
    squad: str = Field(max_length=100)
    burst_type: str = Field(max_length=10)
    is_limited: bool | None = None
    limited_event: str | None = None
    small_image_url: str
    card_image_url: str
    small_image_width: int
    small_image_height: int
    card_image_width: int
    card_image_height: int
    skills: list = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    full_image_url: str | None = None
    full_image_width: int | None = None
    full_image_height: int | None = None
    release_date: str | None = None
    weapon_name: str | None = None
    ammo_capacity: int | None = None
    reload_time: float | None = None
    control_mode: str | None = None
    backstory: str | None = None
    cv: dict | None = Field(default=None, sa_column=Column(JSON))
    basic_attack_raw: str | None = None
    harmony_cubes_raw: str | None = None
    skills_with_detail: list | None = Field(default=None, sa_column=Column(JSON))
    specialities: list | None = Field(default=None, sa_column=Column(JSON))
    synced_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )

    reviews: list["Review"] = Relationship(
        back_populates="character", cascade_delete=True
    )


class CharacterCard(SQLModel):
    """Roster grid entry with its badge icon paths."""
    slug: str
    name: str
    rarity: str
    element: str
    weapon: str
    role: str
    manufacturer: str
    squad: str
    burst_type: str
    is_limited: bool | None = None
    small_image_url: str
    small_image_width: int
    small_image_height: int
    icons: dict[str, str | None]


class CharactersPublic(SQLModel):
    data: list[CharacterCard]
    count: int


class SkillPublic(SQLModel):
    name: str | None = None
    type: str
    slot: str
    cooldown_label: str
    description: str = ""


class CharacterDetailPublic(SQLModel):
    character: CharacterDetail
    # False when the detail page could not be fetched and only summary data is shown
    detail_loaded: bool
    icons: dict[str, str | None]
    skills: list[SkillPublic]
    backstory: str = ""
    basic_attack: str = ""
    harmony_cubes: str = ""
    review: str = ""


# ---------------------------------------------------------------------------
# Review models
# ---------------------------------------------------------------------------

class ReviewBase(SQLModel):
    nickname: str | None = Field(default=None, max_length=REVIEW_NICKNAME_MAX)
    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)
    content: str = Field(min_length=1, max_length=REVIEW_CONTENT_MAX)


class ReviewCreate(ReviewBase):
    @field_validator("content", mode="before")
    @classmethod
    def _strip_content(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nickname", mode="before")
    @classmethod
    def _blank_nickname_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


class Review(ReviewBase, table=True):
    __tablename__ = "reviews"

    id: int | None = Field(default=None, primary_key=True)
    character_slug: str = Field(
        foreign_key="characters.slug", index=True, nullable=False, ondelete="CASCADE"
    )
    created_at: datetime = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        nullable=False,
    )

    character: Optional["Character"] = Relationship(back_populates="reviews")


class ReviewPublic(ReviewBase):
    id: int
    character_slug: str
    created_at: datetime


class ReviewsPublic(SQLModel):
    data: list[ReviewPublic]
    count: int
    average: float


class RecentReviewPublic(SQLModel):
    id: int
    character_slug: str
    character_name: str
    small_image_url: str
    small_image_width: int
    small_image_height: int
    nickname: str | None = None
    rating: int
    content: str
    preview: str
    created_at: datetime
    time_ago: str


class RecentReviewsPublic(SQLModel):
    data: list[RecentReviewPublic]
    count: int


# ---------------------------------------------------------------------------
# Tier-list board schemas
# ---------------------------------------------------------------------------

class TierRowPublic(SQLModel):
    key: str
    title: str
    color: str
    characters: list[TierListCharacter]


class TierBoardPublic(SQLModel):
    tiers: list[TierRowPublic]
    pool: list[TierListCharacter]
    pool_count: int
    query: dict[str, str | None]
    share_path: str


class MoveRequest(SQLModel):
    query: dict[str, str | None] = Field(default_factory=dict)
    # Drag data as set on drag start: "application/json" and/or "text/plain"
    data: dict[str, str] = Field(default_factory=dict)
    destination: str


class MoveResult(SQLModel):
    changed: bool
    query: dict[str, str | None]
    share_path: str
