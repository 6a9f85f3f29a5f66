"""Public roster endpoints plus per-character reviews.

Roster data comes from the CharacterCatalog singleton; reviews are stored in
the database against the character slug.
"""
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlmodel import col, func, select

from app.api.deps import CatalogDep, SessionDep
from app.models import (
    Character,
    CharacterCard,
    CharacterDetailPublic,
    CharactersPublic,
    Review,
    ReviewCreate,
    ReviewPublic,
    ReviewsPublic,
    SkillPublic,
)
from app.sync_characters import character_row
from nikkedex import (
    CharacterDetail,
    filter_characters,
    get_character_icons,
    parse_rich_text,
    sort_characters,
)
from nikkedex.formatting import format_cooldown

router = APIRouter(prefix="/characters", tags=["characters"])


@router.get("/", response_model=CharactersPublic)
def list_characters(catalog: CatalogDep, q: str | None = None) -> Any:
    """All characters sorted by name, optionally filtered by a name substring."""
    characters = filter_characters(sort_characters(catalog.get_characters()), q)
    data = [
        CharacterCard(**c.model_dump(), icons=get_character_icons(c))
        for c in characters
    ]
    return CharactersPublic(data=data, count=len(data))


@router.get("/slugs")
def list_character_slugs(catalog: CatalogDep) -> list[str]:
    return catalog.get_character_slugs()


@router.get("/{slug}", response_model=CharacterDetailPublic)
def get_character(slug: str, catalog: CatalogDep) -> Any:
    """Character detail; falls back to summary data when the detail page is unavailable."""
    summary = catalog.get_character_by_slug(slug)
    if summary is None:
        raise HTTPException(status_code=404, detail="Character not found")
    detail = catalog.get_character_detail_by_slug(slug)
    loaded = detail is not None
    if detail is None:
        detail = CharacterDetail(**summary.model_dump())

    skills = [
        SkillPublic(
            name=s.name,
            type=s.type,
            slot=s.slot,
            cooldown_label=format_cooldown(s.cooldown),
            description=parse_rich_text(getattr(s, "description_raw", None)),
        )
        for s in detail.display_skills
    ]
    return CharacterDetailPublic(
        character=detail,
        detail_loaded=loaded,
        icons=get_character_icons(detail),
        skills=skills,
        backstory=detail.backstory or "",
        basic_attack=parse_rich_text(detail.basic_attack_raw),
        harmony_cubes=parse_rich_text(detail.harmony_cubes_raw),
        review=parse_rich_text(detail.review_raw),
    )


@router.get("/{slug}/reviews", response_model=ReviewsPublic)
def list_reviews(slug: str, session: SessionDep) -> Any:
    """Reviews for a character, newest first, with the average rating."""
    average, count = session.exec(
        select(func.avg(Review.rating), func.count()).where(Review.character_slug == slug)
    ).one()
    reviews = session.exec(
        select(Review)
        .where(Review.character_slug == slug)
        .order_by(col(Review.created_at).desc(), col(Review.id).desc())
    ).all()
    return ReviewsPublic(
        data=reviews,
        count=count or 0,
        average=float(average) if average else 0.0,
    )


@router.post("/{slug}/reviews", response_model=ReviewPublic)
def create_review(
    *,
    slug: str,
    session: SessionDep,
    catalog: CatalogDep,
    review_in: ReviewCreate,
) -> Any:
    """Post a star rating (1-5) with a short text review."""
    summary = catalog.get_character_by_slug(slug)
    if summary is None:
        raise HTTPException(status_code=404, detail="Character not found")
    # reviews.character_slug references characters.slug
    if session.get(Character, slug) is None:
        session.add(character_row(summary))
    review = Review.model_validate(review_in, update={"character_slug": slug})
    session.add(review)
    session.commit()
    session.refresh(review)
    return review
