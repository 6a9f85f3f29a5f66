"""Shareable tier-list board: no auth, no storage.

The board state lives in the `s`..`e` query parameters; every request decodes
it against the current roster, and moves return the re-encoded parameters for
the client to push into its URL.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter

from app.api.deps import CatalogDep
from app.models import MoveRequest, MoveResult, TierBoardPublic, TierRowPublic
from nikkedex import (
    TIERS,
    CharacterCatalog,
    TierListCharacter,
    TierQuery,
    apply_move,
    decode,
    encode,
    filter_characters,
    parse_drag_payload,
    sort_characters,
)
from nikkedex.tierlist import to_query_string, unassigned

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tier-list", tags=["tier-list"])


def _palette(catalog: CharacterCatalog) -> list[TierListCharacter]:
    """Board cards for every roster character, sorted by name."""
    return sort_characters(
        [TierListCharacter.from_summary(c) for c in catalog.get_characters()]
    )


def _share_path(query: TierQuery) -> str:
    qs = to_query_string(query)
    return f"/tier-list?{qs}" if qs else "/tier-list"


@router.get("/tiers")
def get_tiers() -> list[dict[str, Any]]:
    """Tier rows in rank order: key, title, color."""
    return [t.model_dump() for t in TIERS]


@router.get("/", response_model=TierBoardPublic)
def get_board(
    catalog: CatalogDep,
    s: Optional[str] = None,
    a: Optional[str] = None,
    b: Optional[str] = None,
    c: Optional[str] = None,
    d: Optional[str] = None,
    e: Optional[str] = None,
    q: Optional[str] = None,
) -> Any:
    """Decode the board from its query parameters; `q` filters the unassigned pool."""
    palette = _palette(catalog)
    lookup = {card.slug: card for card in palette}
    state = decode({"s": s, "a": a, "b": b, "c": c, "d": d, "e": e}, set(lookup))
    pool = filter_characters(unassigned(palette, state), q)
    query = encode(state)
    return TierBoardPublic(
        tiers=[
            TierRowPublic(
                key=t.key,
                title=t.title,
                color=t.color,
                characters=[lookup[slug] for slug in state[t.key]],
            )
            for t in TIERS
        ],
        pool=pool,
        pool_count=len(pool),
        query=query,
        share_path=_share_path(query),
    )


@router.post("/move", response_model=MoveResult)
def move_character(body: MoveRequest, catalog: CatalogDep) -> Any:
    """Apply one drop; unusable payloads or zones leave the board unchanged."""
    valid_slugs = set(catalog.get_character_slugs())
    state = decode(body.query, valid_slugs)
    payload = parse_drag_payload(body.data)

    next_query = None
    if payload is not None and payload.slug in valid_slugs:
        next_query = apply_move(state, payload, body.destination)
    if next_query is None:
        logger.debug("Ignored drop onto %r (payload=%r)", body.destination, payload)
        query = encode(state)
        return MoveResult(changed=False, query=query, share_path=_share_path(query))
    return MoveResult(changed=True, query=next_query, share_path=_share_path(next_query))
