"""Tier-list state codec.

The board lives entirely in six URL query parameters (one per tier key), so a
tier list is shared by copying its URL. Every request decodes the query into a
fresh TierState; every move rebuilds the whole state and re-encodes it.

All functions here are pure and never raise on untrusted input: unknown slugs,
malformed percent-escapes, bad drop zones and garbled drag payloads degrade to
"fewer characters placed" or "no move".
"""
from collections.abc import Mapping
from typing import Optional
from urllib.parse import quote, unquote, urlencode

import orjson

from nikkedex.constants import (
    DRAG_JSON_KEY, DRAG_TEXT_KEY, POOL_ZONE, STATE_SEPARATOR, TIER_KEYS,
)
from nikkedex.models import DragPayload, TierListCharacter, TierQuery, TierState

# Characters left unescaped, matching browser encodeURIComponent
_URI_COMPONENT_SAFE = "!~*'()"


def empty_state() -> TierState:
    return {key: [] for key in TIER_KEYS}


# ---------------------------------------------------------------------------
# Query <-> state
# ---------------------------------------------------------------------------

def _decode_piece(piece: str) -> str:
    try:
        return unquote(piece, errors="strict")
    except UnicodeDecodeError:
        return piece


def _split_query_slugs(raw: Optional[str], valid_slugs: set[str]) -> list[str]:
    if not raw:
        return []
    slugs = (_decode_piece(piece).strip() for piece in raw.split(","))
    return [slug for slug in slugs if slug and slug in valid_slugs]


def decode(query: Mapping[str, Optional[str]], valid_slugs: set[str]) -> TierState:
    """Parse the six tier parameters into a TierState.

    Tiers are scanned in rank order and the first occurrence of a slug wins,
    so a slug listed twice (in one tier or across tiers) keeps only its
    highest-ranked, earliest position.
    """
    seen: set[str] = set()
    state = empty_state()
    for key in TIER_KEYS:
        for slug in _split_query_slugs(query.get(key), valid_slugs):
            if slug in seen:
                continue
            state[key].append(slug)
            seen.add(slug)
    return state


def encode(state: Mapping[str, list[str]]) -> TierQuery:
    """Serialize a TierState; empty tiers become None so the URL omits them."""
    return {
        key: ",".join(quote(slug, safe=_URI_COMPONENT_SAFE) for slug in state.get(key, []))
        or None
        for key in TIER_KEYS
    }


def to_query_string(query: Mapping[str, Optional[str]]) -> str:
    """Render the encoded query for a share link, tier keys in rank order.

    Values are already percent-encoded slugs and get escaped again, so a
    server that unquotes the query string once hands decode the encoded form.
    The comma separators stay literal.
    """
    pairs = [(key, query[key]) for key in TIER_KEYS if query.get(key)]
    return urlencode(pairs, safe="," + _URI_COMPONENT_SAFE)


def is_equal_state(left: Mapping[str, list[str]], right: Mapping[str, list[str]]) -> bool:
    return all(
        STATE_SEPARATOR.join(left.get(key, [])) == STATE_SEPARATOR.join(right.get(key, []))
        for key in TIER_KEYS
    )


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------

def is_valid_drop_zone(value: object) -> bool:
    return value == POOL_ZONE or value in TIER_KEYS


def move(state: TierState, payload: DragPayload, destination: str) -> TierState:
    """Return the state after dropping payload.slug onto destination.

    The slug is removed from every tier regardless of payload.from_, which
    repairs stale origin metadata. Dropping onto the origin tier returns
    `state` itself since a drop cannot reorder within a tier.
    """
    if not payload.slug:
        return state

    nxt = {
        key: [slug for slug in state.get(key, []) if slug != payload.slug]
        for key in TIER_KEYS
    }

    if destination == POOL_ZONE:
        return nxt

    if payload.from_ == destination or destination not in TIER_KEYS:
        return state

    nxt[destination] = [*nxt[destination], payload.slug]
    return nxt


def apply_move(state: TierState, payload: DragPayload, destination: str) -> Optional[TierQuery]:
    """Encoded query after the move, or None when nothing changed."""
    if not is_valid_drop_zone(destination):
        return None
    nxt = move(state, payload, destination)
    if is_equal_state(nxt, state):
        return None
    return encode(nxt)


def parse_drag_payload(data: Mapping[str, str]) -> Optional[DragPayload]:
    """Read a move descriptor from drag data.

    The structured JSON entry wins when it carries a string slug and a valid
    origin zone; otherwise the plain-text slug is used with origin "pool".
    """
    encoded = data.get(DRAG_JSON_KEY)
    if encoded:
        try:
            parsed = orjson.loads(encoded)
        except orjson.JSONDecodeError:
            parsed = None
        if (
            isinstance(parsed, dict)
            and isinstance(parsed.get("slug"), str)
            and is_valid_drop_zone(parsed.get("from"))
        ):
            return DragPayload(slug=parsed["slug"], from_=parsed["from"])

    fallback = (data.get(DRAG_TEXT_KEY) or "").strip()
    if not fallback:
        return None
    return DragPayload(slug=fallback, from_=POOL_ZONE)


# ---------------------------------------------------------------------------
# Board helpers
# ---------------------------------------------------------------------------

def assigned_slugs(state: Mapping[str, list[str]]) -> set[str]:
    result: set[str] = set()
    for key in TIER_KEYS:
        result.update(state.get(key, []))
    return result


def unassigned(characters: list[TierListCharacter],
               state: Mapping[str, list[str]]) -> list[TierListCharacter]:
    """Pool contents: characters not placed in any tier, input order kept."""
    placed = assigned_slugs(state)
    return [c for c in characters if c.slug not in placed]
