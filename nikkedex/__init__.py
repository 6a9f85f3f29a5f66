"""nikkedex: Nikke character roster, reviews and shareable tier lists."""

from nikkedex.data import (
    CatalogError,
    CharacterCatalog,
    fetch_all_details,
    fetch_character_detail,
    fetch_character_list,
    filter_characters,
    sort_characters,
)
from nikkedex.models import (
    TierConfig, TIERS, TIER_MAP,
    TierState, TierQuery, DragPayload,
    Skill, SkillDetail, VoiceCast,
    CharacterSummary, CharacterDetail, TierListCharacter,
)
from nikkedex.tierlist import (
    apply_move,
    decode,
    encode,
    is_equal_state,
    is_valid_drop_zone,
    move,
    parse_drag_payload,
)
from nikkedex.assets import get_character_icons
from nikkedex.formatting import parse_rich_text, time_ago

__all__ = [
    # Catalog
    "CatalogError", "CharacterCatalog",
    "fetch_all_details", "fetch_character_detail", "fetch_character_list",
    "filter_characters", "sort_characters",
    # Models
    "TierConfig", "TIERS", "TIER_MAP",
    "TierState", "TierQuery", "DragPayload",
    "Skill", "SkillDetail", "VoiceCast",
    "CharacterSummary", "CharacterDetail", "TierListCharacter",
    # Tier-list codec
    "apply_move", "decode", "encode", "is_equal_state",
    "is_valid_drop_zone", "move", "parse_drag_payload",
    # Presentation
    "get_character_icons", "parse_rich_text", "time_ago",
]
