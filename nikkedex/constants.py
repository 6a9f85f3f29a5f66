"""Roster constants; no mutable state."""

# Remote catalog (prydwen.gg Gatsby page-data)
PRYDWEN_BASE_URL     = "https://www.prydwen.gg"
CHARACTER_LIST_URL   = "https://www.prydwen.gg/page-data/sq/d/2474920082.json"
CHARACTER_DETAIL_URL = "https://www.prydwen.gg/page-data/nikke/characters/"

# Tier keys in rank order (S highest)
TIER_KEYS: tuple[str, ...] = ("s", "a", "b", "c", "d", "e")

# Drop zone for characters not placed in any tier
POOL_ZONE = "pool"

# Drag data keys set on drag start, read on drop
DRAG_JSON_KEY = "application/json"
DRAG_TEXT_KEY = "text/plain"

# Joins a tier's slugs for equality checks; never valid inside a slug
STATE_SEPARATOR = "|"

# Review constraints
RATING_MIN = 1
RATING_MAX = 5
REVIEW_CONTENT_MAX = 1000
REVIEW_NICKNAME_MAX = 50
RECENT_REVIEWS_DEFAULT = 50
RECENT_REVIEWS_MAX = 100

# Asset icon lookups (game value -> asset filename)
ELEMENT_MAP: dict[str, str] = {
    "Electric": "electronic",
    "Fire":     "fire",
    "Iron":     "iron",
    "Water":    "water",
    "Wind":     "wind",
}

WEAPON_MAP: dict[str, str] = {
    "Assault Rifle":   "assault_rifle",
    "Minigun":         "machine_gun",
    "Rocket Launcher": "rocket_launcher",
    "Shotgun":         "shot_gun",
    "SMG":             "sub_machine_gun",
    "Sniper Rifle":    "sniper_rifle",
}

BURST_MAP: dict[str, str] = {
    "1":   "1",
    "2":   "2",
    "3":   "3",
    "All": "p",
}

RARITY_COLOR: dict[str, str] = {
    "SSR": "yellow",
    "SR":  "purple",
    "R":   "blue",
}

# Role -> colours that exist in the asset set (first is the fallback)
ROLE_COLORS: dict[str, list[str]] = {
    "attacker":  ["yellow"],
    "defencer":  ["yellow", "purple", "blue"],
    "supporter": ["yellow", "blue"],
}
