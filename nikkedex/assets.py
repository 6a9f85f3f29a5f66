"""Static icon paths for element, weapon, burst and role badges."""
from typing import Optional

from nikkedex.constants import BURST_MAP, ELEMENT_MAP, RARITY_COLOR, ROLE_COLORS, WEAPON_MAP
from nikkedex.models import CharacterSummary


def normalize_role(role: str) -> Optional[str]:
    lower = role.lower()
    if lower == "attacker":
        return "attacker"
    if lower in ("defender", "defencer"):
        return "defencer"
    if lower == "supporter":
        return "supporter"
    return None


def get_element_icon_path(element: str) -> Optional[str]:
    filename = ELEMENT_MAP.get(element)
    return f"/assets/code/{filename}.png" if filename else None


def get_weapon_icon_path(weapon: str) -> Optional[str]:
    filename = WEAPON_MAP.get(weapon)
    return f"/assets/weapon/{filename}.png" if filename else None


def get_burst_icon_path(burst_type: str) -> Optional[str]:
    filename = BURST_MAP.get(burst_type)
    return f"/assets/burst/{filename}.png" if filename else None


def get_role_icon_path(role: str, rarity: str) -> Optional[str]:
    """Role badge in the rarity's colour, or the role's first colour if that one is missing."""
    normalized = normalize_role(role)
    if not normalized:
        return None
    color = RARITY_COLOR.get(rarity)
    if not color:
        return None
    available = ROLE_COLORS[normalized]
    final_color = color if color in available else available[0]
    return f"/assets/job/{normalized}--{final_color}.png"


def get_character_icons(character: CharacterSummary) -> dict[str, Optional[str]]:
    return {
        "element": get_element_icon_path(character.element),
        "weapon":  get_weapon_icon_path(character.weapon),
        "burst":   get_burst_icon_path(character.burst_type),
        "role":    get_role_icon_path(character.role, character.rarity),
    }
