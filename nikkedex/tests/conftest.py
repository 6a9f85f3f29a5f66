"""Shared fixtures for nikkedex unit tests.

The remote roster is served by an httpx.MockTransport so the catalog runs its
real fetch + parse path without network access. Payloads mirror the shape of
prydwen.gg page-data.
"""
from collections.abc import Generator

import httpx
import orjson
import pytest

from nikkedex import CharacterCatalog
from nikkedex.constants import CHARACTER_DETAIL_URL, CHARACTER_LIST_URL


def make_image(src: str, width: int = 120, height: int = 120) -> dict:
    return {
        "localFile": {
            "childImageSharp": {
                "gatsbyImageData": {
                    "images": {"fallback": {"src": src}},
                    "width": width,
                    "height": height,
                }
            }
        }
    }


def make_node(slug: str, name: str, **overrides) -> dict:
    node = {
        "id": f"id-{slug}",
        "name": name,
        "slug": slug,
        "rarity": "SSR",
        "element": "Fire",
        "weapon": "Assault Rifle",
        "class": "Attacker",
        "manufacturer": "Pilgrim",
        "squad": "Goddess",
        "burstType": "3",
        "isLimited": False,
        "limitedEvent": None,
        "skills": [
            {"cooldown": None, "type": "Passive", "slot": "Skill 1", "name": "Hit"},
            {"cooldown": 40, "type": "Active", "slot": "Burst", "name": "Boom"},
        ],
        "smallImage": make_image(f"/static/{slug}_small.webp", 74, 74),
        "cardImage": make_image(f"/static/{slug}_card.webp", 150, 300),
    }
    node.update(overrides)
    return node


SAMPLE_NODES = [
    make_node("rapi-red-hood", "Rapi: Red Hood"),
    make_node("anne", "Anne: Miracle Fairy", rarity="SR", **{"class": "Supporter"}),
    make_node("crown", "Crown", element="Iron", **{"class": "Defender"}),
    make_node("liter", "Liter", burstType="1"),
]

SAMPLE_DETAIL = {
    "backstory": {"backstory": "Leader of Counters."},
    "cv": {"kr": "KR voice", "jpn": None, "en": "EN voice"},
    "weaponName": "Wolfsbane",
    "ammoCapacity": 60,
    "reloadTime": 1.5,
    "controlMode": "Basic",
    "basicAttack": {"raw": "basic"},
    "harmonyCubesInfo": {"raw": "cubes"},
    "review": {"raw": "review"},
    "skills": [
        {
            "unitId": "1", "skillId": "2", "name": "Hit", "slot": "Skill 1",
            "type": "Passive", "cooldown": None,
            "descriptionLevel10": {"raw": "Deals damage."},
            "skillTreasure": None, "phase": None,
        },
    ],
    "fullImage": make_image("/static/anne_full.webp", 600, 900),
    "releaseDate": "2023-05-04",
    "specialities": ["Healer"],
}


def roster_payload(nodes: list[dict]) -> bytes:
    return orjson.dumps({"data": {"allContentfulNikkeCharacter": {"nodes": nodes}}})


def detail_payload(unit: dict | None) -> bytes:
    nodes = [unit] if unit is not None else []
    return orjson.dumps({"result": {"data": {"currentUnit": {"nodes": nodes}}}})


class RosterServer:
    """Callable MockTransport handler; records request URLs."""

    def __init__(self, nodes: list[dict], details: dict[str, dict] | None = None,
                 list_status: int = 200):
        self.nodes = nodes
        self.details = details or {}
        self.list_status = list_status
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url == CHARACTER_LIST_URL:
            if self.list_status != 200:
                return httpx.Response(self.list_status)
            return httpx.Response(200, content=roster_payload(self.nodes))
        if url.startswith(CHARACTER_DETAIL_URL):
            slug = url[len(CHARACTER_DETAIL_URL):].split("/")[0]
            if slug not in self.details:
                return httpx.Response(404)
            return httpx.Response(200, content=detail_payload(self.details[slug]))
        return httpx.Response(404)


@pytest.fixture
def server() -> RosterServer:
    return RosterServer(SAMPLE_NODES, details={"anne": SAMPLE_DETAIL})


@pytest.fixture
def catalog(server: RosterServer) -> Generator[CharacterCatalog, None, None]:
    c = CharacterCatalog(transport=httpx.MockTransport(server))
    yield c
    c.close()


@pytest.fixture
def valid_slugs() -> set[str]:
    return {n["slug"] for n in SAMPLE_NODES} | {"x"}
