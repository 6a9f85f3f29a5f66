import os

# Tests run against a throwaway in-memory database; must be set before app import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"

from collections.abc import Generator  # noqa: E402

import httpx  # noqa: E402
import orjson  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, delete  # noqa: E402

from app.core.catalog import get_catalog  # noqa: E402
from app.core.db import engine, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Character, Review  # noqa: E402
from nikkedex import CharacterCatalog  # noqa: E402
from nikkedex.constants import CHARACTER_DETAIL_URL, CHARACTER_LIST_URL  # noqa: E402


def _image(src: str, width: int, height: int) -> dict:
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


def _node(slug: str, name: str, rarity: str = "SSR", role: str = "Attacker") -> dict:
    return {
        "id": f"id-{slug}",
        "name": name,
        "slug": slug,
        "rarity": rarity,
        "element": "Wind",
        "weapon": "Sniper Rifle",
        "class": role,
        "manufacturer": "Elysion",
        "squad": "Counters",
        "burstType": "3",
        "isLimited": None,
        "limitedEvent": None,
        "skills": [{"cooldown": 20, "type": "Active", "slot": "Skill 2", "name": "Aim"}],
        "smallImage": _image(f"/static/{slug}_s.webp", 74, 74),
        "cardImage": _image(f"/static/{slug}_c.webp", 150, 300),
    }


ROSTER_NODES = [
    _node("rapi-red-hood", "Rapi: Red Hood"),
    _node("anne", "Anne: Miracle Fairy", rarity="SR", role="Supporter"),
    _node("crown", "Crown", role="Defender"),
]

DETAILS = {
    "anne": {
        "backstory": {"backstory": "A fairy."},
        "cv": {"kr": None, "jpn": None, "en": "Voice"},
        "weaponName": "Sparkle",
        "ammoCapacity": 6,
        "reloadTime": 2.0,
        "controlMode": "Charge",
        "basicAttack": {"raw": "not json"},
        "skills": [
            {
                "name": "Heal", "slot": "Burst", "type": "Active", "cooldown": 40,
                "descriptionLevel10": {"raw": None},
            },
        ],
        "fullImage": _image("/static/anne_f.webp", 500, 800),
        "releaseDate": "2023-12-21",
        "specialities": ["Healer"],
    },
}


def roster_handler(request: httpx.Request) -> httpx.Response:
    url = str(request.url)
    if url == CHARACTER_LIST_URL:
        payload = {"data": {"allContentfulNikkeCharacter": {"nodes": ROSTER_NODES}}}
        return httpx.Response(200, content=orjson.dumps(payload))
    if url.startswith(CHARACTER_DETAIL_URL):
        slug = url[len(CHARACTER_DETAIL_URL):].split("/")[0]
        if slug in DETAILS:
            payload = {"result": {"data": {"currentUnit": {"nodes": [DETAILS[slug]]}}}}
            return httpx.Response(200, content=orjson.dumps(payload))
    return httpx.Response(404)


@pytest.fixture(scope="session", autouse=True)
def db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        init_db(session)
        yield session
        session.execute(delete(Review))
        session.execute(delete(Character))
        session.commit()


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def override_catalog() -> Generator[CharacterCatalog, None, None]:
    """Override CatalogDep with a catalog served from canned page-data."""
    catalog = CharacterCatalog(transport=httpx.MockTransport(roster_handler))
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield catalog
    app.dependency_overrides.pop(get_catalog, None)
    catalog.close()


@pytest.fixture(scope="session")
def roster_nodes() -> list[dict]:
    """Raw roster nodes as served by the canned catalog."""
    return ROSTER_NODES


@pytest.fixture
def roster_transport() -> httpx.MockTransport:
    return httpx.MockTransport(roster_handler)


@pytest.fixture
def escaped_slug_catalog() -> Generator[CharacterCatalog, None, None]:
    """Override CatalogDep with slugs that need percent-encoding in a link."""
    nodes = [_node("a,b", "Comma"), _node("x%41", "Percent"), ROSTER_NODES[1]]

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == CHARACTER_LIST_URL:
            payload = {"data": {"allContentfulNikkeCharacter": {"nodes": nodes}}}
            return httpx.Response(200, content=orjson.dumps(payload))
        return httpx.Response(404)

    catalog = CharacterCatalog(transport=httpx.MockTransport(handler))
    previous = app.dependency_overrides.get(get_catalog)
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield catalog
    if previous is None:
        app.dependency_overrides.pop(get_catalog, None)
    else:
        app.dependency_overrides[get_catalog] = previous
    catalog.close()
