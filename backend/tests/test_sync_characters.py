"""Tests for the one-shot catalog sync job (app/sync_characters.py).

The remote side is the canned roster from conftest, served via
httpx.MockTransport; the database is the shared in-memory SQLite.
"""
from collections.abc import Generator

import httpx
import pytest
from sqlmodel import Session, delete, select

from app.models import Character, Review
from app.sync_characters import build_character_row, main, sync_characters
from nikkedex import CatalogError


@pytest.fixture(autouse=True)
def empty_tables(db: Session) -> None:
    db.execute(delete(Review))
    db.execute(delete(Character))
    db.commit()


@pytest.fixture
def http_client(roster_transport: httpx.MockTransport) -> Generator[httpx.Client, None, None]:
    with httpx.Client(transport=roster_transport) as c:
        yield c


def test_inserts_all_new(db: Session, http_client: httpx.Client) -> None:
    assert sync_characters(db, http_client, concurrency=2) == 3
    slugs = set(db.exec(select(Character.slug)).all())
    assert slugs == {"rapi-red-hood", "anne", "crown"}


def test_detail_fields_stored(db: Session, http_client: httpx.Client) -> None:
    sync_characters(db, http_client)
    anne = db.get(Character, "anne")
    assert anne.weapon_name == "Sparkle"
    assert anne.full_image_url == "https://www.prydwen.gg/static/anne_f.webp"
    assert anne.cv == {"kr": None, "jpn": None, "en": "Voice"}
    assert anne.skills_with_detail[0]["name"] == "Heal"
    assert anne.specialities == ["Healer"]

    crown = db.get(Character, "crown")
    assert crown.role == "Defender"
    assert crown.full_image_url is None
    assert crown.skills_with_detail is None
    assert crown.skills[0]["name"] == "Aim"


def test_second_run_is_noop(db: Session, http_client: httpx.Client) -> None:
    sync_characters(db, http_client)
    assert sync_characters(db, http_client) == 0


def test_existing_rows_untouched(db: Session, http_client: httpx.Client,
                                 roster_nodes: list[dict]) -> None:
    row = build_character_row(roster_nodes[0], None)
    row.name = "Renamed Locally"
    db.add(row)
    db.commit()

    assert sync_characters(db, http_client) == 2
    db.expire_all()
    assert db.get(Character, "rapi-red-hood").name == "Renamed Locally"


def test_main_reports_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*args, **kwargs):
        raise CatalogError("Failed to load character data: 500")

    monkeypatch.setattr("app.sync_characters.fetch_character_list", fail)
    assert main() == 1


def test_main_reports_malformed_node(monkeypatch: pytest.MonkeyPatch, db: Session) -> None:
    monkeypatch.setattr("app.sync_characters.fetch_character_list",
                        lambda *args, **kwargs: [{"slug": "broken", "name": "No Id"}])
    monkeypatch.setattr("app.sync_characters.fetch_all_details", lambda *args, **kwargs: {})
    assert main() == 1
    assert db.get(Character, "broken") is None
