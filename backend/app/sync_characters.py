"""One-shot catalog sync: copy new prydwen characters into the `characters` table.

Characters already in the database are left untouched. Run with
`python -m app.sync_characters`.
"""
import logging
import sys
import time

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.config import settings
from app.core.db import engine, init_db
from app.core.logging import setup_logging
from app.models import Character
from nikkedex import (
    CatalogError,
    CharacterSummary,
    fetch_all_details,
    fetch_character_list,
)
from nikkedex.constants import PRYDWEN_BASE_URL
from nikkedex.data import merge_detail, parse_character_node

logger = logging.getLogger(__name__)


def character_row(summary: CharacterSummary) -> Character:
    """Row holding only the roster-list fields; detail columns stay empty."""
    return Character(
        slug=summary.slug,
        external_id=summary.id,
        name=summary.name,
        rarity=summary.rarity,
        element=summary.element,
        weapon=summary.weapon,
        role=summary.role,
        manufacturer=summary.manufacturer,
        squad=summary.squad,
        burst_type=summary.burst_type,
        is_limited=summary.is_limited,
        limited_event=summary.limited_event,
        small_image_url=summary.small_image_url,
        card_image_url=summary.card_image_url,
        small_image_width=summary.small_image_width,
        small_image_height=summary.small_image_height,
        card_image_width=summary.card_image_width,
        card_image_height=summary.card_image_height,
        skills=[s.model_dump() for s in summary.skills],
    )


def build_character_row(node: dict, detail: dict | None,
                        base_url: str = PRYDWEN_BASE_URL) -> Character:
    """Flatten a roster node (and its detail page, if fetched) into a row."""
    summary = parse_character_node(node, base_url)
    row = character_row(summary)
    if detail is None:
        return row

    full = merge_detail(summary, detail, base_url)
    row.full_image_url = full.full_image_url or None
    row.full_image_width = full.full_image_width
    row.full_image_height = full.full_image_height
    row.release_date = full.release_date
    row.weapon_name = full.weapon_name
    row.ammo_capacity = full.ammo_capacity
    row.reload_time = full.reload_time
    row.control_mode = full.control_mode
    row.backstory = full.backstory
    row.cv = full.cv.model_dump() if detail.get("cv") else None
    row.basic_attack_raw = full.basic_attack_raw
    row.harmony_cubes_raw = full.harmony_cubes_raw
    row.skills_with_detail = (
        [s.model_dump() for s in full.skills_with_detail] if detail.get("skills") else None
    )
    row.specialities = full.specialities
    return row


def fetch_existing_slugs(session: Session) -> set[str]:
    return set(session.exec(select(Character.slug)).all())


def insert_new_characters(session: Session, nodes: list[dict],
                          details: dict[str, dict],
                          base_url: str = PRYDWEN_BASE_URL) -> int:
    """Insert rows for `nodes`, skipping any slug that already exists."""
    logger.info("Inserting %d new characters...", len(nodes))
    inserted = 0
    for node in nodes:
        if session.get(Character, node["slug"]) is not None:
            continue
        session.add(build_character_row(node, details.get(node["slug"]), base_url))
        inserted += 1
    session.commit()
    logger.info("  Inserted %d new characters", inserted)
    return inserted


def sync_characters(session: Session, client: httpx.Client,
                    concurrency: int = settings.SYNC_CONCURRENCY) -> int:
    """Fetch the roster and insert characters not yet stored. Returns rows inserted."""
    logger.info("Fetching character list from prydwen...")
    nodes = fetch_character_list(client, settings.CHARACTER_LIST_URL)
    logger.info("  Found %d characters", len(nodes))

    existing = fetch_existing_slugs(session)
    logger.info("  %d characters already in DB", len(existing))

    new_nodes = [n for n in nodes if n["slug"] not in existing]
    logger.info("  %d new characters to insert (%d skipped)",
                len(new_nodes), len(nodes) - len(new_nodes))
    if not new_nodes:
        logger.info("Nothing to do, all characters already synced.")
        return 0

    details = fetch_all_details(
        client,
        [n["slug"] for n in new_nodes],
        detail_url=settings.CHARACTER_DETAIL_URL,
        concurrency=concurrency,
    )
    return insert_new_characters(session, new_nodes, details, settings.PRYDWEN_BASE_URL)


def main() -> int:
    setup_logging(settings.LOG_LEVEL)
    start = time.perf_counter()
    try:
        with httpx.Client(timeout=settings.HTTP_TIMEOUT) as client, Session(engine) as session:
            init_db(session)
            sync_characters(session, client)
    except (CatalogError, SQLAlchemyError, KeyError, TypeError, ValueError) as e:
        logger.error("Sync failed: %s", e)
        return 1
    logger.info("Done in %.1fs", time.perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
