"""Tests for text helpers (formatting.py)."""
from datetime import datetime, timedelta, timezone

import orjson
import pytest

from nikkedex import parse_rich_text, time_ago
from nikkedex.formatting import format_cooldown, review_preview

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _doc(*paragraphs: list[str]) -> str:
    return orjson.dumps({
        "nodeType": "document",
        "content": [
            {
                "nodeType": "paragraph",
                "content": [{"nodeType": "text", "value": v} for v in p],
            }
            for p in paragraphs
        ],
    }).decode()


class TestParseRichText:
    def test_paragraphs_joined(self) -> None:
        assert parse_rich_text(_doc(["Hello ", "world"], ["Second"])) == "Hello world\n\nSecond"

    def test_blank_paragraphs_skipped(self) -> None:
        assert parse_rich_text(_doc(["  "], ["Only"])) == "Only"

    def test_not_json_returned_raw(self) -> None:
        assert parse_rich_text("plain text") == "plain text"

    def test_empty(self) -> None:
        assert parse_rich_text(None) == ""
        assert parse_rich_text("") == ""


@pytest.mark.parametrize("delta, expected", [
    (timedelta(seconds=5), "just now"),
    (timedelta(minutes=3), "3m ago"),
    (timedelta(hours=5), "5h ago"),
    (timedelta(days=2), "2d ago"),
    (timedelta(days=65), "2mo ago"),
    (timedelta(days=800), "2y ago"),
])
def test_time_ago(delta: timedelta, expected: str) -> None:
    assert time_ago(NOW - delta, now=NOW) == expected


def test_time_ago_naive_treated_as_utc() -> None:
    assert time_ago(datetime(2025, 12, 31, 23, 0), now=NOW) == "1h ago"


def test_review_preview() -> None:
    assert review_preview("short") == "short"
    assert review_preview("x" * 300) == "x" * 240 + "…"


def test_format_cooldown() -> None:
    assert format_cooldown(None) == "Passive"
    assert format_cooldown(40.0) == "40s"
    assert format_cooldown(12.5) == "12.5s"
