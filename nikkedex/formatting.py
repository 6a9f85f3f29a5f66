"""Text helpers for character pages and review listings."""
from datetime import datetime, timezone
from typing import Any, Optional

import orjson


def _node_text(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    if node.get("nodeType") == "text" and isinstance(node.get("value"), str):
        return node["value"]
    content = node.get("content")
    if isinstance(content, list):
        return "".join(_node_text(child) for child in content)
    return ""


def parse_rich_text(raw: Optional[str]) -> str:
    """Flatten a Contentful rich-text document into blank-line separated paragraphs.

    Input that is not JSON is returned untouched.
    """
    if not raw:
        return ""
    try:
        doc = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw
    blocks = doc.get("content") if isinstance(doc, dict) else None
    lines = [text for text in (_node_text(b).strip() for b in blocks or []) if text]
    return "\n\n".join(lines)


def time_ago(when: datetime, now: Optional[datetime] = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    seconds = int((now - when).total_seconds())

    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    months = days // 30
    if months < 12:
        return f"{months}mo ago"
    return f"{months // 12}y ago"


def review_preview(content: str, limit: int = 240) -> str:
    return f"{content[:limit]}…" if len(content) > limit else content


def format_cooldown(cooldown: Optional[float]) -> str:
    if cooldown is None:
        return "Passive"
    return f"{cooldown:g}s"
