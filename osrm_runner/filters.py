"""
Response post‑processing: key stripping and jq filter evaluation.

Routing responses carry encoded polylines and hints that are bulky and may
contain shell‑hostile characters; they are dropped before any filter runs.
A failing filter never fails the query, its slot gets an ``invalid filter``
message instead.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from typing import Any, List

import jq

STRIPPED_KEYS = frozenset({"geometry", "waypoints", "hint"})


def strip_keys(doc: Any, keys: frozenset[str] = STRIPPED_KEYS) -> Any:
    """Return *doc* without any object member named in *keys*, at any depth."""
    if isinstance(doc, dict):
        return {k: strip_keys(v, keys) for k, v in doc.items() if k not in keys}
    if isinstance(doc, list):
        return [strip_keys(v, keys) for v in doc]
    return doc


def sanitize(body: str) -> str:
    """Parse *body*, strip unwanted keys and re‑serialize compactly.

    Raises :class:`json.JSONDecodeError` for a body that is not JSON.
    """
    return json.dumps(strip_keys(json.loads(body)), separators=(",", ":"))


def evaluate_filter(expression: str, text: str) -> str:
    """Run jq *expression* over JSON *text*; outputs are newline separated."""
    try:
        return jq.compile(expression).input_text(text).text()
    except ValueError as exc:
        return f"invalid filter {expression} {exc}"


async def apply_filters(filters: Sequence[str], text: str) -> List[str]:
    """Evaluate every filter concurrently, results in filter order."""
    return list(
        await asyncio.gather(*(asyncio.to_thread(evaluate_filter, f, text) for f in filters))
    )
