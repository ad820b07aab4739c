"""
Query construction from a ``{}`` path template and a flat list of points.

Each query consumes the next ``coordinates_number`` points. Placeholders are
filled left to right by popping the chunk from its end, so the first ``{}``
receives the last point of the chunk.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import List

from osrm_runner.model import Point, QueryDescriptor, Server

PLACEHOLDER = re.compile(r"\{\}")


class TemplateError(ValueError):
    """Path template cannot produce queries."""


def count_placeholders(template: str) -> int:
    return len(PLACEHOLDER.findall(template))


def fill_template(template: str, chunk: Sequence[Point]) -> str:
    """Substitute every placeholder in *template* with points popped from *chunk*."""
    stack = list(chunk)
    return PLACEHOLDER.sub(lambda _m: str(stack.pop()), template)


def generate_queries(
    server: Server,
    template: str,
    points: Sequence[Point],
    coordinates_number: int,
) -> List[QueryDescriptor]:
    """Build one :class:`QueryDescriptor` per full chunk of *points*."""
    if coordinates_number <= 0:
        raise TemplateError(f"path template {template!r} has no {{}} placeholders")

    usable = len(points) - len(points) % coordinates_number
    return [
        QueryDescriptor(
            host=server.hostname,
            port=server.port,
            path=fill_template(template, points[start:start + coordinates_number]),
        )
        for start in range(0, usable, coordinates_number)
    ]


def coordinates_per_query(template: str) -> int:
    """Placeholder count of *template*; a template without any is rejected."""
    count = count_placeholders(template)
    if count == 0:
        raise TemplateError(f"path template {template!r} has no {{}} placeholders")
    return count
