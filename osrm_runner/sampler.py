"""
Rejection sampler producing points uniformly distributed inside a polygon.

Candidates are drawn from the polygon's bounding box in batches of the
requested size and kept only when the polygon covers them. Sampling stops once
enough points are accepted; the surplus of the last batch is discarded.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from shapely.geometry.base import BaseGeometry

from osrm_runner.geometry import bounding_box, containment, random_points_in_bbox
from osrm_runner.model import Point

log = logging.getLogger(__name__)

MAX_ROUNDS = 1000


class SamplingExhausted(RuntimeError):
    """The polygon fills too little of its bounding box for sampling to converge."""


def _bbox_area(bbox) -> float:
    west, south, east, north = bbox
    return (east - west) * (north - south)


def generate_points(
    polygon: BaseGeometry,
    number: int,
    *,
    rng: Optional[random.Random] = None,
    max_rounds: int = MAX_ROUNDS,
) -> List[Point]:
    """Return exactly *number* random points covered by *polygon*.

    Raises :class:`SamplingExhausted` straight away for a zero‑area polygon and
    after *max_rounds* batches if still short of points.
    """
    if number <= 0:
        return []

    rng = rng or random.Random()
    bbox = bounding_box(polygon)
    bbox_area = _bbox_area(bbox)
    if polygon.is_empty or polygon.area == 0 or bbox_area == 0:
        raise SamplingExhausted(f"cannot sample from a zero-area region (bbox={bbox})")

    inside = containment(polygon)
    points: List[Point] = []
    for round_no in range(1, max_rounds + 1):
        chunk = [pt for pt in random_points_in_bbox(bbox, number, rng) if inside(pt)]
        points.extend(chunk)
        log.debug("sampling round %d accepted %d/%d", round_no, len(chunk), number)
        if len(points) >= number:
            return points[:number]

    raise SamplingExhausted(
        f"only {len(points)} of {number} points accepted after {max_rounds} rounds "
        f"(region fills {polygon.area / bbox_area:.2e} of its bounding box)"
    )
