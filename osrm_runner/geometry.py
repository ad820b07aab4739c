"""
Geometry helpers backing the point sampler.

Thin wrappers over :mod:`shapely` so the sampler only deals with four verbs:
bounding box, containment, union and random points inside a box. Regions come
either from ``west,south,east,north`` boxes or from GeoJSON files.
"""

from __future__ import annotations

import json
import random
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import List, Tuple

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import box, shape
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.prepared import prep

from osrm_runner.model import Point

BBox = Tuple[float, float, float, float]  # west, south, east, north

_POLYGONAL = {"Polygon", "MultiPolygon"}


class EmptyRegionError(ValueError):
    """Raised when no polygonal region is available to sample from."""


def bbox_polygon(bounds: Sequence[float]) -> BaseGeometry:
    """Return the rectangle for ``(west, south, east, north)``."""
    west, south, east, north = bounds
    return box(west, south, east, north)


def load_geojson(path: str | Path) -> List[BaseGeometry]:
    """Read every (multi)polygon from a GeoJSON geometry, feature or collection."""
    doc = json.loads(Path(path).read_text(encoding="utf-8"))
    match doc.get("type"):
        case "FeatureCollection":
            geometries = [f.get("geometry") for f in doc.get("features", [])]
        case "Feature":
            geometries = [doc.get("geometry")]
        case _:
            geometries = [doc]
    return [shape(g) for g in geometries if g and g.get("type") in _POLYGONAL]


def union_regions(regions: Iterable[BaseGeometry]) -> BaseGeometry:
    """Merge *regions* into one sampling polygon."""
    regions = list(regions)
    if not regions:
        raise EmptyRegionError("at least one bounding box or polygon is required")
    return unary_union(regions)


def bounding_box(polygon: BaseGeometry) -> BBox:
    west, south, east, north = polygon.bounds
    return west, south, east, north


def random_points_in_bbox(bbox: BBox, number: int, rng: random.Random) -> List[Point]:
    """Draw *number* points uniformly from *bbox*."""
    west, south, east, north = bbox
    return [Point(rng.uniform(west, east), rng.uniform(south, north)) for _ in range(number)]


def containment(polygon: BaseGeometry):
    """Return a ``point -> bool`` predicate; points on the boundary count as inside."""
    prepared = prep(polygon)
    return lambda pt: prepared.covers(ShapelyPoint(pt.lon, pt.lat))
