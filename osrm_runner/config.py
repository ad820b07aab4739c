"""
Run configuration for the OSRM query runner.

Behaviour
~~~~~~~~~
* ``server`` accepts ``hostname[:port]``; port defaults to 80 and an empty
  hostname to ``localhost``.
* ``bounding_boxes`` accepts free‑form strings; the first four numbers are read
  as ``west,south,east,north``.
* Defaults reproduce a driving‑route run over Germany.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from shapely.geometry.base import BaseGeometry

from osrm_runner.geometry import bbox_polygon, load_geojson, union_regions
from osrm_runner.model import Server

DEFAULT_SERVER = "localhost:5000"
DEFAULT_PATH = "/route/v1/driving/{};{}"
DEFAULT_FILTERS = [".routes[].legs[].weight"]
DEFAULT_BOUNDING_BOX = "5.86442,47.2654,15.0508,55.1478"

_NUMBER = re.compile(r"[+-]?\d+(?:\.\d*)?|[+-]?\.\d+")


# Helper functions

def parse_server(value: str) -> Server:
    """Turn ``hostname[:port]`` into a :class:`Server`."""
    hostname, _, port = value.partition(":")
    try:
        return Server(hostname=hostname or "localhost", port=int(port) if port else 80)
    except ValueError:
        raise ValueError(f"invalid port in server {value!r}") from None


def parse_bounding_box(value: str) -> tuple[float, float, float, float]:
    """Extract ``(west, south, east, north)`` from the first four numbers in *value*."""
    numbers = [float(n) for n in _NUMBER.findall(value)]
    if len(numbers) < 4:
        raise ValueError(f"bounding box {value!r} needs west,south,east,north")
    west, south, east, north = numbers[:4]
    if west > east or south > north:
        raise ValueError(f"bounding box {value!r} is inverted")
    return west, south, east, north


# Model

class RunConfig(BaseModel):
    server: Server = Field(default_factory=lambda: parse_server(DEFAULT_SERVER))
    path: str = DEFAULT_PATH
    filters: List[str] = Field(default_factory=lambda: list(DEFAULT_FILTERS))
    bounding_boxes: List[tuple[float, float, float, float]] = Field(
        default_factory=lambda: [parse_bounding_box(DEFAULT_BOUNDING_BOX)]
    )
    geojson: List[Path] = []
    number: int = Field(10, ge=0, description="number of queries")
    concurrency: Optional[int] = Field(None, ge=1)
    timeout: Optional[float] = Field(None, gt=0)
    seed: Optional[int] = None
    max_rounds: int = Field(1000, ge=1)

    @field_validator("server", mode="before")
    @classmethod
    def _server(cls, v):
        return parse_server(v) if isinstance(v, str) else v

    @field_validator("bounding_boxes", mode="before")
    @classmethod
    def _boxes(cls, v):
        return [parse_bounding_box(b) if isinstance(b, str) else b for b in v]

    def region(self) -> BaseGeometry:
        """Union of every bounding box and GeoJSON polygon."""
        regions = [bbox_polygon(b) for b in self.bounding_boxes]
        for path in self.geojson:
            regions.extend(load_geojson(path))
        return union_regions(regions)
