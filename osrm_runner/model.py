"""
Core data‑model classes for the OSRM query runner.

Includes:
* **Point**, **Server**, **QueryDescriptor**, **QueryResult**
* **ErrorKind** enum tagging per‑query failures.
"""

from __future__ import annotations

from enum import Enum
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


class Point(NamedTuple):
    """Coordinate pair in ``lon, lat`` order."""

    lon: float
    lat: float

    def __str__(self) -> str:
        return f"{self.lon},{self.lat}"


# Enums

class ErrorKind(str, Enum):
    TRANSPORT = "transport"  # connection, protocol or decoding failure
    HTTP = "http"            # non-200 status
    PARSE = "parse"          # body is not JSON


# Core model classes

class Server(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str = "localhost"
    port: int = Field(80, ge=1, le=65535)

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


class QueryDescriptor(BaseModel):
    """Fully resolved request target."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    path: str

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"


class QueryResult(BaseModel):
    """Outcome of one request, timings in milliseconds."""

    path: str
    status: int | str
    ttfb: Optional[float] = None
    total: Optional[float] = None
    values: List[str] = []
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
