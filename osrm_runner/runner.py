"""
Concurrent request dispatch with per‑request phase timing.

* Every query gets its own :class:`RequestTiming`, fed by httpx trace events,
  so timings are anchored on the moment the socket is ready rather than on
  task scheduling.
* ``ttfb``  – socket ready → response headers received.
* ``total`` – socket ready → body fully read.
* Failures are reported as data (``QueryResult.error``); nothing escapes
  :func:`run_queries` for a single bad query.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import time
from collections.abc import Callable, Sequence
from typing import Optional

import httpx

from osrm_runner.filters import apply_filters, sanitize
from osrm_runner.model import ErrorKind, QueryDescriptor, QueryResult

log = logging.getLogger(__name__)

OnComplete = Callable[[QueryResult], None]


class RequestTiming:
    """Clock for one request, anchored on socket readiness."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self.dispatched = clock()
        self.socket_ready: Optional[float] = None
        self.first_byte: Optional[float] = None
        self.completed: Optional[float] = None

    async def trace(self, event_name: str, info: dict) -> None:
        """httpx ``trace`` extension hook."""
        if event_name == "connection.connect_tcp.complete":
            self.socket_ready = self._clock()
        elif event_name.endswith(".send_request_headers.started") and self.socket_ready is None:
            # pooled connection, no connect phase
            self.socket_ready = self._clock()
        elif event_name.endswith(".receive_response_headers.complete") and self.first_byte is None:
            self.first_byte = self._clock()

    def mark_first_byte(self) -> None:
        if self.first_byte is None:
            self.first_byte = self._clock()

    def mark_complete(self) -> None:
        self.completed = self._clock()

    def _since_ready(self, stamp: Optional[float]) -> Optional[float]:
        if stamp is None:
            return None
        anchor = self.socket_ready if self.socket_ready is not None else self.dispatched
        return (stamp - anchor) * 1000

    @property
    def ttfb(self) -> Optional[float]:
        return self._since_ready(self.first_byte)

    @property
    def total(self) -> Optional[float]:
        return self._since_ready(self.completed)


async def run_query(
    client: httpx.AsyncClient,
    query: QueryDescriptor,
    filters: Sequence[str],
) -> QueryResult:
    """Issue one GET for *query* and evaluate *filters* on a 200 response."""
    timing = RequestTiming()
    try:
        async with client.stream("GET", query.url, extensions={"trace": timing.trace}) as response:
            timing.mark_first_byte()
            if response.status_code != 200:
                return QueryResult(
                    path=query.path,
                    status=response.status_code,
                    ttfb=timing.ttfb,
                    error=ErrorKind.HTTP,
                )
            await response.aread()
            timing.mark_complete()
            body = response.text
    except httpx.RequestError as exc:
        log.warning("%s failed: %s", query.url, exc)
        return QueryResult(path=query.path, status=type(exc).__name__, error=ErrorKind.TRANSPORT)

    try:
        text = sanitize(body)
    except json.JSONDecodeError as exc:
        log.warning("%s returned invalid JSON: %s", query.url, exc)
        return QueryResult(
            path=query.path,
            status=response.status_code,
            ttfb=timing.ttfb,
            total=timing.total,
            error=ErrorKind.PARSE,
            detail=f"invalid JSON {exc}",
        )

    return QueryResult(
        path=query.path,
        status=response.status_code,
        ttfb=timing.ttfb,
        total=timing.total,
        values=await apply_filters(filters, text),
    )


async def run_queries(
    queries: Sequence[QueryDescriptor],
    filters: Sequence[str],
    on_complete: OnComplete,
    *,
    concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Fire every query and call *on_complete* as each one finishes.

    ``concurrency=None`` keeps all queries in flight at once; ``timeout=None``
    disables request deadlines. Returns once every query has completed.
    """
    limit = asyncio.Semaphore(concurrency) if concurrency else contextlib.nullcontext()
    limits = httpx.Limits(max_connections=concurrency, max_keepalive_connections=concurrency)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout), limits=limits, transport=transport
    ) as client:

        async def worker(query: QueryDescriptor) -> QueryResult:
            async with limit:
                log.debug("GET %s", query.url)
                result = await run_query(client, query, filters)
            on_complete(result)
            return result

        results = await asyncio.gather(*(worker(q) for q in queries))

    return len(results)
