"""
Command‑line interface (CLI) for the OSRM query runner.

Example – 100 driving routes over Berlin
----------------------------------------
    osrm-runner -s localhost:5000 \
                -b 13.08,52.33,13.76,52.68 \
                -f '.routes[0].duration' -f '.routes[0].distance' \
                -n 100

Each completed query prints one line on stdout; diagnostics go to stderr.
"""

from __future__ import annotations

import asyncio
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

import typer

from osrm_runner.config import RunConfig
from osrm_runner.formatter import format_result
from osrm_runner.model import QueryResult
from osrm_runner.queries import coordinates_per_query, generate_queries
from osrm_runner.runner import run_queries
from osrm_runner.sampler import SamplingExhausted, generate_points

log = logging.getLogger("osrm_runner")

# Typer application instance
app = typer.Typer(
    add_completion=False,
    help="Run OSRM queries and collect results.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _emit(result: QueryResult) -> None:
    typer.echo(format_result(result))


@app.command()
def run(
    server: str = typer.Option(
        "localhost:5000", "--server", "-s", envvar="OSRM_RUNNER_SERVER",
        help="OSRM routing server, hostname[:port]",
    ),
    path: str = typer.Option(
        "/route/v1/driving/{};{}", "--path", "-p", envvar="OSRM_RUNNER_PATH",
        help="OSRM query path with {} coordinate placeholders",
    ),
    filters: Optional[List[str]] = typer.Option(
        None, "--filter", "-f", envvar="OSRM_RUNNER_FILTER",
        help='jq filter, repeatable (default ".routes[].legs[].weight")',
    ),
    bounding_boxes: Optional[List[str]] = typer.Option(
        None, "--bounding-box", "-b", envvar="OSRM_RUNNER_BOUNDING_BOX",
        help='west,south,east,north, repeatable (default "5.86442,47.2654,15.0508,55.1478")',
    ),
    geojson: Optional[List[Path]] = typer.Option(
        None, "--geojson", "-g", exists=True, dir_okay=False, envvar="OSRM_RUNNER_GEOJSON",
        help="GeoJSON file whose polygons are added to the query area",
    ),
    number: int = typer.Option(
        10, "--number", "-n", envvar="OSRM_RUNNER_NUMBER", help="Number of queries"
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", envvar="OSRM_RUNNER_CONCURRENCY",
        help="Maximum requests in flight (default: all at once)",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", envvar="OSRM_RUNNER_TIMEOUT",
        help="Per-request timeout in seconds (default: none)",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", envvar="OSRM_RUNNER_SEED", help="Random seed for reproducible points"
    ),
    max_rounds: int = typer.Option(
        1000, "--max-rounds", envvar="OSRM_RUNNER_MAX_ROUNDS", help="Sampling batches before giving up"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", envvar="OSRM_RUNNER_VERBOSE", help="Debug logging"
    ),
) -> None:
    """Sample query points, fire one request per query and print the results."""
    _setup_logging(verbose)

    options = {
        "server": server,
        "path": path,
        "filters": filters,
        "bounding_boxes": bounding_boxes,
        "geojson": geojson,
        "number": number,
        "concurrency": concurrency,
        "timeout": timeout,
        "seed": seed,
        "max_rounds": max_rounds,
    }
    options = {k: v for k, v in options.items() if v not in (None, [], ())}
    if geojson and not bounding_boxes:
        # explicit GeoJSON regions replace the default box
        options["bounding_boxes"] = []

    try:
        cfg = RunConfig(**options)
        coordinates_number = coordinates_per_query(cfg.path)
        polygon = cfg.region()
    except (ValueError, OSError) as exc:
        log.error("invalid configuration: %s", exc)
        raise typer.Exit(code=2)

    try:
        points = generate_points(
            polygon,
            coordinates_number * cfg.number,
            rng=random.Random(cfg.seed),
            max_rounds=cfg.max_rounds,
        )
    except SamplingExhausted as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1)

    queries = generate_queries(cfg.server, cfg.path, points, coordinates_number)
    log.info("sending %d queries to %s", len(queries), cfg.server)

    started = time.perf_counter()
    done = asyncio.run(
        run_queries(
            queries,
            cfg.filters,
            _emit,
            concurrency=cfg.concurrency,
            timeout=cfg.timeout,
        )
    )
    log.info("%d queries completed in %.2f s", done, time.perf_counter() - started)


# ``python -m osrm_runner.cli`` entry‑point

def main() -> None:  # pragma: no cover
    """Entry‑point for the ``osrm-runner`` console script."""
    app()


if __name__ == "__main__":  # called via ``python cli.py``
    app()
