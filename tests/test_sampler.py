"""
Unit tests for the rejection sampler:

* exact point count and 100 % containment on a non‑convex union,
* reproducibility under a fixed seed,
* fast failure on degenerate regions and when the round cap is hit.
"""

import random

import pytest
from shapely.geometry import LineString, Point as ShapelyPoint

from osrm_runner import sampler
from osrm_runner.geometry import bbox_polygon, union_regions
from osrm_runner.model import Point
from osrm_runner.sampler import SamplingExhausted, generate_points

# L-shaped region: bottom strip plus left column
L_SHAPE = union_regions([bbox_polygon((0, 0, 3, 1)), bbox_polygon((0, 0, 1, 3))])


def test_exact_count_and_containment():
    points = generate_points(L_SHAPE, 500, rng=random.Random(1))
    assert len(points) == 500
    assert all(isinstance(p, Point) for p in points)
    assert all(L_SHAPE.covers(ShapelyPoint(p.lon, p.lat)) for p in points)


def test_seed_makes_sampling_reproducible():
    a = generate_points(L_SHAPE, 20, rng=random.Random(42))
    b = generate_points(L_SHAPE, 20, rng=random.Random(42))
    assert a == b


def test_zero_points():
    assert generate_points(L_SHAPE, 0) == []


def test_zero_area_region_fails_fast():
    with pytest.raises(SamplingExhausted):
        generate_points(bbox_polygon((5, 5, 5, 5)), 10)


def test_zero_area_line_fails_fast():
    with pytest.raises(SamplingExhausted):
        generate_points(LineString([(0, 0), (1, 1)]), 10)


def test_round_cap(monkeypatch):
    """No candidate ever lands inside ⇒ give up after ``max_rounds``."""
    calls = []

    def outside(bbox, number, rng):
        calls.append(number)
        return [Point(100.0, 100.0)] * number

    monkeypatch.setattr(sampler, "random_points_in_bbox", outside)
    with pytest.raises(SamplingExhausted, match="0 of 4 points"):
        generate_points(L_SHAPE, 4, max_rounds=3)
    assert calls == [4, 4, 4]


def test_surplus_is_truncated(monkeypatch):
    batch = [Point(0.5, 0.5), Point(0.6, 0.6), Point(0.7, 0.7)]
    monkeypatch.setattr(sampler, "random_points_in_bbox", lambda bbox, n, rng: batch[:n])
    assert generate_points(L_SHAPE, 2) == batch[:2]
