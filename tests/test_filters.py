import asyncio
import json

import pytest

from osrm_runner.filters import apply_filters, evaluate_filter, sanitize, strip_keys

RESPONSE = {
    "code": "Ok",
    "routes": [{"weight": 12.5, "geometry": "_p~iF~ps|U", "legs": [{"weight": 12.5}]}],
    "waypoints": [{"hint": "abc", "name": "A"}],
    "nested": [{"deep": {"hint": "x", "keep": 1}}],
}


def test_strip_keys_any_depth():
    out = strip_keys(RESPONSE)
    assert "waypoints" not in out
    assert "geometry" not in out["routes"][0]
    assert out["nested"] == [{"deep": {"keep": 1}}]
    assert RESPONSE["routes"][0]["geometry"]  # input untouched


def test_sanitize_is_compact_json():
    text = sanitize(json.dumps(RESPONSE, indent=2))
    assert " " not in text
    assert json.loads(text)["routes"][0]["weight"] == 12.5


def test_sanitize_rejects_non_json():
    with pytest.raises(json.JSONDecodeError):
        sanitize("<html>")


def test_numeric_filter():
    assert evaluate_filter(".routes[0].weight", sanitize(json.dumps(RESPONSE))) == "12.5"


def test_multiple_outputs_are_newline_separated():
    doc = json.dumps({"a": [1, 2, 3]})
    assert evaluate_filter(".a[]", doc) == "1\n2\n3"


def test_malformed_filter_becomes_message():
    out = evaluate_filter(".routes[", "{}")
    assert out.startswith("invalid filter .routes[ ")


def test_runtime_error_becomes_message():
    out = evaluate_filter(".code | keys", json.dumps({"code": "Ok"}))
    assert out.startswith("invalid filter .code | keys ")


def test_apply_filters_keeps_order():
    text = sanitize(json.dumps(RESPONSE))
    values = asyncio.run(apply_filters([".code", "{", ".routes | length"], text))
    assert values[0] == '"Ok"'
    assert values[1].startswith("invalid filter {")
    assert values[2] == "1"
