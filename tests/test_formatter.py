"""
Unit tests for the one‑line result format.
"""

from osrm_runner.formatter import format_result
from osrm_runner.model import ErrorKind, QueryResult

PATH = "/route/v1/driving/1,2;3,4"


def test_success_line():
    res = QueryResult(path=PATH, status=200, ttfb=1.25, total=3.5, values=["42.1", '"Ok"'])
    assert format_result(res) == f"\"{PATH}\",200,1.25,3.5,42.1,\"'Ok'\""


def test_multiline_values_stay_on_one_line():
    res = QueryResult(path=PATH, status=200, ttfb=1.0, total=2.0, values=["1\n2", "[\n  1\n]"])
    line = format_result(res)
    assert "\n" not in line
    assert line.endswith(',"1;2","[;  1;]"')


def test_negative_and_exponent_numbers_unquoted():
    res = QueryResult(path=PATH, status=200, ttfb=1.0, total=2.0, values=["-3", "1e5", "null", ""])
    assert format_result(res).endswith(',-3,1e5,"null",""')


def test_http_error_omits_missing_fields():
    res = QueryResult(path=PATH, status=503, ttfb=0.5, error=ErrorKind.HTTP)
    assert format_result(res) == f'"{PATH}",503,0.5'


def test_transport_error_line():
    res = QueryResult(path=PATH, status="ConnectError", error=ErrorKind.TRANSPORT)
    assert format_result(res) == f'"{PATH}",ConnectError'


def test_parse_error_detail_is_quoted():
    res = QueryResult(
        path=PATH, status=200, ttfb=1.0, total=2.0,
        error=ErrorKind.PARSE, detail='invalid JSON Expecting value: "x"',
    )
    assert format_result(res).endswith(",2.0,\"invalid JSON Expecting value: 'x'\"")
