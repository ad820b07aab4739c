"""
One‑line text rendering of a :class:`~osrm_runner.model.QueryResult`.

    "<path>",<status>[,<ttfb>][,<total>][,<value>...][,<detail>]

Numbers go out bare, everything else is double‑quoted with newlines folded to
``;`` and inner double quotes turned into single quotes.
"""

from __future__ import annotations

import re

from osrm_runner.model import QueryResult

_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")


def _field(value: str) -> str:
    text = value.strip()
    if _NUMBER.fullmatch(text):
        return text
    return '"' + text.replace("\n", ";").replace('"', "'") + '"'


def format_result(result: QueryResult) -> str:
    parts = [f'"{result.path}"', str(result.status)]
    if result.ttfb is not None:
        parts.append(str(result.ttfb))
    if result.total is not None:
        parts.append(str(result.total))
    parts.extend(_field(v) for v in result.values)
    if result.detail:
        parts.append(_field(result.detail))
    return ",".join(parts)
