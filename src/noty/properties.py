"""Convert flat key/value maps to Notion property payloads.

Shorthand accepted by :func:`flatten_properties`:

* ``"Name": "text"``                  -> title
* ``"Tags": ["a", "b"]``              -> multi_select
* ``"Count": 3``                      -> number
* ``"Done": True``                    -> checkbox
* ``"Notes": "text"``                 -> rich_text
* ``"date:Due:start": "2026-01-01"``  -> date (``start``/``end``/``is_datetime``
  keys of the same property are merged)
* any other mapping                   -> passed through as a ready-made payload
* ``None``                            -> dropped
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_DATE_KEY_RE = re.compile(r"^date:(.+):(.+)$")


def _text_items(content: str) -> list[dict[str, Any]]:
    return [{"text": {"content": content}}]


def flatten_properties(values: Mapping[str, Any]) -> dict[str, Any]:
    """Map a flat ``{name: value}`` dict to Notion property values.

    Pure and total: unrecognized values are passed through rather than
    rejected.  Keys are processed in insertion order; date groups are
    appended after every other key.

    Parameters
    ----------
    values:
        Property names mapped to scalars, sequences, or full payloads.

    Returns
    -------
    dict
        Property names mapped to payloads accepted by the page create and
        update endpoints.
    """
    result: dict[str, Any] = {}
    dates: dict[str, dict[str, Any]] = {}

    for key, value in values.items():
        date_match = _DATE_KEY_RE.match(key)
        if date_match:
            name, part = date_match.groups()
            acc = dates.setdefault(name, {})
            if part in ("start", "end"):
                acc[part] = str(value)
            elif part == "is_datetime":
                acc[part] = bool(value)
            continue

        if value is None:
            continue

        if key == "Name" and isinstance(value, str):
            result[key] = {"title": _text_items(value)}
        elif isinstance(value, (list, tuple)):
            result[key] = {"multi_select": [{"name": str(item)} for item in value]}
        elif isinstance(value, bool):
            result[key] = {"checkbox": value}
        elif isinstance(value, (int, float)):
            result[key] = {"number": value}
        elif isinstance(value, str):
            result[key] = {"rich_text": _text_items(value)}
        else:
            result[key] = value

    for name, acc in dates.items():
        date: dict[str, Any] = {}
        if acc.get("start"):
            date["start"] = acc["start"]
        if acc.get("end"):
            date["end"] = acc["end"]
        result[name] = {"date": date}

    return result
