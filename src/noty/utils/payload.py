"""Request-body helpers."""

from __future__ import annotations

from typing import Any


def drop_none(**fields: Any) -> dict[str, Any]:
    """Build a JSON body from keyword arguments, omitting ``None`` values.

    Notion rejects an explicit ``null`` for several optional fields
    (``filter``, ``start_cursor``, ``children``).
    """
    return {key: value for key, value in fields.items() if value is not None}
