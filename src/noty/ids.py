"""Normalize Notion resource references to canonical dashed ids.

Accepted input forms:

* dashed UUID: ``abc123de-f456-7890-abcd-ef1234567890``
* 32-character hex: ``abc123def4567890abcdef1234567890``
* browser link: ``https://www.notion.so/workspace/Page-Title-abc123...``
* pasted slug: ``Page-Title-abc123def4567890abcdef1234567890``

Anything else is returned stripped but otherwise untouched so that the API
reports the bad id itself.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_HEX32_RE = re.compile(r"^[0-9a-f]{32}$", re.IGNORECASE)
_HEX32_SEARCH_RE = re.compile(r"[0-9a-f]{32}", re.IGNORECASE)
# A 32-hex run that ends the path.  Query and fragment are already split off.
_PATH_TAIL_RE = re.compile(r"([0-9a-f]{32})$", re.IGNORECASE)


def to_uuid(value: str) -> str:
    """Insert dashes into a 32-hex id at offsets 8, 12, 16 and 20.

    Existing dashes are removed first.  Returns *value* unchanged when it
    is not 32 characters long without them.
    """
    h = value.replace("-", "").lower()
    if len(h) != 32:
        return value
    return f"{h[:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:]}"


def _id_from_url(value: str) -> str | None:
    try:
        parts = urlsplit(value)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None

    path = parts.path
    match = _PATH_TAIL_RE.search(path)
    if match:
        return match.group(1)

    last_segment = path.rsplit("/", 1)[-1]
    last_part = last_segment.rsplit("-", 1)[-1]
    if _HEX32_RE.match(last_part):
        return last_part
    return None


def normalize_id(value: str) -> str:
    """Return the canonical lowercase dashed form of a Notion reference.

    Never raises.  See the module docstring for accepted forms.
    """
    trimmed = value.strip()

    if _UUID_RE.match(trimmed):
        return trimmed.lower()

    if _HEX32_RE.match(trimmed):
        return to_uuid(trimmed)

    hex_id = _id_from_url(trimmed)
    if hex_id is not None:
        return to_uuid(hex_id)

    match = _HEX32_SEARCH_RE.search(trimmed)
    if match:
        return to_uuid(match.group(0))

    return trimmed
