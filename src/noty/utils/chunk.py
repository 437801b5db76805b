"""Batch a list of Notion block dicts into groups of at most *size* items.

The Notion create-page and append-children endpoints accept at most 100
blocks per request, while the Markdown parser produces an unbounded list.
"""

from __future__ import annotations

from typing import Any


def chunk_children(blocks: list[dict[str, Any]], size: int = 100) -> list[list[dict[str, Any]]]:
    """Split a list of Notion block dicts into batches of at most ``size``.

    Parameters
    ----------
    blocks:
        The full list of block dictionaries to partition.
    size:
        Maximum number of blocks per batch.

    Returns
    -------
    list[list[dict]]
        Sublists in order.  An empty input returns ``[]`` (not ``[[]]``).

    Raises
    ------
    ValueError
        If *size* is less than 1.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    return [blocks[i : i + size] for i in range(0, len(blocks), size)]
