from .chunk import chunk_children
from .payload import drop_none

__all__ = [
    "chunk_children",
    "drop_none",
]
