"""
engine/
-------
Interaction layer.

    from engine import highlight, Selection
"""

from engine.highlighter import (
    highlight,
    connectivity_set,
    NodeOverride,
    EdgeOverride,
)
from engine.selection import Selection, MemoryClipboard, COPY_FEEDBACK_SECONDS

__all__ = [
    "highlight",
    "connectivity_set",
    "NodeOverride",
    "EdgeOverride",
    "Selection",
    "MemoryClipboard",
    "COPY_FEEDBACK_SECONDS",
]
