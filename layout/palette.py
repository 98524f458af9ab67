"""
palette.py - Event Colours
==========================
Every event that triggers a policy gets a colour from a fixed 10-entry
palette.  The policy node and both of its edges share that colour, so the
eye can follow an event across the diagram.

The index comes from a 32-bit polynomial string hash:

    h = int32(h * 31 + code_unit)      for each UTF-16 code unit
    colour = PALETTE[abs(h) % 10]

This is bit-for-bit the same value a JavaScript front end gets from
`(h << 5) - h + s.charCodeAt(i)`, so both sides agree on colours.
"""

from typing import List

PALETTE: List[str] = [
    "#ef4444",   # red
    "#06b6d4",   # cyan
    "#8b5cf6",   # violet
    "#ec4899",   # pink
    "#14b8a6",   # teal
    "#f97316",   # orange
    "#6366f1",   # indigo
    "#84cc16",   # lime
    "#f59e0b",   # amber
    "#22c55e",   # green
]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_hash(text: str) -> int:
    """Signed 32-bit `h*31 + c` hash over the UTF-16 code units of `text`."""
    h = 0
    for unit in _utf16_units(text):
        h = _to_int32(h * 31 + unit)
    return h


def color_of(event_name: str) -> str:
    return PALETTE[abs(string_hash(event_name)) % len(PALETTE)]
