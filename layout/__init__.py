"""
layout/
-------
Records in, positioned graph out.

    from layout import build, FlowData, load_flow_data, color_of
"""

from layout.records import (
    CommandEvent,
    PolicyCommand,
    FlowData,
    FlowDataError,
    load_flow_data,
)
from layout.palette import PALETTE, color_of, string_hash
from layout.builder import LayoutState, build, build_from_data

__all__ = [
    "CommandEvent",
    "PolicyCommand",
    "FlowData",
    "FlowDataError",
    "load_flow_data",
    "PALETTE",
    "color_of",
    "string_hash",
    "LayoutState",
    "build",
    "build_from_data",
]
