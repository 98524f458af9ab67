"""
ui/
---
Presentation layer.

    from ui import render_canvas, render_minimap
    from ui import legend_panel, selection_panel, minimap_panel
"""

from ui.canvas import render_canvas, render_minimap, minimap_color, kind_counts, CanvasConfig

from ui.panels import (
    legend_panel,
    selection_panel,
    minimap_panel,
)

__all__ = [
    "render_canvas",
    "render_minimap",
    "minimap_color",
    "kind_counts",
    "CanvasConfig",
    "legend_panel",
    "selection_panel",
    "minimap_panel",
]
