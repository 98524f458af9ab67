"""
panels.py - UI Side Panels
==========================
Every panel is a pure function that takes state and returns HTML.

Panels:
  • legend_panel      – colour key and node counts per kind
  • selection_panel   – selected node, neighbour count, "Copied!" badge
  • minimap_panel     – wrapper around the minimap SVG

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings; labels are escaped with markupsafe.
"""

from typing import Dict, Optional

from markupsafe import escape

from ui.canvas import CONFIG, CanvasConfig


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def legend_panel(counts: Dict[str, int], config: CanvasConfig = CONFIG) -> str:
    """Swatches use the minimap colours so the key matches the overview."""
    colors = config.minimap_colors
    rows = [
        ("Command", colors["command"], counts.get("command", 0)),
        ("Event",   colors["event"],   counts.get("event", 0)),
        ("Policy",  colors["policy"],  counts.get("policy", 0)),
    ]
    items = "\n".join(
        f'<li><span class="swatch" style="background:{color}"></span>{name}'
        f'<span class="count">{count}</span></li>'
        for name, color, count in rows
    )
    return f"""
    <div class="panel legend">
      <h3>Legend</h3>
      <ul>
        {items}
      </ul>
      <p class="hint">Policies and their links take the colour of the event that triggers them.</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
def selection_panel(
    label: Optional[str] = None,
    kind: Optional[str] = None,
    neighbours: int = 0,
    copied: bool = False,
) -> str:
    if label is None:
        body = '<p class="empty">Click a node to highlight its connections.</p>'
    else:
        badge = ' <span class="copied-badge">Copied!</span>' if copied else ''
        body = (
            f'<p class="selected-label">{escape(label)}{badge}</p>'
            f'<p class="selected-meta">{escape(kind or "")} · {neighbours} connected</p>'
        )
    return f"""
    <div class="panel selection" id="selection-panel">
      <h3>Selection</h3>
      {body}
    </div>
    """


# ---------------------------------------------------------------------------
# Minimap
# ---------------------------------------------------------------------------
def minimap_panel(svg: str) -> str:
    return f"""
    <div class="panel minimap" id="minimap">
      {svg}
    </div>
    """
