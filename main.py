"""
main.py - Command Flow Visualizer Flask App
============================================
The web server that powers the visualizer.

Routes:
  GET  /               – main UI
  GET  /api/graph      – current nodes & edges (highlighted) as JSON
  POST /api/select     – node click: toggle selection, copy label
  POST /api/clear      – pane click: clear selection
  POST /api/load       – replace the flow document and rebuild the layout

State management:
  The flow document and its laid-out base graph live on the app and are
  shared by every session in the process; POST /api/load replaces them
  for everyone.  Each user's Flask session holds only the Selection, and a
  selected id that the current diagram no longer has is dropped on the
  next request.  Highlighting is recomputed from the base graph on every
  request, so a stale highlight can never leak into the base style.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app, jsonify, render_template_string, request, session

from config import Config
from engine import Selection, connectivity_set, highlight
from graph import FlowGraph
from layout import FlowData, FlowDataError, build_from_data, load_flow_data
from ui import (
    kind_counts,
    legend_panel,
    minimap_panel,
    render_canvas,
    render_minimap,
    selection_panel,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App-level flow state
# ---------------------------------------------------------------------------
@dataclass
class FlowState:
    data:  FlowData
    graph: FlowGraph


def load_flow(app: Flask, data: FlowData) -> FlowState:
    """Lay out `data` and make it the app's current diagram."""
    graph = build_from_data(data, create_missing_commands=app.config["CREATE_MISSING_COMMANDS"])
    state = FlowState(data=data, graph=graph)
    app.extensions["flow"] = state
    log.info("layout ready: %d nodes, %d edges", graph.node_count(), graph.edge_count())
    return state


def get_flow() -> FlowState:
    return current_app.extensions["flow"]


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_selection() -> Selection:
    """Session selection; an id the current diagram lacks is dropped."""
    selection = Selection.from_dict(session.get("selection", {}))
    if selection.selected is not None and not get_flow().graph.has_node(selection.selected):
        selection.click_pane()
    return selection


def save_selection(selection: Selection) -> None:
    session["selection"] = selection.to_dict()


def render_view(selection: Selection) -> dict:
    """Everything the page needs to redraw after a selection change."""
    flow = get_flow()
    selected = selection.selected
    view = highlight(flow.graph, selected)

    node = flow.graph.get_node(selected) if selected else None
    copied = selection.copied_text is not None
    if node:
        panel = selection_panel(
            label=node.label,
            kind=node.kind.value,
            neighbours=len(connectivity_set(flow.graph, node.id)) - 1,
            copied=copied,
        )
    else:
        panel = selection_panel()

    return {
        "svg":       render_canvas(view),
        "minimap":   minimap_panel(render_minimap(view)),
        "selection": panel,
        "selected":  selected,
        "copied":    copied,
    }


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(test_config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("FLOW")
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config["LOG_LEVEL"], format=app.config["LOG_FORMAT"])

    data = app.config.get("DOCUMENT")
    if data is None:
        try:
            data = load_flow_data(app.config["DATA_PATH"])
        except FlowDataError as exc:
            log.warning("starting with an empty diagram: %s", exc)
            data = FlowData()
    load_flow(app, data)

    register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        flow = get_flow()
        view = render_view(get_selection())
        return render_template_string(
            INDEX_TEMPLATE,
            svg=view["svg"],
            minimap=view["minimap"],
            selection=view["selection"],
            legend=legend_panel(kind_counts(flow.graph)),
        )

    @app.route("/api/graph")
    def api_graph():
        selection = get_selection()
        view = highlight(get_flow().graph, selection.selected)
        return jsonify({"selected": selection.selected, **view.to_dict()})

    @app.route("/api/select", methods=["POST"])
    def api_select():
        node_id = (request.get_json(silent=True) or {}).get("node_id")
        node = get_flow().graph.get_node(node_id) if isinstance(node_id, str) else None
        if node is None:
            return jsonify({"error": f"unknown node {node_id!r}"}), 404

        selection = get_selection()
        selection.click_node(node.id, node.label)
        save_selection(selection)
        return jsonify({"label": node.label, **render_view(selection)})

    @app.route("/api/clear", methods=["POST"])
    def api_clear():
        selection = get_selection()
        selection.click_pane()
        save_selection(selection)
        return jsonify(render_view(selection))

    @app.route("/api/load", methods=["POST"])
    def api_load():
        payload = request.get_json(silent=True)
        if payload is None:
            return jsonify({"error": "expected a JSON flow document"}), 400
        try:
            data = FlowData.from_dict(payload)
        except FlowDataError as exc:
            log.warning("rejected flow document: %s", exc)
            return jsonify({"error": str(exc)}), 400

        flow = load_flow(current_app, data)
        selection = get_selection()
        selection.clear()
        save_selection(selection)
        return jsonify({
            "nodes": flow.graph.node_count(),
            "edges": flow.graph.edge_count(),
            "legend": legend_panel(kind_counts(flow.graph)),
            **render_view(selection),
        })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Command Flow Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg: #f8fafc;
      --panel: #ffffff;
      --border: #e2e8f0;
      --text-primary: #0f172a;
      --text-secondary: #64748b;
      --accent: #3b82f6;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    /* Sidebar */
    #sidebar {
      width: 280px;
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
      display: flex;
      flex-direction: column;
      gap: 14px;
    }

    .panel {
      background: var(--panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
    }
    .panel h3 {
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      color: var(--text-secondary);
      margin-bottom: 10px;
    }
    .legend ul { list-style: none; }
    .legend li { display: flex; align-items: center; gap: 8px; margin: 4px 0; }
    .legend .count { margin-left: auto; color: var(--text-secondary); }
    .swatch { width: 14px; height: 14px; border-radius: 4px; display: inline-block; }
    .hint, .empty, .selected-meta { font-size: 12px; color: var(--text-secondary); margin-top: 6px; }
    .selected-label { font-weight: 700; word-break: break-word; }
    .copied-badge {
      font-size: 11px;
      background: #10b981;
      color: #fff;
      border-radius: 4px;
      padding: 1px 6px;
      margin-left: 6px;
    }

    /* Canvas: the browser scrolls the diagram, no client-side layout */
    #canvas-container { flex: 1; overflow: auto; }
    #canvas-container .node { cursor: pointer; }
    #canvas-container .animated {
      stroke-dasharray: 5;
      animation: dashdraw 0.5s linear infinite;
    }
    @keyframes dashdraw { from { stroke-dashoffset: 10; } }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="legend">{{ legend|safe }}</div>
    <div id="selection">{{ selection|safe }}</div>
    <div id="minimap-container">{{ minimap|safe }}</div>
  </div>

  <div id="canvas-container">{{ svg|safe }}</div>

  <script>
    const COPY_FEEDBACK_MS = 2000;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function redraw(data) {
      if (data.svg) document.getElementById('canvas-container').innerHTML = data.svg;
      if (data.minimap) document.getElementById('minimap-container').innerHTML = data.minimap;
      if (data.selection) document.getElementById('selection').innerHTML = data.selection;
    }

    function copyLabel(label) {
      navigator.clipboard.writeText(label)
        .then(() => {
          const badge = document.querySelector('#selection .copied-badge');
          if (badge) setTimeout(() => badge.remove(), COPY_FEEDBACK_MS);
        })
        .catch((err) => console.error('Failed to copy text: ', err));
    }

    document.getElementById('canvas-container').addEventListener('click', async (e) => {
      const node = e.target.closest('.node');
      if (node) {
        const data = await post('/api/select', {node_id: node.dataset.id});
        redraw(data);
        copyLabel(node.dataset.label);
      } else if (e.target.closest('.pane')) {
        redraw(await post('/api/clear', {}));
      }
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    log.info("Command Flow Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
