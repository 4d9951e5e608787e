"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + Step → SVG string.

The renderer consumes:
  • graph   – node positions, edge weights, live edge states
  • step    – optional Step snapshot (edge states, Prim's tree, current edge)
  • config  – visual config (canvas size, colours, fonts, …)

Design decisions:
  - NO mutation.  Caller passes everything in and gets a string back.
  - Edge colour is a dict lookup on the state string: the same palette the
    log uses (grey unused, yellow considered, lime selected, red rejected).
  - When a Step is given its `edge_states` win over the live graph, so a
    snapshot renders exactly as it was taken.
"""

import math
from html import escape
from typing import Dict, Optional

from graph import Graph, Edge, Node
from algorithms import Step


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 800
    height: int = 500
    bg:     str = "#0d1117"

    # node colours
    node_fill:        str = "#2563eb"   # blue
    node_fill_tree:   str = "#10b981"   # emerald, in Prim's tree
    node_stroke:      str = "#ffffff"
    node_radius:      int = 18
    node_label_color: str = "#ffffff"
    node_label_size:  int = 14

    # edge colours (state → stroke)
    edge_colors: Dict[str, str] = {
        "unused":     "#6b7280",   # grey
        "considered": "#facc15",   # yellow
        "selected":   "#84cc16",   # lime
        "rejected":   "#ef4444",   # red
    }
    edge_width:          float = 1.2
    edge_width_selected: float = 3.0
    edge_width_current:  float = 4.0
    edge_weight_color:   str   = "#e2e8f0"
    edge_weight_size:    int   = 12
    edge_weight_bg:      str   = "#161b22"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Optional[Graph],
    step: Optional[Step] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """Returns an SVG string for the graph (empty canvas if graph is None)."""
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    if graph is not None:
        in_tree = set(step.in_tree) if step else set()

        # -- edges first so nodes sit on top --
        for edge in graph.edges.values():
            svg_parts.append(_render_edge(graph, edge, step, config))

        for node in graph.nodes.values():
            svg_parts.append(_render_node(node, node.id in in_tree, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node: Node, in_tree: bool, config: CanvasConfig) -> str:
    fill = config.node_fill_tree if in_tree else config.node_fill
    cx, cy = node.x, node.y
    return "\n".join([
        f'<g class="node" data-id="{node.id}">',
        f'  <circle cx="{cx}" cy="{cy}" r="{config.node_radius}" '
        f'fill="{fill}" stroke="{config.node_stroke}" stroke-width="1.5"/>',
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="sans-serif" '
        f'fill="{config.node_label_color}">{escape(node.label)}</text>',
        '</g>',
    ])


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: Graph, edge: Edge, step: Optional[Step], config: CanvasConfig) -> str:
    a = graph.get_node(edge.u)
    b = graph.get_node(edge.v)
    if not a or not b:
        return ""

    state_key = edge.state.value
    if step and edge.id in step.edge_states:
        state_key = step.edge_states[edge.id]

    stroke = config.edge_colors.get(state_key, config.edge_colors["unused"])
    width = config.edge_width_selected if state_key == "selected" else config.edge_width
    if step and step.current_edge == edge.id:
        width = config.edge_width_current

    dx, dy = b.x - a.x, b.y - a.y
    dist = math.hypot(dx, dy)
    if dist < 0.001:
        return ""  # degenerate edge

    # weight label at the midpoint, nudged off the line
    ux, uy = dx / dist, dy / dist
    mx = (a.x + b.x) / 2 - uy * 10
    my = (a.y + b.y) / 2 + ux * 10

    return "\n".join([
        f'<g class="edge {state_key}" data-id="{edge.id}">',
        f'  <line x1="{a.x}" y1="{a.y}" x2="{b.x}" y2="{b.y}" '
        f'stroke="{stroke}" stroke-width="{width}"/>',
        f'  <circle cx="{mx:.2f}" cy="{my:.2f}" r="10" fill="{config.edge_weight_bg}" opacity="0.9"/>',
        f'  <text x="{mx:.2f}" y="{my + 4:.2f}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="sans-serif" '
        f'fill="{config.edge_weight_color}">{edge.weight}</text>',
        '</g>',
    ])
