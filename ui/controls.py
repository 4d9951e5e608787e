"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • graph_generator      – node count + density / edge count
  • algorithm_selector   – Prim / Kruskal + start node
  • playback_controls    – next / auto / stop / reset
  • log_panel            – the scrolling decision log
  • result_panel         – total weight + selected edges once finished
  • comparison_panel     – Prim vs Kruskal on the same graph
  • pseudocode_viewer    – with live line highlighting

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine); the main app
    stitches them together.
  - Anything that came from user input or the log is HTML-escaped.
"""

from html import escape
from typing import List, Optional

from graph.graph import MAX_NODES
from algorithms import AlgoInfo, MstSummary
from engine import ComparisonResult


# ---------------------------------------------------------------------------
# Graph Generator
# ---------------------------------------------------------------------------
def graph_generator(node_count: int = 6, edge_probability: float = 0.65, max_nodes: int = MAX_NODES) -> str:
    return f"""
    <div class="panel graph-generator">
      <h3>🌐 Graph</h3>
      <label>Nodes: <input type="number" id="node-count" value="{node_count}" min="2" max="{max_nodes}"></label>
      <label>Density: <input type="range" id="edge-prob" min="0" max="1" step="0.05" value="{edge_probability}">
             <span id="edge-prob-val">{edge_probability}</span></label>
      <label>Exact edge count (optional): <input type="number" id="edge-count" min="0" placeholder="—"></label>
      <button id="btn-generate" class="btn-secondary">Generate Graph</button>
      <details>
        <summary>Import edge list</summary>
        <textarea id="import-text" rows="6" placeholder="0 1 5
0 2 3
1 2 1"></textarea>
        <button id="btn-import" class="btn-secondary">Import</button>
      </details>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "prim",
    node_ids: Optional[List[int]] = None,
    start_node: int = 0,
) -> str:
    options = []
    current = None
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        if sel:
            current = algo
        options.append(f'<option value="{algo.key}" {sel}>{algo.label}</option>')

    info = ""
    if current is not None:
        info = f"""
      <div class="algo-info">
        <p>{escape(current.description)}</p>
        <small>Time {escape(current.complexity_time)} · Space {escape(current.complexity_space)}</small>
      </div>"""

    starts = []
    for nid in node_ids or []:
        sel = 'selected' if nid == start_node else ''
        starts.append(f'<option value="{nid}" {sel}>Node {nid}</option>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>{info}
      <label>Start node (Prim):
        <select id="start-node">
          {''.join(starts)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(auto_running: bool = False, is_finished: bool = False) -> str:
    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Steps</h3>
      <div class="button-row">
        <button id="btn-next" title="Next step">Next ▶</button>
        <button id="btn-auto" title="Run automatically" {'disabled' if auto_running else ''}>Auto ⏩</button>
        <button id="btn-stop" title="Stop auto-run">Stop ⏹</button>
        <button id="btn-reset" class="btn-secondary" title="Reset edge states">Reset ↺</button>
      </div>
      <div class="step-info">
        {'<span class="running-badge">RUNNING</span>' if auto_running else ''}
        {'<span class="finished-badge">FINISHED</span>' if is_finished else ''}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Log Panel
# ---------------------------------------------------------------------------
def log_panel(lines: List[str]) -> str:
    if not lines:
        return '<div class="log-text placeholder">Nothing yet. Press <strong>Next</strong>.</div>'
    body = "<br>".join(escape(line) for line in lines)
    return f'<div class="log-text">{body}</div>'


# ---------------------------------------------------------------------------
# Result Panel
# ---------------------------------------------------------------------------
def result_panel(summary: Optional[MstSummary] = None) -> str:
    if summary is None or not summary.edges:
        return ""
    return f"""
    <div class="result">
      <b>✅ {escape(summary.algorithm)} MST Complete!</b><br>
      <b>Total Weight:</b> {summary.total_weight}<br>
      <b>Selected Edges:</b> {escape(summary.edge_list_text())}
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Compare</h3>
          <button id="btn-compare" class="btn-secondary">Run Prim vs Kruskal</button>
        </div>
        """

    left, right = comp.left, comp.right
    verdict = "🟰 Same total weight" if comp.weights_match else "⚠️ Weights differ"
    fewer = "🟰 Tie" if comp.fewer_steps == "tie" else f"👑 {escape(comp.fewer_steps)}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ {escape(left.algo_label)} vs {escape(right.algo_label)}</h3>
      <table class="comparison-table">
        <tr><td>Total weight</td><td>{left.total_weight}</td><td>{right.total_weight}</td></tr>
        <tr><td>Steps</td><td>{left.total_steps}</td><td>{right.total_steps}</td></tr>
        <tr><td>Considered</td><td>{left.edges_considered}</td><td>{right.edges_considered}</td></tr>
        <tr><td>Rejected</td><td>{left.edges_rejected}</td><td>{right.edges_rejected}</td></tr>
      </table>
      <p>{verdict} · Fewer steps: {fewer}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    if not pseudocode_lines:
        return '<div class="code-block"></div>'

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """
