"""
main.py — MST Step Visualizer Flask App
========================================
The web server that powers the visualizer.

Routes:
  GET  /                          – main UI
  POST /api/graph/generate        – generate a new random graph
  POST /api/graph/import          – load a graph from an edge list
  POST /api/step/next             – one algorithm decision
  POST /api/auto/start            – start a timed auto-run (409 if one is active)
  POST /api/auto/stop             – request the auto-run to stop
  POST /api/reset                 – every edge back to unused, progress dropped
  POST /api/config/algo           – choose prim / kruskal
  POST /api/config/start_node     – choose Prim's start node
  GET  /api/state                 – current view (polled while auto-running)
  GET  /api/compare               – Prim vs Kruskal on copies of the graph

State management:
  The Flask session cookie only carries an id.  The MstSession itself (graph,
  engines, log, run flags) lives in the in-process SESSIONS dict because the
  auto-run thread has to mutate it between requests.  Nothing is persisted.
  The registry is least-recently-used ordered and capped at MAX_SESSIONS;
  the oldest entry is dropped (and its auto-run stopped) when a new browser
  pushes it over the cap.

Configuration:
  Defaults live in app.config and can be overridden with MSTVIZ_* env vars,
  e.g.  MSTVIZ_DEFAULT_NODES=8  MSTVIZ_AUTO_RUN_DELAY=0.3  MSTVIZ_PORT=8000
"""

from flask import Flask, render_template_string, request, jsonify, session
import logging
import secrets
import sys
import os
import threading
from collections import OrderedDict

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from graph import Graph
from graph.graph import DEFAULT_EDGE_PROBABILITY, MAX_NODES
from algorithms import get_algorithm, list_algorithms
from engine import (
    AUTO_RUN_DELAY,
    AutoRun,
    AutoRunActive,
    MstSession,
    Recorder,
    compare,
)
from ui import (
    render_canvas,
    graph_generator,
    algorithm_selector,
    playback_controls,
    log_panel,
    result_panel,
    comparison_panel,
    pseudocode_viewer,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config.from_mapping(
    DEFAULT_NODES=6,
    DEFAULT_EDGE_PROBABILITY=DEFAULT_EDGE_PROBABILITY,
    DEFAULT_SEED=None,
    AUTO_RUN_DELAY=AUTO_RUN_DELAY,
    MAX_NODES=MAX_NODES,
    MAX_SESSIONS=256,
)
app.config.from_prefixed_env("MSTVIZ")


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
SESSIONS: "OrderedDict[str, MstSession]" = OrderedDict()
_sessions_lock = threading.Lock()


def get_mst_session() -> MstSession:
    """Look up this browser's MstSession, creating one with a default graph."""
    sid = session.get("sid")
    with _sessions_lock:
        mst = SESSIONS.get(sid) if sid else None
        if mst is not None:
            SESSIONS.move_to_end(sid)
            return mst

        sid = secrets.token_hex(16)
        session["sid"] = sid
        mst = MstSession(max_nodes=int(app.config["MAX_NODES"]))
        mst.generate(
            min(app.config["DEFAULT_NODES"], mst.max_nodes),
            edge_probability=app.config["DEFAULT_EDGE_PROBABILITY"],
            seed=app.config["DEFAULT_SEED"],
        )
        SESSIONS[sid] = mst
        while len(SESSIONS) > max(1, int(app.config["MAX_SESSIONS"])):
            old_sid, old = SESSIONS.popitem(last=False)
            old.request_stop()
            logger.info("Evicted session %s", old_sid[:8])
    return mst


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def optional_int(value):
    """'' / None → None; anything else must be an integer."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"Expected an integer, got {value!r}") from None
    if not isinstance(value, int):
        raise ValueError(f"Expected an integer, got {value!r}")
    return value


def bad_request(exc: Exception, status: int = 400):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), status


def view_payload(mst: MstSession) -> dict:
    """Everything the page needs to redraw after any change."""
    info = get_algorithm(mst.algorithm)
    step = mst.last_step
    current_line = step.pseudocode_line if step and step.algorithm == mst.algorithm else -1
    graph = mst.graph
    return {
        "svg":          render_canvas(graph, step),
        "log":          log_panel(mst.log),
        "log_lines":    list(mst.log),
        "result":       result_panel(mst.result),
        "result_data":  mst.result.to_dict() if mst.result else None,
        "pseudocode":   pseudocode_viewer(info.pseudocode if info else [], current_line),
        "playback":     playback_controls(mst.auto_running, mst.is_finished),
        "selector":     algorithm_selector(
            algorithms=list_algorithms(),
            selected_key=mst.algorithm,
            node_ids=graph.node_ids() if graph else [],
            start_node=mst.start_node,
        ),
        "algorithm":    mst.algorithm,
        "start_node":   mst.start_node,
        "node_ids":     graph.node_ids() if graph else [],
        "edge_count":   graph.edge_count() if graph else 0,
        "is_finished":  mst.is_finished,
        "auto_running": mst.auto_running,
    }


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    mst = get_mst_session()
    view = view_payload(mst)

    html = render_template_string(INDEX_TEMPLATE,
        svg=view["svg"],
        graph_gen=graph_generator(
            node_count=mst.graph.node_count() if mst.graph else app.config["DEFAULT_NODES"],
            edge_probability=app.config["DEFAULT_EDGE_PROBABILITY"],
            max_nodes=mst.max_nodes,
        ),
        algo_selector=view["selector"],
        playback=view["playback"],
        compare=comparison_panel(),
        log=view["log"],
        result=view["result"],
        pseudocode=view["pseudocode"],
    )
    return html


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = json_body()
    mst = get_mst_session()
    try:
        nodes = optional_int(data.get("nodes", app.config["DEFAULT_NODES"]))
        edges = optional_int(data.get("edges"))
        seed  = optional_int(data.get("seed"))
        prob  = data.get("prob")
        if prob is not None and (isinstance(prob, bool) or not isinstance(prob, (int, float))):
            raise ValueError(f"Density must be a number, got {prob!r}")
        mst.generate(nodes, edge_probability=prob, edge_count=edges, seed=seed)
    except ValueError as e:
        return bad_request(e)

    return jsonify(view_payload(mst))


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = json_body()
    mst = get_mst_session()
    try:
        g = Graph.from_text(data.get("text", ""), num_nodes=optional_int(data.get("nodes")))
        mst.load_graph(g)
    except ValueError as e:
        return bad_request(e)

    payload = view_payload(mst)
    payload["connected"] = g.is_connected()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Stepping
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    mst = get_mst_session()
    step = mst.step_once()
    payload = view_payload(mst)
    payload["step"] = step.to_dict()
    return jsonify(payload)


@app.route("/api/auto/start", methods=["POST"])
def api_auto_start():
    mst = get_mst_session()
    run = AutoRun(mst, delay=float(app.config["AUTO_RUN_DELAY"]))
    try:
        run.claim()
    except AutoRunActive as e:
        return bad_request(e, status=409)

    threading.Thread(target=run.execute, name="mst-auto-run", daemon=True).start()
    payload = view_payload(mst)
    payload["auto_running"] = True
    return jsonify(payload)


@app.route("/api/auto/stop", methods=["POST"])
def api_auto_stop():
    mst = get_mst_session()
    mst.request_stop()
    return jsonify(view_payload(mst))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    mst = get_mst_session()
    mst.reset()
    return jsonify(view_payload(mst))


@app.route("/api/state")
def api_state():
    return jsonify(view_payload(get_mst_session()))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    mst = get_mst_session()
    try:
        mst.select_algorithm(json_body().get("algo_key", "prim"))
    except ValueError as e:
        return bad_request(e)
    return jsonify(view_payload(mst))


@app.route("/api/config/start_node", methods=["POST"])
def api_config_start_node():
    mst = get_mst_session()
    try:
        mst.set_start_node(optional_int(json_body().get("start")))
    except ValueError as e:
        return bad_request(e)
    return jsonify({"start_node": mst.start_node})


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@app.route("/api/compare")
def api_compare():
    mst = get_mst_session()
    left, right = Recorder(), Recorder()
    left.run_to_completion(mst.graph, "prim", start=mst.start_node)
    right.run_to_completion(mst.graph, "kruskal")
    comp = compare(left, right)
    return jsonify({
        "html":          comparison_panel(comp),
        "weights_match": comp.weights_match,
        "prim":          left.metrics.total_weight,
        "kruskal":       right.metrics.total_weight,
        "fewer_steps":   comp.fewer_steps,
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
  <title>MST Step Visualizer — Prim & Kruskal</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0f172a;
      --bg-darker: #020617;
      --bg-panel: #1e293b;
      --border: #334155;
      --text-primary: #f1f5f9;
      --text-secondary: #94a3b8;
      --accent-lime: #84cc16;
      --accent-green: #22c55e;
      --accent-mint: #10b981;
      --glow-lime: rgba(132, 204, 22, 0.35);
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 16px;
      padding: 20px;
      background: var(--bg-dark);
      min-height: 280px;
      max-height: 340px;
    }

    #log-container, #pseudocode-container {
      display: flex;
      flex-direction: column;
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 16px;
      overflow: hidden;
    }

    #log { overflow-y: auto; flex: 1; }

    h3 {
      font-size: 13px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 12px;
      color: var(--accent-lime);
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .button-row { display: flex; gap: 8px; flex-wrap: wrap; margin-bottom: 12px; }

    button {
      background: linear-gradient(135deg, var(--accent-lime), var(--accent-green));
      color: #fff;
      border: none;
      padding: 10px 14px;
      border-radius: 6px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button[disabled] { opacity: 0.5; cursor: default; }
    .btn-secondary { background: #1c2128; border: 1px solid var(--border); }

    select, input[type="number"], input[type="range"], textarea {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 6px;
      color: var(--text-primary);
    }
    textarea { font-family: monospace; min-height: 100px; }

    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
      text-transform: uppercase;
    }

    .code-block { font-family: monospace; font-size: 13px; line-height: 1.6; overflow-y: auto; }
    .code-line { padding: 2px 10px; border-radius: 6px; white-space: pre; }
    .code-line.highlight {
      background: rgba(6, 182, 212, 0.15);
      border-left: 3px solid var(--accent-lime);
      box-shadow: 0 0 20px var(--glow-lime);
    }

    .log-text { color: var(--text-secondary); line-height: 1.7; font-size: 14px; }
    .result { margin-top: 12px; line-height: 1.7; }

    .finished-badge, .running-badge {
      color: #fff;
      padding: 4px 10px;
      border-radius: 6px;
      font-size: 11px;
      font-weight: 700;
    }
    .finished-badge { background: var(--accent-mint); }
    .running-badge  { background: var(--accent-lime); }

    table { width: 100%; font-size: 13px; margin: 8px 0; }
    table td { padding: 4px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="graph-gen">{{ graph_gen|safe }}</div>
    <div id="algo-selector-box">{{ algo_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="compare">{{ compare|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="log-container">
        <h3>Log</h3>
        <div id="log">{{ log|safe }}</div>
        <div id="result">{{ result|safe }}</div>
      </div>
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let pollTimer = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      const body = await res.json();
      if (!res.ok && body.error) alert(body.error);
      return body;
    }

    function apply(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.log !== undefined) {
        const log = document.getElementById('log');
        log.innerHTML = data.log;
        log.scrollTop = log.scrollHeight;
      }
      if (data.result !== undefined) document.getElementById('result').innerHTML = data.result;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.playback) document.getElementById('playback').innerHTML = data.playback;
      if (data.selector) document.getElementById('algo-selector-box').innerHTML = data.selector;
      if (data.auto_running && !pollTimer) {
        pollTimer = setInterval(async () => {
          const s = await (await fetch('/api/state')).json();
          apply(s);
        }, 300);
      } else if (data.auto_running === false && pollTimer) {
        clearInterval(pollTimer);
        pollTimer = null;
      }
    }

    // Playback buttons are re-rendered, so delegate clicks
    document.addEventListener('click', async (e) => {
      const id = e.target.id;
      if (id === 'btn-next')   apply(await post('/api/step/next'));
      if (id === 'btn-auto')   apply(await post('/api/auto/start'));
      if (id === 'btn-stop')   apply(await post('/api/auto/stop'));
      if (id === 'btn-reset')  apply(await post('/api/reset'));
      if (id === 'btn-generate') {
        const edges = document.getElementById('edge-count').value;
        apply(await post('/api/graph/generate', {
          nodes: +document.getElementById('node-count').value,
          prob: +document.getElementById('edge-prob').value,
          edges: edges === '' ? null : +edges,
        }));
      }
      if (id === 'btn-import') {
        apply(await post('/api/graph/import', {text: document.getElementById('import-text').value}));
      }
      if (id === 'btn-compare') {
        const data = await (await fetch('/api/compare')).json();
        if (data.html) document.getElementById('compare').innerHTML = data.html;
      }
    });

    document.getElementById('edge-prob')?.addEventListener('input', (e) => {
      document.getElementById('edge-prob-val').textContent = e.target.value;
    });

    // The selector box is re-rendered too
    document.addEventListener('change', async (e) => {
      if (e.target.id === 'algo-selector') {
        apply(await post('/api/config/algo', {algo_key: e.target.value}));
      }
      if (e.target.id === 'start-node') {
        await post('/api/config/start_node', {start: +e.target.value});
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
    logging.basicConfig(
        level=logging.DEBUG if app.config.get("DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    host = app.config.get("HOST", "0.0.0.0")
    port = int(app.config.get("PORT", 5000))
    print("=" * 60)
    print("  MST Step Visualizer (Prim & Kruskal)")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{port}")
    print("=" * 60)
    app.run(debug=bool(app.config.get("DEBUG")), host=host, port=port, threaded=True)
