"""
session.py — MST Session (run controller)
==========================================
The MstSession is the ONLY object the UI talks to.  It owns the graph,
one engine per algorithm, the log the learner reads, the results panel
data and the run flags that auto-run relies on.

Lifecycle:
    generate() / load_graph()  →  fresh graph, no progress, empty log
    step_once()                →  one decision by the selected engine
    reset()                    →  every edge UNUSED, progress dropped
    request_stop()             →  raise the cancellation flag

Threading:
  Flask serves requests on several threads and auto-run steps from a
  background thread, so every mutating method holds one re-entrant lock.
  A step is therefore always atomic with respect to any other mutator.
"""

import logging
import threading
from typing import Dict, List, Optional

from graph import Graph, validate_node_count
from graph.graph import MAX_NODES
from algorithms import Engine, MstSummary, Step, create_engine, get_algorithm


logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "prim"


class MstSession:
    """
    Attributes:
        graph       : Current Graph (None until generate/load).
        algorithm   : Registry key of the selected engine.
        start_node  : Prim's start node (read at Prim's first step).
        log         : User-facing log lines, oldest first.
        result      : MstSummary of the last engine that finished.
        last_step   : Most recent Step (for rendering).
        epoch       : Bumped by every generate / load / reset.
        max_nodes   : Largest graph this session accepts.
    """

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM, max_nodes: int = MAX_NODES):
        if get_algorithm(algorithm) is None:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        self.max_nodes:  int                   = min(max_nodes, MAX_NODES)
        self.graph:      Optional[Graph]       = None
        self.algorithm:  str                   = algorithm
        self.start_node: int                   = 0
        self.log:        List[str]             = []
        self.result:     Optional[MstSummary]  = None
        self.last_step:  Optional[Step]        = None
        self.epoch:      int                   = 0

        self._engines:   Dict[str, Engine]     = {}
        self._lock       = threading.RLock()
        self._cancel     = threading.Event()
        self._auto_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Graph lifecycle
    # ------------------------------------------------------------------
    def generate(
        self,
        node_count,
        edge_probability: Optional[float] = None,
        edge_count: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> Graph:
        """
        Validate, build and install a new graph.  Nothing is touched if the
        parameters are rejected (ValueError propagates to the caller).
        """
        validate_node_count(node_count, self.max_nodes)
        if edge_count is not None:
            graph = Graph.generate_with_edge_count(node_count, edge_count, seed=seed)
        elif edge_probability is not None:
            graph = Graph.generate_random(node_count, edge_probability=edge_probability, seed=seed)
        else:
            graph = Graph.generate_random(node_count, seed=seed)
        self.load_graph(graph)
        return graph

    def load_graph(self, graph: Graph) -> None:
        validate_node_count(graph.node_count(), self.max_nodes)
        with self._lock:
            self.graph = graph
            if self.start_node >= graph.node_count():
                self.start_node = 0
            self._discard_progress()
            self.log.append(
                f"🧩 Graph generated with {graph.node_count()} nodes and {graph.edge_count()} edges."
            )
        logger.info("Loaded %r", graph)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def select_algorithm(self, key: str) -> None:
        if get_algorithm(key) is None:
            raise ValueError(f"Unknown algorithm: {key}")
        with self._lock:
            self.algorithm = key

    def set_start_node(self, node) -> None:
        graph = self._require_graph()
        if isinstance(node, bool) or not isinstance(node, int) or node not in graph.nodes:
            raise ValueError(f"Start node must be one of 0..{graph.node_count() - 1}, got {node!r}")
        with self._lock:
            self.start_node = node

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step_once(self, expected_epoch: Optional[int] = None) -> Optional[Step]:
        """
        One decision by the selected engine.  With `expected_epoch` set, the
        step is skipped (None is returned) when a generate / load / reset has
        happened since that epoch was read; the check and the step share the
        lock, so a stale caller can never touch the new graph.
        """
        with self._lock:
            if expected_epoch is not None and expected_epoch != self.epoch:
                return None
            engine = self._engine_for(self.algorithm)
            step = engine.step()
            self.log.append(step.message)
            if step.summary is not None:
                self.result = step.summary
            self.last_step = step
            return step

    def reset(self) -> None:
        with self._lock:
            if self.graph is not None:
                self.graph.reset_states()
            self._discard_progress()
            self.log.append("🔄 Reset done.")
        logger.info("Session reset (epoch %d)", self.epoch)

    def request_stop(self) -> None:
        with self._lock:
            self._cancel.set()
            self.log.append("🛑 Algorithm stopped.")

    # ------------------------------------------------------------------
    # Auto-run plumbing (used by engine.autorun)
    # ------------------------------------------------------------------
    @property
    def cancel_event(self) -> threading.Event:
        return self._cancel

    @property
    def auto_running(self) -> bool:
        return self._auto_guard.locked()

    def try_claim_auto_run(self) -> bool:
        return self._auto_guard.acquire(blocking=False)

    def release_auto_run(self) -> None:
        self._auto_guard.release()

    def append_log(self, message: str) -> None:
        with self._lock:
            self.log.append(message)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def engine(self) -> Optional[Engine]:
        return self._engines.get(self.algorithm)

    @property
    def is_finished(self) -> bool:
        engine = self.engine
        return bool(engine and engine.is_finished)

    @property
    def is_cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def step_count(self) -> int:
        """Counted steps of the selected engine (0 before its first step)."""
        engine = self.engine
        return engine.steps if engine else 0

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "algorithm":    self.algorithm,
                "start_node":   self.start_node,
                "graph":        self.graph.to_dict() if self.graph else None,
                "log":          list(self.log),
                "result":       self.result.to_dict() if self.result else None,
                "last_step":    self.last_step.to_dict() if self.last_step else None,
                "is_finished":  self.is_finished,
                "step_count":   self.step_count,
                "auto_running": self.auto_running,
                "epoch":        self.epoch,
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require_graph(self) -> Graph:
        if self.graph is None:
            raise RuntimeError("Generate a graph first.")
        return self.graph

    def _engine_for(self, key: str) -> Engine:
        engine = self._engines.get(key)
        if engine is None:
            engine = create_engine(key, self._require_graph(), start=self.start_node)
            self._engines[key] = engine
        return engine

    def _discard_progress(self) -> None:
        self._engines.clear()
        self.log.clear()
        self.result = None
        self.last_step = None
        self._cancel.clear()
        self.epoch += 1
