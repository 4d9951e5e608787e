"""
engine/
-------
Run-control layer.

    from engine import MstSession, AutoRun, run_auto, Recorder, compare
"""

from engine.session  import MstSession, DEFAULT_ALGORITHM
from engine.autorun  import AutoRun, AutoRunActive, AutoRunOutcome, AUTO_RUN_DELAY, run_auto
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "MstSession",
    "DEFAULT_ALGORITHM",
    "AutoRun",
    "AutoRunActive",
    "AutoRunOutcome",
    "AUTO_RUN_DELAY",
    "run_auto",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
