"""
autorun.py — Timed Auto-Run
============================
Steps a session on a fixed cadence until the engine finishes, the user
stops it, the graph is reset underneath it, or a safety ceiling is hit.

    run = AutoRun(session, delay=0.7)
    run.claim()                       # raises AutoRunActive if one is going
    threading.Thread(target=run.execute, daemon=True).start()

or, synchronously (tests, scripts):

    outcome = run_auto(session, delay=0)

Only one auto-run may hold a session at a time.  The delay between steps
is `cancel_event.wait(delay)`, so a stop request wakes the loop at once
instead of after the full delay.  Cancellation is only ever observed
between steps, never in the middle of one.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from algorithms import Step
from engine.session import MstSession


logger = logging.getLogger(__name__)


AUTO_RUN_DELAY: float = 0.7     # seconds between automatic steps


class AutoRunActive(RuntimeError):
    """An auto-run is already driving this session."""


class AutoRunOutcome(Enum):
    COMPLETED   = "completed"     # engine reported a final step
    CANCELLED   = "cancelled"     # stop was requested
    INVALIDATED = "invalidated"   # graph regenerated / reset mid-run
    CEILING     = "ceiling"       # safety limit on iterations reached


class AutoRun:
    """
    Attributes:
        session : The MstSession to drive.
        delay   : Seconds to wait between steps.
        on_step : Optional callback(Step) fired after every step.
        outcome : Set once execute() returns.
    """

    def __init__(
        self,
        session: MstSession,
        delay: float = AUTO_RUN_DELAY,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.session: MstSession                   = session
        self.delay:   float                        = max(0.0, delay)
        self.on_step: Optional[Callable[[Step], None]] = on_step
        self.outcome: Optional[AutoRunOutcome]     = None
        self._claimed: bool                        = False
        self._epoch:   int                         = -1

    def claim(self) -> None:
        """Take the session's single auto-run slot or raise AutoRunActive."""
        if self._claimed:
            return
        if not self.session.try_claim_auto_run():
            raise AutoRunActive("An auto-run is already in progress.")
        self._claimed = True
        self._epoch = self.session.epoch
        # a stop pressed before this run started must not cancel it
        self.session.cancel_event.clear()

    def ceiling(self) -> int:
        """Init step + one per edge + the finishing step."""
        graph = self.session.graph
        return (graph.edge_count() if graph else 0) + 2

    def execute(self) -> AutoRunOutcome:
        self.claim()
        session = self.session
        cancel = session.cancel_event
        limit = self.ceiling()
        outcome = AutoRunOutcome.CEILING
        logger.info("Auto-run started (%s, limit %d)", session.algorithm, limit)

        try:
            for i in range(limit):
                if cancel.is_set():
                    outcome = AutoRunOutcome.CANCELLED
                    break

                step = session.step_once(expected_epoch=self._epoch)
                if step is None:
                    outcome = AutoRunOutcome.INVALIDATED
                    break
                if self.on_step is not None:
                    self.on_step(step)
                if step.is_final:
                    outcome = AutoRunOutcome.COMPLETED
                    break

                if i + 1 < limit:
                    cancel.wait(self.delay)
            else:
                logger.warning("Auto-run hit its ceiling of %d steps", limit)
        finally:
            self.outcome = outcome
            self._claimed = False
            session.release_auto_run()

        session.append_log(_TERMINAL_LINES[outcome].format(limit=limit))
        logger.info("Auto-run ended: %s", outcome.value)
        return outcome


_TERMINAL_LINES = {
    AutoRunOutcome.COMPLETED:   "⏹ Auto-run finished.",
    AutoRunOutcome.CANCELLED:   "🛑 Auto-run stopped by user.",
    AutoRunOutcome.INVALIDATED: "🔄 Auto-run abandoned: graph was reset.",
    AutoRunOutcome.CEILING:     "⚠ Auto-run stopped after {limit} steps.",
}


def run_auto(
    session: MstSession,
    delay: float = AUTO_RUN_DELAY,
    on_step: Optional[Callable[[Step], None]] = None,
) -> AutoRunOutcome:
    """Claim and run to the end on the calling thread."""
    return AutoRun(session, delay=delay, on_step=on_step).execute()
