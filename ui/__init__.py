"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    graph_generator,
    algorithm_selector,
    playback_controls,
    log_panel,
    result_panel,
    comparison_panel,
    pseudocode_viewer,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "graph_generator",
    "algorithm_selector",
    "playback_controls",
    "log_panel",
    "result_panel",
    "comparison_panel",
    "pseudocode_viewer",
]
