"""
engine/
-------
Playback & recording over materialised runs.

    from engine import Recorder, compare
    rec = Recorder(); rec.record("astar", graph, "A", "F")
    rec.stepper.next_step()
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Stepper", "StepperState", "SPEED_PRESETS",
    "Recorder", "RunMetrics", "ComparisonResult", "compare",
]
