"""
stepper.py — Step-by-Step Playback
==================================
The Stepper is the only object a viewer needs during playback.  It holds
a fully materialised step list, so next / prev / seek are plain index
moves and rewinding never re-runs the algorithm.

State machine:
    IDLE     →  load()    →  PAUSED
    PAUSED   →  play()    →  PLAYING
    PLAYING  →  pause()   →  PAUSED
    PLAYING  →  (last step reached) → FINISHED
    any      →  reset()   →  IDLE

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread.
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

import config
from algorithms.step import Step, ExplanationLevel


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.5,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state             : Current StepperState.
        steps             : The materialised run.
        current_idx       : Index into `steps` that is currently displayed.
        speed             : Seconds between auto-advance ticks.
        explanation_level : Which explanation tier `current_explanation` returns.
        on_step           : Optional callback(Step) fired every time the current step changes.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.steps:             List[Step]       = []
        self.current_idx:       int              = -1
        self.state:             StepperState     = StepperState.IDLE
        self.speed:             float            = SPEED_PRESETS[config.DEFAULT_SPEED]
        self.explanation_level: ExplanationLevel = ExplanationLevel.BEGINNER
        self.on_step:           Optional[Callable[[Step], None]] = on_step

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a finished run and show its first step."""
        self.steps       = list(steps)
        self.current_idx = -1
        if not self.steps:
            self.state = StepperState.IDLE
            return
        self.state = StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE — caller must call load() again."""
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        if self.current_idx + 1 >= len(self.steps):
            if self.steps:
                self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        if self.current_idx == len(self.steps) - 1 and self.state == StepperState.PLAYING:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        if self.state == StepperState.FINISHED and idx < len(self.steps) - 1:
            self.state = StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        if self.steps:
            self._goto(len(self.steps) - 1)
            self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed / explanation tier
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS[config.DEFAULT_SPEED])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.02, seconds)

    def set_explanation_level(self, level: ExplanationLevel) -> None:
        self.explanation_level = level

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def current_explanation(self) -> str:
        step = self.current_step
        return step.explain(self.explanation_level) if step else ""

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_complete(self) -> bool:
        """On the last step, and that step ends the run."""
        step = self.current_step
        return step is not None and self.current_idx == len(self.steps) - 1 and step.is_terminal

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.steps[idx])
