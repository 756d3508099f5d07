"""SegmentTimer - one countdown driven by polled ticks.

States: idle → running ↔ paused → completed, and back to idle via reset.

The host calls ``tick()`` from its frame or interval loop. Misuse from UI
double-taps (pause while not running, resume while not paused, start while a
countdown is live) is ignored rather than raised.
"""

from collections.abc import Callable

from loguru import logger

from diamond_plans.domain.enums import TimerState
from diamond_plans.live.time_source import (
    Clock,
    calculate_remaining,
    format_time,
    is_complete,
    is_warning,
    wall_clock_ms,
)

TimerCallback = Callable[[], None]


class SegmentTimer:
    """Wall-clock countdown with one-shot warning and completion callbacks.

    Attributes:
        on_complete: Called once when a started countdown reaches zero
        on_warning: Called once per start when the warning zone is entered
    """

    def __init__(
        self,
        clock: Clock = wall_clock_ms,
        on_complete: TimerCallback | None = None,
        on_warning: TimerCallback | None = None,
    ):
        self._clock = clock
        self.on_complete = on_complete
        self.on_warning = on_warning

        self._state = TimerState.IDLE
        self._start_ms = 0.0
        self._duration_ms = 0.0
        self._paused_remaining_ms = 0.0
        self._warning_fired = False
        self._complete_fired = False

    # ---- Read-only state ----

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def warning_fired(self) -> bool:
        return self._warning_fired

    @property
    def complete_fired(self) -> bool:
        return self._complete_fired

    @property
    def remaining_ms(self) -> float:
        """Remaining time, recomputed from the wall clock while running."""
        if self._state == TimerState.RUNNING:
            return calculate_remaining(self._start_ms, self._duration_ms, self._clock())
        if self._state == TimerState.PAUSED:
            return self._paused_remaining_ms
        if self._state == TimerState.COMPLETED:
            return 0.0
        return self._duration_ms

    @property
    def formatted_time(self) -> str:
        return format_time(self.remaining_ms)

    @property
    def is_warning(self) -> bool:
        return is_warning(self.remaining_ms)

    @property
    def is_complete(self) -> bool:
        # An idle timer that was never started has nothing to complete
        if self._state == TimerState.IDLE:
            return False
        return is_complete(self.remaining_ms)

    # ---- Transitions ----

    def start(self, duration_ms: float) -> None:
        """Start a countdown; ignored while one is running or paused."""
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            logger.debug("timer: start ignored", state=self._state.value)
            return
        self._begin(duration_ms)

    def restart(self, duration_ms: float) -> None:
        """Start a new countdown regardless of the current state."""
        self._begin(duration_ms)

    def _begin(self, duration_ms: float) -> None:
        self._duration_ms = max(0.0, float(duration_ms))
        self._start_ms = self._clock()
        self._paused_remaining_ms = self._duration_ms
        self._warning_fired = False
        self._complete_fired = False
        self._state = TimerState.RUNNING
        logger.debug("timer: started", duration_ms=self._duration_ms)

    def restore(self, duration_ms: float, remaining_ms: float, *, paused: bool = False) -> None:
        """Rebuild a countdown that was checkpointed with ``remaining_ms`` left.

        A warning already due at checkpoint time is treated as fired.
        """
        self._begin(duration_ms)
        remaining = min(max(0.0, float(remaining_ms)), self._duration_ms)
        self._start_ms = self._clock() - (self._duration_ms - remaining)
        self._paused_remaining_ms = remaining
        self._warning_fired = is_warning(remaining)
        if paused:
            self._state = TimerState.PAUSED

    def pause(self) -> None:
        """Freeze the countdown; only valid while running."""
        if self._state != TimerState.RUNNING:
            logger.debug("timer: pause ignored", state=self._state.value)
            return
        self._paused_remaining_ms = calculate_remaining(self._start_ms, self._duration_ms, self._clock())
        self._state = TimerState.PAUSED
        logger.debug("timer: paused", remaining_ms=self._paused_remaining_ms)

    def resume(self) -> None:
        """Continue a paused countdown from where it stopped."""
        if self._state != TimerState.PAUSED:
            logger.debug("timer: resume ignored", state=self._state.value)
            return
        # Virtual start time keeps the wall-clock derivation valid
        self._start_ms = self._clock() - (self._duration_ms - self._paused_remaining_ms)
        self._state = TimerState.RUNNING
        logger.debug("timer: resumed", remaining_ms=self._paused_remaining_ms)

    def reset(self) -> None:
        """Back to the full duration, idle, callbacks re-armed. Does not restart."""
        self._paused_remaining_ms = self._duration_ms
        self._warning_fired = False
        self._complete_fired = False
        self._state = TimerState.IDLE
        logger.debug("timer: reset", duration_ms=self._duration_ms)

    def tick(self) -> float:
        """Advance the countdown from the wall clock and fire due callbacks.

        Returns:
            Remaining milliseconds after this tick
        """
        if self._state != TimerState.RUNNING:
            return self.remaining_ms

        remaining = calculate_remaining(self._start_ms, self._duration_ms, self._clock())

        if not self._warning_fired and is_warning(remaining):
            self._warning_fired = True
            logger.debug("timer: warning", remaining_ms=remaining)
            if self.on_warning is not None:
                self.on_warning()

        if not self._complete_fired and is_complete(remaining):
            self._complete_fired = True
            self._state = TimerState.COMPLETED
            logger.debug("timer: completed", duration_ms=self._duration_ms)
            if self.on_complete is not None:
                self.on_complete()

        return remaining
