"""PracticeSession - live walk through an agenda.

States: not_started → active ↔ paused → completed.

The session owns its SegmentTimer and reacts to the timer's completion
callback: it advances to the next segment, or completes the practice when the
last segment runs out. Navigation past either end is ignored.
"""

from collections.abc import Callable, Sequence

from loguru import logger

from diamond_plans.domain.enums import SessionState, TimerState
from diamond_plans.domain.models import Segment
from diamond_plans.live.time_source import Clock, format_time, wall_clock_ms
from diamond_plans.live.timer import SegmentTimer, TimerCallback
from diamond_plans.schemas.plan import SegmentSchema
from diamond_plans.schemas.session import PracticeSnapshot, SessionCheckpoint

SegmentCallback = Callable[[Segment], None]


class PracticeSession:
    """One live practice.

    Args:
        clock: Wall-clock source in milliseconds
        on_warning: Alert hook for the 30-second warning (vibration, etc.)
        on_segment_complete: Alert hook called with each segment whose countdown ran out
    """

    def __init__(
        self,
        clock: Clock = wall_clock_ms,
        on_warning: TimerCallback | None = None,
        on_segment_complete: SegmentCallback | None = None,
    ):
        self._timer = SegmentTimer(clock=clock, on_complete=self._handle_segment_complete, on_warning=on_warning)
        self.on_segment_complete = on_segment_complete

        self._session_id: str | None = None
        self._segments: tuple[Segment, ...] = ()
        self._index = 0
        self._state = SessionState.NOT_STARTED

    # ---- Session state ----

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def timer(self) -> SegmentTimer:
        return self._timer

    @property
    def is_active(self) -> bool:
        return self._state in (SessionState.ACTIVE, SessionState.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self._state == SessionState.PAUSED

    # ---- Derived values ----

    @property
    def current_segment(self) -> Segment | None:
        if not self._segments:
            return None
        return self._segments[self._index]

    @property
    def next_segment_preview(self) -> Segment | None:
        if self._index + 1 < len(self._segments):
            return self._segments[self._index + 1]
        return None

    @property
    def total_segments(self) -> int:
        return len(self._segments)

    @property
    def remaining_ms(self) -> float:
        # A finished practice reads 0:00 even after an early end reset the timer
        if self._state == SessionState.COMPLETED:
            return 0.0
        return self._timer.remaining_ms

    @property
    def formatted_time(self) -> str:
        return format_time(self.remaining_ms)

    @property
    def is_timer_warning(self) -> bool:
        if self._state == SessionState.COMPLETED:
            return False
        return self._timer.is_warning

    @property
    def is_timer_complete(self) -> bool:
        return self._state == SessionState.COMPLETED or self._timer.is_complete

    @property
    def progress_percent(self) -> float:
        """Share of the current segment already elapsed, 0-100."""
        segment = self.current_segment
        if segment is None or self._state == SessionState.NOT_STARTED:
            return 0.0
        if self._state == SessionState.COMPLETED:
            return 100.0
        total_ms = segment.duration_ms
        if total_ms == 0:
            return 100.0
        elapsed = total_ms - self._timer.remaining_ms
        return min(100.0, max(0.0, elapsed / total_ms * 100))

    # ---- Actions ----

    def start_practice(self, session_id: str, agenda: Sequence[Segment]) -> None:
        """Begin walking ``agenda`` from its first segment.

        A live practice is replaced: the new agenda starts over at segment 0.
        """
        if not agenda:
            logger.warning("practice_session: Empty agenda, not starting", session_id=session_id)
            return
        if self.is_active:
            logger.info(
                "practice_session: Replacing live practice",
                previous_session_id=self._session_id,
                session_id=session_id,
            )

        self._session_id = session_id
        self._segments = tuple(agenda)
        self._index = 0
        logger.info("practice_session: Practice started", session_id=session_id, segments=len(self._segments))
        self._start_current()

    def go_to_next_segment(self) -> None:
        if not self.is_active or self._index >= len(self._segments) - 1:
            logger.debug("practice_session: next ignored", index=self._index, state=self._state.value)
            return
        self._index += 1
        self._start_current()

    def go_to_prev_segment(self) -> None:
        if not self.is_active or self._index <= 0:
            logger.debug("practice_session: prev ignored", index=self._index, state=self._state.value)
            return
        self._index -= 1
        self._start_current()

    def pause_timer(self) -> None:
        self._timer.pause()
        if self._state == SessionState.ACTIVE and self._timer.state == TimerState.PAUSED:
            self._state = SessionState.PAUSED

    def resume_timer(self) -> None:
        self._timer.resume()
        if self._state == SessionState.PAUSED and self._timer.state == TimerState.RUNNING:
            self._state = SessionState.ACTIVE

    def complete_practice(self) -> None:
        """End the practice early, from any segment."""
        if not self.is_active:
            logger.debug("practice_session: complete ignored", state=self._state.value)
            return
        self._timer.reset()
        self._state = SessionState.COMPLETED
        logger.info(
            "practice_session: Practice ended by coach",
            session_id=self._session_id,
            index=self._index,
            total=len(self._segments),
        )

    def tick(self) -> PracticeSnapshot:
        """Drive the countdown (may advance or complete) and report state."""
        self._timer.tick()
        return self.snapshot()

    # ---- Internal ----

    def _start_current(self) -> None:
        segment = self._segments[self._index]
        self._state = SessionState.ACTIVE
        self._timer.restart(segment.duration_ms)
        logger.debug(
            "practice_session: Segment started",
            index=self._index,
            segment_type=segment.segment_type.value,
            name=segment.station_name,
            duration_minutes=segment.duration_minutes,
        )

    def _handle_segment_complete(self) -> None:
        finished = self._segments[self._index]
        if self.on_segment_complete is not None:
            self.on_segment_complete(finished)

        if self._index < len(self._segments) - 1:
            self._index += 1
            self._start_current()
            return

        self._state = SessionState.COMPLETED
        logger.info("practice_session: Practice completed", session_id=self._session_id, segments=len(self._segments))

    # ---- Boundary ----

    def snapshot(self) -> PracticeSnapshot:
        current = self.current_segment
        upcoming = self.next_segment_preview
        return PracticeSnapshot(
            state=self._state,
            session_id=self._session_id,
            current_index=self._index,
            total_segments=self.total_segments,
            remaining_ms=self.remaining_ms,
            formatted_time=self.formatted_time,
            is_warning=self.is_timer_warning,
            is_complete=self.is_timer_complete,
            progress_percent=self.progress_percent,
            current_segment=SegmentSchema.from_domain(current) if current else None,
            next_segment=SegmentSchema.from_domain(upcoming) if upcoming else None,
        )

    def checkpoint(self) -> SessionCheckpoint | None:
        """Resumable state, or None before the practice starts."""
        if self._state == SessionState.NOT_STARTED:
            return None
        return SessionCheckpoint(
            session_id=self._session_id or "",
            segments=[SegmentSchema.from_domain(s) for s in self._segments],
            current_index=self._index,
            remaining_ms=self.remaining_ms,
            state=self._state,
        )

    @classmethod
    def restore(
        cls,
        checkpoint: SessionCheckpoint,
        clock: Clock = wall_clock_ms,
        on_warning: TimerCallback | None = None,
        on_segment_complete: SegmentCallback | None = None,
    ) -> "PracticeSession":
        """Rebuild a session from a stored checkpoint.

        Active sessions keep counting down from the stored remaining time,
        paused sessions stay paused, completed sessions stay completed.
        """
        session = cls(clock=clock, on_warning=on_warning, on_segment_complete=on_segment_complete)
        session._session_id = checkpoint.session_id
        session._segments = tuple(s.to_domain() for s in checkpoint.segments)
        session._index = checkpoint.current_index
        session._state = checkpoint.state

        if checkpoint.state != SessionState.COMPLETED:
            segment = session._segments[session._index]
            session._timer.restore(
                segment.duration_ms,
                checkpoint.remaining_ms,
                paused=checkpoint.state == SessionState.PAUSED,
            )

        logger.info(
            "practice_session: Session restored",
            session_id=checkpoint.session_id,
            index=checkpoint.current_index,
            state=checkpoint.state.value,
            remaining_ms=checkpoint.remaining_ms,
        )
        return session
