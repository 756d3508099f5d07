"""Agenda Invariant Validator.

Called by the composer before a plan is returned and by anyone handed a
stored agenda. Raises PlanningInvariantError if any invariant is violated.

ARCHITECTURAL COMMITMENT: CONTIGUOUS TIMELINE
=============================================
Segments tile the practice with no gaps and no overlaps, starting at
minute 0 and ending exactly at PRACTICE_LENGTH_MINUTES.
"""

from collections.abc import Sequence

from diamond_plans.domain.models import Segment
from diamond_plans.planning.errors import PlanningInvariantError
from diamond_plans.planning.invariants import PRACTICE_LENGTH_MINUTES


def validate_agenda(
    segments: Sequence[Segment],
    *,
    practice_length_minutes: int = PRACTICE_LENGTH_MINUTES,
) -> None:
    """Validate an agenda against the timeline invariants.

    Args:
        segments: Agenda in order
        practice_length_minutes: Required total duration

    Raises:
        PlanningInvariantError: If any invariant is violated
    """
    if not segments:
        raise PlanningInvariantError("INVALID_AGENDA", ["EMPTY_AGENDA"])

    errors: list[str] = []

    # ---- Ordering ----
    if [s.segment_order for s in segments] != list(range(len(segments))):
        errors.append("NON_SEQUENTIAL_ORDER")

    if any(s.duration_minutes < 0 for s in segments):
        errors.append("NEGATIVE_DURATION")

    # ---- Contiguity ----
    if segments[0].start_offset_minutes != 0:
        errors.append("NONZERO_START_OFFSET")

    for prev, nxt in zip(segments, segments[1:], strict=False):
        if prev.end_offset_minutes != nxt.start_offset_minutes:
            errors.append("NON_CONTIGUOUS_SEGMENTS")
            break

    # ---- Total duration ----
    total = sum(s.duration_minutes for s in segments)
    if total != practice_length_minutes:
        errors.append("INVALID_TOTAL_DURATION")

    if errors:
        raise PlanningInvariantError("INVALID_AGENDA", errors)
