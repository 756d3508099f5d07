"""Observability for the practice planner.

Every planner log line is a structured loguru event:
- planner_stage: a stage starting, succeeding or failing, tagged with the
  practice format once it is known
- planner_timing: wall time of a timed block and whether it raised
- PLANNING_INVARIANT_FAILED: an agenda that broke the timeline rules
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum

from loguru import logger

from diamond_plans.domain.enums import PracticeFormat
from diamond_plans.planning.errors import PlanningInvariantError

LogValue = str | int | float | bool | None

STAGE_STATUSES = frozenset({"start", "success", "fail"})


class PlannerStage(StrEnum):
    """Phases of plan generation, in the order the composer runs them."""

    FORMAT = "format_select"
    COACHES = "coach_assignment"
    DRILLS = "drill_pick"
    GROUPING = "player_grouping"
    AGENDA = "agenda_assemble"


def log_event(event: str, **fields: LogValue) -> None:
    logger.info(event, **fields)


def log_stage_event(
    stage: PlannerStage,
    status: str,
    practice_format: PracticeFormat | None = None,
    **meta: LogValue,
) -> None:
    """Log a planner stage transition.

    Args:
        stage: Planner stage
        status: "start", "success" or "fail"
        practice_format: Format the plan is being built in; None before it is chosen
        **meta: Stage-specific counts (players, stations, ...)

    Raises:
        ValueError: If status is not one of STAGE_STATUSES
    """
    if status not in STAGE_STATUSES:
        raise ValueError(f"Status must be one of {sorted(STAGE_STATUSES)}, got: {status}")

    log_event(
        "planner_stage",
        stage=stage.value,
        status=status,
        practice_format=practice_format.value if practice_format else None,
        **meta,
    )


@contextmanager
def timing(metric_name: str, **context: LogValue) -> Iterator[None]:
    """Time a block and log its duration in milliseconds.

    The event is logged even when the block raises, with ``ok=False``.

    Args:
        metric_name: Metric name (e.g., "planner.generate_practice_plan")
        **context: Extra fields for the timing event (roster sizes, ...)
    """
    start_time = time.monotonic()
    ok = False
    try:
        yield
        ok = True
    finally:
        log_event(
            "planner_timing",
            metric=metric_name,
            duration_ms=round((time.monotonic() - start_time) * 1000, 3),
            ok=ok,
            **context,
        )


def log_invariant_failure(
    err: PlanningInvariantError,
    practice_format: PracticeFormat | None = None,
    **context: LogValue,
) -> None:
    """Log a broken agenda before the error is re-raised.

    Args:
        err: The violation
        practice_format: Format of the plan that failed, if a plan was being built
        **context: Where the agenda came from (segment count, file path, ...)
    """
    logger.error(
        "PLANNING_INVARIANT_FAILED",
        code=err.code,
        details=err.details,
        practice_format=practice_format.value if practice_format else None,
        **context,
    )
