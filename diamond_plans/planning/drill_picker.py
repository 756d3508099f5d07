"""Drill picker - choose curriculum drills for agenda slots.

Each preference stage only narrows the pool when something survives it, so a
thin curriculum still yields a drill rather than nothing.
"""

from collections.abc import Collection, Iterable, Sequence

from loguru import logger

from diamond_plans.domain.enums import DrillCategory, SegmentType
from diamond_plans.domain.models import CurriculumEntry


def _prefer(pool: list[CurriculumEntry], keep) -> list[CurriculumEntry]:
    narrowed = [entry for entry in pool if keep(entry)]
    return narrowed or pool


def pick_drill(
    curriculum: Sequence[CurriculumEntry],
    segment_type: SegmentType,
    focus_overrides: Collection[DrillCategory] = (),
    recent_drill_ids: Collection[str] = (),
    used_drill_ids: Collection[str] = (),
) -> CurriculumEntry | None:
    """Pick the curriculum entry for one agenda slot.

    Cascade:
    1. Entries for ``segment_type`` (nothing → None)
    2. Drill category in ``focus_overrides``
    3. Drill not in ``recent_drill_ids``
    4. Drill not in ``used_drill_ids``
    5. Lowest ``segment_order`` wins

    Args:
        curriculum: Week's curriculum entries
        segment_type: Slot being filled
        focus_overrides: Categories the coach wants emphasised
        recent_drill_ids: Drills used in recent practices
        used_drill_ids: Drills already placed in this plan

    Returns:
        Chosen entry, or None when the week has nothing for this slot
    """
    pool = [entry for entry in curriculum if entry.segment_type == segment_type]
    if not pool:
        logger.debug("drill_picker: No curriculum entry", segment_type=segment_type.value)
        return None

    if focus_overrides:
        pool = _prefer(pool, lambda e: e.drill.category in focus_overrides)

    pool = _prefer(pool, lambda e: e.drill_id not in recent_drill_ids)
    pool = _prefer(pool, lambda e: e.drill_id not in used_drill_ids)

    chosen = min(pool, key=lambda e: e.segment_order)
    logger.debug(
        "drill_picker: Drill picked",
        segment_type=segment_type.value,
        drill_id=chosen.drill_id,
        candidates=len(pool),
    )
    return chosen


def curriculum_for_week(entries: Iterable[CurriculumEntry], week_number: int) -> list[CurriculumEntry]:
    """Entries for one week, in curriculum order."""
    return sorted(
        (e for e in entries if e.week_number == week_number),
        key=lambda e: e.segment_order,
    )
