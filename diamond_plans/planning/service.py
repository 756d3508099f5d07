"""Plan generation entry point for the persistence collaborator.

Takes the stored-shape input, runs the composer and returns the stored-shape
plan. Seeds come from the caller, then from settings; no seed means a fresh
grouping every call.
"""

import random

from loguru import logger

from diamond_plans.config.settings import settings
from diamond_plans.planning.composer import generate_practice_plan
from diamond_plans.schemas.plan import GroupingInputSchema, PracticePlanSchema


def generate_plan_from_input(payload: GroupingInputSchema, seed: int | None = None) -> PracticePlanSchema:
    """Generate a practice plan from a persistence payload.

    Args:
        payload: Grouping input
        seed: Optional seed for reproducible grouping (defaults to settings.plan_seed)

    Returns:
        PracticePlanSchema ready to store
    """
    seed = seed if seed is not None else settings.plan_seed
    rng = random.Random(seed) if seed is not None else None

    curriculum = payload.week_curriculum()
    logger.info(
        "Generating practice plan",
        week_number=payload.week_number,
        players=len(payload.present_players),
        coaches=len(payload.present_coaches),
        curriculum_entries=len(curriculum),
        seeded=seed is not None,
    )

    plan = generate_practice_plan(
        payload.players(),
        payload.coaches(),
        curriculum,
        focus_overrides=payload.focus_overrides,
        recent_drill_ids=payload.recent_drill_ids,
        rng=rng,
    )
    return PracticePlanSchema.from_domain(plan)
