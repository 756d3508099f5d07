"""Root conftest for all tests.

This file makes shared fixtures available across all test modules:
roster and curriculum builders, a manually driven clock, and a seeded
random source.
"""

import random
from collections.abc import Callable

import pytest
from loguru import logger

from diamond_plans.domain.enums import CoachRole, DrillCategory, SegmentType, SkillLevel
from diamond_plans.domain.models import Coach, CurriculumEntry, Drill, Player


class ManualClock:
    """Millisecond clock that only moves when a test advances it."""

    def __init__(self, start_ms: float = 1_700_000_000_000.0):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


@pytest.fixture(autouse=True)
def quiet_logger():
    """Drop log output so tests don't write into closed capture streams."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible grouping."""
    return random.Random(1234)


@pytest.fixture
def make_players() -> Callable[[int, int], list[Player]]:
    """Build a roster with the given number of advanced and beginner players."""

    def _make(advanced: int, beginner: int) -> list[Player]:
        players = [Player(id=f"adv-{i}", name=f"Advanced {i}", skill_level=SkillLevel.ADVANCED) for i in range(advanced)]
        players += [Player(id=f"beg-{i}", name=f"Beginner {i}", skill_level=SkillLevel.BEGINNER) for i in range(beginner)]
        return players

    return _make


@pytest.fixture
def make_coaches() -> Callable[..., list[Coach]]:
    """Build a coaching staff: ``heads`` head coaches followed by ``assistants`` assistants."""

    def _make(assistants: int, heads: int = 1) -> list[Coach]:
        coaches = [Coach(id=f"head-{i}", full_name=f"Head {i}", role=CoachRole.HEAD) for i in range(heads)]
        coaches += [Coach(id=f"asst-{i}", full_name=f"Assistant {i}", role=CoachRole.ASSISTANT) for i in range(assistants)]
        return coaches

    return _make


def _entry(drill_id: str, category: DrillCategory, slot: SegmentType, order: int, week: int = 1) -> CurriculumEntry:
    drill = Drill(id=drill_id, name=drill_id.replace("-", " ").title(), category=category, duration_minutes=8)
    return CurriculumEntry(week_number=week, drill=drill, segment_type=slot, segment_order=order)


@pytest.fixture
def make_entry() -> Callable[..., CurriculumEntry]:
    return _entry


@pytest.fixture
def week_curriculum() -> list[CurriculumEntry]:
    """A full week: one warmup, five station drills, a team game and a cooldown."""
    return [
        _entry("coach-says", DrillCategory.WARMUP, SegmentType.WARMUP, 1),
        _entry("tee-ball-blast", DrillCategory.HITTING, SegmentType.STATION, 2),
        _entry("hot-potato", DrillCategory.FIELDING, SegmentType.STATION, 3),
        _entry("rocket-arm", DrillCategory.THROWING, SegmentType.STATION, 4),
        _entry("home-to-first", DrillCategory.BASERUNNING, SegmentType.STATION, 5),
        _entry("target-throw", DrillCategory.THROWING, SegmentType.STATION, 6),
        _entry("freeze-tag", DrillCategory.GAME_PLAY, SegmentType.TEAM_ACTIVITY, 7),
        _entry("team-cheer", DrillCategory.COOLDOWN, SegmentType.COOLDOWN, 8),
    ]
