"""Canonical enums for practice planning.

All enums are string-based so they serialize to the same values the
persistence collaborator stores.
"""

from enum import StrEnum


# -----------------------------
# Roster
# -----------------------------
class SkillLevel(StrEnum):
    """Player skill tier."""

    ADVANCED = "advanced"
    BEGINNER = "beginner"


class CoachRole(StrEnum):
    """Coach role on the team."""

    HEAD = "head_coach"
    ASSISTANT = "assistant_coach"


# -----------------------------
# Drill library
# -----------------------------
class DrillCategory(StrEnum):
    """Skill area a drill trains."""

    WARMUP = "warmup"
    HITTING = "hitting"
    FIELDING = "fielding"
    THROWING = "throwing"
    BASERUNNING = "baserunning"
    GAME_PLAY = "game_play"
    COOLDOWN = "cooldown"


class SkillLevelTarget(StrEnum):
    """Which players a drill is aimed at."""

    ALL = "all"
    ADVANCED = "advanced"
    BEGINNER = "beginner"


# -----------------------------
# Agenda
# -----------------------------
class SegmentType(StrEnum):
    """Kind of timed slot in an agenda."""

    WARMUP = "warmup"
    STATION = "station"
    TRANSITION = "transition"
    WATER_BREAK = "water_break"
    TEAM_ACTIVITY = "team_activity"
    COOLDOWN = "cooldown"


# Slots a curriculum entry may be bound to (transitions are never curriculum-driven)
CURRICULUM_SLOTS: frozenset[SegmentType] = frozenset(
    {
        SegmentType.WARMUP,
        SegmentType.STATION,
        SegmentType.WATER_BREAK,
        SegmentType.TEAM_ACTIVITY,
        SegmentType.COOLDOWN,
    }
)


class PracticeFormat(StrEnum):
    """Structure of a generated practice plan."""

    SOLO = "solo"
    ONE_ON_ONE = "one_on_one"
    STATIONS = "stations"
    UNAVAILABLE = "unavailable"


# -----------------------------
# Live practice
# -----------------------------
class TimerState(StrEnum):
    """Segment countdown state."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class SessionState(StrEnum):
    """Live practice session state."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
