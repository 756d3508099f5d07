"""Practice domain model.

Roster, drill library and curriculum are inputs owned by the persistence
collaborator. Segment, StationAssignment and PracticePlan are the planner
output. Everything is frozen: the planner builds new values, it never edits
its inputs.
"""

from dataclasses import dataclass, field

from diamond_plans.domain.enums import (
    CoachRole,
    DrillCategory,
    PracticeFormat,
    SegmentType,
    SkillLevel,
    SkillLevelTarget,
)


@dataclass(frozen=True)
class Player:
    """Rostered player.

    Attributes:
        id: Stable player identifier
        name: Display name
        skill_level: Skill tier used for group balancing
        is_active: False once soft-deactivated by roster management
    """

    id: str
    name: str
    skill_level: SkillLevel
    is_active: bool = True


@dataclass(frozen=True)
class Coach:
    """Coach profile.

    Attributes:
        id: Stable coach identifier
        full_name: Display name
        role: Head or assistant coach
    """

    id: str
    full_name: str
    role: CoachRole

    @property
    def is_head(self) -> bool:
        return self.role == CoachRole.HEAD


@dataclass(frozen=True)
class Drill:
    """Drill library entry.

    Only id, name and category drive planning. The sizing fields and the
    coaching content are carried through to the agenda untouched.
    """

    id: str
    name: str
    category: DrillCategory
    duration_minutes: int
    min_kids: int = 1
    max_kids: int = 12
    min_coaches: int = 1
    max_coaches: int = 2
    skill_level_target: SkillLevelTarget = SkillLevelTarget.ALL

    # ---- Coaching content (opaque to the planner) ----
    equipment: tuple[str, ...] = ()
    setup_instructions: str = ""
    how_to_explain_to_kids: str = ""
    step_by_step: tuple[str, ...] = ()
    coaching_points: tuple[str, ...] = ()
    common_mistakes: tuple[str, ...] = ()
    progressions: str = ""
    regressions: str = ""
    fun_factor: int = 3
    week_introduced: int = 1


@dataclass(frozen=True)
class CurriculumEntry:
    """A drill bound to a week and a segment slot.

    Attributes:
        week_number: Season week (1-based)
        drill: Drill assigned to the slot
        segment_type: Slot the drill fills (warmup, station, ...)
        segment_order: Curriculum order; lower runs first
        duration_minutes: Suggested duration from the curriculum, if any
    """

    week_number: int
    drill: Drill
    segment_type: SegmentType
    segment_order: int
    duration_minutes: int | None = None

    @property
    def drill_id(self) -> str:
        return self.drill.id


# -----------------------------
# Drill reference (sum type)
# -----------------------------
@dataclass(frozen=True)
class NoDrill:
    """Segment without a configured drill (placeholder name is shown instead)."""

    drill_id: None = None


@dataclass(frozen=True)
class AssignedDrill:
    """Segment running a specific drill from the curriculum."""

    drill_id: str
    drill: Drill


DrillRef = NoDrill | AssignedDrill

NO_DRILL = NoDrill()


def drill_ref_for(entry: CurriculumEntry | None) -> DrillRef:
    """Wrap an optional curriculum pick as a DrillRef."""
    if entry is None:
        return NO_DRILL
    return AssignedDrill(drill_id=entry.drill_id, drill=entry.drill)


@dataclass(frozen=True)
class StationAssignment:
    """One physical station within a rotation.

    Attributes:
        station_index: Zero-based station slot (0 is conventionally Hitting)
        station_name: Drill name, or the slot's placeholder name
        drill: Drill running at this station for every rotation
        coach_ids: Coaches pinned to this station
        player_ids: Player group working this station during the rotation
    """

    station_index: int
    station_name: str
    drill: DrillRef
    coach_ids: tuple[str, ...]
    player_ids: tuple[str, ...]

    @property
    def drill_id(self) -> str | None:
        return self.drill.drill_id


@dataclass(frozen=True)
class Segment:
    """One timed slot of the agenda.

    Station-format rotations run their stations in parallel, so a rotation is
    a single segment whose ``stations`` hold the per-station groups.

    Attributes:
        segment_order: Zero-based position in the agenda
        segment_type: Kind of slot
        drill: Drill payload (NoDrill or AssignedDrill)
        coach_ids: Coaches attached to the slot
        player_ids: Players taking part in the slot
        station_name: Display name
        duration_minutes: Slot length
        start_offset_minutes: Minutes from practice start
        rotation_number: 1-based rotation for station slots, else None
        stations: Parallel station assignments (rotation segments only)
    """

    segment_order: int
    segment_type: SegmentType
    drill: DrillRef
    coach_ids: tuple[str, ...]
    player_ids: tuple[str, ...]
    station_name: str
    duration_minutes: int
    start_offset_minutes: int
    rotation_number: int | None = None
    stations: tuple[StationAssignment, ...] = ()

    @property
    def drill_id(self) -> str | None:
        return self.drill.drill_id

    @property
    def end_offset_minutes(self) -> int:
        return self.start_offset_minutes + self.duration_minutes

    @property
    def duration_ms(self) -> int:
        return self.duration_minutes * 60 * 1000


@dataclass(frozen=True)
class PracticePlan:
    """Planner output: the agenda plus the format decisions behind it.

    Attributes:
        segments: Ordered agenda
        format: Practice structure chosen for the roster
        num_stations: Parallel stations (0 outside station format)
        num_rotations: Station rotations (0 outside station format)
        team_game_duration: Minutes given to the team activity
        floating_coach_ids: Coaches not pinned to any station
        error: Why the practice cannot run, for unavailable plans
    """

    segments: tuple[Segment, ...]
    format: PracticeFormat
    num_stations: int = 0
    num_rotations: int = 0
    team_game_duration: int = 0
    floating_coach_ids: tuple[str, ...] = field(default=())
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.format == PracticeFormat.UNAVAILABLE

    @property
    def total_duration_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.segments)
