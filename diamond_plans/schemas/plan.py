"""Pydantic schemas for the persistence collaborator.

GroupingInputSchema is what storage hands the planner; PracticePlanSchema is
what the planner hands back for storage (and what a stored agenda is read
from on reload). Each schema converts to and from the frozen domain model.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from diamond_plans.domain.enums import (
    CURRICULUM_SLOTS,
    CoachRole,
    DrillCategory,
    PracticeFormat,
    SegmentType,
    SkillLevel,
    SkillLevelTarget,
)
from diamond_plans.domain.models import (
    NO_DRILL,
    AssignedDrill,
    Coach,
    CurriculumEntry,
    Drill,
    DrillRef,
    Player,
    PracticePlan,
    Segment,
    StationAssignment,
)
from diamond_plans.planning.drill_picker import curriculum_for_week


class PlayerSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    skill_level: SkillLevel
    is_active: bool = True

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name, skill_level=self.skill_level, is_active=self.is_active)


class CoachSchema(BaseModel):
    id: str = Field(..., min_length=1)
    full_name: str
    role: CoachRole

    def to_domain(self) -> Coach:
        return Coach(id=self.id, full_name=self.full_name, role=self.role)


class DrillSchema(BaseModel):
    """Drill library record; coaching content is carried verbatim."""

    id: str = Field(..., min_length=1)
    name: str
    category: DrillCategory
    duration_minutes: int = Field(..., ge=0)
    min_kids: int = 1
    max_kids: int = 12
    min_coaches: int = 1
    max_coaches: int = 2
    skill_level_target: SkillLevelTarget = SkillLevelTarget.ALL
    equipment: list[str] = []
    setup_instructions: str = ""
    how_to_explain_to_kids: str = ""
    step_by_step: list[str] = []
    coaching_points: list[str] = []
    common_mistakes: list[str] = []
    progressions: str = ""
    regressions: str = ""
    fun_factor: int = 3
    week_introduced: int = 1

    def to_domain(self) -> Drill:
        data = self.model_dump()
        for key in ("equipment", "step_by_step", "coaching_points", "common_mistakes"):
            data[key] = tuple(data[key])
        return Drill(**data)

    @classmethod
    def from_domain(cls, drill: Drill) -> "DrillSchema":
        return cls(
            id=drill.id,
            name=drill.name,
            category=drill.category,
            duration_minutes=drill.duration_minutes,
            min_kids=drill.min_kids,
            max_kids=drill.max_kids,
            min_coaches=drill.min_coaches,
            max_coaches=drill.max_coaches,
            skill_level_target=drill.skill_level_target,
            equipment=list(drill.equipment),
            setup_instructions=drill.setup_instructions,
            how_to_explain_to_kids=drill.how_to_explain_to_kids,
            step_by_step=list(drill.step_by_step),
            coaching_points=list(drill.coaching_points),
            common_mistakes=list(drill.common_mistakes),
            progressions=drill.progressions,
            regressions=drill.regressions,
            fun_factor=drill.fun_factor,
            week_introduced=drill.week_introduced,
        )


class CurriculumEntrySchema(BaseModel):
    week_number: int = Field(..., ge=1)
    segment_type: SegmentType
    segment_order: int
    duration_minutes: int | None = None
    drill: DrillSchema

    @field_validator("segment_type")
    @classmethod
    def validate_slot(cls, value: SegmentType) -> SegmentType:
        """Transitions are generated by the planner, never scheduled by the curriculum."""
        if value not in CURRICULUM_SLOTS:
            raise ValueError(f"segment_type {value} cannot be bound to a curriculum entry")
        return value

    def to_domain(self) -> CurriculumEntry:
        return CurriculumEntry(
            week_number=self.week_number,
            drill=self.drill.to_domain(),
            segment_type=self.segment_type,
            segment_order=self.segment_order,
            duration_minutes=self.duration_minutes,
        )


class GroupingInputSchema(BaseModel):
    """Everything the planner needs for one practice.

    When ``week_number`` is set, entries for other weeks are ignored.
    """

    present_players: list[PlayerSchema] = []
    present_coaches: list[CoachSchema] = []
    curriculum: list[CurriculumEntrySchema] = []
    focus_overrides: list[DrillCategory] = []
    recent_drill_ids: list[str] = []
    week_number: int | None = Field(default=None, ge=1)

    def players(self) -> list[Player]:
        return [p.to_domain() for p in self.present_players]

    def coaches(self) -> list[Coach]:
        return [c.to_domain() for c in self.present_coaches]

    def week_curriculum(self) -> list[CurriculumEntry]:
        entries = [e.to_domain() for e in self.curriculum]
        if self.week_number is None:
            return entries
        return curriculum_for_week(entries, self.week_number)


def _drill_ref(drill: DrillSchema | None) -> DrillRef:
    if drill is None:
        return NO_DRILL
    return AssignedDrill(drill_id=drill.id, drill=drill.to_domain())


def _check_drill_payload(drill_id: str | None, drill: DrillSchema | None) -> None:
    if drill_id is not None and drill is None:
        raise ValueError(f"drill_id {drill_id} has no drill payload")
    if drill is not None and drill_id is not None and drill.id != drill_id:
        raise ValueError(f"drill_id {drill_id} does not match drill payload {drill.id}")


class StationAssignmentSchema(BaseModel):
    station_index: int = Field(..., ge=0)
    station_name: str
    drill_id: str | None = None
    drill: DrillSchema | None = None
    coach_ids: list[str] = []
    player_ids: list[str] = []

    @model_validator(mode="after")
    def validate_drill(self) -> "StationAssignmentSchema":
        _check_drill_payload(self.drill_id, self.drill)
        if self.drill is not None:
            self.drill_id = self.drill.id
        return self

    def to_domain(self) -> StationAssignment:
        return StationAssignment(
            station_index=self.station_index,
            station_name=self.station_name,
            drill=_drill_ref(self.drill),
            coach_ids=tuple(self.coach_ids),
            player_ids=tuple(self.player_ids),
        )

    @classmethod
    def from_domain(cls, station: StationAssignment) -> "StationAssignmentSchema":
        drill = station.drill.drill if isinstance(station.drill, AssignedDrill) else None
        return cls(
            station_index=station.station_index,
            station_name=station.station_name,
            drill_id=station.drill_id,
            drill=DrillSchema.from_domain(drill) if drill else None,
            coach_ids=list(station.coach_ids),
            player_ids=list(station.player_ids),
        )


class SegmentSchema(BaseModel):
    """Stored agenda row."""

    segment_order: int = Field(..., ge=0)
    segment_type: SegmentType
    drill_id: str | None = None
    drill: DrillSchema | None = None
    coach_ids: list[str] = []
    player_ids: list[str] = []
    station_name: str
    duration_minutes: int = Field(..., ge=0)
    start_offset_minutes: int = Field(..., ge=0)
    rotation_number: int | None = Field(default=None, ge=1)
    stations: list[StationAssignmentSchema] = []

    @model_validator(mode="after")
    def validate_drill(self) -> "SegmentSchema":
        _check_drill_payload(self.drill_id, self.drill)
        if self.drill is not None:
            self.drill_id = self.drill.id
        return self

    def to_domain(self) -> Segment:
        return Segment(
            segment_order=self.segment_order,
            segment_type=self.segment_type,
            drill=_drill_ref(self.drill),
            coach_ids=tuple(self.coach_ids),
            player_ids=tuple(self.player_ids),
            station_name=self.station_name,
            duration_minutes=self.duration_minutes,
            start_offset_minutes=self.start_offset_minutes,
            rotation_number=self.rotation_number,
            stations=tuple(s.to_domain() for s in self.stations),
        )

    @classmethod
    def from_domain(cls, segment: Segment) -> "SegmentSchema":
        drill = segment.drill.drill if isinstance(segment.drill, AssignedDrill) else None
        return cls(
            segment_order=segment.segment_order,
            segment_type=segment.segment_type,
            drill_id=segment.drill_id,
            drill=DrillSchema.from_domain(drill) if drill else None,
            coach_ids=list(segment.coach_ids),
            player_ids=list(segment.player_ids),
            station_name=segment.station_name,
            duration_minutes=segment.duration_minutes,
            start_offset_minutes=segment.start_offset_minutes,
            rotation_number=segment.rotation_number,
            stations=[StationAssignmentSchema.from_domain(s) for s in segment.stations],
        )


class PracticePlanSchema(BaseModel):
    segments: list[SegmentSchema]
    format: PracticeFormat
    num_stations: int = Field(default=0, ge=0)
    num_rotations: int = Field(default=0, ge=0)
    team_game_duration: int = Field(default=0, ge=0)
    floating_coach_ids: list[str] = []
    error: str | None = None

    def to_domain(self) -> PracticePlan:
        return PracticePlan(
            segments=tuple(s.to_domain() for s in self.segments),
            format=self.format,
            num_stations=self.num_stations,
            num_rotations=self.num_rotations,
            team_game_duration=self.team_game_duration,
            floating_coach_ids=tuple(self.floating_coach_ids),
            error=self.error,
        )

    @classmethod
    def from_domain(cls, plan: PracticePlan) -> "PracticePlanSchema":
        return cls(
            segments=[SegmentSchema.from_domain(s) for s in plan.segments],
            format=plan.format,
            num_stations=plan.num_stations,
            num_rotations=plan.num_rotations,
            team_game_duration=plan.team_game_duration,
            floating_coach_ids=list(plan.floating_coach_ids),
            error=plan.error,
        )
