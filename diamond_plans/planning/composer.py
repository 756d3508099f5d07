"""PlanComposer - roster + curriculum → timed 60-minute agenda.

Format decision, in order:
1. No coaches            → unavailable plan
2. No players            → unavailable plan
3. One player            → solo timeline, one-on-one format
4. < 4 players or 1 coach → solo (whole-team) timeline
5. Otherwise             → station format, min(coaches, 4) stations

Configuration problems never raise: callers always get a renderable plan.
Every returned agenda tiles exactly PRACTICE_LENGTH_MINUTES.
"""

import random
from collections.abc import Collection, Sequence

from diamond_plans.domain.enums import DrillCategory, PracticeFormat, SegmentType
from diamond_plans.domain.models import (
    NO_DRILL,
    Coach,
    CurriculumEntry,
    DrillRef,
    Player,
    PracticePlan,
    Segment,
    StationAssignment,
    drill_ref_for,
)
from diamond_plans.planning.coach_assignment import assign_coaches
from diamond_plans.planning.drill_picker import pick_drill
from diamond_plans.planning.errors import PlanningInvariantError
from diamond_plans.planning.grouping import rotate_groups, split_players
from diamond_plans.planning.invariants import (
    MAX_STATIONS,
    MIN_PLAYERS_FOR_STATIONS,
    PRACTICE_LENGTH_MINUTES,
    ROTATIONS_DEFAULT,
    ROTATIONS_WITH_MAX_STATIONS,
    SOLO_COOLDOWN_MINUTES,
    SOLO_DRILL_BLOCKS,
    SOLO_DRILL_MINUTES,
    SOLO_TEAM_GAME_MINUTES,
    SOLO_WARMUP_MINUTES,
    SOLO_WATER_BREAK_MINUTES,
    STATION_COOLDOWN_MINUTES,
    STATION_MINUTES,
    STATION_WARMUP_MINUTES,
    STATION_WATER_BREAK_MINUTES,
    TRANSITION_MINUTES,
)
from diamond_plans.planning.observability import PlannerStage, log_event, log_invariant_failure, log_stage_event, timing
from diamond_plans.planning.validate import validate_agenda

STATION_PLACEHOLDER_NAMES: tuple[str, ...] = ("Hitting", "Fielding", "Throwing", "Baserunning")

NO_COACHES_MESSAGE = "No coaches present - cannot run practice"
NO_PLAYERS_MESSAGE = "No players present"


class _AgendaBuilder:
    """Accumulates segments while tracking order, offset and drills already used."""

    def __init__(
        self,
        curriculum: Sequence[CurriculumEntry],
        focus_overrides: Collection[DrillCategory],
        recent_drill_ids: Collection[str],
        coach_ids: tuple[str, ...],
        player_ids: tuple[str, ...],
    ):
        self.curriculum = curriculum
        self.focus_overrides = focus_overrides
        self.recent_drill_ids = recent_drill_ids
        self.coach_ids = coach_ids
        self.player_ids = player_ids
        self.segments: list[Segment] = []
        self.offset = 0
        self.used_drill_ids: set[str] = set()

    def pick(self, segment_type: SegmentType) -> CurriculumEntry | None:
        entry = pick_drill(
            self.curriculum,
            segment_type,
            self.focus_overrides,
            self.recent_drill_ids,
            self.used_drill_ids,
        )
        if entry is not None:
            self.used_drill_ids.add(entry.drill_id)
        return entry

    def push_block(self, segment_type: SegmentType, placeholder: str, duration: int) -> None:
        """Whole-team block filled from the curriculum (or a placeholder)."""
        entry = self.pick(segment_type)
        name = entry.drill.name if entry else placeholder
        self.push(segment_type, name, duration, drill=drill_ref_for(entry))

    def push(
        self,
        segment_type: SegmentType,
        name: str,
        duration: int,
        *,
        drill: DrillRef = NO_DRILL,
        coach_ids: tuple[str, ...] | None = None,
        player_ids: tuple[str, ...] | None = None,
        rotation_number: int | None = None,
        stations: tuple[StationAssignment, ...] = (),
    ) -> None:
        self.segments.append(
            Segment(
                segment_order=len(self.segments),
                segment_type=segment_type,
                drill=drill,
                coach_ids=self.coach_ids if coach_ids is None else coach_ids,
                player_ids=self.player_ids if player_ids is None else player_ids,
                station_name=name,
                duration_minutes=duration,
                start_offset_minutes=self.offset,
                rotation_number=rotation_number,
                stations=stations,
            )
        )
        self.offset += duration


def _unavailable_plan(message: str) -> PracticePlan:
    segment = Segment(
        segment_order=0,
        segment_type=SegmentType.WARMUP,
        drill=NO_DRILL,
        coach_ids=(),
        player_ids=(),
        station_name=f"Error: {message}",
        duration_minutes=PRACTICE_LENGTH_MINUTES,
        start_offset_minutes=0,
    )
    return PracticePlan(segments=(segment,), format=PracticeFormat.UNAVAILABLE, error=message)


def select_format(num_players: int, num_coaches: int) -> PracticeFormat:
    """Choose the practice format for a roster size."""
    if num_coaches == 0 or num_players == 0:
        return PracticeFormat.UNAVAILABLE
    if num_players == 1:
        return PracticeFormat.ONE_ON_ONE
    if num_players < MIN_PLAYERS_FOR_STATIONS or num_coaches == 1:
        return PracticeFormat.SOLO
    return PracticeFormat.STATIONS


def station_timing(num_stations: int) -> tuple[int, int]:
    """Rotation count and team-game minutes for a station count.

    The team game takes whatever the fixed blocks leave, so the practice
    length holds for every station count.

    Returns:
        (num_rotations, team_game_duration)
    """
    num_rotations = ROTATIONS_WITH_MAX_STATIONS if num_stations == MAX_STATIONS else ROTATIONS_DEFAULT
    station_block = num_rotations * STATION_MINUTES + (num_rotations - 1) * TRANSITION_MINUTES
    team_game = (
        PRACTICE_LENGTH_MINUTES
        - STATION_WARMUP_MINUTES
        - station_block
        - STATION_WATER_BREAK_MINUTES
        - STATION_COOLDOWN_MINUTES
    )
    return num_rotations, team_game


def build_solo_plan(builder: _AgendaBuilder, practice_format: PracticeFormat) -> PracticePlan:
    """Whole-team timeline: everyone does every block together.

    warmup 5 → 3 x drill 10 (water 2 between) → water 2 → team game 15 → cooldown 4
    """
    builder.push_block(SegmentType.WARMUP, "Warmup", SOLO_WARMUP_MINUTES)

    for i in range(SOLO_DRILL_BLOCKS):
        if i > 0:
            builder.push(SegmentType.WATER_BREAK, "Water Break", SOLO_WATER_BREAK_MINUTES)
        builder.push_block(SegmentType.STATION, f"Drill {i + 1}", SOLO_DRILL_MINUTES)

    builder.push(SegmentType.WATER_BREAK, "Water Break", SOLO_WATER_BREAK_MINUTES)
    builder.push_block(SegmentType.TEAM_ACTIVITY, "Team Game", SOLO_TEAM_GAME_MINUTES)
    builder.push_block(SegmentType.COOLDOWN, "Cooldown", SOLO_COOLDOWN_MINUTES)

    return PracticePlan(
        segments=tuple(builder.segments),
        format=practice_format,
        team_game_duration=SOLO_TEAM_GAME_MINUTES,
    )


def build_station_plan(
    builder: _AgendaBuilder,
    players: Sequence[Player],
    coaches: Sequence[Coach],
    num_stations: int,
    rng: random.Random | None,
) -> PracticePlan:
    """Station timeline: skill-balanced groups rotate through parallel stations.

    warmup → [rotation, transition]... rotation → water break → team game → cooldown

    One drill is chosen per station slot and stays there for every rotation;
    groups are reshuffled between rotations.
    """
    num_rotations, team_game = station_timing(num_stations)
    stations_format = PracticeFormat.STATIONS

    log_stage_event(PlannerStage.COACHES, "start", stations_format, coaches=len(coaches), stations=num_stations)
    binding = assign_coaches(coaches, num_stations)
    log_stage_event(PlannerStage.COACHES, "success", stations_format, floating=len(binding.floating_coach_ids))

    log_stage_event(PlannerStage.DRILLS, "start", stations_format, stations=num_stations)
    station_drills = [builder.pick(SegmentType.STATION) for _ in range(num_stations)]
    station_names = [
        entry.drill.name if entry else STATION_PLACEHOLDER_NAMES[s]
        for s, entry in enumerate(station_drills)
    ]
    log_stage_event(
        PlannerStage.DRILLS,
        "success",
        stations_format,
        configured=sum(1 for e in station_drills if e is not None),
    )

    log_stage_event(PlannerStage.GROUPING, "start", stations_format, players=len(players), groups=num_stations)
    groups = split_players(players, num_stations, rng)
    log_stage_event(PlannerStage.GROUPING, "success", stations_format)

    builder.push_block(SegmentType.WARMUP, "Warmup", STATION_WARMUP_MINUTES)

    for rot in range(num_rotations):
        if rot > 0:
            groups = rotate_groups(groups, rng)

        stations = tuple(
            StationAssignment(
                station_index=s,
                station_name=station_names[s],
                drill=drill_ref_for(station_drills[s]),
                coach_ids=binding.station_coach_ids[s],
                player_ids=tuple(p.id for p in groups[s]),
            )
            for s in range(num_stations)
        )
        builder.push(
            SegmentType.STATION,
            f"Rotation {rot + 1}",
            STATION_MINUTES,
            coach_ids=tuple(cid for station in stations for cid in station.coach_ids),
            rotation_number=rot + 1,
            stations=stations,
        )

        if rot < num_rotations - 1:
            builder.push(SegmentType.TRANSITION, "Rotate Stations", TRANSITION_MINUTES)

    builder.push(SegmentType.WATER_BREAK, "Water Break", STATION_WATER_BREAK_MINUTES)
    builder.push_block(SegmentType.TEAM_ACTIVITY, "Team Game", team_game)
    builder.push_block(SegmentType.COOLDOWN, "Cooldown / High Fives", STATION_COOLDOWN_MINUTES)

    return PracticePlan(
        segments=tuple(builder.segments),
        format=PracticeFormat.STATIONS,
        num_stations=num_stations,
        num_rotations=num_rotations,
        team_game_duration=team_game,
        floating_coach_ids=binding.floating_coach_ids,
    )


def generate_practice_plan(
    present_players: Sequence[Player],
    present_coaches: Sequence[Coach],
    week_curriculum: Sequence[CurriculumEntry],
    focus_overrides: Collection[DrillCategory] = (),
    recent_drill_ids: Collection[str] = (),
    rng: random.Random | None = None,
) -> PracticePlan:
    """Generate the practice plan for the players and coaches present.

    Args:
        present_players: Players at practice
        present_coaches: Coaches at practice
        week_curriculum: Curriculum entries for the practice week
        focus_overrides: Drill categories to emphasise
        recent_drill_ids: Drills used in recent practices (deprioritised)
        rng: Random source for grouping; pass a seeded Random for reproducible plans

    Returns:
        PracticePlan whose agenda sums to PRACTICE_LENGTH_MINUTES

    Raises:
        PlanningInvariantError: If the assembled agenda breaks a timeline invariant
    """
    with timing("planner.generate_practice_plan", players=len(present_players), coaches=len(present_coaches)):
        log_stage_event(PlannerStage.FORMAT, "start", players=len(present_players), coaches=len(present_coaches))
        practice_format = select_format(len(present_players), len(present_coaches))
        log_stage_event(PlannerStage.FORMAT, "success", practice_format)

        if practice_format == PracticeFormat.UNAVAILABLE:
            message = NO_COACHES_MESSAGE if not present_coaches else NO_PLAYERS_MESSAGE
            log_event("practice_plan_unavailable", reason=message)
            return _unavailable_plan(message)

        builder = _AgendaBuilder(
            curriculum=week_curriculum,
            focus_overrides=frozenset(focus_overrides),
            recent_drill_ids=frozenset(recent_drill_ids),
            coach_ids=tuple(c.id for c in present_coaches),
            player_ids=tuple(p.id for p in present_players),
        )

        log_stage_event(PlannerStage.AGENDA, "start", practice_format)
        if practice_format == PracticeFormat.STATIONS:
            num_stations = min(len(present_coaches), MAX_STATIONS)
            plan = build_station_plan(builder, present_players, present_coaches, num_stations, rng)
        else:
            plan = build_solo_plan(builder, practice_format)

        try:
            validate_agenda(plan.segments)
        except PlanningInvariantError as e:
            log_stage_event(PlannerStage.AGENDA, "fail", practice_format, code=e.code)
            log_invariant_failure(e, practice_format, segments=len(plan.segments))
            raise

        log_stage_event(PlannerStage.AGENDA, "success", practice_format, segments=len(plan.segments))
        log_event(
            "practice_plan_generated",
            format=plan.format.value,
            segments=len(plan.segments),
            num_stations=plan.num_stations,
            num_rotations=plan.num_rotations,
            team_game_duration=plan.team_game_duration,
            drills_used=len(builder.used_drill_ids),
        )
        return plan
