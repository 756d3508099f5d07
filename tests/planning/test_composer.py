"""Tests for practice plan generation.

Tests verify that generated plans:
- Always tile exactly 60 minutes from minute 0
- Pick the right format for the roster
- Bind coaches and groups to stations consistently across rotations
- Never raise for unusable rosters
"""

import random

import pytest

from diamond_plans.domain.enums import PracticeFormat, SegmentType
from diamond_plans.planning.composer import (
    NO_COACHES_MESSAGE,
    NO_PLAYERS_MESSAGE,
    generate_practice_plan,
    select_format,
    station_timing,
)
from diamond_plans.planning.invariants import PRACTICE_LENGTH_MINUTES


def _assert_timeline(plan):
    segments = plan.segments
    assert segments[0].start_offset_minutes == 0
    for i, (current, following) in enumerate(zip(segments, segments[1:], strict=False)):
        assert current.segment_order == i
        assert current.end_offset_minutes == following.start_offset_minutes
    assert sum(s.duration_minutes for s in segments) == PRACTICE_LENGTH_MINUTES


@pytest.mark.parametrize("num_players", [1, 2, 3, 4, 5, 9, 12, 17])
@pytest.mark.parametrize("num_assistants", [0, 1, 2, 3, 5])
def test_every_roster_tiles_sixty_minutes(make_players, make_coaches, week_curriculum, rng, num_players, num_assistants):
    players = make_players(num_players // 2, num_players - num_players // 2)

    plan = generate_practice_plan(players, make_coaches(num_assistants), week_curriculum, rng=rng)

    _assert_timeline(plan)
    assert plan.total_duration_minutes == PRACTICE_LENGTH_MINUTES


def test_one_coach_twelve_players_is_solo(make_players, make_coaches, week_curriculum):
    players = make_players(6, 6)
    coaches = make_coaches(0)

    plan = generate_practice_plan(players, coaches, week_curriculum)

    assert plan.format == PracticeFormat.SOLO
    assert len(plan.segments) == 9
    assert [s.duration_minutes for s in plan.segments] == [5, 10, 2, 10, 2, 10, 2, 15, 4]
    assert plan.team_game_duration == 15
    assert plan.num_stations == 0
    for segment in plan.segments:
        assert segment.player_ids == tuple(p.id for p in players)
        assert segment.coach_ids == ("head-0",)


def test_solo_segment_types_and_drills(make_players, make_coaches, week_curriculum):
    plan = generate_practice_plan(make_players(2, 1), make_coaches(2), week_curriculum)

    assert plan.format == PracticeFormat.SOLO
    assert [s.segment_type for s in plan.segments] == [
        SegmentType.WARMUP,
        SegmentType.STATION,
        SegmentType.WATER_BREAK,
        SegmentType.STATION,
        SegmentType.WATER_BREAK,
        SegmentType.STATION,
        SegmentType.WATER_BREAK,
        SegmentType.TEAM_ACTIVITY,
        SegmentType.COOLDOWN,
    ]
    drill_blocks = [s.drill_id for s in plan.segments if s.segment_type == SegmentType.STATION]
    assert drill_blocks == ["tee-ball-blast", "hot-potato", "rocket-arm"]
    assert plan.segments[0].drill_id == "coach-says"
    assert plan.segments[-1].drill_id == "team-cheer"


def test_single_player_is_one_on_one_with_solo_shape(make_players, make_coaches, week_curriculum):
    plan = generate_practice_plan(make_players(0, 1), make_coaches(2), week_curriculum)

    assert plan.format == PracticeFormat.ONE_ON_ONE
    assert [s.duration_minutes for s in plan.segments] == [5, 10, 2, 10, 2, 10, 2, 15, 4]


def test_four_coaches_twelve_players_stations(make_players, make_coaches, week_curriculum, rng):
    players = make_players(6, 6)

    plan = generate_practice_plan(players, make_coaches(3), week_curriculum, rng=rng)

    assert plan.format == PracticeFormat.STATIONS
    assert plan.num_stations == 4
    assert plan.num_rotations == 4
    assert plan.team_game_duration == 10
    assert plan.floating_coach_ids == ("head-0",)

    rotations = [s for s in plan.segments if s.rotation_number is not None]
    assert [s.rotation_number for s in rotations] == [1, 2, 3, 4]
    for rotation in rotations:
        assert len(rotation.stations) == 4
        assert "head-0" not in rotation.coach_ids
        pinned = [station.coach_ids for station in rotation.stations]
        assert pinned == [("asst-0",), ("asst-1",), ("asst-2",), ()]
        ids = [pid for station in rotation.stations for pid in station.player_ids]
        assert sorted(ids) == sorted(p.id for p in players)
        sizes = [len(station.player_ids) for station in rotation.stations]
        assert max(sizes) - min(sizes) <= 1


def test_station_sequence(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(3), week_curriculum, rng=rng)

    names = [s.station_name for s in plan.segments]
    assert names == [
        "Coach Says",
        "Rotation 1",
        "Rotate Stations",
        "Rotation 2",
        "Rotate Stations",
        "Rotation 3",
        "Rotate Stations",
        "Rotation 4",
        "Water Break",
        "Freeze Tag",
        "Team Cheer",
    ]
    transitions = [s for s in plan.segments if s.segment_type == SegmentType.TRANSITION]
    assert all(s.duration_minutes == 2 for s in transitions)


def test_three_coaches_three_stations(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(5, 5), make_coaches(2), week_curriculum, rng=rng)

    assert plan.num_stations == 3
    assert plan.num_rotations == 3
    assert plan.team_game_duration == 20
    assert plan.floating_coach_ids == ("head-0",)


def test_two_coaches_head_runs_hitting(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(3, 3), make_coaches(1), week_curriculum, rng=rng)

    assert plan.num_stations == 2
    assert plan.floating_coach_ids == ()
    first_rotation = plan.segments[1]
    assert first_rotation.stations[0].coach_ids == ("head-0",)
    assert first_rotation.stations[1].coach_ids == ("asst-0",)


def test_six_coaches_capped_at_four_stations(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(5), week_curriculum, rng=rng)

    assert plan.num_stations == 4
    assert plan.num_rotations == 4
    assert plan.segments[1].stations[0].coach_ids == ("asst-0", "asst-4")


def test_station_drill_fixed_across_rotations(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(3), week_curriculum, rng=rng)

    rotations = [s for s in plan.segments if s.rotation_number is not None]
    first = [station.drill_id for station in rotations[0].stations]
    assert first == ["tee-ball-blast", "hot-potato", "rocket-arm", "home-to-first"]
    for rotation in rotations[1:]:
        assert [station.drill_id for station in rotation.stations] == first


def test_groups_reshuffle_between_rotations(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(3), week_curriculum, rng=rng)

    rotations = [s for s in plan.segments if s.rotation_number is not None]
    assert rotations[0].stations[0].player_ids != rotations[1].stations[0].player_ids


def test_no_drill_repeats_within_plan(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(3), week_curriculum, rng=rng)

    drill_ids = [s.drill_id for s in plan.segments if s.drill_id is not None]
    rotation = next(s for s in plan.segments if s.rotation_number == 1)
    drill_ids += [station.drill_id for station in rotation.stations]
    assert len(drill_ids) == len(set(drill_ids))


def test_empty_curriculum_uses_placeholders(make_players, make_coaches, rng):
    plan = generate_practice_plan(make_players(6, 6), make_coaches(3), [], rng=rng)

    assert plan.segments[0].station_name == "Warmup"
    assert plan.segments[0].drill_id is None
    stations = plan.segments[1].stations
    assert [s.station_name for s in stations] == ["Hitting", "Fielding", "Throwing", "Baserunning"]
    assert all(s.drill_id is None for s in stations)
    assert plan.segments[-2].station_name == "Team Game"
    assert plan.segments[-1].station_name == "Cooldown / High Fives"


def test_solo_placeholders(make_players, make_coaches):
    plan = generate_practice_plan(make_players(1, 1), make_coaches(0), [])

    assert [s.station_name for s in plan.segments] == [
        "Warmup",
        "Drill 1",
        "Water Break",
        "Drill 2",
        "Water Break",
        "Drill 3",
        "Water Break",
        "Team Game",
        "Cooldown",
    ]


def test_no_coaches_is_unavailable(make_players, week_curriculum):
    plan = generate_practice_plan(make_players(6, 6), [], week_curriculum)

    assert plan.is_error
    assert plan.error == NO_COACHES_MESSAGE
    assert len(plan.segments) == 1
    segment = plan.segments[0]
    assert segment.station_name == f"Error: {NO_COACHES_MESSAGE}"
    assert segment.duration_minutes == PRACTICE_LENGTH_MINUTES
    assert segment.drill_id is None


def test_no_players_is_unavailable(make_coaches, week_curriculum):
    plan = generate_practice_plan([], make_coaches(3), week_curriculum)

    assert plan.is_error
    assert plan.error == NO_PLAYERS_MESSAGE
    _assert_timeline(plan)


def test_no_one_at_all_reports_coaches_first(week_curriculum):
    plan = generate_practice_plan([], [], week_curriculum)

    assert plan.error == NO_COACHES_MESSAGE


def test_seeded_plans_are_reproducible(make_players, make_coaches, week_curriculum):
    players = make_players(6, 6)
    coaches = make_coaches(3)

    first = generate_practice_plan(players, coaches, week_curriculum, rng=random.Random(99))
    second = generate_practice_plan(players, coaches, week_curriculum, rng=random.Random(99))

    assert first == second


def test_recent_drills_push_station_choice(make_players, make_coaches, week_curriculum, rng):
    plan = generate_practice_plan(
        make_players(6, 6),
        make_coaches(2),
        week_curriculum,
        recent_drill_ids=["tee-ball-blast"],
        rng=rng,
    )

    stations = plan.segments[1].stations
    assert [s.drill_id for s in stations] == ["hot-potato", "rocket-arm", "home-to-first"]


@pytest.mark.parametrize(
    "players,coaches,expected",
    [
        (0, 3, PracticeFormat.UNAVAILABLE),
        (5, 0, PracticeFormat.UNAVAILABLE),
        (1, 3, PracticeFormat.ONE_ON_ONE),
        (3, 3, PracticeFormat.SOLO),
        (10, 1, PracticeFormat.SOLO),
        (4, 2, PracticeFormat.STATIONS),
    ],
)
def test_select_format(players, coaches, expected):
    assert select_format(players, coaches) == expected


@pytest.mark.parametrize("num_stations,expected", [(1, (3, 20)), (2, (3, 20)), (3, (3, 20)), (4, (4, 10))])
def test_station_timing(num_stations, expected):
    assert station_timing(num_stations) == expected
