"""Coach-to-station binding.

Bindings are computed once per plan and reused for every rotation: coaches
stay at their station while player groups move.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from diamond_plans.domain.models import Coach
from diamond_plans.planning.invariants import HEAD_COACH_FLOATS_AT


@dataclass(frozen=True)
class CoachBinding:
    """Result of binding coaches to stations.

    Attributes:
        station_coach_ids: Coach ids per station index
        floating_coach_ids: Coaches free to move between stations
    """

    station_coach_ids: tuple[tuple[str, ...], ...]
    floating_coach_ids: tuple[str, ...]


def assign_coaches(coaches: Sequence[Coach], num_stations: int) -> CoachBinding:
    """Bind coaches to stations.

    With HEAD_COACH_FLOATS_AT or more coaches, every head coach floats and
    only the other coaches are dealt to stations. Otherwise everyone is
    dealt, head coaches first. Dealing is round-robin from station 0 (Hitting), so when there are
    more coaches than stations the extras pair up starting at Hitting.

    Args:
        coaches: Present coaches
        num_stations: Number of stations (>= 1)

    Returns:
        CoachBinding
    """
    heads = [c for c in coaches if c.is_head]
    others = [c for c in coaches if not c.is_head]

    if len(coaches) >= HEAD_COACH_FLOATS_AT:
        floating = heads
        pinned = others
    else:
        # A head coach who has to run a station takes Hitting
        floating = []
        pinned = heads + others

    stations: list[list[str]] = [[] for _ in range(num_stations)]
    for i, coach in enumerate(pinned):
        stations[i % num_stations].append(coach.id)

    return CoachBinding(
        station_coach_ids=tuple(tuple(ids) for ids in stations),
        floating_coach_ids=tuple(c.id for c in floating),
    )
