"""GroupAssigner - skill-balanced player groups.

Groups are balanced on skill tier, not fixed: shuffling is intentional so the
same kids are not paired every week, and rotations swap a few players between
neighbouring groups so nobody spends the whole practice with one group.

Randomness always comes from an injected ``random.Random`` so tests can pin a
seed and assert exact composition.
"""

import random
from collections.abc import Sequence

from loguru import logger

from diamond_plans.domain.enums import SkillLevel
from diamond_plans.domain.models import Player
from diamond_plans.planning.invariants import MAX_SWAPS_PER_ROTATION

_default_rng = random.Random()


def _shuffled(players: Sequence[Player], rng: random.Random) -> list[Player]:
    out = list(players)
    rng.shuffle(out)
    return out


def split_players(
    players: Sequence[Player],
    n: int,
    rng: random.Random | None = None,
) -> list[list[Player]]:
    """Split players into ``n`` skill-balanced groups.

    Advanced players are dealt first so every group that can get one does,
    then beginners continue the same round-robin. Group sizes differ by at
    most one and every player lands in exactly one group.

    Args:
        players: Present players
        n: Number of groups
        rng: Random source used for shuffling

    Returns:
        List of ``max(n, 1)`` groups
    """
    if n <= 1:
        return [list(players)]

    rng = rng or _default_rng
    advanced = _shuffled([p for p in players if p.skill_level == SkillLevel.ADVANCED], rng)
    beginner = _shuffled([p for p in players if p.skill_level != SkillLevel.ADVANCED], rng)

    groups: list[list[Player]] = [[] for _ in range(n)]
    for i, player in enumerate(advanced + beginner):
        groups[i % n].append(player)

    logger.debug(
        "grouping: Players split",
        groups=n,
        advanced=len(advanced),
        beginner=len(beginner),
        sizes=[len(g) for g in groups],
    )
    return groups


def rotate_groups(
    groups: Sequence[Sequence[Player]],
    rng: random.Random | None = None,
) -> list[list[Player]]:
    """Reshuffle a few players between adjacent groups.

    Performs ``min(3, len(groups[0]) // 2 or 1)`` passes; each pass swaps one
    random member of every adjacent pair of non-empty groups. Swaps keep group
    sizes and total membership unchanged. The input is never mutated.

    Args:
        groups: Current groups
        rng: Random source used to pick swap participants

    Returns:
        New list of groups
    """
    rotated = [list(g) for g in groups]
    if len(rotated) <= 1:
        return rotated

    rng = rng or _default_rng
    swap_count = min(MAX_SWAPS_PER_ROTATION, len(rotated[0]) // 2 or 1)

    for _ in range(swap_count):
        for left, right in zip(rotated, rotated[1:], strict=False):
            if not left or not right:
                continue
            i = rng.randrange(len(left))
            j = rng.randrange(len(right))
            left[i], right[j] = right[j], left[i]

    logger.debug("grouping: Groups rotated", groups=len(rotated), swap_passes=swap_count)
    return rotated
