"""TimeSource - wall-clock countdown math.

Remaining time is always derived from an absolute start timestamp and the
current wall-clock time, never from an accumulated counter. A tick that
arrives late (screen lock, backgrounded app, slow frame) therefore shows the
true remaining time immediately.

All values are milliseconds.
"""

import math
import time
from collections.abc import Callable

from diamond_plans.planning.invariants import WARNING_THRESHOLD_MS

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current Unix time in milliseconds."""
    return time.time() * 1000


def scaled_clock(speed: float, base: Clock = wall_clock_ms) -> Clock:
    """Clock that runs ``speed`` times faster than ``base`` from the moment it is created.

    Used to rehearse a full practice in seconds.
    """
    if speed <= 0:
        raise ValueError(f"speed must be > 0, got {speed}")
    origin = base()

    def now() -> float:
        return origin + (base() - origin) * speed

    return now


def calculate_remaining(start_ms: float, duration_ms: float, now_ms: float) -> float:
    """Milliseconds left in a countdown, clamped to 0.

    Args:
        start_ms: Wall-clock time the countdown started
        duration_ms: Countdown length
        now_ms: Current wall-clock time

    Returns:
        max(0, duration - elapsed)
    """
    elapsed = now_ms - start_ms
    return max(0.0, duration_ms - elapsed)


def format_time(ms: float) -> str:
    """Render milliseconds as ``M:SS``.

    Rounds up to the whole second so the display never shows 0:00 while time
    remains (90500 → "1:31", 0 → "0:00").
    """
    total_seconds = math.ceil(max(0.0, ms) / 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def is_warning(ms: float) -> bool:
    """True inside the final 30 seconds (but not once finished)."""
    return 0 < ms <= WARNING_THRESHOLD_MS


def is_complete(ms: float) -> bool:
    return ms <= 0
