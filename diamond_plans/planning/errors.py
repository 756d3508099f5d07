"""Canonical Planning Error Types.

Agenda invariant violations are reported with these types. Configuration
problems (no coaches, no players) are NOT errors: the composer returns an
unavailable plan for those.

Standard detail codes:
- EMPTY_AGENDA: Agenda has no segments
- NONZERO_START_OFFSET: First segment does not start at minute 0
- NON_CONTIGUOUS_SEGMENTS: A segment does not start where the previous one ended
- INVALID_TOTAL_DURATION: Durations do not add up to the practice length
- NON_SEQUENTIAL_ORDER: segment_order is not 0..n-1
- NEGATIVE_DURATION: A segment has a negative duration
"""


class PlanningInvariantError(RuntimeError):
    """Raised when a planning invariant is violated.

    Attributes:
        code: Error code (e.g., "INVALID_AGENDA")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
