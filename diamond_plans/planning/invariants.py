"""Practice Timing Invariants - Single Source of Truth.

Every composer, validator and test reads its numbers from here.

ARCHITECTURAL COMMITMENT: FIXED-LENGTH PRACTICE
===============================================
A practice is always PRACTICE_LENGTH_MINUTES long. Variable blocks (the team
game in station format) are derived as the remainder, never hard-coded, so
the total holds by construction for any station count.
"""

PRACTICE_LENGTH_MINUTES = 60

# ---- Format selection ----
MIN_PLAYERS_FOR_STATIONS = 4
MAX_STATIONS = 4
HEAD_COACH_FLOATS_AT = 3  # total coaches present

# ---- Solo / whole-team timeline ----
SOLO_WARMUP_MINUTES = 5
SOLO_DRILL_BLOCKS = 3
SOLO_DRILL_MINUTES = 10
SOLO_WATER_BREAK_MINUTES = 2
SOLO_TEAM_GAME_MINUTES = 15
SOLO_COOLDOWN_MINUTES = 4

# ---- Station timeline ----
STATION_WARMUP_MINUTES = 5
STATION_MINUTES = 8
TRANSITION_MINUTES = 2
STATION_WATER_BREAK_MINUTES = 2
STATION_COOLDOWN_MINUTES = 5
ROTATIONS_WITH_MAX_STATIONS = 4
ROTATIONS_DEFAULT = 3

# ---- Grouping ----
MAX_SWAPS_PER_ROTATION = 3

# ---- Live timer ----
WARNING_THRESHOLD_MS = 30_000
