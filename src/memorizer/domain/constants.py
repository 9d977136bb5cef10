"""Centralized constants for the memorizer core.

All tuning numbers and field limits live here so every layer imports
from a single source of truth.
"""

# ---------- Memory state bounds ----------
DIFFICULTY_MIN = 1.0
DIFFICULTY_MAX = 10.0
STABILITY_MIN = 0.1
STABILITY_MAX = 3650.0

# ---------- New cards ----------
INITIAL_DIFFICULTY = 5.0
INITIAL_STABILITY = 0.5

# ---------- Scheduler tuning ----------
# Difficulty delta per rating (Again, Hard, Good, Easy).
DIFFICULTY_DELTAS = {1: 0.70, 2: 0.25, 3: -0.05, 4: -0.35}
HARD_STABILITY_FACTOR = 0.6
HARD_STABILITY_FLOOR = 0.3
GAIN_BASE_GOOD = 0.20
GAIN_BASE_EASY = 0.34
OVERDUE_RETRIEVABILITY_PENALTY = 0.85
ELAPSED_BOOST_CAP = 1.5
ELAPSED_BOOST_WEIGHT = 0.1
MIN_STABILITY_PROGRESS = 0.2

# Fixed intervals (days) for first reviews and learning cards.
LEARNING_INTERVALS = {1: 0, 2: 1, 3: 2, 4: 4}
# Fixed intervals (days) while relearning.
RELEARNING_INTERVALS = {1: 0, 2: 0, 3: 1, 4: 1}

# ---------- Field limits ----------
WORD_MAX_LENGTH = 80
MEANING_MAX_LENGTH = 180
NOTES_MAX_LENGTH = 240

# ---------- Quiz ----------
DEFAULT_DISTRACTOR_COUNT = 3
INVALID_MEANING_PLACEHOLDER = "[invalid meaning]"
INVALID_WORD_PLACEHOLDER = "[invalid word]"
PLACEHOLDER_MEANINGS = frozenset({INVALID_MEANING_PLACEHOLDER, "[missing meaning]"})
RATING_INTEGER_TOLERANCE = 1e-4

# ---------- Due labels ----------
DUE_NOW_THRESHOLD_SECONDS = 60
DEFAULT_UPCOMING_WINDOW_HOURS = 24
