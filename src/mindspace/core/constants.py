"""Application-wide constants.

These are fixed values that don't change between environments.
For configurable values, see config.py Settings.
"""

# ─────────────────────────────────────────────────────────────
# Context analysis
# ─────────────────────────────────────────────────────────────
BASE_INTENSITY = 0.5
HIGH_MODIFIER_STEP = 0.3
MEDIUM_MODIFIER_STEP = 0.1
LOW_MODIFIER_STEP = -0.2
NEGATION_DAMPENING = 0.8
URGENCY_BOOST = 0.2
OVERTHINKING_BOOST = 0.1
SHORT_SENTENCE_CHARS = 20
LONG_SENTENCE_CHARS = 100
MIN_COMPLEXITY = 1.0
MAX_COMPLEXITY = 3.0

# Themes that describe message structure, not an emotion
STRUCTURAL_THEMES = frozenset({"negation", "urgency", "overthinking"})

# ─────────────────────────────────────────────────────────────
# Scoring
# ─────────────────────────────────────────────────────────────
THEME_SCORE_BASE = 0.6
THEME_SCORE_INTENSITY_WEIGHT = 0.4
LEXICON_SCORE_INTENSITY_WEIGHT = 0.3
NEUTRAL_SCORE = 0.5
CRISIS_BOOST = 0.6

# ─────────────────────────────────────────────────────────────
# Output limits
# ─────────────────────────────────────────────────────────────
DEFAULT_MAX_TEXT_LENGTH = 5000
DEFAULT_TOP_EMOTIONS = 5
DEFAULT_HISTORY_SIZE = 20
DEFAULT_TREND_WINDOW = 5

# ─────────────────────────────────────────────────────────────
# Indicator level cut-offs (Low / Moderate / High)
# ─────────────────────────────────────────────────────────────
LOW_LEVEL_CUTOFF = 0.3
MODERATE_LEVEL_CUTOFF = 0.6

# ─────────────────────────────────────────────────────────────
# Continuous tracking
# ─────────────────────────────────────────────────────────────
DEFAULT_CRISIS_KEYWORDS = (
    "suicide",
    "kill myself",
    "end it all",
    "no point",
    "give up",
    "hopeless",
)
