"""Pattern tables for heuristic emotional-context analysis.

All tables are ordered: iteration order decides tie-breaks for the dominant
theme and the order in which intensity modifiers are applied.
"""

from __future__ import annotations

import re

# =============================================================================
# Theme patterns (theme -> regexes), checked against the raw text
# =============================================================================

_THEME_SOURCES: dict[str, tuple[str, ...]] = {
    "overwhelmed": (
        r"can'?t handle",
        r"too much",
        r"overwhelm",
        r"drowning",
        r"suffocating",
        r"breaking point",
        r"can'?t cope",
        r"falling apart",
        r"losing control",
    ),
    "hopeless": (
        r"no point",
        r"give up",
        r"hopeless",
        r"nothing matters",
        r"what'?s the use",
        r"no way out",
        r"trapped",
        r"stuck",
        r"never get better",
    ),
    "anxious": (
        r"worried about",
        r"scared that",
        r"what if",
        r"can'?t stop thinking",
        r"racing thoughts",
        r"panic",
        r"nervous",
        r"on edge",
        r"restless",
        r"\banxious\b",
    ),
    "depressed": (
        r"feel empty",
        r"numb",
        r"don'?t care",
        r"no energy",
        r"exhausted",
        r"worthless",
        r"burden",
        r"\balone\b",
        r"isolated",
        r"dark place",
    ),
    "angry": (
        r"so angry",
        r"furious",
        r"\brage\b",
        r"\bhate\b",
        r"can'?t stand",
        r"fed up",
        r"sick of",
        r"frustrated",
        r"annoyed",
    ),
    "grateful": (
        r"thankful",
        r"grateful",
        r"blessed",
        r"appreciate",
        r"\blucky\b",
        r"fortunate",
        r"\bglad\b",
        r"relieved",
    ),
    "excited": (
        r"can'?t wait",
        r"so excited",
        r"thrilled",
        r"amazing",
        r"incredible",
        r"fantastic",
        r"wonderful",
        r"awesome",
    ),
    "confused": (
        r"don'?t understand",
        r"confused",
        r"\blost\b",
        r"unclear",
        r"mixed up",
        r"not sure",
        r"uncertain",
        r"puzzled",
    ),
}

THEME_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    theme: tuple(re.compile(src, re.IGNORECASE) for src in sources)
    for theme, sources in _THEME_SOURCES.items()
}

# =============================================================================
# Intensity modifiers (substring matches on lower-cased text)
# =============================================================================

HIGH_MODIFIERS: tuple[str, ...] = (
    "extremely",
    "incredibly",
    "absolutely",
    "completely",
    "totally",
    "really",
    "very",
    "so",
    "super",
)

MEDIUM_MODIFIERS: tuple[str, ...] = (
    "quite",
    "pretty",
    "fairly",
    "somewhat",
    "rather",
    "kind of",
    "sort of",
)

LOW_MODIFIERS: tuple[str, ...] = (
    "a bit",
    "slightly",
    "a little",
    "maybe",
    "perhaps",
    "might be",
)

# =============================================================================
# Negation
# =============================================================================

NEGATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(src, re.IGNORECASE)
    for src in (
        r"\bnot\s+\w+",
        r"\bdon'?t\s+\w+",
        r"\bcan'?t\s+\w+",
        r"\bwon'?t\s+\w+",
        r"\bnever\s+\w+",
        r"\bno\s+\w+",
        r"\bnothing\s+\w+",
        r"\bnobody\s+\w+",
    )
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")

# =============================================================================
# Coarse valence lexicon (fallback when no emotional theme is detected)
# =============================================================================

POSITIVE_WORDS: tuple[str, ...] = (
    "happy",
    "good",
    "great",
    "love",
    "glad",
    "joy",
    "nice",
    "better",
    "calm",
    "hopeful",
    "proud",
    "fun",
)

NEGATIVE_WORDS: tuple[str, ...] = (
    "sad",
    "bad",
    "terrible",
    "awful",
    "hurt",
    "cry",
    "upset",
    "lonely",
    "miserable",
    "tired",
    "down",
    "pain",
)

# =============================================================================
# Crisis language (self-harm / suicide)
# =============================================================================

CRISIS_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(src, re.IGNORECASE)
    for src in (
        r"kill myself",
        r"suicide",
        r"suicidal",
        r"end it all",
        r"want to die",
        r"better off dead",
        r"can'?t go on",
        r"no way out",
        r"end my life",
        r"self[- ]?harm",
        r"hurt myself",
        r"cut myself",
    )
)

# =============================================================================
# Emotion label groups used by the indicator composer
# =============================================================================

ANXIETY_LABELS = frozenset({"anxious", "fear", "nervousness", "nervous", "worried"})
DEPRESSION_LABELS = frozenset({"sad", "grief", "disappointment", "hopeless", "empty"})
STRESS_LABELS = frozenset({"frustrated", "overwhelmed", "angry", "annoyed"})
POSITIVE_LABELS = frozenset(
    {
        "happy",
        "joy",
        "excitement",
        "excited",
        "gratitude",
        "grateful",
        "love",
        "loving",
        "positive",
        "proud",
    }
)

# Labels the analyzer can report
EMOTION_TAXONOMY = frozenset(THEME_PATTERNS) | {"sad", "happy", "positive", "neutral"}
