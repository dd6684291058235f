"""Context analyzer: themes, intensity and structure of a message."""

from __future__ import annotations

import re

from mindspace.analysis.models import ContextAnalysis
from mindspace.analysis.patterns import (
    HIGH_MODIFIERS,
    LOW_MODIFIERS,
    MEDIUM_MODIFIERS,
    NEGATION_PATTERNS,
    SENTENCE_SPLIT,
    THEME_PATTERNS,
)
from mindspace.core.constants import (
    BASE_INTENSITY,
    HIGH_MODIFIER_STEP,
    LONG_SENTENCE_CHARS,
    LOW_MODIFIER_STEP,
    MAX_COMPLEXITY,
    MEDIUM_MODIFIER_STEP,
    MIN_COMPLEXITY,
    NEGATION_DAMPENING,
    OVERTHINKING_BOOST,
    SHORT_SENTENCE_CHARS,
    URGENCY_BOOST,
)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class ContextAnalyzer:
    """Extracts tone, intensity, complexity and themes from raw text.

    Stages run in a fixed order:
    1. Theme detection (regex hits per theme, dominant theme by hit count)
    2. Intensity modifiers (high -> medium -> low tiers)
    3. Negation dampening
    4. Sentence-structure heuristics (urgency / overthinking)
    """

    def __init__(
        self,
        theme_patterns: dict[str, tuple[re.Pattern[str], ...]] | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            theme_patterns: Override the default theme table. Order matters
                for dominant-theme tie-breaks.
        """
        self._themes = theme_patterns if theme_patterns is not None else THEME_PATTERNS
        self._modifier_tiers: tuple[tuple[tuple[str, ...], float], ...] = (
            (HIGH_MODIFIERS, HIGH_MODIFIER_STEP),
            (MEDIUM_MODIFIERS, MEDIUM_MODIFIER_STEP),
            (LOW_MODIFIERS, LOW_MODIFIER_STEP),
        )

    def analyze(self, text: str) -> ContextAnalysis:
        """Analyze the context of a message.

        Args:
            text: Raw message text.

        Returns:
            ContextAnalysis with clamped intensity and complexity.
        """
        lower = text.lower()

        themes, dominant = self.detect_themes(text)
        intensity = self.modifier_intensity(lower)

        if self.has_negation(text):
            intensity = _clamp(intensity * NEGATION_DAMPENING)
            themes.append("negation")

        intensity = self._apply_structure(text, intensity, themes, dominant)

        complexity = _clamp(len(themes) * 0.5 + 1, MIN_COMPLEXITY, MAX_COMPLEXITY)

        return ContextAnalysis(
            tone=dominant or "neutral",
            intensity=_clamp(intensity),
            emotional_complexity=complexity,
            underlying_themes=tuple(themes),
        )

    def detect_themes(self, text: str) -> tuple[list[str], str | None]:
        """Find every theme with at least one pattern hit.

        Returns:
            (themes in table order, dominant theme or None).
        """
        themes: list[str] = []
        dominant: str | None = None
        best = 0

        for theme, patterns in self._themes.items():
            hits = sum(1 for pattern in patterns if pattern.search(text))
            if hits == 0:
                continue
            themes.append(theme)
            # Strict comparison keeps the earlier theme on ties
            if hits > best:
                best = hits
                dominant = theme

        return themes, dominant

    def modifier_intensity(self, lower: str) -> float:
        """Compute intensity from modifier words, clamping after every step."""
        intensity = BASE_INTENSITY
        for modifiers, step in self._modifier_tiers:
            for modifier in modifiers:
                if modifier in lower:
                    intensity = _clamp(intensity + step)
        return intensity

    @staticmethod
    def has_negation(text: str) -> bool:
        return any(pattern.search(text) for pattern in NEGATION_PATTERNS)

    @staticmethod
    def split_sentences(text: str) -> list[str]:
        return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]

    def _apply_structure(
        self,
        text: str,
        intensity: float,
        themes: list[str],
        dominant: str | None,
    ) -> float:
        """Apply sentence-length heuristics.

        Many short sentences read as urgency; very long ones as overthinking.
        """
        sentences = self.split_sentences(text)
        if not sentences:
            return intensity

        mean_length = sum(len(s) for s in sentences) / len(sentences)

        if mean_length < SHORT_SENTENCE_CHARS and len(sentences) > 1:
            intensity = _clamp(intensity + URGENCY_BOOST)
            themes.append("urgency")

        if mean_length > LONG_SENTENCE_CHARS:
            themes.append("overthinking")
            if dominant in ("anxious", "confused"):
                intensity = _clamp(intensity + OVERTHINKING_BOOST)

        return intensity
