"""Emotion scorer: turns detected themes into ranked emotion results."""

from __future__ import annotations

from mindspace.analysis.models import ContextAnalysis, EmotionResult
from mindspace.analysis.patterns import EMOTION_TAXONOMY, NEGATIVE_WORDS, POSITIVE_WORDS
from mindspace.core.constants import (
    LEXICON_SCORE_INTENSITY_WEIGHT,
    NEUTRAL_SCORE,
    STRUCTURAL_THEMES,
    THEME_SCORE_BASE,
    THEME_SCORE_INTENSITY_WEIGHT,
)


class EmotionScorer:
    """Scores emotions in two tiers.

    Emotional themes from the context analysis are scored first. When none
    are present a coarse positive/negative word count decides between
    "positive", "sad" and "neutral", so at least one result is always
    returned.
    """

    def __init__(
        self,
        positive_words: tuple[str, ...] | None = None,
        negative_words: tuple[str, ...] | None = None,
    ) -> None:
        self._positive = positive_words if positive_words is not None else POSITIVE_WORDS
        self._negative = negative_words if negative_words is not None else NEGATIVE_WORDS

    def score(self, text: str, context: ContextAnalysis) -> list[EmotionResult]:
        """Score emotions for a message.

        Args:
            text: Raw message text.
            context: Output of ContextAnalyzer for the same text.

        Returns:
            Non-empty list sorted by descending score (stable on ties).
        """
        results = self._score_themes(context)
        if not results:
            results = [self._score_lexicon(text, context.intensity)]
        # sorted() is stable, so equal scores keep emission order
        return sorted(results, key=lambda r: r.score, reverse=True)

    def _score_themes(self, context: ContextAnalysis) -> list[EmotionResult]:
        score = min(THEME_SCORE_BASE + context.intensity * THEME_SCORE_INTENSITY_WEIGHT, 1.0)
        return [
            EmotionResult(label=theme, score=score)
            for theme in context.underlying_themes
            if theme not in STRUCTURAL_THEMES and theme in EMOTION_TAXONOMY
        ]

    def _score_lexicon(self, text: str, intensity: float) -> EmotionResult:
        lower = text.lower()
        positive = sum(lower.count(word) for word in self._positive)
        negative = sum(lower.count(word) for word in self._negative)

        score = min(THEME_SCORE_BASE + intensity * LEXICON_SCORE_INTENSITY_WEIGHT, 1.0)
        if positive > negative:
            return EmotionResult(label="positive", score=score)
        if negative > positive:
            return EmotionResult(label="sad", score=score)
        return EmotionResult(label="neutral", score=NEUTRAL_SCORE)
