"""Heuristic emotion analyzer for chat messages.

Rule-based, no external model calls: context analysis, emotion scoring and
mental health indicator composition run as three pure stages. The analyzer
holds only immutable tables and can be shared freely between threads.
"""

from __future__ import annotations

from functools import lru_cache

from mindspace.analysis.context import ContextAnalyzer
from mindspace.analysis.indicators import IndicatorComposer, detect_crisis
from mindspace.analysis.models import (
    ContextAnalysis,
    EmotionAnalysis,
    EmotionResult,
    MentalHealthIndicators,
)
from mindspace.analysis.scorer import EmotionScorer
from mindspace.config import Settings, get_settings
from mindspace.core.constants import DEFAULT_TOP_EMOTIONS, NEUTRAL_SCORE
from mindspace.core.exceptions import InputTooLargeError, InvalidInputError
from mindspace.core.logging import get_logger

logger = get_logger(__name__)


def neutral_baseline() -> EmotionAnalysis:
    """Result returned for empty or whitespace-only messages."""
    return EmotionAnalysis(
        primary_emotion="neutral",
        confidence=NEUTRAL_SCORE,
        all_emotions=(EmotionResult(label="neutral", score=NEUTRAL_SCORE),),
        mental_health_indicators=MentalHealthIndicators(),
        context_analysis=ContextAnalysis(),
    )


class EmotionAnalyzer:
    """Sequences context analysis, emotion scoring and indicator composition."""

    def __init__(
        self,
        context_analyzer: ContextAnalyzer | None = None,
        scorer: EmotionScorer | None = None,
        composer: IndicatorComposer | None = None,
        max_text_length: int | None = None,
        top_emotions: int = DEFAULT_TOP_EMOTIONS,
    ) -> None:
        """Initialize analyzer.

        Args:
            context_analyzer: Custom context stage or None for defaults.
            scorer: Custom scoring stage or None for defaults.
            composer: Custom indicator stage or None for defaults.
            max_text_length: Reject longer input with InputTooLargeError.
                None accepts any length.
            top_emotions: Number of emotions kept in all_emotions.
        """
        self._context = context_analyzer if context_analyzer is not None else ContextAnalyzer()
        self._scorer = scorer if scorer is not None else EmotionScorer()
        self._composer = composer if composer is not None else IndicatorComposer()
        self._max_text_length = max_text_length
        self._top_emotions = top_emotions

    def analyze(self, text: str) -> EmotionAnalysis:
        """Analyze a single message.

        Args:
            text: Raw message text.

        Returns:
            EmotionAnalysis. Empty input yields the neutral baseline.

        Raises:
            InvalidInputError: If text is not a string.
            InputTooLargeError: If a length bound is set and exceeded.
        """
        self.validate(text)

        if not text.strip():
            return neutral_baseline()

        context = self._context.analyze(text)
        emotions = self._scorer.score(text, context)
        crisis = detect_crisis(text)
        indicators = self._composer.compose(text, emotions, context, crisis=crisis)

        primary = emotions[0]
        result = EmotionAnalysis(
            primary_emotion=primary.label,
            confidence=primary.score,
            all_emotions=tuple(emotions[: self._top_emotions]),
            mental_health_indicators=indicators,
            context_analysis=context,
            crisis_detected=crisis,
        )

        logger.debug(
            "Emotion analysis complete",
            primary_emotion=result.primary_emotion,
            confidence=round(result.confidence, 3),
            themes=list(context.underlying_themes),
            length=len(text),
        )
        return result

    def validate(self, text: object) -> None:
        if not isinstance(text, str):
            raise InvalidInputError(f"Text must be a string, got {type(text).__name__}")
        if self._max_text_length is not None and len(text) > self._max_text_length:
            raise InputTooLargeError(len(text), self._max_text_length)


@lru_cache(maxsize=1)
def _default_analyzer() -> EmotionAnalyzer:
    return EmotionAnalyzer()


# Convenience function for quick analysis
def analyze(text: str) -> EmotionAnalysis:
    """Analyze text using the default, unbounded analyzer."""
    return _default_analyzer().analyze(text)


def create_analyzer(settings: Settings | None = None) -> EmotionAnalyzer:
    """Create an analyzer bounded by the configured limits."""
    settings = settings or get_settings()
    return EmotionAnalyzer(
        max_text_length=settings.max_text_length,
        top_emotions=settings.top_emotions,
    )
