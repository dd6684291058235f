"""Mental health indicator composer.

Combines scored emotions and context themes into four bounded indicators.
Self-harm and suicide language adds a fixed crisis boost to the distress
indicators and removes it from positive sentiment; downstream UI relies on
this to surface emergency resources.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mindspace.analysis.models import ContextAnalysis, EmotionResult, MentalHealthIndicators
from mindspace.analysis.patterns import (
    ANXIETY_LABELS,
    CRISIS_PATTERNS,
    DEPRESSION_LABELS,
    POSITIVE_LABELS,
    STRESS_LABELS,
)
from mindspace.core.constants import CRISIS_BOOST
from mindspace.core.logging import get_logger

logger = get_logger(__name__)


def find_crisis_phrases(text: str) -> list[str]:
    """Return every crisis phrase matched in the text, in table order."""
    matches: list[str] = []
    for pattern in CRISIS_PATTERNS:
        found = pattern.search(text)
        if found:
            matches.append(found.group(0).lower())
    return matches


def detect_crisis(text: str) -> bool:
    """Return True if the text contains self-harm or suicide language."""
    return any(pattern.search(text) for pattern in CRISIS_PATTERNS)


def _label_sum(emotions: Iterable[EmotionResult], labels: frozenset[str]) -> float:
    return sum(e.score for e in emotions if e.label in labels)


class IndicatorComposer:
    """Compose anxiety, depression, stress and positive-sentiment levels."""

    def __init__(self, crisis_boost: float = CRISIS_BOOST) -> None:
        self._crisis_boost = crisis_boost

    def crisis_boost(self, crisis: bool) -> float:
        if crisis:
            logger.warning("Crisis language detected", boost=self._crisis_boost)
            return self._crisis_boost
        return 0.0

    def compose(
        self,
        text: str,
        emotions: Sequence[EmotionResult],
        context: ContextAnalysis,
        crisis: bool | None = None,
    ) -> MentalHealthIndicators:
        """Compute the four indicators.

        Each is an additive sum of emotion scores and theme boosts, scaled by
        context intensity and clamped to [0, 1].

        Args:
            text: Raw message text.
            emotions: Scored emotions for the text.
            context: Context analysis for the text.
            crisis: Whether the text holds crisis language. None scans
                the text here.

        Returns:
            MentalHealthIndicators.
        """
        if crisis is None:
            crisis = detect_crisis(text)
        boost = self.crisis_boost(crisis)
        scale = context.intensity

        anxiety = _label_sum(emotions, ANXIETY_LABELS)
        if context.has_theme("overwhelmed"):
            anxiety += 0.3
        if context.has_theme("anxious"):
            anxiety += 0.2
        if context.has_theme("hopeless"):
            anxiety += 0.3
        anxiety += boost

        depression = _label_sum(emotions, DEPRESSION_LABELS)
        if context.has_theme("hopeless"):
            depression += 0.5
        if context.has_theme("depressed"):
            depression += 0.4
        depression += boost

        stress = _label_sum(emotions, STRESS_LABELS)
        if context.has_theme("overwhelmed"):
            stress += 0.4
        stress += boost * 0.5

        positive = _label_sum(emotions, POSITIVE_LABELS)
        if context.has_theme("grateful") or context.has_theme("excited"):
            positive += 0.3
        positive = min(positive * scale, 1.0) - boost

        return MentalHealthIndicators(
            anxiety_level=_unit(anxiety * scale),
            depression_level=_unit(depression * scale),
            stress_level=_unit(stress * scale),
            positive_sentiment=_unit(positive),
        )


def _unit(value: float) -> float:
    return max(0.0, min(1.0, value))
