"""Data models for emotional-context analysis.

Every result type is a frozen dataclass validated on construction, so an
``EmotionAnalysis`` that exists is always within its documented bounds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0.0, 1.0], got {value}")


@dataclass(frozen=True, slots=True)
class EmotionResult:
    """A single scored emotion label."""

    label: str
    score: float

    def __post_init__(self) -> None:
        _check_unit("score", self.score)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "score": self.score}


@dataclass(frozen=True, slots=True)
class MentalHealthIndicators:
    """Independent risk/wellbeing levels, each in [0, 1].

    Attributes:
        anxiety_level: Worry, fear and overwhelm signals.
        depression_level: Sadness and hopelessness signals.
        stress_level: Frustration, anger and overwhelm signals.
        positive_sentiment: Gratitude, joy and excitement signals.
    """

    anxiety_level: float = 0.0
    depression_level: float = 0.0
    stress_level: float = 0.0
    positive_sentiment: float = 0.0

    def __post_init__(self) -> None:
        for attr in ("anxiety_level", "depression_level", "stress_level", "positive_sentiment"):
            _check_unit(attr, getattr(self, attr))

    def to_dict(self) -> dict[str, float]:
        return {
            "anxiety_level": self.anxiety_level,
            "depression_level": self.depression_level,
            "stress_level": self.stress_level,
            "positive_sentiment": self.positive_sentiment,
        }


@dataclass(frozen=True, slots=True)
class ContextAnalysis:
    """Lexical and structural context of a message.

    Attributes:
        tone: Dominant theme, or "neutral" when none was detected.
        intensity: Overall emotional strength (0.0 to 1.0).
        emotional_complexity: How layered the message is (1.0 to 3.0).
        underlying_themes: Detected themes in detection order.
    """

    tone: str = "neutral"
    intensity: float = 0.5
    emotional_complexity: float = 1.0
    underlying_themes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _check_unit("intensity", self.intensity)
        if not 1.0 <= self.emotional_complexity <= 3.0:
            raise ValueError(
                f"emotional_complexity must be in [1.0, 3.0], got {self.emotional_complexity}"
            )

    def has_theme(self, theme: str) -> bool:
        return theme in self.underlying_themes

    def to_dict(self) -> dict[str, Any]:
        return {
            "tone": self.tone,
            "intensity": self.intensity,
            "emotional_complexity": self.emotional_complexity,
            "underlying_themes": list(self.underlying_themes),
        }


@dataclass(frozen=True, slots=True)
class FuzzyIndicators:
    """Communication-style indicators reported by external analysers."""

    emotional_stability: float = 0.5
    communication_openness: float = 0.5
    support_seeking_behavior: float = 0.3
    coping_mechanisms: tuple[str, ...] = field(default_factory=tuple)
    relationship_to_emotions: str = "Neutral emotional relationship"

    def __post_init__(self) -> None:
        for attr in ("emotional_stability", "communication_openness", "support_seeking_behavior"):
            _check_unit(attr, getattr(self, attr))

    def to_dict(self) -> dict[str, Any]:
        return {
            "emotional_stability": self.emotional_stability,
            "communication_openness": self.communication_openness,
            "support_seeking_behavior": self.support_seeking_behavior,
            "coping_mechanisms": list(self.coping_mechanisms),
            "relationship_to_emotions": self.relationship_to_emotions,
        }


@dataclass(frozen=True, slots=True)
class EmotionAnalysis:
    """Complete analysis of one message.

    ``all_emotions`` is sorted by descending score and its first entry is
    the primary emotion.
    """

    primary_emotion: str
    confidence: float
    all_emotions: tuple[EmotionResult, ...]
    mental_health_indicators: MentalHealthIndicators
    context_analysis: ContextAnalysis | None = None
    fuzzy_indicators: FuzzyIndicators | None = None
    crisis_detected: bool = False

    def __post_init__(self) -> None:
        _check_unit("confidence", self.confidence)
        scores = [e.score for e in self.all_emotions]
        if scores != sorted(scores, reverse=True):
            raise ValueError("all_emotions must be sorted by descending score")

    @property
    def intensity(self) -> float:
        """Context intensity, or confidence when no context is attached."""
        if self.context_analysis is None:
            return self.confidence
        return self.context_analysis.intensity

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape used by the chat client."""
        data: dict[str, Any] = {
            "primary_emotion": self.primary_emotion,
            "confidence": self.confidence,
            "all_emotions": [e.to_dict() for e in self.all_emotions],
            "mental_health_indicators": self.mental_health_indicators.to_dict(),
        }
        if self.context_analysis is not None:
            data["context_analysis"] = self.context_analysis.to_dict()
        if self.fuzzy_indicators is not None:
            data["fuzzy_indicators"] = self.fuzzy_indicators.to_dict()
        return data
