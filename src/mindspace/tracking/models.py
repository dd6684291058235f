"""Data models for continuous per-user emotion tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from mindspace.analysis.models import EmotionAnalysis

TrendDirection = Literal["improving", "declining", "stable", "volatile"]
RiskLevel = Literal["low", "moderate", "high", "critical"]
CommunicationStyle = Literal["unknown", "concise", "moderate", "verbose"]


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One analysed message in a user's history."""

    text: str
    timestamp: datetime
    analysis: EmotionAnalysis
    response_delay: float | None = None  # seconds since the previous message

    @property
    def emotion(self) -> str:
        return self.analysis.primary_emotion

    @property
    def intensity(self) -> float:
        return self.analysis.intensity


@dataclass
class UserBaseline:
    """What is typical for a user, updated after every message."""

    average_response_time: float = 30.0
    typical_emotions: list[str] = field(default_factory=list)
    communication_style: CommunicationStyle = "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_response_time": self.average_response_time,
            "typical_emotions": list(self.typical_emotions),
            "communication_style": self.communication_style,
        }


@dataclass
class UserHistory:
    """Tracked state for a single user."""

    user_id: str
    entries: list[HistoryEntry] = field(default_factory=list)
    baseline: UserBaseline = field(default_factory=UserBaseline)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    message_count: int = 0


@dataclass(frozen=True, slots=True)
class KeyChange:
    """A significant shift between two consecutive messages."""

    timestamp: datetime
    change: str
    significance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "change": self.change,
            "significance": self.significance,
        }


@dataclass(frozen=True, slots=True)
class TrendAnalysis:
    """Direction of a user's emotional intensity over recent messages.

    Rising intensity is read as declining wellbeing.
    """

    trend: TrendDirection = "stable"
    strength: float = 0.5
    key_changes: tuple[KeyChange, ...] = ()
    time_patterns: tuple[str, ...] = ()
    emotional_cycles: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "trend": self.trend,
            "strength": self.strength,
            "key_changes": [c.to_dict() for c in self.key_changes],
            "time_patterns": list(self.time_patterns),
            "emotional_cycles": list(self.emotional_cycles),
        }


@dataclass(frozen=True, slots=True)
class RiskAssessment:
    level: RiskLevel
    score: float
    factors: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "score": self.score,
            "factors": list(self.factors),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True, slots=True)
class SupportActions:
    immediate: tuple[str, ...] = ()
    short_term: tuple[str, ...] = ()
    long_term: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "immediate": list(self.immediate),
            "short_term": list(self.short_term),
            "long_term": list(self.long_term),
        }


@dataclass(frozen=True, slots=True)
class EmotionalAssessment:
    """Assessment of the latest message in the context of the user's history."""

    user_id: str
    analysis: EmotionAnalysis
    stability: float
    trend: TrendAnalysis
    risk: RiskAssessment
    support_actions: SupportActions

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "analysis": self.analysis.to_dict(),
            "stability": self.stability,
            "trend": self.trend.to_dict(),
            "risk": self.risk.to_dict(),
            "support_actions": self.support_actions.to_dict(),
        }
