"""Continuous emotion tracking across a user's messages.

Keeps the most recent analyses per user in memory and derives trend, risk
and support suggestions from them. Each analysis is computed outside the
lock; only the history update and the derived assessment hold it.
"""

from __future__ import annotations

import statistics
import threading
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from mindspace.analysis.analyzer import EmotionAnalyzer, create_analyzer
from mindspace.config import Settings, get_settings
from mindspace.core.constants import (
    DEFAULT_CRISIS_KEYWORDS,
    DEFAULT_HISTORY_SIZE,
    DEFAULT_TREND_WINDOW,
)
from mindspace.core.exceptions import UnknownUserError
from mindspace.core.logging import get_logger
from mindspace.tracking.models import (
    EmotionalAssessment,
    HistoryEntry,
    KeyChange,
    RiskAssessment,
    RiskLevel,
    SupportActions,
    TrendAnalysis,
    TrendDirection,
    UserHistory,
)

logger = get_logger(__name__)

SEVERE_EMOTIONS = frozenset({"hopeless", "suicidal", "desperate"})
DISTRESS_EMOTIONS = frozenset({"sad", "anxious", "angry"})

_RISK_RECOMMENDATIONS: dict[RiskLevel, tuple[str, ...]] = {
    "critical": (
        "Immediate professional intervention recommended",
        "Contact emergency services if imminent danger",
        "Provide crisis hotline numbers",
    ),
    "high": (
        "Encourage professional mental health support",
        "Increase monitoring frequency",
        "Provide coping resources",
    ),
    "moderate": (
        "Offer emotional support resources",
        "Suggest stress management techniques",
        "Monitor for changes",
    ),
    "low": (
        "Continue supportive conversation",
        "Maintain regular check-ins",
    ),
}


class ContinuousEmotionTracker:
    """Track emotional state per user across messages.

    Example:
        tracker = ContinuousEmotionTracker()
        assessment = tracker.record("user-1", "I can't handle this anymore")
        if assessment.risk.level == "critical":
            ...
    """

    def __init__(
        self,
        analyzer: EmotionAnalyzer | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        trend_window: int = DEFAULT_TREND_WINDOW,
        crisis_keywords: Sequence[str] | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            analyzer: Analyzer for incoming messages or None for defaults.
            history_size: Messages retained per user.
            trend_window: Most recent entries used for trend direction.
            crisis_keywords: Phrases that escalate risk when present in the
                last three messages.
        """
        self._analyzer = analyzer if analyzer is not None else EmotionAnalyzer()
        self.history_size = history_size
        self.trend_window = trend_window
        keywords = crisis_keywords if crisis_keywords is not None else DEFAULT_CRISIS_KEYWORDS
        self._crisis_keywords = tuple(k.lower() for k in keywords)
        self._histories: dict[str, UserHistory] = {}
        self._lock = threading.Lock()

    def record(
        self,
        user_id: str,
        text: str,
        timestamp: datetime | None = None,
        response_delay: float | None = None,
    ) -> EmotionalAssessment:
        """Analyze a message and add it to the user's history.

        Args:
            user_id: Stable identifier of the user.
            text: Message text.
            timestamp: When the message was sent (defaults to now, UTC).
            response_delay: Seconds since the user's previous message.

        Returns:
            EmotionalAssessment for this message.
        """
        analysis = self._analyzer.analyze(text)
        entry = HistoryEntry(
            text=text,
            timestamp=timestamp or datetime.now(UTC),
            analysis=analysis,
            response_delay=response_delay,
        )

        with self._lock:
            history = self._histories.get(user_id)
            if history is None:
                history = UserHistory(user_id=user_id)
                self._histories[user_id] = history

            self._append(history, entry)
            entries = list(history.entries)

        trend = self.analyze_trend(entries)
        risk = self.assess_risk(entries)
        actions = self.support_actions(entries[-1], risk)
        stability = (
            analysis.fuzzy_indicators.emotional_stability
            if analysis.fuzzy_indicators is not None
            else 0.5
        )

        if risk.level in ("high", "critical"):
            logger.warning(
                "Elevated emotional risk",
                user_id=user_id,
                level=risk.level,
                factors=list(risk.factors),
            )
        else:
            logger.debug("Recorded message", user_id=user_id, trend=trend.trend, risk=risk.level)

        return EmotionalAssessment(
            user_id=user_id,
            analysis=analysis,
            stability=stability,
            trend=trend,
            risk=risk,
            support_actions=actions,
        )

    def _append(self, history: UserHistory, entry: HistoryEntry) -> None:
        history.entries.append(entry)
        if len(history.entries) > self.history_size:
            del history.entries[: len(history.entries) - self.history_size]
        history.message_count += 1

        baseline = history.baseline
        if entry.response_delay and len(history.entries) > 1:
            baseline.average_response_time = (
                baseline.average_response_time + entry.response_delay
            ) / 2

        if entry.emotion not in baseline.typical_emotions:
            baseline.typical_emotions.append(entry.emotion)
            baseline.typical_emotions = baseline.typical_emotions[-5:]

        if len(history.entries) >= 5:
            recent = history.entries[-5:]
            avg_length = sum(len(e.text) for e in recent) / len(recent)
            if avg_length > 200:
                baseline.communication_style = "verbose"
            elif avg_length < 50:
                baseline.communication_style = "concise"
            else:
                baseline.communication_style = "moderate"

    # ------------------------------------------------------------------
    # Trend analysis
    # ------------------------------------------------------------------

    def analyze_trend(self, entries: Sequence[HistoryEntry]) -> TrendAnalysis:
        """Compute trend direction, key changes and recurring patterns."""
        if len(entries) < 3:
            return TrendAnalysis()

        direction, strength = self.intensity_trend(entries[-self.trend_window :])
        return TrendAnalysis(
            trend=direction,
            strength=strength,
            key_changes=tuple(identify_key_changes(entries)),
            time_patterns=tuple(detect_time_patterns(entries)),
            emotional_cycles=tuple(detect_emotional_cycles(entries)),
        )

    @staticmethod
    def intensity_trend(entries: Sequence[HistoryEntry]) -> tuple[TrendDirection, float]:
        if len(entries) < 3:
            return "stable", 0.5

        intensities = [e.intensity for e in entries]
        changes = [b - a for a, b in zip(intensities, intensities[1:])]
        mean_change = statistics.fmean(changes)
        volatility = statistics.pstdev(changes)

        if volatility > 0.3:
            return "volatile", min(volatility, 1.0)
        # Higher intensity means more distress
        if mean_change > 0.1:
            return "declining", min(abs(mean_change), 1.0)
        if mean_change < -0.1:
            return "improving", min(abs(mean_change), 1.0)
        return "stable", 0.5

    # ------------------------------------------------------------------
    # Risk and support
    # ------------------------------------------------------------------

    def assess_risk(self, entries: Sequence[HistoryEntry]) -> RiskAssessment:
        """Score risk from the latest message and recent history."""
        current = entries[-1]
        factors: list[str] = []
        score = 0.0

        if current.emotion in SEVERE_EMOTIONS:
            score += 0.8
            factors.append("Severe emotional distress detected")
        elif current.emotion in DISTRESS_EMOTIONS and current.intensity > 0.7:
            score += 0.4
            factors.append("High intensity negative emotion")

        if len(entries) >= 3:
            recent = statistics.fmean(e.intensity for e in entries[-3:])
            if recent > 0.8:
                score += 0.3
                factors.append("Sustained high emotional intensity")

        recent_text = " ".join(e.text.lower() for e in entries[-3:])
        if current.analysis.crisis_detected or any(k in recent_text for k in self._crisis_keywords):
            score += 0.9
            factors.append("Crisis language detected")

        level: RiskLevel
        if score >= 0.8:
            level = "critical"
        elif score >= 0.5:
            level = "high"
        elif score >= 0.3:
            level = "moderate"
        else:
            level = "low"

        return RiskAssessment(
            level=level,
            score=round(score, 2),
            factors=tuple(factors),
            recommendations=_RISK_RECOMMENDATIONS[level],
        )

    @staticmethod
    def support_actions(current: HistoryEntry, risk: RiskAssessment) -> SupportActions:
        immediate: list[str] = []
        if risk.level == "critical":
            immediate = [
                "Provide crisis intervention resources",
                "Encourage immediate professional help",
                "Stay with user until help arrives if possible",
            ]
        elif current.emotion == "anxious":
            immediate = [
                "Guide through breathing exercises",
                "Offer grounding techniques",
                "Provide reassurance and validation",
            ]
        elif current.emotion == "sad":
            immediate = [
                "Offer empathetic listening",
                "Validate feelings",
                "Suggest gentle activities",
            ]

        short_term: list[str] = []
        if risk.level in ("high", "moderate"):
            short_term += [
                "Schedule follow-up check-ins",
                "Provide mental health resources",
                "Suggest coping strategies",
            ]
        short_term += [
            "Monitor emotional patterns",
            "Encourage self-care activities",
            "Build support network connections",
        ]

        long_term = (
            "Track emotional trends over time",
            "Identify and address recurring triggers",
            "Develop personalized coping strategies",
            "Build emotional resilience",
            "Consider professional therapy if patterns persist",
        )

        return SupportActions(
            immediate=tuple(immediate),
            short_term=tuple(short_term),
            long_term=long_term,
        )

    # ------------------------------------------------------------------
    # History access
    # ------------------------------------------------------------------

    def history(self, user_id: str) -> list[HistoryEntry]:
        """Return a copy of the user's retained entries (empty if unknown)."""
        with self._lock:
            history = self._histories.get(user_id)
            return list(history.entries) if history else []

    def reset(self, user_id: str) -> None:
        """Forget everything tracked for a user."""
        with self._lock:
            self._histories.pop(user_id, None)

    def export(self, user_id: str) -> dict[str, Any]:
        """Export a user's baseline and recent history without message text.

        Raises:
            UnknownUserError: If nothing has been recorded for the user.
        """
        with self._lock:
            history = self._histories.get(user_id)
            if history is None:
                raise UnknownUserError(f"No tracked history for user {user_id}")
            return {
                "user_id": user_id,
                "baseline": history.baseline.to_dict(),
                "started_at": history.started_at.isoformat(),
                "message_count": history.message_count,
                "recent_history": [
                    {
                        "timestamp": e.timestamp.isoformat(),
                        "primary_emotion": e.emotion,
                        "intensity": e.intensity,
                        "message_length": len(e.text),
                        "response_delay": e.response_delay,
                    }
                    for e in history.entries[-10:]
                ],
            }

    @property
    def tracked_users(self) -> int:
        with self._lock:
            return len(self._histories)


def identify_key_changes(entries: Sequence[HistoryEntry], limit: int = 5) -> list[KeyChange]:
    """Find emotion switches and large intensity jumps between messages."""
    changes: list[KeyChange] = []

    for prev, curr in zip(entries, entries[1:]):
        diff = curr.intensity - prev.intensity

        if prev.emotion != curr.emotion and abs(diff) > 0.3:
            changes.append(
                KeyChange(
                    timestamp=curr.timestamp,
                    change=f"Emotional shift from {prev.emotion} to {curr.emotion}",
                    significance=abs(diff),
                )
            )

        if abs(diff) > 0.4:
            direction = "increased" if diff > 0 else "decreased"
            changes.append(
                KeyChange(
                    timestamp=curr.timestamp,
                    change=f"Intensity {direction} significantly",
                    significance=abs(diff),
                )
            )

    changes.sort(key=lambda c: c.significance, reverse=True)
    return changes[:limit]


def detect_emotional_cycles(entries: Sequence[HistoryEntry]) -> list[str]:
    """Find alternating A-B-A-B emotion patterns."""
    emotions = [e.emotion for e in entries]
    cycles: list[str] = []

    for i in range(len(emotions) - 3):
        a, b, c, d = emotions[i : i + 4]
        if a == c and b == d and a != b:
            cycles.append(f"Alternating {a}-{b} pattern detected")

    return cycles


def detect_time_patterns(entries: Sequence[HistoryEntry]) -> list[str]:
    """Report the most common emotion for hours with repeated messages."""
    if len(entries) < 5:
        return []

    by_hour: dict[int, list[str]] = {}
    for entry in entries:
        by_hour.setdefault(entry.timestamp.hour, []).append(entry.emotion)

    patterns: list[str] = []
    for hour in sorted(by_hour):
        emotions = by_hour[hour]
        if len(emotions) >= 2:
            dominant = Counter(emotions).most_common(1)[0][0]
            patterns.append(f"Tends toward {dominant} around {hour}:00")
    return patterns


def create_tracker(settings: Settings | None = None) -> ContinuousEmotionTracker:
    """Create a tracker from configuration."""
    settings = settings or get_settings()
    return ContinuousEmotionTracker(
        analyzer=create_analyzer(settings),
        history_size=settings.history_size,
        trend_window=settings.trend_window,
        crisis_keywords=settings.crisis_keywords,
    )
