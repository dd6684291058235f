"""Support guidance derived from an emotion analysis."""

from __future__ import annotations

from typing import Literal

from mindspace.analysis.models import EmotionAnalysis, FuzzyIndicators, MentalHealthIndicators
from mindspace.core.constants import LOW_LEVEL_CUTOFF, MODERATE_LEVEL_CUTOFF

CRISIS_EMOTIONS = frozenset({"hopeless", "desperate", "suicidal"})


def level_description(level: float) -> Literal["Low", "Moderate", "High"]:
    """Describe an indicator level for display."""
    if level < LOW_LEVEL_CUTOFF:
        return "Low"
    if level < MODERATE_LEVEL_CUTOFF:
        return "Moderate"
    return "High"


def get_recommendations(indicators: MentalHealthIndicators) -> list[str]:
    """Suggest coping steps for the given indicator levels."""
    recommendations: list[str] = []

    if indicators.anxiety_level > 0.7:
        recommendations.append("Try the 4-7-8 breathing technique when anxiety peaks")
        recommendations.append("Consider grounding techniques like the 5-4-3-2-1 method")
    elif indicators.anxiety_level > 0.5:
        recommendations.append("Take a few deep breaths and remind yourself you're safe")

    if indicators.depression_level > 0.7:
        recommendations.append("Please consider reaching out to a mental health professional")
        recommendations.append("Connect with friends, family, or support groups when you can")
    elif indicators.depression_level > 0.5:
        recommendations.append("Try to engage in one small activity you usually enjoy")

    if indicators.stress_level > 0.6:
        recommendations.append("Try organizing your tasks and setting priorities")
        recommendations.append("Remember to take breaks and practice self-compassion")

    if indicators.positive_sentiment < 0.3:
        recommendations.append("Try to identify one small positive moment in your day")
        recommendations.append("Consider practicing gratitude or self-compassion")

    if not recommendations:
        recommendations.append("Keep taking care of your mental health")
        recommendations.append("Continue practicing self-awareness and emotional check-ins")

    return recommendations


def should_offer_peer_support(
    analysis: EmotionAnalysis,
    fuzzy: FuzzyIndicators | None = None,
) -> bool:
    """Return True if the message warrants offering a peer-support match.

    Args:
        analysis: Analysis of the latest message.
        fuzzy: Communication-style indicators; defaults to those attached
            to the analysis, if any.
    """
    fuzzy = fuzzy if fuzzy is not None else analysis.fuzzy_indicators
    mh = analysis.mental_health_indicators

    if mh.anxiety_level > 0.7 or mh.depression_level > 0.7 or mh.stress_level > 0.8:
        return True

    if fuzzy is None:
        return False

    if fuzzy.support_seeking_behavior > 0.6:
        return True

    return fuzzy.emotional_stability < 0.4 and (
        mh.anxiety_level > 0.5 or mh.depression_level > 0.5
    )


def is_crisis_situation(
    analysis: EmotionAnalysis,
    fuzzy: FuzzyIndicators | None = None,
) -> bool:
    """Return True if emergency resources should be shown."""
    fuzzy = fuzzy if fuzzy is not None else analysis.fuzzy_indicators
    mh = analysis.mental_health_indicators

    if analysis.crisis_detected or analysis.primary_emotion in CRISIS_EMOTIONS:
        return True

    if mh.anxiety_level > 0.9 or mh.depression_level > 0.9:
        return True

    return (
        fuzzy is not None
        and fuzzy.emotional_stability < 0.2
        and (mh.anxiety_level > 0.7 or mh.depression_level > 0.7)
    )
