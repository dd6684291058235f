"""Heuristic emotional-context analysis.

This module contains:
- Context analyzer (themes, intensity, sentence structure)
- Emotion scorer (theme scoring with valence-lexicon fallback)
- Mental health indicator composer (with crisis boost)
- Analysis facade and support guidance helpers
- External reply coercion with heuristic fallback
"""

from mindspace.analysis.analyzer import EmotionAnalyzer, analyze, neutral_baseline
from mindspace.analysis.context import ContextAnalyzer
from mindspace.analysis.external import analyze_with_fallback, parse_external_analysis
from mindspace.analysis.guidance import (
    get_recommendations,
    is_crisis_situation,
    level_description,
    should_offer_peer_support,
)
from mindspace.analysis.indicators import IndicatorComposer, detect_crisis, find_crisis_phrases
from mindspace.analysis.models import (
    ContextAnalysis,
    EmotionAnalysis,
    EmotionResult,
    FuzzyIndicators,
    MentalHealthIndicators,
)
from mindspace.analysis.scorer import EmotionScorer

__all__ = [
    # Facade
    "EmotionAnalyzer",
    "analyze",
    "neutral_baseline",
    # Stages
    "ContextAnalyzer",
    "EmotionScorer",
    "IndicatorComposer",
    "detect_crisis",
    "find_crisis_phrases",
    # Models
    "ContextAnalysis",
    "EmotionAnalysis",
    "EmotionResult",
    "FuzzyIndicators",
    "MentalHealthIndicators",
    # Guidance
    "get_recommendations",
    "is_crisis_situation",
    "level_description",
    "should_offer_peer_support",
    # External replies
    "analyze_with_fallback",
    "parse_external_analysis",
]
