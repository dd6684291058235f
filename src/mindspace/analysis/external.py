"""Coercion of externally produced analyses, with heuristic fallback.

Language-model services reply with loosely structured JSON. Replies are
validated and clamped into an EmotionAnalysis here; anything unusable falls
back to the local heuristic analyzer so chat flows never fail on a bad reply.
"""

from __future__ import annotations

import re

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mindspace.analysis.analyzer import analyze
from mindspace.analysis.indicators import detect_crisis
from mindspace.analysis.models import (
    ContextAnalysis,
    EmotionAnalysis,
    EmotionResult,
    FuzzyIndicators,
    MentalHealthIndicators,
)
from mindspace.core.exceptions import ExternalAnalysisError
from mindspace.core.logging import get_logger

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


# =============================================================================
# Raw reply schema (lenient: every number optional, clamped afterwards)
# =============================================================================


class RawEmotion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: str | None = None
    score: float | None = None


class RawIndicators(BaseModel):
    model_config = ConfigDict(extra="ignore")

    anxiety_level: float | None = None
    depression_level: float | None = None
    stress_level: float | None = None
    positive_sentiment: float | None = None


class RawContext(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tone: str | None = None
    intensity: float | None = None
    emotional_complexity: float | None = None
    underlying_themes: list[str] = Field(default_factory=list)


class RawFuzzy(BaseModel):
    model_config = ConfigDict(extra="ignore")

    emotional_stability: float | None = None
    communication_openness: float | None = None
    support_seeking_behavior: float | None = None
    coping_mechanisms: list[str] = Field(default_factory=list)
    relationship_to_emotions: str | None = None


class ExternalAnalysisReply(BaseModel):
    """Shape of an analysis reply from an external model."""

    model_config = ConfigDict(extra="ignore")

    primary_emotion: str = Field(min_length=1)
    confidence: float | None = None
    all_emotions: list[RawEmotion] | None = None
    mental_health_indicators: RawIndicators
    context_analysis: RawContext | None = None
    fuzzy_indicators: RawFuzzy | None = None


def _bounded(value: float | None, default: float, low: float = 0.0, high: float = 1.0) -> float:
    if value is None:
        return default
    return max(low, min(high, value))


def strip_code_fences(raw: str) -> str:
    """Remove markdown code fences wrapped around a JSON reply."""
    return _CODE_FENCE.sub("", raw).strip()


def parse_external_analysis(raw: str | bytes, text: str | None = None) -> EmotionAnalysis:
    """Parse and clamp an external analysis reply.

    Args:
        raw: Reply body, optionally wrapped in markdown fences.
        text: The analysed message; when given it is scanned for crisis
            language so the signal survives whatever the reply says.

    Returns:
        EmotionAnalysis with every number inside its documented range.

    Raises:
        ExternalAnalysisError: If the reply is not valid UTF-8 or JSON,
            or lacks required fields.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExternalAnalysisError("Reply is not valid UTF-8") from e
    body = strip_code_fences(raw)

    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise ExternalAnalysisError(f"Reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ExternalAnalysisError("Reply must be a JSON object")

    try:
        reply = ExternalAnalysisReply.model_validate(data)
    except ValidationError as e:
        raise ExternalAnalysisError(f"Invalid analysis structure: {e.error_count()} errors") from e

    return _to_analysis(reply, crisis=detect_crisis(text) if text else False)


def _to_analysis(reply: ExternalAnalysisReply, crisis: bool) -> EmotionAnalysis:
    confidence = _bounded(reply.confidence, 0.5)

    if reply.all_emotions:
        emotions = [
            EmotionResult(label=e.label or "neutral", score=_bounded(e.score, 0.0))
            for e in reply.all_emotions
        ]
    else:
        emotions = [EmotionResult(label=reply.primary_emotion, score=confidence)]
    emotions.sort(key=lambda e: e.score, reverse=True)

    mh = reply.mental_health_indicators
    indicators = MentalHealthIndicators(
        anxiety_level=_bounded(mh.anxiety_level, 0.2),
        depression_level=_bounded(mh.depression_level, 0.2),
        stress_level=_bounded(mh.stress_level, 0.2),
        positive_sentiment=_bounded(mh.positive_sentiment, 0.5),
    )

    context = None
    if reply.context_analysis is not None:
        ctx = reply.context_analysis
        context = ContextAnalysis(
            tone=ctx.tone or "neutral",
            intensity=_bounded(ctx.intensity, 0.5),
            emotional_complexity=_bounded(ctx.emotional_complexity, 1.0, 1.0, 3.0),
            underlying_themes=tuple(ctx.underlying_themes),
        )

    fuzzy = None
    if reply.fuzzy_indicators is not None:
        fz = reply.fuzzy_indicators
        fuzzy = FuzzyIndicators(
            emotional_stability=_bounded(fz.emotional_stability, 0.5),
            communication_openness=_bounded(fz.communication_openness, 0.5),
            support_seeking_behavior=_bounded(fz.support_seeking_behavior, 0.3),
            coping_mechanisms=tuple(fz.coping_mechanisms),
            relationship_to_emotions=fz.relationship_to_emotions
            or "Neutral emotional relationship",
        )

    return EmotionAnalysis(
        primary_emotion=reply.primary_emotion,
        confidence=confidence,
        all_emotions=tuple(emotions),
        mental_health_indicators=indicators,
        context_analysis=context,
        fuzzy_indicators=fuzzy,
        crisis_detected=crisis,
    )


def analyze_with_fallback(text: str, raw: str | bytes | None) -> EmotionAnalysis:
    """Use an external reply when it parses, otherwise analyze locally.

    Args:
        text: The message that was sent for external analysis.
        raw: The external reply body, or None if the call failed.

    Returns:
        EmotionAnalysis from the reply or from the heuristic analyzer.
    """
    if raw is not None:
        try:
            return parse_external_analysis(raw, text=text)
        except ExternalAnalysisError as e:
            logger.warning("External analysis unusable, using heuristic analyzer", error=str(e))
    else:
        logger.info("No external analysis available, using heuristic analyzer")
    return analyze(text)
