"""Unit tests for external analysis coercion and fallback."""

import orjson
import pytest

from mindspace.analysis import analyze, analyze_with_fallback, parse_external_analysis
from mindspace.analysis.external import strip_code_fences
from mindspace.core.exceptions import ExternalAnalysisError

REPLY = {
    "primary_emotion": "anxious",
    "confidence": 0.82,
    "all_emotions": [
        {"label": "sad", "score": 0.3},
        {"label": "anxious", "score": 0.82},
    ],
    "mental_health_indicators": {
        "anxiety_level": 0.7,
        "depression_level": 0.3,
        "stress_level": 0.5,
        "positive_sentiment": 0.1,
    },
    "context_analysis": {
        "tone": "worried",
        "intensity": 0.6,
        "emotional_complexity": 2,
        "underlying_themes": ["work", "sleep"],
    },
    "fuzzy_indicators": {
        "emotional_stability": 0.4,
        "communication_openness": 0.8,
        "support_seeking_behavior": 0.6,
        "coping_mechanisms": ["talking"],
        "relationship_to_emotions": "Aware but struggling",
    },
}


def _raw(**overrides: object) -> str:
    data = {**REPLY, **overrides}
    return orjson.dumps(data).decode()


class TestParse:
    """Tests for parse_external_analysis."""

    def test_full_reply(self) -> None:
        result = parse_external_analysis(_raw())
        assert result.primary_emotion == "anxious"
        assert result.confidence == 0.82
        assert [e.label for e in result.all_emotions] == ["anxious", "sad"]
        assert result.mental_health_indicators.anxiety_level == 0.7
        assert result.context_analysis is not None
        assert result.context_analysis.underlying_themes == ("work", "sleep")
        assert result.fuzzy_indicators is not None
        assert result.fuzzy_indicators.coping_mechanisms == ("talking",)
        assert not result.crisis_detected

    def test_code_fences_stripped(self) -> None:
        result = parse_external_analysis(f"```json\n{_raw()}\n```")
        assert result.primary_emotion == "anxious"

    def test_bytes_accepted(self) -> None:
        assert parse_external_analysis(_raw().encode()).primary_emotion == "anxious"

    def test_values_clamped(self) -> None:
        result = parse_external_analysis(
            _raw(
                confidence=1.4,
                mental_health_indicators={"anxiety_level": -0.2, "stress_level": 3},
                context_analysis={"intensity": 2.0, "emotional_complexity": 7},
            )
        )
        assert result.confidence == 1.0
        assert result.mental_health_indicators.anxiety_level == 0.0
        assert result.mental_health_indicators.stress_level == 1.0
        assert result.context_analysis is not None
        assert result.context_analysis.intensity == 1.0
        assert result.context_analysis.emotional_complexity == 3.0

    def test_defaults_for_missing_values(self) -> None:
        result = parse_external_analysis(
            orjson.dumps({"primary_emotion": "sad", "mental_health_indicators": {}})
        )
        assert result.confidence == 0.5
        assert result.mental_health_indicators.to_dict() == {
            "anxiety_level": 0.2,
            "depression_level": 0.2,
            "stress_level": 0.2,
            "positive_sentiment": 0.5,
        }
        assert [(e.label, e.score) for e in result.all_emotions] == [("sad", 0.5)]
        assert result.context_analysis is None
        assert result.fuzzy_indicators is None

    def test_crisis_scanned_from_text(self) -> None:
        result = parse_external_analysis(_raw(), text="I just want to end it all")
        assert result.crisis_detected

    def test_strip_code_fences(self) -> None:
        assert strip_code_fences("```\n{}\n```") == "{}"


class TestParseErrors:
    """Tests for unusable replies."""

    def test_invalid_json(self) -> None:
        with pytest.raises(ExternalAnalysisError, match="not valid JSON"):
            parse_external_analysis("I think the user is sad")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ExternalAnalysisError, match="not valid UTF-8"):
            parse_external_analysis(b"\xff\xfe{")

    def test_not_an_object(self) -> None:
        with pytest.raises(ExternalAnalysisError, match="JSON object"):
            parse_external_analysis("[1, 2, 3]")

    def test_missing_indicators(self) -> None:
        with pytest.raises(ExternalAnalysisError, match="Invalid analysis structure"):
            parse_external_analysis('{"primary_emotion": "sad"}')

    def test_empty_primary_emotion(self) -> None:
        with pytest.raises(ExternalAnalysisError):
            parse_external_analysis(_raw(primary_emotion=""))


class TestFallback:
    """Tests for analyze_with_fallback."""

    TEXT = "I'm so grateful and thankful for my friends today"

    def test_uses_valid_reply(self) -> None:
        result = analyze_with_fallback(self.TEXT, _raw())
        assert result.primary_emotion == "anxious"

    def test_falls_back_on_bad_reply(self) -> None:
        assert analyze_with_fallback(self.TEXT, "not json") == analyze(self.TEXT)

    def test_falls_back_on_undecodable_bytes(self) -> None:
        assert analyze_with_fallback(self.TEXT, b"\xff\xfe{") == analyze(self.TEXT)

    def test_falls_back_when_missing(self) -> None:
        assert analyze_with_fallback(self.TEXT, None) == analyze(self.TEXT)
