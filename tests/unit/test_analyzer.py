"""Unit tests for the EmotionAnalyzer facade."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from structlog.testing import capture_logs

from mindspace.analysis import EmotionAnalyzer, analyze, detect_crisis, neutral_baseline
from mindspace.analysis import analyzer as analyzer_module
from mindspace.analysis import indicators as indicators_module
from mindspace.analysis.analyzer import create_analyzer
from mindspace.analysis.patterns import EMOTION_TAXONOMY
from mindspace.config import Settings
from mindspace.core.exceptions import InputTooLargeError, InvalidInputError

SAMPLES = [
    "I want to kill myself, there's no point anymore",
    "I'm not really that anxious",
    "I'm so grateful and thankful for my friends today",
    "Help. Now. Please. Hurry.",
    "The meeting is at three",
    "I'm overwhelmed, hopeless, nervous, numb, furious, grateful, thrilled and confused",
    "today was good and fun",
    "I feel sad and tired",
]


class TestScenarios:
    """End-to-end behaviour on representative messages."""

    def test_crisis_message(self, analyzer: EmotionAnalyzer) -> None:
        result = analyzer.analyze("I want to kill myself, there's no point anymore")
        assert result.mental_health_indicators.depression_level > 0.7
        assert result.context_analysis is not None
        assert "hopeless" in result.context_analysis.underlying_themes
        assert result.crisis_detected

    def test_crisis_message_logs_warning(self, analyzer: EmotionAnalyzer) -> None:
        with capture_logs() as logs:
            analyzer.analyze("I want to kill myself")
        assert any(
            log["event"] == "Crisis language detected" and log["log_level"] == "warning"
            for log in logs
        )

    def test_negation_dampens(self, analyzer: EmotionAnalyzer) -> None:
        negated = analyzer.analyze("I'm not really that anxious")
        plain = analyzer.analyze("I'm really that anxious")
        assert negated.intensity < plain.intensity
        assert negated.intensity == pytest.approx(plain.intensity * 0.8)

    def test_gratitude(self, analyzer: EmotionAnalyzer) -> None:
        result = analyzer.analyze("I'm so grateful and thankful for my friends today")
        assert result.primary_emotion in {"grateful", "positive"}
        assert result.mental_health_indicators.positive_sentiment > 0.5
        assert not result.crisis_detected

    def test_urgency(self, analyzer: EmotionAnalyzer) -> None:
        urgent = analyzer.analyze("Help. Now. Please. Hurry.")
        single = analyzer.analyze("Please help me now and hurry because I need it")
        assert urgent.context_analysis is not None
        assert "urgency" in urgent.context_analysis.underlying_themes
        assert urgent.intensity > single.intensity

    def test_neutral_message(self, analyzer: EmotionAnalyzer) -> None:
        result = analyzer.analyze("The meeting is at three")
        assert result.primary_emotion == "neutral"
        assert result.confidence == 0.5

    def test_crisis_scanned_once(
        self, analyzer: EmotionAnalyzer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[str] = []

        def counting_detect(text: str) -> bool:
            calls.append(text)
            return detect_crisis(text)

        monkeypatch.setattr(analyzer_module, "detect_crisis", counting_detect)
        monkeypatch.setattr(indicators_module, "detect_crisis", counting_detect)
        result = analyzer.analyze("I want to die")
        assert result.crisis_detected
        assert result.mental_health_indicators.depression_level > 0.0
        assert len(calls) == 1


class TestInvariants:
    """Properties that hold for every message."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_bounds(self, analyzer: EmotionAnalyzer, text: str) -> None:
        result = analyzer.analyze(text)
        assert 0.0 <= result.confidence <= 1.0
        for value in result.mental_health_indicators.to_dict().values():
            assert 0.0 <= value <= 1.0
        assert result.context_analysis is not None
        assert 0.0 <= result.context_analysis.intensity <= 1.0
        assert 1.0 <= result.context_analysis.emotional_complexity <= 3.0

    @pytest.mark.parametrize("text", SAMPLES)
    def test_primary_is_top_emotion(self, analyzer: EmotionAnalyzer, text: str) -> None:
        result = analyzer.analyze(text)
        assert result.all_emotions[0].label == result.primary_emotion
        assert result.all_emotions[0].score == result.confidence
        scores = [e.score for e in result.all_emotions]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_labels_in_taxonomy(self, analyzer: EmotionAnalyzer, text: str) -> None:
        result = analyzer.analyze(text)
        assert {e.label for e in result.all_emotions} <= EMOTION_TAXONOMY

    @pytest.mark.parametrize("text", SAMPLES)
    def test_deterministic(self, analyzer: EmotionAnalyzer, text: str) -> None:
        assert analyzer.analyze(text) == analyzer.analyze(text)

    def test_top_emotions_cap(self, analyzer: EmotionAnalyzer) -> None:
        result = analyzer.analyze(SAMPLES[5])
        assert len(result.all_emotions) == 5

    def test_custom_top_emotions(self) -> None:
        result = EmotionAnalyzer(top_emotions=2).analyze(SAMPLES[5])
        assert len(result.all_emotions) == 2

    def test_concurrent_calls_match_sequential(self, analyzer: EmotionAnalyzer) -> None:
        expected = [analyzer.analyze(t) for t in SAMPLES]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(analyzer.analyze, SAMPLES * 4))
        assert results == expected * 4


class TestInputHandling:
    """Tests for empty, oversized and malformed input."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_returns_baseline(self, analyzer: EmotionAnalyzer, text: str) -> None:
        result = analyzer.analyze(text)
        assert result == neutral_baseline()
        assert result.primary_emotion == "neutral"
        assert result.confidence == 0.5
        assert result.context_analysis is not None
        assert result.context_analysis.underlying_themes == ()

    def test_non_string_rejected(self, analyzer: EmotionAnalyzer) -> None:
        with pytest.raises(InvalidInputError, match="must be a string"):
            analyzer.analyze(None)  # type: ignore[arg-type]

    def test_too_long_rejected(self) -> None:
        bounded = EmotionAnalyzer(max_text_length=10)
        with pytest.raises(InputTooLargeError) as exc_info:
            bounded.analyze("x" * 11)
        assert exc_info.value.length == 11
        assert exc_info.value.limit == 10

    def test_at_limit_accepted(self) -> None:
        bounded = EmotionAnalyzer(max_text_length=10)
        assert bounded.analyze("x" * 10).primary_emotion == "neutral"


class TestModuleHelpers:
    """Tests for analyze() and create_analyzer()."""

    def test_module_analyze_matches_default(self) -> None:
        text = "I'm so grateful and thankful for my friends today"
        assert analyze(text) == EmotionAnalyzer().analyze(text)

    def test_create_analyzer_uses_settings(self) -> None:
        settings = Settings(_env_file=None, max_text_length=20, top_emotions=1)
        bounded = create_analyzer(settings)
        assert len(bounded.analyze(SAMPLES[5][:20]).all_emotions) <= 1
        with pytest.raises(InputTooLargeError):
            bounded.analyze("x" * 21)

    def test_wire_shape(self, analyzer: EmotionAnalyzer) -> None:
        data = analyzer.analyze("I feel sad and tired").to_dict()
        assert set(data) == {
            "primary_emotion",
            "confidence",
            "all_emotions",
            "mental_health_indicators",
            "context_analysis",
        }
        assert data["all_emotions"] == [{"label": "sad", "score": 0.75}]
