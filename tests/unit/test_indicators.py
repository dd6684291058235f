"""Unit tests for IndicatorComposer and crisis detection."""

import pytest

from mindspace.analysis import (
    ContextAnalysis,
    EmotionResult,
    IndicatorComposer,
    detect_crisis,
    find_crisis_phrases,
)


@pytest.fixture
def composer() -> IndicatorComposer:
    return IndicatorComposer()


class TestCrisisDetection:
    """Tests for crisis phrase matching."""

    @pytest.mark.parametrize(
        "text",
        [
            "I want to end it all",
            "having SUICIDAL thoughts again",
            "everyone would be better off dead without me",
            "I keep thinking about self-harm",
            "I can't go on like this",
        ],
    )
    def test_detects_crisis(self, text: str) -> None:
        assert detect_crisis(text)

    def test_ordinary_text(self) -> None:
        assert not detect_crisis("I'm tired but fine")

    def test_find_phrases_in_table_order(self) -> None:
        phrases = find_crisis_phrases("I want to die, there's no way out")
        assert phrases == ["want to die", "no way out"]


class TestCompose:
    """Tests for indicator composition."""

    def test_neutral_message_is_all_zero(self, composer: IndicatorComposer) -> None:
        result = composer.compose(
            "The meeting is at three",
            [EmotionResult("neutral", 0.5)],
            ContextAnalysis(),
        )
        assert result.to_dict() == {
            "anxiety_level": 0.0,
            "depression_level": 0.0,
            "stress_level": 0.0,
            "positive_sentiment": 0.0,
        }

    def test_crisis_boost_applies_everywhere(self, composer: IndicatorComposer) -> None:
        result = composer.compose(
            "I want to die", [EmotionResult("neutral", 0.5)], ContextAnalysis()
        )
        assert result.anxiety_level == pytest.approx(0.3)
        assert result.depression_level == pytest.approx(0.3)
        assert result.stress_level == pytest.approx(0.15)
        assert result.positive_sentiment == 0.0

    def test_crisis_subtracted_from_positive(self, composer: IndicatorComposer) -> None:
        context = ContextAnalysis(
            tone="grateful",
            intensity=1.0,
            emotional_complexity=1.5,
            underlying_themes=("grateful",),
        )
        result = composer.compose(
            "I'm grateful but I want to die",
            [EmotionResult("grateful", 0.8)],
            context,
        )
        assert result.positive_sentiment == pytest.approx(0.4)
        assert result.anxiety_level == pytest.approx(0.6)
        assert result.stress_level == pytest.approx(0.3)

    def test_theme_boosts(self, composer: IndicatorComposer) -> None:
        context = ContextAnalysis(
            intensity=1.0,
            emotional_complexity=2.5,
            underlying_themes=("overwhelmed", "anxious", "hopeless"),
        )
        result = composer.compose("it is all too much", [], context)
        assert result.anxiety_level == pytest.approx(0.8)
        assert result.depression_level == pytest.approx(0.5)
        assert result.stress_level == pytest.approx(0.4)

    def test_scaled_by_intensity(self, composer: IndicatorComposer) -> None:
        context = ContextAnalysis(
            intensity=0.5, emotional_complexity=1.5, underlying_themes=("depressed",)
        )
        result = composer.compose("I feel numb", [EmotionResult("sad", 0.8)], context)
        assert result.depression_level == pytest.approx((0.8 + 0.4) * 0.5)

    def test_depressed_theme_counted_once(self, composer: IndicatorComposer) -> None:
        context = ContextAnalysis(
            intensity=0.5, emotional_complexity=1.5, underlying_themes=("depressed",)
        )
        result = composer.compose("I feel numb", [EmotionResult("depressed", 0.8)], context)
        assert result.depression_level == pytest.approx(0.4 * 0.5)

    def test_clamped_to_one(self, composer: IndicatorComposer) -> None:
        context = ContextAnalysis(
            intensity=1.0,
            emotional_complexity=2.0,
            underlying_themes=("hopeless", "depressed"),
        )
        result = composer.compose(
            "I want to kill myself", [EmotionResult("hopeless", 1.0)], context
        )
        assert result.depression_level == 1.0
        assert result.anxiety_level == 1.0

    def test_custom_crisis_boost(self) -> None:
        composer = IndicatorComposer(crisis_boost=0.2)
        result = composer.compose("suicide", [EmotionResult("neutral", 0.5)], ContextAnalysis())
        assert result.depression_level == pytest.approx(0.1)

    def test_explicit_crisis_flag_skips_scan(self, composer: IndicatorComposer) -> None:
        result = composer.compose(
            "I'm fine", [EmotionResult("neutral", 0.5)], ContextAnalysis(), crisis=True
        )
        assert result.depression_level == pytest.approx(0.3)

    def test_explicit_false_overrides_text(self, composer: IndicatorComposer) -> None:
        result = composer.compose(
            "I want to die", [EmotionResult("neutral", 0.5)], ContextAnalysis(), crisis=False
        )
        assert result.depression_level == 0.0
