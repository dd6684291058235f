"""CLI entry point for MindSpace emotion analysis."""

import argparse
import sys

import orjson

from mindspace.analysis import (
    EmotionAnalyzer,
    find_crisis_phrases,
    get_recommendations,
    is_crisis_situation,
    level_description,
    should_offer_peer_support,
)
from mindspace.config import get_settings
from mindspace.core.exceptions import AnalysisError
from mindspace.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _read_text(args: argparse.Namespace) -> str:
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="MindSpace emotion analysis")
    parser.add_argument("text", nargs="?", help="Message to analyze (reads stdin if omitted)")
    parser.add_argument("--file", help="Read the message from a file")
    parser.add_argument(
        "--guidance",
        action="store_true",
        help="Include recommendations, peer-support and crisis flags",
    )
    parser.add_argument(
        "--max-length", type=_positive_int, help="Override the configured length limit"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings)

    analyzer = EmotionAnalyzer(
        max_text_length=(
            args.max_length if args.max_length is not None else settings.max_text_length
        ),
        top_emotions=settings.top_emotions,
    )

    try:
        text = _read_text(args)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read message", file=args.file, error=str(e))
        return 2

    try:
        analysis = analyzer.analyze(text)
    except AnalysisError as e:
        logger.error("Analysis rejected", error=e.message)
        return 2

    output = analysis.to_dict()
    if args.guidance:
        mh = analysis.mental_health_indicators
        output["guidance"] = {
            "levels": {name: level_description(value) for name, value in mh.to_dict().items()},
            "recommendations": get_recommendations(mh),
            "offer_peer_support": should_offer_peer_support(analysis),
            "crisis": is_crisis_situation(analysis),
            "crisis_phrases": find_crisis_phrases(text),
        }

    sys.stdout.write(orjson.dumps(output, option=orjson.OPT_INDENT_2).decode() + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
