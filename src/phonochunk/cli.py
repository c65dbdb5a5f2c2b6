"""CLI entrypoint for phonochunk: subcommand dispatcher."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_analyze_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the analyze subcommand."""
    parser.add_argument("result_file", type=Path,
                        help="Scoring-provider response (JSON) for the learner's recording")
    parser.add_argument("--text", default=None,
                        help="Reference text (shown when the response has no words; cache key)")
    parser.add_argument("--coach", type=Path, default=None,
                        help="Scoring-provider response (JSON) for the reference recording")
    parser.add_argument("--accent", default="en_us", choices=["en_us", "en_br"],
                        help="Reference accent, part of the cache key (default: en_us)")
    parser.add_argument("--unit-scale", type=float, default=0.01,
                        help="Seconds per provider time unit (default: 0.01)")
    parser.add_argument("--pad", action=argparse.BooleanOptionalAction, default=False,
                        help="Pad chunk spans for playback (default: disabled)")
    parser.add_argument("--pad-before", type=float, default=0.03,
                        help="Padding before a chunk in seconds (default: 0.03)")
    parser.add_argument("--pad-after", type=float, default=0.05,
                        help="Padding after a chunk in seconds (default: 0.05)")
    parser.add_argument("--clip-duration", type=float, default=None,
                        help="Length of the learner's recording in seconds, bounds padding")
    parser.add_argument("--weak-threshold", type=int, default=None,
                        help="Also list phonemes scoring below this percentage")
    parser.add_argument("--cache-dir", default=None,
                        help="Reference token cache directory (default: $PHONOCHUNK_CACHE_DIR)")
    parser.add_argument("--no-cache", action="store_true", default=False,
                        help="Disable the reference token cache")


def _add_tip_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the tip subcommand."""
    parser.add_argument("symbol", help="Phoneme symbol (ARPABET or IPA)")
    parser.add_argument("--score", default=None,
                        help="Score as 0-1 or 0-100")
    parser.add_argument("--word", default="",
                        help="Word the phoneme was spoken in")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="phonochunk",
        description="Phoneme-level pronunciation feedback from scoring-provider output",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Chunk and score a scoring response",
        description="Turn a scoring-provider response into scored, chunked words",
    )
    _add_analyze_args(analyze_parser)

    tip_parser = subparsers.add_parser(
        "tip",
        help="Coaching tip for one phoneme",
        description="Print a short coaching tip for a phoneme",
    )
    _add_tip_args(tip_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _load_json(path: Path):
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def _run_analyze(args: argparse.Namespace) -> None:
    """Run the analyze command and print JSON to stdout."""
    from phonochunk.cache import ReferenceCache
    from phonochunk.chunking import analyze_result
    from phonochunk.feedback import weakest_phonemes
    from phonochunk.reference import extract_reference_tokens
    from phonochunk.scoring import sentence_score
    from phonochunk.types import EngineConfig

    logger = logging.getLogger("phonochunk.cli")

    payload = _load_json(args.result_file)
    config = EngineConfig(
        unit_to_seconds=args.unit_scale,
        pad_spans=args.pad,
        pad_before=args.pad_before,
        pad_after=args.pad_after,
        clip_duration=args.clip_duration,
    )

    cache = None if args.no_cache else ReferenceCache(args.cache_dir)
    coach_tokens = None
    if args.coach is not None:
        coach_tokens = extract_reference_tokens(_load_json(args.coach), args.unit_scale)
        if cache is not None and args.text:
            cache.put(args.text, args.accent, coach_tokens)
    elif cache is not None and args.text:
        coach_tokens = cache.get(args.text, args.accent)
        if coach_tokens is None:
            logger.info("No cached reference tokens; coach spans omitted")

    words = analyze_result(payload, text=args.text, coach_tokens=coach_tokens, config=config)
    output = {
        "score": sentence_score(words),
        "words": [w.to_dict() for w in words],
    }
    if args.weak_threshold is not None:
        output["weak_phonemes"] = [
            w.to_dict() for w in weakest_phonemes(words, threshold=args.weak_threshold)
        ]

    logger.info(f"Analyzed {len(words)} word(s)")
    print(json.dumps(output, indent=2, ensure_ascii=False))


def _run_tip(args: argparse.Namespace) -> None:
    """Print a coaching tip."""
    from phonochunk.feedback import coach_tip
    from phonochunk.scoring import normalize_score

    print(coach_tip(args.symbol, normalize_score(args.score), args.word))


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s %(levelname)s: %(message)s",
    )

    if args.command == "analyze":
        _run_analyze(args)
    elif args.command == "tip":
        _run_tip(args)


if __name__ == "__main__":
    main()
