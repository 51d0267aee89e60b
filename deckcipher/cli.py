"""
Command line entry point.

Encrypts or decrypts text with a card key and prints the output, the full
step trace, or a JSON report for renderers.

    deckcipher encrypt --key "S2 H5 JOKER" BORDERLAND
    deckcipher decrypt --key "S2 H5 JOKER" --trace "<ciphertext>"
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from deckcipher.config import SuitFallback, settings
from deckcipher.models.failure import (
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from deckcipher.models.report import CipherMode, build_report
from deckcipher.models.step import StepRecord
from deckcipher.parsers.key_parser import parse_key
from deckcipher.services.trace_builder import build_trace, final_output

logger = logging.getLogger(__name__)

EXIT_CODES: dict[OutcomeType, int] = {
    OutcomeType.SUCCESS: 0,
    OutcomeType.UNKNOWN_FAILURE: 1,
    OutcomeType.KNOWN_FAILURE: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deckcipher",
        description="Keyed card-deck transposition cipher with a step-by-step trace.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every step")

    subparsers = parser.add_subparsers(dest="mode", required=True)
    for mode in CipherMode:
        sub = subparsers.add_parser(mode.value, help=f"{mode.value} text with a card key")
        sub.add_argument("text", nargs="?", help="input text (read from stdin if omitted)")
        sub.add_argument("-k", "--key", required=True, help='key text, e.g. "S2 H5 JOKER"')
        output = sub.add_mutually_exclusive_group()
        output.add_argument("--trace", action="store_true", help="print every step")
        output.add_argument("--json", action="store_true", help="print a JSON trace report")
        sub.add_argument(
            "--strict",
            action="store_true",
            help="reject tokens with an unknown suit instead of treating them as SPADE",
        )
        sub.add_argument(
            "--no-mirror-queens",
            dest="mirror_queens",
            action="store_false",
            default=None,
            help="run queens on the deck as-is instead of mirrored",
        )
        if mode is CipherMode.ENCRYPT:
            sub.add_argument("--upper", action="store_true", help="upper-case the text first")

    return parser


def format_trace(trace: Sequence[StepRecord]) -> str:
    """Plain-text rendering of a trace, one block per step."""
    lines: list[str] = []
    for index, record in enumerate(trace):
        lines.append(f"[{index}] {record.description}")
        lines.append(f"    {record.text}")
        if record.xor_info:
            lines.extend(f"      {line}" for line in record.xor_info.splitlines())
    return "\n".join(lines)


def read_stdin_text() -> str:
    """
    Read input text from stdin.

    Only the single line terminator a pipe or `print` adds is dropped. A
    ciphertext can itself end in a newline symbol (code 10 from XOR).
    """
    text = sys.stdin.read()
    return text[:-1] if text.endswith("\n") else text


def run(args: argparse.Namespace) -> str:
    """
    Execute one CLI invocation and return the text to print.

    Raises:
        KnownError: If the strict key policy rejects a token
    """
    mode = CipherMode(args.mode)
    text = args.text if args.text is not None else read_stdin_text()
    if getattr(args, "upper", False):
        text = text.upper()

    fallback = SuitFallback.STRICT if args.strict else settings.suit_fallback
    tokens = parse_key(args.key, fallback=fallback)
    trace = build_trace(
        text, tokens, mode is CipherMode.ENCRYPT, mirror_queens=args.mirror_queens
    )

    if args.json:
        response = create_success(build_report(mode, args.key, tokens, trace))
        return response.model_dump_json(by_alias=True, indent=2)
    if args.trace:
        return format_trace(trace)
    return final_output(trace)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        print(run(args))
    except UnicodeEncodeError as e:
        logger.error("Output not printable in %s: %s", e.encoding, e.reason)
        reason = f"Output contains symbols the {e.encoding} stream cannot print ({e.reason})."
        failure = create_known_failure(FailureKind.INVALID_INPUT, reason)
        if args.json:
            print(failure.model_dump_json(indent=2))
        else:
            print(f"error: {reason}", file=sys.stderr)
        return EXIT_CODES[failure.outcome]
    except KnownError as e:
        logger.error("%s", e.message)
        failure = e.to_response()
        if args.json:
            print(failure.model_dump_json(indent=2))
        else:
            print(f"error: {e.message}", file=sys.stderr)
        return EXIT_CODES[failure.outcome]
    except Exception as e:
        logger.exception("Unexpected failure")
        failure = create_unknown_failure(e)
        if args.json:
            print(failure.model_dump_json(indent=2))
        return EXIT_CODES[failure.outcome]

    return EXIT_CODES[OutcomeType.SUCCESS]


if __name__ == "__main__":
    sys.exit(main())
