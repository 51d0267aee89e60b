"""
Trace Builder.

Drives a full key over an initial deck and records every intermediate state.

Encrypting walks the key front to back with apply_step. Decrypting walks it
back to front with invert_step, passing each token's ORIGINAL 1-based
position (joker driver suits depend on it).

INVARIANT: every record in a trace has the same deck length as the input.
"""

import logging
from collections.abc import Iterable, Sequence

from deckcipher.models.failure import InvariantViolationError
from deckcipher.models.step import Deck, StepRecord, render_deck, to_deck
from deckcipher.models.token import KeyToken
from deckcipher.parsers.key_parser import parse_key
from deckcipher.services.step_engine import apply_step, invert_step

logger = logging.getLogger(__name__)

INITIAL_DESCRIPTION = "Initial"


def _check_length(record: StepRecord, expected: int) -> None:
    if len(record.deck) != expected:
        raise InvariantViolationError(record.description, expected, len(record.deck))


def build_trace(
    initial_deck: Iterable[str],
    tokens: Sequence[KeyToken],
    encrypting: bool = True,
    *,
    mirror_queens: bool | None = None,
) -> list[StepRecord]:
    """
    Build the trace of a full key over a deck.

    Args:
        initial_deck: Input deck (text or any iterable of symbols)
        tokens: Parsed key tokens in key order
        encrypting: True to apply the key, False to undo it
        mirror_queens: Queen mirror policy; defaults to the configured policy

    Returns:
        List of StepRecord. Index 0 is the untouched input; index i is the
        deck after the i-th processed token. An empty deck or empty key
        gives only the initial record.

    Raises:
        InvariantViolationError: If a step changes the deck length
    """
    deck: Deck = to_deck(initial_deck)
    trace = [StepRecord(deck=deck, description=INITIAL_DESCRIPTION)]

    if not deck or not tokens:
        return trace

    expected = len(deck)

    if encrypting:
        for position, token in enumerate(tokens, start=1):
            record = apply_step(deck, token, position, mirror_queens=mirror_queens)
            _check_length(record, expected)
            trace.append(record)
            deck = record.deck
    else:
        for position in range(len(tokens), 0, -1):
            record = invert_step(deck, tokens[position - 1], position, mirror_queens=mirror_queens)
            _check_length(record, expected)
            trace.append(record)
            deck = record.deck

    logger.info(
        "Built %s trace: %d steps over %d symbols",
        "encrypt" if encrypting else "decrypt",
        len(trace) - 1,
        expected,
    )
    return trace


def final_output(trace: Sequence[StepRecord]) -> str:
    """Text of the last record's deck (empty string for an empty trace)."""
    if not trace:
        return ""
    return render_deck(trace[-1].deck)


def _tokens(key: str | Sequence[KeyToken]) -> Sequence[KeyToken]:
    if isinstance(key, str):
        return parse_key(key)
    return key


def encrypt(text: str, key: str | Sequence[KeyToken], *, mirror_queens: bool | None = None) -> str:
    """Encrypt text with a key given as key text or parsed tokens."""
    return final_output(build_trace(text, _tokens(key), True, mirror_queens=mirror_queens))


def decrypt(text: str, key: str | Sequence[KeyToken], *, mirror_queens: bool | None = None) -> str:
    """Decrypt text with a key given as key text or parsed tokens."""
    return final_output(build_trace(text, _tokens(key), False, mirror_queens=mirror_queens))
