"""
Step Engine.

Applies one key token to a deck (forward) or undoes it (inverse).

=============================================================================
DISPATCH
=============================================================================

    suit     forward                         inverse
    SPADE    cut(v)                          rotate_right(v)
    HEART    reverse_top(v)                  reverse_top(v)
    CLUB     faro(v)                         unfaro(v)
    DIAMOND  rotate_left(v), xor(v)          xor(v), rotate_right(v)
    JOKER    mirror, driver step, xor seed   un-xor seed, undo driver, mirror

v is the token value normalized against the deck length. A queen (12) runs
its primitive on the mirrored deck when queen mirroring is enabled.

=============================================================================
JOKER DERIVATION
=============================================================================

N and the XOR seed are read from quantities the joker step cannot change,
so the inverse recomputes them from the post-step deck:

- N = pair_xor_checksum(deck) mod L. Reordering the deck and XOR-ing every
  symbol by one value both leave the checksum unchanged.
- seed = ((first >> 3) + (last >> 3)) mod 7 over the driver step's output.
  XOR with a seed below 8 never changes code >> 3.

INVARIANT: invert_step(apply_step(d, t, p), t, p).deck == d for every suit.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from deckcipher.config import (
    ACE,
    JACK,
    JOKER_DRIVER_ORDER,
    JOKER_SEED_MODULUS,
    KING,
    QUEEN,
    settings,
)
from deckcipher.models.step import Deck, StepRecord
from deckcipher.models.token import KeyToken, Suit
from deckcipher.services import transforms

logger = logging.getLogger(__name__)

DRIVER_SUITS: tuple[Suit, ...] = tuple(Suit(name) for name in JOKER_DRIVER_ORDER)

# A primitive step body: (deck, magnitude) -> (deck, xor audit or None)
StepAction = Callable[[Deck, int], tuple[Deck, str | None]]


def normalize_value(value: int, deck_length: int) -> int:
    """
    Effective magnitude of a face value for a deck of the given length.

    Ace is 1, King is the whole deck, Jack/Queen and numeric values are
    capped at the deck length. An empty deck always gives 0.
    """
    if deck_length <= 0:
        return 0
    if value == ACE:
        return 1
    if value == JACK:
        return min(JACK, deck_length)
    if value == QUEEN:
        return min(QUEEN, deck_length)
    if value == KING:
        return deck_length
    return min(value, deck_length)


def with_mirror(action: StepAction) -> StepAction:
    """Wrap a step action so it runs on the mirrored deck and mirrors back."""

    def mirrored_action(deck: Deck, n: int) -> tuple[Deck, str | None]:
        result, audit = action(transforms.mirror(deck), n)
        return transforms.mirror(result), audit

    return mirrored_action


# =============================================================================
# PRIMITIVE STEP ACTIONS
# =============================================================================


def _cut(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.cut(deck, n), None


def _uncut(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.rotate_right(deck, n), None


def _reverse(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.reverse_top(deck, n), None


def _faro(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.faro(deck, n), None


def _unfaro(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.unfaro(deck, n), None


def _rotate_xor(deck: Deck, n: int) -> tuple[Deck, str | None]:
    return transforms.xor_with_n(transforms.rotate_left(deck, n), n)


def _unxor_rotate(deck: Deck, n: int) -> tuple[Deck, str | None]:
    unxored, audit = transforms.xor_with_n(deck, n)
    return transforms.rotate_right(unxored, n), audit


@dataclass(frozen=True)
class SuitOperation:
    """Forward and inverse bodies of one suit, with their labels."""

    forward: StepAction
    inverse: StepAction
    forward_label: str
    inverse_label: str
    top_only: bool = False


OPERATIONS: dict[Suit, SuitOperation] = {
    Suit.SPADE: SuitOperation(_cut, _uncut, "CUT {v}", "CUT {v} (rotate right {v})"),
    Suit.HEART: SuitOperation(
        _reverse, _reverse, "REVERSE top {v}", "REVERSE top {v}", top_only=True
    ),
    Suit.CLUB: SuitOperation(_faro, _unfaro, "FARO split at {v}", "FARO split at {v}"),
    Suit.DIAMOND: SuitOperation(
        _rotate_xor, _unxor_rotate, "ROTATE {v} + XOR {v}", "XOR {v} + ROTATE {v}"
    ),
}


def _suit_of(token: KeyToken) -> Suit | None:
    try:
        return Suit(token.suit)
    except ValueError:
        return None


def _affected(length: int, magnitude: int, top_only: bool, mirrored: bool) -> tuple[int, ...]:
    if not top_only:
        return tuple(range(length))
    if mirrored:
        return tuple(range(length - magnitude, length))
    return tuple(range(magnitude))


def _run_suit_step(
    deck: Deck,
    token: KeyToken,
    suit: Suit,
    forward: bool,
    mirror_queens: bool,
) -> StepRecord:
    operation = OPERATIONS[suit]

    if token.exact:
        magnitude = token.value
        mirrored = False
    else:
        magnitude = normalize_value(token.value, len(deck))
        mirrored = mirror_queens and token.value == QUEEN

    action = operation.forward if forward else operation.inverse
    if mirrored:
        action = with_mirror(action)

    result, audit = action(deck, magnitude)

    label = (operation.forward_label if forward else operation.inverse_label).format(v=magnitude)
    description = f"{suit.glyph}{token.value} {label}"
    if not forward:
        description = f"undo {description}"
    if mirrored:
        description += " (mirrored)"

    return StepRecord(
        deck=result,
        description=description,
        affected_indexes=_affected(len(deck), magnitude, operation.top_only, mirrored),
        xor_info=audit,
    )


# =============================================================================
# JOKER
# =============================================================================


def joker_driver(position: int) -> Suit:
    """Driver suit for a joker at the given 1-based key position."""
    return DRIVER_SUITS[(position - 1) % len(DRIVER_SUITS)]


def joker_magnitude(deck: Sequence[str]) -> int:
    """N for a joker step: pair-XOR checksum mod deck length."""
    if not deck:
        return 0
    return transforms.pair_xor_checksum(deck) % len(deck)


def joker_seed(deck: Sequence[str]) -> int:
    """XOR seed from the high bits of the first and last symbols."""
    if not deck:
        return 0
    return ((ord(deck[0]) >> 3) + (ord(deck[-1]) >> 3)) % JOKER_SEED_MODULUS


def _driver_token(driver: Suit, magnitude: int) -> KeyToken:
    return KeyToken(suit=driver, value=magnitude, raw=f"{driver.glyph}{magnitude}", exact=True)


def _apply_joker(deck: Deck, position: int, mirror_queens: bool) -> StepRecord:
    if not deck:
        return StepRecord(deck=(), description="JOKER: empty deck", affected_indexes=())

    mirrored = transforms.mirror(deck)
    magnitude = joker_magnitude(mirrored)
    driver = joker_driver(position)

    inner = apply_step(
        mirrored, _driver_token(driver, magnitude), position, mirror_queens=mirror_queens
    )
    seed = joker_seed(inner.deck)
    result, audit = transforms.xor_with_n(inner.deck, seed)

    return StepRecord(
        deck=result,
        description=(
            f"JOKER: mirrored → applied {driver.value} with N={magnitude} then XOR seed {seed}"
        ),
        affected_indexes=tuple(range(len(deck))),
        xor_info=f"{audit}\nJoker XOR seed applied: {seed}",
    )


def _invert_joker(deck: Deck, position: int, mirror_queens: bool) -> StepRecord:
    if not deck:
        return StepRecord(deck=(), description="undo JOKER: empty deck", affected_indexes=())

    magnitude = joker_magnitude(deck)
    seed = joker_seed(deck)
    driver = joker_driver(position)

    unxored, audit = transforms.xor_with_n(deck, seed)
    inner = invert_step(
        unxored, _driver_token(driver, magnitude), position, mirror_queens=mirror_queens
    )

    return StepRecord(
        deck=transforms.mirror(inner.deck),
        description=(
            f"undo JOKER: removed XOR seed {seed} → inverted {driver.value} "
            f"with N={magnitude} then un-mirrored"
        ),
        affected_indexes=tuple(range(len(deck))),
        xor_info=f"{audit}\nJoker XOR seed removed: {seed}",
    )


# =============================================================================
# PUBLIC API
# =============================================================================


def apply_step(
    deck: Sequence[str],
    token: KeyToken,
    position: int,
    *,
    mirror_queens: bool | None = None,
) -> StepRecord:
    """
    Apply one token to a deck.

    Args:
        deck: Deck before the step
        token: Key token to apply
        position: 1-based index of the token in the full key (used by JOKER)
        mirror_queens: Queen mirror policy; defaults to the configured policy

    Returns:
        StepRecord holding the new deck. Unknown suits give an unchanged
        deck labelled NOOP.
    """
    if mirror_queens is None:
        mirror_queens = settings.mirror_queens

    deck = tuple(deck)
    suit = _suit_of(token)

    if suit is Suit.JOKER:
        record = _apply_joker(deck, position, mirror_queens)
    elif suit in OPERATIONS:
        record = _run_suit_step(deck, token, suit, True, mirror_queens)
    else:
        record = StepRecord(deck=deck, description="NOOP")

    logger.debug("Step %d %r: %s", position, token.raw, record.description)
    return record


def invert_step(
    record: StepRecord | Sequence[str],
    token: KeyToken,
    position: int,
    *,
    mirror_queens: bool | None = None,
) -> StepRecord:
    """
    Undo one token.

    Args:
        record: StepRecord (or bare deck) produced by the forward step
        token: The same token the forward step used
        position: The token's original 1-based index in the key
        mirror_queens: Queen mirror policy; must match the forward run

    Returns:
        StepRecord holding the deck as it was before the forward step.
        Unknown suits give an unchanged deck labelled noop.
    """
    if mirror_queens is None:
        mirror_queens = settings.mirror_queens

    deck = record.deck if isinstance(record, StepRecord) else tuple(record)
    suit = _suit_of(token)

    if suit is Suit.JOKER:
        result = _invert_joker(deck, position, mirror_queens)
    elif suit in OPERATIONS:
        result = _run_suit_step(deck, token, suit, False, mirror_queens)
    else:
        result = StepRecord(deck=deck, description="noop")

    logger.debug("Undo %d %r: %s", position, token.raw, result.description)
    return result
