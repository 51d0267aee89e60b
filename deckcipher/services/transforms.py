"""
Deck Transform Library.

Pure, length-preserving transforms. Every function takes a deck (any
sequence of single-character symbols) and returns a NEW tuple; inputs are
never modified.

INVARIANT: len(transform(deck, n)) == len(deck) for every transform and n.

Inverse pairs:
    cut          <-> rotate_right
    rotate_left  <-> rotate_right
    faro         <-> unfaro
    reverse_top      self-inverse
    xor_with_n       self-inverse
    mirror           self-inverse
"""

from collections.abc import Sequence

from deckcipher.models.step import Deck


def cut(deck: Sequence[str], n: int) -> Deck:
    """Move the first n symbols to the bottom of the deck."""
    return tuple(deck[n:]) + tuple(deck[:n])


def reverse_top(deck: Sequence[str], n: int) -> Deck:
    """Reverse the order of the first n symbols; the rest is untouched."""
    return tuple(reversed(deck[:n])) + tuple(deck[n:])


def mirror(deck: Sequence[str]) -> Deck:
    """Reverse the whole deck."""
    return tuple(reversed(deck))


def rotate_left(deck: Sequence[str], n: int) -> Deck:
    """Cyclic shift toward the top by n mod len(deck)."""
    if not deck:
        return ()
    n %= len(deck)
    return tuple(deck[n:]) + tuple(deck[:n])


def rotate_right(deck: Sequence[str], n: int) -> Deck:
    """Cyclic shift toward the bottom by n mod len(deck)."""
    if not deck:
        return ()
    n %= len(deck)
    split = len(deck) - n
    return tuple(deck[split:]) + tuple(deck[:split])


# =============================================================================
# FARO (offset variant)
# =============================================================================
#
# The deck is split at h = L // 2 into left [0, h) and right [h, L).
# The first n left symbols stay on top, then right and the remaining left
# symbols alternate (right first). When one side runs out the other side's
# tail follows in order.
#
#   faro("ABCDEFGH", 1) -> A E B F C G D H
#   faro("ABCDEFGH", 0) -> E A F B G C H D
#


def faro_order(length: int, n: int) -> list[int]:
    """
    Source positions of a faro, in output order.

    faro(deck, n)[k] == deck[faro_order(len(deck), n)[k]]. The result is a
    permutation of range(length), which is what makes unfaro exact.
    """
    half = length // 2
    offset = max(0, min(n, half))

    order = list(range(offset))
    left, right = offset, half
    while left < half or right < length:
        if right < length:
            order.append(right)
            right += 1
        if left < half:
            order.append(left)
            left += 1
    return order


def faro(deck: Sequence[str], n: int) -> Deck:
    """Split-and-interleave shuffle with the first n cards held on top."""
    if len(deck) < 2:
        return tuple(deck)
    return tuple(deck[src] for src in faro_order(len(deck), n))


def unfaro(deck: Sequence[str], n: int) -> Deck:
    """Exact inverse of faro(deck, n)."""
    if len(deck) < 2:
        return tuple(deck)
    restored: list[str] = [""] * len(deck)
    for position, src in enumerate(faro_order(len(deck), n)):
        restored[src] = deck[position]
    return tuple(restored)


# =============================================================================
# XOR
# =============================================================================

# Only the low 16 bits of n take part. Every code point keeps its bits above
# bit 15, so results stay within U+10FFFF and XOR stays self-inverse.
XOR_MASK = 0xFFFF


def xor_line(symbol: str, n: int) -> str:
    """Audit line for XOR-ing one symbol with n."""
    n &= XOR_MASK
    code = ord(symbol)
    result = code ^ n
    return f"{symbol} ({code}) XOR {n} = {result} -> '{chr(result)}'"


def xor_with_n(deck: Sequence[str], n: int) -> tuple[Deck, str]:
    """
    XOR every symbol's code point with n.

    Args:
        deck: Input deck
        n: Value to XOR with (>= 0); reduced to its low 16 bits

    Returns:
        (new deck, audit text) where the audit has one line per position
    """
    n &= XOR_MASK
    xored = tuple(chr(ord(symbol) ^ n) for symbol in deck)
    details = "\n".join(xor_line(symbol, n) for symbol in deck)
    return xored, details


def pair_xor_checksum(deck: Sequence[str]) -> int:
    """
    Sum of code_i XOR code_j over all unordered position pairs.

    Unchanged by any reordering of the deck and by XOR-ing every symbol
    with the same value. Computed bit by bit: a bit contributes once for
    every pair where exactly one side has it set.
    """
    codes = [ord(symbol) for symbol in deck]
    if not codes:
        return 0

    length = len(codes)
    total = 0
    for bit in range(max(codes).bit_length()):
        ones = sum((code >> bit) & 1 for code in codes)
        total += ones * (length - ones) << bit
    return total
