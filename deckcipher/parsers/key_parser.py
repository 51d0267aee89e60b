"""
Parser for cipher key text.

Key format:
    Whitespace-separated tokens, each <suit><digits> or a joker.

Example:
    S2 ♥5 C12 D13 JOKER

Suit characters: ♠/S spade, ♥/H heart, ♣/C club, ♦/D diamond (letters are
case-insensitive). A token beginning with "JOKER" (any case) or equal to the
joker glyph is a joker; its value is its 1-based position in the key.
"""

import logging
import re

from deckcipher.config import SuitFallback, settings
from deckcipher.models.failure import KeyParseError
from deckcipher.models.token import KeyToken, Suit

logger = logging.getLogger(__name__)

JOKER_WORD = "JOKER"
JOKER_GLYPH = "🃏"

SUIT_CHARACTERS: dict[str, Suit] = {
    "♠": Suit.SPADE,
    "S": Suit.SPADE,
    "♣": Suit.CLUB,
    "C": Suit.CLUB,
    "♥": Suit.HEART,
    "H": Suit.HEART,
    "♦": Suit.DIAMOND,
    "D": Suit.DIAMOND,
}

# Leading decimal digits of the token body; anything after them is ignored
VALUE_PATTERN = re.compile(r"^[0-9]+")


def is_joker_text(text: str) -> bool:
    """True if the token text names a joker."""
    return text.upper().startswith(JOKER_WORD) or text == JOKER_GLYPH


def parse_value(body: str) -> int:
    """
    Parse a token's value from the text after its suit character.

    Returns 0 when the body has no leading digits.
    """
    match = VALUE_PATTERN.match(body)
    if match is None:
        return 0
    return int(match.group())


def parse_token(text: str, position: int, fallback: SuitFallback = SuitFallback.SPADE) -> KeyToken:
    """
    Parse one key token.

    Args:
        text: Token text (no surrounding whitespace)
        position: 1-based position of the token in the key
        fallback: Policy for an unrecognized suit character

    Returns:
        KeyToken for the text

    Raises:
        KeyParseError: If fallback is STRICT and the suit is unrecognized
    """
    if is_joker_text(text):
        return KeyToken(suit=Suit.JOKER, value=position, raw=text)

    suit_char = text[0]
    suit = SUIT_CHARACTERS.get(suit_char.upper()) or SUIT_CHARACTERS.get(suit_char)

    if suit is None:
        if fallback is SuitFallback.STRICT:
            raise KeyParseError(text, position)
        logger.debug("Unrecognized suit in token %r at %d; treating as SPADE", text, position)
        suit = Suit.SPADE

    return KeyToken(suit=suit, value=parse_value(text[1:]), raw=text)


def parse_key(raw: str, fallback: SuitFallback | None = None) -> list[KeyToken]:
    """
    Parse key text into an ordered list of tokens.

    Args:
        raw: Key text, e.g. "S2 H5 JOKER"
        fallback: Suit fallback policy; defaults to the configured policy

    Returns:
        List of KeyToken in key order. Empty list if input is empty/whitespace.

    Raises:
        KeyParseError: Only under the STRICT fallback policy
    """
    if fallback is None:
        fallback = settings.suit_fallback

    return [
        parse_token(text, position, fallback)
        for position, text in enumerate(raw.split(), start=1)
    ]
