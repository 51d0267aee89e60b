"""
Key Formatter.

THIS MODULE HANDLES OUTPUT RENDERING ONLY.

Turns parsed tokens back into canonical key text and card labels for key
displays. It does not validate; tokens are trusted as parsed.
"""

from collections.abc import Sequence

from deckcipher.config import ACE, JACK, KING, QUEEN
from deckcipher.models.token import KeyToken, Suit

FACE_LABELS: dict[int, str] = {
    ACE: "A",
    JACK: "J",
    QUEEN: "Q",
    KING: "K",
}


def face_label(value: int) -> str:
    """Card face for a value: A, 2-10, J, Q, K (other values as digits)."""
    return FACE_LABELS.get(value, str(value))


def card_label(token: KeyToken) -> str:
    """
    Card label for a token, e.g. "A♠", "10♥", "Q♣", "JOKER".
    """
    if token.suit == Suit.JOKER:
        return "JOKER"
    return f"{face_label(token.value)}{Suit(token.suit).glyph}"


def format_token(token: KeyToken) -> str:
    """Canonical key text for one token, e.g. "S2" or "JOKER"."""
    if token.suit == Suit.JOKER:
        return "JOKER"
    return f"{Suit(token.suit).value[0]}{token.value}"


def format_key(tokens: Sequence[KeyToken]) -> str:
    """
    Format tokens as key text that parses back to the same suits and values.

    Jokers take their value from their position, so a formatted joker keeps
    its value only if it stays at the same position.
    """
    return " ".join(format_token(token) for token in tokens)
