from dataclasses import dataclass
from enum import Enum


class Suit(str, Enum):
    """Operation family selected by a key token."""

    SPADE = "SPADE"
    HEART = "HEART"
    CLUB = "CLUB"
    DIAMOND = "DIAMOND"
    JOKER = "JOKER"

    @property
    def glyph(self) -> str:
        """Card glyph used in labels and formatted keys."""
        return SUIT_GLYPHS[self]


SUIT_GLYPHS: dict[Suit, str] = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.CLUB: "♣",
    Suit.DIAMOND: "♦",
    Suit.JOKER: "🃏",
}


@dataclass(frozen=True, slots=True)
class KeyToken:
    """
    One operation in a key.

    Attributes:
        suit: Which primitive the token invokes
        value: Face value (>= 0), normalized against deck length at apply time
        raw: Token text exactly as it appeared in the key
        exact: Value is already an effective magnitude; skip normalization
            and the queen mirror (only synthesized by the joker step)
    """

    suit: Suit
    value: int = 0
    raw: str = ""
    exact: bool = False
