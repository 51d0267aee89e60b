from deckcipher.parsers.key_parser import (
    SUIT_CHARACTERS,
    is_joker_text,
    parse_key,
    parse_token,
    parse_value,
)

__all__ = [
    "SUIT_CHARACTERS",
    "is_joker_text",
    "parse_key",
    "parse_token",
    "parse_value",
]
