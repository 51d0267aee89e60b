import logging

import pytest

from deckcipher.config import SuitFallback, settings
from deckcipher.models.failure import FailureKind, KeyParseError
from deckcipher.models.token import KeyToken, Suit
from deckcipher.parsers.key_parser import is_joker_text, parse_key, parse_token, parse_value


class TestParseKey:
    def test_parse_letter_suits(self) -> None:
        result = parse_key("S2 H5 C3 D10")

        assert [t.suit for t in result] == [Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND]
        assert [t.value for t in result] == [2, 5, 3, 10]
        assert [t.raw for t in result] == ["S2", "H5", "C3", "D10"]

    def test_parse_glyph_suits(self) -> None:
        result = parse_key("♠1 ♥11 ♣12 ♦13")

        assert [t.suit for t in result] == [Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND]
        assert [t.value for t in result] == [1, 11, 12, 13]

    def test_lowercase_suit_letters(self) -> None:
        result = parse_key("s4 h4 c4 d4")

        assert [t.suit for t in result] == [Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND]

    def test_parse_empty_input(self) -> None:
        assert parse_key("") == []
        assert parse_key("   ") == []
        assert parse_key("\n\t\n") == []

    def test_splits_on_any_whitespace(self) -> None:
        result = parse_key("  S2\tH3\n\nC4  ")

        assert [t.raw for t in result] == ["S2", "H3", "C4"]

    def test_tokens_are_immutable(self) -> None:
        token = parse_key("S2")[0]
        with pytest.raises(AttributeError):
            token.value = 3  # type: ignore[misc]


class TestJokerTokens:
    def test_joker_value_is_position(self) -> None:
        result = parse_key("S2 JOKER H3 joker")

        assert result[1] == KeyToken(suit=Suit.JOKER, value=2, raw="JOKER")
        assert result[3] == KeyToken(suit=Suit.JOKER, value=4, raw="joker")

    def test_joker_prefix_is_enough(self) -> None:
        result = parse_key("Jokers JOKER7")

        assert [t.suit for t in result] == [Suit.JOKER, Suit.JOKER]
        assert [t.value for t in result] == [1, 2]

    def test_joker_glyph(self) -> None:
        result = parse_key("🃏 S1")

        assert result[0].suit == Suit.JOKER
        assert result[0].value == 1

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("JOKER", True), ("joker", True), ("JoKeR2", True), ("🃏", True), ("J11", False)],
    )
    def test_is_joker_text(self, text: str, expected: bool) -> None:
        assert is_joker_text(text) is expected


class TestValueParsing:
    @pytest.mark.parametrize(
        ("body", "expected"),
        [("2", 2), ("13", 13), ("007", 7), ("", 0), ("x", 0), ("12abc", 12), ("-3", 0)],
    )
    def test_parse_value(self, body: str, expected: int) -> None:
        assert parse_value(body) == expected

    def test_missing_value_defaults_to_zero(self) -> None:
        assert parse_key("S")[0].value == 0

    def test_unparsable_value_defaults_to_zero(self) -> None:
        assert parse_key("Hxyz")[0] == KeyToken(suit=Suit.HEART, value=0, raw="Hxyz")

    def test_no_range_validation(self) -> None:
        """Large values are kept; clamping happens at apply time."""
        assert parse_key("C999")[0].value == 999


class TestSuitFallback:
    def test_unknown_suit_defaults_to_spade(self) -> None:
        result = parse_key("X5 Q3")

        assert [t.suit for t in result] == [Suit.SPADE, Suit.SPADE]
        assert [t.value for t in result] == [5, 3]

    def test_fallback_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="deckcipher.parsers.key_parser"):
            parse_key("Z4")

        assert "treating as SPADE" in caplog.text

    def test_strict_policy_raises(self) -> None:
        with pytest.raises(KeyParseError) as exc_info:
            parse_key("S2 X5", fallback=SuitFallback.STRICT)

        assert exc_info.value.kind == FailureKind.INVALID_KEY
        assert exc_info.value.token == "X5"
        assert exc_info.value.position == 2

    def test_strict_policy_accepts_valid_key(self) -> None:
        result = parse_key("S2 ♦4 JOKER", fallback=SuitFallback.STRICT)

        assert len(result) == 3

    def test_configured_policy_used_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "suit_fallback", SuitFallback.STRICT)

        with pytest.raises(KeyParseError):
            parse_key("X1")

    def test_parse_token_direct(self) -> None:
        assert parse_token("D7", 1) == KeyToken(suit=Suit.DIAMOND, value=7, raw="D7")
