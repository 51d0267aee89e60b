"""
Tests for the JOKER meta-operation.

INVARIANT: invert_step(apply_step(d, joker, p), joker, p).deck == d, despite
the nested driver step and the seed recomputation.
"""

import random

import pytest

from deckcipher.models.token import KeyToken, Suit
from deckcipher.services.step_engine import (
    apply_step,
    invert_step,
    joker_driver,
    joker_magnitude,
    joker_seed,
)
from deckcipher.services.transforms import cut, faro, mirror, pair_xor_checksum, xor_with_n


def joker(position: int) -> KeyToken:
    return KeyToken(suit=Suit.JOKER, value=position, raw="JOKER")


class TestJokerDerivation:
    @pytest.mark.parametrize(
        ("position", "driver"),
        [
            (1, Suit.SPADE),
            (2, Suit.HEART),
            (3, Suit.CLUB),
            (4, Suit.DIAMOND),
            (5, Suit.SPADE),
            (10, Suit.HEART),
        ],
    )
    def test_driver_cycles_by_position(self, position: int, driver: Suit) -> None:
        assert joker_driver(position) == driver

    def test_magnitude_is_checksum_mod_length(self) -> None:
        assert joker_magnitude("ABCD") == pair_xor_checksum("ABCD") % 4
        assert joker_magnitude("") == 0

    def test_seed_uses_high_bits_of_ends(self) -> None:
        # D = 68 -> 8, A = 65 -> 8
        assert joker_seed("DCBA") == 2
        assert joker_seed("") == 0

    def test_seed_is_below_eight(self, printable_decks: list[str]) -> None:
        for deck in printable_decks:
            assert 0 <= joker_seed(deck) < 8


class TestJokerForward:
    def test_concrete_example(self) -> None:
        record = apply_step("ABCD", joker(1), 1)

        # mirrored DCBA, checksum 24 so N = 0, SPADE cut 0, seed 2
        assert record.deck == tuple("FA@C")
        assert record.description == "JOKER: mirrored → applied SPADE with N=0 then XOR seed 2"
        assert record.affected_indexes == (0, 1, 2, 3)
        assert record.xor_info is not None
        assert record.xor_info.splitlines()[0] == "D (68) XOR 2 = 70 -> 'F'"
        assert record.xor_info.endswith("\nJoker XOR seed applied: 2")

    def test_matches_composition_of_primitives(self) -> None:
        deck = tuple("BORDERLAND")
        position = 3

        mirrored = mirror(deck)
        n = pair_xor_checksum(mirrored) % len(deck)
        inner = faro(mirrored, n)
        expected, _ = xor_with_n(inner, joker_seed(inner))

        record = apply_step(deck, joker(position), position)

        assert joker_driver(position) == Suit.CLUB
        assert record.deck == expected
        assert f"applied CLUB with N={n}" in record.description

    def test_driver_value_is_not_renormalized(self) -> None:
        """N reaches the driver as-is: N = 12 is not mirrored, 13 is not the full deck."""
        rng = random.Random(7)
        seen: set[int] = set()
        for _ in range(5000):
            if {12, 13} <= seen:
                break
            deck = tuple(chr(rng.randint(65, 90)) for _ in range(20))
            n = joker_magnitude(deck)
            if n not in (12, 13) or n in seen:
                continue
            seen.add(n)

            record = apply_step(deck, joker(1), 1, mirror_queens=True)

            inner = cut(mirror(deck), n)
            expected, _ = xor_with_n(inner, joker_seed(inner))
            assert record.deck == expected

        assert seen == {12, 13}

    def test_empty_deck(self) -> None:
        record = apply_step("", joker(1), 1)

        assert record.deck == ()

    def test_single_symbol(self) -> None:
        record = apply_step("Q", joker(1), 1)
        back = invert_step(record, joker(1), 1)

        assert len(record.deck) == 1
        assert back.deck == ("Q",)


class TestJokerInverse:
    def test_concrete_example(self) -> None:
        record = invert_step("FA@C", joker(1), 1)

        assert record.deck == tuple("ABCD")
        assert record.description == (
            "undo JOKER: removed XOR seed 2 → inverted SPADE with N=0 then un-mirrored"
        )
        assert record.xor_info is not None
        assert record.xor_info.endswith("\nJoker XOR seed removed: 2")

    @pytest.mark.parametrize("position", range(1, 9))
    def test_symmetry_for_every_driver(self, position: int, printable_decks: list[str]) -> None:
        for deck in printable_decks:
            forward = apply_step(deck, joker(position), position)
            back = invert_step(forward, joker(position), position)

            assert len(forward.deck) == len(deck)
            assert back.deck == tuple(deck), (deck, position)

    def test_symmetry_on_random_decks(self, rng: random.Random) -> None:
        for _ in range(300):
            length = rng.randint(1, 60)
            deck = tuple(chr(rng.randint(32, 0x2FF)) for _ in range(length))
            position = rng.randint(1, 12)

            forward = apply_step(deck, joker(position), position)
            back = invert_step(forward, joker(position), position)

            assert back.deck == deck

    def test_symmetry_with_queen_mirror_disabled(self, printable_decks: list[str]) -> None:
        for deck in printable_decks:
            for position in range(1, 5):
                forward = apply_step(deck, joker(position), position, mirror_queens=False)
                back = invert_step(forward, joker(position), position, mirror_queens=False)
                assert back.deck == tuple(deck)

    def test_repeated_jokers_stack(self) -> None:
        deck = tuple("THE QUICK BROWN FOX")
        current = deck
        for position in range(1, 6):
            current = apply_step(current, joker(position), position).deck
        for position in range(5, 0, -1):
            current = invert_step(current, joker(position), position).deck

        assert current == deck
