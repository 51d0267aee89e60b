import random
import string

import pytest

from deckcipher.models import failure as failure_module


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def rng() -> random.Random:
    """Seeded generator so property checks are reproducible."""
    return random.Random(20251019)


@pytest.fixture
def printable_decks(rng: random.Random) -> list[str]:
    """Printable decks of assorted lengths, including the degenerate ones."""
    alphabet = string.ascii_letters + string.digits + string.punctuation + " "
    decks = ["", "A", "AB", "ABCD", "BORDERLAND"]
    for length in (3, 7, 12, 13, 26, 52, 61):
        decks.append("".join(rng.choice(alphabet) for _ in range(length)))
    return decks


@pytest.fixture
def random_keys(rng: random.Random) -> list[str]:
    """Mixed keys covering every suit, face values and jokers."""
    suits = ["S", "H", "C", "D", "♠", "♥", "♣", "♦"]
    keys = ["S2", "D1", "JOKER", "H12 C12 S12 D12", "S13 H13 C13 D13", "JOKER JOKER JOKER JOKER"]
    for _ in range(25):
        parts = []
        for _ in range(rng.randint(1, 8)):
            if rng.random() < 0.2:
                parts.append("JOKER")
            else:
                parts.append(f"{rng.choice(suits)}{rng.randint(0, 20)}")
        keys.append(" ".join(parts))
    return keys
