"""
Deck values and step snapshots.

A deck is a tuple of single-character symbols. Tuples are immutable, so a
StepRecord's deck stays a stable snapshot no matter what later steps do.
"""

from collections.abc import Iterable
from dataclasses import dataclass

Deck = tuple[str, ...]


def to_deck(symbols: Iterable[str]) -> Deck:
    """Build a deck from text or any iterable of symbols."""
    return tuple(symbols)


def render_deck(deck: Iterable[str]) -> str:
    """Concatenate a deck's symbols back into text."""
    return "".join(deck)


@dataclass(frozen=True, slots=True)
class StepRecord:
    """
    Snapshot of the deck after one step of a trace.

    Attributes:
        deck: Deck state after this step
        description: Human-readable label of the operation applied
        affected_indexes: Sorted positions touched by the step (for highlighting)
        xor_info: Per-symbol XOR audit text, one line per position
    """

    deck: Deck
    description: str
    affected_indexes: tuple[int, ...] | None = None
    xor_info: str | None = None

    @property
    def text(self) -> str:
        """Deck rendered as text."""
        return render_deck(self.deck)
