"""
Renderer-facing trace report.

Deck visualizers, key displays and step players consume traces through these
models. Field names serialize in the renderer's camelCase vocabulary
(`desc`, `affectedIndexes`, `xorInfo`).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from deckcipher.models.step import StepRecord, render_deck
from deckcipher.models.token import KeyToken


class CipherMode(str, Enum):
    """Direction a trace was built in."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class StepSnapshot(BaseModel):
    """One trace step as seen by a renderer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    deck: list[str]
    desc: str
    affected_indexes: list[int] | None = Field(default=None, alias="affectedIndexes")
    xor_info: str | None = Field(default=None, alias="xorInfo")

    @classmethod
    def from_record(cls, record: StepRecord) -> "StepSnapshot":
        return cls(
            deck=list(record.deck),
            desc=record.description,
            affected_indexes=(
                list(record.affected_indexes) if record.affected_indexes is not None else None
            ),
            xor_info=record.xor_info,
        )


class TokenView(BaseModel):
    """A parsed key token with its card label."""

    suit: str
    value: int
    raw: str
    label: str


class TraceReport(BaseModel):
    """Complete result of an encrypt or decrypt run."""

    model_config = ConfigDict(populate_by_name=True)

    mode: CipherMode
    key: str
    tokens: list[TokenView] = Field(default_factory=list)
    input: str
    output: str
    steps: list[StepSnapshot] = Field(default_factory=list)

    @property
    def step_count(self) -> int:
        """Number of key steps (excludes the initial record)."""
        return max(0, len(self.steps) - 1)


def build_report(
    mode: CipherMode,
    key: str,
    tokens: list[KeyToken],
    trace: list[StepRecord],
) -> TraceReport:
    """
    Assemble a TraceReport from a built trace.

    Args:
        mode: Direction the trace was built in
        key: Key text as supplied
        tokens: Parsed tokens
        trace: Trace from build_trace (index 0 is the initial deck)

    Returns:
        TraceReport with input taken from the first record and output from the last
    """
    # Local import: key_formatter depends on models
    from deckcipher.services.key_formatter import card_label

    return TraceReport(
        mode=mode,
        key=key,
        tokens=[
            TokenView(suit=t.suit.value, value=t.value, raw=t.raw, label=card_label(t))
            for t in tokens
        ],
        input=render_deck(trace[0].deck) if trace else "",
        output=render_deck(trace[-1].deck) if trace else "",
        steps=[StepSnapshot.from_record(r) for r in trace],
    )
