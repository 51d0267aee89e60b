from deckcipher.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    CipherResponse,
    FailureDetail,
    FailureKind,
    InvariantViolationError,
    KeyParseError,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from deckcipher.models.report import (
    CipherMode,
    StepSnapshot,
    TokenView,
    TraceReport,
    build_report,
)
from deckcipher.models.step import Deck, StepRecord, render_deck, to_deck
from deckcipher.models.token import SUIT_GLYPHS, KeyToken, Suit

__all__ = [
    "CipherMode",
    "CipherResponse",
    "Deck",
    "FailureDetail",
    "FailureKind",
    "InvariantViolationError",
    "KeyParseError",
    "KeyToken",
    "KnownError",
    "OutcomeType",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SUIT_GLYPHS",
    "StepRecord",
    "StepSnapshot",
    "Suit",
    "TokenView",
    "TraceReport",
    "build_report",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    "render_deck",
    "to_deck",
]
