"""
deckcipher services.

Transform primitives, the step engine and the trace builder.
"""

from deckcipher.services.key_formatter import card_label, face_label, format_key, format_token
from deckcipher.services.step_engine import (
    OPERATIONS,
    apply_step,
    invert_step,
    joker_driver,
    joker_magnitude,
    joker_seed,
    normalize_value,
    with_mirror,
)
from deckcipher.services.trace_builder import (
    build_trace,
    decrypt,
    encrypt,
    final_output,
)

__all__ = [
    "OPERATIONS",
    "apply_step",
    "build_trace",
    "card_label",
    "decrypt",
    "encrypt",
    "face_label",
    "final_output",
    "format_key",
    "format_token",
    "invert_step",
    "joker_driver",
    "joker_magnitude",
    "joker_seed",
    "normalize_value",
    "with_mirror",
]
