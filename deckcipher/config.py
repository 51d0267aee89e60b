from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class SuitFallback(str, Enum):
    """What the key parser does with an unrecognized suit character."""

    # Treat the token as a SPADE (cut) operation
    SPADE = "spade"

    # Reject the key with KeyParseError
    STRICT = "strict"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKCIPHER_")

    log_level: str = "INFO"

    # Queens (value 12) run their primitive on the mirrored deck
    mirror_queens: bool = True

    suit_fallback: SuitFallback = SuitFallback.SPADE


settings = Settings()


# =============================================================================
# JOKER DERIVATION CONSTANTS
# =============================================================================

# Driver suits cycled by the joker's 1-based position in the key
JOKER_DRIVER_ORDER = ("SPADE", "HEART", "CLUB", "DIAMOND")

# Joker XOR seed is reduced modulo this value; must stay below 8 so the
# seed never touches bits above the low three
JOKER_SEED_MODULUS = 7

# Face values with named meaning
ACE = 1
JACK = 11
QUEEN = 12
KING = 13
