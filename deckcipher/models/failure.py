"""
Failure Envelope: unified outcome classification.

Every result the command line reports in machine-readable form is wrapped in
a CipherResponse and classified into one outcome type:

- Success: Trace built, output available
- KnownFailure: The system knows why it failed (e.g. strict key rejected)
- UnknownFailure: The system does not know why it failed

AUTHORITY BOUNDARY:
All reported responses MUST pass through `finalize_response()`.
This is the single exit point that guarantees failure classification.

The engine itself never raises for malformed input under the default
policies. These error types exist for the opt-in strict key policy and for
invariant guards that should never fire.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_KEY = "invalid_key"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class CipherResponse(BaseModel, Generic[T]):
    """Response envelope for every machine-readable result."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> CipherResponse[Any]:
        """Convert to a finalized CipherResponse."""
        return finalize_response(
            CipherResponse(
                outcome=OutcomeType.KNOWN_FAILURE,
                failure=FailureDetail(
                    kind=self.kind,
                    message=self.message,
                    detail=self.detail,
                    suggestion=self.suggestion,
                ),
            )
        )


class KeyParseError(KnownError):
    """
    Raised by the strict suit policy when a key token has no known suit.

    The default policy never raises; it treats the token as a SPADE.
    """

    def __init__(self, token: str, position: int):
        self.token = token
        self.position = position
        super().__init__(
            kind=FailureKind.INVALID_KEY,
            message=f"Key token {position} ('{token}') does not start with a known suit.",
            detail=f"token={token!r} position={position}",
            suggestion="Start each token with S, H, C, D (or a suit glyph), or use JOKER.",
        )


class InvariantViolationError(KnownError):
    """
    Raised when a step changes the deck length.

    Every primitive preserves length, so this means the engine is broken.
    """

    def __init__(self, description: str, expected_length: int, actual_length: int):
        self.expected_length = expected_length
        self.actual_length = actual_length
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message=(
                f"Step '{description}' changed deck length "
                f"from {expected_length} to {actual_length}."
            ),
            detail=description,
            suggestion="Please report the issue with the key and input text.",
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================


# Standard messages are fixed; only the detail varies

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the key or input text."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


# Track finalized responses by id()
_finalized_responses: set[int] = set()


def finalize_response(response: CipherResponse[Any]) -> CipherResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Args:
        response: The CipherResponse to finalize

    Returns:
        The same response, marked as having passed through the boundary

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: CipherResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> CipherResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.

    Args:
        exception: The exception that caused the failure
        include_type: Whether to include exception type in detail

    Returns:
        A finalized unknown failure response
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: CipherResponse[Any] = CipherResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_known_failure(
    kind: FailureKind,
    reason: str,
) -> CipherResponse[Any]:
    """
    Create a known failure response.

    The message is standardized. Only the reason (technical detail) varies.
    """
    response: CipherResponse[Any] = CipherResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=kind,
            message=STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
            detail=reason,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_success(data: T) -> CipherResponse[T]:
    """Create a finalized success response."""
    response = CipherResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
