"""
Failure Envelope: Discriminated Generation Results.

Every deck generation and player lookup ends in exactly one of:
- Success: a deck (or player data) was produced
- KnownFailure: the system knows why it failed (bad configuration,
  infeasible constraints, upstream lookup failure)
- UnknownFailure: the system does not know why it failed

INVARIANTS:
- No partial deck is ever returned alongside a failure.
- No raw 500 error may reach the client.

AUTHORITY BOUNDARY:
All user-visible responses pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Deck constraint failures
    MISSING_MASTERY_DATA = "missing_mastery_data"
    INSUFFICIENT_POOL = "insufficient_pool"
    INSUFFICIENT_FILL = "insufficient_fill"
    BUDGET_EXCEEDED = "budget_exceeded"
    ELIXIR_TARGET_UNSATISFIABLE = "elixir_target_unsatisfiable"

    # Service failures
    LOOKUP_FAILED = "lookup_failed"

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


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope.

    A response is either a success carrying data or a failure carrying
    details, never both.
    """

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

    @property
    def is_success(self) -> bool:
        return self.outcome == OutcomeType.SUCCESS

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: not enough cards left after exclusions.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
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
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# DECK GENERATION ERRORS
# =============================================================================


class MissingMasteryDataError(KnownError):
    """A mastery bound was requested before any player lookup succeeded."""

    def __init__(self, mastery_bound: int):
        self.mastery_bound = mastery_bound
        super().__init__(
            kind=FailureKind.MISSING_MASTERY_DATA,
            message="Look up a player before filtering by mastery level.",
            detail=f"mastery_bound={mastery_bound}, mastery data not loaded",
            suggestion="Fetch player data with a player tag first.",
            status_code=422,
        )


class InsufficientPoolError(KnownError):
    """Fewer cards than a full deck remain after exclusion filters."""

    def __init__(self, pool_size: int, deck_size: int):
        self.pool_size = pool_size
        self.deck_size = deck_size
        super().__init__(
            kind=FailureKind.INSUFFICIENT_POOL,
            message=(
                f"Not enough cards to build a deck: only {pool_size} remain "
                f"after filtering, {deck_size} needed."
            ),
            detail=f"pool_size={pool_size}",
            suggestion="Exclude fewer rarities or archetypes, or raise the mastery limit.",
            status_code=422,
        )


class InsufficientFillError(KnownError):
    """Not enough cards are left to fill the remaining deck slots."""

    def __init__(self, available: int, needed: int):
        self.available = available
        self.needed = needed
        super().__init__(
            kind=FailureKind.INSUFFICIENT_FILL,
            message="Not enough cards to fill the deck.",
            detail=f"available={available}, needed={needed}",
            suggestion="Relax the rarity or archetype selection.",
            status_code=422,
        )


class BudgetExceededError(KnownError):
    """Explicit selection counts add up to more than one deck."""

    def __init__(self, requested: int, deck_size: int):
        self.requested = requested
        self.deck_size = deck_size
        super().__init__(
            kind=FailureKind.BUDGET_EXCEEDED,
            message=f"Total cards cannot exceed {deck_size}.",
            detail=f"requested={requested}, deck_size={deck_size}",
            suggestion="Lower one of the rarity or archetype counts.",
            status_code=422,
        )


class ElixirTargetUnsatisfiableError(KnownError):
    """Rejection sampling never hit the elixir target within tolerance."""

    def __init__(self, target: float, attempts: int, tolerance: float):
        self.target = target
        self.attempts = attempts
        self.tolerance = tolerance
        super().__init__(
            kind=FailureKind.ELIXIR_TARGET_UNSATISFIABLE,
            message=f"Couldn't match target elixir ({target}) after {attempts} tries.",
            detail=f"target={target}, tolerance={tolerance}, attempts={attempts}",
            suggestion="Pick a target closer to the average elixir of the allowed cards.",
            status_code=422,
        )


class LookupFailedError(KnownError):
    """The player lookup failed or the upstream API returned an error."""

    def __init__(self, tag: str, reason: str, status_code: int = 502):
        self.tag = tag
        self.reason = reason
        super().__init__(
            kind=FailureKind.LOOKUP_FAILED,
            message=f"Could not fetch player {tag}.",
            detail=reason,
            suggestion="Check the player tag and try again.",
            status_code=status_code,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

# Unknown failures always use this fixed text

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


# ids of responses that passed finalize_response()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Every response that passes through this function is guaranteed to:
    1. Have a valid outcome classification
    2. Have failure details if and only if it is not a success

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
        if response.data is None:
            raise ValueError("Success response must carry data")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")
        if response.data is not None:
            raise ValueError(f"{response.outcome.value} response must not carry data")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """Create a finalized known failure response from a KnownError."""
    return finalize_response(error.to_response())


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
