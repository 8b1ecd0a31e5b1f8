from royaledeck.models.card import Archetype, Card, Rarity
from royaledeck.models.deck import (
    RANDOM,
    DeckConstraints,
    GeneratedDeck,
    RequirementKind,
    RequirementSpec,
    ResolvedConstraints,
    SelectionCount,
)
from royaledeck.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    BudgetExceededError,
    ElixirTargetUnsatisfiableError,
    FailureDetail,
    FailureKind,
    InsufficientFillError,
    InsufficientPoolError,
    KnownError,
    LookupFailedError,
    MissingMasteryDataError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from royaledeck.models.mastery import MasteryIndex, MasteryRecord

__all__ = [
    "ApiResponse",
    "Archetype",
    "BudgetExceededError",
    "Card",
    "DeckConstraints",
    "ElixirTargetUnsatisfiableError",
    "FailureDetail",
    "FailureKind",
    "GeneratedDeck",
    "InsufficientFillError",
    "InsufficientPoolError",
    "KnownError",
    "LookupFailedError",
    "MasteryIndex",
    "MasteryRecord",
    "MissingMasteryDataError",
    "OutcomeType",
    "RANDOM",
    "Rarity",
    "RequirementKind",
    "RequirementSpec",
    "ResolvedConstraints",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SelectionCount",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
