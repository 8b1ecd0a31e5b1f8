"""
Deck constraint filtering.

Resolves slider-style selection counts into a filtered card pool and an
ordered requirement list for the deck sampler.
"""

from royaledeck.filtering.constraints import (
    ResolverMetrics,
    build_requirements,
    resolve_constraints,
    validate_budget,
    validate_constraints,
)

__all__ = [
    "ResolverMetrics",
    "build_requirements",
    "resolve_constraints",
    "validate_budget",
    "validate_constraints",
]
