"""
Matching engine.

Compatibility scoring, candidate ranking and the like/pass/match state
machine. MatchingService is the facade the API layer talks to.
"""

from roomi.services.matching.coordinator import MatchCoordinator
from roomi.services.matching.ranker import CandidateRanker, normalize_limit
from roomi.services.matching.scorer import CompatibilityScorer
from roomi.services.matching.service import MatchingService

__all__ = [
    "CompatibilityScorer",
    "CandidateRanker",
    "MatchCoordinator",
    "MatchingService",
    "normalize_limit",
]
