import math

from roomi.models.profile import Profile

# Weights for the four compatibility dimensions (sum to 1.0)
BUDGET_WEIGHT = 0.35
LOCATION_WEIGHT = 0.25
LIFESTYLE_WEIGHT = 0.30
LEASE_WEIGHT = 0.10


def budget_similarity(budget_a: float, budget_b: float) -> float:
    """1.0 for equal budgets, falling linearly to 0.0 as the gap reaches the larger budget."""
    gap = abs(budget_a - budget_b) / max(budget_a, budget_b, 1)
    return 1.0 - min(gap, 1.0)


def exact_label_match(label_a: str | None, label_b: str | None) -> float:
    if not label_a or not label_b:
        return 0.0
    return 1.0 if label_a == label_b else 0.0


def lifestyle_agreement(requester_prefs: dict[str, str], candidate_prefs: dict[str, str]) -> float:
    """Share of the requester's lifestyle keys on which the candidate agrees.

    Only the requester's keys are considered, so the result is not symmetric.
    """
    if not requester_prefs:
        return 0.0
    agreed = sum(1 for key, value in requester_prefs.items() if candidate_prefs.get(key) == value)
    return agreed / len(requester_prefs)


class CompatibilityScorer:
    """
    Scores how well a candidate fits a requester, as an integer 0-100.

    Pure and deterministic. score(a, b) may differ from score(b, a) because
    lifestyle agreement is measured over the requester's preferences only.
    """

    @staticmethod
    def score_breakdown(requester: Profile, candidate: Profile) -> tuple[int, dict[str, float]]:
        budget = budget_similarity(requester.budget, candidate.budget)
        location = exact_label_match(requester.location, candidate.location)
        lifestyle = lifestyle_agreement(requester.lifestyle_preferences, candidate.lifestyle_preferences)
        lease = exact_label_match(requester.lease_duration, candidate.lease_duration)

        weighted = (
            budget * BUDGET_WEIGHT + location * LOCATION_WEIGHT + lifestyle * LIFESTYLE_WEIGHT + lease * LEASE_WEIGHT
        )
        # Round half up; clamp guards against float drift at the bounds
        total = min(100, max(0, math.floor(weighted * 100 + 0.5)))

        breakdown = {
            "budget": budget,
            "location": location,
            "lifestyle": lifestyle,
            "lease": lease,
            "weighted": weighted,
        }
        return total, breakdown

    @classmethod
    def score(cls, requester: Profile, candidate: Profile) -> int:
        total, _ = cls.score_breakdown(requester, candidate)
        return total
