from roomi.services.matching.service import MatchingService, matching_service
from roomi.services.profile_store import ProfileStore, profile_store


def get_matching_service() -> MatchingService:
    return matching_service


def get_profile_store() -> ProfileStore:
    return profile_store
