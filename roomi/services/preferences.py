"""
Keyword/pattern based preference extraction from free text (e.g. a voice
transcript captured during onboarding).

Every field is driven by an ordered list of patterns; the first pattern that
matches wins. The output feeds profile updates and is never read by the
scorer directly.
"""

import re

from pydantic import BaseModel, Field

_AMOUNT = r"(\$?\d+(?:,\d{3})*(?:\.\d{2})?)"
_PLAIN_AMOUNT = r"(\d+(?:,\d{3})*(?:\.\d{2})?)"

BUDGET_PATTERNS = [
    re.compile(_AMOUNT + r"\s*(?:per\s*month|monthly|a\s*month)", re.IGNORECASE),
    re.compile(r"budget\s*(?:of\s*)?" + _AMOUNT, re.IGNORECASE),
    re.compile(_PLAIN_AMOUNT + r"\s*(?:dollars?|bucks?)", re.IGNORECASE),
    re.compile(r"around\s*" + _AMOUNT, re.IGNORECASE),
]

LOCATION_PATTERNS = [
    re.compile(r"(?:near|close\s*to|around)\s*([A-Za-z\s]+(?:university|college|school))", re.IGNORECASE),
    re.compile(r"(?:at|in)\s*([A-Za-z\s]+(?:university|college|school))", re.IGNORECASE),
    re.compile(r"([A-Za-z\s]+(?:university|college|school))", re.IGNORECASE),
    re.compile(r"(?:near|in|at)\s*([A-Za-z\s]+(?:campus|downtown|city))", re.IGNORECASE),
]

AGE_PATTERNS = [
    re.compile(r"(\d{1,2})\s*(?:years?\s*old|yo)", re.IGNORECASE),
    re.compile(r"age\s*(\d{1,2})", re.IGNORECASE),
    re.compile(r"(\d{1,2})\s*(?:years?)", re.IGNORECASE),
]

UNIVERSITY_PATTERNS = [
    re.compile(r"(?:at|in|from)\s*([A-Za-z\s]+(?:university|college|school))", re.IGNORECASE),
    re.compile(r"([A-Za-z\s]+(?:university|college|school))", re.IGNORECASE),
    re.compile(r"(?:studying|student)\s*(?:at|in)\s*([A-Za-z\s]+)", re.IGNORECASE),
]

# Category -> ordered patterns. The matched text decides the value, see classify_lifestyle_match.
LIFESTYLE_PATTERNS: dict[str, list[re.Pattern]] = {
    "cleanliness": [
        re.compile(r"(?:very\s*)?clean", re.IGNORECASE),
        re.compile(r"neat", re.IGNORECASE),
        re.compile(r"tidy", re.IGNORECASE),
        re.compile(r"organized", re.IGNORECASE),
        re.compile(r"messy", re.IGNORECASE),
        re.compile(r"(?:not\s*)?clean", re.IGNORECASE),
    ],
    "noise": [
        re.compile(r"quiet", re.IGNORECASE),
        re.compile(r"silent", re.IGNORECASE),
        re.compile(r"loud", re.IGNORECASE),
        re.compile(r"noisy", re.IGNORECASE),
        re.compile(r"peaceful", re.IGNORECASE),
        re.compile(r"(?:not\s*)?loud", re.IGNORECASE),
    ],
    "guests": [
        re.compile(r"(?:no\s*)?guests", re.IGNORECASE),
        re.compile(r"(?:no\s*)?visitors", re.IGNORECASE),
        re.compile(r"(?:no\s*)?friends", re.IGNORECASE),
        re.compile(r"occasional", re.IGNORECASE),
        re.compile(r"frequent", re.IGNORECASE),
        re.compile(r"(?:not\s*)?social", re.IGNORECASE),
    ],
    "pets": [
        re.compile(r"(?:no\s*)?pets", re.IGNORECASE),
        re.compile(r"(?:no\s*)?animals", re.IGNORECASE),
        re.compile(r"(?:no\s*)?dogs", re.IGNORECASE),
        re.compile(r"(?:no\s*)?cats", re.IGNORECASE),
        re.compile(r"pet\s*friendly", re.IGNORECASE),
    ],
    "smoking": [
        re.compile(r"(?:no\s*)?smoking", re.IGNORECASE),
        re.compile(r"(?:no\s*)?cigarettes", re.IGNORECASE),
        re.compile(r"(?:no\s*)?vaping", re.IGNORECASE),
        re.compile(r"smoke\s*free", re.IGNORECASE),
    ],
    "partying": [
        re.compile(r"(?:no\s*)?partying", re.IGNORECASE),
        re.compile(r"(?:no\s*)?parties", re.IGNORECASE),
        re.compile(r"(?:no\s*)?drinking", re.IGNORECASE),
        re.compile(r"(?:no\s*)?alcohol", re.IGNORECASE),
        re.compile(r"social", re.IGNORECASE),
    ],
    "study": [
        re.compile(r"study", re.IGNORECASE),
        re.compile(r"studying", re.IGNORECASE),
        re.compile(r"academic", re.IGNORECASE),
        re.compile(r"focused", re.IGNORECASE),
        re.compile(r"(?:not\s*)?distracted", re.IGNORECASE),
    ],
}

INTEREST_KEYWORDS = [
    "gaming", "video games", "sports", "fitness", "gym", "running", "biking",
    "music", "guitar", "piano", "singing", "art", "painting", "drawing",
    "cooking", "baking", "reading", "books", "movies", "netflix", "tv",
    "travel", "hiking", "outdoor", "nature", "photography", "dancing",
    "programming", "coding", "tech", "startup", "entrepreneur",
]  # fmt: skip

# Lifestyle categories rendered by generate_summary, in display order
SUMMARY_LIFESTYLE_LABELS = {
    "cleanliness": "Cleanliness",
    "noise": "Noise level",
    "guests": "Guests",
    "pets": "Pets",
}


class ExtractedPreferences(BaseModel):
    budget: float | None = None
    location: str | None = None
    age: int | None = None
    university: str | None = None
    lifestyle_preferences: dict[str, str] = Field(default_factory=dict)
    interests: list[str] = Field(default_factory=list)


def classify_lifestyle_match(matched_text: str) -> str:
    """Map the text a lifestyle pattern matched onto a preference level."""
    text = matched_text.lower()
    if "no " in text or "not " in text:
        return "none"
    if "very " in text:
        return "high"
    if "occasional" in text or "sometimes" in text:
        return "occasional"
    if "frequent" in text or "often" in text:
        return "frequent"
    return "moderate"


def extract_budget(text: str) -> float | None:
    for pattern in BUDGET_PATTERNS:
        match = pattern.search(text)
        if match:
            amount = float(re.sub(r"[$,]", "", match.group(1)))
            if amount > 0:
                return amount
    return None


def _first_group(patterns: list[re.Pattern], text: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def extract_location(text: str) -> str | None:
    return _first_group(LOCATION_PATTERNS, text)


def extract_university(text: str) -> str | None:
    return _first_group(UNIVERSITY_PATTERNS, text)


def extract_age(text: str) -> int | None:
    for pattern in AGE_PATTERNS:
        match = pattern.search(text)
        if match:
            age = int(match.group(1))
            if 0 < age < 100:
                return age
    return None


def extract_lifestyle_preferences(text: str) -> dict[str, str]:
    preferences: dict[str, str] = {}
    for category, patterns in LIFESTYLE_PATTERNS.items():
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                preferences[category] = classify_lifestyle_match(match.group(0))
                break
    return preferences


def extract_interests(text: str) -> list[str]:
    lowered = text.lower()
    return [keyword for keyword in INTEREST_KEYWORDS if keyword in lowered]


def extract_preferences(text: str) -> ExtractedPreferences:
    """Extract structured roommate preferences from free text."""
    return ExtractedPreferences(
        budget=extract_budget(text),
        location=extract_location(text),
        age=extract_age(text),
        university=extract_university(text),
        lifestyle_preferences=extract_lifestyle_preferences(text),
        interests=extract_interests(text),
    )


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def generate_summary(preferences: ExtractedPreferences) -> str:
    """Human readable summary, one line per detected field."""
    parts: list[str] = []

    if preferences.budget:
        parts.append(f"Budget: ${_format_amount(preferences.budget)}/month")
    if preferences.age:
        parts.append(f"Age: {preferences.age}")
    if preferences.location:
        parts.append(f"Location: {preferences.location}")
    if preferences.university:
        parts.append(f"University: {preferences.university}")

    lifestyle_parts = [
        f"{label}: {preferences.lifestyle_preferences[key]}"
        for key, label in SUMMARY_LIFESTYLE_LABELS.items()
        if preferences.lifestyle_preferences.get(key)
    ]
    if lifestyle_parts:
        parts.append(f"Lifestyle: {', '.join(lifestyle_parts)}")

    if preferences.interests:
        parts.append(f"Interests: {', '.join(preferences.interests)}")

    return "\n".join(parts) if parts else "No preferences detected"
