"""Map activity descriptions to place-search categories."""

from __future__ import annotations

from .text import tokenize

# Word -> Places type. None marks activities that are not a venue.
ACTIVITY_TYPE_MAPPINGS: dict[str, str | None] = {
    "lunch": "restaurant",
    "dinner": "restaurant",
    "breakfast": "restaurant",
    "brunch": "restaurant",
    "coffee": "cafe",
    "drinks": "bar",
    "shopping": "shopping_mall",
    "culture": "museum",
    "museum": "museum",
    "art": "art_gallery",
    "entertainment": "movie_theater",
    "park": "park",
    "hotel": "lodging",
    "workout": "gym",
    "spa": "spa",
    "tourism": "tourist_attraction",
    "nightlife": "night_club",
    "dessert": "bakery",
    "meeting": None,
    "arrive": None,
    "depart": None,
    "explore": None,
    "walk": None,
    "stroll": None,
    "travel": None,
    "relax": None,
    "break": None,
    "rest": None,
}

# Checked after the single-word table; first hit wins
_PHRASE_MAPPINGS: tuple[tuple[str, str], ...] = (
    ("red sox", "stadium"),
    ("fenway", "stadium"),
    ("ice cream", "cafe"),
    ("freedom trail", "tourist_attraction"),
    ("duck tour", "tourist_attraction"),
    ("harbor cruise", "tourist_attraction"),
    ("diner", "restaurant"),
    ("bistro", "restaurant"),
    ("seafood", "restaurant"),
    ("pub", "bar"),
    ("brewery", "bar"),
    ("gallery", "art_gallery"),
    ("concert", "night_club"),
    ("show", "performing_arts_theater"),
    ("monument", "tourist_attraction"),
    ("landmark", "tourist_attraction"),
    ("historic", "tourist_attraction"),
    ("garden", "park"),
    ("market", "shopping_mall"),
    ("university", "university"),
    ("campus", "university"),
)

DEFAULT_PLACE_TYPE = "tourist_attraction"


def map_activity_to_place_type(description: str | None) -> str | None:
    """Places type for an activity, or None when it is not a venue.

    Unrecognized activities fall back to ``tourist_attraction``.
    """
    if not description:
        return None
    tokens = tokenize(description)
    token_set = set(tokens)
    for word, place_type in ACTIVITY_TYPE_MAPPINGS.items():
        if word in token_set:
            return place_type
    padded = f" {' '.join(tokens)} "
    for phrase, place_type in _PHRASE_MAPPINGS:
        if f" {phrase}" in padded:
            return place_type
    return DEFAULT_PLACE_TYPE
