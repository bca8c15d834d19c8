"""Colloquial names and common misspellings of Boston locations."""

# Canonical area name -> lower-cased ways people refer to it
AREA_ALIASES: dict[str, tuple[str, ...]] = {
    "Back Bay": ("back bay", "backbay", "newbury street area", "copley square area"),
    "Beacon Hill": ("beacon hill", "beaconhill", "the hill", "state house area"),
    "North End": ("north end", "little italy", "italian district", "boston's little italy"),
    "Fenway": ("fenway", "fenway park area", "kenmore", "kenmore square"),
    "Seaport": ("seaport district", "seaport", "innovation district", "south boston waterfront"),
    "Downtown": (
        "downtown",
        "downtown boston",
        "downtown crossing",
        "government center",
        "city center",
    ),
    "South End": ("south end", "southend", "tremont street area"),
    "Cambridge": (
        "cambridge",
        "harvard square",
        "central square",
        "kendall square",
        "harvard",
        "mit area",
    ),
    "Somerville": ("somerville", "davis square", "union square", "assembly row"),
    "Charlestown": ("charlestown", "navy yard", "bunker hill area"),
    "Jamaica Plain": ("jamaica plain", "jp", "jamaica pond area"),
    "Allston/Brighton": ("allston", "brighton", "allston brighton", "student area"),
    "Chinatown": ("chinatown", "chinese district", "theater district", "leather district"),
    "Dorchester": ("dorchester", "dot", "uphams corner", "fields corner"),
    "Financial District": ("financial district", "fidi", "post office square", "downtown financial"),
}

# Lower-cased misspelling -> corrected text; applied before alias matching
SPELLING_CORRECTIONS: dict[str, str] = {
    "harvard sq": "Harvard Square",
    "kendall": "Kendall Square",
    "govt center": "Government Center",
    "faneuil": "Faneuil Hall",
    "quincy mkt": "Quincy Market",
    "fin district": "Financial District",
    "newbury st": "Newbury Street",
    "boylston st": "Boylston Street",
    "tremont st": "Tremont Street",
    "boston common": "Boston Common",
    "public garden": "Public Garden",
    "freedom trail": "Freedom Trail",
}


def alias_index() -> dict[str, str]:
    """Flatten ``AREA_ALIASES`` into alias -> canonical name."""
    return {alias: name for name, aliases in AREA_ALIASES.items() for alias in aliases}
