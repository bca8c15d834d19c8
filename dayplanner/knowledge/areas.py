"""Curated Boston area dataset."""

BOSTON_AREAS: list[dict] = [
    {
        "name": "Downtown",
        "type": "region",
        "region": "Downtown",
        "characteristics": ["urban", "historic", "commercial", "cultural"],
        "neighbors": ["Back Bay", "North End", "Beacon Hill", "Chinatown"],
        "popular_for": ["government buildings", "historic sites", "shopping", "finance"],
        "crowd_levels": {"morning": 4, "afternoon": 5, "evening": 3, "weekend": 4},
    },
    {
        "name": "Back Bay",
        "type": "neighborhood",
        "region": "Downtown",
        "characteristics": ["upscale", "historic", "shopping", "dining"],
        "neighbors": ["Fenway", "South End", "Beacon Hill", "Cambridge"],
        "popular_for": ["Newbury Street", "Copley Square", "Boston Public Library", "brownstones"],
        "crowd_levels": {"morning": 3, "afternoon": 4, "evening": 4, "weekend": 5},
    },
    {
        "name": "Beacon Hill",
        "type": "neighborhood",
        "region": "Downtown",
        "characteristics": ["historic", "picturesque", "charming", "upscale"],
        "neighbors": ["Back Bay", "West End", "Downtown", "Cambridge"],
        "popular_for": ["Acorn Street", "State House", "historic architecture", "gas lamps"],
        "crowd_levels": {"morning": 2, "afternoon": 4, "evening": 3, "weekend": 4},
    },
    {
        "name": "North End",
        "type": "neighborhood",
        "region": "Downtown",
        "characteristics": ["italian", "historic", "food", "cultural"],
        "neighbors": ["Downtown", "West End", "Waterfront", "Beacon Hill"],
        "popular_for": [
            "Italian restaurants",
            "Paul Revere House",
            "Old North Church",
            "pastry shops",
        ],
        "crowd_levels": {"morning": 2, "afternoon": 4, "evening": 5, "weekend": 5},
    },
    {
        "name": "Fenway",
        "type": "neighborhood",
        "region": "West",
        "characteristics": ["sports", "youthful", "university", "cultural"],
        "neighbors": ["Back Bay", "Longwood", "Kenmore", "Mission Hill"],
        "popular_for": ["Fenway Park", "Red Sox", "universities", "museums"],
        "crowd_levels": {"morning": 2, "afternoon": 4, "evening": 5, "weekend": 5},
    },
    {
        "name": "Seaport",
        "type": "neighborhood",
        "region": "East",
        "characteristics": ["modern", "waterfront", "innovation", "dining"],
        "neighbors": ["South Boston", "Downtown", "Fort Point"],
        "popular_for": ["restaurants", "harbor views", "museums", "convention center"],
        "crowd_levels": {"morning": 3, "afternoon": 4, "evening": 5, "weekend": 5},
    },
    {
        "name": "South End",
        "type": "neighborhood",
        "region": "Central",
        "characteristics": ["trendy", "diverse", "foodie", "historic"],
        "neighbors": ["Back Bay", "Roxbury", "Bay Village", "South Boston"],
        "popular_for": ["restaurants", "Victorian rowhouses", "arts", "boutiques"],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 4, "weekend": 5},
    },
    {
        "name": "Cambridge",
        "type": "area",
        "region": "North",
        "characteristics": ["academic", "intellectual", "diverse", "cultural"],
        "neighbors": ["Somerville", "Allston", "Charlestown"],
        "popular_for": ["Harvard University", "MIT", "Harvard Square", "innovation"],
        "crowd_levels": {"morning": 3, "afternoon": 4, "evening": 4, "weekend": 4},
    },
    {
        "name": "Somerville",
        "type": "area",
        "region": "North",
        "characteristics": ["eclectic", "youthful", "diverse", "artsy"],
        "neighbors": ["Cambridge", "Medford", "Charlestown"],
        "popular_for": ["Davis Square", "Union Square", "restaurants", "breweries"],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 4, "weekend": 5},
    },
    {
        "name": "Charlestown",
        "type": "neighborhood",
        "region": "North",
        "characteristics": ["historic", "waterfront", "residential", "scenic"],
        "neighbors": ["North End", "Cambridge", "East Boston"],
        "popular_for": [
            "Bunker Hill Monument",
            "USS Constitution",
            "Navy Yard",
            "Freedom Trail",
        ],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 2, "weekend": 4},
    },
    {
        "name": "Jamaica Plain",
        "type": "neighborhood",
        "region": "Southwest",
        "characteristics": ["diverse", "green", "lively", "community-oriented"],
        "neighbors": ["Roxbury", "Mission Hill", "Roslindale", "Brookline"],
        "popular_for": ["Jamaica Pond", "Arnold Arboretum", "restaurants", "local shops"],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 3, "weekend": 4},
    },
    {
        "name": "Allston/Brighton",
        "type": "neighborhood",
        "region": "West",
        "characteristics": ["student", "diverse", "casual", "affordable"],
        "neighbors": ["Fenway", "Brookline", "Cambridge"],
        "popular_for": ["universities", "music venues", "ethnic restaurants", "student housing"],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 4, "weekend": 4},
    },
    {
        "name": "Chinatown",
        "type": "neighborhood",
        "region": "Downtown",
        "characteristics": ["cultural", "vibrant", "food", "busy"],
        "neighbors": ["Downtown", "Theater District", "South End", "Financial District"],
        "popular_for": ["Chinese restaurants", "markets", "cultural events", "bakeries"],
        "crowd_levels": {"morning": 3, "afternoon": 5, "evening": 4, "weekend": 5},
    },
    {
        "name": "Dorchester",
        "type": "neighborhood",
        "region": "South",
        "characteristics": ["diverse", "residential", "community-oriented", "evolving"],
        "neighbors": ["South Boston", "Roxbury", "Mattapan"],
        "popular_for": ["beaches", "parks", "diverse dining", "JFK Library"],
        "crowd_levels": {"morning": 2, "afternoon": 3, "evening": 2, "weekend": 3},
    },
    {
        "name": "Financial District",
        "type": "area",
        "region": "Downtown",
        "characteristics": ["business", "commercial", "historic", "bustling"],
        "neighbors": ["Downtown", "Waterfront", "Chinatown", "North End"],
        "popular_for": ["skyscrapers", "historic sites", "business centers", "restaurants"],
        "crowd_levels": {"morning": 5, "afternoon": 5, "evening": 2, "weekend": 1},
    },
]
