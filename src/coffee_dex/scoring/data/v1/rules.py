"""Category rules v1.

Trait tuples are (trait, weight, min, max). A trait only contributes when
its value reaches ``min``; values above ``max`` are clamped.
"""

BASELINE_CATEGORY = "normal"

RULES = [
    # Generic, balanced cup
    {
        "category": "normal",
        "primary_traits": [("cleanliness", 2.0, 6, 9), ("body", 1.5, 4, 7)],
        "secondary_traits": [("sweetness", 1.0, 4, 6), ("bitterness", 1.0, 3, 6)],
        "keywords": [],
        "processing_multipliers": {"washed": 1.3},
        "roast_multipliers": {"medium": 1.4, "light-medium": 1.2},
        "minimum_threshold": 0.4,
    },
    # Roasty, savory or peppery
    {
        "category": "fire",
        "primary_traits": [("roast_intensity", 2.5, 7, 10), ("savory", 2.0, 6, 10), ("spice", 2.2, 7, 10)],
        "secondary_traits": [("bitterness", 1.2, 6, 9), ("body", 1.0, 7, 10)],
        "keywords": ["pepper", "roast", "smoke", "char", "burnt", "toast", "caramel"],
        "processing_multipliers": {},
        "roast_multipliers": {"dark": 1.8, "medium-dark": 1.5},
        "minimum_threshold": 0.6,
    },
    # Clean, light and mineral
    {
        "category": "water",
        "primary_traits": [("cleanliness", 2.0, 8, 10), ("body", 1.5, 2, 5)],
        "secondary_traits": [("sweetness", 1.0, 3, 6)],
        "keywords": ["water", "clean", "crisp", "mineral", "seaweed", "ocean"],
        "processing_multipliers": {"washed": 1.5},
        "roast_multipliers": {},
        "minimum_threshold": 0.5,
    },
    # Floral, herbal, vegetal
    {
        "category": "grass",
        "primary_traits": [("florality", 2.5, 7, 10), ("aromatic_intensity", 2.0, 6, 10)],
        "secondary_traits": [("cleanliness", 1.3, 6, 9), ("sweetness", 1.0, 5, 8)],
        "keywords": ["floral", "jasmine", "rose", "grass", "vegetal", "green", "herbal", "tea"],
        "processing_multipliers": {"washed": 1.3, "honey": 1.2},
        "roast_multipliers": {"light": 1.5, "light-medium": 1.3},
        "minimum_threshold": 0.55,
    },
    # Sharp acidity
    {
        "category": "electric",
        "primary_traits": [("citrus_fruits_intensity", 2.5, 7, 10), ("aromatic_intensity", 2.0, 7, 10)],
        "secondary_traits": [("cleanliness", 1.5, 7, 10), ("body", -1.0, 2, 5)],
        "keywords": ["citrus", "lemon", "lime", "orange", "grapefruit", "bright", "zesty", "tangy", "acidic"],
        "processing_multipliers": {"washed": 1.4},
        "roast_multipliers": {"light": 1.6, "light-medium": 1.3},
        "minimum_threshold": 0.6,
    },
    # Minty, cooling
    {
        "category": "ice",
        "primary_traits": [("cleanliness", 2.5, 8, 10), ("aromatic_intensity", 2.0, 7, 10)],
        "secondary_traits": [("florality", 1.5, 6, 9)],
        "keywords": ["mint", "menthol", "eucalyptus", "cooling", "fresh", "crisp"],
        "processing_multipliers": {"washed": 1.4},
        "roast_multipliers": {},
        "minimum_threshold": 0.65,
    },
    # Funky, fermented
    {
        "category": "poison",
        "primary_traits": [("spice", 2.5, 7, 10), ("savory", 2.0, 7, 10)],
        "secondary_traits": [("aromatic_intensity", 1.5, 7, 10), ("bitterness", 1.0, 5, 8)],
        "keywords": ["spice", "funky", "ferment", "wild", "unusual", "complex", "intense"],
        "processing_multipliers": {"natural": 1.5, "experimental": 1.8, "coferment": 1.7},
        "roast_multipliers": {},
        "minimum_threshold": 0.6,
    },
    # Earthy, grain, nut
    {
        "category": "ground",
        "primary_traits": [("body", 2.5, 7, 10), ("savory", 2.0, 6, 10)],
        "secondary_traits": [("roast_intensity", 1.5, 5, 8), ("bitterness", 1.0, 4, 7)],
        "keywords": ["earth", "soil", "grain", "wheat", "cereal", "nutty", "almond", "hazelnut"],
        "processing_multipliers": {"natural": 1.3, "honey": 1.2},
        "roast_multipliers": {},
        "minimum_threshold": 0.55,
    },
    # Stonefruit
    {
        "category": "rock",
        "primary_traits": [("stonefruit_intensity", 3.0, 7, 10), ("sweetness", 2.0, 6, 9)],
        "secondary_traits": [("body", 1.5, 6, 9), ("aromatic_intensity", 1.0, 5, 8)],
        "keywords": ["peach", "apricot", "plum", "cherry", "nectarine", "stonefruit"],
        "processing_multipliers": {"natural": 1.4, "honey": 1.3},
        "roast_multipliers": {},
        "minimum_threshold": 0.6,
    },
    # Roast and bitterness, little sweetness
    {
        "category": "dark",
        "primary_traits": [("roast_intensity", 2.5, 7, 10), ("bitterness", 2.0, 6, 9)],
        "secondary_traits": [("body", 1.5, 7, 10), ("sweetness", -1.0, 2, 5)],
        "keywords": ["dark", "chocolate", "cocoa", "roast", "bold", "intense"],
        "processing_multipliers": {},
        "roast_multipliers": {"dark": 2.0, "medium-dark": 1.6},
        "minimum_threshold": 0.6,
    },
    # Sugary sweets
    {
        "category": "fairy",
        "primary_traits": [("sweetness", 3.0, 8, 10), ("aromatic_intensity", 2.0, 7, 10)],
        "secondary_traits": [("florality", 1.5, 6, 9), ("berry_intensity", 1.5, 6, 9)],
        "keywords": ["sweet", "candy", "sugar", "honey", "vanilla", "caramel", "syrup", "dessert"],
        "processing_multipliers": {"natural": 1.4, "honey": 1.5, "washed": 1.1},
        "roast_multipliers": {"light": 1.5, "light-medium": 1.3},
        "minimum_threshold": 0.65,
    },
    # Highly specific, unusual combinations
    {
        "category": "psychic",
        "primary_traits": [("aromatic_intensity", 2.5, 8, 10), ("cleanliness", 2.0, 7, 10)],
        "secondary_traits": [("florality", 1.5, 6, 9), ("berry_intensity", 1.0, 6, 9)],
        "keywords": [],
        "processing_multipliers": {"experimental": 1.8, "coferment": 1.6},
        "roast_multipliers": {},
        "minimum_threshold": 0.7,
    },
    # Baking spice
    {
        "category": "bug",
        "primary_traits": [("spice", 2.0, 5, 9), ("aromatic_intensity", 1.5, 5, 9)],
        "secondary_traits": [("body", 1.0, 4, 7)],
        "keywords": ["spice", "cinnamon", "cardamom", "clove", "insect", "bug"],
        "processing_multipliers": {"natural": 1.2, "experimental": 1.3},
        "roast_multipliers": {},
        "minimum_threshold": 0.45,
    },
]
