"""
Held-item tables consulted by the damage calculator and the combatant operations.

Items are identified by their catalogue identifier ("choice-band", "sitrus-berry").
"""

from duel_engine.enums.type import ElementType as T

# =============================================================================
# TYPE-BEARING ITEMS
# =============================================================================
PLATE_TYPES = {
    "draco-plate": T.DRAGON,
    "dread-plate": T.DARK,
    "earth-plate": T.GROUND,
    "fist-plate": T.FIGHTING,
    "flame-plate": T.FIRE,
    "icicle-plate": T.ICE,
    "insect-plate": T.BUG,
    "iron-plate": T.STEEL,
    "meadow-plate": T.GRASS,
    "mind-plate": T.PSYCHIC,
    "pixie-plate": T.FAIRY,
    "sky-plate": T.FLYING,
    "splash-plate": T.WATER,
    "spooky-plate": T.GHOST,
    "stone-plate": T.ROCK,
    "toxic-plate": T.POISON,
    "zap-plate": T.ELECTRIC,
}

MEMORY_TYPES = {
    "dragon-memory": T.DRAGON,
    "dark-memory": T.DARK,
    "ground-memory": T.GROUND,
    "fighting-memory": T.FIGHTING,
    "fire-memory": T.FIRE,
    "ice-memory": T.ICE,
    "bug-memory": T.BUG,
    "steel-memory": T.STEEL,
    "grass-memory": T.GRASS,
    "psychic-memory": T.PSYCHIC,
    "fairy-memory": T.FAIRY,
    "flying-memory": T.FLYING,
    "water-memory": T.WATER,
    "ghost-memory": T.GHOST,
    "rock-memory": T.ROCK,
    "poison-memory": T.POISON,
    "electric-memory": T.ELECTRIC,
}

DRIVE_TYPES = {
    "burn-drive": T.FIRE,
    "chill-drive": T.ICE,
    "douse-drive": T.WATER,
    "shock-drive": T.ELECTRIC,
}

# Judgment / Multi-Attack style type lookup
JUDGMENT_ITEM_TYPES = {**PLATE_TYPES, **MEMORY_TYPES, **DRIVE_TYPES}

# x1.2 power for moves of the matching type
TYPE_BOOST_ITEMS = {
    "black-glasses": T.DARK,
    "black-belt": T.FIGHTING,
    "hard-stone": T.ROCK,
    "magnet": T.ELECTRIC,
    "mystic-water": T.WATER,
    "never-melt-ice": T.ICE,
    "dragon-fang": T.DRAGON,
    "poison-barb": T.POISON,
    "charcoal": T.FIRE,
    "silk-scarf": T.NORMAL,
    "metal-coat": T.STEEL,
    "sharp-beak": T.FLYING,
    **PLATE_TYPES,
}

# Orb -> (species name prefix, boosted types)
SPECIES_ORBS = {
    "adamant-orb": (("Dialga",), (T.DRAGON, T.STEEL)),
    "griseous-orb": (("Giratina",), (T.DRAGON, T.GHOST)),
    "soul-dew": (("Latios", "Latias"), (T.DRAGON, T.PSYCHIC)),
    "lustrous-orb": (("Palkia",), (T.DRAGON, T.WATER)),
}

# Items that can never be knocked off, swapped, suppressed or consumed
UNREMOVABLE_ITEMS = frozenset({
    *PLATE_TYPES,
    *MEMORY_TYPES,
    "primal-orb", "griseous-orb", "blue-orb", "red-orb", "rusty-sword", "rusty-shield",
    "mega-stone", "mega-stone-x", "mega-stone-y",
})

CHOICE_ITEMS = frozenset({"choice-band", "choice-scarf", "choice-specs"})

# Base power of Fling per item; items missing here cannot be flung
FLING_POWER = {
    "iron-ball": 130,
    "hard-stone": 100,
    "rare-bone": 100,
    "deep-sea-tooth": 90,
    "thick-club": 90,
    "grip-claw": 90,
    "assault-vest": 80,
    "heavy-duty-boots": 80,
    "quick-claw": 80,
    "sticky-barb": 80,
    "poison-barb": 70,
    "dragon-fang": 70,
    "power-bracer": 70,
    "power-belt": 70,
    "power-lens": 70,
    "power-band": 70,
    "power-anklet": 70,
    "power-weight": 70,
    "rocky-helmet": 60,
    "adamant-orb": 60,
    "lustrous-orb": 60,
    "griseous-orb": 60,
    "black-belt": 30,
    "black-sludge": 30,
    "black-glasses": 30,
    "charcoal": 30,
    "eviolite": 40,
    "flame-orb": 30,
    "toxic-orb": 30,
    "light-ball": 30,
    "magnet": 30,
    "metal-coat": 30,
    "mystic-water": 30,
    "never-melt-ice": 30,
    "sharp-beak": 50,
    "life-orb": 30,
    "expert-belt": 10,
    "leftovers": 10,
    "choice-band": 10,
    "choice-scarf": 10,
    "choice-specs": 10,
    "focus-band": 10,
    "focus-sash": 10,
    "kings-rock": 30,
    "razor-fang": 30,
    "white-herb": 10,
    "mental-herb": 10,
    "silk-scarf": 10,
    "shell-bell": 30,
    "scope-lens": 30,
    "wide-lens": 10,
    "zoom-lens": 10,
    "muscle-band": 10,
    "wise-glasses": 10,
    **{plate: 90 for plate in PLATE_TYPES},
}

# =============================================================================
# BERRIES
# =============================================================================
# Natural Gift power tiers; berries not listed fall back to 80
NATURAL_GIFT_100 = frozenset({
    "enigma-berry", "rowap-berry", "maranga-berry", "jaboca-berry", "belue-berry",
    "kee-berry", "salac-berry", "watmel-berry", "lansat-berry", "custap-berry",
    "liechi-berry", "apicot-berry", "ganlon-berry", "petaya-berry", "starf-berry",
    "micle-berry", "durin-berry",
})

NATURAL_GIFT_90 = frozenset({
    "cornn-berry", "spelon-berry", "nomel-berry", "wepear-berry", "kelpsy-berry",
    "bluk-berry", "grepa-berry", "rabuta-berry", "pinap-berry", "hondew-berry",
    "pomeg-berry", "qualot-berry", "tamato-berry", "magost-berry", "pamtre-berry",
    "nanab-berry",
})


def _berries(element: T, *names: str) -> dict[str, T]:
    return {f"{name}-berry": element for name in names}


NATURAL_GIFT_TYPES = {
    **_berries(T.BUG, "figy", "tanga", "cornn", "enigma"),
    **_berries(T.DARK, "iapapa", "colbur", "spelon", "rowap", "maranga"),
    **_berries(T.DRAGON, "aguav", "haban", "nomel", "jaboca"),
    **_berries(T.ELECTRIC, "pecha", "wacan", "wepear", "belue"),
    **_berries(T.FAIRY, "roseli", "kee"),
    **_berries(T.FIGHTING, "leppa", "chople", "kelpsy", "salac"),
    **_berries(T.FIRE, "cheri", "occa", "bluk", "watmel"),
    **_berries(T.FLYING, "lum", "coba", "grepa", "lansat"),
    **_berries(T.GHOST, "mago", "kasib", "rabuta", "custap"),
    **_berries(T.GRASS, "rawst", "rindo", "pinap", "liechi"),
    **_berries(T.GROUND, "persim", "shuca", "hondew", "apicot"),
    **_berries(T.ICE, "aspear", "yache", "pomeg", "ganlon"),
    **_berries(T.POISON, "oran", "kebia", "qualot", "petaya"),
    **_berries(T.PSYCHIC, "sitrus", "payapa", "tamato", "starf"),
    **_berries(T.ROCK, "wiki", "charti", "magost", "micle"),
    **_berries(T.STEEL, "razz", "babiri", "pamtre"),
    **_berries(T.WATER, "chesto", "passho", "nanab", "durin"),
    "chilan-berry": T.NORMAL,
}

# Eaten at 1/4 HP or less
PINCH_BERRIES = frozenset({
    "figy-berry", "wiki-berry", "mago-berry", "aguav-berry", "iapapa-berry",
    "apicot-berry", "ganlon-berry", "lansat-berry", "liechi-berry", "micle-berry",
    "petaya-berry", "salac-berry", "starf-berry",
})

# Heal 1/3 HP, confuse a holder that dislikes the flavor
HP_BERRY_FLAVORS = {
    "figy-berry": "spicy",
    "wiki-berry": "dry",
    "mago-berry": "sweet",
    "aguav-berry": "bitter",
    "iapapa-berry": "sour",
}

# Status berry -> narration of the cure
STATUS_BERRY_CURES = {
    "aspear-berry": "is no longer frozen",
    "cheri-berry": "is no longer paralyzed",
    "chesto-berry": "woke up",
    "pecha-berry": "is no longer poisoned",
    "rawst-berry": "is no longer burned",
    "persim-berry": "is no longer confused",
}
