"""
Canonical type-effectiveness chart (Gen 6+), in percent units.

Only non-neutral pairs are listed; every other (attacking, defending) pair is 100.
Format: attacking type -> {defending type: damage factor}.
"""

from duel_engine.enums.type import ElementType as T

NEUTRAL = 100
SUPER_EFFECTIVE = 200
NOT_VERY_EFFECTIVE = 50
NO_EFFECT = 0

TYPE_CHART: dict[T, dict[T, int]] = {
    T.NORMAL: {T.ROCK: 50, T.GHOST: 0, T.STEEL: 50},
    T.FIGHTING: {
        T.NORMAL: 200,
        T.FLYING: 50,
        T.POISON: 50,
        T.ROCK: 200,
        T.BUG: 50,
        T.GHOST: 0,
        T.STEEL: 200,
        T.PSYCHIC: 50,
        T.ICE: 200,
        T.DARK: 200,
        T.FAIRY: 50,
    },
    T.FLYING: {T.FIGHTING: 200, T.ROCK: 50, T.BUG: 200, T.STEEL: 50, T.GRASS: 200, T.ELECTRIC: 50},
    T.POISON: {T.POISON: 50, T.GROUND: 50, T.ROCK: 50, T.GHOST: 50, T.STEEL: 0, T.GRASS: 200, T.FAIRY: 200},
    T.GROUND: {T.FLYING: 0, T.POISON: 200, T.ROCK: 200, T.BUG: 50, T.STEEL: 200, T.FIRE: 200, T.GRASS: 50, T.ELECTRIC: 200},
    T.ROCK: {T.FIGHTING: 50, T.FLYING: 200, T.GROUND: 50, T.BUG: 200, T.STEEL: 50, T.FIRE: 200, T.ICE: 200},
    T.BUG: {
        T.FIGHTING: 50,
        T.FLYING: 50,
        T.POISON: 50,
        T.GHOST: 50,
        T.STEEL: 50,
        T.FIRE: 50,
        T.GRASS: 200,
        T.PSYCHIC: 200,
        T.DARK: 200,
        T.FAIRY: 50,
    },
    T.GHOST: {T.NORMAL: 0, T.GHOST: 200, T.PSYCHIC: 200, T.DARK: 50},
    T.STEEL: {T.ROCK: 200, T.STEEL: 50, T.FIRE: 50, T.WATER: 50, T.ELECTRIC: 50, T.ICE: 200, T.FAIRY: 200},
    T.FIRE: {T.ROCK: 50, T.BUG: 200, T.STEEL: 200, T.FIRE: 50, T.WATER: 50, T.GRASS: 200, T.ICE: 200, T.DRAGON: 50},
    T.WATER: {T.GROUND: 200, T.ROCK: 200, T.FIRE: 200, T.WATER: 50, T.GRASS: 50, T.DRAGON: 50},
    T.GRASS: {
        T.FLYING: 50,
        T.POISON: 50,
        T.GROUND: 200,
        T.ROCK: 200,
        T.BUG: 50,
        T.STEEL: 50,
        T.FIRE: 50,
        T.WATER: 200,
        T.GRASS: 50,
        T.DRAGON: 50,
    },
    T.ELECTRIC: {T.FLYING: 200, T.GROUND: 0, T.WATER: 200, T.GRASS: 50, T.ELECTRIC: 50, T.DRAGON: 50},
    T.PSYCHIC: {T.FIGHTING: 200, T.POISON: 200, T.STEEL: 50, T.PSYCHIC: 50, T.DARK: 0},
    T.ICE: {T.FLYING: 200, T.GROUND: 200, T.STEEL: 50, T.FIRE: 50, T.WATER: 50, T.GRASS: 200, T.ICE: 50, T.DRAGON: 200},
    T.DRAGON: {T.STEEL: 50, T.DRAGON: 200, T.FAIRY: 0},
    T.DARK: {T.FIGHTING: 50, T.GHOST: 200, T.PSYCHIC: 200, T.DARK: 50, T.FAIRY: 50},
    T.FAIRY: {T.FIGHTING: 200, T.POISON: 50, T.STEEL: 50, T.FIRE: 50, T.DRAGON: 200, T.DARK: 200},
}
