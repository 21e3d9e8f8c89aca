from enum import Enum


class WeatherKind(str, Enum):
    NONE = ""
    HAIL = "hail"
    SANDSTORM = "sandstorm"
    RAIN = "rain"
    SUN = "sun"
    HEAVY_RAIN = "h-rain"
    HARSH_SUN = "h-sun"
    STRONG_WINDS = "h-wind"


EXTREME_WEATHER = frozenset({WeatherKind.HEAVY_RAIN, WeatherKind.HARSH_SUN, WeatherKind.STRONG_WINDS})
RAINY = frozenset({WeatherKind.RAIN, WeatherKind.HEAVY_RAIN})
SUNNY = frozenset({WeatherKind.SUN, WeatherKind.HARSH_SUN})


class TerrainKind(str, Enum):
    NONE = ""
    ELECTRIC = "electric"
    GRASSY = "grassy"
    MISTY = "misty"
    PSYCHIC = "psychic"
