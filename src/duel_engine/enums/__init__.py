from duel_engine.enums.type import ElementType
from duel_engine.enums.move import DamageClass, MoveTarget, MoveEffect
from duel_engine.enums.ability import Ability
from duel_engine.enums.status import NonVolatileStatus, StatKind
from duel_engine.enums.other import WeatherKind, TerrainKind
