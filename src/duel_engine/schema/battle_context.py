from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from duel_engine.data.moves import metronome_pool
from duel_engine.enums import Ability, TerrainKind, WeatherKind
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.log import BattleLog
from duel_engine.schema.move import BattleMove, MoveData
from duel_engine.schema.timers import ExpiringEffect, ExpiringItem, ExpiringWish
from duel_engine.utils.rng import BattleRng


class MoveAction(BaseModel):
    kind: Literal["move"] = "move"
    move: BattleMove


class SwitchAction(BaseModel):
    kind: Literal["switch"] = "switch"
    index: int = Field(ge=0)


Action = Union[MoveAction, SwitchAction]


class BatonPass(BaseModel):
    """State handed from a Baton Pass user to the combatant that replaces it."""

    attack_stage: int = 0
    defense_stage: int = 0
    sp_atk_stage: int = 0
    sp_def_stage: int = 0
    speed_stage: int = 0
    evasion_stage: int = 0
    accuracy_stage: int = 0
    confusion: ExpiringEffect = Field(default_factory=ExpiringEffect)
    focus_energy: bool = False
    mind_reader: ExpiringItem = Field(default_factory=ExpiringItem)
    leech_seed: bool = False
    curse: bool = False
    substitute: int = 0
    ingrain: bool = False
    power_trick: bool = False
    power_shift: bool = False
    heal_block: ExpiringEffect = Field(default_factory=ExpiringEffect)
    embargo: ExpiringEffect = Field(default_factory=ExpiringEffect)
    perish_song: ExpiringEffect = Field(default_factory=ExpiringEffect)
    magnet_rise: ExpiringEffect = Field(default_factory=ExpiringEffect)
    aqua_ring: bool = False
    telekinesis: ExpiringEffect = Field(default_factory=ExpiringEffect)

    @classmethod
    def capture(cls, mon: Combatant) -> "BatonPass":
        return cls(**{name: getattr(mon, name) for name in cls.model_fields})

    def apply(self, mon: Combatant) -> None:
        for name in type(self).model_fields:
            if name.endswith("_stage") and mon.ability() == Ability.CURIOUS_MEDICINE:
                continue
            value = getattr(self, name)
            if isinstance(value, BaseModel):
                value = value.model_copy(deep=True)
            setattr(mon, name, value)


class Side(BaseModel):
    """One trainer's half of the battle: party, active slot and side conditions."""

    name: str
    party: list[Combatant] = Field(min_length=1, max_length=6)
    active_index: Optional[int] = 0  # None - nothing on the field (fainted or mid-turn removal)
    last_idx: int = 0
    selected_action: Optional[Action] = None
    mid_turn_remove: bool = False
    baton_pass: Optional[BatonPass] = None

    # Entry hazards
    spikes: int = Field(default=0, ge=0, le=3)
    toxic_spikes: int = Field(default=0, ge=0, le=2)
    stealth_rock: bool = False
    sticky_web: bool = False

    # Side conditions
    wish: ExpiringWish = Field(default_factory=ExpiringWish)
    aurora_veil: ExpiringEffect = Field(default_factory=ExpiringEffect)
    light_screen: ExpiringEffect = Field(default_factory=ExpiringEffect)
    reflect: ExpiringEffect = Field(default_factory=ExpiringEffect)
    mist: ExpiringEffect = Field(default_factory=ExpiringEffect)
    safeguard: ExpiringEffect = Field(default_factory=ExpiringEffect)
    healing_wish: bool = False
    lunar_dance: bool = False
    tailwind: ExpiringEffect = Field(default_factory=ExpiringEffect)
    mud_sport: ExpiringEffect = Field(default_factory=ExpiringEffect)
    water_sport: ExpiringEffect = Field(default_factory=ExpiringEffect)
    retaliate: ExpiringEffect = Field(default_factory=ExpiringEffect)
    future_sight: ExpiringEffect = Field(default_factory=ExpiringEffect)
    future_sight_attacker: Optional[int] = None  # uid
    future_sight_move: Optional[BattleMove] = None
    num_fainted: int = 0
    next_substitute: int = 0

    @property
    def active(self) -> Optional[Combatant]:
        if self.active_index is None:
            return None
        return self.party[self.active_index]

    def has_alive_pokemon(self) -> bool:
        return any(mon.hp > 0 for mon in self.party)


class Weather(BaseModel):
    kind: WeatherKind = WeatherKind.NONE
    timer: ExpiringEffect = Field(default_factory=ExpiringEffect)


class Terrain(BaseModel):
    kind: TerrainKind = TerrainKind.NONE
    timer: ExpiringEffect = Field(default_factory=ExpiringEffect)


class EngineConfig(BaseModel):
    inverse_battle: bool = False
    max_use_depth: int = Field(default=8, ge=1)  # nested snatch / bounce / dancer / metronome uses
    metronome_moves: list[MoveData] = Field(default_factory=metronome_pool)


class BattleContext(BaseModel):
    """Everything one battle needs between turns. Dumps and restores losslessly, RNG included."""

    sides: list[Side] = Field(min_length=2, max_length=2)
    weather: Weather = Field(default_factory=Weather)
    terrain: Terrain = Field(default_factory=Terrain)
    trick_room: ExpiringEffect = Field(default_factory=ExpiringEffect)
    magic_room: ExpiringEffect = Field(default_factory=ExpiringEffect)
    wonder_room: ExpiringEffect = Field(default_factory=ExpiringEffect)
    gravity: ExpiringEffect = Field(default_factory=ExpiringEffect)
    plasma_fists: bool = False
    turn: int = 0
    last_move_effect: Optional[int] = None
    use_depth: int = 0
    config: EngineConfig = Field(default_factory=EngineConfig)
    rng: BattleRng = Field(default_factory=BattleRng)
    log: BattleLog = Field(default_factory=BattleLog)

    @classmethod
    def create(
        cls,
        party1: list[Combatant],
        party2: list[Combatant],
        names: tuple[str, str] = ("Player 1", "Player 2"),
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None,
    ) -> "BattleContext":
        """Build a battle from two parties. Combatants are re-stamped with their side and a unique uid."""
        sides = []
        for side_idx, (name, party) in enumerate(zip(names, (party1, party2))):
            for slot, mon in enumerate(party):
                mon.side = side_idx
                mon.uid = side_idx * 6 + slot
            sides.append(Side(name=name, party=party))
        return cls(sides=sides, config=config or EngineConfig(), rng=BattleRng.from_seed(seed))

    # =========================================================================
    # LOOKUPS
    # =========================================================================
    def side_of(self, mon: Combatant) -> Side:
        return self.sides[mon.side]

    def opponent_side(self, mon: Combatant) -> Side:
        return self.sides[1 - mon.side]

    def opponent_of(self, mon: Combatant) -> Optional[Combatant]:
        return self.sides[1 - mon.side].active

    def find(self, uid: int) -> Combatant:
        for side in self.sides:
            for mon in side.party:
                if mon.uid == uid:
                    return mon
        raise KeyError(f"no combatant with uid {uid}")

    def active_mons(self) -> list[Combatant]:
        return [side.active for side in self.sides if side.active is not None]

    def weather_now(self) -> WeatherKind:
        """Current weather as it affects the field (cloud nine / air lock suppress it)."""
        for mon in self.active_mons():
            if mon.ability() in (Ability.CLOUD_NINE, Ability.AIR_LOCK):
                return WeatherKind.NONE
        return self.weather.kind

    def terrain_now(self) -> TerrainKind:
        return self.terrain.kind
