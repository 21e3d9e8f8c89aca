from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from duel_engine.data.abilities import (
    IGNORABLE_ABILITIES,
    MOLD_BREAKERS,
    UNCHANGEABLE_ABILITIES,
    UNGIVEABLE_ABILITIES,
)
from duel_engine.data.items import UNREMOVABLE_ITEMS
from duel_engine.enums import Ability, DamageClass, ElementType, NonVolatileStatus, StatKind
from duel_engine.schema.move import BattleMove
from duel_engine.schema.timers import ExpiringEffect, ExpiringItem, LockedMove, MetronomeCounter

if TYPE_CHECKING:
    from duel_engine.schema.battle_context import BattleContext


class HeldItem(BaseModel):
    """Held item slot. Consumed items move to last_used so Recycle / Harvest style effects can restore them."""

    item: Optional[str] = None  # catalogue identifier, e.g. "sitrus-berry"
    last_used: Optional[str] = None
    ever_had_item: bool = False

    @property
    def name(self) -> Optional[str]:
        return self.item

    def has_item(self) -> bool:
        return self.item is not None

    def can_remove(self) -> bool:
        return self.item is None or self.item not in UNREMOVABLE_ITEMS

    def is_berry_name(self) -> bool:
        return self.item is not None and self.item.endswith("-berry")


class Combatant(BaseModel):
    """One Pokemon as it exists inside a battle.

    Stats are final raw stats (level, IVs, EVs and nature already applied); stages and abilities
    are layered on top by duel_engine.stats. Everything that points at another combatant or at
    a move stores an id (combatant uid, move id) rather than a reference.
    """

    # Identity
    uid: int = Field(ge=0)  # unique within a battle
    side: int = Field(ge=0, le=1)  # owning side index
    species: str  # form identifier, e.g. "Greninja-ash", "Castform-snowy"
    starting_species: str = ""
    nickname: Optional[str] = None
    name: str = ""  # display name used in narration
    level: int = Field(ge=1, le=100)
    gender: Optional[str] = None
    happiness: int = Field(default=255, ge=0, le=255)
    weight_base: int = Field(default=100, ge=1)  # hectograms
    disliked_flavor: Optional[str] = None
    can_still_evolve: bool = False

    # Illusion disguise (species + display name the combatant currently presents)
    illusion_species: Optional[str] = None
    illusion_name: Optional[str] = None

    # Stats
    hp: int = Field(ge=0)
    starting_hp: int = Field(ge=1)
    attack: int = Field(ge=1)
    defense: int = Field(ge=1)
    sp_atk: int = Field(ge=1)
    sp_def: int = Field(ge=1)
    speed: int = Field(ge=1)
    ivs: list[int] = Field(default_factory=lambda: [31] * 6, min_length=6, max_length=6)  # hp, atk, def, spa, spd, spe
    form_stats: dict[str, list[int]] = Field(default_factory=dict)  # form -> [atk, def, spa, spd, spe]
    attack_split: Optional[int] = None
    defense_split: Optional[int] = None
    sp_atk_split: Optional[int] = None
    sp_def_split: Optional[int] = None
    autotomize: int = 0

    # Stat stages
    attack_stage: int = Field(default=0, ge=-6, le=6)
    defense_stage: int = Field(default=0, ge=-6, le=6)
    sp_atk_stage: int = Field(default=0, ge=-6, le=6)
    sp_def_stage: int = Field(default=0, ge=-6, le=6)
    speed_stage: int = Field(default=0, ge=-6, le=6)
    accuracy_stage: int = Field(default=0, ge=-6, le=6)
    evasion_stage: int = Field(default=0, ge=-6, le=6)

    # Moves, ability, types
    moves: list[BattleMove] = Field(default_factory=list, max_length=4)
    starting_moves: list[BattleMove] = Field(default_factory=list, max_length=4)
    ability_id: Ability = Ability.NONE
    starting_ability: Ability = Ability.NONE
    types: list[ElementType] = Field(default_factory=list)
    starting_types: list[ElementType] = Field(default_factory=list)

    # Held item
    held: HeldItem = Field(default_factory=HeldItem)
    last_berry: Optional[str] = None
    ate_berry: bool = False

    # Non-volatile status
    status: NonVolatileStatus = NonVolatileStatus.NONE
    sleep_timer: ExpiringEffect = Field(default_factory=ExpiringEffect)
    badly_poisoned_turn: int = 0

    # Turn bookkeeping
    active_turns: int = 0
    has_moved: bool = False
    swapped_in: bool = False
    ever_sent_out: bool = False
    switched: bool = False
    can_move: bool = True
    last_move: Optional[BattleMove] = None
    last_move_damage: Optional[tuple[int, int]] = None  # (damage, DamageClass)
    last_move_failed: bool = False
    locked_move: Optional[LockedMove] = None
    choice_move: Optional[int] = None  # move id
    num_hits: int = 0
    dmg_this_turn: bool = False
    stat_increased: bool = False
    stat_decreased: bool = False

    # Volatile conditions
    confusion: ExpiringEffect = Field(default_factory=ExpiringEffect)
    infatuated: Optional[int] = None  # uid of the combatant it is infatuated with
    flinched: bool = False
    minimized: bool = False
    leech_seed: bool = False
    stockpile: int = 0
    disable: ExpiringItem = Field(default_factory=ExpiringItem)  # item: disabled move id
    taunt: ExpiringEffect = Field(default_factory=ExpiringEffect)
    encore: ExpiringItem = Field(default_factory=ExpiringItem)  # item: encored move id
    torment: bool = False
    imprison: bool = False
    heal_block: ExpiringEffect = Field(default_factory=ExpiringEffect)
    bide: Optional[int] = None
    focus_energy: bool = False
    perish_song: ExpiringEffect = Field(default_factory=ExpiringEffect)
    nightmare: bool = False
    defense_curl: bool = False
    fury_cutter: int = 0
    bind: ExpiringEffect = Field(default_factory=ExpiringEffect)
    substitute: int = Field(default=0, ge=0)
    silenced: ExpiringEffect = Field(default_factory=ExpiringEffect)
    rage: bool = False
    mind_reader: ExpiringItem = Field(default_factory=ExpiringItem)  # item: uid of the locked-on target
    destiny_bond: bool = False
    destiny_bond_cooldown: ExpiringEffect = Field(default_factory=ExpiringEffect)
    trapping: bool = False
    ingrain: bool = False
    aqua_ring: bool = False
    magnet_rise: ExpiringEffect = Field(default_factory=ExpiringEffect)
    dive: bool = False
    dig: bool = False
    fly: bool = False
    shadow_force: bool = False
    lucky_chant: ExpiringEffect = Field(default_factory=ExpiringEffect)
    grounded_by_move: bool = False
    charge: ExpiringEffect = Field(default_factory=ExpiringEffect)
    uproar: ExpiringEffect = Field(default_factory=ExpiringEffect)
    magic_coat: bool = False
    power_trick: bool = False
    power_shift: bool = False
    yawn: ExpiringEffect = Field(default_factory=ExpiringEffect)
    ion_deluge: bool = False
    electrify: bool = False
    laser_focus: ExpiringEffect = Field(default_factory=ExpiringEffect)
    powdered: bool = False
    snatching: bool = False
    telekinesis: ExpiringEffect = Field(default_factory=ExpiringEffect)
    embargo: ExpiringEffect = Field(default_factory=ExpiringEffect)
    echoed_voice_power: int = 40
    echoed_voice_used: bool = False
    curse: bool = False
    fairy_lock: ExpiringEffect = Field(default_factory=ExpiringEffect)
    grudge: bool = False
    foresight: bool = False
    miracle_eye: bool = False
    beak_blast: bool = False
    no_retreat: bool = False
    corrosive_gas: bool = False
    roost: bool = False
    octolock: bool = False
    tar_shot: bool = False
    syrup_bomb: ExpiringEffect = Field(default_factory=ExpiringEffect)
    lansat_berry_ate: bool = False
    micle_berry_ate: bool = False
    flash_fire: bool = False
    truant_turn: int = 0
    ice_repaired: bool = False
    cud_chew: ExpiringEffect = Field(default_factory=ExpiringEffect)
    booster_energy: bool = False
    supersweet_syrup: bool = False
    metronome: MetronomeCounter = Field(default_factory=MetronomeCounter)

    # Protection, reset every turn
    protection_used: bool = False
    protection_chance: int = 1
    protect: bool = False
    endure: bool = False
    wide_guard: bool = False
    crafty_shield: bool = False
    king_shield: bool = False
    spiky_shield: bool = False
    mat_block: bool = False
    baneful_bunker: bool = False
    quick_guard: bool = False
    obstruct: bool = False
    silk_trap: bool = False
    burning_bulwark: bool = False

    def model_post_init(self, __context) -> None:
        if not self.starting_species:
            self.starting_species = self.species
        if not self.name:
            self.name = self.display_name(self.species)
        if not self.starting_moves:
            self.starting_moves = [m.model_copy(deep=True) for m in self.moves]
        if self.starting_ability == Ability.NONE:
            self.starting_ability = self.ability_id
        if not self.starting_types:
            self.starting_types = list(self.types)
        if self.species not in self.form_stats:
            self.form_stats[self.species] = [self.attack, self.defense, self.sp_atk, self.sp_def, self.speed]
        self.held.ever_had_item = self.held.ever_had_item or self.held.has_item()

    def display_name(self, species: str) -> str:
        pretty = species.replace("-", " ")
        if self.nickname:
            return f"{self.nickname} ({pretty})"
        return pretty

    def ability(self, attacker: Optional["Combatant"] = None, move: Optional[BattleMove] = None) -> Ability:
        """Effective ability, taking ability-ignoring attackers and moves into account.

        Ignoring only happens while a move is being used against this combatant, so both
        attacker and move must be given for anything but the raw ability to come back.
        """
        if move is None or attacker is None or attacker.uid == self.uid:
            return self.ability_id
        if self.ability_id not in IGNORABLE_ABILITIES:
            return self.ability_id
        # Sunsteel Strike / Moongeist Beam style moves
        if move.effect in (411, 460):
            return Ability.NONE
        if attacker.ability_id in MOLD_BREAKERS:
            return Ability.NONE
        if attacker.ability_id == Ability.MYCELIUM_MIGHT and move.damage_class == DamageClass.STATUS:
            return Ability.NONE
        return self.ability_id

    def ability_changeable(self) -> bool:
        return self.ability_id not in UNCHANGEABLE_ABILITIES

    def ability_giveable(self) -> bool:
        return self.ability_id not in UNGIVEABLE_ABILITIES

    def weight(self, attacker: Optional["Combatant"] = None, move: Optional[BattleMove] = None) -> int:
        current = self.ability(attacker, move)
        weight = self.weight_base
        if current == Ability.HEAVY_METAL:
            weight *= 2
        elif current == Ability.LIGHT_METAL:
            weight = max(1, weight // 2)
        weight -= self.autotomize * 1000
        return max(1, weight)

    def get_stage(self, stat: StatKind) -> int:
        return getattr(self, stat.field)

    def set_stage(self, stat: StatKind, value: int) -> None:
        setattr(self, stat.field, max(-6, min(6, value)))

    def is_fainted(self) -> bool:
        return self.hp == 0

    def has_status(self) -> bool:
        return self.status != NonVolatileStatus.NONE

    def is_asleep(self) -> bool:
        return self.ability_id == Ability.COMATOSE or self.status == NonVolatileStatus.SLEEP

    def is_poisoned(self) -> bool:
        return self.status in (NonVolatileStatus.POISON, NonVolatileStatus.BADLY_POISONED)

    # =========================================================================
    # FIELD-DEPENDENT QUERIES
    # =========================================================================
    def item(self, battle: "BattleContext") -> Optional[str]:
        """The held item as it currently works in battle, or None when it is suppressed."""
        if self.held.item is None:
            return None
        if not self.held.can_remove():
            return self.held.item
        if self.embargo.active() or battle.magic_room.active():
            return None
        if self.ability() == Ability.KLUTZ or self.corrosive_gas:
            return None
        return self.held.item

    def is_berry(self, battle: "BattleContext") -> bool:
        item = self.item(battle)
        return item is not None and item.endswith("-berry")

    def grounded(
        self,
        battle: "BattleContext",
        attacker: Optional["Combatant"] = None,
        move: Optional[BattleMove] = None,
    ) -> bool:
        if battle.gravity.active() or self.item(battle) == "iron-ball" or self.grounded_by_move:
            return True
        if ElementType.FLYING in self.types and not self.roost:
            return False
        if self.ability(attacker, move) == Ability.LEVITATE or self.item(battle) == "air-balloon":
            return False
        return not (self.magnet_rise.active() or self.telekinesis.active())

    # =========================================================================
    # HELD ITEM TRANSFERS
    # =========================================================================
    def _require_removable(self) -> None:
        if not self.held.can_remove():
            raise ValueError(f"{self.held.item} cannot be removed.")

    def use_item(self) -> None:
        """Consume the held item, remembering it for recycle-style recovery."""
        self._require_removable()
        self.held.last_used = self.held.item
        self.choice_move = None
        self.held.item = None

    def remove_item(self) -> None:
        self._require_removable()
        self.held.item = None

    def transfer_item(self, other: "Combatant") -> None:
        """Give the held item to other (which must be holding nothing removable)."""
        self._require_removable()
        other._require_removable()
        other.held.item = self.held.item
        other.held.ever_had_item = other.held.ever_had_item or other.held.has_item()
        self.held.item = None

    def swap_items(self, other: "Combatant") -> None:
        self._require_removable()
        other._require_removable()
        self.held.item, other.held.item = other.held.item, self.held.item
        self.choice_move = None
        other.choice_move = None
        self.held.ever_had_item = self.held.ever_had_item or self.held.has_item()
        other.held.ever_had_item = other.held.ever_had_item or other.held.has_item()

    def recover_item(self, source: "Combatant") -> None:
        """Take back source's last consumed item (recycle, pickup, cud chew)."""
        self.held.item = source.held.last_used
        source.held.last_used = None
        self.held.ever_had_item = self.held.ever_had_item or self.held.has_item()

    def moveset_entry(self, move_id: int) -> Optional[BattleMove]:
        """The combatant's own copy of a move (the one whose PP is tracked), if it knows it."""
        for move in self.moves:
            if move.id == move_id:
                return move
        return None

    def form(self, species: str) -> bool:
        """Change into another form of the same species. Returns False when the form is unknown."""
        stats = self.form_stats.get(species)
        if stats is None:
            return False
        self.species = species
        self.name = self.display_name(species)
        self.attack, self.defense, self.sp_atk, self.sp_def, self.speed = stats
        self.attack_split = None
        self.defense_split = None
        self.sp_atk_split = None
        self.sp_def_split = None
        self.autotomize = 0
        return True


# Fields restored to their defaults when a combatant leaves the field
VOLATILE_FIELDS = (
    "minimized", "has_moved", "choice_move", "last_move", "swapped_in", "active_turns",
    "metronome", "leech_seed", "stockpile", "flinched", "confusion", "last_move_damage",
    "locked_move", "bide", "torment", "imprison", "disable", "taunt", "encore", "heal_block",
    "focus_energy", "perish_song", "nightmare", "defense_curl", "fury_cutter", "bind", "substitute",
    "silenced", "last_move_failed", "rage", "mind_reader", "destiny_bond", "destiny_bond_cooldown",
    "trapping", "ingrain", "infatuated", "aqua_ring", "magnet_rise", "dive", "dig", "fly",
    "shadow_force", "lucky_chant", "grounded_by_move", "charge", "uproar", "magic_coat",
    "power_trick", "power_shift", "yawn", "ion_deluge", "electrify", "protection_used",
    "protection_chance", "protect", "endure", "wide_guard", "crafty_shield", "king_shield",
    "spiky_shield", "mat_block", "baneful_bunker", "quick_guard", "obstruct", "silk_trap",
    "burning_bulwark", "laser_focus", "powdered", "snatching", "telekinesis", "embargo",
    "echoed_voice_power", "echoed_voice_used", "curse", "fairy_lock", "grudge", "foresight",
    "miracle_eye", "beak_blast", "no_retreat", "dmg_this_turn", "autotomize", "lansat_berry_ate",
    "micle_berry_ate", "flash_fire", "truant_turn", "cud_chew", "booster_energy", "stat_increased",
    "stat_decreased", "roost", "octolock", "attack_split", "sp_atk_split", "defense_split",
    "sp_def_split", "tar_shot", "syrup_bomb", "badly_poisoned_turn",
    "attack_stage", "defense_stage", "sp_atk_stage", "sp_def_stage", "speed_stage",
    "accuracy_stage", "evasion_stage",
)
