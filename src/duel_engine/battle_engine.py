import logging
from typing import Callable, Optional

from pydantic import BaseModel, Field

from duel_engine.combatant_ops import remove, send_out, switch_poke, valid_swaps
from duel_engine.damage_calculator import DamageCalculator
from duel_engine.end_turn_effects import EndTurnEffectsProcessor
from duel_engine.enums import Ability, DamageClass
from duel_engine.errors import InvalidActionError
from duel_engine.move_classifiers import is_affected_by_heal_block, is_sound_based, targets_opponent
from duel_engine.move_pipeline import run_before_turn, use_move
from duel_engine.schema.battle_context import Action, BattleContext, EngineConfig, MoveAction, Side, SwitchAction
from duel_engine.schema.combatant import Combatant
from duel_engine.schema.move import BattleMove, struggle
from duel_engine.stats import get_speed, raw_speed

logger = logging.getLogger(__name__)

# (side needing a combatant, battle, mid_turn) -> party slot, or None to give up the battle
SwapSelector = Callable[[Side, BattleContext, bool], Optional[int]]

_CHOICE_ITEMS = ("choice-scarf", "choice-band", "choice-specs")
LAST_RESORT = 247
GIGATON_HAMMER = 492
STUFF_CHEEKS = 339
BELCH = 453


def first_valid_swap(side: Side, battle: BattleContext, mid_turn: bool) -> Optional[int]:
    """Default replacement policy: the first party slot that can come in."""
    swaps = valid_swaps(side, battle, check_trap=False)
    return swaps[0] if swaps else None


class ValidMoves(BaseModel):
    """What a side may choose this turn.

    Exactly one of forced / indexes / struggle is meaningful: a locked-in move, the moveset
    slots that can be picked, or struggle when nothing can.
    """

    forced: Optional[BattleMove] = None
    indexes: list[int] = Field(default_factory=list)
    struggle: bool = False


class DuelEngine:
    """
    Turn driver for a single battle

    Coordinates between:
    - Caller input (one Action per side per turn)
    - Battle state (BattleContext)
    - The move pipeline (use_move) and its effect handlers
    - End-of-turn processing (EndTurnEffectsProcessor)

    Turn flow:
    1. Order both actions (switches, priority, quick claw, speed, trick room)
    2. Before-turn hooks for both moves (pursuit, focus punch, beak blast)
    3. Each action in order, with mid-turn replacements after pivots and faints
    4. End-of-turn effects
    5. Replacement of fainted combatants
    A winner is checked after every step that can knock out a combatant.
    """

    def __init__(self, battle: BattleContext, swap_selector: Optional[SwapSelector] = None):
        self.battle = battle
        self.swap_selector = swap_selector or first_valid_swap
        self.winner: Optional[int] = None

    @classmethod
    def create(
        cls,
        party1: list[Combatant],
        party2: list[Combatant],
        names: tuple[str, str] = ("Player 1", "Player 2"),
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None,
        swap_selector: Optional[SwapSelector] = None,
    ) -> "DuelEngine":
        return cls(BattleContext.create(party1, party2, names, seed, config), swap_selector)

    @property
    def log(self):
        return self.battle.log

    def is_battle_over(self) -> bool:
        return self.winner is not None

    @property
    def started(self) -> bool:
        # Derived from the battle so a restored BattleContext resumes without a second send-out
        return any(mon.ever_sent_out for side in self.battle.sides for mon in side.party)

    # =================================================================
    # BATTLE START
    # =================================================================
    def start(self) -> None:
        """Send both leads out, faster one first."""
        if self.started:
            return
        side1, side2 = self.battle.sides
        order = (side1, side2) if raw_speed(side1.active) > raw_speed(side2.active) else (side2, side1)
        for side in order:
            if side.active is not None:
                send_out(side.active, self.battle)
        logger.debug("battle started: %s vs %s", side1.name, side2.name)
        self._replace_empty_slots()

    # =================================================================
    # ACTION SELECTION
    # =================================================================
    def valid_moves(self, side_index: int) -> ValidMoves:
        """
        Moves the side's active combatant may pick this turn

        Args:
            side_index: 0 or 1

        Returns:
            ValidMoves with a forced move, the selectable moveset slots, or struggle
        """
        side = self.battle.sides[side_index]
        mon = side.active
        if mon is None:
            raise InvalidActionError(f"{side.name} has no combatant on the field")
        if mon.locked_move is not None:
            return ValidMoves(forced=mon.locked_move.move)
        defender = self.battle.opponent_of(mon)

        indexes = [idx for idx, move in enumerate(mon.moves) if self._selectable(mon, defender, move)]
        if not indexes:
            return ValidMoves(struggle=True)
        return ValidMoves(indexes=indexes)

    def _selectable(self, mon: Combatant, defender: Optional[Combatant], move: BattleMove) -> bool:
        item = mon.held.item
        if move.pp <= 0:
            return False
        if move.damage_class == DamageClass.STATUS and (item == "assault-vest" or mon.taunt.active()):
            return False
        if move.effect == LAST_RESORT and not all(m.used for m in mon.moves if m.effect != LAST_RESORT):
            return False
        if mon.disable.active() and move.id == mon.disable.item:
            return False
        choice_locked = item in _CHOICE_ITEMS or mon.ability() == Ability.GORILLA_TACTICS
        if choice_locked and mon.choice_move is not None and move.id != mon.choice_move:
            return False
        last = mon.last_move
        if mon.torment and last is not None and last.id == move.id:
            return False
        if last is not None and last.effect == GIGATON_HAMMER and last.id == move.id and not mon.last_move_failed:
            return False
        if defender is not None and defender.imprison and any(m.id == move.id for m in defender.moves):
            return False
        if mon.heal_block.active() and is_affected_by_heal_block(move):
            return False
        if mon.silenced.active() and is_sound_based(move):
            return False
        if move.effect == STUFF_CHEEKS and not mon.ate_berry:
            return False
        if move.effect == BELCH and not mon.held.is_berry_name():
            return False
        if mon.encore.active() and move.id != mon.encore.item:
            return False
        return True

    def move_action(self, side_index: int, slot: Optional[int] = None) -> MoveAction:
        """Build the action for using a moveset slot, honouring locked moves and struggle."""
        choices = self.valid_moves(side_index)
        if choices.forced is not None:
            return MoveAction(move=choices.forced)
        if choices.struggle:
            return MoveAction(move=struggle())
        if slot not in choices.indexes:
            raise InvalidActionError(f"move slot {slot} cannot be used right now")
        return MoveAction(move=self.battle.sides[side_index].active.moves[slot])

    def _check_action(self, side: Side, action: Action) -> None:
        if isinstance(action, SwitchAction) and action.index not in valid_swaps(side, self.battle):
            raise InvalidActionError(f"{side.name} cannot switch to party slot {action.index}")

    # =================================================================
    # TURN ORDER
    # =================================================================
    def who_first(self, check_move: bool = True) -> tuple[Side, Side]:
        """
        Decide which side acts first

        Args:
            check_move: Consider the selected actions (switches, priority, quick claw). End of turn
                ordering passes False and compares speed only.

        Returns:
            (first, second) sides
        """
        battle = self.battle
        side1, side2 = battle.sides
        first, second = (side1, side2), (side2, side1)
        mon1, mon2 = side1.active, side2.active
        if mon1 is None or mon2 is None:
            return first

        speed1, speed2 = get_speed(mon1, battle), get_speed(mon2, battle)
        if check_move:
            action1, action2 = side1.selected_action, side2.selected_action
            switching1, switching2 = isinstance(action1, SwitchAction), isinstance(action2, SwitchAction)
            if switching1 and switching2:
                return first if raw_speed(mon1) > raw_speed(mon2) else second
            if switching1:
                return first
            if switching2:
                return second

            calc = DamageCalculator(battle)
            prio1 = calc.get_priority(action1.move, mon1, mon2)
            prio2 = calc.get_priority(action2.move, mon2, mon1)
            if prio1 != prio2:
                return first if prio1 > prio2 else second

            quick1, quick2 = self._quick(mon1, action1.move), self._quick(mon2, action2.move)
            if quick1 != quick2:
                return first if quick1 else second

            slow1, slow2 = self._slow(mon1, action1.move), self._slow(mon2, action2.move)
            if slow1 and slow2:
                if speed1 == speed2:
                    return first if battle.rng.randint(0, 1) == 0 else second
                # Both move last in the bracket, so the slower one goes first
                return second if speed1 > speed2 else first
            if slow1:
                return second
            if slow2:
                return first

        if speed1 == speed2:
            return first if battle.rng.randint(0, 1) == 0 else second
        if battle.trick_room.active():
            return second if speed1 > speed2 else first
        return first if speed1 > speed2 else second

    def _quick(self, mon: Combatant, move: BattleMove) -> bool:
        rng = self.battle.rng
        quick = False
        if mon.ability() == Ability.QUICK_DRAW and move.damage_class != DamageClass.STATUS and rng.randint(1, 100) <= 30:
            quick = True
        if mon.held.item == "quick-claw" and rng.randint(1, 100) <= 20:
            quick = True
        return quick

    @staticmethod
    def _slow(mon: Combatant, move: BattleMove) -> bool:
        if mon.ability() == Ability.STALL:
            return True
        return mon.ability() == Ability.MYCELIUM_MIGHT and move.damage_class == DamageClass.STATUS

    # =================================================================
    # TURN
    # =================================================================
    def run_turn(self, action1: Action, action2: Action) -> Optional[int]:
        """
        Resolve one full turn

        Args:
            action1: Action of side 0
            action2: Action of side 1

        Returns:
            Index of the winning side once the battle is decided, otherwise None
        """
        if self.winner is not None:
            raise InvalidActionError("the battle is already over")
        self.start()
        if self.winner is not None:
            return self.winner

        battle = self.battle
        for side, action in zip(battle.sides, (action1, action2)):
            self._check_action(side, action)
            side.selected_action = action
        logger.debug("turn %s: %s / %s", battle.turn, action1, action2)

        if not self._run_actions():
            self._end_turn()
        if self.winner is None:
            self._replace_empty_slots()
        return self.winner

    def _run_actions(self) -> bool:
        """Both sides act. Returns True once a winner is decided."""
        t1, t2 = self.who_first()

        for side, other in ((t1, t2), (t2, t1)):
            action = side.selected_action
            if side.active is not None and other.active is not None and isinstance(action, MoveAction):
                run_before_turn(side.active, other.active, self.battle, action.move)
            if self._decide(side, other):
                return True

        self._act(t1, t2)
        if self._decide(t1, t2):
            return True
        # Combatants that fainted are not replaced until the turn ends, ones that retreated are
        if t1.mid_turn_remove and self._run_swap(t1, t2, mid_turn=True):
            return True
        if t1.active is None and t2.active is not None and self._acts_without_target(t2):
            if self._run_swap(t1, t2, mid_turn=True):
                return True

        self._act(t2, t1)
        if self._decide(t2, t1):
            return True
        if t2.mid_turn_remove and self._run_swap(t2, t1, mid_turn=True):
            return True
        return self._decide(t2, t1)

    def _act(self, side: Side, other: Side) -> None:
        mon, target = side.active, other.active
        if mon is None or target is None:
            return
        action = side.selected_action
        if isinstance(action, SwitchAction):
            remove(mon, self.battle)
            switch_poke(side, action.index, mid_turn=True)
            send_out(side.active, self.battle)
            if side.active is not None:
                side.active.has_moved = True
        else:
            use_move(mon, target, self.battle, action.move)

    @staticmethod
    def _acts_without_target(side: Side) -> bool:
        action = side.selected_action
        return isinstance(action, SwitchAction) or not targets_opponent(action.move)

    def _end_turn(self) -> None:
        processor = EndTurnEffectsProcessor(self.battle)
        processor.field_start()
        t1, t2 = self.who_first(check_move=False)
        for side, other in ((t1, t2), (t2, t1)):
            processor.side(side)
            if side.active is not None:
                processor.combatant(side.active, other.active)
            if self._decide(side, other):
                return
        processor.field_end()

    # =================================================================
    # SWAPS AND WINNER
    # =================================================================
    def _run_swap(self, side: Side, other: Side, mid_turn: bool = False) -> bool:
        """Ask the selector for a replacement. Returns True when the side could not provide one."""
        slot = self.swap_selector(side, self.battle, mid_turn)
        if slot is None:
            self.log.add("no_replacement", side=side.name)
            self._declare(other)
            return True
        switch_poke(side, slot, mid_turn=mid_turn)
        if mid_turn:
            send_out(side.active, self.battle)
            if side.active is not None:
                side.active.has_moved = True
        return False

    def _replace_empty_slots(self) -> None:
        """Fill empty active slots, sending the faster replacement out first."""
        battle = self.battle
        side1, side2 = battle.sides
        while self.winner is None and (side1.active is None or side2.active is None):
            swapped = []
            for side, other in ((side1, side2), (side2, side1)):
                if side.active is None:
                    if self._decide(side, other) or self._run_swap(side, other):
                        return
                    swapped.append((side, other))
            if len(swapped) == 2 and raw_speed(side2.active) >= raw_speed(side1.active):
                swapped.reverse()
            for side, other in swapped:
                if side.active is not None:
                    send_out(side.active, battle)
                if self._decide(side, other):
                    return

    def _decide(self, side: Side, other: Side) -> bool:
        """Check side first, then other. Returns True once either has nothing left."""
        if not side.has_alive_pokemon():
            self._declare(other)
            return True
        if not other.has_alive_pokemon():
            self._declare(side)
            return True
        return False

    def _declare(self, side: Side) -> None:
        self.winner = 0 if side is self.battle.sides[0] else 1
        self.log.add("wins", side=side.name)
        logger.debug("%s won on turn %s", side.name, self.battle.turn)
