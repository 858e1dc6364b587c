"""
Behaviour Registry for the combat-resolution engine.

Provides decorator-based registration for all per-entity behaviour:
- Power/relic hooks consulted by the damage and block pipelines
- Card effects and card playability checks
- Monster moves and monster next-move distributions

Usage:
    from sts_resolver.registry import power_trigger, card_effect, monster_move

    @power_trigger("atDamageGive", power="Strength")
    def strength_damage_give(ctx: PowerContext) -> float:
        return ctx.value + ctx.amount

    @card_effect("Strike_R")
    def strike(ctx: CardContext) -> None:
        ctx.deal_damage(9 if ctx.upgraded else 6)

    @monster_move("Cultist", move=DARK_STRIKE)
    def dark_strike(ctx: MonsterContext) -> None:
        ctx.attack(6)

Any id without a registered handler falls back to a safe default:
identity for power hooks, always playable and no effect for cards, an
attack for the cached innate damage (if known) for monster moves, and
repeating the current intent for next-move selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, TYPE_CHECKING
import functools
import logging

from ..actions import (
    ApplyPower, DamageAction, DamageAllEnemies, DrawCard, GainBlock, GainEnergy,
)
from ..calc.distribution import Distribution
from ..content.cards import SingleCard
from ..content.powers import DamageType
from ..state.combat import CreatureIndex, PLAYER

if TYPE_CHECKING:
    from ..runner import Runner
    from ..state.combat import CombatState, Monster

logger = logging.getLogger(__name__)


# =============================================================================
# Context Classes - Passed to handlers
# =============================================================================

@dataclass
class PowerContext:
    """Context for power/relic modifier hooks."""
    state: CombatState
    power_id: str
    amount: int  # Summed over every entry with this id
    owner: CreatureIndex
    value: float  # Value being folded (damage or block)
    damage_type: DamageType = DamageType.NORMAL


@dataclass
class CardContext:
    """Context for card effect handlers. Effects are queued through the runner."""
    runner: Runner
    card: SingleCard
    target: int = 0
    x: int = 0  # Energy spent on an X-cost card

    @property
    def upgraded(self) -> bool:
        return self.card.upgrades > 0

    @property
    def target_index(self) -> CreatureIndex:
        return CreatureIndex.of_monster(self.target)

    def deal_damage(self, base: int) -> None:
        self.runner.action_now(DamageAction(source=PLAYER, target=self.target_index, base=base))

    def deal_damage_to_all(self, base: int) -> None:
        self.runner.action_now(DamageAllEnemies(source=PLAYER, base=base))

    def gain_block(self, base: int) -> None:
        self.runner.action_now(GainBlock(target=PLAYER, amount=base, from_card=True))

    def apply_power_to_target(self, power_id: str, amount: int) -> None:
        self.runner.action_now(
            ApplyPower(source=PLAYER, target=self.target_index, power_id=power_id, amount=amount)
        )

    def gain_energy(self, amount: int) -> None:
        self.runner.action_now(GainEnergy(amount))

    def draw(self, count: int) -> None:
        for _ in range(count):
            self.runner.action_now(DrawCard())


@dataclass
class MonsterContext:
    """Context for monster move handlers."""
    runner: Runner
    monster_index: int

    @property
    def state(self) -> CombatState:
        return self.runner.state

    @property
    def monster(self) -> Monster:
        return self.state.monsters[self.monster_index]

    @property
    def index(self) -> CreatureIndex:
        return CreatureIndex.of_monster(self.monster_index)

    @property
    def ascension(self) -> int:
        return self.monster.ascension

    def attack(self, base: int) -> None:
        self.runner.action_now(DamageAction(source=self.index, target=PLAYER, base=base))

    def gain_block(self, amount: int) -> None:
        self.runner.action_now(GainBlock(target=self.index, amount=amount))

    def apply_power_to_self(self, power_id: str, amount: int) -> None:
        self.runner.action_now(
            ApplyPower(source=self.index, target=self.index, power_id=power_id, amount=amount)
        )

    def apply_power_to_player(self, power_id: str, amount: int) -> None:
        self.runner.action_now(
            ApplyPower(source=self.index, target=PLAYER, power_id=power_id, amount=amount)
        )


# =============================================================================
# Registry Classes
# =============================================================================

class TriggerRegistry:
    """Base registry for per-entity handlers."""

    def __init__(self, name: str):
        self.name = name
        # handlers[hook][entity_id] = handler_func
        self._handlers: Dict[str, Dict[Hashable, Callable]] = {}

    def register(self, hook: str, entity_id: Hashable, handler: Callable):
        """Register a handler for a hook."""
        if hook not in self._handlers:
            self._handlers[hook] = {}
        self._handlers[hook][entity_id] = handler

    def get_handler(self, hook: str, entity_id: Hashable) -> Optional[Callable]:
        """Get a specific handler."""
        if hook in self._handlers and entity_id in self._handlers[hook]:
            return self._handlers[hook][entity_id]
        return None

    def has_handler(self, hook: str, entity_id: Hashable) -> bool:
        """Check if a handler exists."""
        return hook in self._handlers and entity_id in self._handlers[hook]

    def list_hooks(self) -> List[str]:
        """List all registered hooks."""
        return list(self._handlers.keys())

    def list_entities(self, hook: str) -> List[Hashable]:
        """List all entities registered for a hook."""
        return list(self._handlers.get(hook, {}).keys())


# Global registries
POWER_REGISTRY = TriggerRegistry("powers")
CARD_REGISTRY = TriggerRegistry("cards")
MONSTER_REGISTRY = TriggerRegistry("monsters")


# =============================================================================
# Decorators
# =============================================================================

def power_trigger(hook: str, power: str):
    """
    Decorator to register a power/relic modifier hook.

    Args:
        hook: "atDamageGive", "atDamageReceive", "atDamageFinalReceive"
              or "modifyBlock"
        power: Power id this handler is for

    The handler receives a PowerContext and returns the new value.
    """
    def decorator(func: Callable[[PowerContext], float]) -> Callable:
        POWER_REGISTRY.register(hook, power, func)

        @functools.wraps(func)
        def wrapper(ctx: PowerContext) -> float:
            return func(ctx)

        return wrapper
    return decorator


def card_effect(card: str):
    """Decorator to register what a card does when played."""
    def decorator(func: Callable[[CardContext], None]) -> Callable:
        CARD_REGISTRY.register("use", card, func)
        return func
    return decorator


def card_playable(card: str):
    """Decorator to register a card's own playability check."""
    def decorator(func: Callable[[CombatState, SingleCard], bool]) -> Callable:
        CARD_REGISTRY.register("canUse", card, func)
        return func
    return decorator


def monster_move(monster: str, move: int):
    """Decorator to register the effect of one monster move."""
    def decorator(func: Callable[[MonsterContext], None]) -> Callable:
        MONSTER_REGISTRY.register("takeTurn", (monster, move), func)
        return func
    return decorator


def monster_next_move(monster: str):
    """
    Decorator to register a monster's next-move AI.

    The handler receives (state, monster_index) and returns a Distribution
    over move ids.
    """
    def decorator(func: Callable[[CombatState, int], Distribution]) -> Callable:
        MONSTER_REGISTRY.register("nextMove", monster, func)
        return func
    return decorator


# =============================================================================
# Execution Functions
# =============================================================================

def fold_power_hook(hook: str, state: CombatState, owner: CreatureIndex,
                    value: float, damage_type: DamageType = DamageType.NORMAL) -> float:
    """
    Fold a modifier hook over the owner's powers in list order.

    Each distinct power id is visited once, at its first position, with
    the summed amount of all its entries. Powers without a handler leave
    the value unchanged.
    """
    creature = state.get_creature(owner)
    for power_id in creature.distinct_power_ids():
        handler = POWER_REGISTRY.get_handler(hook, power_id)
        if handler is None:
            continue
        ctx = PowerContext(
            state=state,
            power_id=power_id,
            amount=creature.power_amount(power_id),
            owner=owner,
            value=value,
            damage_type=damage_type,
        )
        value = handler(ctx)
    return value


def card_can_be_played(state: CombatState, card: SingleCard) -> bool:
    """The card's own playability hook; cards without one are playable."""
    handler = CARD_REGISTRY.get_handler("canUse", card.id)
    if handler is None:
        return True
    return handler(state, card)


def execute_card_effect(runner: Runner, card: SingleCard, target: int, x: int = 0) -> None:
    """Queue a played card's effects."""
    handler = CARD_REGISTRY.get_handler("use", card.id)
    if handler is None:
        logger.debug("No effect registered for %s", card.id)
        return
    handler(CardContext(runner=runner, card=card, target=target, x=x))


def execute_monster_move(runner: Runner, monster_index: int, move: int) -> None:
    """Queue the effects of a monster's move."""
    monster = runner.state.monsters[monster_index]
    handler = MONSTER_REGISTRY.get_handler("takeTurn", (monster.monster_id, move))
    ctx = MonsterContext(runner=runner, monster_index=monster_index)
    if handler is not None:
        handler(ctx)
    elif monster.innate_damage_amount is not None:
        # Unknown move: the observed base damage is all we know about it
        ctx.attack(monster.innate_damage_amount)
    else:
        logger.debug("No behaviour for %s move %s", monster.monster_id, move)


def next_move_distribution(state: CombatState, monster_index: int) -> Distribution:
    """Distribution over a monster's next move id."""
    monster = state.monsters[monster_index]
    handler = MONSTER_REGISTRY.get_handler("nextMove", monster.monster_id)
    if handler is not None:
        return handler(state, monster_index)
    current = monster.intent()
    return Distribution.certain(current if current is not None else 0)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Context classes
    "PowerContext",
    "CardContext",
    "MonsterContext",

    # Registry
    "TriggerRegistry",
    "POWER_REGISTRY",
    "CARD_REGISTRY",
    "MONSTER_REGISTRY",

    # Decorators
    "power_trigger",
    "card_effect",
    "card_playable",
    "monster_move",
    "monster_next_move",

    # Execution
    "fold_power_hook",
    "card_can_be_played",
    "execute_card_effect",
    "execute_monster_move",
    "next_move_distribution",
]

# Import handlers to register them (decorators populate the registries)
from . import powers as _powers  # noqa: F401, E402
from . import cards as _cards  # noqa: F401, E402
from . import monsters as _monsters  # noqa: F401, E402
