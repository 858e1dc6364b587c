"""
Actions - every effect the engine resolves.

An action reports its determinism for the current state and executes
through the matching path:

- Deterministic -> execute(runner)
- Random(dist)  -> execute_random(runner, value) with a sampled or chosen value
- Choice        -> never executed; the caller substitutes one of
                   resolutions(state) through Runner.resolve_pending

Executing through the wrong path is a bug in the action itself and raises
ActionContractError.

Actions are frozen dataclasses. The vocabulary is closed: ActionType is
the union of every variant and is what the runner's queues hold. Effects
spawned while executing go through runner.action_now so they resolve in
the order they were generated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Union

from .calc.damage import DamageInfo, apply_block_modifiers
from .calc.distribution import Choice, Deterministic, Determinism, Distribution, Random
from .content.cards import CardType, SingleCard, X_COST
from .content.powers import DamageType, is_debuff, is_turn_based, uses_just_applied
from .state.combat import PLAYER, CombatState, CreatureIndex, Power

if TYPE_CHECKING:
    from .runner import Runner

__all__ = [
    "ActionContractError",
    "Action",
    "PlayCard",
    "EndTurn",
    "FinishPlayingCard",
    "DamageAction",
    "DamageAllEnemies",
    "DamageRandomEnemy",
    "GainBlock",
    "GainEnergy",
    "ApplyPower",
    "DrawCard",
    "DiscardHand",
    "ExhaustCard",
    "ExhaustRandomCard",
    "ExhaustChoice",
    "AddCardToDiscard",
    "MonsterTurn",
    "ChooseNextIntent",
    "EndOfRound",
    "StartPlayerTurn",
    "FixedOutcome",
    "ActionType",
    "ACTION_TYPES",
    "HAND_LIMIT",
    "CARDS_PER_TURN",
]


HAND_LIMIT = 10
CARDS_PER_TURN = 5


class ActionContractError(RuntimeError):
    """An action was executed through a path its determinism does not allow."""


class Action:
    """Base for every action. Defaults: deterministic, fail loudly on execution."""

    def determinism(self, state: CombatState) -> Determinism:
        return Deterministic()

    def execute(self, runner: Runner) -> None:
        raise ActionContractError(
            f"{type(self).__name__} didn't define the correct apply method for its determinism"
        )

    def execute_random(self, runner: Runner, random_value: int) -> None:
        raise ActionContractError(
            f"{type(self).__name__} didn't define the correct apply method for its determinism"
        )


def _distinct_card_distribution(cards: List[SingleCard]) -> Distribution:
    """One outcome per distinct card (its first index), weighted by copies."""
    distribution = Distribution()
    for card in cards:
        distribution += Distribution.certain(cards.index(card))
    return distribution


def _apply_damage(state: CombatState, target: CreatureIndex, info: DamageInfo) -> int:
    """Commit computed damage. Returns hitpoints lost."""
    creature = state.get_creature(target)
    amount = info.output
    if info.damage_type != DamageType.HP_LOSS:
        blocked = min(creature.block, amount)
        creature.block -= blocked
        amount -= blocked
    hp_lost = min(creature.hitpoints, amount)
    creature.hitpoints = max(0, creature.hitpoints - amount)
    if not target.is_player and creature.is_dead:
        state.monsters[target.monster].gone = True
    return hp_lost


def _is_gone(state: CombatState, index: CreatureIndex) -> bool:
    return not index.is_player and state.monsters[index.monster].gone


# =============================================================================
# Player choices
# =============================================================================


@dataclass(frozen=True)
class PlayCard(Action):
    """Play a card from hand. target is a monster position (0 if untargeted)."""

    card: SingleCard
    target: int = 0

    def execute(self, runner: Runner) -> None:
        from .registry import execute_card_effect

        state = runner.state
        if self.card not in state.hand:
            raise ValueError(f"{self.card} is not in hand")
        state.hand.remove(self.card)

        x = 0
        if self.card.cost == X_COST:
            x = state.player.energy
            state.player.energy = 0
        elif self.card.cost > 0:
            state.player.energy -= self.card.cost

        state.card_in_play = self.card
        execute_card_effect(runner, self.card, self.target, x)
        runner.action_now(FinishPlayingCard())


@dataclass(frozen=True)
class EndTurn(Action):
    """End the player's turn: discard, monsters act, round ends, next turn starts."""

    def execute(self, runner: Runner) -> None:
        runner.action_now(DiscardHand())
        for monster_index in runner.state.live_monster_indices():
            runner.action_bottom(MonsterTurn(monster_index))
        runner.action_bottom(EndOfRound())
        runner.action_bottom(StartPlayerTurn())


# =============================================================================
# Card flow
# =============================================================================


@dataclass(frozen=True)
class FinishPlayingCard(Action):
    """Move the card in play to its destination pile."""

    def execute(self, runner: Runner) -> None:
        state = runner.state
        card = state.card_in_play
        if card is None:
            return
        state.card_in_play = None
        if card.card_type == CardType.POWER:
            return
        if card.card_info.exhausts:
            state.exhaust_pile.append(card)
        else:
            state.discard_pile.append(card)


@dataclass(frozen=True)
class DrawCard(Action):
    """
    Draw one card.

    Which card comes off the draw pile is random over its distinct cards.
    An empty draw pile reshuffles the discard pile first; a full hand
    draws nothing.
    """

    def determinism(self, state: CombatState) -> Determinism:
        if len(state.hand) >= HAND_LIMIT or not state.draw_pile:
            return Deterministic()
        return Random(_distinct_card_distribution(state.draw_pile))

    def execute(self, runner: Runner) -> None:
        state = runner.state
        if len(state.hand) >= HAND_LIMIT or not state.discard_pile:
            return
        state.draw_pile = state.discard_pile
        state.discard_pile = []
        runner.action_now(DrawCard())

    def execute_random(self, runner: Runner, random_value: int) -> None:
        state = runner.state
        state.hand.append(state.draw_pile.pop(random_value))


@dataclass(frozen=True)
class DiscardHand(Action):
    """End-of-turn discard. Ethereal cards exhaust instead."""

    def execute(self, runner: Runner) -> None:
        state = runner.state
        for card in state.hand:
            if card.card_info.ethereal:
                state.exhaust_pile.append(card)
            else:
                state.discard_pile.append(card)
        state.hand.clear()


@dataclass(frozen=True)
class ExhaustCard(Action):
    """Exhaust a specific card from hand (first value-equal copy)."""

    card: SingleCard

    def execute(self, runner: Runner) -> None:
        state = runner.state
        if self.card in state.hand:
            state.hand.remove(self.card)
            state.exhaust_pile.append(self.card)


@dataclass(frozen=True)
class ExhaustRandomCard(Action):
    """Exhaust a random card from hand."""

    def determinism(self, state: CombatState) -> Determinism:
        if not state.hand:
            return Deterministic()
        return Random(_distinct_card_distribution(state.hand))

    def execute(self, runner: Runner) -> None:
        pass

    def execute_random(self, runner: Runner, random_value: int) -> None:
        state = runner.state
        state.exhaust_pile.append(state.hand.pop(random_value))


@dataclass(frozen=True)
class ExhaustChoice(Action):
    """
    Exhaust a card of the player's choosing.

    With one distinct card in hand there is nothing to choose and it
    resolves on its own.
    """

    def determinism(self, state: CombatState) -> Determinism:
        if len(self.resolutions(state)) > 1:
            return Choice()
        return Deterministic()

    def resolutions(self, state: CombatState) -> List[ExhaustCard]:
        result = []
        for index, card in enumerate(state.hand):
            if card not in state.hand[:index]:
                result.append(ExhaustCard(card))
        return result

    def execute(self, runner: Runner) -> None:
        for resolution in self.resolutions(runner.state):
            runner.action_now(resolution)


@dataclass(frozen=True)
class AddCardToDiscard(Action):
    card: SingleCard

    def execute(self, runner: Runner) -> None:
        runner.state.discard_pile.append(self.card)


# =============================================================================
# Damage, block, powers
# =============================================================================


@dataclass(frozen=True)
class DamageAction(Action):
    """Deal damage through the power-hook pipeline."""

    source: CreatureIndex
    target: CreatureIndex
    base: int
    damage_type: DamageType = DamageType.NORMAL

    def execute(self, runner: Runner) -> None:
        state = runner.state
        if _is_gone(state, self.target):
            return
        info = DamageInfo(owner=self.source, base=self.base, damage_type=self.damage_type)
        info.apply_powers(state, self.source, self.target)
        _apply_damage(state, self.target, info)


@dataclass(frozen=True)
class DamageAllEnemies(Action):
    source: CreatureIndex
    base: int
    damage_type: DamageType = DamageType.NORMAL

    def execute(self, runner: Runner) -> None:
        for monster_index in runner.state.live_monster_indices():
            runner.action_now(DamageAction(
                source=self.source,
                target=CreatureIndex.of_monster(monster_index),
                base=self.base,
                damage_type=self.damage_type,
            ))


@dataclass(frozen=True)
class DamageRandomEnemy(Action):
    """Hit one live monster chosen uniformly at random."""

    source: CreatureIndex
    base: int
    damage_type: DamageType = DamageType.NORMAL

    def determinism(self, state: CombatState) -> Determinism:
        live = state.live_monster_indices()
        if not live:
            return Deterministic()
        distribution = Distribution()
        for monster_index in live:
            distribution += Distribution.certain(monster_index)
        return Random(distribution)

    def execute(self, runner: Runner) -> None:
        pass

    def execute_random(self, runner: Runner, random_value: int) -> None:
        runner.action_now(DamageAction(
            source=self.source,
            target=CreatureIndex.of_monster(random_value),
            base=self.base,
            damage_type=self.damage_type,
        ))


@dataclass(frozen=True)
class GainBlock(Action):
    """Gain block; card block goes through the owner's modifyBlock hooks."""

    target: CreatureIndex
    amount: int
    from_card: bool = False

    def execute(self, runner: Runner) -> None:
        state = runner.state
        if _is_gone(state, self.target):
            return
        amount = self.amount
        if self.from_card:
            amount = apply_block_modifiers(state, self.target, amount)
        state.get_creature(self.target).block += max(0, amount)


@dataclass(frozen=True)
class GainEnergy(Action):
    amount: int

    def execute(self, runner: Runner) -> None:
        runner.state.player.energy += self.amount


@dataclass(frozen=True)
class ApplyPower(Action):
    """
    Apply stacks of a power.

    Artifact negates a debuff and loses one stack. Stacks a monster applies
    to a power that uses just_applied are kept in their own entry flagged
    just_applied, so the end-of-round tick skips them once.
    """

    source: CreatureIndex
    target: CreatureIndex
    power_id: str
    amount: int

    def execute(self, runner: Runner) -> None:
        state = runner.state
        if _is_gone(state, self.target):
            return
        creature = state.get_creature(self.target)

        if is_debuff(self.power_id, self.amount) and creature.power_amount("Artifact") > 0:
            for power in creature.powers:
                if power.power_id == "Artifact" and power.amount > 0:
                    power.amount -= 1
                    break
            creature.powers = [
                p for p in creature.powers if not (p.power_id == "Artifact" and p.amount <= 0)
            ]
            return

        just_applied = not self.source.is_player and uses_just_applied(self.power_id)
        for power in creature.powers:
            if power.power_id == self.power_id and power.just_applied == just_applied:
                power.amount += self.amount
                if power.amount == 0:
                    creature.powers.remove(power)
                return
        creature.powers.append(
            Power(power_id=self.power_id, amount=self.amount, just_applied=just_applied)
        )


# =============================================================================
# Turn structure
# =============================================================================


@dataclass(frozen=True)
class MonsterTurn(Action):
    """A monster loses its block, performs its intent, then picks its next move."""

    monster_index: int

    def execute(self, runner: Runner) -> None:
        from .registry import execute_monster_move

        monster = runner.state.monsters[self.monster_index]
        if monster.gone:
            return
        monster.creature.block = 0
        move = monster.intent()
        if move is not None:
            execute_monster_move(runner, self.monster_index, move)
        runner.action_now(ChooseNextIntent(self.monster_index))


@dataclass(frozen=True)
class ChooseNextIntent(Action):
    """Roll a monster's next move from its move distribution."""

    monster_index: int

    def determinism(self, state: CombatState) -> Determinism:
        from .registry import next_move_distribution

        if state.monsters[self.monster_index].gone:
            return Deterministic()
        return Random(next_move_distribution(state, self.monster_index))

    def execute(self, runner: Runner) -> None:
        pass

    def execute_random(self, runner: Runner, random_value: int) -> None:
        runner.state.monsters[self.monster_index].push_intent(random_value)


@dataclass(frozen=True)
class EndOfRound(Action):
    """
    After every monster has acted.

    Ritual grants Strength, turn-based powers lose a stack, and every
    just_applied flag is cleared.
    """

    def execute(self, runner: Runner) -> None:
        state = runner.state
        indices = [PLAYER] + [
            CreatureIndex.of_monster(i) for i in state.live_monster_indices()
        ]
        for index in indices:
            creature = state.get_creature(index)
            ritual = sum(
                p.amount for p in creature.powers
                if p.power_id == "Ritual" and not p.just_applied
            )
            if ritual:
                runner.action_now(ApplyPower(
                    source=index, target=index, power_id="Strength", amount=ritual,
                ))

            remaining = []
            for power in creature.powers:
                if is_turn_based(power.power_id):
                    if not power.just_applied:
                        power.amount -= 1
                    if power.amount <= 0:
                        continue
                power.just_applied = False
                remaining.append(power)
            creature.powers = remaining


@dataclass(frozen=True)
class StartPlayerTurn(Action):
    """Player block resets, energy refills, and a fresh hand is drawn."""

    def execute(self, runner: Runner) -> None:
        player = runner.state.player
        player.creature.block = 0
        player.energy = player.max_energy
        for _ in range(CARDS_PER_TURN):
            runner.action_now(DrawCard())


# =============================================================================
# Externally chosen outcomes
# =============================================================================


@dataclass(frozen=True)
class FixedOutcome(Action):
    """A Random action with its outcome chosen by the caller."""

    action: Action
    value: int

    def execute(self, runner: Runner) -> None:
        self.action.execute_random(runner, self.value)


ActionType = Union[
    PlayCard,
    EndTurn,
    FinishPlayingCard,
    DrawCard,
    DiscardHand,
    ExhaustCard,
    ExhaustRandomCard,
    ExhaustChoice,
    AddCardToDiscard,
    DamageAction,
    DamageAllEnemies,
    DamageRandomEnemy,
    GainBlock,
    GainEnergy,
    ApplyPower,
    MonsterTurn,
    ChooseNextIntent,
    EndOfRound,
    StartPlayerTurn,
    FixedOutcome,
]

ACTION_TYPES = ActionType.__args__
