"""
Combat State for the action-resolution engine.

Optimized for:
1. Fast copying (for tree search)
2. Positional references that stay valid for the whole combat
3. Plain data the Runner mutates in place

Monsters are never removed from the list; a dead or escaped monster is
marked gone so every Monster(position) reference remains valid.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, List, Optional

from ..content.cards import CardType, SingleCard, X_COST
from ..content.monsters import move_name

if TYPE_CHECKING:
    from ..actions import Action


# =============================================================================
# Creature references
# =============================================================================


@dataclass(frozen=True)
class CreatureIndex:
    """Tagged reference: the player (monster is None) or Monster(position)."""

    monster: Optional[int] = None

    @classmethod
    def player(cls) -> CreatureIndex:
        return cls(None)

    @classmethod
    def of_monster(cls, position: int) -> CreatureIndex:
        return cls(position)

    @property
    def is_player(self) -> bool:
        return self.monster is None

    def __repr__(self) -> str:
        if self.monster is None:
            return "Player"
        return f"Monster({self.monster})"


PLAYER = CreatureIndex.player()


# =============================================================================
# Entity States
# =============================================================================


@dataclass
class Power:
    """One entry in a creature's power list. Entries sharing an id are summed."""

    power_id: str
    amount: int = 0
    damage: int = 0
    card: Optional[SingleCard] = None
    misc: int = 0
    just_applied: bool = False

    def copy(self) -> Power:
        return Power(
            power_id=self.power_id,
            amount=self.amount,
            damage=self.damage,
            card=self.card,
            misc=self.misc,
            just_applied=self.just_applied,
        )

    def __str__(self) -> str:
        text = self.power_id
        if self.amount != 0:
            text += str(self.amount)
        if self.just_applied:
            text += "j"
        return text


@dataclass
class Creature:
    """Hitpoints, block and the ordered power list."""

    hitpoints: int
    max_hitpoints: int
    block: int = 0
    powers: List[Power] = field(default_factory=list)

    def has_power(self, power_id: str) -> bool:
        return any(power.power_id == power_id for power in self.powers)

    def power_amount(self, power_id: str) -> int:
        return sum(power.amount for power in self.powers if power.power_id == power_id)

    def distinct_power_ids(self) -> List[str]:
        """Power ids in first-appearance order."""
        seen: List[str] = []
        for power in self.powers:
            if power.power_id not in seen:
                seen.append(power.power_id)
        return seen

    def remove_power(self, power_id: str) -> None:
        self.powers = [power for power in self.powers if power.power_id != power_id]

    @property
    def is_dead(self) -> bool:
        return self.hitpoints <= 0

    def copy(self) -> Creature:
        return Creature(
            hitpoints=self.hitpoints,
            max_hitpoints=self.max_hitpoints,
            block=self.block,
            powers=[power.copy() for power in self.powers],
        )

    def __str__(self) -> str:
        text = f"{self.hitpoints}/{self.max_hitpoints}"
        if self.block > 0:
            text += f"(+{self.block})"
        for power in self.powers:
            text += f" {power}"
        return text


@dataclass
class Player:
    """Player body plus energy."""

    creature: Creature
    energy: int = 3
    max_energy: int = 3

    def copy(self) -> Player:
        return Player(
            creature=self.creature.copy(),
            energy=self.energy,
            max_energy=self.max_energy,
        )


@dataclass
class Monster:
    """Monster body plus its move history (most recent last)."""

    monster_id: str
    creature: Creature
    ascension: int = 0
    move_history: List[int] = field(default_factory=list)
    innate_damage_amount: Optional[int] = None
    gone: bool = False

    def intent(self) -> Optional[int]:
        """Current move id, None if no move has been chosen yet."""
        if not self.move_history:
            return None
        return self.move_history[-1]

    def push_intent(self, intent: int) -> None:
        # History is kept in full; behaviours look at the tail they need.
        self.move_history.append(intent)

    def last_move(self, move: int) -> bool:
        return bool(self.move_history) and self.move_history[-1] == move

    def last_two_moves(self, move: int) -> bool:
        return len(self.move_history) >= 2 and self.move_history[-1] == move \
            and self.move_history[-2] == move

    def copy(self) -> Monster:
        return Monster(
            monster_id=self.monster_id,
            creature=self.creature.copy(),
            ascension=self.ascension,
            move_history=self.move_history.copy(),
            innate_damage_amount=self.innate_damage_amount,
            gone=self.gone,
        )


# =============================================================================
# Combat State
# =============================================================================


@dataclass
class CombatState:
    """
    Complete combat state - everything needed to continue resolution.

    Besides the piles and creatures it carries the resolution engine's
    three action structures, so a blocked resolution can be resumed by a
    new Runner over the same state:

    - actions: top-level ordered work list
    - fresh_subaction_queue: actions generated during the current step
    - stale_subaction_stack: near-term work, top of stack runs next
    """

    player: Player
    monsters: List[Monster] = field(default_factory=list)

    # Card piles
    draw_pile: List[SingleCard] = field(default_factory=list)
    discard_pile: List[SingleCard] = field(default_factory=list)
    exhaust_pile: List[SingleCard] = field(default_factory=list)
    hand: List[SingleCard] = field(default_factory=list)
    limbo: List[SingleCard] = field(default_factory=list)
    card_in_play: Optional[SingleCard] = None

    # Resolution engine
    actions: Deque[Action] = field(default_factory=deque)
    fresh_subaction_queue: List[Action] = field(default_factory=list)
    stale_subaction_stack: List[Action] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Core Methods
    # -------------------------------------------------------------------------

    def copy(self) -> CombatState:
        """
        Create an independent copy for tree search.

        Cards and actions are immutable, so pile and queue copies are
        shallow; creatures are copied.
        """
        return CombatState(
            player=self.player.copy(),
            monsters=[monster.copy() for monster in self.monsters],
            draw_pile=self.draw_pile.copy(),
            discard_pile=self.discard_pile.copy(),
            exhaust_pile=self.exhaust_pile.copy(),
            hand=self.hand.copy(),
            limbo=self.limbo.copy(),
            card_in_play=self.card_in_play,
            actions=deque(self.actions),
            fresh_subaction_queue=self.fresh_subaction_queue.copy(),
            stale_subaction_stack=self.stale_subaction_stack.copy(),
        )

    def combat_over(self) -> bool:
        """Player dead or every monster gone."""
        return self.player.creature.is_dead or all(
            monster.gone for monster in self.monsters
        )

    def get_creature(self, index: CreatureIndex) -> Creature:
        if index.is_player:
            return self.player.creature
        return self.monsters[index.monster].creature

    def live_monster_indices(self) -> List[int]:
        return [i for i, monster in enumerate(self.monsters) if not monster.gone]

    # -------------------------------------------------------------------------
    # Choice Generation
    # -------------------------------------------------------------------------

    def card_playable(self, card: SingleCard) -> bool:
        """
        Cost is X or non-negative and affordable, the card's own hook
        agrees, and attacks are blocked while Entangled.
        """
        from ..registry import card_can_be_played

        return (
            card.cost >= X_COST
            and self.player.energy >= card.cost
            and card_can_be_played(self, card)
            and not (
                card.card_type == CardType.ATTACK
                and self.player.creature.has_power("Entangled")
            )
        )

    def legal_choices(self) -> List[Action]:
        """
        End turn, plus one play per playable card.

        A card value-equal to an earlier card in hand is skipped. Targeted
        cards expand to one play per live monster.
        """
        from ..actions import EndTurn, PlayCard

        result: List[Action] = [EndTurn()]
        for index, card in enumerate(self.hand):
            if card in self.hand[:index] or not self.card_playable(card):
                continue
            if card.card_info.has_target:
                for monster_index in self.live_monster_indices():
                    result.append(PlayCard(card=card, target=monster_index))
            else:
                result.append(PlayCard(card=card, target=0))
        return result

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def summary(self) -> str:
        lines = [
            f"Player {self.player.creature} energy={self.player.energy}",
        ]
        for i, monster in enumerate(self.monsters):
            intent = monster.intent()
            name = move_name(monster.monster_id, intent)
            if name is not None:
                intent = f"{intent} {name}"
            status = " gone" if monster.gone else ""
            lines.append(
                f"Monster({i}) {monster.monster_id} {monster.creature} "
                f"intent={intent}{status}"
            )
        lines.append("Hand: " + " ".join(str(card) for card in self.hand))
        lines.append(
            f"Draw {len(self.draw_pile)} / Discard {len(self.discard_pile)} / "
            f"Exhaust {len(self.exhaust_pile)}"
        )
        return "\n".join(lines)


# =============================================================================
# Factory Functions
# =============================================================================


def create_player(hp: int, max_hp: int = None, energy: int = 3, block: int = 0) -> Player:
    """Create a new player."""
    return Player(
        creature=Creature(hitpoints=hp, max_hitpoints=max_hp or hp, block=block),
        energy=energy,
    )


def create_monster(
    monster_id: str,
    hp: int,
    max_hp: int = None,
    move_history: List[int] = None,
    ascension: int = 0,
    block: int = 0,
) -> Monster:
    """Create a new monster."""
    return Monster(
        monster_id=monster_id,
        creature=Creature(hitpoints=hp, max_hitpoints=max_hp or hp, block=block),
        ascension=ascension,
        move_history=list(move_history or []),
    )
