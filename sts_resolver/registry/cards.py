"""
Card Effect Implementations.

What each card does when played. Handlers queue their effects through
the CardContext helpers, which go to the front of the current step in
the order they are generated.
"""

from __future__ import annotations

from . import card_effect, card_playable, CardContext
from ..actions import AddCardToDiscard, DamageRandomEnemy, ExhaustChoice, ExhaustRandomCard
from ..content.cards import CardType, SingleCard
from ..state.combat import PLAYER, CombatState


# =============================================================================
# Basic
# =============================================================================

@card_effect("Strike_R")
def strike(ctx: CardContext) -> None:
    """Deal 6 (9) damage."""
    ctx.deal_damage(9 if ctx.upgraded else 6)


@card_effect("Defend_R")
def defend(ctx: CardContext) -> None:
    """Gain 5 (8) block."""
    ctx.gain_block(8 if ctx.upgraded else 5)


@card_effect("Bash")
def bash(ctx: CardContext) -> None:
    """Deal 8 (10) damage. Apply 2 (3) Vulnerable."""
    ctx.deal_damage(10 if ctx.upgraded else 8)
    ctx.apply_power_to_target("Vulnerable", 3 if ctx.upgraded else 2)


# =============================================================================
# Common
# =============================================================================

@card_effect("Anger")
def anger(ctx: CardContext) -> None:
    """Deal 6 (8) damage. Add a copy of this card to the discard pile."""
    ctx.deal_damage(8 if ctx.upgraded else 6)
    ctx.runner.action_now(AddCardToDiscard(ctx.card))


@card_effect("Clash")
def clash(ctx: CardContext) -> None:
    ctx.deal_damage(18 if ctx.upgraded else 14)


@card_playable("Clash")
def clash_playable(state: CombatState, card: SingleCard) -> bool:
    """Only playable if every card in hand is an attack."""
    return all(c.card_type == CardType.ATTACK for c in state.hand)


@card_effect("Pommel Strike")
def pommel_strike(ctx: CardContext) -> None:
    """Deal 9 (10) damage. Draw 1 (2) cards."""
    ctx.deal_damage(10 if ctx.upgraded else 9)
    ctx.draw(2 if ctx.upgraded else 1)


@card_effect("Sword Boomerang")
def sword_boomerang(ctx: CardContext) -> None:
    """Deal 3 damage to a random enemy 3 (4) times."""
    for _ in range(4 if ctx.upgraded else 3):
        ctx.runner.action_now(DamageRandomEnemy(source=PLAYER, base=3))


@card_effect("True Grit")
def true_grit(ctx: CardContext) -> None:
    """Gain 7 (9) block. Exhaust a random card (a card of your choice)."""
    ctx.gain_block(9 if ctx.upgraded else 7)
    if ctx.upgraded:
        ctx.runner.action_now(ExhaustChoice())
    else:
        ctx.runner.action_now(ExhaustRandomCard())


# =============================================================================
# Uncommon
# =============================================================================

@card_effect("Seeing Red")
def seeing_red(ctx: CardContext) -> None:
    """Gain 2 energy. Exhaust."""
    ctx.gain_energy(2)


@card_effect("Whirlwind")
def whirlwind(ctx: CardContext) -> None:
    """Deal 5 (8) damage to all enemies X times."""
    for _ in range(ctx.x):
        ctx.deal_damage_to_all(8 if ctx.upgraded else 5)
