"""
Monster Move Implementations.

Two registrations per monster: what each move does ("takeTurn") and how
the next move is rolled ("nextMove"). Move AI follows the game's
getMove(num) where num is uniform in 0-99; each branch of that roll is
expressed as a weighted split so the engine sees the full distribution.
"""

from __future__ import annotations

from . import monster_move, monster_next_move, MonsterContext
from ..calc.distribution import Distribution
from ..content.monsters import (
    JAW_WORM,
    CHOMP,
    BELLOW,
    THRASH,
    CULTIST,
    DARK_STRIKE,
    INCANTATION,
    jaw_worm_values,
    cultist_values,
)
from ..state.combat import CombatState


# =============================================================================
# Jaw Worm
# =============================================================================

@monster_move(JAW_WORM, move=CHOMP)
def jaw_worm_chomp(ctx: MonsterContext) -> None:
    ctx.attack(jaw_worm_values(ctx.ascension)["chomp"])


@monster_move(JAW_WORM, move=BELLOW)
def jaw_worm_bellow(ctx: MonsterContext) -> None:
    values = jaw_worm_values(ctx.ascension)
    ctx.apply_power_to_self("Strength", values["bellow_str"])
    ctx.gain_block(values["bellow_block"])


@monster_move(JAW_WORM, move=THRASH)
def jaw_worm_thrash(ctx: MonsterContext) -> None:
    values = jaw_worm_values(ctx.ascension)
    ctx.attack(values["thrash"])
    ctx.gain_block(values["thrash_block"])


@monster_next_move(JAW_WORM)
def jaw_worm_next_move(state: CombatState, monster_index: int) -> Distribution:
    """
    First turn is always Chomp. After that:
    - num < 25: Chomp, or (if Chomp was last) Bellow 56.25% / Thrash
    - num < 55: Thrash, or (if Thrash twice) Chomp 35.7% / Bellow
    - else:     Bellow, or (if Bellow was last) Chomp 41.6% / Thrash
    """
    monster = state.monsters[monster_index]
    if not monster.move_history:
        return Distribution.certain(CHOMP)

    if monster.last_move(CHOMP):
        low = Distribution.split(0.5625, BELLOW, THRASH)
    else:
        low = Distribution.certain(CHOMP)

    if monster.last_two_moves(THRASH):
        mid = Distribution.split(0.357, CHOMP, BELLOW)
    else:
        mid = Distribution.certain(THRASH)

    if monster.last_move(BELLOW):
        high = Distribution.split(0.416, CHOMP, THRASH)
    else:
        high = Distribution.certain(BELLOW)

    # 30 of the remaining 75 rolls land in the middle branch
    return Distribution.split(0.25, low, Distribution.split(0.4, mid, high))


# =============================================================================
# Cultist
# =============================================================================

@monster_move(CULTIST, move=DARK_STRIKE)
def cultist_dark_strike(ctx: MonsterContext) -> None:
    ctx.attack(cultist_values(ctx.ascension)["dark_strike"])


@monster_move(CULTIST, move=INCANTATION)
def cultist_incantation(ctx: MonsterContext) -> None:
    ctx.apply_power_to_self("Ritual", cultist_values(ctx.ascension)["ritual"])


@monster_next_move(CULTIST)
def cultist_next_move(state: CombatState, monster_index: int) -> Distribution:
    """Incantation on the first turn, Dark Strike forever after."""
    if not state.monsters[monster_index].move_history:
        return Distribution.certain(INCANTATION)
    return Distribution.certain(DARK_STRIKE)
