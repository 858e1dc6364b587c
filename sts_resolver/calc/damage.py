"""
Damage pipeline - every damage event is computed here.

Design principles:
1. Everything is a modifier contributed by a power or relic
2. Hooks fold over the creature's power list in list order
3. Float intermediate so fractional multipliers compose exactly
4. Truncate once at the end, floor at zero

Calculation order (from decompiled DamageInfo.applyPowers):
1. Base damage
2. Source powers: atDamageGive (Strength, Weak)
3. Target powers: atDamageReceive (Vulnerable, Slow)
4. Target powers: atDamageFinalReceive (Intangible, Flight)
5. Truncate to int, minimum 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..content.powers import (
    DamageType,
    WEAK_MULT,
    VULN_MULT,
    FRAIL_MULT,
    FLIGHT_MULT,
)

if TYPE_CHECKING:
    from ..state.combat import CombatState, CreatureIndex

__all__ = [
    "DamageType",
    "DamageInfo",
    "apply_block_modifiers",
    "WEAK_MULT",
    "VULN_MULT",
    "FRAIL_MULT",
    "FLIGHT_MULT",
]


@dataclass
class DamageInfo:
    """Transient record for one damage event."""

    owner: CreatureIndex
    base: int
    damage_type: DamageType = DamageType.NORMAL
    output: int = 0

    def __post_init__(self):
        self.output = self.base

    def apply_powers(self, state: CombatState, owner: CreatureIndex, target: CreatureIndex) -> int:
        """
        Recompute output from base through the owner's and target's hooks.

        Returns the new output for convenience.
        """
        from ..registry import fold_power_hook

        self.output = self.base
        damage = float(self.output)
        damage = fold_power_hook("atDamageGive", state, owner, damage, self.damage_type)
        damage = fold_power_hook("atDamageReceive", state, target, damage, self.damage_type)
        damage = fold_power_hook("atDamageFinalReceive", state, target, damage, self.damage_type)
        self.output = int(damage)
        if self.output < 0:
            self.output = 0
        return self.output


def apply_block_modifiers(state: CombatState, owner: CreatureIndex, base: int) -> int:
    """
    Block gained from a card after the owner's modifyBlock hooks.

    Like AbstractCard.applyPowersToBlock(), powers are visited in list
    order (Dexterity adds, Frail multiplies) and the result floors at 0.
    """
    from ..registry import fold_power_hook

    block = fold_power_hook("modifyBlock", state, owner, float(base), DamageType.NORMAL)
    return max(0, int(block))
