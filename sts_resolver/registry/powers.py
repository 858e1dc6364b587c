"""
Power Hook Implementations.

Modifier hooks folded by the damage and block pipelines. Each handler
receives the value folded so far in ctx.value and returns the new value.

Organized by trigger hook for easier maintenance.
"""

from __future__ import annotations

from . import power_trigger, PowerContext
from ..content.powers import (
    DamageType,
    WEAK_MULT,
    VULN_MULT,
    FRAIL_MULT,
    FLIGHT_MULT,
    SLOW_MULT_PER_STACK,
)


# =============================================================================
# AT_DAMAGE_GIVE Triggers
# =============================================================================

@power_trigger("atDamageGive", power="Strength")
def strength_damage_give(ctx: PowerContext) -> float:
    """Strength: Add to NORMAL damage dealt."""
    if ctx.damage_type != DamageType.NORMAL:
        return ctx.value
    return ctx.value + ctx.amount


@power_trigger("atDamageGive", power="Weakened")
def weak_damage_give(ctx: PowerContext) -> float:
    """Weak: Reduce NORMAL damage dealt by 25%."""
    if ctx.damage_type != DamageType.NORMAL:
        return ctx.value
    return ctx.value * WEAK_MULT


# =============================================================================
# AT_DAMAGE_RECEIVE Triggers
# =============================================================================

@power_trigger("atDamageReceive", power="Vulnerable")
def vulnerable_damage_receive(ctx: PowerContext) -> float:
    """Vulnerable: Take 50% more NORMAL damage."""
    if ctx.damage_type != DamageType.NORMAL:
        return ctx.value
    return ctx.value * VULN_MULT


@power_trigger("atDamageReceive", power="Slow")
def slow_damage_receive(ctx: PowerContext) -> float:
    """Slow: Increase NORMAL damage taken by 10% per stack."""
    if ctx.damage_type != DamageType.NORMAL or ctx.amount <= 0:
        return ctx.value
    return ctx.value * (1 + ctx.amount * SLOW_MULT_PER_STACK)


# =============================================================================
# AT_DAMAGE_FINAL_RECEIVE Triggers
# =============================================================================

@power_trigger("atDamageFinalReceive", power="Intangible")
@power_trigger("atDamageFinalReceive", power="IntangiblePlayer")
def intangible_damage_final(ctx: PowerContext) -> float:
    """Intangible: Reduce all damage above 1 to 1."""
    if ctx.value > 1:
        return 1.0
    return ctx.value


@power_trigger("atDamageFinalReceive", power="Flight")
def flight_damage_final(ctx: PowerContext) -> float:
    """Flight: halve incoming non-HP_LOSS/non-THORNS damage."""
    if ctx.damage_type in (DamageType.HP_LOSS, DamageType.THORNS):
        return ctx.value
    return ctx.value * FLIGHT_MULT


# =============================================================================
# MODIFY_BLOCK Triggers
# =============================================================================

@power_trigger("modifyBlock", power="Dexterity")
def dexterity_modify_block(ctx: PowerContext) -> float:
    """Dexterity: Add to block from cards."""
    return ctx.value + ctx.amount


@power_trigger("modifyBlock", power="Frail")
def frail_modify_block(ctx: PowerContext) -> float:
    """Frail: Reduce block from cards by 25%."""
    return ctx.value * FRAIL_MULT
