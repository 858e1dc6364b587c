"""
Power identities - buffs, debuffs and relics that live in a creature's
power list.

Power ids are the exact strings the game client reports. Behaviour is not
defined here; damage/block hooks are registered per id in
sts_resolver.registry.powers. This module only carries the static
classification the engine needs (buff/debuff/relic, turn-based decrement).

=== DAMAGE HOOKS (in pipeline order) ===

1. atDamageGive(damage, type) - attacker powers (Strength, Weak)
2. atDamageReceive(damage, type) - defender powers (Vulnerable, Slow)
3. atDamageFinalReceive(damage, type) - defender final (Intangible, Flight)

=== BLOCK HOOKS ===

modifyBlock(block) - Dexterity, Frail
"""

from enum import Enum
from typing import Dict, Any

__all__ = [
    "PowerType",
    "DamageType",
    "WEAK_MULT",
    "VULN_MULT",
    "FRAIL_MULT",
    "FLIGHT_MULT",
    "SLOW_MULT_PER_STACK",
    "POWER_DATA",
    "POWER_ALIASES",
    "UNKNOWN_POWER",
    "resolve_power_id",
    "is_known_power",
    "get_power_type",
    "is_debuff",
    "is_turn_based",
    "uses_just_applied",
]


UNKNOWN_POWER = "Unknown"


class PowerType(Enum):
    """Power classification. Relics share the power list and hook set."""
    BUFF = "BUFF"
    DEBUFF = "DEBUFF"
    RELIC = "RELIC"


class DamageType(Enum):
    """Damage types matching DamageInfo.DamageType."""
    NORMAL = "NORMAL"    # Attacks - affected by Strength, Weak, Vulnerable
    THORNS = "THORNS"    # Retaliation - blocked, not modified by attacker powers
    HP_LOSS = "HP_LOSS"  # Direct HP loss - ignores block


# Multipliers from decompiled source
WEAK_MULT = 0.75
VULN_MULT = 1.50
FRAIL_MULT = 0.75
FLIGHT_MULT = 0.50
SLOW_MULT_PER_STACK = 0.10


POWER_DATA: Dict[str, Dict[str, Any]] = {
    # =========== BUFFS ===========
    "Strength": {
        "type": PowerType.BUFF,
        "can_go_negative": True,
        "notes": "Adds amount to NORMAL damage dealt.",
    },
    "Dexterity": {
        "type": PowerType.BUFF,
        "can_go_negative": True,
        "notes": "Adds amount to block gained from cards.",
    },
    "Artifact": {
        "type": PowerType.BUFF,
        "notes": "Negates the next debuff application, then decrements.",
    },
    "Ritual": {
        "type": PowerType.BUFF,
        "uses_just_applied": True,
        "notes": "Gain amount Strength at end of round (skipped the round it is applied).",
    },
    "Intangible": {
        "type": PowerType.BUFF,
        "is_turn_based": True,
        "notes": "Monster version. Final damage received is capped at 1.",
    },
    "IntangiblePlayer": {
        "type": PowerType.BUFF,
        "is_turn_based": True,
        "notes": "Player version of Intangible.",
    },
    "Flight": {
        "type": PowerType.BUFF,
        "notes": "Byrd. Halves NORMAL damage received.",
    },

    # =========== DEBUFFS ===========
    "Weakened": {
        "type": PowerType.DEBUFF,
        "is_turn_based": True,
        "uses_just_applied": True,
        "notes": "Reduces NORMAL damage dealt by 25%.",
    },
    "Vulnerable": {
        "type": PowerType.DEBUFF,
        "is_turn_based": True,
        "uses_just_applied": True,
        "notes": "Take 50% more NORMAL damage.",
    },
    "Frail": {
        "type": PowerType.DEBUFF,
        "is_turn_based": True,
        "uses_just_applied": True,
        "notes": "Block from cards reduced by 25%.",
    },
    "Slow": {
        "type": PowerType.DEBUFF,
        "notes": "Time Eater. Each stack adds 10% NORMAL damage taken.",
    },
    "Entangled": {
        "type": PowerType.DEBUFF,
        "is_turn_based": True,
        "uses_just_applied": True,
        "notes": "Attacks cannot be played. Lasts through the player turn after a monster applies it.",
    },

    # =========== FALLBACK ===========
    UNKNOWN_POWER: {
        "type": PowerType.BUFF,
        "notes": "Any id without data. No hooks.",
    },
}

# Display names / older ids the client has been seen to report
POWER_ALIASES: Dict[str, str] = {
    "Weak": "Weakened",
    "Entangle": "Entangled",
    "Intangible Player": "IntangiblePlayer",
}


def resolve_power_id(power_id: str) -> str:
    """Canonical id for a reported power id, UNKNOWN_POWER if unrecognised."""
    if power_id in POWER_DATA:
        return power_id
    return POWER_ALIASES.get(power_id, UNKNOWN_POWER)


def is_known_power(power_id: str) -> bool:
    return resolve_power_id(power_id) != UNKNOWN_POWER


def get_power_type(power_id: str) -> PowerType:
    return POWER_DATA.get(power_id, POWER_DATA[UNKNOWN_POWER])["type"]


def is_debuff(power_id: str, amount: int = 1) -> bool:
    """Debuffs can be negated by Artifact. Negative Strength/Dexterity counts."""
    if get_power_type(power_id) == PowerType.DEBUFF:
        return True
    return power_id in ("Strength", "Dexterity") and amount < 0


def is_turn_based(power_id: str) -> bool:
    return POWER_DATA.get(power_id, {}).get("is_turn_based", False)


def uses_just_applied(power_id: str) -> bool:
    """Monster-applied stacks of these skip their first end-of-round tick."""
    return POWER_DATA.get(power_id, {}).get("uses_just_applied", False)
