"""
Calculation modules - outcome distributions and the damage pipeline.

- distribution: Distribution + the Deterministic/Random/Choice model
- damage: DamageInfo hook pipeline, card block modifiers
"""

from .distribution import Distribution, Deterministic, Random, Choice, Determinism
from .damage import (
    DamageType,
    DamageInfo,
    apply_block_modifiers,
    WEAK_MULT,
    VULN_MULT,
    FRAIL_MULT,
    FLIGHT_MULT,
)

__all__ = [
    "Distribution",
    "Deterministic",
    "Random",
    "Choice",
    "Determinism",
    "DamageType",
    "DamageInfo",
    "apply_block_modifiers",
    "WEAK_MULT",
    "VULN_MULT",
    "FRAIL_MULT",
    "FLIGHT_MULT",
]
