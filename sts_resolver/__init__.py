"""
Slay the Spire combat resolver

A headless engine that resolves combat actions against an observed
battle snapshot and hands chance and choice points back to the caller.

Core subsystems:
- calc: outcome distributions, damage/block pipeline
- content: card, power and monster data
- registry: per-card, per-power and per-monster behaviour
- state: combat state, snapshot ingestion
- actions / runner: the action vocabulary and the resolution loop

Usage:
    from sts_resolver import Runner, run_until_unable, combat_state_from_communication

    state = combat_state_from_communication(game_state)
    runner = Runner(state, allow_random=True)
    runner.apply(state.legal_choices()[1])
    run_until_unable(runner)
"""

__version__ = "0.1.0"

# Probability model
from .calc.distribution import Distribution, Deterministic, Random, Choice, Determinism

# Damage Calculation
from .calc.damage import DamageType, DamageInfo, apply_block_modifiers

# Content
from .content.cards import CardType, CardInfo, SingleCard, X_COST, get_card_info, make_card

# State
from .state.combat import (
    CreatureIndex, PLAYER, Power, Creature, Player, Monster, CombatState,
    create_player, create_monster,
)
from .state.converter import combat_state_from_communication

# Actions and resolution
from .actions import Action, ActionContractError, ActionType, ACTION_TYPES, PlayCard, EndTurn
from .runner import Runner, run_until_unable

# Behaviour registries
from .registry import POWER_REGISTRY, CARD_REGISTRY, MONSTER_REGISTRY

# Configuration
from .config import ResolverConfig
