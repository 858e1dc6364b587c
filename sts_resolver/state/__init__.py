"""
State module - combat state and snapshot ingestion.

Contains:
- Combat state (creatures, piles, the resolution engine's work lists)
- Conversion from the game client's observed JSON
"""

# Combat State
from .combat import (
    CreatureIndex,
    PLAYER,
    Power,
    Creature,
    Player,
    Monster,
    CombatState,
    create_player,
    create_monster,
)

# Ingestion
from .converter import combat_state_from_communication
