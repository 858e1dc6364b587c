"""
Content module - static data for cards, powers and monsters.

Behaviour for these ids is registered separately in sts_resolver.registry.
"""

# Cards
from .cards import (
    CardType, CardRarity, CardInfo, SingleCard,
    X_COST, UNPLAYABLE, UNKNOWN_CARD, CARD_INFOS,
    get_card_info, is_known_card, make_card,
)

# Powers
from .powers import (
    PowerType, DamageType, POWER_DATA, POWER_ALIASES, UNKNOWN_POWER,
    resolve_power_id, is_known_power, get_power_type,
    is_debuff, is_turn_based, uses_just_applied,
)

# Monsters
from .monsters import (
    MONSTER_DATA, UNKNOWN_MONSTER,
    JAW_WORM, CULTIST, CHOMP, BELLOW, THRASH, DARK_STRIKE, INCANTATION,
    resolve_monster_id, is_known_monster, move_name,
)
