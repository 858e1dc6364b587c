"""
Monster identities and move tables.

Move ids are the integers the game client reports in move_id /
last_move_id / second_last_move_id. Move behaviour and next-move AI are
registered per monster in sts_resolver.registry.monsters.

JawWorm (from decompiled JawWorm.java):
- CHOMP (1): Attack 11/12
- BELLOW (2): +3/4/5 Strength, gain 6/9 block
- THRASH (3): Attack 7 + gain 5 block

Cultist:
- DARK_STRIKE (1): Attack 6
- INCANTATION (3): Gain 3/4/5 Ritual
"""

from typing import Any, Dict, Optional

__all__ = [
    "MONSTER_DATA",
    "UNKNOWN_MONSTER",
    "JAW_WORM",
    "CULTIST",
    "CHOMP",
    "BELLOW",
    "THRASH",
    "DARK_STRIKE",
    "INCANTATION",
    "resolve_monster_id",
    "is_known_monster",
    "move_name",
    "jaw_worm_values",
    "cultist_values",
]


UNKNOWN_MONSTER = "Unknown"

JAW_WORM = "JawWorm"
CULTIST = "Cultist"

# JawWorm moves
CHOMP = 1
BELLOW = 2
THRASH = 3

# Cultist moves
DARK_STRIKE = 1
INCANTATION = 3


MONSTER_DATA: Dict[str, Dict[str, Any]] = {
    JAW_WORM: {
        "moves": {CHOMP: "Chomp", BELLOW: "Bellow", THRASH: "Thrash"},
    },
    CULTIST: {
        "moves": {DARK_STRIKE: "Dark Strike", INCANTATION: "Incantation"},
    },
    UNKNOWN_MONSTER: {
        "moves": {},
    },
}


def resolve_monster_id(monster_id: str) -> str:
    """Canonical id for a reported monster id, UNKNOWN_MONSTER if unrecognised."""
    if monster_id in MONSTER_DATA:
        return monster_id
    return UNKNOWN_MONSTER


def is_known_monster(monster_id: str) -> bool:
    return resolve_monster_id(monster_id) != UNKNOWN_MONSTER


def move_name(monster_id: str, move: int) -> Optional[str]:
    """Display name of a move, None if the move is not in the table."""
    return MONSTER_DATA.get(monster_id, {}).get("moves", {}).get(move)


def jaw_worm_values(ascension: int) -> Dict[str, int]:
    if ascension >= 17:
        return {"chomp": 12, "thrash": 7, "thrash_block": 5, "bellow_str": 5, "bellow_block": 9}
    elif ascension >= 2:
        return {"chomp": 12, "thrash": 7, "thrash_block": 5, "bellow_str": 4, "bellow_block": 6}
    return {"chomp": 11, "thrash": 7, "thrash_block": 5, "bellow_str": 3, "bellow_block": 6}


def cultist_values(ascension: int) -> Dict[str, int]:
    ritual = 3
    if ascension >= 17:
        ritual = 5
    elif ascension >= 2:
        ritual = 4
    return {"dark_strike": 6, "ritual": ritual}
