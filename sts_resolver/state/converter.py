"""
Snapshot ingestion - builds a CombatState from the game client's JSON.

The observation is the CommunicationMod game-state record already
decoded into dicts. Ingestion never fails on content it does not
recognise: unknown cards become unplayable curses that keep their id,
unknown powers and monsters map to "Unknown", and each substitution is
logged at WARNING.

Monster base damage is only reported while a monster intends to attack.
When a snapshot leaves it out, the value cached by the previous
snapshot's state is carried forward, matched by monster position.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..content.cards import UNPLAYABLE, SingleCard, get_card_info, is_known_card
from ..content.monsters import UNKNOWN_MONSTER, is_known_monster, resolve_monster_id
from ..content.powers import UNKNOWN_POWER, is_known_power, resolve_power_id
from .combat import CombatState, Creature, Monster, Player, Power

logger = logging.getLogger(__name__)

__all__ = [
    "combat_state_from_communication",
    "parse_card",
    "parse_power",
    "parse_player",
    "parse_monster",
]


def parse_card(card_dict: Dict[str, Any]) -> SingleCard:
    card_id = card_dict.get("id", "")
    info = get_card_info(card_id)
    cost = card_dict.get("cost", info.normal_cost)
    if not is_known_card(card_id):
        logger.warning("Unknown card id %r, treating as unplayable", card_id)
        cost = UNPLAYABLE
    return SingleCard(
        card_info=info,
        cost=cost,
        upgrades=card_dict.get("upgrades", 0),
        misc=card_dict.get("misc", 0),
    )


def parse_power(power_dict: Dict[str, Any]) -> Power:
    reported = power_dict.get("id", "")
    power_id = resolve_power_id(reported)
    if not is_known_power(reported) and reported != UNKNOWN_POWER:
        logger.warning("Unknown power id %r", reported)
    card = power_dict.get("card")
    return Power(
        power_id=power_id,
        amount=power_dict.get("amount", 0),
        damage=power_dict.get("damage", 0),
        card=parse_card(card) if card else None,
        misc=power_dict.get("misc", 0),
        just_applied=power_dict.get("just_applied", False),
    )


def _parse_powers(powers: List[Dict[str, Any]]) -> List[Power]:
    return [parse_power(p) for p in powers]


def parse_player(player_dict: Dict[str, Any]) -> Player:
    return Player(
        creature=Creature(
            hitpoints=player_dict.get("current_hp", 0),
            max_hitpoints=player_dict.get("max_hp", 0),
            block=player_dict.get("block", 0),
            powers=_parse_powers(player_dict.get("powers", [])),
        ),
        energy=player_dict.get("energy", 0),
    )


def parse_monster(monster_dict: Dict[str, Any], ascension: int) -> Monster:
    """
    One monster. History is [second_last, last, current], oldest first,
    with unreported entries left out.
    """
    reported = monster_dict.get("id", "")
    monster_id = resolve_monster_id(reported)
    if not is_known_monster(reported) and reported != UNKNOWN_MONSTER:
        logger.warning("Unknown monster id %r", reported)

    move_history = []
    for key in ("second_last_move_id", "last_move_id"):
        if monster_dict.get(key) is not None:
            move_history.append(monster_dict[key])
    move_history.append(monster_dict.get("move_id", 0))

    base_damage = monster_dict.get("move_base_damage") or 0

    return Monster(
        monster_id=monster_id,
        creature=Creature(
            hitpoints=monster_dict.get("current_hp", 0),
            max_hitpoints=monster_dict.get("max_hp", 0),
            block=monster_dict.get("block", 0),
            powers=_parse_powers(monster_dict.get("powers", [])),
        ),
        ascension=ascension,
        move_history=move_history,
        innate_damage_amount=base_damage if base_damage > 0 else None,
        gone=monster_dict.get("is_gone", False),
    )


def combat_state_from_communication(
    observed: Dict[str, Any],
    previous: Optional[CombatState] = None,
) -> Optional[CombatState]:
    """
    Build a CombatState from an observed game state.

    Args:
        observed: Decoded game_state record (ascension_level, combat_state)
        previous: State built from the prior snapshot, for carry-over

    Returns:
        The combat state, or None if the observation has no combat.
    """
    combat = observed.get("combat_state")
    if combat is None:
        return None

    ascension = observed.get("ascension_level", 0)
    card_in_play = combat.get("card_in_play")

    state = CombatState(
        player=parse_player(combat.get("player", {})),
        monsters=[parse_monster(m, ascension) for m in combat.get("monsters", [])],
        draw_pile=[parse_card(c) for c in combat.get("draw_pile", [])],
        discard_pile=[parse_card(c) for c in combat.get("discard_pile", [])],
        exhaust_pile=[parse_card(c) for c in combat.get("exhaust_pile", [])],
        hand=[parse_card(c) for c in combat.get("hand", [])],
        limbo=[parse_card(c) for c in combat.get("limbo", [])],
        card_in_play=parse_card(card_in_play) if card_in_play else None,
    )

    if previous is not None:
        for old, new in zip(previous.monsters, state.monsters):
            if new.innate_damage_amount is None:
                new.innate_damage_amount = old.innate_damage_amount

    return state
