"""
Card identities and card instances.

CardInfo holds the immutable per-identity data (type, rarity, costs,
targeting and exhaust flags). It is created once per card id and shared
by every SingleCard of that identity; it is never mutated afterwards.

SingleCard is the lightweight instance that lives in piles: its current
cost, upgrade count and a misc scratch value (e.g. Genetic Algorithm
block, Ritual Dagger damage in the game client).

Special costs:
- X_COST (-1): spends all remaining energy
- UNPLAYABLE (-2): curses, statuses
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict

__all__ = [
    "CardType",
    "CardRarity",
    "CardInfo",
    "SingleCard",
    "X_COST",
    "UNPLAYABLE",
    "UNKNOWN_CARD",
    "CARD_INFOS",
    "get_card_info",
    "is_known_card",
    "make_card",
]


X_COST = -1
UNPLAYABLE = -2

UNKNOWN_CARD = "Unknown"


class CardType(Enum):
    """Card types matching AbstractCard.CardType."""
    ATTACK = "ATTACK"
    SKILL = "SKILL"
    POWER = "POWER"
    STATUS = "STATUS"
    CURSE = "CURSE"


class CardRarity(Enum):
    """Card rarities matching AbstractCard.CardRarity."""
    BASIC = "BASIC"
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    SPECIAL = "SPECIAL"
    CURSE = "CURSE"


@dataclass(frozen=True)
class CardInfo:
    """Shared, read-only data for one card identity."""
    id: str
    card_type: CardType
    rarity: CardRarity
    normal_cost: int
    upgraded_cost: int
    ethereal: bool = False
    has_target: bool = False
    exhausts: bool = False

    def cost_for(self, upgrades: int) -> int:
        return self.upgraded_cost if upgrades > 0 else self.normal_cost


@dataclass(frozen=True)
class SingleCard:
    """A card instance in a pile. Equality is by value."""
    card_info: CardInfo
    cost: int
    upgrades: int = 0
    misc: int = 0

    @property
    def id(self) -> str:
        return self.card_info.id

    @property
    def card_type(self) -> CardType:
        return self.card_info.card_type

    @property
    def upgraded(self) -> bool:
        return self.upgrades > 0

    def __str__(self) -> str:
        text = self.card_info.id
        if self.upgrades > 1:
            text += f"+{self.upgrades}"
        elif self.upgrades == 1:
            text += "+"
        return f"{text}({self.cost})"


# =============================================================================
# CARD TABLE
# =============================================================================

def _card(id: str, card_type: CardType, rarity: CardRarity, cost: int,
          upgraded_cost: int = None, **flags) -> CardInfo:
    if upgraded_cost is None:
        upgraded_cost = cost
    return CardInfo(
        id=id, card_type=card_type, rarity=rarity,
        normal_cost=cost, upgraded_cost=upgraded_cost, **flags,
    )


# Returned for any id we have no data for: an unplayable curse.
_UNKNOWN_INFO = _card(UNKNOWN_CARD, CardType.CURSE, CardRarity.SPECIAL, UNPLAYABLE)

CARD_INFOS: Dict[str, CardInfo] = {
    info.id: info
    for info in [
        # === IRONCLAD BASIC ===
        _card("Strike_R", CardType.ATTACK, CardRarity.BASIC, 1, has_target=True),
        _card("Defend_R", CardType.SKILL, CardRarity.BASIC, 1),
        _card("Bash", CardType.ATTACK, CardRarity.BASIC, 2, has_target=True),

        # === IRONCLAD COMMON ===
        _card("Anger", CardType.ATTACK, CardRarity.COMMON, 0, has_target=True),
        _card("Clash", CardType.ATTACK, CardRarity.COMMON, 0, has_target=True),
        _card("Pommel Strike", CardType.ATTACK, CardRarity.COMMON, 1, has_target=True),
        _card("Sword Boomerang", CardType.ATTACK, CardRarity.COMMON, 1),
        _card("True Grit", CardType.SKILL, CardRarity.COMMON, 1),

        # === IRONCLAD UNCOMMON ===
        _card("Seeing Red", CardType.SKILL, CardRarity.UNCOMMON, 1, 0, exhausts=True),
        _card("Whirlwind", CardType.ATTACK, CardRarity.UNCOMMON, X_COST),

        # === STATUS / CURSE ===
        _card("Wound", CardType.STATUS, CardRarity.SPECIAL, UNPLAYABLE),
        _card("Dazed", CardType.STATUS, CardRarity.SPECIAL, UNPLAYABLE, ethereal=True),
        _card("Injury", CardType.CURSE, CardRarity.CURSE, UNPLAYABLE),
    ]
}

_FABRICATED: Dict[str, CardInfo] = {}


def is_known_card(card_id: str) -> bool:
    return card_id in CARD_INFOS


def get_card_info(card_id: str) -> CardInfo:
    """
    Shared CardInfo for an id.

    Unknown ids degrade to the unplayable-curse default; the fabricated
    record is cached so every lookup of that id returns the same object.
    """
    info = CARD_INFOS.get(card_id)
    if info is None:
        info = _FABRICATED.get(card_id)
        if info is None:
            info = replace(_UNKNOWN_INFO, id=card_id)
            _FABRICATED[card_id] = info
    return info


def make_card(card_id: str, upgrades: int = 0, cost: int = None, misc: int = 0) -> SingleCard:
    """Build a card instance at its printed cost unless one is given."""
    info = get_card_info(card_id)
    if cost is None:
        cost = info.cost_for(upgrades)
    return SingleCard(card_info=info, cost=cost, upgrades=upgrades, misc=misc)
