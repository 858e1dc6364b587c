"""
Shared pytest fixtures for the combat resolver test suite.

This module provides reusable fixtures for:
- Cards and card piles
- Player and monster configurations
- Combat states and runners
- Observed game-client snapshots
"""

import copy

import numpy as np
import pytest

from sts_resolver.content.cards import make_card
from sts_resolver.content.monsters import CHOMP, CULTIST, INCANTATION, JAW_WORM
from sts_resolver.runner import Runner
from sts_resolver.state.combat import CombatState, create_monster, create_player


@pytest.fixture(autouse=True)
def seeded_numpy():
    """Every test starts from the same global random state."""
    np.random.seed(42)


# =============================================================================
# Card Fixtures
# =============================================================================


@pytest.fixture
def strike():
    return make_card("Strike_R")


@pytest.fixture
def defend():
    return make_card("Defend_R")


@pytest.fixture
def bash():
    """Bash: cost 2, 8 damage + 2 Vulnerable, targeted attack."""
    return make_card("Bash")


# =============================================================================
# Creature Fixtures
# =============================================================================


@pytest.fixture
def player():
    """Player at 80/80 with 3 energy."""
    return create_player(80, energy=3)


@pytest.fixture
def jaw_worm():
    """Jaw Worm at 44 hp, intending Chomp."""
    return create_monster(JAW_WORM, 44, move_history=[CHOMP])


@pytest.fixture
def cultist():
    """Cultist at 50 hp, intending Incantation."""
    return create_monster(CULTIST, 50, move_history=[INCANTATION])


@pytest.fixture
def weak_target():
    """A 10 hp monster with no powers and no known behaviour."""
    return create_monster("Unknown", 10)


# =============================================================================
# Combat State Fixtures
# =============================================================================


@pytest.fixture
def combat(player, jaw_worm):
    """Player vs a single Jaw Worm, empty piles."""
    return CombatState(player=player, monsters=[jaw_worm])


@pytest.fixture
def two_monster_combat(player):
    """Player vs two 20 hp monsters."""
    return CombatState(
        player=player,
        monsters=[create_monster("Unknown", 20), create_monster("Unknown", 20)],
    )


@pytest.fixture
def runner(combat):
    """Runner over `combat` with random auto-resolution disabled."""
    return Runner(combat)


@pytest.fixture
def random_runner(combat):
    """Runner over `combat` that samples random outcomes."""
    return Runner(combat, allow_random=True)


# =============================================================================
# Snapshot Fixtures
# =============================================================================


_OBSERVATION = {
    "ascension_level": 0,
    "combat_state": {
        "draw_pile": [{"id": "Strike_R", "cost": 1, "upgrades": 0, "misc": 0}],
        "discard_pile": [],
        "exhaust_pile": [],
        "limbo": [],
        "hand": [
            {"id": "Bash", "cost": 2, "upgrades": 0, "misc": 0},
            {"id": "Defend_R", "cost": 1, "upgrades": 0, "misc": 0},
        ],
        "card_in_play": None,
        "player": {
            "current_hp": 70,
            "max_hp": 80,
            "block": 0,
            "energy": 3,
            "powers": [],
        },
        "monsters": [
            {
                "id": "JawWorm",
                "current_hp": 40,
                "max_hp": 44,
                "block": 0,
                "move_id": 1,
                "last_move_id": None,
                "second_last_move_id": None,
                "move_base_damage": 11,
                "powers": [],
                "is_gone": False,
            },
        ],
    },
}


@pytest.fixture
def observation():
    """A turn-1 snapshot: Bash + Defend in hand vs a Jaw Worm about to Chomp."""
    return copy.deepcopy(_OBSERVATION)
