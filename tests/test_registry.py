"""
Registry Tests

Decorator registration and the fallbacks for unregistered ids.
"""

import pytest

from sts_resolver.calc.distribution import Distribution
from sts_resolver.content.cards import make_card
from sts_resolver.registry import (
    POWER_REGISTRY,
    TriggerRegistry,
    card_can_be_played,
    fold_power_hook,
    next_move_distribution,
)
from sts_resolver.state.combat import PLAYER, Power, create_monster


class TestTriggerRegistry:
    def test_register_and_lookup(self):
        """A registered handler is found under its hook and entity."""
        registry = TriggerRegistry("test")
        handler = lambda ctx: ctx  # noqa: E731
        registry.register("hook", "Entity", handler)
        assert registry.get_handler("hook", "Entity") is handler
        assert registry.has_handler("hook", "Entity")
        assert registry.list_hooks() == ["hook"]
        assert registry.list_entities("hook") == ["Entity"]

    def test_missing(self):
        """Unregistered lookups return None."""
        registry = TriggerRegistry("test")
        assert registry.get_handler("hook", "Entity") is None
        assert not registry.has_handler("hook", "Entity")
        assert registry.list_entities("hook") == []


class TestPowerHooks:
    @pytest.mark.parametrize("hook,power", [
        ("atDamageGive", "Strength"),
        ("atDamageGive", "Weakened"),
        ("atDamageReceive", "Vulnerable"),
        ("atDamageReceive", "Slow"),
        ("atDamageFinalReceive", "Intangible"),
        ("atDamageFinalReceive", "IntangiblePlayer"),
        ("atDamageFinalReceive", "Flight"),
        ("modifyBlock", "Dexterity"),
        ("modifyBlock", "Frail"),
    ])
    def test_registered(self, hook, power):
        """Every damage and block modifier has a handler."""
        assert POWER_REGISTRY.has_handler(hook, power)

    def test_fold_is_identity_without_powers(self, combat):
        """No powers leaves the value unchanged."""
        assert fold_power_hook("atDamageGive", combat, PLAYER, 6.5) == 6.5

    def test_fold_visits_each_id_once(self, combat):
        """Split entries of one power apply once with the summed amount."""
        combat.player.creature.powers = [Power("Weakened", 1), Power("Weakened", 1)]
        assert fold_power_hook("atDamageGive", combat, PLAYER, 8.0) == 6.0


class TestDefaults:
    def test_cards_playable_by_default(self, combat, strike):
        """Cards without a playability hook are playable."""
        assert card_can_be_played(combat, strike)

    def test_unknown_monster_repeats_intent(self, combat):
        """Monsters without AI keep their current intent."""
        combat.monsters.append(create_monster("Unknown", 10, move_history=[5]))
        assert next_move_distribution(combat, 1).values() == [5]

    def test_unknown_monster_without_history(self, combat):
        """Monsters without AI or history default to move 0."""
        combat.monsters.append(create_monster("Unknown", 10))
        assert next_move_distribution(combat, 1).values() == [0]

    def test_distribution_type(self, combat):
        """Next-move AI returns a Distribution."""
        assert isinstance(next_move_distribution(combat, 0), Distribution)

    def test_clash_hook(self, combat):
        """Clash's own hook is consulted."""
        clash = make_card("Clash")
        combat.hand = [clash, make_card("Defend_R")]
        assert not card_can_be_played(combat, clash)
