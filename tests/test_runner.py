"""
Runner Tests

Applicability, resolution order, blocking and resumption.
"""

import logging

import pytest

from sts_resolver.actions import (
    Action,
    ActionContractError,
    DrawCard,
    ExhaustCard,
    ExhaustChoice,
    FixedOutcome,
    GainBlock,
)
from sts_resolver.calc.distribution import Choice, Distribution, Random
from sts_resolver.config import ResolverConfig
from sts_resolver.runner import Runner, run_until_unable
from sts_resolver.state.combat import PLAYER


class Record(Action):
    """Logs its name and spawns children through action_now."""

    def __init__(self, name, log, spawns=()):
        self.name = name
        self.log = log
        self.spawns = spawns

    def execute(self, runner):
        self.log.append(self.name)
        for child in self.spawns:
            runner.action_now(child)

    def __repr__(self):
        return f"Record({self.name})"


class Roll(Action):
    """Random over the given values; logs the value it resolved to."""

    def __init__(self, name, log, values=(1, 2), weights=(1.0, 3.0)):
        self.name = name
        self.log = log
        self.distribution = Distribution(list(zip(weights, values)))

    def determinism(self, state):
        return Random(self.distribution)

    def execute_random(self, runner, random_value):
        self.log.append(f"{self.name}:{random_value}")


class Pick(Action):
    """A choice between two Records."""

    def __init__(self, log):
        self.options = [Record("left", log), Record("right", log)]

    def determinism(self, state):
        return Choice()

    def resolutions(self, state):
        return self.options


class TestCanApply:
    """Which actions run without outside input."""

    def test_deterministic(self, runner):
        """Deterministic actions always apply."""
        assert runner.can_apply(Record("a", []))

    def test_random_blocked_without_allow_random(self, runner):
        """Random actions wait unless random resolution is on."""
        assert not runner.can_apply(Roll("r", []))

    def test_random_allowed(self, random_runner):
        """Random actions apply when random resolution is on."""
        assert random_runner.can_apply(Roll("r", []))

    def test_single_outcome_random_always_applies(self, runner):
        """A one-outcome random action never waits."""
        assert runner.can_apply(Roll("r", [], values=(5,), weights=(0.3,)))

    def test_choice_never_applies(self, random_runner):
        """Choices always wait for input."""
        assert not random_runner.can_apply(Pick([]))

    def test_nothing_applies_after_combat(self, runner):
        """Nothing applies once combat is over."""
        runner.state.monsters[0].gone = True
        assert not runner.can_apply(Record("a", []))


class TestApply:
    """Direct application."""

    def test_deterministic_executes(self, runner):
        """Deterministic actions run through execute."""
        log = []
        runner.apply(Record("a", log))
        assert log == ["a"]

    def test_random_samples_a_possible_value(self, random_runner):
        """Random actions run with a sampled outcome."""
        log = []
        random_runner.apply(Roll("r", log))
        assert log in (["r:1"], ["r:2"])

    def test_choice_raises(self, runner):
        """Applying a choice directly is an error."""
        with pytest.raises(ActionContractError):
            runner.apply(Pick([]))

    def test_wrong_execution_path_raises(self, random_runner):
        """An action missing its random path fails loudly."""
        class RandomWithoutRandomPath(Action):
            def determinism(self, state):
                return Random(Distribution([(1.0, 1), (1.0, 2)]))

        with pytest.raises(ActionContractError):
            random_runner.apply(RandomWithoutRandomPath())

    def test_base_action_execute_raises(self, runner):
        """The bare base action has no effect to run."""
        with pytest.raises(ActionContractError):
            runner.apply(Action())


class TestResolutionOrder:
    """Spawned actions resolve depth-first, in spawn order."""

    def test_children_before_next_top_level(self, runner):
        """Spawned actions finish before the next top-level one."""
        log = []
        a = Record("A", log, spawns=[Record("X", log), Record("Y", log)])
        runner.action_bottom(a)
        runner.action_bottom(Record("B", log))
        run_until_unable(runner)
        assert log == ["A", "X", "Y", "B"]

    def test_grandchildren_before_siblings(self, runner):
        """Resolution is depth-first."""
        log = []
        x = Record("X", log, spawns=[Record("Z", log)])
        runner.action_bottom(Record("A", log, spawns=[x, Record("Y", log)]))
        runner.action_bottom(Record("B", log))
        run_until_unable(runner)
        assert log == ["A", "X", "Z", "Y", "B"]

    def test_queued_children_keep_spawn_order(self, runner):
        """A blocked first child keeps its later siblings waiting."""
        log = []
        a = Record("A", log, spawns=[Roll("R", log), Record("Y", log), Record("W", log)])
        runner.action_bottom(a)
        runner.action_bottom(Record("B", log))
        run_until_unable(runner)
        assert log == ["A"]

        runner.choose_outcome(2)
        run_until_unable(runner)
        assert log == ["A", "R:2", "Y", "W", "B"]

    def test_action_top_interrupts(self, runner):
        """action_top jumps the queue."""
        log = []
        runner.action_bottom(Record("B", log))
        runner.action_top(Record("A", log))
        run_until_unable(runner)
        assert log == ["A", "B"]

    def test_stops_when_combat_ends(self, runner):
        """Nothing more runs once combat is over."""
        log = []
        runner.action_bottom(GainBlock(target=PLAYER, amount=1))
        runner.state.player.creature.hitpoints = 0
        runner.action_bottom(Record("B", log))
        run_until_unable(runner)
        assert log == []
        assert len(runner.state.actions) == 2


class TestBlocking:
    """The loop halts rather than sample or choose."""

    def test_random_halts_loop(self, runner):
        """A random action stops the loop with everything after it."""
        log = []
        runner.action_bottom(Roll("R", log))
        runner.action_bottom(Record("B", log))
        run_until_unable(runner)
        assert log == []
        assert isinstance(runner.pending_action(), Roll)
        assert len(runner.state.actions) == 1

    def test_random_resolved_when_allowed(self, random_runner):
        """With random resolution on the loop runs through."""
        log = []
        random_runner.action_bottom(Roll("R", log))
        random_runner.action_bottom(Record("B", log))
        run_until_unable(random_runner)
        assert len(log) == 2
        assert log[1] == "B"
        assert random_runner.pending_action() is None

    def test_choice_halts_loop(self, random_runner):
        """A choice always stops the loop."""
        log = []
        random_runner.action_bottom(Pick(log))
        random_runner.action_bottom(Record("B", log))
        run_until_unable(random_runner)
        assert log == []
        assert isinstance(random_runner.pending_action(), Pick)

    def test_blocked_state_resumes_with_new_runner(self, runner):
        """Pending work lives on the state."""
        log = []
        runner.action_bottom(Roll("R", log))
        run_until_unable(runner)

        resumed = Runner(runner.state, allow_random=True)
        run_until_unable(resumed)
        assert len(log) == 1


class TestResumption:
    """Supplying outcomes and choices from outside."""

    def test_no_pending(self, runner):
        """Resolving with nothing pending is an error."""
        assert runner.pending_action() is None
        with pytest.raises(ValueError):
            runner.choose_outcome(1)
        with pytest.raises(ValueError):
            runner.resolve_pending(Record("a", []))

    def test_choose_outcome(self, runner):
        """A chosen outcome unblocks the loop."""
        log = []
        runner.action_bottom(Roll("R", log))
        run_until_unable(runner)
        runner.choose_outcome(1)
        assert runner.pending_action() is None
        assert isinstance(runner.state.stale_subaction_stack[-1], FixedOutcome)
        run_until_unable(runner)
        assert log == ["R:1"]

    def test_choose_impossible_outcome(self, runner):
        """Outcomes outside the distribution are rejected."""
        runner.action_bottom(Roll("R", []))
        run_until_unable(runner)
        with pytest.raises(ValueError):
            runner.choose_outcome(9)

    def test_choose_outcome_on_choice(self, runner):
        """Choices cannot be given a random outcome."""
        runner.action_bottom(Pick([]))
        run_until_unable(runner)
        with pytest.raises(ValueError):
            runner.choose_outcome(1)

    def test_resolve_choice(self, runner):
        """One of the offered resolutions replaces the choice."""
        log = []
        pick = Pick(log)
        runner.action_bottom(pick)
        run_until_unable(runner)
        runner.resolve_pending(pick.options[1])
        run_until_unable(runner)
        assert log == ["right"]

    def test_resolve_choice_rejects_other_actions(self, runner):
        """Only offered resolutions are accepted."""
        runner.action_bottom(Pick([]))
        run_until_unable(runner)
        with pytest.raises(ValueError):
            runner.resolve_pending(Record("elsewhere", []))

    def test_resolve_exhaust_choice(self, runner, strike, defend):
        """Resolving an exhaust choice exhausts the picked card."""
        runner.state.hand = [strike, defend]
        runner.action_now(ExhaustChoice())
        assert isinstance(runner.pending_action(), ExhaustChoice)
        runner.resolve_pending(ExhaustCard(defend))
        run_until_unable(runner)
        assert runner.state.hand == [strike]
        assert runner.state.exhaust_pile == [defend]

    def test_pending_from_fresh_queue(self, runner, strike, defend):
        """A blocked action still in the fresh queue is reported."""
        runner.state.draw_pile = [strike, defend]
        runner.action_now(DrawCard())
        assert isinstance(runner.pending_action(), DrawCard)
        runner.choose_outcome(0)
        run_until_unable(runner)
        assert runner.state.hand == [strike]


class TestActionNow:
    """Inline execution versus queueing."""

    def test_inline_when_nothing_waiting(self, runner):
        """With nothing waiting an action runs at once."""
        runner.action_now(GainBlock(target=PLAYER, amount=4))
        assert runner.state.player.creature.block == 4
        assert runner.state.fresh_subaction_queue == []

    def test_queued_behind_waiting_action(self, runner):
        """Actions queue behind one that is waiting."""
        runner.action_now(Roll("R", []))
        runner.action_now(GainBlock(target=PLAYER, amount=4))
        assert runner.state.player.creature.block == 0
        assert len(runner.state.fresh_subaction_queue) == 2


class TestDebugLog:
    """Before/after trace."""

    def test_trace_recorded(self, combat):
        """Each applied action is traced before and after."""
        runner = Runner(combat, debug=True)
        runner.apply(GainBlock(target=PLAYER, amount=4))
        assert "Applying GainBlock(target=Player, amount=4, from_card=False)" in runner.debug_log
        assert "Done applying GainBlock" in runner.debug_log

    def test_trace_logged_at_debug(self, combat, caplog):
        """The trace also goes to the module logger."""
        runner = Runner(combat, debug=True)
        with caplog.at_level(logging.DEBUG, logger="sts_resolver.runner"):
            runner.apply(GainBlock(target=PLAYER, amount=4))
        assert "Applying GainBlock" in caplog.text

    def test_no_trace_without_debug(self, runner):
        """No trace is kept with debug off."""
        runner.apply(GainBlock(target=PLAYER, amount=4))
        assert runner.debug_log == ""


class TestFromConfig:
    def test_flags(self, combat):
        """Config flags carry onto the runner."""
        runner = Runner.from_config(combat, ResolverConfig(allow_random=True, debug=True))
        assert runner.allow_random
        assert runner.debug
        assert runner.state is combat
