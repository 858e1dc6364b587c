"""
Runner - applies actions to a CombatState and drives resolution.

The runner owns the state for the duration of a resolution pass. Work
lives in three structures on the state itself:

- actions: top-level ordered work list (action_top / action_bottom)
- fresh_subaction_queue: actions generated during the current step
- stale_subaction_stack: near-term work, top of stack runs next

Because the structures belong to the state, a pass that blocks (on a
Choice, or on a Random action while random resolution is disabled) can
be resumed later by any Runner over the same state.

Usage:
    runner = Runner(state, allow_random=True)
    runner.apply(PlayCard(card, target=0))
    run_until_unable(runner)
    if runner.pending_action() is not None:
        ...  # supply a resolution, then run_until_unable(runner) again
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .actions import Action, ActionContractError, FixedOutcome
from .calc.distribution import Choice, Deterministic, Random

if TYPE_CHECKING:
    from .config import ResolverConfig
    from .state.combat import CombatState

logger = logging.getLogger(__name__)

__all__ = ["Runner", "run_until_unable"]


class Runner:
    """Applies actions to a combat state."""

    def __init__(self, state: CombatState, allow_random: bool = False, debug: bool = False):
        self._state = state
        self.allow_random = allow_random
        self.debug = debug
        self._log: List[str] = []

    @classmethod
    def from_config(cls, state: CombatState, config: ResolverConfig) -> Runner:
        return cls(state, allow_random=config.allow_random, debug=config.debug)

    @property
    def state(self) -> CombatState:
        return self._state

    @property
    def debug_log(self) -> str:
        return "\n".join(self._log)

    # -------------------------------------------------------------------------
    # Applying actions
    # -------------------------------------------------------------------------

    def _can_apply_now(self, action: Action) -> bool:
        determinism = action.determinism(self._state)
        if isinstance(determinism, Deterministic):
            return True
        if isinstance(determinism, Random):
            return self.allow_random or len(determinism.distribution) == 1
        return False

    def can_apply(self, action: Action) -> bool:
        """Whether the action can run right now without outside input."""
        return self._can_apply_now(action) and not self._state.combat_over()

    def apply(self, action: Action) -> None:
        """Execute an action immediately, sampling if it is Random."""
        self._trace("Applying %r to state %s", action)
        determinism = action.determinism(self._state)
        if isinstance(determinism, Deterministic):
            action.execute(self)
        elif isinstance(determinism, Random):
            random_value = determinism.distribution.sample()
            action.execute_random(self, random_value)
        else:
            raise ActionContractError(f"Cannot auto-apply {action!r}: it requires a choice")
        self._trace("Done applying %r; state is now %s", action)

    def _trace(self, message: str, action: Action) -> None:
        if not self.debug:
            return
        line = message % (action, self._state.summary())
        self._log.append(line)
        logger.debug(line)

    # -------------------------------------------------------------------------
    # Queueing
    # -------------------------------------------------------------------------

    def action_now(self, action: Action) -> None:
        """Run inline if nothing is waiting and it can apply, else queue it."""
        if not self._state.fresh_subaction_queue and self.can_apply(action):
            self.apply(action)
        else:
            self._state.fresh_subaction_queue.append(action)

    def action_top(self, action: Action) -> None:
        self._state.actions.appendleft(action)

    def action_bottom(self, action: Action) -> None:
        self._state.actions.append(action)

    # -------------------------------------------------------------------------
    # Resumption
    # -------------------------------------------------------------------------

    def pending_action(self) -> Optional[Action]:
        """
        The action resolution is blocked on, or None.

        This is the action the loop would run next, reported only when it
        cannot run without outside input.
        """
        state = self._state
        if state.combat_over():
            return None
        if state.fresh_subaction_queue:
            action = state.fresh_subaction_queue[0]
        elif state.stale_subaction_stack:
            action = state.stale_subaction_stack[-1]
        else:
            return None
        if self._can_apply_now(action):
            return None
        return action

    def _replace_pending(self, replacement: Action) -> None:
        state = self._state
        if state.fresh_subaction_queue:
            state.fresh_subaction_queue[0] = replacement
        else:
            state.stale_subaction_stack[-1] = replacement

    def resolve_pending(self, resolution: Action) -> None:
        """
        Replace the blocking action with a concrete one.

        For a Choice the resolution must be one of its resolutions(state).
        Call run_until_unable again afterwards.
        """
        pending = self.pending_action()
        if pending is None:
            raise ValueError("No action is pending")
        if isinstance(pending.determinism(self._state), Choice):
            allowed = pending.resolutions(self._state)
            if resolution not in allowed:
                raise ValueError(f"{resolution!r} is not a resolution of {pending!r}")
        logger.debug("Resolving %r with %r", pending, resolution)
        self._replace_pending(resolution)

    def choose_outcome(self, value: int) -> None:
        """Fix the outcome of a blocked Random action."""
        pending = self.pending_action()
        if pending is None:
            raise ValueError("No action is pending")
        determinism = pending.determinism(self._state)
        if not isinstance(determinism, Random):
            raise ValueError(f"{pending!r} is not a random action")
        if value not in determinism.distribution.values():
            raise ValueError(f"{value} is not a possible outcome of {pending!r}")
        logger.debug("Fixing outcome of %r to %d", pending, value)
        self._replace_pending(FixedOutcome(pending, value))


def run_until_unable(runner: Runner) -> None:
    """
    Resolve queued actions until combat ends or an action needs input.

    Everything an action spawns resolves, in the order it was spawned,
    before the next top-level action starts.
    """
    state = runner.state
    while True:
        if state.combat_over():
            break

        # Popping the fresh queue onto the stack leaves the oldest on top
        while state.fresh_subaction_queue:
            state.stale_subaction_stack.append(state.fresh_subaction_queue.pop())

        if state.stale_subaction_stack:
            action = state.stale_subaction_stack.pop()
            if runner.can_apply(action):
                runner.action_now(action)
            else:
                state.stale_subaction_stack.append(action)
                break
        elif state.actions:
            runner.action_now(state.actions.popleft())
        else:
            break
