"""
sts-resolver - Command Line Interface

Inspect and resolve combat snapshots saved from the game client.

Usage:
    sts-resolver choices snapshot.json
    sts-resolver play snapshot.json --choice 1 --allow-random --seed 7
    sts-resolver play snapshot.json --choice 0 --previous last_turn.json -v
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .actions import Action, EndTurn, PlayCard
from .config import ResolverConfig
from .runner import Runner, run_until_unable
from .state.combat import CombatState
from .state.converter import combat_state_from_communication

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def load_observation(path: str) -> Dict[str, Any]:
    """Read a snapshot file. Accepts a bare game_state or a full client message."""
    with open(path) as f:
        data = json.load(f)
    return data.get("game_state", data)


def load_state(path: str, previous_path: Optional[str] = None) -> Optional[CombatState]:
    previous = None
    if previous_path:
        previous = combat_state_from_communication(load_observation(previous_path))
    return combat_state_from_communication(load_observation(path), previous)


def describe_action(action: Action, state: CombatState) -> str:
    if isinstance(action, EndTurn):
        return "End turn"
    if isinstance(action, PlayCard):
        if action.card.card_info.has_target:
            monster = state.monsters[action.target]
            return f"Play {action.card} -> Monster({action.target}) {monster.monster_id}"
        return f"Play {action.card}"
    return repr(action)


def format_choices(state: CombatState, choices: List[Action]) -> str:
    return "\n".join(
        f"  [{i}] {describe_action(choice, state)}" for i, choice in enumerate(choices)
    )


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_choices(args) -> int:
    """Print the legal choices for a snapshot."""
    state = load_state(args.snapshot)
    if state is None:
        print(f"No combat in {args.snapshot}", file=sys.stderr)
        return 1

    print(state.summary())
    print("\nLegal choices:")
    print(format_choices(state, state.legal_choices()))
    return 0


def cmd_play(args) -> int:
    """Apply one legal choice and resolve until blocked or combat ends."""
    config = ResolverConfig.from_args(args)
    config.seed_random()

    state = load_state(args.snapshot, args.previous)
    if state is None:
        print(f"No combat in {args.snapshot}", file=sys.stderr)
        return 1

    choices = state.legal_choices()
    if not 0 <= args.choice < len(choices):
        print(f"Choice {args.choice} out of range (0-{len(choices) - 1})", file=sys.stderr)
        return 1
    choice = choices[args.choice]

    runner = Runner.from_config(state, config)
    logger.info("Playing: %s", describe_action(choice, state))
    runner.apply(choice)
    run_until_unable(runner)

    print(state.summary())
    if state.combat_over():
        print("\nCombat over")
    pending = runner.pending_action()
    if pending is not None:
        print(f"\nBlocked on: {pending!r}")
    if config.debug:
        print("\nTrace:")
        print(runner.debug_log)
    return 0


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sts-resolver",
        description="Slay the Spire combat resolver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s choices snapshot.json
  %(prog)s play snapshot.json --choice 1 --allow-random --seed 7
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Choices command
    choices_parser = subparsers.add_parser("choices", help="List legal choices for a snapshot")
    choices_parser.add_argument("snapshot", help="Snapshot JSON file")
    choices_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    # Play command
    play_parser = subparsers.add_parser("play", help="Apply a choice and resolve")
    play_parser.add_argument("snapshot", help="Snapshot JSON file")
    play_parser.add_argument("--choice", "-c", type=int, required=True, help="Index from `choices`")
    play_parser.add_argument("--previous", "-p", help="Prior snapshot, for carried-over values")
    play_parser.add_argument("--allow-random", action="store_true", help="Sample random outcomes")
    play_parser.add_argument("--seed", "-s", type=int, help="Seed for sampled outcomes")
    play_parser.add_argument("--debug", action="store_true", help="Print the resolution trace")
    play_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "choices": cmd_choices,
        "play": cmd_play,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
