#!/usr/bin/env python3
"""
Ship Escape - Command Line Interface

Play the game on the console, run seeded headless games, fight single
battles and inspect the ship.

Usage:
    python cli.py play --seed ESCAPE
    python cli.py simulate --seed ESCAPE --max-turns 500 --json
    python cli.py battle --enemy Guard --weapon Wrench --food Apple
    python cli.py map
    python cli.py rng --seed ESCAPE --count 20

Settings are read from ESCAPE_SEED, ESCAPE_LOG_LEVEL and ESCAPE_LOG_FILE
(a .env file in the working directory is loaded first). Flags override them.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from packages.escape.combat_engine import battle
from packages.escape.config import PLAYER_START_HEALTH, PLAYER_START_MAX_HEALTH, Settings
from packages.escape.content.enemies import ENEMY_DATA, create_enemy
from packages.escape.content.items import ALL_ITEMS, get_item, is_food, is_weapon
from packages.escape.content.rooms import build_room_graph, graph_to_string
from packages.escape.game import GameRunner
from packages.escape.menu import ConsoleMenu, RandomMenu
from packages.escape.state.combat import PlayerState
from packages.escape.state.rng import GameRNG, seed_to_long

logger = logging.getLogger(__name__)


# =============================================================================
# SETUP
# =============================================================================

def configure_logging(settings: Settings) -> None:
    """Log to a file if one is configured, otherwise to stderr."""
    handlers: List[logging.Handler] = []
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(
        level=settings.numeric_log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def resolve_settings(args) -> Settings:
    """Environment settings, overridden by command-line flags."""
    settings = Settings.from_env()
    if getattr(args, "seed", None):
        settings.seed = args.seed
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.log_file:
        settings.log_file = args.log_file
    return settings


def format_seed_info(seed_string: str) -> str:
    return f"Seed: {seed_string} (numeric: {seed_to_long(seed_string)})"


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_play(args, settings: Settings) -> int:
    """Interactive game on the console."""
    runner = GameRunner(ConsoleMenu(), seed=settings.seed)
    try:
        summary = runner.run()
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye.")
        return 130

    print()
    print(f"Escaped after {summary.turns} turns and {summary.loops} restarts.")
    return 0


def cmd_simulate(args, settings: Settings) -> int:
    """Headless game with random choices."""
    runner = GameRunner(seed=settings.seed)
    summary = runner.run(max_turns=args.max_turns)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
        return 0

    print(format_seed_info(settings.seed))
    print(f"Escaped:     {'yes' if summary.escaped else 'no'}")
    print(f"Turns:       {summary.turns}")
    print(f"Loops:       {summary.loops}")
    print(f"Battles won: {summary.battles_won}")
    print(f"Battles lost: {summary.battles_lost}")
    return 0 if summary.escaped else 1


def cmd_battle(args, settings: Settings) -> int:
    """A single battle against one enemy."""
    rng = GameRNG(seed_to_long(settings.seed))
    inventory = []
    try:
        if args.weapon:
            inventory.append(get_item(args.weapon))
        if args.food:
            inventory.append(get_item(args.food))
        enemy = create_enemy(args.enemy, rng.ai_rng)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    player = PlayerState(
        health=PLAYER_START_HEALTH,
        max_health=PLAYER_START_MAX_HEALTH,
        inventory=inventory,
    )
    menu = RandomMenu(rng.choice_rng) if args.auto else ConsoleMenu()

    try:
        result = battle(player, enemy, turn=0, menu=menu)
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye.")
        return 130

    print()
    print(f"Result: {result.result.value} after {result.turns_taken} turns")
    print(f"Damage dealt: {result.damage_dealt}, taken: {result.damage_taken}, healed: {result.healing_done}")
    return 0 if result.victory else 1


def cmd_map(args, settings: Settings) -> int:
    """Print every room with its exits, items and enemy."""
    rng = GameRNG(seed_to_long(settings.seed))
    print(graph_to_string(build_room_graph(rng.ai_rng)))
    return 0


def cmd_rng(args, settings: Settings) -> int:
    """Show the first values of the enemy AI stream for a seed and loop."""
    rng = GameRNG(seed_to_long(settings.seed))
    for _ in range(args.loop):
        rng.advance_loop()
    values = [rng.ai_rng.random_int(99) for _ in range(args.count)]

    if args.json:
        print(json.dumps({"seed": settings.seed, "loop": args.loop, "values": values}))
        return 0

    print(format_seed_info(settings.seed))
    print(f"Loop {args.loop}: {' '.join(str(v) for v in values)}")
    return 0


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ship Escape - a time-loop text adventure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s play --seed ESCAPE
  %(prog)s simulate --seed ESCAPE --max-turns 500
  %(prog)s battle --enemy Guard --weapon Wrench
  %(prog)s map
  %(prog)s rng --seed ESCAPE --count 20
        """
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (default: $ESCAPE_LOG_LEVEL)")
    parser.add_argument("--log-file", help="Write logs to this file instead of stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play the game on the console")
    play_parser.add_argument("--seed", "-s", help="Game seed (default: $ESCAPE_SEED)")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a game with random choices")
    simulate_parser.add_argument("--seed", "-s", help="Game seed")
    simulate_parser.add_argument("--max-turns", "-t", type=int, default=10000, help="Stop after this many turns")
    simulate_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Battle command
    weapon_ids = sorted(item_id for item_id, item in ALL_ITEMS.items() if is_weapon(item))
    food_ids = sorted(item_id for item_id, item in ALL_ITEMS.items() if is_food(item))
    battle_parser = subparsers.add_parser("battle", help="Fight a single battle")
    battle_parser.add_argument("--enemy", "-e", required=True, choices=sorted(ENEMY_DATA), help="Enemy ID")
    battle_parser.add_argument("--seed", "-s", help="Game seed")
    battle_parser.add_argument("--weapon", "-w", choices=weapon_ids, help="Starting weapon")
    battle_parser.add_argument("--food", "-f", choices=food_ids, help="Starting food")
    battle_parser.add_argument("--auto", action="store_true", help="Pick the player's moves at random")

    # Map command
    map_parser = subparsers.add_parser("map", help="Display the ship")
    map_parser.add_argument("--seed", "-s", help="Game seed")

    # RNG command
    rng_parser = subparsers.add_parser("rng", help="Show the enemy AI RNG stream")
    rng_parser.add_argument("--seed", "-s", help="Game seed")
    rng_parser.add_argument("--loop", "-l", type=int, default=0, help="Time loop number")
    rng_parser.add_argument("--count", "-n", type=int, default=20, help="Number of values to show")
    rng_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = resolve_settings(args)
    configure_logging(settings)
    logger.debug("Settings: %s", settings)

    # Dispatch to command handler
    commands = {
        "play": cmd_play,
        "simulate": cmd_simulate,
        "battle": cmd_battle,
        "map": cmd_map,
        "rng": cmd_rng,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args, settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
