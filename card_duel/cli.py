"""CLI entry point – play / simulate / stats subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from card_duel.actions import PlayCard, get_legal_actions
from card_duel.ai import HumanAgent
from card_duel.cards import STARTER_CARDS
from card_duel.config import RulesConfig
from card_duel.display import render_board, render_stats
from card_duel.loader import load_cards
from card_duel.models import Card
from card_duel.policies import ENEMY_POLICIES, PLAYER_AGENTS, make_enemy_policy
from card_duel.session import DuelSession
from card_duel.simulation import aggregate, read_logs, run_batch


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="card_duel", description="Card Duel Engine")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command")

    # --- play ---
    p_play = sub.add_parser("play", help="Play a match against the AI")
    p_play.add_argument("--seed", type=int, default=None)
    p_play.add_argument("--cards", default=None, help="Path to card templates JSON")
    p_play.add_argument("--rules", default=None, help="Path to rules JSON")
    p_play.add_argument("--reveal-enemy-hand", action="store_true",
                        help="Show the enemy's hand")
    p_play.add_argument("--fast", action="store_true",
                        help="No pause while the enemy plays")
    p_play.add_argument("--enemy-policy", default="greedy", choices=sorted(ENEMY_POLICIES))

    # --- simulate ---
    p_sim = sub.add_parser("simulate", help="Run a batch of AI vs AI matches")
    p_sim.add_argument("--matches", type=int, default=100)
    p_sim.add_argument("--seed", type=int, default=42)
    p_sim.add_argument("--player-policy", default="greedy",
                       choices=sorted(PLAYER_AGENTS))
    p_sim.add_argument("--enemy-policy", default="greedy", choices=sorted(ENEMY_POLICIES))
    p_sim.add_argument("--cards", default=None, help="Path to card templates JSON")
    p_sim.add_argument("--rules", default=None, help="Path to rules JSON")
    p_sim.add_argument("--output", default="output/", help="Output directory")
    p_sim.add_argument("--trace", action="store_true", help="Include play traces in log")
    p_sim.add_argument("--telemetry", choices=["on", "off"], default="off",
                       help="Enable match telemetry collection")

    # --- stats ---
    p_stats = sub.add_parser("stats", help="Show stats from match logs")
    p_stats.add_argument("--logs", required=True, help="Path to match_logs.json")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "play":
        _cmd_play(args)
    elif args.command == "simulate":
        _cmd_simulate(args)
    elif args.command == "stats":
        _cmd_stats(args)


def _load_templates(path: str | None) -> list[Card]:
    return load_cards(path) if path else list(STARTER_CARDS)


def _load_rules(path: str | None, **overrides) -> RulesConfig:
    if path:
        return RulesConfig.from_json(path, **overrides)
    rules = RulesConfig(**{k: v for k, v in overrides.items() if v is not None})
    rules.validate()
    return rules


def _cmd_play(args: argparse.Namespace) -> None:
    overrides = {"reveal_enemy_hand": True if args.reveal_enemy_hand else None}
    if args.fast:
        overrides.update(enemy_think_delay=0.0, enemy_end_delay=0.0)
    rules = _load_rules(args.rules, **overrides)
    session = DuelSession(_load_templates(args.cards), rules, seed=args.seed,
                          policy=make_enemy_policy(args.enemy_policy))

    control_back = threading.Event()

    def on_snapshot(snap) -> None:
        if snap.is_player_turn or snap.is_game_over:
            control_back.set()

    session.subscribe(on_snapshot)
    session.on_notify(lambda n: print(f"  ! {n.title}: {n.message}"))

    agent = HumanAgent()
    try:
        while not session.state.is_game_over:
            legal = get_legal_actions(session.state)
            action = agent.choose_action(session.state, legal)
            if isinstance(action, PlayCard):
                session.play_card(action.hand_index)
            else:
                control_back.clear()
                if session.end_turn() is None:
                    print("  Enemy is thinking...")
                    control_back.wait()
    except (EOFError, KeyboardInterrupt):
        print("\nMatch abandoned.")
    finally:
        session.close()

    render_board(session.snapshot())


def _cmd_simulate(args: argparse.Namespace) -> None:
    templates = _load_templates(args.cards)
    rules = _load_rules(args.rules)
    telemetry_on = args.telemetry == "on"

    out = run_batch(
        args.matches, args.seed, args.player_policy, templates, rules,
        output_dir=args.output, trace=args.trace,
        telemetry_enabled=telemetry_on, enemy_policy=args.enemy_policy,
    )
    logs = out[0] if telemetry_on else out
    render_stats(aggregate(logs))
    print(f"Logs written to: {Path(args.output) / 'match_logs.json'}")


def _cmd_stats(args: argparse.Namespace) -> None:
    render_stats(aggregate(read_logs(args.logs)))


if __name__ == "__main__":
    main()
