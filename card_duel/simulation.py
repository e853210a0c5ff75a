"""Batch simulation and aggregation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from card_duel.cards import STARTER_CARDS
from card_duel.config import RulesConfig
from card_duel.engine import init_match, run_match
from card_duel.models import Card, MatchLog, MatchResult
from card_duel.policies import make_enemy_policy, make_player_agent
from card_duel.telemetry import MatchTelemetry

logger = logging.getLogger(__name__)


def run_batch(
    n_matches: int,
    base_seed: int,
    player_policy: str = "greedy",
    templates: Sequence[Card] = STARTER_CARDS,
    rules: RulesConfig | None = None,
    output_dir: str | Path | None = None,
    trace: bool = False,
    telemetry_enabled: bool = False,
    enemy_policy: str = "greedy",
) -> list[MatchLog] | tuple[list[MatchLog], list[dict[str, Any]]]:
    """Play ``n_matches`` headless matches, seeds base_seed..base_seed+n-1.

    Returns the logs, or (logs, telemetry summaries) when telemetry is on.
    """
    enemy = make_enemy_policy(enemy_policy)
    logs: list[MatchLog] = []
    summaries: list[dict[str, Any]] = []

    for m in range(n_matches):
        seed = base_seed + m
        ms = init_match(templates, rules, seed=seed)
        tm = MatchTelemetry() if telemetry_enabled else None
        log = run_match(ms, make_player_agent(player_policy, seed), enemy,
                        trace=trace, telemetry=tm, seed=seed)
        logs.append(log)
        if tm is not None:
            summaries.append({"seed": seed, **tm.to_summary()})

    logger.info("Simulated %d match(es): player '%s' vs enemy '%s'",
                n_matches, player_policy, enemy_policy)

    if output_dir is not None:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        _write_logs(logs, out / "match_logs.json")
        if telemetry_enabled:
            with open(out / "telemetry.json", "w", encoding="utf-8") as f:
                json.dump(summaries, f, indent=2, ensure_ascii=False)

    if telemetry_enabled:
        return logs, summaries
    return logs


def _write_logs(logs: list[MatchLog], path: Path) -> None:
    data = []
    for i, log in enumerate(logs):
        entry: dict[str, Any] = {
            "match_id": i,
            "seed": log.seed,
            "winner": log.winner.value if log.winner is not None else None,
            "turns": log.turns,
            "final_health": list(log.final_health),
        }
        if log.play_trace is not None:
            entry["play_trace"] = log.play_trace
        data.append(entry)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def read_logs(path: str | Path) -> list[MatchLog]:
    """Reconstruct MatchLog objects from a match_logs.json file."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    logs = []
    for entry in raw:
        winner = entry.get("winner")
        logs.append(MatchLog(
            seed=entry.get("seed"),
            winner=MatchResult(winner) if winner is not None else None,
            turns=entry["turns"],
            final_health=tuple(entry["final_health"]),
        ))
    return logs


def aggregate(logs: list[MatchLog]) -> dict[str, Any]:
    """Compute win counts, player win rate and average match length."""
    player_wins = sum(1 for log in logs if log.winner is MatchResult.PLAYER_WIN)
    enemy_wins = sum(1 for log in logs if log.winner is MatchResult.ENEMY_WIN)
    total = len(logs)
    return {
        "total_matches": total,
        "player_wins": player_wins,
        "enemy_wins": enemy_wins,
        "unfinished": total - player_wins - enemy_wins,
        "player_win_rate": round(player_wins / total * 100, 1) if total else 0.0,
        "avg_turns": round(sum(log.turns for log in logs) / total, 2) if total else 0.0,
    }
