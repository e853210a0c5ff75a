"""CLI display – board snapshot, actions, and stats."""

from __future__ import annotations

from typing import Any

from card_duel.actions import Action, EndTurn, PlayCard
from card_duel.models import AgentView, Card, MatchSnapshot, MatchState


def format_card(card: Card) -> str:
    return f"{card.name} ({card.cost}E, {card.kind} {card.value})"


def _render_side(label: str, view: AgentView, marker: str) -> None:
    print(f"  {label}: HP={view.health}  Block={view.block}  Energy={view.energy}  "
          f"Hand={view.hand_count}  Deck={view.deck_count}  "
          f"Discard={view.discard_count}{marker}")
    if view.hand is not None:
        cards = "  ".join(f"[{format_card(c)}]" for c in view.hand)
        print(f"      Hand: {cards or '(empty)'}")


def render_board(snap: MatchSnapshot) -> None:
    print(f"\n{'='*60}")
    print(f"  Turn {snap.turn}  |  Phase: {snap.phase.value}")
    print(f"{'='*60}")

    _render_side("Enemy", snap.enemy, "" if snap.is_player_turn else " <<")
    _render_side("You  ", snap.player, " <<" if snap.is_player_turn else "")

    if snap.log:
        print("\n  Log:")
        for line in snap.log:
            print(f"    {line}")
    if snap.is_game_over:
        print(f"\n  *** {snap.game_result} ***")
    print()


def render_actions(actions: list[Action], ms: MatchState) -> None:
    print("  Actions:")
    for i, action in enumerate(actions):
        match action:
            case PlayCard(hand_index=idx):
                card = ms.player.hand[idx]
                print(f"    [{i}] Play: {format_card(card)} – {card.description}")
            case EndTurn():
                print(f"    [{i}] End Turn")
    print()


def render_stats(stats: dict[str, Any]) -> None:
    print(f"\n{'='*50}")
    print(f"  Simulation Results  ({stats['total_matches']} matches)")
    print(f"{'='*50}")
    print(f"  Player wins: {stats['player_wins']:5d}  "
          f"Enemy wins: {stats['enemy_wins']:5d}  "
          f"Unfinished: {stats['unfinished']:5d}")
    print(f"  Player win rate: {stats['player_win_rate']:5.1f}%  "
          f"Avg turns: {stats['avg_turns']:.1f}")
    print()
