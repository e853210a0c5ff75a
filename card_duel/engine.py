"""Game engine – match init, turn lifecycle, reducer step, headless loop."""

from __future__ import annotations

import logging
import random
from typing import Sequence, TYPE_CHECKING

from card_duel.actions import (
    Action, EndTurn, PlayCard, Rejection, apply_action, get_legal_actions,
)
from card_duel.cards import STARTER_CARDS
from card_duel.config import RulesConfig
from card_duel.deck import build_starting_deck, draw_into
from card_duel.models import (
    ENEMY, PLAYER, AgentState, Card, MatchLog, MatchState, Phase,
)

if TYPE_CHECKING:
    from card_duel.ai import Agent, EnemyPolicy
    from card_duel.telemetry import MatchTelemetry

logger = logging.getLogger(__name__)

MAX_TURNS = 200


def _init_agent(
    templates: Sequence[Card], rules: RulesConfig, rng: random.Random,
) -> AgentState:
    agent = AgentState(
        health=rules.max_health,
        block=0,
        energy=rules.turn_start_energy,
        deck=build_starting_deck(templates, rules.deck_copies, rng),
    )
    draw_into(agent, rules.initial_hand_size, rng)
    return agent


def init_match(
    templates: Sequence[Card] = STARTER_CARDS,
    rules: RulesConfig | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> MatchState:
    """Build a fresh match with the player to act.

    Pass ``rng`` to share a random source across matches, or ``seed`` for a
    reproducible one.
    """
    if not templates:
        raise ValueError("At least one card template is required")
    rules = rules or RulesConfig()
    rules.validate()
    if rng is None:
        rng = random.Random(seed)

    # Each side gets its own shuffle
    player = _init_agent(templates, rules, rng)
    enemy = _init_agent(templates, rules, rng)

    ms = MatchState(player=player, enemy=enemy, active_side=PLAYER,
                    rng=rng, rules=rules)
    ms.add_log("Game started! Your turn.")
    logger.info("Match started (%d cards per side)", player.total_cards())
    return ms


def start_turn(
    ms: MatchState,
    side: int,
    telemetry: "MatchTelemetry | None" = None,
) -> None:
    """Hand control to ``side``: reset its energy, then draw."""
    ms.active_side = side
    ms.turn += 1
    agent = ms.agent(side)
    agent.energy = ms.rules.turn_start_energy
    if telemetry:
        telemetry.on_turn_start(ms, side)

    draw = draw_into(agent, ms.rules.turn_draw, ms.rng)
    if telemetry:
        telemetry.on_cards_drawn(ms, side, draw)

    ms.add_log("Your turn started." if side == PLAYER else "Enemy's turn started.")


def end_player_turn(
    ms: MatchState,
    telemetry: "MatchTelemetry | None" = None,
) -> Rejection | None:
    rejection = apply_action(ms, EndTurn(), telemetry)
    if rejection is not None:
        if telemetry:
            telemetry.on_rejected(ms, PLAYER, rejection)
        return rejection
    ms.add_log("You ended your turn.")
    # block is kept until consumed by damage
    if telemetry:
        telemetry.on_turn_end(ms, PLAYER)
    start_turn(ms, ENEMY, telemetry)
    return None


def resolve_enemy_turn(
    ms: MatchState,
    policy: "EnemyPolicy",
    telemetry: "MatchTelemetry | None" = None,
) -> list[Card]:
    if ms.phase is not Phase.ENEMY_TURN:
        return []
    return policy.take_turn(ms, ENEMY, telemetry)


def finish_enemy_turn(
    ms: MatchState,
    telemetry: "MatchTelemetry | None" = None,
) -> None:
    if ms.phase is not Phase.ENEMY_TURN:
        return
    ms.add_log("Enemy turn ended.")
    if telemetry:
        telemetry.on_turn_end(ms, ENEMY)
    start_turn(ms, PLAYER, telemetry)


def step(
    ms: MatchState,
    action: Action,
    policy: "EnemyPolicy",
    telemetry: "MatchTelemetry | None" = None,
) -> Rejection | None:
    """Apply one player action; an EndTurn runs the whole enemy turn."""
    if isinstance(action, EndTurn):
        rejection = end_player_turn(ms, telemetry)
        if rejection is None:
            resolve_enemy_turn(ms, policy, telemetry)
            finish_enemy_turn(ms, telemetry)
        return rejection
    return apply_action(ms, action, telemetry)


def _record_trace(
    play_trace: list[dict] | None,
    ms: MatchState,
    action: Action,
) -> None:
    if play_trace is not None:
        entry = {"turn": ms.turn, "action": str(action)}
        if isinstance(action, PlayCard):
            entry["card_id"] = ms.player.hand[action.hand_index].id
        play_trace.append(entry)


def run_match(
    ms: MatchState,
    agent: "Agent",
    policy: "EnemyPolicy",
    trace: bool = False,
    telemetry: "MatchTelemetry | None" = None,
    seed: int | None = None,
) -> MatchLog:
    """Drive a match to completion without any UI or timers."""
    play_trace: list[dict] | None = [] if trace else None

    if telemetry:
        telemetry.on_match_start(ms)

    while not ms.is_game_over:
        if ms.turn >= MAX_TURNS:
            logger.warning("Turn limit %d reached without a winner", MAX_TURNS)
            break
        legal = get_legal_actions(ms)
        action = agent.choose_action(ms, legal)
        _record_trace(play_trace, ms, action)
        rejection = step(ms, action, policy, telemetry)
        if rejection is not None:
            # agents choose from legal actions; fall back to ending the turn
            logger.warning("Agent chose a rejected action %s: %s",
                           action, rejection.reason.value)
            step(ms, EndTurn(), policy, telemetry)

    if telemetry:
        telemetry.on_match_end(ms)

    return MatchLog(
        seed=seed,
        winner=ms.result,
        turns=ms.turn,
        final_health=(ms.player.health, ms.enemy.health),
        play_trace=play_trace,
    )
