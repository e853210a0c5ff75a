"""Actions – types, rejection signals, legal-move generation, card play."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union, TYPE_CHECKING

from card_duel.effects import resolve_effect
from card_duel.models import (
    PLAYER, SIDE_NAMES, Card, MatchResult, MatchState,
)

if TYPE_CHECKING:
    from card_duel.telemetry import MatchTelemetry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Action types (frozen dataclasses)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlayCard:
    hand_index: int


@dataclass(frozen=True)
class EndTurn:
    pass


Action = Union[PlayCard, EndTurn]


# ---------------------------------------------------------------------------
# Rejections (non-fatal, user-facing)
# ---------------------------------------------------------------------------

class RejectReason(Enum):
    GAME_OVER = "game_over"
    NOT_YOUR_TURN = "not_your_turn"
    INVALID_CARD = "invalid_card"
    NOT_ENOUGH_ENERGY = "not_enough_energy"


@dataclass(frozen=True)
class Rejection:
    reason: RejectReason
    title: str
    message: str


def _turn_rejection(ms: MatchState, side: int) -> Rejection | None:
    if ms.is_game_over:
        return Rejection(RejectReason.GAME_OVER, "Invalid Action",
                         "The game is over.")
    if ms.active_side != side:
        return Rejection(RejectReason.NOT_YOUR_TURN, "Invalid Action",
                         "It's not your turn.")
    return None


def validate_play(ms: MatchState, side: int, hand_index: int) -> Rejection | None:
    """Return why ``side`` may not play ``hand_index`` now, or None."""
    rejection = _turn_rejection(ms, side)
    if rejection is not None:
        return rejection
    agent = ms.agent(side)
    if not 0 <= hand_index < len(agent.hand):
        return Rejection(RejectReason.INVALID_CARD, "Invalid Card",
                         "Selected card does not exist.")
    card = agent.hand[hand_index]
    if card.cost > agent.energy:
        return Rejection(RejectReason.NOT_ENOUGH_ENERGY, "Not Enough Energy",
                         f"You need {card.cost} energy to play {card.name}.")
    return None


def validate_end_turn(ms: MatchState) -> Rejection | None:
    return _turn_rejection(ms, PLAYER)


# ---------------------------------------------------------------------------
# Legal action generation
# ---------------------------------------------------------------------------

def get_legal_actions(ms: MatchState) -> list[Action]:
    if ms.is_game_over or not ms.is_player_turn:
        return []
    actions: list[Action] = [
        PlayCard(hand_index=i)
        for i, card in enumerate(ms.player.hand)
        if card.cost <= ms.player.energy
    ]
    # Always can end turn
    actions.append(EndTurn())
    return actions


# ---------------------------------------------------------------------------
# Card play
# ---------------------------------------------------------------------------

def check_game_over(ms: MatchState) -> MatchResult | None:
    """Fix the result once either side is out of health.

    Player defeat is checked first, so a double knock-out is a loss.
    """
    if ms.result is not None:
        return ms.result
    if ms.player.health <= 0:
        ms.result = MatchResult.ENEMY_WIN
        ms.add_log("Player health dropped to 0. You lost!")
    elif ms.enemy.health <= 0:
        ms.result = MatchResult.PLAYER_WIN
        ms.add_log("Enemy health dropped to 0. You won!")
    else:
        return None
    logger.info("Match over on turn %d: %s", ms.turn, ms.result.value)
    return ms.result


def play_card(
    ms: MatchState,
    side: int,
    hand_index: int,
    telemetry: "MatchTelemetry | None" = None,
) -> Rejection | None:
    """Play one card for ``side``. Returns a Rejection instead of mutating
    anything when the play is not allowed."""
    rejection = validate_play(ms, side, hand_index)
    if rejection is not None:
        logger.debug("%s play rejected: %s", SIDE_NAMES[side], rejection.reason.value)
        if telemetry:
            telemetry.on_rejected(ms, side, rejection)
        return rejection

    agent = ms.agent(side)
    card: Card = agent.hand.pop(hand_index)
    agent.energy -= card.cost
    agent.discard.append(card)

    outcome = resolve_effect(ms, side, card)
    verb = "You played" if side == PLAYER else "Enemy played"
    ms.add_log(f"{verb} {card.name}. {outcome.message}")
    logger.debug("%s %s (cost %d, energy left %d)",
                 verb, card.id, card.cost, agent.energy)

    if telemetry:
        telemetry.on_card_played(ms, side, card, outcome)

    if outcome.damage.health_loss:
        check_game_over(ms)
    return None


def apply_action(
    ms: MatchState,
    action: Action,
    telemetry: "MatchTelemetry | None" = None,
) -> Rejection | None:
    match action:
        case PlayCard(hand_index=idx):
            return play_card(ms, PLAYER, idx, telemetry)
        case EndTurn():
            return validate_end_turn(ms)  # turn switch handled by engine
        case _:
            raise ValueError(f"Unknown action: {action}")

