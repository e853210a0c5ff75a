"""AI – the enemy's greedy policy and player-side agents."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from card_duel.actions import Action, EndTurn, PlayCard, play_card
from card_duel.deck import shuffle
from card_duel.models import Card, MatchState

if TYPE_CHECKING:
    from card_duel.telemetry import MatchTelemetry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enemy policy
# ---------------------------------------------------------------------------

class EnemyPolicy(ABC):
    @abstractmethod
    def take_turn(
        self,
        ms: MatchState,
        side: int,
        telemetry: "MatchTelemetry | None" = None,
    ) -> list[Card]:
        """Play cards for ``side`` and return them in play order."""
        ...


class GreedyEnemyPolicy(EnemyPolicy):
    """Plays the highest-value affordable cards first, random tie-break.

    Candidates are the cards affordable when the turn starts. Energy cards
    played along the way make later candidates affordable again, but
    nothing outside the candidate set is reconsidered.
    """

    def take_turn(
        self,
        ms: MatchState,
        side: int,
        telemetry: "MatchTelemetry | None" = None,
    ) -> list[Card]:
        agent = ms.agent(side)
        playable = [c for c in agent.hand if c.cost <= agent.energy]
        # sorted() is stable, so the shuffle decides ties
        order = sorted(shuffle(playable, ms.rng), key=lambda c: c.value, reverse=True)

        played: list[Card] = []
        for card in order:
            if ms.is_game_over:
                break
            if card.cost > agent.energy:
                continue
            idx = agent.hand.index(card)
            if play_card(ms, side, idx, telemetry) is None:
                played.append(card)

        logger.debug("Enemy played %d card(s): %s",
                     len(played), [c.id for c in played])
        return played


# ---------------------------------------------------------------------------
# Player-side agents
# ---------------------------------------------------------------------------

class Agent(ABC):
    @abstractmethod
    def choose_action(self, ms: MatchState, legal_actions: list[Action]) -> Action:
        ...


class GreedyAI(Agent):
    """Mirror of the enemy heuristic, one action at a time."""

    def choose_action(self, ms: MatchState, legal_actions: list[Action]) -> Action:
        best: Action = EndTurn()
        best_value = -1
        for action in legal_actions:
            if not isinstance(action, PlayCard):
                continue
            card = ms.player.hand[action.hand_index]
            if card.value > best_value:
                best_value = card.value
                best = action
        return best


class RandomAI(Agent):
    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def choose_action(self, ms: MatchState, legal_actions: list[Action]) -> Action:
        return self.rng.choice(legal_actions)


# ---------------------------------------------------------------------------
# HumanAgent (stdin)
# ---------------------------------------------------------------------------

class HumanAgent(Agent):
    def choose_action(self, ms: MatchState, legal_actions: list[Action]) -> Action:
        from card_duel.display import render_board, render_actions
        from card_duel.models import snapshot
        render_board(snapshot(ms))
        render_actions(legal_actions, ms)

        while True:
            try:
                raw = input("Choose action number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
                print(f"  Invalid index. Enter 0-{len(legal_actions)-1}.")
            except ValueError:
                print("  Enter a number.")
