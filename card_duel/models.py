"""Data models for the card duel engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from card_duel.config import RulesConfig

PLAYER = 0
ENEMY = 1

SIDE_NAMES = ("You", "Enemy")

CARD_KINDS = ("attack", "defense", "heal", "energy")


# ---------------------------------------------------------------------------
# Card definition (immutable)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Card:
    id: str
    name: str
    description: str
    kind: str               # attack / defense / heal / energy
    value: int
    cost: int
    lifesteal: float = 0.0  # fraction of value healed by the caster on attack

    @property
    def is_attack(self) -> bool:
        return self.kind == "attack"


# ---------------------------------------------------------------------------
# Per-side state
# ---------------------------------------------------------------------------

@dataclass
class AgentState:
    health: int = 100
    block: int = 0
    energy: int = 3
    deck: list[Card] = field(default_factory=list)
    hand: list[Card] = field(default_factory=list)
    discard: list[Card] = field(default_factory=list)

    def total_cards(self) -> int:
        return len(self.deck) + len(self.hand) + len(self.discard)


# ---------------------------------------------------------------------------
# Match phase / result
# ---------------------------------------------------------------------------

class Phase(Enum):
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    GAME_OVER = "game_over"


class MatchResult(Enum):
    PLAYER_WIN = "You Won!"
    ENEMY_WIN = "You Lost!"


# ---------------------------------------------------------------------------
# Match state (mutable, owned by the caller, modified in-place)
# ---------------------------------------------------------------------------

@dataclass
class MatchState:
    player: AgentState
    enemy: AgentState
    active_side: int                      # PLAYER or ENEMY
    rng: random.Random
    rules: RulesConfig = field(default_factory=RulesConfig)
    result: MatchResult | None = None
    turn: int = 1
    log: list[str] = field(default_factory=list)

    @property
    def phase(self) -> Phase:
        if self.result is not None:
            return Phase.GAME_OVER
        if self.active_side == PLAYER:
            return Phase.PLAYER_TURN
        return Phase.ENEMY_TURN

    @property
    def is_player_turn(self) -> bool:
        return self.active_side == PLAYER

    @property
    def is_game_over(self) -> bool:
        return self.result is not None

    @property
    def game_result(self) -> str:
        return self.result.value if self.result is not None else ""

    def agent(self, side: int) -> AgentState:
        return self.player if side == PLAYER else self.enemy

    def opponent(self, side: int) -> AgentState:
        return self.agent(1 - side)

    def add_log(self, message: str) -> None:
        self.log.append(message)
        # keep only the most recent entries
        overflow = len(self.log) - self.rules.log_limit
        if overflow > 0:
            del self.log[:overflow]


# ---------------------------------------------------------------------------
# Read-only views handed to UI collaborators
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AgentView:
    health: int
    block: int
    energy: int
    hand_count: int
    deck_count: int
    discard_count: int
    hand: tuple[Card, ...] | None     # None when hidden from the viewer


@dataclass(frozen=True)
class MatchSnapshot:
    player: AgentView
    enemy: AgentView
    phase: Phase
    turn: int
    is_player_turn: bool
    is_game_over: bool
    game_result: str
    log: tuple[str, ...]


def _view(agent: AgentState, reveal_hand: bool) -> AgentView:
    return AgentView(
        health=agent.health,
        block=agent.block,
        energy=agent.energy,
        hand_count=len(agent.hand),
        deck_count=len(agent.deck),
        discard_count=len(agent.discard),
        hand=tuple(agent.hand) if reveal_hand else None,
    )


def snapshot(ms: MatchState) -> MatchSnapshot:
    """Freeze the current match into an immutable view for rendering."""
    return MatchSnapshot(
        player=_view(ms.player, True),
        enemy=_view(ms.enemy, ms.rules.reveal_enemy_hand),
        phase=ms.phase,
        turn=ms.turn,
        is_player_turn=ms.is_player_turn,
        is_game_over=ms.is_game_over,
        game_result=ms.game_result,
        log=tuple(ms.log),
    )


# ---------------------------------------------------------------------------
# Match log (returned after a headless match completes)
# ---------------------------------------------------------------------------

@dataclass
class MatchLog:
    seed: int | None
    winner: MatchResult | None            # None when the turn limit was hit
    turns: int
    final_health: tuple[int, int]
    play_trace: list[dict[str, Any]] | None = None
