"""Match telemetry – per-match event counters for behavioral analytics."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from card_duel.actions import Rejection
    from card_duel.deck import DrawResult
    from card_duel.effects import EffectOutcome
    from card_duel.models import Card, MatchState

SIDE_KEYS = ("player", "enemy")


class MatchTelemetry:
    """Collects per-match statistics via on_*() hooks called from the engine.

    All counters are per-side lists [player, enemy].
    """

    def __init__(self) -> None:
        self.cards_played: list[int] = [0, 0]
        self.damage_dealt: list[int] = [0, 0]
        self.damage_blocked: list[int] = [0, 0]   # absorbed by the target's block
        self.healed: list[int] = [0, 0]
        self.block_gained: list[int] = [0, 0]
        self.energy_granted: list[int] = [0, 0]
        self.energy_gained: list[int] = [0, 0]
        self.energy_spent: list[int] = [0, 0]
        self.energy_wasted: list[int] = [0, 0]
        self.cards_drawn: list[int] = [0, 0]
        self.reshuffles: list[int] = [0, 0]
        self.short_draws: list[int] = [0, 0]
        self.turns: list[int] = [0, 0]
        self.rejections: int = 0

        self._total_turns: int = 0
        self._winner: str = ""

    # ------------------------------------------------------------------
    # Hook methods – called by engine.py / actions.py
    # ------------------------------------------------------------------

    def on_match_start(self, ms: "MatchState") -> None:
        # The opening turn is entered without a turn-start reset.
        side = ms.active_side
        self.turns[side] += 1
        self.energy_granted[side] += ms.agent(side).energy

    def on_turn_start(self, ms: "MatchState", side: int) -> None:
        self.turns[side] += 1
        self.energy_granted[side] += ms.agent(side).energy

    def on_cards_drawn(self, ms: "MatchState", side: int, draw: "DrawResult") -> None:
        self.cards_drawn[side] += draw.drawn
        self.reshuffles[side] += draw.reshuffles
        if draw.short:
            self.short_draws[side] += 1

    def on_card_played(
        self, ms: "MatchState", side: int, card: "Card", outcome: "EffectOutcome",
    ) -> None:
        self.cards_played[side] += 1
        self.energy_spent[side] += card.cost
        self.energy_gained[side] += outcome.energy_gained
        self.damage_dealt[side] += outcome.damage.health_loss
        self.damage_blocked[side] += outcome.damage.absorbed
        self.healed[side] += outcome.healed
        self.block_gained[side] += outcome.block_gained

    def on_rejected(self, ms: "MatchState", side: int, rejection: "Rejection") -> None:
        self.rejections += 1

    def on_turn_end(self, ms: "MatchState", side: int) -> None:
        self.energy_wasted[side] += ms.agent(side).energy

    def on_match_end(self, ms: "MatchState") -> None:
        self._total_turns = ms.turn
        self._winner = ms.game_result
        # energy left in the turn the match stopped in
        self.energy_wasted[ms.active_side] += ms.agent(ms.active_side).energy

    # ------------------------------------------------------------------
    # Summary export
    # ------------------------------------------------------------------

    def to_summary(self) -> dict[str, Any]:
        """Return a flat dict summarizing this match's telemetry."""
        summary: dict[str, Any] = {
            "total_turns": self._total_turns,
            "winner": self._winner,
            "rejections": self.rejections,
        }
        per_side_fields = [
            "cards_played", "damage_dealt", "damage_blocked", "healed",
            "block_gained", "energy_granted", "energy_gained",
            "energy_spent", "energy_wasted", "cards_drawn", "reshuffles",
            "short_draws", "turns",
        ]
        for fname in per_side_fields:
            vals = getattr(self, fname)
            for side, key in enumerate(SIDE_KEYS):
                summary[f"{key}_{fname}"] = vals[side]
        return summary
