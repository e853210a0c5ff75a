"""UI-facing session – owns one match, paces the enemy turn, notifies views.

A ``DuelSession`` is what a front end mounts. It exposes three commands
(``play_card``, ``end_turn``, ``reset_game``) and a read-only
``snapshot()``. Views subscribe for snapshots after every change and for
user-facing notifications (rejected actions, game over).

The enemy turn is split in two deferred steps so a view can show the
enemy "thinking": the policy plays after ``enemy_think_delay`` and control
returns after a further ``enemy_end_delay``. At most one step is pending at
a time; resetting or closing the session cancels it, and a callback from a
previous match is ignored even if its timer thread already fired.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Sequence

from card_duel.actions import PlayCard, Rejection, apply_action
from card_duel.ai import EnemyPolicy, GreedyEnemyPolicy
from card_duel.cards import STARTER_CARDS
from card_duel.config import RulesConfig
from card_duel.engine import (
    end_player_turn, finish_enemy_turn, init_match, resolve_enemy_turn,
)
from card_duel.models import Card, MatchResult, MatchSnapshot, MatchState, Phase, snapshot
from card_duel.scheduler import Scheduler, ThreadingScheduler, TimerHandle
from card_duel.telemetry import MatchTelemetry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: str = "default"    # "default" or "destructive"


SnapshotListener = Callable[[MatchSnapshot], None]
NotificationListener = Callable[[Notification], None]


class DuelSession:
    def __init__(
        self,
        templates: Sequence[Card] = STARTER_CARDS,
        rules: RulesConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
        policy: EnemyPolicy | None = None,
        collect_telemetry: bool = False,
    ) -> None:
        self.templates = tuple(templates)
        self.rules = rules or RulesConfig()
        self.scheduler = scheduler or ThreadingScheduler()
        self.policy = policy or GreedyEnemyPolicy()
        self.collect_telemetry = collect_telemetry
        self.telemetry: MatchTelemetry | None = None

        self._rng = rng if rng is not None else random.Random(seed)
        self._lock = threading.RLock()
        self._pending: TimerHandle | None = None
        self._generation = 0
        self._announced = False
        self._snapshot_listeners: list[SnapshotListener] = []
        self._notification_listeners: list[NotificationListener] = []

        self.state: MatchState = self._new_match()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every change."""
        self._snapshot_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._snapshot_listeners:
                self._snapshot_listeners.remove(listener)
        return unsubscribe

    def on_notify(self, listener: NotificationListener) -> Callable[[], None]:
        self._notification_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._notification_listeners:
                self._notification_listeners.remove(listener)
        return unsubscribe

    def snapshot(self) -> MatchSnapshot:
        with self._lock:
            return snapshot(self.state)

    @property
    def has_pending_timer(self) -> bool:
        return self._pending is not None and self._pending.active

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def play_card(self, hand_index: int) -> Rejection | None:
        with self._lock:
            rejection = apply_action(self.state, PlayCard(hand_index), self.telemetry)
            if rejection is not None:
                self._reject(rejection)
                return rejection
            self._changed()
            return None

    def end_turn(self) -> Rejection | None:
        with self._lock:
            rejection = end_player_turn(self.state, self.telemetry)
            if rejection is not None:
                self._reject(rejection)
                return rejection
            self._changed()
            self._schedule(self.rules.enemy_think_delay, self._enemy_act)
            return None

    def reset_game(self) -> None:
        with self._lock:
            self._cancel_pending()
            self.state = self._new_match()
            logger.info("Match reset")
            self._publish()

    def close(self) -> None:
        """Cancel any pending enemy step; the session stays readable."""
        with self._lock:
            # drops a callback whose timer fired before cancel()
            self._generation += 1
            self._cancel_pending()

    # ------------------------------------------------------------------
    # Enemy turn steps
    # ------------------------------------------------------------------

    def _enemy_act(self) -> None:
        if self.state.phase is not Phase.ENEMY_TURN:
            return
        resolve_enemy_turn(self.state, self.policy, self.telemetry)
        self._changed()
        if not self.state.is_game_over:
            self._schedule(self.rules.enemy_end_delay, self._enemy_done)

    def _enemy_done(self) -> None:
        finish_enemy_turn(self.state, self.telemetry)
        self._changed()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_match(self) -> MatchState:
        self._generation += 1
        self._announced = False
        state = init_match(self.templates, self.rules, rng=self._rng)
        self.telemetry = MatchTelemetry() if self.collect_telemetry else None
        if self.telemetry:
            self.telemetry.on_match_start(state)
        return state

    def _schedule(self, delay: float, step: Callable[[], None]) -> None:
        self._cancel_pending()
        generation = self._generation

        def run() -> None:
            with self._lock:
                if generation != self._generation:
                    logger.debug("Dropping stale enemy step from a previous match")
                    return
                self._pending = None
                step()

        self._pending = self.scheduler.call_later(delay, run)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _changed(self) -> None:
        if self.state.is_game_over and not self._announced:
            self._announced = True
            self._cancel_pending()
            if self.telemetry:
                self.telemetry.on_match_end(self.state)
            if self.state.result is MatchResult.ENEMY_WIN:
                self._notify(Notification("Game Over", "You were defeated!", "destructive"))
            else:
                self._notify(Notification("Game Over", "Congratulations! You won!"))
        self._publish()

    def _reject(self, rejection: Rejection) -> None:
        logger.debug("Rejected player action: %s", rejection.reason.value)
        self._notify(Notification(rejection.title, rejection.message, "destructive"))

    def _publish(self) -> None:
        view = snapshot(self.state)
        for listener in list(self._snapshot_listeners):
            listener(view)

    def _notify(self, notification: Notification) -> None:
        for listener in list(self._notification_listeners):
            listener(notification)
