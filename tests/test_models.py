"""Tests for data models and snapshots."""

import random
import unittest

from card_duel.cards import STARTER_CARDS, card_by_id
from card_duel.config import RulesConfig
from card_duel.models import (
    ENEMY, PLAYER, AgentState, Card, MatchResult, MatchState, Phase, snapshot,
)


def _make_ms(**kwargs) -> MatchState:
    defaults = dict(
        player=AgentState(hand=[card_by_id("strike")]),
        enemy=AgentState(hand=[card_by_id("defend"), card_by_id("heal")]),
        active_side=PLAYER,
        rng=random.Random(42),
    )
    defaults.update(kwargs)
    return MatchState(**defaults)


class TestCard(unittest.TestCase):
    def test_frozen(self):
        c = Card(id="x", name="X", description="", kind="attack", value=1, cost=1)
        with self.assertRaises(AttributeError):
            c.cost = 2  # type: ignore

    def test_copies_are_equal(self):
        self.assertEqual(card_by_id("strike"), STARTER_CARDS[0])
        self.assertEqual(card_by_id("drain").lifesteal, 0.5)

    def test_unknown_card_id(self):
        with self.assertRaises(KeyError):
            card_by_id("nope")


class TestAgentState(unittest.TestCase):
    def test_defaults(self):
        a = AgentState()
        self.assertEqual(a.health, 100)
        self.assertEqual(a.block, 0)
        self.assertEqual(a.energy, 3)
        self.assertEqual(a.total_cards(), 0)

    def test_independent_lists(self):
        a1 = AgentState()
        a2 = AgentState()
        a1.hand.append(card_by_id("strike"))
        self.assertEqual(a2.hand, [])


class TestMatchState(unittest.TestCase):
    def test_phase(self):
        ms = _make_ms()
        self.assertIs(ms.phase, Phase.PLAYER_TURN)
        self.assertTrue(ms.is_player_turn)
        ms.active_side = ENEMY
        self.assertIs(ms.phase, Phase.ENEMY_TURN)
        ms.result = MatchResult.PLAYER_WIN
        self.assertIs(ms.phase, Phase.GAME_OVER)
        self.assertTrue(ms.is_game_over)
        self.assertEqual(ms.game_result, "You Won!")

    def test_game_result_empty_until_over(self):
        self.assertEqual(_make_ms().game_result, "")

    def test_agent_and_opponent(self):
        ms = _make_ms()
        self.assertIs(ms.agent(PLAYER), ms.player)
        self.assertIs(ms.opponent(PLAYER), ms.enemy)
        self.assertIs(ms.opponent(ENEMY), ms.player)

    def test_log_is_capped(self):
        ms = _make_ms(rules=RulesConfig(log_limit=3))
        for i in range(5):
            ms.add_log(f"entry {i}")
        self.assertEqual(ms.log, ["entry 2", "entry 3", "entry 4"])


class TestSnapshot(unittest.TestCase):
    def test_enemy_hand_hidden_by_default(self):
        snap = snapshot(_make_ms())
        self.assertIsNone(snap.enemy.hand)
        self.assertEqual(snap.enemy.hand_count, 2)
        self.assertEqual(snap.player.hand, (card_by_id("strike"),))

    def test_enemy_hand_revealed(self):
        snap = snapshot(_make_ms(rules=RulesConfig(reveal_enemy_hand=True)))
        self.assertEqual(len(snap.enemy.hand), 2)

    def test_snapshot_is_detached(self):
        ms = _make_ms()
        snap = snapshot(ms)
        ms.player.health = 1
        ms.add_log("later")
        self.assertEqual(snap.player.health, 100)
        self.assertEqual(snap.log, ())

    def test_snapshot_frozen(self):
        snap = snapshot(_make_ms())
        with self.assertRaises(AttributeError):
            snap.is_game_over = True  # type: ignore


if __name__ == "__main__":
    unittest.main()
