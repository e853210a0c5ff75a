"""Tests for shuffle, draw and starting-deck construction."""

import random
import unittest
from collections import Counter

from card_duel.cards import STARTER_CARDS, card_by_id
from card_duel.deck import build_starting_deck, draw_cards, draw_into, shuffle
from card_duel.models import AgentState

A = card_by_id("strike")
B = card_by_id("defend")
C = card_by_id("heal")


class TestShuffle(unittest.TestCase):
    def test_does_not_mutate_argument(self):
        cards = list(STARTER_CARDS)
        out = shuffle(cards, random.Random(1))
        self.assertEqual(cards, list(STARTER_CARDS))
        self.assertIsNot(out, cards)

    def test_is_permutation(self):
        out = shuffle(STARTER_CARDS, random.Random(3))
        self.assertEqual(Counter(c.id for c in out),
                         Counter(c.id for c in STARTER_CARDS))

    def test_seeded_is_reproducible(self):
        self.assertEqual(shuffle(STARTER_CARDS, random.Random(7)),
                         shuffle(STARTER_CARDS, random.Random(7)))


class TestDrawCards(unittest.TestCase):
    def test_draw_from_front(self):
        r = draw_cards([A, B, C], [], [], 2, random.Random(0))
        self.assertEqual(r.hand, [A, B])
        self.assertEqual(r.deck, [C])
        self.assertEqual(r.drawn, 2)
        self.assertFalse(r.short)

    def test_inputs_untouched(self):
        deck, hand, discard = [A, B], [C], []
        draw_cards(deck, hand, discard, 1, random.Random(0))
        self.assertEqual(deck, [A, B])
        self.assertEqual(hand, [C])

    def test_reshuffle_when_deck_empty(self):
        r = draw_cards([], [], [A, B, C], 2, random.Random(5))
        self.assertEqual(len(r.deck), 1)
        self.assertEqual(len(r.hand), 2)
        self.assertEqual(r.discard, [])
        self.assertEqual(r.reshuffles, 1)
        self.assertEqual(Counter(c.id for c in r.hand + r.deck),
                         Counter(["strike", "defend", "heal"]))

    def test_reshuffle_mid_draw(self):
        r = draw_cards([A], [], [B, C], 3, random.Random(5))
        self.assertEqual(r.hand[0], A)
        self.assertEqual(len(r.hand), 3)
        self.assertEqual(r.deck, [])
        self.assertEqual(r.discard, [])

    def test_empty_deck_and_discard(self):
        r = draw_cards([], [B], [], 3, random.Random(0))
        self.assertEqual(r.hand, [B])
        self.assertEqual(r.drawn, 0)
        self.assertTrue(r.short)

    def test_runs_out_partway(self):
        r = draw_cards([A], [], [], 3, random.Random(0))
        self.assertEqual(r.hand, [A])
        self.assertEqual(r.drawn, 1)
        self.assertTrue(r.short)

    def test_conservation(self):
        rng = random.Random(11)
        deck, hand, discard = list(STARTER_CARDS[:4]), [], list(STARTER_CARDS[4:])
        total = len(deck) + len(hand) + len(discard)
        for _ in range(6):
            r = draw_cards(deck, hand, discard, 3, rng)
            deck, hand, discard = r.deck, r.hand, r.discard
            self.assertEqual(len(deck) + len(hand) + len(discard), total)
            discard = discard + hand[:2]
            hand = hand[2:]


class TestDrawInto(unittest.TestCase):
    def test_updates_agent(self):
        agent = AgentState(deck=[A, B], discard=[C])
        r = draw_into(agent, 3, random.Random(0))
        self.assertEqual(r.drawn, 3)
        self.assertEqual(agent.hand[:2], [A, B])
        self.assertEqual(agent.deck, [])
        self.assertEqual(agent.discard, [])

    def test_exhausted_logs_info_only(self):
        agent = AgentState()
        with self.assertLogs("card_duel.deck", level="INFO") as cm:
            r = draw_into(agent, 3, random.Random(0))
        self.assertEqual(agent.hand, [])
        self.assertEqual(r.drawn, 0)
        self.assertTrue(all("INFO" in line for line in cm.output))


class TestBuildStartingDeck(unittest.TestCase):
    def test_two_copies_each(self):
        deck = build_starting_deck(STARTER_CARDS, 2, random.Random(0))
        self.assertEqual(len(deck), 2 * len(STARTER_CARDS))
        counts = Counter(c.id for c in deck)
        self.assertTrue(all(n == 2 for n in counts.values()))


if __name__ == "__main__":
    unittest.main()
