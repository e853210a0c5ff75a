"""Deck -> hand -> discard card flow with reshuffle-on-empty."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from card_duel.models import AgentState, Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawResult:
    deck: list[Card]
    hand: list[Card]
    discard: list[Card]
    requested: int
    drawn: int
    reshuffles: int

    @property
    def short(self) -> bool:
        """True when fewer cards were available than requested."""
        return self.requested > self.drawn


def shuffle(cards: Iterable[Card], rng: random.Random) -> list[Card]:
    """Return a uniformly shuffled copy; the argument is left untouched."""
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def draw_cards(
    deck: Sequence[Card],
    hand: Sequence[Card],
    discard: Sequence[Card],
    count: int,
    rng: random.Random,
) -> DrawResult:
    """Draw up to ``count`` cards from the front of ``deck`` into ``hand``.

    An empty deck is refilled from a shuffle of the discard pile. When both
    are empty drawing stops early; that is not an error.
    """
    new_deck = list(deck)
    new_hand = list(hand)
    new_discard = list(discard)
    drawn = 0
    reshuffles = 0

    for _ in range(count):
        if not new_deck:
            if not new_discard:
                break
            new_deck = shuffle(new_discard, rng)
            new_discard = []
            reshuffles += 1
        new_hand.append(new_deck.pop(0))
        drawn += 1

    return DrawResult(
        deck=new_deck,
        hand=new_hand,
        discard=new_discard,
        requested=count,
        drawn=drawn,
        reshuffles=reshuffles,
    )


def draw_into(agent: AgentState, count: int, rng: random.Random) -> DrawResult:
    """Draw for ``agent`` in place and return what happened."""
    result = draw_cards(agent.deck, agent.hand, agent.discard, count, rng)
    agent.deck = result.deck
    agent.hand = result.hand
    agent.discard = result.discard
    if result.reshuffles:
        logger.debug("Reshuffled discard into deck (%d card(s) left)",
                     len(agent.deck))
    if result.short:
        logger.info("Deck and discard exhausted: drew %d of %d card(s)",
                    result.drawn, count)
    return result


def build_starting_deck(
    templates: Sequence[Card], copies: int, rng: random.Random,
) -> list[Card]:
    cards: list[Card] = []
    for _ in range(copies):
        cards.extend(templates)
    return shuffle(cards, rng)
