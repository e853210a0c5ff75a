"""Starter card templates shared by both sides."""

from __future__ import annotations

from card_duel.models import Card

STARTER_CARDS: tuple[Card, ...] = (
    Card(id="strike", name="Strike", description="Deal 10 damage.",
         kind="attack", value=10, cost=1),
    Card(id="defend", name="Defend", description="Gain 8 block.",
         kind="defense", value=8, cost=1),
    Card(id="fireball", name="Fireball", description="Deal 15 damage.",
         kind="attack", value=15, cost=2),
    Card(id="shield", name="Shield Wall", description="Gain 12 block.",
         kind="defense", value=12, cost=2),
    Card(id="heal", name="Heal", description="Restore 10 health.",
         kind="heal", value=10, cost=2),
    Card(id="energize", name="Energize", description="Gain 2 energy.",
         kind="energy", value=2, cost=0),
    Card(id="heavy_strike", name="Heavy Strike", description="Deal 20 damage.",
         kind="attack", value=20, cost=3),
    Card(id="fortify", name="Fortify", description="Gain 15 block.",
         kind="defense", value=15, cost=3),
    Card(id="drain", name="Drain Life", description="Deal 8 damage, heal 4.",
         kind="attack", value=8, cost=2, lifesteal=0.5),
    Card(id="meditate", name="Meditate", description="Gain 3 energy.",
         kind="energy", value=3, cost=1),
)


def card_by_id(card_id: str) -> Card:
    for card in STARTER_CARDS:
        if card.id == card_id:
            return card
    raise KeyError(card_id)
