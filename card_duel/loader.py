"""JSON card-template loading and validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from card_duel.models import CARD_KINDS, Card

logger = logging.getLogger(__name__)


def load_cards(path: str | Path) -> list[Card]:
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list) or not raw:
        raise ValueError(f"Card file {path}: expected a non-empty JSON list")

    cards: list[Card] = []
    seen: set[str] = set()
    for entry in raw:
        card = Card(
            id=entry["id"],
            name=entry["name"],
            description=entry.get("description", ""),
            kind=entry["kind"],
            value=entry["value"],
            cost=entry["cost"],
            lifesteal=float(entry.get("lifesteal", 0.0)),
        )
        _validate_card(card)
        if card.id in seen:
            raise ValueError(f"Card {card.id}: duplicate id")
        seen.add(card.id)
        cards.append(card)

    logger.debug("Loaded %d card templates from %s", len(cards), path)
    return cards


def _validate_card(card: Card) -> None:
    if card.kind not in CARD_KINDS:
        raise ValueError(f"Card {card.id}: invalid kind '{card.kind}'")
    if not isinstance(card.cost, int) or card.cost < 0:
        raise ValueError(f"Card {card.id}: cost {card.cost!r} must be an int >= 0")
    if not isinstance(card.value, int) or card.value < 0:
        raise ValueError(f"Card {card.id}: value {card.value!r} must be an int >= 0")
    if not 0.0 <= card.lifesteal <= 1.0:
        raise ValueError(f"Card {card.id}: lifesteal {card.lifesteal} not in [0,1]")
    if card.lifesteal and not card.is_attack:
        raise ValueError(f"Card {card.id}: lifesteal only applies to attack cards")
