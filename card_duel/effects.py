"""Card effects – decorator-based registry keyed by card kind."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from card_duel.models import SIDE_NAMES, AgentState, Card

if TYPE_CHECKING:
    from card_duel.models import MatchState


@dataclass(frozen=True)
class DamageResult:
    absorbed: int = 0
    health_loss: int = 0


@dataclass(frozen=True)
class EffectOutcome:
    message: str
    damage: DamageResult = DamageResult()
    healed: int = 0
    block_gained: int = 0
    energy_gained: int = 0


EffectHandler = Callable[["MatchState", int, Card], EffectOutcome]

EFFECT_REGISTRY: dict[str, EffectHandler] = {}


def register_effect(kind: str):
    """Decorator to register the handler for a card kind."""
    def decorator(fn: EffectHandler) -> EffectHandler:
        EFFECT_REGISTRY[kind] = fn
        return fn
    return decorator


def resolve_effect(ms: "MatchState", side: int, card: Card) -> EffectOutcome:
    handler = EFFECT_REGISTRY.get(card.kind)
    if handler is None:
        raise ValueError(f"Unknown card kind: {card.kind}")
    return handler(ms, side, card)


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def apply_damage(incoming: int, target: AgentState) -> DamageResult:
    """Block soaks damage first; the remainder comes off health."""
    if incoming <= 0:
        return DamageResult()
    absorbed = min(target.block, incoming)
    target.block -= absorbed
    remainder = incoming - absorbed
    health_loss = 0
    if remainder > 0:
        health_loss = min(target.health, remainder)
        target.health = max(0, target.health - remainder)
    return DamageResult(absorbed=absorbed, health_loss=health_loss)


def _heal(agent: AgentState, amount: int, max_health: int) -> int:
    before = agent.health
    agent.health = min(max_health, agent.health + amount)
    return agent.health - before


# ---------------------------------------------------------------------------
# Kind handlers
# ---------------------------------------------------------------------------

@register_effect("attack")
def _attack(ms: "MatchState", side: int, card: Card) -> EffectOutcome:
    target_name = SIDE_NAMES[1 - side]
    damage = apply_damage(card.value, ms.opponent(side))
    if damage.absorbed:
        message = (f"{target_name} took {damage.health_loss} damage "
                   f"({damage.absorbed} blocked).")
    else:
        message = f"{target_name} took {damage.health_loss} damage."

    healed = 0
    if card.lifesteal > 0:
        amount = math.floor(card.value * card.lifesteal)
        healed = _heal(ms.agent(side), amount, ms.rules.max_health)
        message += f" {SIDE_NAMES[side]} healed for {healed} health."

    return EffectOutcome(message=message, damage=damage, healed=healed)


@register_effect("defense")
def _defense(ms: "MatchState", side: int, card: Card) -> EffectOutcome:
    ms.agent(side).block += card.value
    return EffectOutcome(
        message=f"{SIDE_NAMES[side]} gained {card.value} block.",
        block_gained=card.value,
    )


@register_effect("heal")
def _heal_self(ms: "MatchState", side: int, card: Card) -> EffectOutcome:
    healed = _heal(ms.agent(side), card.value, ms.rules.max_health)
    return EffectOutcome(
        message=f"{SIDE_NAMES[side]} healed for {healed} health.",
        healed=healed,
    )


@register_effect("energy")
def _energy(ms: "MatchState", side: int, card: Card) -> EffectOutcome:
    ms.agent(side).energy += card.value
    return EffectOutcome(
        message=f"{SIDE_NAMES[side]} gained {card.value} energy.",
        energy_gained=card.value,
    )
