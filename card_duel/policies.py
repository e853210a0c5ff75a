"""Named opponents for headless matches.

Player agents are built per match from the match seed; enemy policies are
stateless and shared across a batch.
"""

from __future__ import annotations

from typing import Callable

from card_duel.ai import Agent, EnemyPolicy, GreedyAI, GreedyEnemyPolicy, RandomAI

PLAYER_AGENTS: dict[str, Callable[[int], Agent]] = {
    "greedy": lambda seed: GreedyAI(),
    "random": RandomAI,
}

ENEMY_POLICIES: dict[str, Callable[[], EnemyPolicy]] = {
    "greedy": GreedyEnemyPolicy,
}


def make_player_agent(name: str, seed: int) -> Agent:
    try:
        factory = PLAYER_AGENTS[name]
    except KeyError:
        raise KeyError(f"Unknown player agent '{name}', "
                       f"expected one of {sorted(PLAYER_AGENTS)}") from None
    return factory(seed)


def make_enemy_policy(name: str) -> EnemyPolicy:
    try:
        factory = ENEMY_POLICIES[name]
    except KeyError:
        raise KeyError(f"Unknown enemy policy '{name}', "
                       f"expected one of {sorted(ENEMY_POLICIES)}") from None
    return factory()
