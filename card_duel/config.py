"""Rules configuration – match constants, pacing delays, visibility."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any


@dataclass
class RulesConfig:
    max_health: int = 100
    turn_start_energy: int = 3
    initial_hand_size: int = 5
    turn_draw: int = 2
    deck_copies: int = 2
    log_limit: int = 12
    enemy_think_delay: float = 0.7    # seconds before the enemy plays
    enemy_end_delay: float = 1.5      # seconds before control returns
    reveal_enemy_hand: bool = False

    @classmethod
    def from_json(cls, path: str | Path, **overrides: Any) -> "RulesConfig":
        """Load rules from a JSON object with optional CLI overrides."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"Rules file {path}: expected a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Rules file {path}: unknown keys {sorted(unknown)}")
        raw.update({k: v for k, v in overrides.items() if v is not None})
        config = cls(**raw)
        config.validate()
        return config

    def validate(self) -> None:
        self._check_types()
        if self.max_health < 1:
            raise ValueError(f"max_health must be positive, got {self.max_health}")
        if self.turn_start_energy < 0:
            raise ValueError(f"turn_start_energy must be >= 0, got {self.turn_start_energy}")
        if self.initial_hand_size < 0 or self.turn_draw < 0:
            raise ValueError("hand size and turn draw must be >= 0")
        if self.deck_copies < 1:
            raise ValueError(f"deck_copies must be >= 1, got {self.deck_copies}")
        if self.log_limit < 1:
            raise ValueError(f"log_limit must be >= 1, got {self.log_limit}")
        if self.enemy_think_delay < 0 or self.enemy_end_delay < 0:
            raise ValueError("enemy delays must be >= 0")

    def _check_types(self) -> None:
        # bool is an int subclass, so it is rejected explicitly for numbers
        for f in fields(self):
            value = getattr(self, f.name)
            expected = type(f.default)
            if expected is bool:
                ok = isinstance(value, bool)
            elif expected is float:
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            else:
                ok = isinstance(value, int) and not isinstance(value, bool)
            if not ok:
                raise ValueError(
                    f"{f.name} must be {expected.__name__}, got {value!r}")
