"""Tests for rules configuration."""

import json
import os
import tempfile
import unittest

from card_duel.config import RulesConfig


def _write_json(data) -> str:
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
        json.dump(data, f)
    return f.name


class TestRulesConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = RulesConfig()
        self.assertEqual(cfg.max_health, 100)
        self.assertEqual(cfg.turn_start_energy, 3)
        self.assertEqual(cfg.initial_hand_size, 5)
        self.assertEqual(cfg.turn_draw, 2)
        self.assertEqual(cfg.deck_copies, 2)
        self.assertFalse(cfg.reveal_enemy_hand)
        cfg.validate()

    def test_from_json_with_overrides(self):
        path = _write_json({"max_health": 50, "turn_draw": 1})
        try:
            cfg = RulesConfig.from_json(path, turn_draw=3, log_limit=None)
        finally:
            os.unlink(path)
        self.assertEqual(cfg.max_health, 50)
        self.assertEqual(cfg.turn_draw, 3)
        self.assertEqual(cfg.log_limit, 12)

    def test_unknown_key(self):
        path = _write_json({"max_hp": 50})
        try:
            with self.assertRaises(ValueError):
                RulesConfig.from_json(path)
        finally:
            os.unlink(path)

    def test_not_an_object(self):
        path = _write_json([1, 2])
        try:
            with self.assertRaises(ValueError):
                RulesConfig.from_json(path)
        finally:
            os.unlink(path)

    def test_invalid_values(self):
        for bad in (dict(max_health=0), dict(deck_copies=0), dict(log_limit=0),
                    dict(turn_draw=-1), dict(enemy_think_delay=-0.1)):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    RulesConfig(**bad).validate()

    def test_wrong_types_are_value_errors(self):
        for bad in ({"max_health": "100"}, {"turn_draw": 1.5},
                    {"deck_copies": True}, {"reveal_enemy_hand": 1},
                    {"enemy_end_delay": "fast"}):
            with self.subTest(bad=bad):
                path = _write_json(bad)
                try:
                    with self.assertRaises(ValueError):
                        RulesConfig.from_json(path)
                finally:
                    os.unlink(path)

    def test_int_delay_accepted(self):
        RulesConfig(enemy_think_delay=1, enemy_end_delay=0).validate()


if __name__ == "__main__":
    unittest.main()
