"""Tests for the CLI subcommands and text rendering."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from card_duel.actions import EndTurn, PlayCard
from card_duel.cli import main
from card_duel.display import render_actions, render_board
from card_duel.engine import init_match
from card_duel.models import snapshot


def _run(argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        main(argv)
    return buf.getvalue()


class TestSimulateAndStats(unittest.TestCase):
    def test_simulate_then_stats(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = _run(["simulate", "--matches", "5", "--seed", "1",
                        "--enemy-policy", "greedy",
                        "--output", tmpdir, "--telemetry", "on"])
            self.assertIn("Simulation Results  (5 matches)", out)
            logfile = os.path.join(tmpdir, "match_logs.json")
            self.assertTrue(os.path.exists(logfile))
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "telemetry.json")))

            out = _run(["stats", "--logs", logfile])
            self.assertIn("Player win rate", out)

    def test_simulate_with_rules_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            rules = os.path.join(tmpdir, "rules.json")
            with open(rules, "w", encoding="utf-8") as f:
                json.dump({"max_health": 30}, f)
            _run(["simulate", "--matches", "2", "--rules", rules, "--output", tmpdir])
            with open(os.path.join(tmpdir, "match_logs.json"), encoding="utf-8") as f:
                data = json.load(f)
            for entry in data:
                self.assertTrue(all(h <= 30 for h in entry["final_health"]))

    def test_no_command_exits(self):
        with self.assertRaises(SystemExit):
            _run([])


class TestPlay(unittest.TestCase):
    def test_eof_abandons_match(self):
        with mock.patch("builtins.input", side_effect=EOFError):
            out = _run(["play", "--seed", "3", "--fast"])
        self.assertIn("Match abandoned.", out)
        self.assertIn("Turn 1", out)

    def test_play_a_card_then_quit(self):
        with mock.patch("builtins.input", side_effect=["x", "0", EOFError]):
            out = _run(["play", "--seed", "3", "--fast", "--reveal-enemy-hand"])
        self.assertIn("Enter a number.", out)
        self.assertIn("You played", out)


class TestDisplay(unittest.TestCase):
    def test_board_hides_enemy_hand(self):
        ms = init_match(seed=1)
        buf = io.StringIO()
        with redirect_stdout(buf):
            render_board(snapshot(ms))
        out = buf.getvalue()
        self.assertEqual(out.count("Hand: ["), 1)
        self.assertIn("Game started! Your turn.", out)

    def test_actions_listing(self):
        ms = init_match(seed=1)
        buf = io.StringIO()
        with redirect_stdout(buf):
            render_actions([PlayCard(0), EndTurn()], ms)
        out = buf.getvalue()
        self.assertIn(f"[0] Play: {ms.player.hand[0].name}", out)
        self.assertIn("[1] End Turn", out)


if __name__ == "__main__":
    unittest.main()
