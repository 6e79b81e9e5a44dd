import random
import unittest

from ludo_rush.config import ai_config
from ludo_rush.player import Player
from ludo_rush.state import create_game
from ludo_rush.strategy import (
    EasyStrategy,
    HardStrategy,
    MediumStrategy,
    available,
    create,
    select_move,
    thinking_delay,
)
from ludo_rush.strategy.features import build_move_options
from ludo_rush.types import Color, Difficulty


class TestDifficultyStrategies(unittest.TestCase):
    def setUp(self):
        self.state = create_game([Player("Red", Color.RED), Player("Blue", Color.BLUE)])
        self.red, self.blue = self.state.players
        self.rng = random.Random(0)

    def _roll(self, value):
        self.state.dice.value = value
        self.state.dice.face = value

    def test_hard_takes_finishing_move(self):
        self.red.tokens[0].position = 56
        self.red.tokens[1].position = 20
        self._roll(2)
        token = select_move(self.state, Difficulty.HARD, self.rng)
        self.assertEqual(token.id, "red-0")

    def test_capture_beats_quiet_move(self):
        self.red.tokens[0].position = 15
        self.red.tokens[1].position = 30
        self.blue.tokens[0].position = 18
        self._roll(3)
        token = HardStrategy().decide(self.state, self.rng)
        self.assertEqual(token.id, "red-0")

    def test_leaving_home_beats_plain_progress(self):
        self.red.tokens[0].position = 31
        self._roll(6)
        token = HardStrategy().decide(self.state, self.rng)
        self.assertTrue(self.red.token(token.id).is_home())

    def test_single_legal_move_returned_directly(self):
        self.red.tokens[2].position = 40
        self._roll(3)
        for strategy in (EasyStrategy(), MediumStrategy(), HardStrategy()):
            self.assertEqual(strategy.decide(self.state, self.rng).id, "red-2")

    def test_no_legal_move(self):
        self._roll(3)
        self.assertIsNone(select_move(self.state, "easy", self.rng))

    def test_risk_penalty_only_when_risk_aware(self):
        self.blue.tokens[0].position = 10
        self.red.tokens[0].position = 5
        ctx = build_move_options(self.state, self.red, 6)
        move = next(m for m in ctx.moves if m.token_id == "red-0")
        self.assertTrue(move.destination_threatened)
        easy = EasyStrategy()._score_move(ctx, move)
        medium = MediumStrategy()._score_move(ctx, move)
        self.assertAlmostEqual(easy - medium, ai_config.risk_penalty)

    def _score(self, strategy, dice, token_id):
        ctx = build_move_options(self.state, self.red, dice)
        move = next(m for m in ctx.moves if m.token_id == token_id)
        return move, strategy._score_move(ctx, move)

    def test_escape_from_threatened_cell(self):
        self.blue.tokens[0].position = 16
        self.red.tokens[0].position = 18
        move, score = self._score(EasyStrategy(), 2, "red-0")
        self.assertTrue(move.currently_threatened)
        self.assertFalse(move.lands_safe)
        self.assertAlmostEqual(score, ai_config.escape_threat + 20 * ai_config.progress_weight)

    def test_escape_to_safe_tile_adds_bonus(self):
        self.blue.tokens[0].position = 16
        self.red.tokens[0].position = 18
        move, score = self._score(MediumStrategy(), 3, "red-0")
        self.assertTrue(move.lands_safe)
        expected = (
            ai_config.safe_tile
            + ai_config.escape_threat
            + ai_config.escape_to_safe
            + 21 * ai_config.progress_weight
        )
        self.assertAlmostEqual(score, expected)

    def test_entering_finish_lane(self):
        self.red.tokens[0].position = 50
        move, score = self._score(MediumStrategy(), 3, "red-0")
        self.assertTrue(move.enters_finish_lane)
        self.assertAlmostEqual(
            score, ai_config.enter_finish_lane + 53 * ai_config.progress_weight
        )

    def test_capture_near_finish_bonus(self):
        self.blue.tokens[0].position = 6  # 45 steps from blue's entry
        self.red.tokens[0].position = 3
        move, score = self._score(MediumStrategy(), 3, "red-0")
        self.assertEqual(move.victim_distance, 45)
        expected = (
            ai_config.capture
            + ai_config.capture_near_finish
            + 6 * ai_config.progress_weight
        )
        self.assertAlmostEqual(score, expected)

    def test_capture_far_from_finish_has_no_bonus(self):
        self.blue.tokens[0].position = 24  # 11 steps from blue's entry
        self.red.tokens[0].position = 22
        move, score = self._score(MediumStrategy(), 2, "red-0")
        self.assertTrue(move.captures)
        self.assertAlmostEqual(score, ai_config.capture + 24 * ai_config.progress_weight)

    def test_mystery_tile_bonus(self):
        self.red.tokens[0].position = 7
        move, score = self._score(EasyStrategy(), 3, "red-0")
        self.assertTrue(move.lands_mystery)
        self.assertAlmostEqual(score, ai_config.mystery_tile + 10 * ai_config.progress_weight)

    def test_tile_bonus_order(self):
        self.red.tokens[0].position = 1  # -> 4 boost
        self.red.tokens[1].position = 5  # -> 8 safe
        self.red.tokens[2].position = 7  # -> 10 mystery
        strategy = MediumStrategy()
        bonus = {}
        for token_id in ("red-0", "red-1", "red-2"):
            move, score = self._score(strategy, 3, token_id)
            bonus[token_id] = score - move.progress * ai_config.progress_weight
        self.assertAlmostEqual(bonus["red-0"], ai_config.boost_tile)
        self.assertAlmostEqual(bonus["red-1"], ai_config.safe_tile)
        self.assertAlmostEqual(bonus["red-2"], ai_config.mystery_tile)
        self.assertGreater(bonus["red-2"], bonus["red-1"])
        self.assertGreater(bonus["red-1"], bonus["red-0"])

    def test_hard_spreads_lagging_token(self):
        self.red.tokens[0].position = 2
        self.red.tokens[1].position = 30
        self._roll(1)
        self.assertEqual(HardStrategy().decide(self.state, self.rng).id, "red-0")
        self.assertEqual(
            MediumStrategy().select_move(
                build_move_options(self.state, self.red, 1), random.Random(0)
            ).token_id,
            "red-1",
        )

    def test_easy_sometimes_plays_random_move(self):
        self.red.tokens[0].position = 56
        self.red.tokens[1].position = 20
        self._roll(2)
        easy_picks = {EasyStrategy().decide(self.state, self.rng).id for _ in range(200)}
        hard_picks = {HardStrategy().decide(self.state, self.rng).id for _ in range(200)}
        self.assertEqual(easy_picks, {"red-0", "red-1"})
        self.assertEqual(hard_picks, {"red-0"})

    def test_registry(self):
        self.assertIsInstance(create("hard"), HardStrategy)
        self.assertIsInstance(create(Difficulty.EASY), EasyStrategy)
        self.assertIn("medium", available())
        with self.assertRaises(KeyError):
            create("grandmaster")

    def test_thinking_delay_range(self):
        for _ in range(20):
            delay = thinking_delay("hard", self.rng)
            self.assertGreaterEqual(delay, 1.0)
            self.assertLessEqual(delay, 2.0)


if __name__ == "__main__":
    unittest.main()
