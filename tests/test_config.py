import unittest

from ludo_rush.config import AIConfig, Config, RewardConfig


class TestConfig(unittest.TestCase):
    def test_board_geometry(self):
        cfg = Config()
        self.assertEqual(cfg.FINISH_LANE_START, 52)
        self.assertEqual(cfg.FINISHED, 58)
        self.assertEqual(cfg.START_POSITIONS["yellow"], 26)
        self.assertIn(39, cfg.SAFE_TILES)

    def test_invalid_player_count(self):
        with self.assertRaises(ValueError):
            Config(NUM_PLAYERS=6)


class TestRewardConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = RewardConfig()
        self.assertEqual(cfg.capture_coins, 10)
        self.assertEqual(cfg.finish_coins, 50)
        self.assertEqual(cfg.shield_turns, 3)

    def test_custom_values(self):
        cfg = RewardConfig(coin_tile_coins=5)
        self.assertEqual(cfg.coin_tile_coins, 5)


class TestAIConfig(unittest.TestCase):
    def test_random_move_probabilities(self):
        cfg = AIConfig()
        self.assertEqual(cfg.random_move_probability["easy"], 0.4)
        self.assertEqual(cfg.random_move_probability["hard"], 0.0)
        self.assertGreater(cfg.finish, cfg.capture)


if __name__ == "__main__":
    unittest.main()
