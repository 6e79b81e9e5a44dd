import unittest

from ludo_rush.player import Player
from ludo_rush.state import create_game
from ludo_rush.strategy.features import (
    aggregate_progress,
    build_move_options,
    find_capture_target,
    threat_map,
)
from ludo_rush.types import Color


class TestMoveFeatures(unittest.TestCase):
    def setUp(self):
        self.state = create_game([Player("Red", Color.RED), Player("Blue", Color.BLUE)])
        self.red, self.blue = self.state.players

    def test_threat_map_skips_safe_tiles(self):
        self.blue.tokens[0].position = 20
        threats = threat_map(self.state, self.red)
        self.assertEqual(threats.shape, (52,))
        self.assertEqual([i for i in range(52) if threats[i]], [22, 23, 24, 25])

    def test_threat_map_wraps_track(self):
        self.blue.tokens[0].position = 50
        threats = threat_map(self.state, self.red)
        self.assertTrue(threats[51])
        self.assertTrue(threats[2])
        self.assertFalse(threats[0])

    def test_capture_target_respects_shield(self):
        self.blue.tokens[0].position = 11
        self.assertIs(find_capture_target(self.state, self.red, 11), self.blue.tokens[0])
        self.blue.tokens[0].shield(1)
        self.assertIsNone(find_capture_target(self.state, self.red, 11))

    def test_move_option_flags(self):
        self.red.tokens[0].position = 7
        self.blue.tokens[0].position = 10
        ctx = build_move_options(self.state, self.red, 3)
        self.assertEqual(len(ctx.moves), 1)
        move = ctx.moves[0]
        self.assertEqual(move.token_id, "red-0")
        self.assertEqual(move.new_pos, 10)
        self.assertTrue(move.captures)
        self.assertTrue(move.lands_mystery)
        self.assertEqual(move.victim_distance, 49)
        self.assertFalse(move.leaves_home)
        self.assertEqual(ctx.action_mask.tolist(), [True, False, False, False])

    def test_leaving_home_option(self):
        ctx = build_move_options(self.state, self.red, 6)
        self.assertEqual(len(ctx.moves), 4)
        self.assertTrue(all(m.leaves_home and m.lands_safe for m in ctx.moves))

    def test_aggregate_progress_weights_lane_and_finish(self):
        self.blue.tokens[0].position = 58
        self.blue.tokens[1].position = 54
        self.blue.tokens[2].position = 20
        # 100 + (60 + 2) + 7
        self.assertEqual(aggregate_progress(self.blue), 169.0)


if __name__ == "__main__":
    unittest.main()
