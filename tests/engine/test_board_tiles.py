import copy
import unittest

from ludo_rush.board import BOARD
from ludo_rush.config import config
from ludo_rush.player import Player
from ludo_rush.state import create_game
from ludo_rush.types import Color, TileType


class TestBoardTiles(unittest.TestCase):
    def test_tile_table_layout(self):
        self.assertEqual(len(BOARD.tiles), config.TRACK_LENGTH)
        self.assertEqual(config.SAFE_TILES, [0, 8, 13, 21, 26, 34, 39, 47])
        for idx in (4, 17, 30, 43):
            self.assertIs(BOARD.tile_type(idx), TileType.BOOST)
        for idx in (10, 23, 36, 49):
            self.assertIs(BOARD.tile_type(idx), TileType.MYSTERY)
        for idx in (6, 19, 32, 45):
            self.assertIs(BOARD.tile_type(idx), TileType.WARP)
        for idx in (2, 15, 28, 41):
            self.assertIs(BOARD.tile_type(idx), TileType.COIN)
        self.assertIs(BOARD.tile_type(1), TileType.NORMAL)

    def test_entry_tiles_are_safe_and_colored(self):
        self.assertEqual(BOARD.tile_at(0).color, Color.RED)
        self.assertEqual(BOARD.tile_at(13).color, Color.BLUE)
        self.assertEqual(BOARD.tile_at(26).color, Color.YELLOW)
        self.assertEqual(BOARD.tile_at(39).color, Color.GREEN)
        self.assertTrue(all(BOARD.is_safe(BOARD.entry_of(c)) for c in Color))

    def test_off_track_positions_have_no_tile(self):
        for pos in (-1, 52, 57, 58):
            self.assertIsNone(BOARD.tile_at(pos))
        self.assertFalse(BOARD.is_safe(53))

    def test_warp_chain_wraps(self):
        self.assertEqual(BOARD.next_warp(6), 19)
        self.assertEqual(BOARD.next_warp(45), 6)

    def test_color_frames(self):
        self.assertEqual(BOARD.distance_from_entry(Color.BLUE, 13), 0)
        self.assertEqual(BOARD.distance_from_entry(Color.BLUE, 12), 51)
        self.assertEqual(BOARD.distance_from_entry(Color.RED, 54), -1)
        self.assertEqual(BOARD.progress(Color.GREEN, 40), 1)
        self.assertEqual(BOARD.progress(Color.GREEN, 53), 53)
        self.assertEqual(BOARD.progress(Color.GREEN, -1), -1)

    def test_state_copy_shares_board(self):
        state = create_game([Player("A", Color.RED), Player("B", Color.BLUE)])
        clone = copy.deepcopy(state)
        self.assertIs(clone.board, state.board)
        self.assertIsNot(clone.players[0], state.players[0])


if __name__ == "__main__":
    unittest.main()
