from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .config import config
from .types import Color, Tile, TileType


def _build_tiles() -> Tuple[Tile, ...]:
    entry_colors = {pos: Color(col) for col, pos in config.START_POSITIONS.items()}
    tiles: list[Tile] = []
    for idx in range(config.TRACK_LENGTH):
        kind = TileType.NORMAL
        if idx in config.SAFE_TILES:
            kind = TileType.SAFE
        elif idx in config.BOOST_TILES:
            kind = TileType.BOOST
        elif idx in config.MYSTERY_TILES:
            kind = TileType.MYSTERY
        elif idx in config.WARP_TILES:
            kind = TileType.WARP
        elif idx in config.COIN_TILES:
            kind = TileType.COIN
        tiles.append(Tile(index=idx, type=kind, color=entry_colors.get(idx)))
    return tuple(tiles)


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable tile table and position helpers (no rule logic).

    One instance is shared by every GameState; copying a state keeps the
    same board.
    """

    tiles: Tuple[Tile, ...] = field(default_factory=_build_tiles)

    def __deepcopy__(self, memo: dict) -> "Board":
        return self

    # --- Position classes ---
    @staticmethod
    def is_home(position: int) -> bool:
        return position == config.HOME_POSITION

    @staticmethod
    def is_main_track(position: int) -> bool:
        return 0 <= position < config.TRACK_LENGTH

    @staticmethod
    def is_finish_lane(position: int) -> bool:
        return config.FINISH_LANE_START <= position < config.FINISHED

    @staticmethod
    def is_finished(position: int) -> bool:
        return position == config.FINISHED

    # --- Tile lookup ---
    def tile_at(self, position: int) -> Tile | None:
        if not self.is_main_track(position):
            return None
        return self.tiles[position]

    def tile_type(self, position: int) -> TileType | None:
        tile = self.tile_at(position)
        return tile.type if tile is not None else None

    def is_safe(self, position: int) -> bool:
        return self.tile_type(position) is TileType.SAFE

    def next_warp(self, position: int) -> int:
        """Warp tile following ``position`` in cyclic order."""
        warps = config.WARP_TILES
        idx = warps.index(position)
        return warps[(idx + 1) % len(warps)]

    # --- Color frames ---
    @staticmethod
    def entry_of(color: Color | str) -> int:
        return config.START_POSITIONS[Color(color).value]

    def distance_from_entry(self, color: Color | str, position: int) -> int:
        """Steps travelled from the color's entry tile, -1 if not on the track."""
        if not self.is_main_track(position):
            return -1
        return (position - self.entry_of(color) + config.TRACK_LENGTH) % config.TRACK_LENGTH

    def progress(self, color: Color | str, position: int) -> int:
        """Monotone progress in the color's own frame.

        Home is -1, main track cells count from the entry (0..N-1), lane and
        finished cells keep their index (N..N+6) so they rank above the track.
        """
        if self.is_main_track(position):
            return self.distance_from_entry(color, position)
        return position


BOARD = Board()
