from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from ..board import BOARD
from ..config import ai_config, config
from ..rules import destination, valid_moves
from ..types import TileType
from .types import MoveOption, StrategyContext

if TYPE_CHECKING:  # avoid runtime import to prevent circular deps
    from ..player import Player
    from ..state import GameState
    from ..token import Token


def threat_map(state: "GameState", player: "Player") -> np.ndarray:
    """Boolean mask of main-track cells an opponent can hit with one die.

    Only plain modulo advance is considered: warps, boosts and lane entry are
    ignored. Safe tiles are never marked.
    """
    threatened = np.zeros(config.TRACK_LENGTH, dtype=np.bool_)
    for opponent in state.players:
        if opponent.id == player.id:
            continue
        for tok in opponent.tokens:
            if not tok.on_main_track():
                continue
            for face in range(1, config.DICE_FACES + 1):
                threatened[(tok.position + face) % config.TRACK_LENGTH] = True
    for idx in config.SAFE_TILES:
        threatened[idx] = False
    return threatened


def is_threatened(threats: np.ndarray, position: int) -> bool:
    if not BOARD.is_main_track(position):
        return False
    return bool(threats[position])


def is_position_threatened(state: "GameState", player: "Player", position: int) -> bool:
    return is_threatened(threat_map(state, player), position)


def find_capture_target(
    state: "GameState", player: "Player", position: int
) -> Optional["Token"]:
    if not BOARD.is_main_track(position) or BOARD.is_safe(position):
        return None
    for opponent in state.players:
        if opponent.id == player.id:
            continue
        for tok in opponent.tokens:
            if tok.position == position and not tok.is_shielded:
                return tok
    return None


def average_progress(player: "Player") -> float:
    on_board = [
        BOARD.progress(player.color, t.position)
        for t in player.tokens
        if not t.is_home() and not t.is_finished()
    ]
    if not on_board:
        return 0.0
    return float(np.mean(on_board))


def aggregate_progress(player: "Player") -> float:
    """Race score used to pick freeze targets."""
    total = 0.0
    for tok in player.tokens:
        if tok.is_finished():
            total += ai_config.freeze_finished_weight
        elif tok.in_finish_lane():
            total += ai_config.freeze_lane_weight + tok.position - config.FINISH_LANE_START
        elif tok.on_main_track():
            total += BOARD.distance_from_entry(player.color, tok.position)
    return total


def _create_move_option(
    state: "GameState",
    player: "Player",
    token: "Token",
    dice_roll: int,
    threats: np.ndarray,
) -> MoveOption:
    new_pos = destination(player, token, dice_roll)
    victim = find_capture_target(state, player, new_pos)
    victim_distance = (
        BOARD.distance_from_entry(victim.color, victim.position) if victim else -1
    )
    tile_type = BOARD.tile_type(new_pos)
    return MoveOption(
        token=token,
        current_pos=token.position,
        new_pos=new_pos,
        dice_roll=dice_roll,
        progress=BOARD.progress(player.color, new_pos),
        leaves_home=token.is_home(),
        finishes=new_pos == config.FINISHED,
        enters_finish_lane=BOARD.is_finish_lane(new_pos) and token.on_main_track(),
        captures=victim is not None,
        victim_distance=victim_distance,
        lands_safe=BOARD.is_safe(new_pos),
        lands_boost=tile_type is TileType.BOOST,
        lands_mystery=tile_type is TileType.MYSTERY,
        currently_threatened=is_threatened(threats, token.position),
        destination_threatened=is_threatened(threats, new_pos),
    )


def build_move_options(
    state: "GameState", player: "Player", dice_roll: int
) -> StrategyContext:
    """Convert the current state and legal moves into a strategy context."""
    dice = int(dice_roll)
    threats = threat_map(state, player)
    legal = valid_moves(state, player, dice)
    legal_ids = {t.id for t in legal}
    action_mask = np.array([t.id in legal_ids for t in player.tokens], dtype=np.bool_)

    moves = [_create_move_option(state, player, t, dice, threats) for t in legal]

    return StrategyContext(
        state=state,
        player=player,
        dice_roll=dice,
        threat_map=threats,
        action_mask=action_mask,
        moves=moves,
        average_progress=average_progress(player),
    )
