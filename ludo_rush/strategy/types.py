from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

import numpy as np

if TYPE_CHECKING:
    from ..player import Player
    from ..state import GameState
    from ..token import Token
    from ..types import PowerUpType


@dataclass(slots=True)
class MoveOption:
    """Structured metadata about a legal move."""

    token: "Token"
    current_pos: int
    new_pos: int
    dice_roll: int
    progress: int  # destination progress in the mover's frame
    leaves_home: bool
    finishes: bool
    enters_finish_lane: bool
    captures: bool
    victim_distance: int  # victim's distance from its own entry, -1 if none
    lands_safe: bool
    lands_boost: bool
    lands_mystery: bool
    currently_threatened: bool
    destination_threatened: bool

    @property
    def token_id(self) -> str:
        return self.token.id


@dataclass(slots=True)
class StrategyContext:
    """Input payload shared by heuristic strategies."""

    state: "GameState"
    player: "Player"
    dice_roll: int
    threat_map: np.ndarray  # shape (track_length,), cells opponents can hit
    action_mask: np.ndarray  # shape (tokens_per_player,)
    moves: List[MoveOption]
    average_progress: float  # mean progress of the player's on-board tokens

    def iter_legal(self) -> Iterable[MoveOption]:
        index = {t.id: i for i, t in enumerate(self.player.tokens)}
        return (move for move in self.moves if self.action_mask[index[move.token_id]])


@dataclass(slots=True)
class PowerUpDecision:
    use: bool
    power_up_type: Optional["PowerUpType"] = None
    target_id: Optional[str] = None

    @classmethod
    def skip(cls) -> "PowerUpDecision":
        return cls(use=False)
