from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .board import BOARD, Board
from .player import Player
from .token import Token
from .types import DiceState, GamePhase, LastCapture, PowerUpType, Tile


@dataclass(slots=True)
class GameState:
    players: List[Player]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    current_player_index: int = 0
    dice: DiceState = field(default_factory=DiceState)
    phase: GamePhase = GamePhase.AWAITING_ROLL
    winner: Optional[Player] = None
    turn_count: int = 0
    consecutive_sixes: int = 0
    board: Board = BOARD
    last_capture: Optional[LastCapture] = None
    frozen_players: Dict[str, int] = field(default_factory=dict)
    show_rewarded_ad: bool = False
    ad_reward_type: Optional[PowerUpType] = None

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return self.board.tiles

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def copy(self) -> "GameState":
        """Deep copy; the board is shared by reference."""
        return copy.deepcopy(self)

    def player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def owner_of(self, token_id: str) -> Optional[Player]:
        for pl in self.players:
            if pl.token(token_id) is not None:
                return pl
        return None

    def find_token(self, token_id: str) -> Optional[Token]:
        owner = self.owner_of(token_id)
        return owner.token(token_id) if owner is not None else None

    def all_tokens(self) -> List[Token]:
        return [t for pl in self.players for t in pl.tokens]

    def is_frozen(self, player_id: str) -> bool:
        return self.frozen_players.get(player_id, 0) > 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "players": [p.to_dict() for p in self.players],
            "current_player_index": self.current_player_index,
            "dice": {
                "value": self.dice.value,
                "face": self.dice.face,
                "is_rolling": self.dice.is_rolling,
                "can_roll": self.dice.can_roll,
            },
            "phase": self.phase.value,
            "winner": self.winner.id if self.winner else None,
            "turn_count": self.turn_count,
            "consecutive_sixes": self.consecutive_sixes,
            "last_capture": (
                {
                    "capturer_id": self.last_capture.capturer_id,
                    "captured": self.last_capture.captured.to_dict(),
                }
                if self.last_capture
                else None
            ),
            "frozen_players": dict(self.frozen_players),
            "show_rewarded_ad": self.show_rewarded_ad,
            "ad_reward_type": self.ad_reward_type.value if self.ad_reward_type else None,
        }


def create_game(players: List[Player]) -> GameState:
    return GameState(players=list(players))


@dataclass(slots=True)
class PlayerSummary:
    player_id: str
    name: str
    color: str
    is_ai: bool
    captures: int
    power_ups_used: int
    coins: int
    best_streak: int
    finished_tokens: int


@dataclass(slots=True)
class GameSummary:
    """Plain aggregate handed to leaderboard / stats stores at game over."""

    game_id: str
    winner_id: Optional[str]
    winner_name: Optional[str]
    turn_count: int
    players: List[PlayerSummary]

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "winner_id": self.winner_id,
            "winner_name": self.winner_name,
            "turn_count": self.turn_count,
            "players": [
                {
                    "player_id": p.player_id,
                    "name": p.name,
                    "color": p.color,
                    "is_ai": p.is_ai,
                    "captures": p.captures,
                    "power_ups_used": p.power_ups_used,
                    "coins": p.coins,
                    "best_streak": p.best_streak,
                    "finished_tokens": p.finished_tokens,
                }
                for p in self.players
            ],
        }


def summarize(state: GameState) -> GameSummary:
    return GameSummary(
        game_id=state.id,
        winner_id=state.winner.id if state.winner else None,
        winner_name=state.winner.name if state.winner else None,
        turn_count=state.turn_count,
        players=[
            PlayerSummary(
                player_id=p.id,
                name=p.name,
                color=p.color.value,
                is_ai=p.is_ai,
                captures=p.captures,
                power_ups_used=p.power_ups_used,
                coins=p.coins,
                best_streak=p.best_streak,
                finished_tokens=p.finished_count(),
            )
            for p in state.players
        ],
    )
