"""
Ludo Rush: a Ludo variant with special tiles, power-ups and capture streaks.
Provides the rules engine, the turn orchestrator and heuristic AI opponents.
"""

from .board import BOARD, Board
from .config import ai_config, config, reward_config
from .errors import IllegalCommandError, LudoRushError
from .events import GameEvent
from .game import Game
from .player import Player
from .state import GameState, GameSummary, create_game, summarize
from .token import Token
from .types import (
    Color,
    CommandResult,
    Difficulty,
    GamePhase,
    MoveResult,
    PowerUp,
    PowerUpType,
    TileType,
)

__all__ = [
    # Core model
    "Board",
    "BOARD",
    "Token",
    "Player",
    "GameState",
    "create_game",
    # Orchestration
    "Game",
    "GameEvent",
    "CommandResult",
    "GameSummary",
    "summarize",
    # Types
    "Color",
    "Difficulty",
    "GamePhase",
    "MoveResult",
    "PowerUp",
    "PowerUpType",
    "TileType",
    # Errors
    "LudoRushError",
    "IllegalCommandError",
    # Configuration
    "config",
    "reward_config",
    "ai_config",
]
