"""Heuristic computer opponents, one per difficulty."""

from .base import BaseStrategy
from .features import (
    aggregate_progress,
    build_move_options,
    find_capture_target,
    is_position_threatened,
    threat_map,
)
from .heuristic import EasyStrategy, HardStrategy, HeuristicStrategy, MediumStrategy
from .power_ups import PowerUpPolicy
from .registry import available, create, power_up_policy, select_move, thinking_delay
from .types import MoveOption, PowerUpDecision, StrategyContext

__all__ = [
    "MoveOption",
    "StrategyContext",
    "PowerUpDecision",
    "PowerUpPolicy",
    "build_move_options",
    "threat_map",
    "is_position_threatened",
    "find_capture_target",
    "aggregate_progress",
    "BaseStrategy",
    "HeuristicStrategy",
    "EasyStrategy",
    "MediumStrategy",
    "HardStrategy",
    "available",
    "create",
    "select_move",
    "power_up_policy",
    "thinking_delay",
]
