from __future__ import annotations

import random
from typing import TYPE_CHECKING, Dict, Optional, Type

from ..config import ai_config
from ..types import Difficulty
from .base import BaseStrategy
from .heuristic import EasyStrategy, HardStrategy, HeuristicStrategy, MediumStrategy
from .types import PowerUpDecision

if TYPE_CHECKING:
    from ..player import Player
    from ..state import GameState
    from ..token import Token

STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    EasyStrategy.name: EasyStrategy,
    MediumStrategy.name: MediumStrategy,
    HardStrategy.name: HardStrategy,
    HeuristicStrategy.name: HeuristicStrategy,
}


def create(strategy_name: str | Difficulty, **kwargs) -> BaseStrategy:
    key = strategy_name.value if isinstance(strategy_name, Difficulty) else strategy_name
    cls = STRATEGY_REGISTRY.get(str(key).lower())
    if cls is None:
        raise KeyError(f"Unknown strategy '{strategy_name}'.")
    return cls(**kwargs)


def available() -> Dict[str, Type[BaseStrategy]]:
    return dict(STRATEGY_REGISTRY)


def select_move(
    state: "GameState", difficulty: str | Difficulty, rng: random.Random
) -> Optional["Token"]:
    """Token the computer player should move with the rolled dice, if any."""
    return create(difficulty).decide(state, rng)


def power_up_policy(
    state: "GameState",
    player: "Player",
    difficulty: str | Difficulty,
    rng: random.Random,
) -> PowerUpDecision:
    """At most one power-up to fire before ``player`` rolls."""
    return create(difficulty).plan_power_up(state, player, rng)


def thinking_delay(difficulty: str | Difficulty, rng: random.Random) -> float:
    """Seconds a presentational host may pause before an AI move."""
    low, high = ai_config.thinking_delay[Difficulty(difficulty).value]
    return rng.uniform(low, high)
