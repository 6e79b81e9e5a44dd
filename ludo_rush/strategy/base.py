from __future__ import annotations

import random
from typing import TYPE_CHECKING, ClassVar, Optional

from .features import build_move_options
from .types import MoveOption, PowerUpDecision, StrategyContext

if TYPE_CHECKING:
    from ..player import Player
    from ..state import GameState
    from ..token import Token


class BaseStrategy:
    """Base class for heuristic strategies with shared move selection."""

    name = "base"
    # Chance of replacing the best move with a uniformly random legal one
    random_move_probability: ClassVar[float] = 0.0

    def decide(self, state: "GameState", rng: random.Random) -> Optional["Token"]:
        """Pick a token for the current player and the rolled dice value."""
        ctx = build_move_options(state, state.current_player, state.dice.value)
        choice = self.select_move(ctx, rng)
        return choice.token if choice is not None else None

    def select_move(
        self, ctx: StrategyContext, rng: random.Random
    ) -> Optional[MoveOption]:
        legal = list(ctx.iter_legal())
        if not legal:
            return None
        if len(legal) == 1:
            return legal[0]

        scored_moves = [(move, self._score_move(ctx, move)) for move in legal]
        # max() keeps the first of equal scores
        best, _ = max(scored_moves, key=lambda item: item[1])

        if self.random_move_probability > 0 and rng.random() < self.random_move_probability:
            return rng.choice(legal)
        return best

    def plan_power_up(
        self, state: "GameState", player: "Player", rng: random.Random
    ) -> PowerUpDecision:
        return PowerUpDecision.skip()

    def _score_move(
        self, ctx: StrategyContext, move: MoveOption
    ) -> float:  # pragma: no cover - abstract
        raise NotImplementedError
