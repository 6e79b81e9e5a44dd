from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ..config import ai_config
from .base import BaseStrategy
from .power_ups import PowerUpPolicy
from .types import MoveOption, PowerUpDecision, StrategyContext

if TYPE_CHECKING:
    from ..player import Player
    from ..state import GameState


@dataclass(slots=True)
class HeuristicStrategy(BaseStrategy):
    """Race-first scoring: finish, captures, lane entry, then tile bonuses."""

    name: ClassVar[str] = "heuristic"
    risk_aware: ClassVar[bool] = True
    spread_tokens: ClassVar[bool] = False
    power_up_policy: ClassVar[PowerUpPolicy] = PowerUpPolicy()

    leave_home: float = ai_config.leave_home
    finish: float = ai_config.finish
    enter_finish_lane: float = ai_config.enter_finish_lane
    capture: float = ai_config.capture
    capture_near_finish: float = ai_config.capture_near_finish
    near_finish_distance: int = ai_config.near_finish_distance
    safe_tile: float = ai_config.safe_tile
    boost_tile: float = ai_config.boost_tile
    mystery_tile: float = ai_config.mystery_tile
    escape_threat: float = ai_config.escape_threat
    escape_to_safe: float = ai_config.escape_to_safe
    progress_weight: float = ai_config.progress_weight
    risk_penalty: float = ai_config.risk_penalty
    spread_bonus: float = ai_config.spread_bonus

    def plan_power_up(
        self, state: "GameState", player: "Player", rng: random.Random
    ) -> PowerUpDecision:
        return self.power_up_policy.decide(state, player, rng)

    def _score_move(self, ctx: StrategyContext, move: MoveOption) -> float:
        # 1) Flat priorities that settle the decision on their own
        if move.leaves_home:
            return self.leave_home
        if move.finishes:
            return self.finish

        score = 0.0

        # 2) Race and captures
        if move.enters_finish_lane:
            score += self.enter_finish_lane
        if move.captures:
            score += self.capture
            if move.victim_distance >= self.near_finish_distance:
                score += self.capture_near_finish

        # 3) Special tiles
        if move.lands_safe:
            score += self.safe_tile
        if move.lands_boost:
            score += self.boost_tile
        if move.lands_mystery:
            score += self.mystery_tile

        # 4) Get out of reach
        if move.currently_threatened:
            score += self.escape_threat
            if move.lands_safe:
                score += self.escape_to_safe

        # 5) Tie-break toward advancement
        score += move.progress * self.progress_weight

        if self.risk_aware and move.destination_threatened and not move.lands_safe:
            score -= self.risk_penalty

        if self.spread_tokens and self._is_laggard(ctx, move):
            score += self.spread_bonus

        return score

    @staticmethod
    def _is_laggard(ctx: StrategyContext, move: MoveOption) -> bool:
        """True for the on-board candidate furthest behind the player's average."""
        on_board = [m for m in ctx.iter_legal() if not m.leaves_home]
        if not on_board:
            return False
        board = ctx.state.board
        own = {m.token_id: board.progress(ctx.player.color, m.current_pos) for m in on_board}
        if move.token_id not in own:
            return False
        lowest = min(own.values())
        return own[move.token_id] == lowest and lowest < ctx.average_progress


@dataclass(slots=True)
class EasyStrategy(HeuristicStrategy):
    """Ignores landing risk, often plays a random move, rarely uses power-ups."""

    name: ClassVar[str] = "easy"
    random_move_probability: ClassVar[float] = ai_config.random_move_probability["easy"]
    risk_aware: ClassVar[bool] = False
    power_up_policy: ClassVar[PowerUpPolicy] = PowerUpPolicy(
        skip_probability=ai_config.easy_power_up_skip, use_sniper=False
    )


@dataclass(slots=True)
class MediumStrategy(HeuristicStrategy):
    """Risk-aware scoring with an occasional random move."""

    name: ClassVar[str] = "medium"
    random_move_probability: ClassVar[float] = ai_config.random_move_probability["medium"]


@dataclass(slots=True)
class HardStrategy(HeuristicStrategy):
    """Always plays the top score and spreads its tokens."""

    name: ClassVar[str] = "hard"
    random_move_probability: ClassVar[float] = ai_config.random_move_probability["hard"]
    spread_tokens: ClassVar[bool] = True
    power_up_policy: ClassVar[PowerUpPolicy] = PowerUpPolicy(use_freeze=True)
