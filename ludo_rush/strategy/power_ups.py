from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..board import BOARD
from ..config import ai_config
from ..types import PowerUpType
from .features import aggregate_progress, is_threatened, threat_map
from .types import PowerUpDecision

if TYPE_CHECKING:
    from ..player import Player
    from ..state import GameState


@dataclass(slots=True)
class PowerUpPolicy:
    """Pre-roll power-up usage: shield, then sniper, then freeze."""

    skip_probability: float = 0.0
    use_sniper: bool = True
    use_freeze: bool = False
    shield_danger_distance: int = ai_config.shield_danger_distance
    sniper_min_distance: int = ai_config.sniper_min_distance
    freeze_min_progress: float = ai_config.freeze_min_progress

    def decide(
        self, state: "GameState", player: "Player", rng: random.Random
    ) -> PowerUpDecision:
        if not player.power_ups:
            return PowerUpDecision.skip()
        if self.skip_probability > 0 and rng.random() < self.skip_probability:
            return PowerUpDecision.skip()

        for planner in (self._plan_shield, self._plan_sniper, self._plan_freeze):
            decision = planner(state, player)
            if decision is not None:
                return decision
        return PowerUpDecision.skip()

    def _plan_shield(
        self, state: "GameState", player: "Player"
    ) -> Optional[PowerUpDecision]:
        if not player.has_power_up(PowerUpType.SHIELD):
            return None
        threats = threat_map(state, player)
        for tok in player.tokens:
            if tok.is_shielded or not tok.on_main_track():
                continue
            if BOARD.distance_from_entry(player.color, tok.position) <= self.shield_danger_distance:
                continue
            if is_threatened(threats, tok.position):
                return PowerUpDecision(True, PowerUpType.SHIELD, tok.id)
        return None

    def _plan_sniper(
        self, state: "GameState", player: "Player"
    ) -> Optional[PowerUpDecision]:
        if not self.use_sniper or not player.has_power_up(PowerUpType.SNIPER):
            return None
        best_id: Optional[str] = None
        best_distance = -1
        for opponent in state.players:
            if opponent.id == player.id:
                continue
            for tok in opponent.tokens:
                if not tok.on_main_track() or tok.is_shielded:
                    continue
                distance = BOARD.distance_from_entry(opponent.color, tok.position)
                if distance > best_distance:
                    best_id, best_distance = tok.id, distance
        if best_id is not None and best_distance > self.sniper_min_distance:
            return PowerUpDecision(True, PowerUpType.SNIPER, best_id)
        return None

    def _plan_freeze(
        self, state: "GameState", player: "Player"
    ) -> Optional[PowerUpDecision]:
        if not self.use_freeze or not player.has_power_up(PowerUpType.FREEZE):
            return None
        leader: Optional["Player"] = None
        best = -1.0
        for opponent in state.players:
            if opponent.id == player.id:
                continue
            progress = aggregate_progress(opponent)
            if progress > best:
                leader, best = opponent, progress
        if leader is not None and best > self.freeze_min_progress:
            return PowerUpDecision(True, PowerUpType.FREEZE, leader.id)
        return None
