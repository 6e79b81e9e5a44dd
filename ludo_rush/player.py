from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from typing import Optional

from .config import config
from .token import Token
from .types import Color, PowerUp, PowerUpType

AI_NAMES = [
    "RushBot",
    "LudoMaster",
    "DiceKing",
    "TokenTerror",
    "BoardBoss",
    "RollRaider",
    "CaptureKing",
    "SwiftPawn",
    "LuckyRoller",
    "StarChaser",
    "PowerPlayer",
    "TurboToken",
]


def random_ai_name(rng: random.Random) -> str:
    return rng.choice(AI_NAMES)


@dataclass(slots=True)
class Player:
    name: str
    color: Color
    is_ai: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    tokens: list[Token] = field(init=False)
    power_ups: list[PowerUp] = field(default_factory=list)
    coins: int = 0
    capture_streak: int = 0
    # Lifetime counters for the end-of-game summary
    captures: int = 0
    power_ups_used: int = 0
    best_streak: int = 0
    # Set by the speed boost power-up, consumed by the next roll
    speed_boost: bool = False

    def __post_init__(self) -> None:
        self.color = Color(self.color)
        self.tokens = [
            Token(id=f"{self.color.value}-{i}", color=self.color)
            for i in range(config.TOKENS_PER_PLAYER)
        ]

    def token(self, token_id: str) -> Optional[Token]:
        return next((t for t in self.tokens if t.id == token_id), None)

    def has_won(self) -> bool:
        return all(t.is_finished() for t in self.tokens)

    def finished_count(self) -> int:
        return sum(1 for t in self.tokens if t.is_finished())

    def has_power_up(self, power_up_type: PowerUpType | str) -> bool:
        kind = PowerUpType(power_up_type)
        return any(p.type is kind for p in self.power_ups)

    def remove_power_up(self, power_up_type: PowerUpType | str) -> PowerUp | None:
        """Remove one instance of the given type, returning it."""
        kind = PowerUpType(power_up_type)
        for idx, power_up in enumerate(self.power_ups):
            if power_up.type is kind:
                return self.power_ups.pop(idx)
        return None

    def record_capture(self) -> int:
        self.capture_streak += 1
        self.captures += 1
        self.best_streak = max(self.best_streak, self.capture_streak)
        return self.capture_streak

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.value,
            "is_ai": self.is_ai,
            "tokens": [t.to_dict() for t in self.tokens],
            "power_ups": [p.to_dict() for p in self.power_ups],
            "coins": self.coins,
            "capture_streak": self.capture_streak,
        }
