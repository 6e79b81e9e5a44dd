from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .events import GameEvent
    from .state import GameState
    from .token import Token


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class TileType(str, Enum):
    NORMAL = "normal"
    SAFE = "safe"  # no captures here
    BOOST = "boost"  # bonus move
    MYSTERY = "mystery"  # random power-up
    WARP = "warp"  # jump to the next warp tile
    COIN = "coin"  # bonus coins


class PowerUpType(str, Enum):
    SHIELD = "shield"
    SPEED_BOOST = "speed_boost"
    SNIPER = "sniper"
    REROLL = "reroll"
    TELEPORT = "teleport"
    FREEZE = "freeze"


class GamePhase(str, Enum):
    MENU = "menu"
    WAITING = "waiting"
    AWAITING_ROLL = "awaiting_roll"
    SELECTING_TOKEN = "selecting_token"
    MOVING = "moving"
    POWER_UP = "power_up"
    GAME_OVER = "game_over"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class PowerUp:
    type: PowerUpType
    name: str
    description: str
    icon: str

    @classmethod
    def of(cls, power_up_type: PowerUpType | str) -> "PowerUp":
        kind = PowerUpType(power_up_type)
        name, description, icon = POWER_UP_INFO[kind]
        return cls(type=kind, name=name, description=description, icon=icon)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
        }


POWER_UP_INFO: dict[PowerUpType, tuple[str, str, str]] = {
    PowerUpType.SHIELD: ("Shield", "Protect from capture for 3 turns", "🛡️"),
    PowerUpType.SPEED_BOOST: ("Speed Boost", "Double your dice value", "⚡"),
    PowerUpType.SNIPER: ("Sniper", "Capture any visible enemy", "🎯"),
    PowerUpType.REROLL: ("Reroll", "Roll the dice again", "🔄"),
    PowerUpType.TELEPORT: ("Teleport", "Jump to any safe tile", "🌀"),
    PowerUpType.FREEZE: ("Freeze", "Skip opponent's next turn", "❄️"),
}


@dataclass(frozen=True, slots=True)
class Tile:
    index: int
    type: TileType = TileType.NORMAL
    color: Optional[Color] = None  # set on a color's entry tile


@dataclass(slots=True)
class DiceState:
    value: int = 1  # movement value (doubled under speed boost)
    face: int = 1  # raw die face
    is_rolling: bool = False
    can_roll: bool = True


@dataclass(slots=True)
class LastCapture:
    capturer_id: str
    captured: "Token"


@dataclass(slots=True)
class MoveResult:
    new_state: "GameState"
    captured: Optional["Token"] = None
    got_power_up: Optional[PowerUp] = None
    bonus_coins: int = 0
    bonus_move: int = 0
    teleport_to: Optional[int] = None


@dataclass(slots=True)
class CommandResult:
    accepted: bool
    reason: str = ""
    events: List["GameEvent"] = field(default_factory=list)

    @classmethod
    def rejected(cls, reason: str) -> "CommandResult":
        return cls(accepted=False, reason=reason)
