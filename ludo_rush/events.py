"""
Game events for UI hooks and logging.
Events describe what happened while a command was processed.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""

    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

GAME_STARTED = "game_started"
DICE_ROLLED = "dice_rolled"
TOKEN_MOVED = "token_moved"
TOKEN_CAPTURED = "token_captured"
POWER_UP_ACQUIRED = "power_up_acquired"
POWER_UP_USED = "power_up_used"
BONUS_COINS = "bonus_coins"
TOKEN_WARPED = "token_warped"
BOOST_MOVE = "boost_move"
TURN_SKIPPED = "turn_skipped"
EXTRA_TURN = "extra_turn"
TURN_STARTED = "turn_started"
WINNER_DECLARED = "winner_declared"

# turn_skipped reasons
SKIP_TRIPLE_SIX = "triple_six"
SKIP_FROZEN = "frozen"
SKIP_NO_MOVES = "no_moves"


# ===== Event Factory Functions =====

def game_started(game_id: str, player_names: list[str]) -> GameEvent:
    return GameEvent(GAME_STARTED, {"game_id": game_id, "players": player_names})


def dice_rolled(player_id: str, face: int, value: int) -> GameEvent:
    return GameEvent(DICE_ROLLED, {"player_id": player_id, "face": face, "value": value})


def token_moved(player_id: str, token_id: str, old: int, new: int) -> GameEvent:
    return GameEvent(TOKEN_MOVED, {
        "player_id": player_id,
        "token_id": token_id,
        "from": old,
        "to": new,
    })


def token_captured(capturer_id: str, token_id: str, color: str, position: int) -> GameEvent:
    return GameEvent(TOKEN_CAPTURED, {
        "capturer_id": capturer_id,
        "token_id": token_id,
        "color": color,
        "position": position,
    })


def power_up_acquired(player_id: str, power_up_type: str) -> GameEvent:
    return GameEvent(POWER_UP_ACQUIRED, {"player_id": player_id, "power_up": power_up_type})


def power_up_used(player_id: str, power_up_type: str, target_id: str | None) -> GameEvent:
    return GameEvent(POWER_UP_USED, {
        "player_id": player_id,
        "power_up": power_up_type,
        "target_id": target_id,
    })


def bonus_coins(player_id: str, amount: int) -> GameEvent:
    return GameEvent(BONUS_COINS, {"player_id": player_id, "amount": amount})


def token_warped(player_id: str, token_id: str, teleport_to: int) -> GameEvent:
    return GameEvent(TOKEN_WARPED, {
        "player_id": player_id,
        "token_id": token_id,
        "to": teleport_to,
    })


def boost_move(player_id: str, token_id: str, spaces: int, applied: bool) -> GameEvent:
    return GameEvent(BOOST_MOVE, {
        "player_id": player_id,
        "token_id": token_id,
        "spaces": spaces,
        "applied": applied,
    })


def turn_skipped(player_id: str, reason: str) -> GameEvent:
    return GameEvent(TURN_SKIPPED, {"player_id": player_id, "reason": reason})


def extra_turn(player_id: str) -> GameEvent:
    return GameEvent(EXTRA_TURN, {"player_id": player_id})


def turn_started(turn_number: int, player_id: str) -> GameEvent:
    return GameEvent(TURN_STARTED, {"turn_number": turn_number, "player_id": player_id})


def winner_declared(player_id: str, name: str, turn_count: int) -> GameEvent:
    return GameEvent(WINNER_DECLARED, {
        "player_id": player_id,
        "name": name,
        "turn_count": turn_count,
    })
