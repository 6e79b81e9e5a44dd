from dataclasses import dataclass

from .config import config
from .types import Color


@dataclass(slots=True)
class Token:
    """Lightweight token model. Holds state only.

    Rule logic (destinations, captures, tile effects) lives in ``rules``.
    Positions: -1 = home base; 0..51 main track; 52..57 finish lane;
    58 = finished.
    """

    id: str
    color: Color
    position: int = config.HOME_POSITION
    is_shielded: bool = False
    shield_turns: int = 0

    def is_home(self) -> bool:
        return self.position == config.HOME_POSITION

    def is_finished(self) -> bool:
        return self.position == config.FINISHED

    def on_main_track(self) -> bool:
        return 0 <= self.position < config.TRACK_LENGTH

    def in_finish_lane(self) -> bool:
        return config.FINISH_LANE_START <= self.position < config.FINISHED

    def move_to(self, new_position: int) -> None:
        self.position = new_position

    def send_home(self) -> None:
        self.position = config.HOME_POSITION

    def shield(self, turns: int) -> None:
        self.is_shielded = True
        self.shield_turns = turns

    def tick_shield(self) -> None:
        if self.is_shielded and self.shield_turns > 0:
            self.shield_turns -= 1
            if self.shield_turns == 0:
                self.is_shielded = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "color": self.color.value,
            "position": self.position,
            "is_shielded": self.is_shielded,
            "shield_turns": self.shield_turns,
        }
