import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Config:
    # --- Board ---
    TRACK_LENGTH: int = 52  # 0..51 main track
    FINISH_LANE_SIZE: int = 6  # 52..57 finish lane, 58 = finished
    TOKENS_PER_PLAYER: int = 4
    HOME_POSITION: int = -1

    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 4
    NUM_PLAYERS: int = int(os.getenv("NUM_PLAYERS", 4))
    AI_PLAYERS: int = int(os.getenv("AI_PLAYERS", 3))
    DIFFICULTY: str = os.getenv("DIFFICULTY", "medium")
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 2000))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Seat order for new games
    COLORS: list[str] = field(
        default_factory=lambda: ["red", "blue", "green", "yellow"]
    )
    # Where each color enters the main track
    START_POSITIONS: dict[str, int] = field(
        default_factory=lambda: {"red": 0, "blue": 13, "yellow": 26, "green": 39}
    )
    STAR_TILES: list[int] = field(default_factory=lambda: [8, 21, 34, 47])
    BOOST_TILES: list[int] = field(default_factory=lambda: [4, 17, 30, 43])
    MYSTERY_TILES: list[int] = field(default_factory=lambda: [10, 23, 36, 49])
    WARP_TILES: list[int] = field(default_factory=lambda: [6, 19, 32, 45])
    COIN_TILES: list[int] = field(default_factory=lambda: [2, 15, 28, 41])

    # --- Dice ---
    DICE_FACES: int = 6
    EXIT_HOME_ROLL: int = 6
    EXTRA_TURN_ROLL: int = 6
    MAX_CONSECUTIVE_SIXES: int = 3

    # Derived (populated in __post_init__ due to slots)
    SAFE_TILES: list[int] = field(default_factory=list)
    FINISH_LANE_START: int = 0
    FINISHED: int = 0

    def __post_init__(self):
        # Entry tiles are always safe
        self.SAFE_TILES = sorted(set(self.STAR_TILES) | set(self.START_POSITIONS.values()))
        self.FINISH_LANE_START = self.TRACK_LENGTH
        self.FINISHED = self.TRACK_LENGTH + self.FINISH_LANE_SIZE

        if not self.MIN_PLAYERS <= self.NUM_PLAYERS <= self.MAX_PLAYERS:
            raise ValueError("NUM_PLAYERS must be between 2 and 4")


@dataclass(slots=True)
class RewardConfig:
    capture_coins: int = 10  # multiplied by the capture streak
    coin_tile_coins: int = 20
    finish_coins: int = 50
    sniper_coins: int = 15
    boost_bonus_move: int = 6
    shield_turns: int = 3
    freeze_turns: int = 1


@dataclass(slots=True)
class AIConfig:
    # Move scoring
    leave_home: float = 50.0
    finish: float = 1000.0
    enter_finish_lane: float = 200.0
    capture: float = 300.0
    capture_near_finish: float = 100.0
    near_finish_distance: int = 45
    safe_tile: float = 40.0
    boost_tile: float = 35.0
    mystery_tile: float = 45.0
    escape_threat: float = 30.0
    escape_to_safe: float = 20.0
    progress_weight: float = 0.5
    risk_penalty: float = 25.0
    spread_bonus: float = 15.0

    # Randomisation per difficulty
    random_move_probability: dict[str, float] = field(
        default_factory=lambda: {"easy": 0.4, "medium": 0.15, "hard": 0.0}
    )
    easy_power_up_skip: float = 0.7

    # Power-up policy thresholds (distance from the token's own entry)
    shield_danger_distance: int = 40
    sniper_min_distance: int = 40
    freeze_min_progress: float = 150.0
    freeze_finished_weight: float = 100.0
    freeze_lane_weight: float = 60.0

    # Presentational pacing in seconds (min, max)
    thinking_delay: dict[str, tuple[float, float]] = field(
        default_factory=lambda: {
            "easy": (0.5, 1.0),
            "medium": (0.8, 1.5),
            "hard": (1.0, 2.0),
        }
    )


config = Config()
reward_config = RewardConfig()
ai_config = AIConfig()
