"""
Movement and rules engine.

Every transition takes a GameState and returns a new one; the input is never
mutated. Illegal requests raise an ``IllegalCommandError`` subclass before
any state is touched.
"""

from __future__ import annotations

import copy
import random
from typing import List, Optional, Tuple

from loguru import logger

from .board import BOARD
from .config import config, reward_config
from .errors import IllegalMoveError, InvalidTargetError, PowerUpNotOwnedError
from .player import Player
from .state import GameState
from .token import Token
from .types import GamePhase, LastCapture, MoveResult, PowerUp, PowerUpType, TileType


# --- Dice ---
def roll_dice(rng: random.Random) -> int:
    return rng.randint(1, config.DICE_FACES)


# --- Destinations and legality ---
def _raw_destination(color, position: int, dice_value: int) -> int | None:
    """Unclamped destination, None when the token cannot leave home."""
    if position == config.HOME_POSITION:
        return BOARD.entry_of(color) if dice_value == config.EXIT_HOME_ROLL else None
    if position >= config.FINISH_LANE_START:
        return position + dice_value
    distance = BOARD.distance_from_entry(color, position)
    if distance + dice_value >= config.TRACK_LENGTH:
        # Remainder carries into the color's finish lane
        return config.FINISH_LANE_START + distance + dice_value - config.TRACK_LENGTH
    return (position + dice_value) % config.TRACK_LENGTH


def can_move(player: Player, token: Token, dice_value: int) -> bool:
    if token.is_finished():
        return False
    dest = _raw_destination(player.color, token.position, dice_value)
    return dest is not None and dest <= config.FINISHED


def destination(player: Player, token: Token, dice_value: int) -> int:
    """Where ``token`` would land. Check ``can_move`` first."""
    if token.is_home():
        return BOARD.entry_of(player.color)
    dest = _raw_destination(player.color, token.position, dice_value)
    if token.in_finish_lane() or token.is_finished():
        return min(dest, config.FINISHED)
    return dest


def valid_moves(state: GameState, player: Player, dice_value: int) -> List[Token]:
    return [t for t in player.tokens if can_move(player, t, dice_value)]


def _locate(state: GameState, player: Player, token: Token) -> Tuple[int, Player, Token]:
    idx = next((i for i, p in enumerate(state.players) if p.id == player.id), None)
    if idx is None:
        raise IllegalMoveError(f"Player {player.id} is not in this game")
    owned = state.players[idx].token(token.id)
    if owned is None:
        raise IllegalMoveError(f"Token {token.id} does not belong to {player.name}")
    return idx, state.players[idx], owned


# --- Applying a move ---
def apply_move(
    state: GameState,
    player: Player,
    token: Token,
    dice_value: int,
    rng: random.Random,
    follow_up: bool = False,
) -> MoveResult:
    """Move ``token`` by ``dice_value`` and resolve captures and tile effects.

    ``follow_up`` marks a boost bonus move chained onto a move that already
    settled streaks and shields for this turn.
    """
    _, current_player, current_token = _locate(state, player, token)
    if not can_move(current_player, current_token, dice_value):
        raise IllegalMoveError(
            f"Token {token.id} cannot move {dice_value} from {current_token.position}"
        )

    new_state = state.copy()
    mover_idx, mover, moving = _locate(new_state, player, token)
    dest = destination(mover, moving, dice_value)
    moving.move_to(dest)

    captured: Optional[Token] = None
    got_power_up: Optional[PowerUp] = None
    bonus_coins = 0
    bonus_move = 0
    teleport_to: Optional[int] = None

    tile = new_state.board.tile_at(dest)
    if tile is not None:
        # Captures: first unshielded opponent on a non-safe cell
        if tile.type is not TileType.SAFE:
            for idx, opponent in enumerate(new_state.players):
                if idx == mover_idx:
                    continue
                victim = next(
                    (
                        t
                        for t in opponent.tokens
                        if t.position == dest and not t.is_shielded
                    ),
                    None,
                )
                if victim is not None:
                    captured = copy.copy(victim)
                    victim.send_home()
                    new_state.last_capture = LastCapture(
                        capturer_id=mover.id, captured=captured
                    )
                    streak = mover.record_capture()
                    bonus_coins += reward_config.capture_coins * streak
                    logger.debug(
                        f"{mover.name} captured {victim.id} at {dest} (streak {streak})"
                    )
                    break

        if tile.type is TileType.BOOST:
            bonus_move = reward_config.boost_bonus_move
        elif tile.type is TileType.MYSTERY:
            got_power_up = random_power_up(rng)
            mover.power_ups.append(got_power_up)
        elif tile.type is TileType.WARP:
            teleport_to = new_state.board.next_warp(dest)
            moving.move_to(teleport_to)
        elif tile.type is TileType.COIN:
            bonus_coins += reward_config.coin_tile_coins

    if dest == config.FINISHED:
        bonus_coins += reward_config.finish_coins

    mover.coins += bonus_coins

    if not follow_up:
        if captured is None:
            mover.capture_streak = 0
        for tk in new_state.all_tokens():
            tk.tick_shield()

    return MoveResult(
        new_state=new_state,
        captured=captured,
        got_power_up=got_power_up,
        bonus_coins=bonus_coins,
        bonus_move=bonus_move,
        teleport_to=teleport_to,
    )


# --- Power-ups ---
def random_power_up(rng: random.Random) -> PowerUp:
    return PowerUp.of(rng.choice(list(PowerUpType)))


def _resolve_token_target(
    state: GameState, target_id: Optional[str], power_up_type: PowerUpType
) -> Tuple[Player, Token]:
    if target_id is None:
        raise InvalidTargetError(f"{power_up_type.value} needs a target token")
    owner = state.owner_of(target_id)
    if owner is None:
        raise InvalidTargetError(f"Unknown token {target_id}")
    return owner, owner.token(target_id)


def _validate_power_up(
    state: GameState,
    player: Player,
    power_up_type: PowerUpType,
    target_id: Optional[str],
) -> None:
    if not player.has_power_up(power_up_type):
        raise PowerUpNotOwnedError(f"{player.name} does not own {power_up_type.value}")

    if power_up_type in (PowerUpType.SHIELD, PowerUpType.TELEPORT):
        owner, target = _resolve_token_target(state, target_id, power_up_type)
        if owner.id != player.id:
            raise InvalidTargetError(f"{power_up_type.value} must target your own token")
        if target.is_finished():
            raise InvalidTargetError("Finished tokens cannot be targeted")
        if power_up_type is PowerUpType.TELEPORT and not target.on_main_track():
            raise InvalidTargetError("Teleport needs a token on the main track")
    elif power_up_type is PowerUpType.SNIPER:
        owner, target = _resolve_token_target(state, target_id, power_up_type)
        if owner.id == player.id:
            raise InvalidTargetError("Sniper must target an opponent token")
        if not target.on_main_track():
            raise InvalidTargetError("Sniper needs a token on the main track")
    elif power_up_type is PowerUpType.FREEZE:
        target_player = _freeze_target(state, target_id)
        if target_player is None:
            raise InvalidTargetError("Freeze needs a target player")
        if target_player.id == player.id:
            raise InvalidTargetError("Freeze must target an opponent")


def _freeze_target(state: GameState, target_id: Optional[str]) -> Optional[Player]:
    if target_id is None:
        return None
    # Either a player id or one of the player's token ids
    return state.player(target_id) or state.owner_of(target_id)


def use_power_up(
    state: GameState,
    player: Player,
    power_up_type: PowerUpType | str,
    rng: random.Random,
    target_id: Optional[str] = None,
) -> GameState:
    """Consume one power-up from ``player``'s inventory and apply it."""
    kind = PowerUpType(power_up_type)
    current = state.player(player.id)
    if current is None:
        raise InvalidTargetError(f"Player {player.id} is not in this game")
    _validate_power_up(state, current, kind, target_id)

    new_state = state.copy()
    actor = new_state.player(player.id)
    actor.remove_power_up(kind)
    actor.power_ups_used += 1

    if kind is PowerUpType.SHIELD:
        actor.token(target_id).shield(reward_config.shield_turns)
    elif kind is PowerUpType.SPEED_BOOST:
        actor.speed_boost = True
    elif kind is PowerUpType.SNIPER:
        target = new_state.find_token(target_id)
        if not target.is_shielded:
            new_state.last_capture = LastCapture(
                capturer_id=actor.id, captured=copy.copy(target)
            )
            target.send_home()
            actor.captures += 1
            actor.coins += reward_config.sniper_coins
        else:
            logger.debug(f"Sniper on {target_id} blocked by shield")
    elif kind is PowerUpType.REROLL:
        new_state.dice.can_roll = True
    elif kind is PowerUpType.TELEPORT:
        actor.token(target_id).move_to(rng.choice(config.SAFE_TILES))
    elif kind is PowerUpType.FREEZE:
        frozen = _freeze_target(new_state, target_id)
        new_state.frozen_players[frozen.id] = reward_config.freeze_turns

    return new_state


# --- Turn flow ---
def check_winner(state: GameState) -> Optional[Player]:
    for pl in state.players:
        if pl.has_won():
            return pl
    return None


def next_turn_with_skips(state: GameState) -> Tuple[GameState, List[str]]:
    """Advance to the next non-frozen player; also return the skipped ids."""
    new_state = state.copy()
    total = len(new_state.players)
    skipped: List[str] = []

    next_index = (new_state.current_player_index + 1) % total
    attempts = 0
    while attempts < total:
        candidate = new_state.players[next_index]
        frozen_turns = new_state.frozen_players.get(candidate.id, 0)
        if frozen_turns <= 0:
            break
        if frozen_turns - 1 == 0:
            del new_state.frozen_players[candidate.id]
        else:
            new_state.frozen_players[candidate.id] = frozen_turns - 1
        skipped.append(candidate.id)
        next_index = (next_index + 1) % total
        attempts += 1

    new_state.current_player_index = next_index
    new_state.dice.can_roll = True
    new_state.dice.is_rolling = False
    new_state.phase = GamePhase.AWAITING_ROLL
    new_state.turn_count += 1
    new_state.consecutive_sixes = 0
    return new_state, skipped


def next_turn(state: GameState) -> GameState:
    new_state, _ = next_turn_with_skips(state)
    return new_state
