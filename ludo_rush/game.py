from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from loguru import logger

from . import events as ev
from . import rules
from .config import config
from .errors import GameOverError, IllegalCommandError, IllegalMoveError, WrongPhaseError
from .events import GameEvent
from .player import Player, random_ai_name
from .state import GameState, GameSummary, summarize
from .strategy import power_up_policy, select_move
from .types import (
    Color,
    CommandResult,
    DiceState,
    Difficulty,
    GamePhase,
    MoveResult,
    PowerUp,
    PowerUpType,
)


def _seeded_id(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


@dataclass(slots=True)
class Game:
    """Turn orchestrator for one active game.

    Commands never raise on illegal input: they return a rejected
    ``CommandResult`` and leave ``state`` untouched.
    """

    state: GameState
    difficulty: Difficulty = Difficulty.MEDIUM
    rng: random.Random = field(default_factory=random.Random)
    valid_token_ids: List[str] = field(default_factory=list)
    selected_token_id: Optional[str] = None
    events: List[GameEvent] = field(default_factory=list)

    @classmethod
    def new_game(
        cls,
        player_count: int = config.NUM_PLAYERS,
        ai_count: Optional[int] = None,
        difficulty: str | Difficulty = config.DIFFICULTY,
        username: str = "Player",
        seed: Optional[int] = None,
    ) -> "Game":
        """Seat ``player_count`` players; the last ``ai_count`` seats are AI.

        ``ai_count`` defaults to ``AI_PLAYERS``, leaving at least one human seat.
        """
        if not config.MIN_PLAYERS <= player_count <= config.MAX_PLAYERS:
            raise ValueError("player_count must be between 2 and 4")
        if ai_count is None:
            ai_count = min(config.AI_PLAYERS, player_count - 1)
        if not 0 <= ai_count <= player_count:
            raise ValueError("ai_count must be between 0 and player_count")

        rng = random.Random(seed)
        humans = player_count - ai_count
        players: List[Player] = []
        for seat in range(player_count):
            is_ai = seat >= humans
            if is_ai:
                name = random_ai_name(rng)
            elif seat == 0:
                name = username
            else:
                name = f"Player {seat + 1}"
            players.append(
                Player(
                    name=name,
                    color=Color(config.COLORS[seat]),
                    is_ai=is_ai,
                    id=_seeded_id(rng),
                )
            )

        state = GameState(players=players, id=_seeded_id(rng))
        game = cls(state=state, difficulty=Difficulty(difficulty), rng=rng)
        game.events.append(ev.game_started(state.id, [p.name for p in players]))
        logger.info(
            f"Game {state.id} started: {', '.join(p.name for p in players)} "
            f"({game.difficulty.value})"
        )
        return game

    # --- Queries ---
    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def is_over(self) -> bool:
        return self.state.phase is GamePhase.GAME_OVER

    def summary(self) -> Optional[GameSummary]:
        return summarize(self.state) if self.is_over else None

    # --- Commands ---
    def roll(self, face: Optional[int] = None) -> CommandResult:
        """Roll for the current player; ``face`` injects the die value."""
        return self._run(self._roll, face)

    def select_token(self, token_id: str) -> CommandResult:
        return self._run(self._select_token, token_id)

    def confirm_move(self, token_id: Optional[str] = None) -> CommandResult:
        return self._run(self._confirm_move, token_id)

    def use_power_up(
        self, power_up_type: PowerUpType | str, target_id: Optional[str] = None
    ) -> CommandResult:
        return self._run(self._use_power_up, power_up_type, target_id)

    def request_ad_reward(self, power_up_type: PowerUpType | str) -> CommandResult:
        return self._run(self._request_ad_reward, power_up_type)

    def claim_ad_reward(self) -> CommandResult:
        return self._run(self._claim_ad_reward)

    def play_ai_turn(self) -> CommandResult:
        """One computer step: optional power-up, roll, then the chosen move."""
        if self.is_over:
            return CommandResult.rejected("Game is over")
        player = self.current_player
        if not player.is_ai:
            return CommandResult.rejected(f"{player.name} is not computer-controlled")

        collected: List[GameEvent] = []
        if self.state.phase is GamePhase.AWAITING_ROLL:
            decision = power_up_policy(self.state, player, self.difficulty, self.rng)
            if decision.use:
                res = self.use_power_up(decision.power_up_type, decision.target_id)
                if not res.accepted:
                    logger.warning(f"{player.name} power-up rejected: {res.reason}")
                collected.extend(res.events)
            res = self.roll()
            collected.extend(res.events)
            if not res.accepted:
                return CommandResult(accepted=False, reason=res.reason, events=collected)

        if self.state.phase is GamePhase.SELECTING_TOKEN:
            token = select_move(self.state, self.difficulty, self.rng)
            if token is None:
                logger.warning(f"No move chosen for {player.name}, taking first legal token")
                token = self.current_player.token(self.valid_token_ids[0])
            self.select_token(token.id)
            res = self.confirm_move(token.id)
            collected.extend(res.events)
            if not res.accepted:
                return CommandResult(accepted=False, reason=res.reason, events=collected)

        return CommandResult(accepted=True, events=collected)

    def play_until_over(self, max_turns: int = config.MAX_TURNS) -> Optional[GameSummary]:
        """Drive computer players until the game ends or a human must act."""
        while not self.is_over and self.state.turn_count < max_turns:
            if not self.current_player.is_ai:
                break
            res = self.play_ai_turn()
            if not res.accepted:
                logger.warning(f"AI turn stalled: {res.reason}")
                break
        return self.summary()

    # --- Internals ---
    def _run(self, handler: Callable[..., List[GameEvent]], *args) -> CommandResult:
        try:
            emitted = handler(*args)
        except IllegalCommandError as exc:
            logger.debug(f"Rejected {handler.__name__.lstrip('_')}: {exc}")
            return CommandResult.rejected(str(exc))
        self.events.extend(emitted)
        return CommandResult(accepted=True, events=emitted)

    def _check_active(self) -> None:
        if self.is_over:
            raise GameOverError("Game is over")

    def _clear_selection(self) -> None:
        self.valid_token_ids = []
        self.selected_token_id = None

    def _advance(self, state: GameState, emitted: List[GameEvent]) -> GameState:
        new_state, skipped = rules.next_turn_with_skips(state)
        for player_id in skipped:
            emitted.append(ev.turn_skipped(player_id, ev.SKIP_FROZEN))
        emitted.append(ev.turn_started(new_state.turn_count, new_state.current_player.id))
        self._clear_selection()
        return new_state

    def _roll(self, face: Optional[int]) -> List[GameEvent]:
        self._check_active()
        if self.state.phase is not GamePhase.AWAITING_ROLL or not self.state.dice.can_roll:
            raise WrongPhaseError(f"Cannot roll during {self.state.phase.value}")
        if face is None:
            face = rules.roll_dice(self.rng)
        elif not 1 <= face <= config.DICE_FACES:
            raise IllegalCommandError(f"Dice face must be 1-{config.DICE_FACES}")

        new_state = self.state.copy()
        mover = new_state.current_player
        value = face
        if mover.speed_boost:
            value = face * 2
            mover.speed_boost = False
        new_state.dice = DiceState(value=value, face=face, is_rolling=False, can_roll=False)
        emitted = [ev.dice_rolled(mover.id, face, value)]

        if face == config.EXTRA_TURN_ROLL:
            new_state.consecutive_sixes += 1
            if new_state.consecutive_sixes >= config.MAX_CONSECUTIVE_SIXES:
                logger.debug(f"{mover.name} rolled three sixes, turn forfeited")
                emitted.append(ev.turn_skipped(mover.id, ev.SKIP_TRIPLE_SIX))
                self.state = self._advance(new_state, emitted)
                return emitted
        else:
            new_state.consecutive_sixes = 0

        legal = rules.valid_moves(new_state, mover, value)
        if not legal:
            emitted.append(ev.turn_skipped(mover.id, ev.SKIP_NO_MOVES))
            self.state = self._advance(new_state, emitted)
            return emitted

        new_state.phase = GamePhase.SELECTING_TOKEN
        self.valid_token_ids = [t.id for t in legal]
        self.selected_token_id = None
        self.state = new_state
        return emitted

    def _select_token(self, token_id: str) -> List[GameEvent]:
        self._check_active()
        if self.state.phase is not GamePhase.SELECTING_TOKEN:
            raise WrongPhaseError(f"Cannot select a token during {self.state.phase.value}")
        if token_id not in self.valid_token_ids:
            raise IllegalMoveError(f"Token {token_id} has no legal move")
        self.selected_token_id = token_id
        return []

    def _confirm_move(self, token_id: Optional[str]) -> List[GameEvent]:
        self._check_active()
        if self.state.phase is not GamePhase.SELECTING_TOKEN:
            raise WrongPhaseError(f"Cannot move during {self.state.phase.value}")
        chosen = token_id or self.selected_token_id
        if chosen is None:
            raise IllegalMoveError("No token selected")
        if chosen not in self.valid_token_ids:
            raise IllegalMoveError(f"Token {chosen} has no legal move")

        player = self.state.current_player
        token = player.token(chosen)
        dice = self.state.dice
        result = rules.apply_move(self.state, player, token, dice.value, self.rng)
        new_state = result.new_state
        new_state.phase = GamePhase.MOVING
        emitted: List[GameEvent] = []
        self._record_move(emitted, player.id, chosen, token.position, result)

        if result.bonus_move > 0:
            mover = new_state.current_player
            boosted = mover.token(chosen)
            applied = rules.can_move(mover, boosted, result.bonus_move)
            emitted.append(ev.boost_move(mover.id, chosen, result.bonus_move, applied))
            if applied:
                before = boosted.position
                bonus = rules.apply_move(
                    new_state, mover, boosted, result.bonus_move, self.rng, follow_up=True
                )
                new_state = bonus.new_state
                self._record_move(emitted, mover.id, chosen, before, bonus)

        self._clear_selection()
        winner = rules.check_winner(new_state)
        if winner is not None:
            new_state.winner = winner
            new_state.phase = GamePhase.GAME_OVER
            new_state.dice.can_roll = False
            emitted.append(ev.winner_declared(winner.id, winner.name, new_state.turn_count))
            logger.info(f"{winner.name} wins after {new_state.turn_count} turns")
            self.state = new_state
            return emitted

        if (
            dice.face == config.EXTRA_TURN_ROLL
            and new_state.consecutive_sixes < config.MAX_CONSECUTIVE_SIXES
        ):
            new_state.phase = GamePhase.AWAITING_ROLL
            new_state.dice.can_roll = True
            emitted.append(ev.extra_turn(player.id))
            self.state = new_state
        else:
            self.state = self._advance(new_state, emitted)
        return emitted

    @staticmethod
    def _record_move(
        emitted: List[GameEvent],
        player_id: str,
        token_id: str,
        old_position: int,
        result: MoveResult,
    ) -> None:
        moved = result.new_state.find_token(token_id)
        emitted.append(ev.token_moved(player_id, token_id, old_position, moved.position))
        if result.captured is not None:
            emitted.append(
                ev.token_captured(
                    player_id,
                    result.captured.id,
                    result.captured.color.value,
                    result.captured.position,
                )
            )
        if result.got_power_up is not None:
            emitted.append(ev.power_up_acquired(player_id, result.got_power_up.type.value))
        if result.bonus_coins > 0:
            emitted.append(ev.bonus_coins(player_id, result.bonus_coins))
        if result.teleport_to is not None:
            emitted.append(ev.token_warped(player_id, token_id, result.teleport_to))

    def _use_power_up(
        self, power_up_type: PowerUpType | str, target_id: Optional[str]
    ) -> List[GameEvent]:
        self._check_active()
        try:
            kind = PowerUpType(power_up_type)
        except ValueError:
            raise IllegalCommandError(f"Unknown power-up '{power_up_type}'") from None

        phase = self.state.phase
        if phase not in (GamePhase.AWAITING_ROLL, GamePhase.SELECTING_TOKEN):
            raise WrongPhaseError(f"Cannot use power-ups during {phase.value}")
        if kind is PowerUpType.SPEED_BOOST and phase is not GamePhase.AWAITING_ROLL:
            raise WrongPhaseError("Speed boost must be used before rolling")
        if kind is PowerUpType.REROLL and phase is not GamePhase.SELECTING_TOKEN:
            raise WrongPhaseError("Reroll needs a roll to discard")

        player = self.state.current_player
        new_state = rules.use_power_up(self.state, player, kind, self.rng, target_id)
        emitted = [ev.power_up_used(player.id, kind.value, target_id)]

        if kind is PowerUpType.SNIPER:
            before = self.state.find_token(target_id)
            after = new_state.find_token(target_id)
            if after.is_home() and not before.is_home():
                emitted.append(
                    ev.token_captured(player.id, before.id, before.color.value, before.position)
                )
        elif kind is PowerUpType.TELEPORT:
            landed = new_state.find_token(target_id).position
            emitted.append(ev.token_warped(player.id, target_id, landed))

        if kind is PowerUpType.REROLL:
            # The discarded roll does not count toward the six streak
            if new_state.dice.face == config.EXTRA_TURN_ROLL and new_state.consecutive_sixes > 0:
                new_state.consecutive_sixes -= 1
            new_state.phase = GamePhase.AWAITING_ROLL
            self._clear_selection()
        elif new_state.phase is GamePhase.SELECTING_TOKEN:
            legal = rules.valid_moves(new_state, new_state.current_player, new_state.dice.value)
            self.valid_token_ids = [t.id for t in legal]
            if self.selected_token_id not in self.valid_token_ids:
                self.selected_token_id = None
            if not legal:
                emitted.append(ev.turn_skipped(player.id, ev.SKIP_NO_MOVES))
                new_state = self._advance(new_state, emitted)

        self.state = new_state
        return emitted

    def _request_ad_reward(self, power_up_type: PowerUpType | str) -> List[GameEvent]:
        self._check_active()
        try:
            kind = PowerUpType(power_up_type)
        except ValueError:
            raise IllegalCommandError(f"Unknown power-up '{power_up_type}'") from None
        new_state = self.state.copy()
        new_state.show_rewarded_ad = True
        new_state.ad_reward_type = kind
        self.state = new_state
        return []

    def _claim_ad_reward(self) -> List[GameEvent]:
        self._check_active()
        if not self.state.show_rewarded_ad or self.state.ad_reward_type is None:
            raise IllegalCommandError("No ad reward pending")
        new_state = self.state.copy()
        player = new_state.current_player
        reward = PowerUp.of(new_state.ad_reward_type)
        player.power_ups.append(reward)
        new_state.show_rewarded_ad = False
        new_state.ad_reward_type = None
        self.state = new_state
        return [ev.power_up_acquired(player.id, reward.type.value)]
