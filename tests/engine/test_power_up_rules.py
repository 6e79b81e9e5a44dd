import random
import unittest

from ludo_rush import rules
from ludo_rush.config import config, reward_config
from ludo_rush.errors import InvalidTargetError, PowerUpNotOwnedError
from ludo_rush.player import Player
from ludo_rush.state import create_game
from ludo_rush.types import Color, PowerUp, PowerUpType


class TestPowerUpRules(unittest.TestCase):
    def setUp(self):
        self.state = create_game(
            [
                Player("Red", Color.RED),
                Player("Blue", Color.BLUE),
                Player("Green", Color.GREEN),
            ]
        )
        self.red, self.blue, self.green = self.state.players
        self.rng = random.Random(3)

    def _grant(self, kind):
        self.red.power_ups.append(PowerUp.of(kind))

    def _use(self, kind, target_id=None):
        return rules.use_power_up(self.state, self.red, kind, self.rng, target_id)

    def test_shield_protects_own_token(self):
        self._grant(PowerUpType.SHIELD)
        self.red.tokens[0].position = 20
        new_state = self._use(PowerUpType.SHIELD, "red-0")
        red = new_state.players[0]
        self.assertTrue(red.tokens[0].is_shielded)
        self.assertEqual(red.tokens[0].shield_turns, reward_config.shield_turns)
        self.assertEqual(red.power_ups, [])
        self.assertEqual(red.power_ups_used, 1)
        # Input state keeps its inventory
        self.assertEqual(len(self.red.power_ups), 1)

    def test_shield_on_opponent_rejected(self):
        self._grant(PowerUpType.SHIELD)
        with self.assertRaises(InvalidTargetError):
            self._use(PowerUpType.SHIELD, "blue-0")

    def test_missing_power_up_rejected(self):
        with self.assertRaises(PowerUpNotOwnedError):
            self._use(PowerUpType.SNIPER, "blue-0")

    def test_sniper_captures_opponent(self):
        self._grant(PowerUpType.SNIPER)
        self.blue.tokens[0].position = 20
        new_state = self._use(PowerUpType.SNIPER, "blue-0")
        red, blue = new_state.players[0], new_state.players[1]
        self.assertTrue(blue.tokens[0].is_home())
        self.assertEqual(red.captures, 1)
        self.assertEqual(red.coins, reward_config.sniper_coins)
        self.assertEqual(new_state.last_capture.captured.position, 20)

    def test_sniper_blocked_by_shield_still_consumed(self):
        self._grant(PowerUpType.SNIPER)
        self.blue.tokens[0].position = 20
        self.blue.tokens[0].shield(2)
        new_state = self._use(PowerUpType.SNIPER, "blue-0")
        self.assertEqual(new_state.players[1].tokens[0].position, 20)
        self.assertEqual(new_state.players[0].power_ups, [])
        self.assertEqual(new_state.players[0].coins, 0)

    def test_sniper_needs_token_on_track(self):
        self._grant(PowerUpType.SNIPER)
        with self.assertRaises(InvalidTargetError):
            self._use(PowerUpType.SNIPER, "blue-0")

    def test_teleport_lands_on_safe_tile(self):
        self._grant(PowerUpType.TELEPORT)
        self.red.tokens[0].position = 20
        new_state = self._use(PowerUpType.TELEPORT, "red-0")
        self.assertIn(new_state.players[0].tokens[0].position, config.SAFE_TILES)

    def test_freeze_by_player_or_token_id(self):
        self._grant(PowerUpType.FREEZE)
        by_player = self._use(PowerUpType.FREEZE, self.blue.id)
        self.assertEqual(by_player.frozen_players, {self.blue.id: reward_config.freeze_turns})
        by_token = self._use(PowerUpType.FREEZE, "green-2")
        self.assertTrue(by_token.is_frozen(self.green.id))

    def test_freeze_self_rejected(self):
        self._grant(PowerUpType.FREEZE)
        with self.assertRaises(InvalidTargetError):
            self._use(PowerUpType.FREEZE, self.red.id)

    def test_speed_boost_marks_player(self):
        self._grant(PowerUpType.SPEED_BOOST)
        new_state = self._use(PowerUpType.SPEED_BOOST)
        self.assertTrue(new_state.players[0].speed_boost)
        self.assertFalse(self.red.speed_boost)

    def test_reroll_reopens_dice(self):
        self._grant(PowerUpType.REROLL)
        self.state.dice.can_roll = False
        new_state = self._use(PowerUpType.REROLL)
        self.assertTrue(new_state.dice.can_roll)


if __name__ == "__main__":
    unittest.main()
