# Exception types for rejected commands
class LudoRushError(Exception):
    """Base exception for engine errors."""

    pass


class IllegalCommandError(LudoRushError):
    """Raised when a player command is rejected; state is left untouched."""

    pass


class WrongPhaseError(IllegalCommandError):
    """Raised when a command is not allowed in the current phase."""

    pass


class IllegalMoveError(IllegalCommandError):
    """Raised when a token cannot move with the given dice value."""

    pass


class PowerUpNotOwnedError(IllegalCommandError):
    """Raised when a player uses a power-up missing from their inventory."""

    pass


class InvalidTargetError(IllegalCommandError):
    """Raised when a power-up target is missing or not allowed."""

    pass


class GameOverError(IllegalCommandError):
    """Raised when a command arrives after the game has ended."""

    pass
