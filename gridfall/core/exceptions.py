"""
Exceptions for rejected game actions.

Every rule violation is terminal for the single action attempted and is raised
before any part of the game state is touched.
"""

from typing import Optional


class GameRuleError(Exception):
    """Base class for a rejected action or malformed game input."""

    rule = "game_rule"

    def __init__(self, message: str, player: Optional[str] = None):
        self.player = player
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"rule": self.rule, "player": self.player, "message": self.message}


class InvalidRosterSize(GameRuleError):
    """Raised when a roster is not exactly the required number of unique players."""

    rule = "invalid_roster_size"

    def __init__(self, size: int, unique: int, expected: int):
        self.size = size
        self.unique = unique
        self.expected = expected
        super().__init__(
            f"Roster must contain exactly {expected} unique players "
            f"(got {size} entries, {unique} unique)"
        )


class UnknownParticipant(GameRuleError):
    """Raised when an action names a player who is not in the game."""

    rule = "unknown_participant"

    def __init__(self, player: str):
        super().__init__(f"Player {player} not in game", player)


class ScannerEliminated(GameRuleError):
    """Raised when an eliminated player tries to scan."""

    rule = "scanner_eliminated"

    def __init__(self, player: str):
        super().__init__(f"Scanner {player} is already eliminated", player)


class TargetEliminated(GameRuleError):
    """Raised when the scan target is already eliminated."""

    rule = "target_eliminated"

    def __init__(self, player: str):
        super().__init__(f"Target {player} is already eliminated", player)


class SelfScan(GameRuleError):
    """Raised when a player scans themself."""

    rule = "self_scan"

    def __init__(self, player: str):
        super().__init__(f"Player {player} cannot scan themself", player)


class HuntsExhausted(GameRuleError):
    """Raised when a Hunter has no scans left."""

    rule = "hunts_exhausted"

    def __init__(self, player: str):
        super().__init__(f"Hunter {player} has no scans remaining", player)


class AlreadyEliminated(GameRuleError):
    """Raised when an eliminated player tries to exit."""

    rule = "already_eliminated"

    def __init__(self, player: str):
        super().__init__(f"Player {player} is already eliminated", player)


class InvalidGameState(GameRuleError):
    """Raised when a game state does not have a consistent shape."""

    rule = "invalid_game_state"
