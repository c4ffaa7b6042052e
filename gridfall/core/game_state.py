"""
Game state aggregate shared by the action resolver and the winner calculator.
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from .roles import Role, HUNT_LIMIT, HUNTER_COUNT, TARGET_COUNT, TOTAL_PLAYERS
from .exceptions import InvalidGameState


class ActionKind(Enum):
    """Kind of player action."""
    SCAN = "scan"
    EXIT = "exit"


class Outcome(Enum):
    """Resolved effect of an accepted action."""
    NO_EFFECT = "no_effect"
    ELIMINATED = "eliminated"
    FRIENDLY_FIRE = "friendly_fire"
    EXIT = "exit"


@dataclass(frozen=True)
class ActionRecord:
    """One accepted action in the game history."""
    timestamp: int
    scanner: str
    action_type: ActionKind
    result: Outcome
    scanner_role: Role
    target: Optional[str] = None  # None for exits
    target_role: Optional[Role] = None

    def to_dict(self) -> Dict[str, Any]:
        record = {
            "timestamp": self.timestamp,
            "scanner": self.scanner,
            "actionType": self.action_type.value,
            "result": self.result.value,
            "scannerRole": self.scanner_role.value,
        }
        if self.target is not None:
            record["target"] = self.target
            record["targetRole"] = self.target_role.value if self.target_role else None
        return record


@dataclass
class GameState:
    """
    Complete private state of one game.

    ``roles`` is fixed once assigned. The other collections only change through
    the action resolver.
    """
    roles: Dict[str, Role] = field(default_factory=dict)
    eliminated: Dict[str, bool] = field(default_factory=dict)
    move_count: Dict[str, int] = field(default_factory=dict)
    hunts_remaining: Dict[str, int] = field(default_factory=dict)  # Hunters only
    action_history: List[ActionRecord] = field(default_factory=list)
    game_id: Optional[str] = None

    @property
    def players(self) -> List[str]:
        return list(self.roles)

    def has_player(self, player: str) -> bool:
        return player in self.roles

    def is_eliminated(self, player: str) -> bool:
        return self.eliminated.get(player, False)

    def moves_of(self, player: str) -> int:
        return self.move_count.get(player, 0)

    def hunts_left(self, player: str) -> Optional[int]:
        """Scans left for a Hunter, None for a Target."""
        if self.roles.get(player) != Role.HUNTER:
            return None
        return self.hunts_remaining.get(player, HUNT_LIMIT)

    def active_players(self) -> List[str]:
        """Get all players who are not eliminated."""
        return [p for p in self.roles if not self.is_eliminated(p)]

    def hunters(self) -> List[str]:
        return [p for p, role in self.roles.items() if role == Role.HUNTER]

    def targets(self) -> List[str]:
        return [p for p, role in self.roles.items() if role == Role.TARGET]

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation exchanged with the confidential host."""
        data = {
            "roles": {p: role.value for p, role in self.roles.items()},
            "eliminated": dict(self.eliminated),
            "moveCount": dict(self.move_count),
            "huntsRemaining": dict(self.hunts_remaining),
            "actionHistory": [action.to_dict() for action in self.action_history],
        }
        if self.game_id is not None:
            data["gameId"] = self.game_id
        return data


def new_game_state(roles: Dict[str, Role], game_id: Optional[str] = None) -> GameState:
    """Create the starting state for a game, with every Hunter's scans set up front."""
    state = GameState(roles=dict(roles), game_id=game_id)
    initialize_hunt_counters(state)
    return state


def initialize_hunt_counters(state: GameState) -> None:
    """Give every Hunter without a counter the full scan allowance."""
    for player in state.hunters():
        state.hunts_remaining.setdefault(player, HUNT_LIMIT)


def scan_outcome(scanner_role: Role, target_role: Role) -> Outcome:
    """Effect of a scan, decided by the two roles alone."""
    if not scanner_role.can_eliminate:
        return Outcome.NO_EFFECT
    if target_role.can_eliminate:
        return Outcome.FRIENDLY_FIRE
    return Outcome.ELIMINATED


def validate_game_state(state: GameState) -> None:
    """
    Check that a state has a consistent shape before any rule runs on it.

    The action history is replayed from the start of the game and the
    eliminations, move counts and scan counters it implies must match the
    stored ones exactly.

    Raises:
        InvalidGameState: On the first inconsistency found
    """
    roles = state.roles

    if len(roles) == TOTAL_PLAYERS:
        hunters = len(state.hunters())
        if hunters != HUNTER_COUNT or len(roles) - hunters != TARGET_COUNT:
            raise InvalidGameState(
                f"A full game needs {HUNTER_COUNT} hunters and {TARGET_COUNT} targets, got {hunters} hunters"
            )

    for name, mapping in (
        ("eliminated", state.eliminated),
        ("moveCount", state.move_count),
        ("huntsRemaining", state.hunts_remaining),
    ):
        for player in mapping:
            if player not in roles:
                raise InvalidGameState(f"{name} names unknown player {player}", player)

    for player, moves in state.move_count.items():
        if moves < 0:
            raise InvalidGameState(f"Move count for {player} is negative", player)

    for player, hunts in state.hunts_remaining.items():
        if roles[player] != Role.HUNTER:
            raise InvalidGameState(f"Target {player} cannot have a scan counter", player)
        if not 0 <= hunts <= HUNT_LIMIT:
            raise InvalidGameState(f"Scan counter for {player} must be between 0 and {HUNT_LIMIT}", player)

    total_moves = sum(state.move_count.values())
    if total_moves != len(state.action_history):
        raise InvalidGameState(
            f"History has {len(state.action_history)} actions but move counts total {total_moves}"
        )

    replayed = _replay_history(state)
    _check_replay(state, replayed)


def _replay_history(state: GameState) -> GameState:
    """Rebuild eliminations, moves and scan counters from the action history."""
    roles = state.roles
    replayed = new_game_state(roles)

    for index, action in enumerate(state.action_history):
        scanner = action.scanner
        if scanner not in roles:
            raise InvalidGameState(f"History names unknown player {scanner}", scanner)
        if action.target is not None and action.target not in roles:
            raise InvalidGameState(f"History names unknown player {action.target}", action.target)
        if action.scanner_role != roles[scanner]:
            raise InvalidGameState(f"Action {index} records the wrong role for {scanner}", scanner)
        if replayed.is_eliminated(scanner):
            raise InvalidGameState(f"Action {index} is by {scanner} after elimination", scanner)

        replayed.move_count[scanner] = replayed.moves_of(scanner) + 1

        if action.action_type == ActionKind.EXIT:
            if action.target is not None or action.result != Outcome.EXIT:
                raise InvalidGameState(f"Action {index} is a malformed exit", scanner)
            replayed.eliminated[scanner] = True
            continue

        target = action.target
        if target is None or target == scanner:
            raise InvalidGameState(f"Action {index} is a scan without a valid target", scanner)
        if action.target_role != roles[target]:
            raise InvalidGameState(f"Action {index} records the wrong role for {target}", target)
        if replayed.is_eliminated(target):
            raise InvalidGameState(f"Action {index} scans {target} after elimination", target)

        expected = scan_outcome(roles[scanner], roles[target])
        if action.result != expected:
            raise InvalidGameState(
                f"Action {index} records {action.result.value}, rules give {expected.value}", scanner
            )

        if roles[scanner].can_eliminate:
            hunts = replayed.hunts_left(scanner)
            if hunts <= 0:
                raise InvalidGameState(f"Action {index} exceeds the scan limit for {scanner}", scanner)
            replayed.hunts_remaining[scanner] = hunts - 1
        if expected == Outcome.ELIMINATED:
            replayed.eliminated[target] = True
        elif expected == Outcome.FRIENDLY_FIRE:
            replayed.eliminated[scanner] = True

    return replayed


def _check_replay(state: GameState, replayed: GameState) -> None:
    for player in state.roles:
        if state.is_eliminated(player) != replayed.is_eliminated(player):
            raise InvalidGameState(f"Elimination of {player} does not match the history", player)
        if state.moves_of(player) != replayed.moves_of(player):
            raise InvalidGameState(f"Move count for {player} does not match the history", player)
        if state.hunts_left(player) != replayed.hunts_left(player):
            raise InvalidGameState(f"Scan counter for {player} does not match the history", player)
