"""
Action resolver: validates and applies scans and exits to a game state.

Rules:
- Hunter scans Target => Target eliminated
- Hunter scans Hunter => friendly fire, the scanning Hunter is eliminated
- Target scans anyone => no effect
- Each Hunter has at most 2 scans
- Exit eliminates the exiting player, whatever their role
- Every accepted action counts as a move for the acting player

All preconditions are checked before the state is touched, so a rejected
action leaves the state exactly as it was.
"""

import time
from typing import Optional
from dataclasses import dataclass

from .game_state import GameState, ActionRecord, ActionKind, Outcome, scan_outcome
from .exceptions import (
    UnknownParticipant,
    ScannerEliminated,
    TargetEliminated,
    SelfScan,
    HuntsExhausted,
    AlreadyEliminated,
)


@dataclass
class ResolutionResult:
    """Effect of an accepted action."""
    eliminated: Optional[str]
    outcome: Outcome
    action: ActionRecord
    state: GameState


def _now_ms() -> int:
    return int(time.time() * 1000)


def resolve_scan(
    state: GameState,
    scanner: str,
    target: str,
    timestamp: Optional[int] = None,
) -> ResolutionResult:
    """
    Resolve a scan of ``target`` by ``scanner``.

    Raises:
        UnknownParticipant: Scanner or target not in the game
        ScannerEliminated: Scanner already eliminated
        TargetEliminated: Target already eliminated
        SelfScan: Scanner and target are the same player
        HuntsExhausted: Scanner is a Hunter with no scans left
    """
    if not state.has_player(scanner):
        raise UnknownParticipant(scanner)
    if not state.has_player(target):
        raise UnknownParticipant(target)
    if state.is_eliminated(scanner):
        raise ScannerEliminated(scanner)
    if state.is_eliminated(target):
        raise TargetEliminated(target)
    if scanner == target:
        raise SelfScan(scanner)

    scanner_role = state.roles[scanner]
    target_role = state.roles[target]

    if scanner_role.can_eliminate and state.hunts_left(scanner) <= 0:
        raise HuntsExhausted(scanner)

    outcome = scan_outcome(scanner_role, target_role)
    eliminated = None

    if scanner_role.can_eliminate:
        state.hunts_remaining[scanner] = state.hunts_left(scanner) - 1
        eliminated = scanner if outcome == Outcome.FRIENDLY_FIRE else target
        state.eliminated[eliminated] = True

    state.move_count[scanner] = state.moves_of(scanner) + 1

    action = ActionRecord(
        timestamp=_now_ms() if timestamp is None else timestamp,
        scanner=scanner,
        target=target,
        action_type=ActionKind.SCAN,
        result=outcome,
        scanner_role=scanner_role,
        target_role=target_role,
    )
    state.action_history.append(action)

    return ResolutionResult(eliminated=eliminated, outcome=outcome, action=action, state=state)


def resolve_exit(
    state: GameState,
    player: str,
    timestamp: Optional[int] = None,
) -> ResolutionResult:
    """
    Resolve a voluntary exit. The player is eliminated unconditionally.

    Raises:
        UnknownParticipant: Player not in the game
        AlreadyEliminated: Player already eliminated
    """
    if not state.has_player(player):
        raise UnknownParticipant(player)
    if state.is_eliminated(player):
        raise AlreadyEliminated(player)

    state.eliminated[player] = True
    state.move_count[player] = state.moves_of(player) + 1

    action = ActionRecord(
        timestamp=_now_ms() if timestamp is None else timestamp,
        scanner=player,
        action_type=ActionKind.EXIT,
        result=Outcome.EXIT,
        scanner_role=state.roles[player],
    )
    state.action_history.append(action)

    return ResolutionResult(eliminated=player, outcome=Outcome.EXIT, action=action, state=state)


def resolve_action(
    state: GameState,
    action_type: ActionKind,
    scanner: str,
    target: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> ResolutionResult:
    """Dispatch an action to the matching resolver."""
    if action_type == ActionKind.SCAN:
        if target is None:
            raise ValueError("Scan action requires a target")
        return resolve_scan(state, scanner, target, timestamp=timestamp)
    return resolve_exit(state, scanner, timestamp=timestamp)
