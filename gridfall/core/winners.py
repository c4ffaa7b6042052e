"""
Winner calculation and end-of-game reporting.

A player wins when they are not eliminated and made at least
MINIMUM_MOVES_REQUIRED accepted actions. Survivors who never acted are
counted as ineligible. Nothing here mutates the game state.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from .roles import Role
from .game_state import GameState, ActionRecord, ActionKind, Outcome


MINIMUM_MOVES_REQUIRED = 1


@dataclass(frozen=True)
class WinnerDetail:
    """A winner with their role and activity."""
    address: str
    role: Role
    moves: int

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "role": self.role.value, "moves": self.moves}


@dataclass
class WinnerStats:
    """Aggregate end-of-game counts."""
    total_players: int = 0
    eliminated_count: int = 0
    survivor_count: int = 0
    ineligible_survivors: int = 0
    hunter_winners: int = 0
    target_winners: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalPlayers": self.total_players,
            "eliminatedCount": self.eliminated_count,
            "survivorCount": self.survivor_count,
            "ineligibleSurvivors": self.ineligible_survivors,
            "hunterWinners": self.hunter_winners,
            "targetWinners": self.target_winners,
        }


@dataclass
class WinnerResult:
    """Winners of a finished game."""
    winners: List[str]
    winner_details: List[WinnerDetail]
    stats: WinnerStats
    action_history: List[ActionRecord] = field(default_factory=list)
    game_complete: bool = True

    @property
    def winner_count(self) -> int:
        return len(self.winners)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winners": list(self.winners),
            "winnerDetails": [detail.to_dict() for detail in self.winner_details],
            "stats": self.stats.to_dict(),
            "actionHistory": [action.to_dict() for action in self.action_history],
            "gameComplete": self.game_complete,
        }


def calculate_winners(state: GameState) -> WinnerResult:
    """Determine the winners of a finished game, in roster order."""
    stats = WinnerStats(total_players=len(state.roles))
    details: List[WinnerDetail] = []

    for player, role in state.roles.items():
        if state.is_eliminated(player):
            stats.eliminated_count += 1
            continue

        stats.survivor_count += 1
        moves = state.moves_of(player)

        if moves < MINIMUM_MOVES_REQUIRED:
            stats.ineligible_survivors += 1
            continue

        details.append(WinnerDetail(address=player, role=role, moves=moves))
        if role == Role.HUNTER:
            stats.hunter_winners += 1
        else:
            stats.target_winners += 1

    return WinnerResult(
        winners=[detail.address for detail in details],
        winner_details=details,
        stats=stats,
        action_history=list(state.action_history),
    )


def generate_game_summary(state: GameState, winner_result: WinnerResult) -> Dict[str, Any]:
    """Build a detailed summary of a finished game for off-chain analysis."""
    history = state.action_history
    action_summary = {
        "totalActions": len(history),
        "scans": sum(1 for a in history if a.action_type == ActionKind.SCAN),
        "exits": sum(1 for a in history if a.action_type == ActionKind.EXIT),
        "eliminations": sum(1 for a in history if a.result == Outcome.ELIMINATED),
        "friendlyFires": sum(1 for a in history if a.result == Outcome.FRIENDLY_FIRE),
    }

    winners = set(winner_result.winners)
    player_stats = {}
    for player, role in state.roles.items():
        player_stats[player] = {
            "role": role.value,
            "eliminated": state.is_eliminated(player),
            "moves": state.moves_of(player),
            "huntsRemaining": state.hunts_left(player),
            "isWinner": player in winners,
        }

    return {
        "gameId": state.game_id,
        "winners": list(winner_result.winners),
        "winnerCount": winner_result.winner_count,
        "stats": winner_result.stats.to_dict(),
        "actionSummary": action_summary,
        "playerStats": player_stats,
    }
