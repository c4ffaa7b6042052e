"""
Role definitions and confidential role assignment for Gridfall.
"""

import secrets
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from .exceptions import InvalidRosterSize


TOTAL_PLAYERS = 10
HUNTER_COUNT = 2
TARGET_COUNT = 8
HUNT_LIMIT = 2  # Max scans per Hunter


class Role(Enum):
    """Hidden player roles."""
    HUNTER = "hunter"
    TARGET = "target"

    @property
    def can_eliminate(self) -> bool:
        """Check if role can eliminate by scanning."""
        return self == Role.HUNTER


@dataclass
class RoleAssignment:
    """Result of a role assignment for one game."""
    game_id: str
    roles: Dict[str, Role]
    hunters: List[str] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)
    timestamp: Optional[int] = None

    @property
    def hunter_count(self) -> int:
        return len(self.hunters)

    @property
    def target_count(self) -> int:
        return len(self.targets)

    def to_dict(self) -> Dict:
        return {
            "gameId": self.game_id,
            "roleAssignments": {player: role.value for player, role in self.roles.items()},
            "hunters": list(self.hunters),
            "targets": list(self.targets),
            "timestamp": self.timestamp,
            "totalPlayers": len(self.roles),
            "hunterCount": self.hunter_count,
            "targetCount": self.target_count,
        }


def get_role_distribution() -> List[Role]:
    """
    Get the standard role distribution for a 10-player game.
    Returns: 2 HUNTER and 8 TARGET, unshuffled.
    """
    return [Role.HUNTER] * HUNTER_COUNT + [Role.TARGET] * TARGET_COUNT


def _check_roster(roster: Sequence[str]) -> None:
    unique = len(set(roster))
    if len(roster) != TOTAL_PLAYERS or unique != TOTAL_PLAYERS:
        raise InvalidRosterSize(len(roster), unique, TOTAL_PLAYERS)


def assign_roles(
    roster: Sequence[str],
    randbelow: Callable[[int], int] = secrets.randbelow,
) -> Dict[str, Role]:
    """
    Assign 2 Hunters and 8 Targets to a roster of 10 unique players.

    The role tokens are shuffled with Fisher-Yates, drawing every swap index
    from ``randbelow`` (``secrets.randbelow`` by default, which is unbiased),
    so every permutation of roles over the roster is equally likely.

    Args:
        roster: Ordered player identifiers
        randbelow: Source of uniform integers in ``[0, n)``

    Returns:
        Mapping of player to role, in roster order

    Raises:
        InvalidRosterSize: If the roster is not exactly 10 unique players
    """
    _check_roster(roster)

    roles = get_role_distribution()
    for i in range(len(roles) - 1, 0, -1):
        j = randbelow(i + 1)
        roles[i], roles[j] = roles[j], roles[i]

    return {player: roles[index] for index, player in enumerate(roster)}


def generate_role_assignment(
    roster: Sequence[str],
    randbelow: Callable[[int], int] = secrets.randbelow,
) -> RoleAssignment:
    """Assign roles and bundle them with a fresh game id for the host."""
    roles = assign_roles(roster, randbelow=randbelow)
    return RoleAssignment(
        game_id=secrets.token_hex(32),
        roles=roles,
        hunters=[p for p, role in roles.items() if role == Role.HUNTER],
        targets=[p for p, role in roles.items() if role == Role.TARGET],
        timestamp=int(time.time() * 1000),
    )
