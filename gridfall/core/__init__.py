"""
Core game rules: role assignment, action resolution, and winner calculation.
"""

from .roles import (
    Role,
    RoleAssignment,
    TOTAL_PLAYERS,
    HUNTER_COUNT,
    TARGET_COUNT,
    HUNT_LIMIT,
    get_role_distribution,
    assign_roles,
    generate_role_assignment,
)
from .game_state import (
    GameState,
    ActionRecord,
    ActionKind,
    Outcome,
    new_game_state,
    initialize_hunt_counters,
    scan_outcome,
    validate_game_state,
)
from .resolver import ResolutionResult, resolve_scan, resolve_exit, resolve_action
from .winners import (
    MINIMUM_MOVES_REQUIRED,
    WinnerDetail,
    WinnerStats,
    WinnerResult,
    calculate_winners,
    generate_game_summary,
)
from .exceptions import (
    GameRuleError,
    InvalidRosterSize,
    UnknownParticipant,
    ScannerEliminated,
    TargetEliminated,
    SelfScan,
    HuntsExhausted,
    AlreadyEliminated,
    InvalidGameState,
)

__all__ = [
    'Role',
    'RoleAssignment',
    'TOTAL_PLAYERS',
    'HUNTER_COUNT',
    'TARGET_COUNT',
    'HUNT_LIMIT',
    'get_role_distribution',
    'assign_roles',
    'generate_role_assignment',
    'GameState',
    'ActionRecord',
    'ActionKind',
    'Outcome',
    'new_game_state',
    'initialize_hunt_counters',
    'scan_outcome',
    'validate_game_state',
    'ResolutionResult',
    'resolve_scan',
    'resolve_exit',
    'resolve_action',
    'MINIMUM_MOVES_REQUIRED',
    'WinnerDetail',
    'WinnerStats',
    'WinnerResult',
    'calculate_winners',
    'generate_game_summary',
    'GameRuleError',
    'InvalidRosterSize',
    'UnknownParticipant',
    'ScannerEliminated',
    'TargetEliminated',
    'SelfScan',
    'HuntsExhausted',
    'AlreadyEliminated',
    'InvalidGameState',
]
