"""
Tests for the game state aggregate and its shape validation.
"""

from dataclasses import replace

import pytest

from gridfall.core import (
    ActionKind,
    ActionRecord,
    GameState,
    InvalidGameState,
    Outcome,
    Role,
    new_game_state,
    resolve_exit,
    resolve_scan,
    scan_outcome,
    validate_game_state,
)


def test_new_game_state_initializes_hunters(game_state, hunters, targets):
    """Test that every Hunter starts with two scans and Targets have no counter."""
    assert game_state.hunts_remaining == {hunters[0]: 2, hunters[1]: 2}
    for target in targets:
        assert game_state.hunts_left(target) is None
    assert game_state.eliminated == {}
    assert game_state.move_count == {}
    assert game_state.action_history == []


def test_new_game_state_copies_roles(roles):
    state = new_game_state(roles)
    roles.clear()
    assert len(state.roles) == 10


def test_player_views(game_state, hunters, targets):
    resolve_exit(game_state, targets[0])

    assert game_state.hunters() == hunters
    assert game_state.targets() == targets
    assert targets[0] not in game_state.active_players()
    assert len(game_state.active_players()) == 9


def test_to_dict(game_state, hunters, targets):
    """Test the wire representation."""
    resolve_scan(game_state, hunters[0], targets[0], timestamp=9)
    resolve_exit(game_state, targets[1], timestamp=10)

    data = game_state.to_dict()

    assert data["gameId"] == "test-game"
    assert data["roles"][hunters[0]] == "hunter"
    assert data["eliminated"] == {targets[0]: True, targets[1]: True}
    assert data["moveCount"] == {hunters[0]: 1, targets[1]: 1}
    assert data["huntsRemaining"][hunters[0]] == 1
    assert data["actionHistory"][0] == {
        "timestamp": 9,
        "scanner": hunters[0],
        "target": targets[0],
        "actionType": "scan",
        "result": "eliminated",
        "scannerRole": "hunter",
        "targetRole": "target",
    }
    assert "target" not in data["actionHistory"][1]


def test_valid_states_pass(game_state, hunters, targets):
    resolve_scan(game_state, hunters[0], targets[0])
    resolve_exit(game_state, targets[1])
    validate_game_state(game_state)
    validate_game_state(GameState())


def test_full_roster_needs_two_hunters(roster):
    state = GameState(roles={p: Role.TARGET for p in roster})
    with pytest.raises(InvalidGameState):
        validate_game_state(state)


def test_small_rosters_skip_role_count(roster):
    """Test that partial rosters are allowed any role mix."""
    validate_game_state(GameState(roles={roster[0]: Role.HUNTER, roster[1]: Role.HUNTER}))


@pytest.mark.parametrize("field_name", ["eliminated", "move_count", "hunts_remaining"])
def test_unknown_keys_rejected(game_state, field_name):
    getattr(game_state, field_name)["0xnobody"] = 0
    with pytest.raises(InvalidGameState) as exc_info:
        validate_game_state(game_state)
    assert exc_info.value.player == "0xnobody"


def test_negative_moves_rejected(game_state, targets):
    game_state.move_count[targets[0]] = -1
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_target_counter_rejected(game_state, targets):
    game_state.hunts_remaining[targets[0]] = 2
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


@pytest.mark.parametrize("value", [-1, 3])
def test_counter_out_of_range(game_state, hunters, value):
    game_state.hunts_remaining[hunters[0]] = value
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_history_must_match_moves(game_state, targets):
    game_state.action_history.append(ActionRecord(
        timestamp=1,
        scanner=targets[0],
        action_type=ActionKind.EXIT,
        result=Outcome.EXIT,
        scanner_role=Role.TARGET,
    ))
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_history_unknown_player(game_state, targets):
    game_state.move_count[targets[0]] = 1
    game_state.action_history.append(ActionRecord(
        timestamp=1,
        scanner=targets[0],
        target="0xnobody",
        action_type=ActionKind.SCAN,
        result=Outcome.NO_EFFECT,
        scanner_role=Role.TARGET,
        target_role=Role.TARGET,
    ))
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def played_state(game_state, hunters, targets):
    """Both of a Hunter's scans, a Target's no-effect scan and an exit."""
    resolve_scan(game_state, hunters[0], targets[0], timestamp=1)
    resolve_scan(game_state, hunters[0], targets[1], timestamp=2)
    resolve_scan(game_state, targets[2], hunters[1], timestamp=3)
    resolve_exit(game_state, targets[3], timestamp=4)
    return game_state


def test_replayed_history_passes(game_state, hunters, targets):
    state = played_state(game_state, hunters, targets)
    resolve_scan(state, hunters[1], hunters[0])
    validate_game_state(state)


def test_reset_hunt_counter_rejected(game_state, hunters, targets):
    """Test that a Hunter whose history shows both scans cannot arrive with a fresh counter."""
    state = played_state(game_state, hunters, targets)
    del state.hunts_remaining[hunters[0]]

    with pytest.raises(InvalidGameState) as exc_info:
        validate_game_state(state)
    assert exc_info.value.player == hunters[0]


def test_counter_ahead_of_history_rejected(game_state, hunters):
    game_state.hunts_remaining[hunters[1]] = 1
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


@pytest.mark.parametrize("index", [0, 3])
def test_revived_player_rejected(game_state, hunters, targets, index):
    """Test that players eliminated or exited in the history must stay eliminated."""
    state = played_state(game_state, hunters, targets)
    del state.eliminated[targets[index]]

    with pytest.raises(InvalidGameState) as exc_info:
        validate_game_state(state)
    assert exc_info.value.player == targets[index]


def test_friendly_fire_scanner_must_stay_eliminated(game_state, hunters):
    resolve_scan(game_state, hunters[0], hunters[1])
    game_state.eliminated[hunters[0]] = False

    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_elimination_without_history_rejected(game_state, targets):
    game_state.eliminated[targets[0]] = True
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_moves_must_match_per_player(game_state, targets):
    resolve_exit(game_state, targets[0])
    game_state.move_count = {targets[1]: 1}
    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


@pytest.mark.parametrize("field_name", ["scanner_role", "target_role"])
def test_recorded_roles_must_match(game_state, hunters, targets, field_name):
    resolve_scan(game_state, targets[0], targets[1])
    record = game_state.action_history[0]
    game_state.action_history[0] = replace(record, **{field_name: Role.HUNTER})

    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_recorded_outcome_must_follow_rules(game_state, targets):
    resolve_scan(game_state, targets[0], targets[1])
    game_state.action_history[0] = replace(game_state.action_history[0], result=Outcome.ELIMINATED)
    game_state.eliminated[targets[1]] = True

    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


def test_action_after_elimination_rejected(game_state, hunters, targets):
    resolve_scan(game_state, hunters[0], targets[0], timestamp=1)
    game_state.action_history.append(ActionRecord(
        timestamp=2,
        scanner=targets[0],
        target=targets[1],
        action_type=ActionKind.SCAN,
        result=Outcome.NO_EFFECT,
        scanner_role=Role.TARGET,
        target_role=Role.TARGET,
    ))
    game_state.move_count[targets[0]] = 1

    with pytest.raises(InvalidGameState):
        validate_game_state(game_state)


@pytest.mark.parametrize("scanner_role, target_role, expected", [
    (Role.HUNTER, Role.TARGET, Outcome.ELIMINATED),
    (Role.HUNTER, Role.HUNTER, Outcome.FRIENDLY_FIRE),
    (Role.TARGET, Role.HUNTER, Outcome.NO_EFFECT),
    (Role.TARGET, Role.TARGET, Outcome.NO_EFFECT),
])
def test_scan_outcome(scanner_role, target_role, expected):
    assert scan_outcome(scanner_role, target_role) == expected


def test_only_hunters_can_eliminate():
    assert Role.HUNTER.can_eliminate
    assert not Role.TARGET.can_eliminate
