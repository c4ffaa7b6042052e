"""
Tests for role assignment.
"""

import pytest
from collections import Counter

from gridfall.core import (
    Role,
    InvalidRosterSize,
    assign_roles,
    generate_role_assignment,
    get_role_distribution,
)


def test_role_distribution():
    """Test that the unshuffled distribution is 2 Hunters and 8 Targets."""
    distribution = get_role_distribution()
    assert distribution.count(Role.HUNTER) == 2
    assert distribution.count(Role.TARGET) == 8


def test_assign_roles_counts(roster):
    """Test that every assignment has exactly 2 Hunters and 8 Targets."""
    for _ in range(50):
        roles = assign_roles(roster)
        assert len(roles) == 10
        counts = Counter(roles.values())
        assert counts[Role.HUNTER] == 2
        assert counts[Role.TARGET] == 8


def test_assign_roles_preserves_roster_order(roster):
    """Test that the mapping follows roster order."""
    roles = assign_roles(roster)
    assert list(roles) == roster


def test_assign_roles_uses_fisher_yates_indices(roster):
    """Test the shuffle draws one index per position from the shrinking range."""
    bounds = []

    def randbelow(n):
        bounds.append(n)
        return 0

    roles = assign_roles(roster, randbelow=randbelow)

    assert bounds == [10, 9, 8, 7, 6, 5, 4, 3, 2]
    # Always swapping with index 0 rotates both Hunter tokens away from the front
    assert Counter(roles.values())[Role.HUNTER] == 2


def test_assign_roles_identity_shuffle(roster):
    """Test that swapping each position with itself keeps the distribution order."""
    roles = assign_roles(roster, randbelow=lambda n: n - 1)
    assert [roles[p] for p in roster] == get_role_distribution()


def test_assign_roles_no_positional_bias(roster):
    """Test that every roster position becomes a Hunter at a similar rate."""
    runs = 3000
    hunter_counts = Counter()
    for _ in range(runs):
        roles = assign_roles(roster)
        hunter_counts.update(p for p, role in roles.items() if role == Role.HUNTER)

    # Expected rate is 2/10 per position
    for player in roster:
        rate = hunter_counts[player] / runs
        assert 0.14 < rate < 0.26, f"{player} was a Hunter at rate {rate}"


@pytest.mark.parametrize("size", [0, 9, 11])
def test_assign_roles_wrong_size(size):
    """Test that rosters of the wrong size are rejected."""
    roster = [f"0x{i:02x}" for i in range(size)]
    with pytest.raises(InvalidRosterSize) as exc_info:
        assign_roles(roster)
    assert exc_info.value.size == size
    assert exc_info.value.expected == 10


def test_assign_roles_duplicate_players(roster):
    """Test that a roster of ten with a duplicate is rejected."""
    roster = roster[:9] + [roster[0]]
    with pytest.raises(InvalidRosterSize) as exc_info:
        assign_roles(roster)
    assert exc_info.value.size == 10
    assert exc_info.value.unique == 9


def test_generate_role_assignment(roster):
    """Test the bundled assignment used by the host."""
    assignment = generate_role_assignment(roster)

    assert len(assignment.game_id) == 64
    assert assignment.hunter_count == 2
    assert assignment.target_count == 8
    assert set(assignment.hunters) | set(assignment.targets) == set(roster)

    data = assignment.to_dict()
    assert data["totalPlayers"] == 10
    assert sorted(data["roleAssignments"].values()).count("hunter") == 2


def test_generate_role_assignment_independent_games(roster):
    """Test that separate calls do not share a game id."""
    first = generate_role_assignment(roster)
    second = generate_role_assignment(roster)
    assert first.game_id != second.game_id
