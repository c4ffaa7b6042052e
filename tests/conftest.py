"""
Pytest fixtures for Gridfall tests.
"""

import pytest
from typing import Dict, List

from gridfall.core import GameState, Role, new_game_state
from gridfall.config.game_config import GameConfig
from gridfall.ledger import PrizeLedger
from gridfall.simulation import make_roster


@pytest.fixture
def roster() -> List[str]:
    """Ten placeholder addresses."""
    return make_roster()


@pytest.fixture
def roles(roster) -> Dict[str, Role]:
    """Fixed assignment: the first two players are Hunters."""
    return {
        player: Role.HUNTER if index < 2 else Role.TARGET
        for index, player in enumerate(roster)
    }


@pytest.fixture
def hunters(roster) -> List[str]:
    return roster[:2]


@pytest.fixture
def targets(roster) -> List[str]:
    return roster[2:]


@pytest.fixture
def game_state(roles) -> GameState:
    """Create a fresh game state with fixed roles."""
    return new_game_state(roles, game_id="test-game")


@pytest.fixture
def game_config(tmp_path) -> GameConfig:
    """Test configuration writing runs to a temporary directory."""
    return GameConfig(
        runs_dir=str(tmp_path / "runs"),
        iexec_in=str(tmp_path / "iexec_in"),
        iexec_out=str(tmp_path / "iexec_out"),
        random_seed=7,
    )


@pytest.fixture
def ledger(game_config, roster) -> PrizeLedger:
    """Ledger with all ten players joined and the game started."""
    ledger = PrizeLedger(game_config)
    for player in roster:
        ledger.join(player, game_config.deposit_wei)
    ledger.start()
    return ledger

