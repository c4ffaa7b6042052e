"""
Game configuration and constants.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Configuration for ledger economics, the confidential host, and simulated games."""

    # Ledger economics (amounts in wei)
    deposit_wei: int = 100_000_000_000_000_000  # 0.1 ETH
    protocol_fee_percent: int = 5
    safe_exit_refund_percent: int = 50

    # Confidential host I/O
    iexec_in: str = "/iexec_in"
    iexec_out: str = "/iexec_out"

    # Logging and run recording
    log_level: str = "INFO"
    runs_dir: str = "runs"
    record_runs: bool = True

    # Simulated games
    max_rounds: int = 6  # Passes over the active players before the game ends
    exit_probability: float = 0.05  # Chance a dummy player exits instead of scanning
    random_seed: Optional[int] = None  # Random seed for reproducible dummy player choices


# Default configuration instance
default_config = GameConfig()
