"""
Prize ledger: deposits, exit refunds, protocol fee, and winner claims.

Models the on-chain game contract that holds the funds. It forwards actions
to the core rules and only learns who was eliminated and who won.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from ..core import (
    GameState,
    ResolutionResult,
    WinnerResult,
    TOTAL_PLAYERS,
    resolve_scan,
    resolve_exit,
    calculate_winners,
)
from ..config.game_config import GameConfig, default_config

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Ledger lifecycle."""
    PENDING = "pending"
    ACTIVE = "active"
    FINISHED = "finished"


class LedgerError(Exception):
    """Raised when the ledger rejects an operation."""

    def __init__(self, message: str, player: Optional[str] = None):
        self.player = player
        self.message = message
        super().__init__(self.message)


class IncorrectDeposit(LedgerError):
    pass


class AlreadyJoined(LedgerError):
    pass


class GameFull(LedgerError):
    pass


class NotEnoughPlayers(LedgerError):
    pass


class GameAlreadyStarted(LedgerError):
    pass


class GameNotActive(LedgerError):
    pass


class GameNotFinished(LedgerError):
    pass


class NotInGame(LedgerError):
    pass


class NoPrizeToClaim(LedgerError):
    pass


class AlreadyClaimed(LedgerError):
    pass


class DuplicateWinner(LedgerError):
    pass


@dataclass
class PrizeDistribution:
    """Outcome of ending a game."""
    prize_pool: int
    protocol_fee: int
    prize_per_winner: int
    remainder: int  # Integer-division remainder, included in protocol_fee
    winners: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "prizePool": self.prize_pool,
            "protocolFee": self.protocol_fee,
            "prizePerWinner": self.prize_per_winner,
            "remainder": self.remainder,
            "winners": list(self.winners),
        }


def split_prize_pool(pool: int, winner_count: int, fee_percent: int) -> PrizeDistribution:
    """
    Split a pool between the protocol and an equal share per winner.

    The fee is taken first; whatever cannot be divided evenly among the
    winners is added to the fee. With no winners the whole pool is fee.
    """
    fee = pool * fee_percent // 100
    distributable = pool - fee

    if winner_count == 0:
        return PrizeDistribution(prize_pool=pool, protocol_fee=pool, prize_per_winner=0, remainder=0)

    share = distributable // winner_count
    remainder = distributable - share * winner_count
    return PrizeDistribution(
        prize_pool=pool,
        protocol_fee=fee + remainder,
        prize_per_winner=share,
        remainder=remainder,
    )


class PrizeLedger:
    """Holds deposits for one game and pays out refunds and prizes."""

    def __init__(self, config: GameConfig = default_config):
        self.config = config
        self.status = GameStatus.PENDING
        self.prize_pool = 0
        self.protocol_fees_collected = 0
        self.refunds: Dict[str, int] = {}
        self.claimed: Dict[str, int] = {}
        self.distribution: Optional[PrizeDistribution] = None
        self._players: List[str] = []
        self._eliminated: List[str] = []
        self._claimable: Dict[str, int] = {}

    @property
    def players(self) -> List[str]:
        return list(self._players)

    @property
    def eliminated_players(self) -> List[str]:
        return list(self._eliminated)

    @property
    def players_remaining(self) -> int:
        return TOTAL_PLAYERS - len(self._eliminated)

    @property
    def winners(self) -> List[str]:
        return list(self.distribution.winners) if self.distribution else []

    def has_joined(self, player: str) -> bool:
        return player in self._players

    def claimable_amount(self, player: str) -> int:
        return self._claimable.get(player, 0)

    def has_claimed(self, player: str) -> bool:
        return player in self.claimed

    def join(self, player: str, amount: int) -> int:
        """
        Accept a player's deposit.
        Returns the number of players joined so far.
        """
        if self.status != GameStatus.PENDING:
            raise GameAlreadyStarted("Game already started", player)
        if amount != self.config.deposit_wei:
            raise IncorrectDeposit("Incorrect deposit", player)
        if self.has_joined(player):
            raise AlreadyJoined("Already joined", player)
        if len(self._players) >= TOTAL_PLAYERS:
            raise GameFull("Game full", player)

        self._players.append(player)
        self.prize_pool += amount
        logger.info("Player %s joined (%d/%d)", player, len(self._players), TOTAL_PLAYERS)
        return len(self._players)

    def start(self) -> List[str]:
        """Start the game and return the roster for role assignment."""
        if self.status != GameStatus.PENDING:
            raise GameAlreadyStarted("Game already started")
        if len(self._players) != TOTAL_PLAYERS:
            raise NotEnoughPlayers(f"Need {TOTAL_PLAYERS} players")

        self.status = GameStatus.ACTIVE
        logger.info("Game started with pool %d", self.prize_pool)
        return self.players

    def _require_active(self, player: str) -> None:
        if self.status != GameStatus.ACTIVE:
            raise GameNotActive("Game not active", player)
        if not self.has_joined(player):
            raise NotInGame(f"Player {player} not in game", player)

    def _record_elimination(self, player: Optional[str]) -> None:
        if player is not None and player not in self._eliminated:
            self._eliminated.append(player)

    def submit_scan(self, state: GameState, scanner: str, target: str,
                    timestamp: Optional[int] = None) -> ResolutionResult:
        """Forward a scan to the rules and record any elimination."""
        self._require_active(scanner)
        if not self.has_joined(target):
            raise NotInGame("Target not in game", target)

        result = resolve_scan(state, scanner, target, timestamp=timestamp)
        self._record_elimination(result.eliminated)
        logger.debug("Scan by %s resolved: %s", scanner, result.outcome.value)
        return result

    def submit_exit(self, state: GameState, player: str,
                    timestamp: Optional[int] = None) -> ResolutionResult:
        """Forward an exit to the rules and refund part of the player's deposit."""
        self._require_active(player)

        result = resolve_exit(state, player, timestamp=timestamp)
        self._record_elimination(player)

        refund = self.config.deposit_wei * self.config.safe_exit_refund_percent // 100
        self.prize_pool -= refund
        self.refunds[player] = refund
        logger.info("Player %s exited with refund %d", player, refund)
        return result

    def end(self, state: GameState) -> PrizeDistribution:
        """Calculate winners, collect the protocol fee, and record claimable prizes."""
        if self.status != GameStatus.ACTIVE:
            raise GameNotActive("Game not active")

        winner_result: WinnerResult = calculate_winners(state)
        return self.settle(winner_result.winners)

    def settle(self, winners: List[str]) -> PrizeDistribution:
        """Record a winner list (as relayed from the confidential host)."""
        if self.status != GameStatus.ACTIVE:
            raise GameNotActive("Game not active")
        seen = set()
        for winner in winners:
            if not self.has_joined(winner):
                raise NotInGame(f"Winner {winner} not in game", winner)
            if winner in seen:
                raise DuplicateWinner(f"Winner {winner} listed twice", winner)
            seen.add(winner)

        distribution = split_prize_pool(self.prize_pool, len(winners), self.config.protocol_fee_percent)
        distribution.winners = list(winners)

        for winner in winners:
            self._claimable[winner] = distribution.prize_per_winner

        self.protocol_fees_collected += distribution.protocol_fee
        self.distribution = distribution
        self.status = GameStatus.FINISHED
        logger.info(
            "Game ended: %d winners, %d each, protocol fee %d",
            len(winners), distribution.prize_per_winner, distribution.protocol_fee,
        )
        return distribution

    def claim(self, player: str) -> int:
        """Pay a winner their share. Returns the amount paid."""
        if self.status != GameStatus.FINISHED:
            raise GameNotFinished("Game not finished", player)
        if self.has_claimed(player):
            raise AlreadyClaimed("Already claimed", player)
        amount = self.claimable_amount(player)
        if amount == 0:
            raise NoPrizeToClaim("No prize to claim", player)

        self.claimed[player] = amount
        logger.info("Player %s claimed %d", player, amount)
        return amount
