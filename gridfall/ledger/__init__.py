"""
Prize ledger that holds deposits and pays out refunds and prizes.
"""

from .prize_ledger import (
    PrizeLedger,
    PrizeDistribution,
    GameStatus,
    split_prize_pool,
    LedgerError,
    IncorrectDeposit,
    AlreadyJoined,
    GameFull,
    NotEnoughPlayers,
    GameAlreadyStarted,
    GameNotActive,
    GameNotFinished,
    NotInGame,
    NoPrizeToClaim,
    AlreadyClaimed,
    DuplicateWinner,
)

__all__ = [
    'PrizeLedger',
    'PrizeDistribution',
    'GameStatus',
    'split_prize_pool',
    'LedgerError',
    'IncorrectDeposit',
    'AlreadyJoined',
    'GameFull',
    'NotEnoughPlayers',
    'GameAlreadyStarted',
    'GameNotActive',
    'GameNotFinished',
    'NotInGame',
    'NoPrizeToClaim',
    'AlreadyClaimed',
    'DuplicateWinner',
]
