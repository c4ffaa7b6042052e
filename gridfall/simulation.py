"""
Full-game simulation with dummy players against the prize ledger.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from .core import (
    ActionKind,
    GameRuleError,
    GameState,
    Role,
    TOTAL_PLAYERS,
    calculate_winners,
    generate_role_assignment,
    new_game_state,
)
from .config.game_config import GameConfig, default_config
from .ledger import PrizeLedger, PrizeDistribution
from .recording import EventEmitter, RunRecorder

logger = logging.getLogger(__name__)


def make_roster(count: int = TOTAL_PLAYERS) -> List[str]:
    """Generate placeholder wallet addresses."""
    return [f"0x{index:040x}" for index in range(1, count + 1)]


class DummyPlayer:
    """
    Dummy player with seeded random behavior:
    - Occasionally exits the game
    - Otherwise scans a random active player
    - A Hunter with no scans left passes
    """

    def __init__(self, address: str, role: Role, seed: Optional[int], index: int,
                 exit_probability: float = 0.05):
        self.address = address
        self.role = role
        self.exit_probability = exit_probability
        # Combine seed with player index so each player is different but reproducible
        self.random = random.Random(seed + index) if seed is not None else random.Random()

    def choose_action(self, state: GameState) -> Optional[Tuple[ActionKind, Optional[str]]]:
        """Pick an action, or None to pass this turn."""
        if self.random.random() < self.exit_probability:
            return ActionKind.EXIT, None

        if self.role == Role.HUNTER and state.hunts_left(self.address) == 0:
            return None

        candidates = [p for p in state.active_players() if p != self.address]
        if not candidates:
            return None
        return ActionKind.SCAN, self.random.choice(candidates)


@dataclass
class SimulationReport:
    """What happened in a simulated game."""
    game_id: str
    roles: Dict[str, Role]
    winners: List[str]
    distribution: PrizeDistribution
    claims: Dict[str, int] = field(default_factory=dict)
    refunds: Dict[str, int] = field(default_factory=dict)
    rejected_actions: List[Dict[str, Optional[str]]] = field(default_factory=list)
    rounds_played: int = 0
    state: Optional[GameState] = None


class GridfallSimulation:
    """Plays one game from deposits to prize claims."""

    def __init__(self, config: GameConfig = default_config, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None):
        self.config = config
        self.run_name = run_name
        self.run_recorder: Optional[RunRecorder] = None

        if event_emitter is None and config.record_runs:
            self.run_recorder = RunRecorder(config.runs_dir)
        self.event_emitter = event_emitter or EventEmitter(self.run_recorder)

        self.ledger = PrizeLedger(config)
        self.roster = make_roster()

    def run(self) -> SimulationReport:
        """Run the complete game and return its report."""
        joins = [(address, self.ledger.join(address, self.config.deposit_wei)) for address in self.roster]

        players = self.ledger.start()
        assignment = generate_role_assignment(players)
        state = new_game_state(assignment.roles, game_id=assignment.game_id)

        if self.run_recorder:
            run_name = self.run_recorder.create_run(assignment.game_id, self.run_name)
            logger.info("Recording game to: %s/%s/", self.config.runs_dir, run_name)
        for address, joined in joins:
            self.event_emitter.emit_player_joined(address, joined)
        self.event_emitter.emit_game_start(assignment.game_id, players, assignment.hunters)
        if self.run_recorder:
            self.run_recorder.save_metadata({
                "players": players,
                "hunters": assignment.hunters,
                "config": {
                    "deposit_wei": self.config.deposit_wei,
                    "protocol_fee_percent": self.config.protocol_fee_percent,
                    "safe_exit_refund_percent": self.config.safe_exit_refund_percent,
                    "max_rounds": self.config.max_rounds,
                    "random_seed": self.config.random_seed,
                },
            })

        dummies = [
            DummyPlayer(address, assignment.roles[address], self.config.random_seed, index,
                        exit_probability=self.config.exit_probability)
            for index, address in enumerate(players)
        ]

        rejected: List[Dict[str, Optional[str]]] = []
        rounds_played = 0
        for _ in range(self.config.max_rounds):
            if len(state.active_players()) < 2:
                break
            rounds_played += 1
            for dummy in dummies:
                if state.is_eliminated(dummy.address):
                    continue
                choice = dummy.choose_action(state)
                if choice is None:
                    continue
                rejection = self._play(state, dummy.address, *choice)
                if rejection:
                    rejected.append(rejection)

        winner_result = calculate_winners(state)
        distribution = self.ledger.end(state)
        self.event_emitter.emit_game_over(
            winner_result.winners, winner_result.stats.to_dict(), distribution.to_dict()
        )

        claims = {}
        for winner in distribution.winners:
            claims[winner] = self.ledger.claim(winner)
            self.event_emitter.emit_prize_claimed(winner, claims[winner])

        return SimulationReport(
            game_id=assignment.game_id,
            roles=assignment.roles,
            winners=winner_result.winners,
            distribution=distribution,
            claims=claims,
            refunds=dict(self.ledger.refunds),
            rejected_actions=rejected,
            rounds_played=rounds_played,
            state=state,
        )

    def _play(self, state: GameState, player: str, action_type: ActionKind,
              target: Optional[str]) -> Optional[Dict[str, Optional[str]]]:
        """Submit one action. Returns a rejection record if the rules refused it."""
        try:
            if action_type == ActionKind.EXIT:
                result = self.ledger.submit_exit(state, player)
                self.event_emitter.emit_refund(player, self.ledger.refunds[player])
            else:
                result = self.ledger.submit_scan(state, player, target)
        except GameRuleError as e:
            logger.info("Rejected %s by %s: %s", action_type.value, player, e.message)
            self.event_emitter.emit_rejected_action(player, action_type.value, e.rule, e.message, target)
            return {"player": player, "action_type": action_type.value, "target": target, "rule": e.rule}

        self.event_emitter.emit_action(result.action.to_dict(), result.eliminated)
        return None
