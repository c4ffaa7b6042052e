"""
Event emitter for recording game events to files.
"""

import logging
from typing import Dict, Any, Optional, List

from .run_recorder import RunRecorder

logger = logging.getLogger(__name__)


class EventEmitter:
    """Event emitter that records game events to files."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event by recording it to file."""
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except (OSError, TypeError) as e:
                # Don't let recording errors break the game
                logger.error("Error recording event %s: %s", event_type, e)

    def emit_player_joined(self, player: str, joined: int) -> None:
        """Emit deposit accepted event."""
        self._emit("player_joined", {
            "player": player,
            "joined": joined
        })

    def emit_game_start(self, game_id: str, players: List[str], hunters: List[str]) -> None:
        """Emit game start event. Roles are only recorded in the private run."""
        self._emit("game_start", {
            "game_id": game_id,
            "players": players,
            "hunters": hunters
        })

    def emit_action(self, action: Dict[str, Any], eliminated: Optional[str]) -> None:
        """Emit accepted action event."""
        self._emit("action", {
            "action": action,
            "eliminated": eliminated
        })

    def emit_rejected_action(self, player: str, action_type: str, rule: str, message: str,
                             target: Optional[str] = None) -> None:
        """Emit rejected action event."""
        self._emit("action_rejected", {
            "player": player,
            "action_type": action_type,
            "target": target,
            "rule": rule,
            "message": message
        })

    def emit_refund(self, player: str, amount: int) -> None:
        """Emit exit refund event."""
        self._emit("refund", {
            "player": player,
            "amount": amount
        })

    def emit_game_over(self, winners: List[str], stats: Dict[str, int], distribution: Dict[str, Any]) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "winners": winners,
            "stats": stats,
            "distribution": distribution
        })

    def emit_prize_claimed(self, player: str, amount: int) -> None:
        """Emit prize claim event."""
        self._emit("prize_claimed", {
            "player": player,
            "amount": amount
        })
