"""
Confidential host tasks: role generation, action execution, winner calculation.

Each task reads ``input.json`` from the host input directory and writes
``result.json`` plus the ``computed.json`` pointer the host expects. Only the
minimum needed on-chain goes into ``result.json`` for the winner task; the
full summary is written next to it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..core import (
    GameRuleError,
    generate_role_assignment,
    resolve_action,
    calculate_winners,
    generate_game_summary,
)
from ..config.game_config import GameConfig, default_config
from .schemas import RosterInput, ActionTaskInput, WinnerTaskInput

logger = logging.getLogger(__name__)

INPUT_FILE = "input.json"
RESULT_FILE = "result.json"
SUMMARY_FILE = "summary.json"
COMPUTED_FILE = "computed.json"
ERROR_FILE = "error.json"


def run_role_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Assign roles to the roster in ``payload['players']``."""
    roster = RosterInput.model_validate(payload)
    assignment = generate_role_assignment(roster.players)
    logger.info(
        "Roles generated for game %s: %d hunters, %d targets",
        assignment.game_id, assignment.hunter_count, assignment.target_count,
    )
    return assignment.to_dict()


def run_action_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Apply one scan or exit to ``payload['gameState']``."""
    task = ActionTaskInput.model_validate(payload)
    state = task.game_state.to_game_state()
    action = task.action

    logger.info("Processing %s by %s", action.type.value, action.scanner)
    result = resolve_action(
        state,
        action.type,
        action.scanner,
        target=action.target,
        timestamp=action.timestamp,
    )
    if result.eliminated:
        logger.info("Eliminated player: %s", result.eliminated)

    return {
        "success": True,
        "eliminatedPlayer": result.eliminated,
        "actionResult": result.outcome.value,
        "gameState": result.state.to_dict(),
        "processedAction": result.action.to_dict(),
    }


def run_winner_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Calculate winners of the final ``payload['gameState']``.

    Returns the on-chain part under ``result`` and the full report under ``summary``.
    """
    task = WinnerTaskInput.model_validate(payload)
    state = task.game_state.to_game_state()

    winner_result = calculate_winners(state)
    stats = winner_result.stats
    logger.info(
        "Winners: %d (hunters %d, targets %d), eliminated %d, ineligible survivors %d",
        winner_result.winner_count, stats.hunter_winners, stats.target_winners,
        stats.eliminated_count, stats.ineligible_survivors,
    )

    contract_output = {
        "winners": list(winner_result.winners),
        "winnerCount": winner_result.winner_count,
    }
    detailed_output = dict(contract_output)
    detailed_output["summary"] = generate_game_summary(state, winner_result)
    detailed_output["winnerDetails"] = [d.to_dict() for d in winner_result.winner_details]
    detailed_output["actionHistory"] = [a.to_dict() for a in winner_result.action_history]

    return {"result": contract_output, "summary": detailed_output}


TASKS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "roles": run_role_task,
    "action": run_action_task,
    "winners": run_winner_task,
}


class TaskRunner:
    """Runs one host task against the host's input and output directories."""

    def __init__(self, config: GameConfig = default_config):
        self.config = config

    def execute(self, task_name: str, input_dir: Optional[str] = None,
                output_dir: Optional[str] = None) -> int:
        """
        Run a task end to end.

        Returns:
            Process exit code: 0 on success, 1 on any rejected or malformed input
        """
        in_dir = Path(input_dir or self.config.iexec_in)
        out_dir = Path(output_dir or self.config.iexec_out)
        out_dir.mkdir(parents=True, exist_ok=True)

        try:
            task = TASKS.get(task_name)
            if task is None:
                raise ValueError(f"Unknown task: {task_name}")

            input_path = in_dir / INPUT_FILE
            logger.info("Reading input from: %s", input_path)
            with open(input_path, 'r') as f:
                payload = json.load(f)
            if not isinstance(payload, dict):
                raise ValueError("Input must be a JSON object")

            output = task(payload)

            result_path = out_dir / RESULT_FILE
            if task_name == "winners":
                self._write_json(result_path, output["result"])
                self._write_json(out_dir / SUMMARY_FILE, output["summary"])
            else:
                self._write_json(result_path, output)

            self._write_json(out_dir / COMPUTED_FILE, {"deterministic-output-path": str(result_path)})
            logger.info("Results written to: %s", result_path)
            return 0

        except (GameRuleError, ValueError, OSError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
            logger.error("Task %s failed: %s", task_name, e)
            error_output: Dict[str, Any] = {"success": False, "error": str(e)}
            if isinstance(e, GameRuleError):
                error_output.update(e.to_dict())
            self._write_json(out_dir / ERROR_FILE, error_output)
            return 1

    @staticmethod
    def _write_json(path: Path, data: Dict[str, Any]) -> None:
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
