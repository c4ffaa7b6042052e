"""
Run recorder that saves the events of one Gridfall game to files.

Each run lives in its own directory, named after the game id, holding
``events.jsonl`` (one line per event, tagged with the game id) and
``metadata.json``.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional
from threading import Lock

logger = logging.getLogger(__name__)

GAME_ID_PREFIX_LENGTH = 12


def run_name_for_game(game_id: str) -> str:
    """Directory name for a game: ``game_`` plus the first 12 hex digits of its id."""
    return f"game_{game_id[:GAME_ID_PREFIX_LENGTH]}"


class RunRecorder:
    """Records the events of a game to files in a run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.runs_dir.mkdir(parents=True, exist_ok=True)
        self.game_id: Optional[str] = None
        self.current_run_dir: Optional[Path] = None
        self.events_file: Optional[Path] = None
        self.metadata_file: Optional[Path] = None
        self._lock = Lock()
        self._event_count = 0

    def create_run(self, game_id: str, run_name: Optional[str] = None) -> str:
        """
        Create the run directory for a game.

        Args:
            game_id: Id of the recorded game
            run_name: Optional custom run name, defaults to one derived from the game id

        Returns:
            The run name (directory name)

        Raises:
            FileExistsError: If a run with that name was already recorded
        """
        run_name = run_name or run_name_for_game(game_id)

        run_dir = self.runs_dir / run_name
        run_dir.mkdir()

        self.game_id = game_id
        self.current_run_dir = run_dir
        self.events_file = run_dir / "events.jsonl"
        self.metadata_file = run_dir / "metadata.json"
        self._event_count = 0

        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event to ``events.jsonl``. Ignored until a run is created."""
        if not self.events_file:
            return

        with self._lock:
            line = json.dumps({
                "game_id": self.game_id,
                "sequence": self._event_count,
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
            })
            with open(self.events_file, 'a') as f:
                f.write(line + '\n')
            self._event_count += 1

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        """Write ``metadata.json``, always carrying the game id and event count so far."""
        if not self.metadata_file:
            return

        with self._lock:
            record = dict(metadata)
            record["game_id"] = self.game_id
            record["events_recorded"] = self._event_count
            with open(self.metadata_file, 'w') as f:
                json.dump(record, f, indent=2)

    def get_run_path(self) -> Optional[Path]:
        """Get the current run directory path."""
        return self.current_run_dir

    def list_runs(self) -> list[Dict[str, Any]]:
        """
        List all recorded runs, ordered by run name.

        Returns:
            List of run info dictionaries
        """
        runs = []
        if not self.runs_dir.exists():
            return runs

        for run_dir in sorted(self.runs_dir.iterdir()):
            if not run_dir.is_dir():
                continue

            metadata_file = run_dir / "metadata.json"
            events_file = run_dir / "events.jsonl"

            run_info: Dict[str, Any] = {
                "name": run_dir.name,
                "path": str(run_dir),
                "has_metadata": metadata_file.exists(),
                "has_events": events_file.exists(),
            }

            if metadata_file.exists():
                try:
                    with open(metadata_file, 'r') as f:
                        run_info["metadata"] = json.load(f)
                    run_info["game_id"] = run_info["metadata"].get("game_id")
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning("Unreadable metadata in %s: %s", run_dir, e)

            if events_file.exists():
                event_count = 0
                winner_count = None
                with open(events_file, 'r') as f:
                    for line in f:
                        if not line.strip():
                            continue
                        event_count += 1
                        try:
                            event = json.loads(line)
                        except json.JSONDecodeError:
                            logger.warning("Skipping malformed event line in %s", events_file)
                            continue
                        if event.get("event_type") == "game_over":
                            winner_count = len(event.get("data", {}).get("winners", []))

                run_info["event_count"] = event_count
                if winner_count is not None:
                    run_info["winner_count"] = winner_count

            runs.append(run_info)

        return runs
