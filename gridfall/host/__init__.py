"""
Confidential host boundary: JSON validation and task entry points.
"""

from .schemas import (
    RosterInput,
    ActionRecordModel,
    GameStateModel,
    ActionInput,
    ActionTaskInput,
    WinnerTaskInput,
)
from .tasks import TaskRunner, run_role_task, run_action_task, run_winner_task, TASKS

__all__ = [
    'RosterInput',
    'ActionRecordModel',
    'GameStateModel',
    'ActionInput',
    'ActionTaskInput',
    'WinnerTaskInput',
    'TaskRunner',
    'run_role_task',
    'run_action_task',
    'run_winner_task',
    'TASKS',
]
