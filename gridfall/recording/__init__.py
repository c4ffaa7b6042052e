"""
Run recording of game events.
"""

from .event_emitter import EventEmitter
from .run_recorder import RunRecorder, run_name_for_game

__all__ = ['EventEmitter', 'RunRecorder', 'run_name_for_game']
