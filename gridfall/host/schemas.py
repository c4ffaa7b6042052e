"""
Wire models for the confidential host.

Every JSON payload is parsed into these models before any rule runs, so
malformed input is rejected with a validation error instead of reaching the
resolver.
"""

from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, model_validator

from ..core import (
    Role,
    ActionKind,
    Outcome,
    ActionRecord,
    GameState,
    initialize_hunt_counters,
    validate_game_state,
)


PlayerId = Annotated[str, Field(min_length=1)]
Count = Annotated[StrictInt, Field(ge=0)]


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class RosterInput(WireModel):
    players: List[PlayerId]


class ActionRecordModel(WireModel):
    timestamp: Count
    scanner: PlayerId
    target: Optional[PlayerId] = None
    action_type: ActionKind = Field(alias="actionType")
    result: Outcome
    scanner_role: Role = Field(alias="scannerRole")
    target_role: Optional[Role] = Field(default=None, alias="targetRole")

    @model_validator(mode="after")
    def check_shape(self) -> "ActionRecordModel":
        if self.action_type == ActionKind.SCAN:
            if self.target is None or self.target_role is None:
                raise ValueError("scan record needs target and targetRole")
            if self.result == Outcome.EXIT:
                raise ValueError("scan record cannot have an exit result")
        else:
            if self.target is not None or self.target_role is not None:
                raise ValueError("exit record cannot have a target")
            if self.result != Outcome.EXIT:
                raise ValueError("exit record must have an exit result")
        return self

    def to_record(self) -> ActionRecord:
        return ActionRecord(
            timestamp=self.timestamp,
            scanner=self.scanner,
            target=self.target,
            action_type=self.action_type,
            result=self.result,
            scanner_role=self.scanner_role,
            target_role=self.target_role,
        )


class GameStateModel(WireModel):
    roles: Dict[PlayerId, Role]
    eliminated: Dict[PlayerId, StrictBool] = Field(default_factory=dict)
    move_count: Dict[PlayerId, StrictInt] = Field(default_factory=dict, alias="moveCount")
    hunts_remaining: Dict[PlayerId, StrictInt] = Field(default_factory=dict, alias="huntsRemaining")
    action_history: List[ActionRecordModel] = Field(default_factory=list, alias="actionHistory")
    game_id: Optional[str] = Field(default=None, alias="gameId")

    def to_game_state(self) -> GameState:
        """Build a validated game state; Hunters missing a counter get the full allowance."""
        state = GameState(
            roles=dict(self.roles),
            eliminated=dict(self.eliminated),
            move_count=dict(self.move_count),
            hunts_remaining=dict(self.hunts_remaining),
            action_history=[record.to_record() for record in self.action_history],
            game_id=self.game_id,
        )
        validate_game_state(state)
        initialize_hunt_counters(state)
        return state


class ActionInput(WireModel):
    type: ActionKind
    scanner: PlayerId
    target: Optional[str] = None
    timestamp: Optional[Count] = None

    @model_validator(mode="after")
    def check_target(self) -> "ActionInput":
        if self.type == ActionKind.SCAN and not self.target:
            raise ValueError("scan action requires target")
        if self.type == ActionKind.EXIT and self.target is not None:
            raise ValueError("exit action cannot have a target")
        return self


class ActionTaskInput(WireModel):
    game_state: GameStateModel = Field(alias="gameState")
    action: ActionInput


class WinnerTaskInput(WireModel):
    game_state: GameStateModel = Field(alias="gameState")
