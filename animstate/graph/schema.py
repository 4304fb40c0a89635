"""
State machine document schema using Pydantic models.

Describes the native JSON dialect consumed by GraphLoader. The foreign
(Unity-style) dialect wraps the same document as `layers[0].stateMachine`.

Every field is optional: absent or null numbers read as 0, absent or
null strings read as "". A null list item reads as an empty object.
Unknown keys are ignored. Values of the wrong type are rejected without
coercion: `"1.5"` is not a number and `"yes"` is not a bool.

Example JSON:
```json
{
  "states": [
    {
      "name": "Idle",
      "speed": 1.0,
      "animationClip": "idle",
      "transitions": [
        {
          "destinationState": "Run",
          "offset": 0.0,
          "duration": 0.25,
          "exitTime": 0.9,
          "conditions": [{"parameter": "run", "mode": 1, "threshold": 0}]
        }
      ]
    },
    {"name": "Run", "speed": 1.5, "animationClip": "run", "transitions": []}
  ]
}
```
"""

from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictStr,
    model_validator,
)

from animstate.graph.model import State, Transition


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat null values as absent and null list items as empty objects."""
        if isinstance(data, dict):
            return {
                k: [{} if item is None else item for item in v] if isinstance(v, list) else v
                for k, v in data.items()
                if v is not None
            }
        return data


class ConditionEntry(_DocumentModel):
    """
    One transition condition.

    Only `parameter` is consumed; comparison keys such as `mode` and
    `threshold` are kept on the model but never evaluated.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    parameter: StrictStr = ""


class TransitionEntry(_DocumentModel):
    """A transition as written inside a state entry."""

    destination_state: StrictStr = Field(default="", alias="destinationState")
    offset: StrictFloat = 0.0
    duration: StrictFloat = 0.0
    exit_time: StrictFloat = Field(default=0.0, alias="exitTime")
    has_exit_time: Optional[StrictBool] = Field(default=None, alias="hasExitTime")
    conditions: List[ConditionEntry] = Field(default_factory=list)

    @property
    def trigger(self) -> Optional[str]:
        """Trigger name taken from the first condition, None without conditions."""
        if not self.conditions:
            return None
        return self.conditions[0].parameter

    def to_transition(self, from_state: str) -> Optional[Transition]:
        """Build the runtime Transition, or None if this entry cannot be triggered."""
        trigger = self.trigger
        if trigger is None:
            return None

        # Exporters that omit hasExitTime get the flag from duration,
        # matching the legacy field mapping.
        if self.has_exit_time is None:
            has_exit_time = bool(self.duration)
        else:
            has_exit_time = self.has_exit_time

        return Transition(
            trigger=trigger,
            from_state=from_state,
            to_state=self.destination_state,
            offset=self.offset,
            duration=self.duration,
            has_exit_time=has_exit_time,
            exit_time=self.exit_time,
        )


class StateEntry(_DocumentModel):
    """A state definition with its inline transitions."""

    name: StrictStr = ""
    speed: StrictFloat = 0.0
    animation_clip: StrictStr = Field(default="", alias="animationClip")
    transitions: List[TransitionEntry] = Field(default_factory=list)

    def to_state(self) -> State:
        return State(self.name, animation_clip=self.animation_clip, speed=self.speed)


class StateMachineDocument(_DocumentModel):
    """Native dialect document: a flat list of states."""

    states: List[StateEntry] = Field(default_factory=list)
