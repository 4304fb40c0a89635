"""
Runtime module.

- StateMachineInstance: trigger-driven cursor over a shared StateGraph
- StateMachineRunner: ticks running instances once per update pulse
- UpdatePulse: frame pulse a runner attaches to
"""

from animstate.runtime.instance import (
    StateMachineInstance,
    TransitionObserver,
)
from animstate.runtime.pulse import UpdatePulse
from animstate.runtime.runner import StateMachineRunner

__all__ = [
    "StateMachineInstance",
    "TransitionObserver",
    "StateMachineRunner",
    "UpdatePulse",
]
