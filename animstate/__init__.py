"""
animstate - Data-driven finite state machines for animation control.

A state graph (states, trigger-keyed transitions, clip and speed metadata)
is loaded from JSON and driven at runtime by named triggers. A runner ticks
running machines once per host frame.

Quick Start:
    ```python
    from animstate import GraphLoader, StateMachineInstance

    graph = GraphLoader().parse_file("character.json")
    machine = StateMachineInstance(graph, "Idle")
    machine.observer = lambda m, old, trigger, new: print(f"{old} -> {new}")

    machine.fire_trigger("run")
    machine.current_state.animation_clip  # "run"
    ```

    Driving machines from a frame loop:
    ```python
    from animstate import StateMachineRunner, UpdatePulse

    pulse = UpdatePulse()
    runner = StateMachineRunner()
    runner.start(machine)
    runner.attach(pulse)

    pulse.emit(1 / 60)  # once per frame
    ```
"""

__version__ = "0.1.0"

# Core configuration
from animstate.config.settings import AnimStateSettings

from animstate.errors import (
    AnimStateError,
    UnknownStateError,
    GraphLoadError,
    DanglingTransitionError,
)

# State graph
from animstate.graph import (
    Transition,
    State,
    StateGraph,
    GraphLoader,
)

# Runtime
from animstate.runtime import (
    StateMachineInstance,
    TransitionObserver,
    StateMachineRunner,
    UpdatePulse,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "AnimStateSettings",
    # Errors
    "AnimStateError",
    "UnknownStateError",
    "GraphLoadError",
    "DanglingTransitionError",
    # State graph
    "Transition",
    "State",
    "StateGraph",
    "GraphLoader",
    # Runtime
    "StateMachineInstance",
    "TransitionObserver",
    "StateMachineRunner",
    "UpdatePulse",
]
