"""
State graph module.

Contains the state machine definition components:
- Model: Transition, State, StateGraph
- Schema: document models for the native JSON dialect
- Loader: GraphLoader for native and foreign (layered) documents
"""

from animstate.graph.model import (
    Transition,
    State,
    StateGraph,
)
from animstate.graph.schema import (
    ConditionEntry,
    TransitionEntry,
    StateEntry,
    StateMachineDocument,
)
from animstate.graph.loader import (
    DIALECTS,
    GraphLoader,
    detect_dialect,
)

__all__ = [
    # Model
    "Transition",
    "State",
    "StateGraph",
    # Schema
    "ConditionEntry",
    "TransitionEntry",
    "StateEntry",
    "StateMachineDocument",
    # Loader
    "DIALECTS",
    "GraphLoader",
    "detect_dialect",
]
