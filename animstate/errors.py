"""Exception hierarchy for animstate."""

from typing import Iterable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from animstate.graph.model import Transition


class AnimStateError(Exception):
    """Base class for all animstate errors."""


class UnknownStateError(AnimStateError, LookupError):
    """Raised when a state name does not resolve in a state graph."""

    def __init__(self, state_name: str, message: str = ""):
        self.state_name = state_name
        super().__init__(message or f"Unknown state: '{state_name}'")


class GraphLoadError(AnimStateError, ValueError):
    """Raised when a state graph document cannot be loaded."""


class DanglingTransitionError(GraphLoadError):
    """Raised when loaded transitions point at states the graph does not have."""

    def __init__(self, transitions: Iterable["Transition"]):
        self.transitions: List["Transition"] = list(transitions)
        edges = ", ".join(
            f"{t.from_state} --{t.trigger}--> {t.to_state}" for t in self.transitions
        )
        super().__init__(f"Transition references unknown state: {edges}")
