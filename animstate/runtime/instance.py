"""
State machine instance.

One live cursor over a shared StateGraph. The current state only moves
when a trigger fires, and an optional observer hears about each move.
"""

import logging
from typing import Callable, Optional

from animstate.errors import UnknownStateError
from animstate.graph.model import State, StateGraph

logger = logging.getLogger(__name__)

# (instance, from_state, trigger, to_state)
TransitionObserver = Callable[["StateMachineInstance", str, str, str], None]


class StateMachineInstance:
    """
    Trigger-driven cursor over a state graph.

    The graph is shared, never copied or mutated, so several instances can
    run over the same definition.

    Example:
        ```python
        machine = StateMachineInstance(graph, "Idle")
        machine.observer = lambda m, old, trigger, new: print(old, "->", new)

        if machine.fire_trigger("run"):
            clip = machine.current_state.animation_clip
        ```
    """

    def __init__(
        self,
        graph: StateGraph,
        initial_state: str,
        observer: Optional[TransitionObserver] = None,
    ):
        state = graph.get_state(initial_state)
        if state is None:
            raise UnknownStateError(
                initial_state, f"Initial state '{initial_state}' is not in the graph"
            )

        self._graph = graph
        self._current: State = state
        self.observer = observer

    def __repr__(self) -> str:
        return f"StateMachineInstance(current_state={self._current.name!r})"

    @property
    def graph(self) -> StateGraph:
        return self._graph

    @property
    def current_state(self) -> State:
        return self._current

    @property
    def current_state_name(self) -> str:
        return self._current.name

    def can_fire(self, trigger: str) -> bool:
        return self._current.can_transition(trigger)

    def fire_trigger(self, trigger: str) -> bool:
        """
        Fire a trigger on the current state.

        The observer, if any, is called after the current state has moved.

        Args:
            trigger: Trigger name

        Returns:
            False if the current state has no transition for the trigger

        Raises:
            UnknownStateError: If the transition's destination is not in the
                graph (only possible for graphs loaded without target
                validation)
        """
        transition = self._current.get_transition(trigger)
        if transition is None:
            logger.debug(
                f"Trigger '{trigger}' not handled in state '{self._current.name}'"
            )
            return False

        destination = self._graph.get_state(transition.to_state)
        if destination is None:
            raise UnknownStateError(
                transition.to_state,
                f"Transition '{transition.from_state}' --{trigger}--> "
                f"'{transition.to_state}' points at an unknown state",
            )

        old_state_name = self._current.name
        self._current = destination
        logger.debug(f"'{old_state_name}' --{trigger}--> '{destination.name}'")

        if self.observer is not None:
            self.observer(self, old_state_name, trigger, destination.name)
        return True

    def advance(self, delta_time: float) -> None:
        """Per-tick hook. State changes are trigger-driven, so nothing advances here."""
