"""
State graph model.

Holds the in-memory definition of a state machine:
- Transition: one directed, trigger-keyed edge with timing metadata
- State: a named node owning its outgoing transitions
- StateGraph: the full set of named states

A graph is built (by hand or through GraphLoader) before any
StateMachineInstance binds to it. Instances only read it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """A directed edge fired by a named trigger.

    Timing fields are carried as data for the animation layer; they are
    not evaluated by the state machine.
    """

    trigger: str
    from_state: str
    to_state: str
    offset: float = 0.0
    duration: float = 0.0
    has_exit_time: bool = False
    exit_time: float = 0.0


class State:
    """
    A named node in a state graph.

    Transitions are keyed by trigger name; a state holds at most one
    transition per trigger.
    """

    def __init__(self, name: str, animation_clip: str = "", speed: float = 1.0):
        self.name = name
        self.animation_clip = animation_clip
        self.speed = speed
        self._transitions: Dict[str, Transition] = {}

    def __repr__(self) -> str:
        return (
            f"State(name={self.name!r}, animation_clip={self.animation_clip!r}, "
            f"speed={self.speed!r}, triggers={self.triggers!r})"
        )

    @property
    def transitions(self) -> Dict[str, Transition]:
        """Copy of the trigger -> transition mapping."""
        return dict(self._transitions)

    @property
    def triggers(self) -> List[str]:
        return list(self._transitions)

    def add_transition(self, transition: Transition) -> bool:
        """
        Add an outgoing transition.

        The destination is not checked here; StateGraph.add_transition does that.

        Returns:
            False if a transition with the same trigger already exists
        """
        if transition.trigger in self._transitions:
            return False
        self._transitions[transition.trigger] = transition
        return True

    def can_transition(self, trigger: str) -> bool:
        return trigger in self._transitions

    def get_transition(self, trigger: str) -> Optional[Transition]:
        return self._transitions.get(trigger)


class StateGraph:
    """
    The set of named states making up one state machine definition.

    Structural mutation reports failure through its return value and
    leaves the graph untouched:

        graph = StateGraph()
        graph.add_state("Idle")
        graph.add_state("Run")
        graph.add_transition(Transition("run", "Idle", "Run"))
        graph.can_transition("Idle", "run")  # True
    """

    def __init__(self) -> None:
        self._states: Dict[str, State] = {}

    def __contains__(self, state_name: object) -> bool:
        return state_name in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"StateGraph(states={self.state_names!r})"

    @property
    def state_names(self) -> List[str]:
        return list(self._states)

    @property
    def states(self) -> Dict[str, State]:
        """Copy of the name -> state mapping."""
        return dict(self._states)

    def add_state(self, state_name: str) -> bool:
        """
        Create an empty state.

        Args:
            state_name: Name of the new state

        Returns:
            False if a state with that name already exists
        """
        if state_name in self._states:
            return False
        self._states[state_name] = State(state_name)
        logger.debug(f"Added state '{state_name}'")
        return True

    def add_transition(self, transition: Transition) -> bool:
        """
        Add a transition to its source state.

        Both endpoints must already exist in this graph. The source state's
        duplicate-trigger rejection is propagated.

        Returns:
            True if the transition was added
        """
        source = self._states.get(transition.from_state)
        if source is None:
            return False
        if transition.to_state not in self._states:
            return False

        added = source.add_transition(transition)
        if added:
            logger.debug(
                f"Added transition '{transition.from_state}' "
                f"--{transition.trigger}--> '{transition.to_state}'"
            )
        return added

    def can_transition(self, state_name: str, trigger: str) -> bool:
        """Check whether `state_name` has a transition keyed by `trigger`."""
        state = self._states.get(state_name)
        if state is None:
            return False
        return state.can_transition(trigger)

    def state_count(self) -> int:
        return len(self._states)

    def transition_count(self) -> int:
        return sum(len(s.triggers) for s in self._states.values())

    def has_state(self, state_name: str) -> bool:
        return state_name in self._states

    def get_state(self, state_name: str) -> Optional[State]:
        """Get state by name."""
        return self._states.get(state_name)

    def iter_transitions(self) -> Iterator[Transition]:
        for state in self._states.values():
            yield from state.transitions.values()

    def find_dangling_transitions(self) -> List[Transition]:
        """Get transitions whose destination is not a state of this graph."""
        return [t for t in self.iter_transitions() if t.to_state not in self._states]

    def _put_state(self, state: State) -> None:
        # Loader path: replaces any existing state of the same name.
        self._states[state.name] = state
