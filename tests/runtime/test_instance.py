"""Tests for StateMachineInstance."""

from unittest.mock import MagicMock

import pytest

from animstate.errors import UnknownStateError
from animstate.graph.loader import GraphLoader
from animstate.graph.model import StateGraph
from animstate.runtime.instance import StateMachineInstance


class TestStateMachineInstance:
    """Tests for StateMachineInstance."""

    @pytest.fixture
    def machine(self, graph):
        """Create an instance in Idle with a mock observer."""
        return StateMachineInstance(graph, "Idle", observer=MagicMock())

    def test_initial_state(self, machine):
        assert machine.current_state_name == "Idle"
        assert machine.current_state.name == "Idle"

    def test_unknown_initial_state(self, graph):
        with pytest.raises(UnknownStateError) as exc_info:
            StateMachineInstance(graph, "Sky")

        assert exc_info.value.state_name == "Sky"
        assert isinstance(exc_info.value, LookupError)

    def test_fire_trigger(self, machine):
        """Test a successful fire moves the cursor and notifies once."""
        assert machine.fire_trigger("run") is True

        assert machine.current_state_name == "Run"
        machine.observer.assert_called_once_with(machine, "Idle", "run", "Run")

    def test_fire_unknown_trigger(self, machine):
        """Test an unhandled trigger changes nothing and notifies nobody."""
        assert machine.fire_trigger("jump") is False

        assert machine.current_state_name == "Idle"
        machine.observer.assert_not_called()

    def test_observer_sees_new_state(self, graph):
        """Test that notification happens after the state has moved."""
        seen = []

        def observer(instance, old, trigger, new):
            seen.append((instance.current_state_name, old, trigger, new))

        machine = StateMachineInstance(graph, "Idle", observer=observer)
        machine.fire_trigger("run")

        assert seen == [("Run", "Idle", "run", "Run")]

    def test_cycle(self, machine):
        for trigger in ("run", "jump", "land"):
            assert machine.fire_trigger(trigger) is True

        assert machine.current_state_name == "Idle"
        assert machine.observer.call_count == 3

    def test_no_observer(self, graph):
        machine = StateMachineInstance(graph, "Idle")

        assert machine.fire_trigger("run") is True
        assert machine.current_state_name == "Run"

    def test_clear_observer(self, machine):
        observer = machine.observer
        machine.observer = None

        machine.fire_trigger("run")

        observer.assert_not_called()

    def test_can_fire(self, machine):
        assert machine.can_fire("run") is True
        assert machine.can_fire("land") is False

    def test_instances_share_graph(self, graph):
        first = StateMachineInstance(graph, "Idle")
        second = StateMachineInstance(graph, "Idle")

        first.fire_trigger("run")

        assert first.graph is second.graph
        assert first.current_state_name == "Run"
        assert second.current_state_name == "Idle"

    def test_advance_does_not_move(self, machine):
        machine.advance(1.0)

        assert machine.current_state_name == "Idle"
        machine.observer.assert_not_called()

    def test_dangling_destination_raises(self):
        """Test firing into a state that was never loaded."""
        graph = StateGraph()
        GraphLoader(validate_targets=False).load_json(
            graph,
            {
                "states": [
                    {
                        "name": "Idle",
                        "transitions": [
                            {"destinationState": "Gone", "conditions": [{"parameter": "go"}]}
                        ],
                    }
                ]
            },
        )
        observer = MagicMock()
        machine = StateMachineInstance(graph, "Idle", observer=observer)

        with pytest.raises(UnknownStateError, match="Gone"):
            machine.fire_trigger("go")

        assert machine.current_state_name == "Idle"
        observer.assert_not_called()


class TestLoadedGraph:
    """Instances over graphs loaded from documents."""

    def test_load_with_transition(self, loader, idle_run_document):
        graph = StateGraph()
        loader.load_json(graph, idle_run_document)
        machine = StateMachineInstance(graph, "Idle")

        assert machine.fire_trigger("run") is True
        assert machine.current_state_name == "Run"
        assert machine.current_state.animation_clip == "run"
        assert machine.current_state.speed == 1.5
