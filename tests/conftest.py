"""Pytest fixtures for animstate tests."""

import pytest
from pathlib import Path


@pytest.fixture
def examples_dir() -> Path:
    """Get path to examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def character_path(examples_dir: Path) -> Path:
    """Get path to the sample native-dialect character graph."""
    return examples_dir / "character" / "character.json"


@pytest.fixture
def unity_export_path(examples_dir: Path) -> Path:
    """Get path to the sample foreign-dialect export."""
    return examples_dir / "character" / "unity_export.json"


@pytest.fixture
def idle_run_document():
    """Native document with Idle --run--> Run and Run --stop--> Idle."""
    return {
        "states": [
            {
                "name": "Idle",
                "speed": 1.0,
                "animationClip": "idle",
                "transitions": [
                    {
                        "destinationState": "Run",
                        "offset": 0.1,
                        "duration": 0.25,
                        "exitTime": 0.9,
                        "conditions": [{"parameter": "run", "mode": 1}],
                    },
                    {
                        "destinationState": "Run",
                        "conditions": [],
                    },
                ],
            },
            {
                "name": "Run",
                "speed": 1.5,
                "animationClip": "run",
                "transitions": [
                    {
                        "destinationState": "Idle",
                        "conditions": [{"parameter": "stop"}, {"parameter": "ignored"}],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def loader():
    """Loader with default settings."""
    from animstate.graph.loader import GraphLoader

    return GraphLoader()


@pytest.fixture
def graph():
    """Hand-built graph: Idle --run--> Run --jump--> Jump --land--> Idle."""
    from animstate.graph.model import StateGraph, Transition

    g = StateGraph()
    for name in ("Idle", "Run", "Jump"):
        g.add_state(name)
    g.add_transition(Transition("run", "Idle", "Run"))
    g.add_transition(Transition("jump", "Run", "Jump"))
    g.add_transition(Transition("land", "Jump", "Idle"))
    return g
