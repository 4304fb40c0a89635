"""
animstate CLI entry point.

Commands:
- animstate validate: Validate a state machine file
- animstate info: Show states and transitions of a state machine file
- animstate fire: Fire triggers on a state machine and show the transitions
- animstate version: Show version information
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.text import Text

from animstate import __version__
from animstate.cli_ui import (
    config_panel,
    console,
    dim,
    error,
    key_value,
    state_table,
    success,
    transition_table,
    warning,
)
from animstate.errors import AnimStateError, GraphLoadError, UnknownStateError
from animstate.graph.model import StateGraph, Transition

DIALECT_CHOICE = click.Choice(["auto", "native", "foreign"])


def setup_logging(debug: bool = False, log_level: str = "INFO") -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else getattr(logging, log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _load_settings(config: Optional[Path], debug: bool):
    from animstate.config.settings import AnimStateSettings

    settings = AnimStateSettings(_config_path=str(config) if config else None)
    setup_logging(debug or settings.debug, settings.log_level)
    return settings


def config_option(fn):
    return click.option(
        "--config",
        "-c",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Path to animstate.yaml config file",
    )(fn)


def dialect_option(fn):
    return click.option(
        "--dialect",
        "-d",
        type=DIALECT_CHOICE,
        default=None,
        help="Document dialect (default: from config, else auto)",
    )(fn)


def debug_option(fn):
    return click.option(
        "--debug/--no-debug",
        default=False,
        help="Enable debug logging",
    )(fn)


@click.group()
@click.version_option(version=__version__, prog_name="animstate")
def main() -> None:
    """animstate - Data-driven state machines for animation control.

    Load state graphs from JSON and drive them with named triggers.
    """
    pass


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, path_type=Path),
)
@dialect_option
@config_option
@debug_option
def validate(path: Path, dialect: Optional[str], config: Optional[Path], debug: bool) -> None:
    """Validate a state machine file.

    Checks that the document loads and every transition target exists.

    Example:
        animstate validate character.json --dialect foreign
    """
    try:
        settings = _load_settings(config, debug)
        loader = settings.create_loader()
        document = loader.read_file(path)
        resolved = loader.resolve_dialect(document, dialect)
        graph = StateGraph()
        if not loader.load(graph, document, resolved):
            raise GraphLoadError(f"No loadable {resolved} state machine in {path}")

        config_panel(
            "✓ Valid State Machine",
            {
                "File": str(path),
                "Dialect": resolved,
                "States": str(graph.state_count()),
                "Transitions": str(graph.transition_count()),
                "Targets checked": str(loader.validate_targets),
            },
        )

        dangling = graph.find_dangling_transitions()
        for t in dangling:
            warning(f"'{t.from_state}' --{t.trigger}--> unknown state '{t.to_state}'")

    except FileNotFoundError:
        error(f"File not found: {path}")
        raise SystemExit(1)
    except (AnimStateError, ValueError) as e:
        error(f"Validation error: {e}")
        raise SystemExit(1)


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show transition timing",
)
@dialect_option
@config_option
def info(path: Path, verbose: bool, dialect: Optional[str], config: Optional[Path]) -> None:
    """Show detailed state machine information.

    Displays states with their clips and speeds, and transitions.

    Example:
        animstate info character.json --verbose
    """
    try:
        settings = _load_settings(config, debug=False)
        graph = settings.create_loader().parse_file(path, dialect=dialect)
    except (AnimStateError, ValueError) as e:
        error(str(e))
        raise SystemExit(1)

    console.print()
    console.print(
        Text.assemble(
            (path.name, "bold"),
            (f"  {graph.state_count()} states", "dim"),
        )
    )

    state_table(graph.states.values())

    transitions = list(graph.iter_transitions())
    if transitions:
        transition_table(transitions, verbose=verbose)
    else:
        dim("No transitions")

    console.print()


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, path_type=Path),
)
@click.argument("triggers", nargs=-1)
@click.option(
    "--initial",
    "-i",
    type=str,
    required=True,
    help="Initial state name",
)
@click.option(
    "--frames",
    "-f",
    type=click.IntRange(min=0),
    default=1,
    help="Frames to run after each trigger (default: 1)",
)
@dialect_option
@config_option
@debug_option
def fire(
    path: Path,
    triggers: tuple[str, ...],
    initial: str,
    frames: int,
    dialect: Optional[str],
    config: Optional[Path],
    debug: bool,
) -> None:
    """Fire TRIGGERS in order on a state machine loaded from PATH.

    The machine runs on a runner attached to a fixed-rate update pulse.

    Example:
        animstate fire character.json --initial Idle run jump land
    """
    from animstate.runtime import StateMachineInstance, StateMachineRunner, UpdatePulse

    fired: list[Transition] = []
    rejected: list[tuple[str, str]] = []

    def record(machine, old_state: str, trigger: str, new_state: str) -> None:
        fired.append(Transition(trigger, old_state, new_state))

    try:
        settings = _load_settings(config, debug)
        graph = settings.create_loader().parse_file(path, dialect=dialect)
    except (AnimStateError, ValueError) as e:
        error(str(e))
        raise SystemExit(1)

    try:
        machine = StateMachineInstance(graph, initial, observer=record)
    except UnknownStateError as e:
        error(str(e), hint=f"Known states: {', '.join(graph.state_names) or 'none'}")
        raise SystemExit(1)

    pulse = UpdatePulse()
    runner = StateMachineRunner()
    runner.start(machine)
    runner.attach(pulse)

    try:
        for trigger in triggers:
            if not machine.fire_trigger(trigger):
                rejected.append((machine.current_state_name, trigger))
            pulse.run(frames, settings.runner.timestep)
    except UnknownStateError as e:
        error(str(e), hint="Load with target validation enabled to catch this early")
        raise SystemExit(1)
    finally:
        runner.detach()

    if fired:
        transition_table(fired, numbered=True)
    for state_name, trigger in rejected:
        warning(f"Trigger '{trigger}' not handled in state '{state_name}'")

    console.print()
    key_value("Final state", machine.current_state_name)
    clip = machine.current_state.animation_clip
    if clip:
        key_value("Clip", f"{clip} (speed {machine.current_state.speed:g})")
    success(f"Fired {len(fired)} of {len(triggers)} triggers")


@main.command()
def version() -> None:
    """Show version information."""
    console.print(
        Text.assemble(
            ("animstate", "bold"),
            (f" v{__version__}", "dim"),
        )
    )


if __name__ == "__main__":
    main()
