"""
Drive a character's animation state machine from a frame loop.

Loads character.json, runs one state machine per character on a shared
graph, and prints each transition with the clip the host should play.

Usage:
    python drive_character.py
"""

from pathlib import Path

from animstate import (
    AnimStateSettings,
    StateMachineInstance,
    StateMachineRunner,
    UpdatePulse,
)

HERE = Path(__file__).resolve().parent


def on_transition(machine: StateMachineInstance, old: str, trigger: str, new: str) -> None:
    state = machine.current_state
    print(f"  {old} --{trigger}--> {new}  (play {state.animation_clip} x{state.speed:g})")


def main() -> None:
    settings = AnimStateSettings(_config_path=str(HERE / "animstate.yaml"))
    graph = settings.create_loader().parse_file(HERE / "character.json")

    # Two characters share one graph
    hero = StateMachineInstance(graph, "Idle", observer=on_transition)
    sidekick = StateMachineInstance(graph, "Idle", observer=on_transition)

    pulse = UpdatePulse()
    runner = StateMachineRunner()
    runner.start(hero)
    runner.start(sidekick)
    runner.attach(pulse)

    script = [(hero, "walk"), (sidekick, "jump"), (hero, "jump"), (sidekick, "land"), (hero, "land")]
    for machine, trigger in script:
        print(f"fire '{trigger}'")
        if not machine.fire_trigger(trigger):
            print(f"  ignored in state {machine.current_state_name}")
        pulse.run(10, settings.runner.timestep)

    runner.detach()
    print(f"hero: {hero.current_state_name}, sidekick: {sidekick.current_state_name}")


if __name__ == "__main__":
    main()
