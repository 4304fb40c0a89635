"""
State machine runner.

Keeps the set of live StateMachineInstance objects and ticks each of them
once per host update pulse.
"""

import logging
from typing import Dict, List, Optional

from animstate.runtime.instance import StateMachineInstance
from animstate.runtime.pulse import UpdatePulse

logger = logging.getLogger(__name__)


class StateMachineRunner:
    """
    Registry of running state machines.

    Membership is idempotent: starting an instance twice keeps one entry,
    stopping an instance that is not running does nothing.

    Usage:
        runner = StateMachineRunner()
        runner.start(machine)
        runner.attach(pulse)   # one tick per pulse.emit()
        ...
        runner.detach()
    """

    def __init__(self) -> None:
        self._instances: Dict[StateMachineInstance, None] = {}
        self._pulse: Optional[UpdatePulse] = None

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, instance: object) -> bool:
        return instance in self._instances

    @property
    def instances(self) -> List[StateMachineInstance]:
        return list(self._instances)

    @property
    def is_attached(self) -> bool:
        return self._pulse is not None

    def start(self, instance: StateMachineInstance) -> None:
        if instance in self._instances:
            return
        self._instances[instance] = None
        logger.debug(f"Started {instance!r} ({len(self._instances)} running)")

    def stop(self, instance: StateMachineInstance) -> None:
        if instance not in self._instances:
            return
        del self._instances[instance]
        logger.debug(f"Stopped {instance!r} ({len(self._instances)} running)")

    def tick(self, delta_time: float) -> None:
        """
        Advance every running instance once.

        Instances started or stopped while the tick is in progress take
        effect from the next tick.
        """
        for instance in list(self._instances):
            instance.advance(delta_time)

    def attach(self, pulse: UpdatePulse) -> None:
        """
        Subscribe to a host pulse.

        Attaching to a different pulse detaches from the current one first.
        """
        if self._pulse is pulse:
            return
        if self._pulse is not None:
            self.detach()
        pulse.subscribe(self.tick)
        self._pulse = pulse
        logger.debug("Runner attached to update pulse")

    def detach(self) -> None:
        if self._pulse is None:
            return
        self._pulse.unsubscribe(self.tick)
        self._pulse = None
        logger.debug("Runner detached from update pulse")
