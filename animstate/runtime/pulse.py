"""In-process update pulse: one emit per host frame."""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

PulseHandler = Callable[[float], None]


class UpdatePulse:
    """
    Frame pulse a StateMachineRunner can attach to.

    Hosts with their own frame loop call `emit(delta_time)` once per frame.
    """

    def __init__(self) -> None:
        self._handlers: List[PulseHandler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: PulseHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: PulseHandler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def is_subscribed(self, handler: PulseHandler) -> bool:
        return handler in self._handlers

    def emit(self, delta_time: float) -> None:
        """Call every subscriber once, over the subscribers present at emit time."""
        for handler in list(self._handlers):
            handler(delta_time)

    def run(self, frames: int, delta_time: float) -> None:
        """Emit `frames` pulses with a fixed timestep."""
        if frames < 0:
            raise ValueError("frames must be non-negative")
        logger.debug(f"Running {frames} frames at dt={delta_time:.4f}")
        for _ in range(frames):
            self.emit(delta_time)
