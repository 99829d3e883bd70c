"""Single-consumer delivery of gaze samples.

The estimator adapter pushes samples with :meth:`GazeStream.emit`; exactly
one listener receives them. Registering a listener replaces the previous one.
"""
from __future__ import annotations

from typing import Callable, Optional

from .domain.samples import GazeSample

SampleListener = Callable[[GazeSample], object]


class Subscription:
    """Handle of the active listener; cancelling is idempotent."""

    def __init__(self, stream: "GazeStream", listener: SampleListener) -> None:
        self._stream = stream
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._stream.listener is self._listener

    def cancel(self) -> None:
        if self.active:
            self._stream.clear_listener()


class GazeStream:
    def __init__(self) -> None:
        self.listener: Optional[SampleListener] = None

    def set_listener(self, listener: SampleListener) -> Subscription:
        self.listener = listener
        return Subscription(self, listener)

    def clear_listener(self) -> None:
        self.listener = None

    def emit(self, sample: GazeSample) -> None:
        if self.listener is not None:
            self.listener(sample)
