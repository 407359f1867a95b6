from abc import ABC, abstractmethod
from typing import Callable

UpdateCallback = Callable[[float], None]
DoneCallback = Callable[[], None]


class AnimationDriver(ABC):
    """Moves the visible wheel angle; the controller only asks and waits.

    A driver delivers one `on_done` per `animate_to` call, and none for a
    request that was cancelled or replaced by a newer one.
    """

    def __init__(self, on_update: UpdateCallback | None = None) -> None:
        self.on_update: UpdateCallback | None = on_update
        self._value: float = 0.0

    @property
    def value(self) -> float:
        return self._value

    def _set_value(self, value: float) -> None:
        self._value = value
        if self.on_update is not None:
            self.on_update(value)

    @abstractmethod
    def animate_to(self, target: float, duration_ms: int, on_done: DoneCallback) -> None: ...

    @abstractmethod
    def cancel(self) -> None: ...


class ImmediateDriver(AnimationDriver):
    """Jumps straight to the target and completes before returning."""

    def animate_to(self, target: float, duration_ms: int, on_done: DoneCallback) -> None:
        self._set_value(target)
        on_done()

    def cancel(self) -> None:
        pass
