import logging
from PySide6 import QtCore

from wheel_data.constants import FRAME_INTERVAL_MS
from wheel_engine.drivers import AnimationDriver, DoneCallback, UpdateCallback

logger = logging.getLogger(__name__)


class QtAnimationDriver(AnimationDriver):
    """Hands the whole interpolation to a QVariantAnimation."""

    def __init__(
        self,
        on_update: UpdateCallback | None = None,
        easing: QtCore.QEasingCurve.Type = QtCore.QEasingCurve.Type.OutCubic,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(on_update)
        self.animation: QtCore.QVariantAnimation = QtCore.QVariantAnimation(parent)
        self.animation.setEasingCurve(easing)
        self.animation.valueChanged.connect(self._on_value_changed)
        self.animation.finished.connect(self._on_finished)
        self._pending: DoneCallback | None = None

    def animate_to(self, target: float, duration_ms: int, on_done: DoneCallback) -> None:
        self.cancel()
        if duration_ms <= 0:
            self._set_value(target)
            on_done()
            return
        self._pending = on_done
        self.animation.setStartValue(float(self._value))
        self.animation.setEndValue(float(target))
        self.animation.setDuration(int(duration_ms))
        self.animation.start()

    def cancel(self) -> None:
        self._pending = None
        if self.animation.state() != QtCore.QAbstractAnimation.State.Stopped:
            # stop() short of the end value does not emit finished
            self.animation.stop()

    def _on_value_changed(self, value) -> None:
        self._set_value(float(value))

    def _on_finished(self) -> None:
        done: DoneCallback | None = self._pending
        self._pending = None
        if done is None:
            return
        self._set_value(float(self.animation.endValue()))
        done()


class FrameTimerDriver(AnimationDriver):
    """Steps the angle itself on a frame timer, easing against elapsed time."""

    def __init__(
        self,
        on_update: UpdateCallback | None = None,
        interval_ms: int = FRAME_INTERVAL_MS,
        easing: QtCore.QEasingCurve.Type = QtCore.QEasingCurve.Type.OutCubic,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(on_update)
        self._anim_timer: QtCore.QTimer = QtCore.QTimer(parent)
        self._anim_timer.setInterval(interval_ms)
        self._anim_timer.timeout.connect(self._on_animate)
        self._clock: QtCore.QElapsedTimer = QtCore.QElapsedTimer()
        self._easing: QtCore.QEasingCurve = QtCore.QEasingCurve(easing)
        self._start: float = 0.0
        self._target: float = 0.0
        self._duration: int = 0
        self._pending: DoneCallback | None = None

    @property
    def running(self) -> bool:
        return self._anim_timer.isActive()

    def animate_to(self, target: float, duration_ms: int, on_done: DoneCallback) -> None:
        self.cancel()
        if duration_ms <= 0:
            self._set_value(target)
            on_done()
            return
        self._start = self._value
        self._target = float(target)
        self._duration = int(duration_ms)
        self._pending = on_done
        self._clock.start()
        self._anim_timer.start()
        logger.debug(
            "Frame timer: %.1f -> %.1f over %d ms", self._start, self._target, self._duration
        )

    def cancel(self) -> None:
        self._pending = None
        self._anim_timer.stop()

    def _on_animate(self) -> None:
        if self._pending is None:
            self._anim_timer.stop()
            return

        progress: float = min(1.0, self._clock.elapsed() / self._duration)
        if progress < 1.0:
            eased: float = self._easing.valueForProgress(progress)
            self._set_value(self._start + (self._target - self._start) * eased)
            return

        self._anim_timer.stop()
        self._set_value(self._target)
        done: DoneCallback = self._pending
        self._pending = None
        done()
