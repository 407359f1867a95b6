import logging
import math
from PySide6 import QtCore, QtGui, QtWidgets

from wheel_data import RESET_DURATION_MS, WheelConfig
from wheel_engine import AnimationDriver, Segment, SpinController, SpinState, segment_at

from .animation import FrameTimerDriver, QtAnimationDriver

logger = logging.getLogger(__name__)

IMAGE_SIZE = 50
LABEL_FONT_SIZE = 15


def make_driver(kind: str, parent: QtCore.QObject | None = None) -> AnimationDriver:
    if kind == "animation":
        return QtAnimationDriver(parent=parent)
    if kind == "timer":
        return FrameTimerDriver(parent=parent)
    raise ValueError(f"unknown animation driver {kind!r}")


class WheelWidget(QtWidgets.QWidget):
    spin_finished: QtCore.Signal = QtCore.Signal(int)
    state_changed: QtCore.Signal = QtCore.Signal(object)

    def __init__(
        self,
        config: WheelConfig,
        parent: QtWidgets.QWidget | None = None,
        driver: AnimationDriver | None = None,
        rng=None,
    ) -> None:
        super().__init__(parent)
        self.driver: AnimationDriver = driver or QtAnimationDriver(parent=self)
        self.driver.on_update = self._on_rotation
        self.rotation: float = self.driver.value
        self._rng = rng
        self._pixmaps: dict[int, QtGui.QPixmap] = {}
        self.controller: SpinController = self._build_controller(config)
        self.setMinimumSize(420, 420)

    @property
    def config(self) -> WheelConfig:
        return self.controller.config

    @property
    def state(self) -> SpinState:
        return self.controller.state

    def spin(self) -> int | None:
        return self.controller.spin()

    def reset(self) -> bool:
        return self.controller.reset()

    def set_config(self, config: WheelConfig) -> None:
        old: SpinController = self.controller
        old.unsubscribe(self._on_controller_changed)
        old.on_winner = None
        self.driver.cancel()
        self.controller = self._build_controller(config, start_angle=old.angle)
        if self.driver.value != old.angle:
            self.driver.animate_to(old.angle, RESET_DURATION_MS, lambda: None)
        self.state_changed.emit(self.controller.state)
        self.update()

    def wedge_under_pointer(self) -> Segment:
        segments: tuple[Segment, ...] = self.controller.segments
        idx: int = segment_at(
            self.rotation, len(segments), self.controller.pointer_offset
        )
        return segments[idx]

    def _build_controller(
        self, config: WheelConfig, start_angle: float = 0.0
    ) -> SpinController:
        controller = SpinController(
            config,
            self.driver,
            on_winner=self.spin_finished.emit,
            rng=self._rng,
            start_angle=start_angle,
        )
        controller.subscribe(self._on_controller_changed)
        self._load_images(controller.segments)
        return controller

    def _load_images(self, segments: tuple[Segment, ...]) -> None:
        self._pixmaps = {}
        for seg in segments:
            if seg.image is None:
                continue
            pixmap = QtGui.QPixmap(seg.image)
            if pixmap.isNull():
                logger.warning(
                    "Could not load image %s for segment %d, drawing its label",
                    seg.image,
                    seg.index,
                )
                continue
            self._pixmaps[seg.index] = pixmap

    def _on_rotation(self, value: float) -> None:
        self.rotation = value
        self.update()

    def _on_controller_changed(self, controller: SpinController) -> None:
        self.state_changed.emit(controller.state)
        self.update()

    # -------------------------
    # Painting
    # -------------------------
    def paintEvent(self, event) -> None:
        config: WheelConfig = self.controller.config
        segments: tuple[Segment, ...] = self.controller.segments

        painter: QtGui.QPainter = QtGui.QPainter(self)
        painter.setRenderHints(
            QtGui.QPainter.RenderHint.Antialiasing
            | QtGui.QPainter.RenderHint.TextAntialiasing
            | QtGui.QPainter.RenderHint.SmoothPixmapTransform
        )

        font: QtGui.QFont = QtGui.QFont()
        font.setPointSize(LABEL_FONT_SIZE)
        painter.setFont(font)

        rect: QtCore.QRect = self.rect()
        knob: int = config.knob_size
        size: int = min(rect.width(), rect.height()) - 20 - knob
        radius: float = size / 2
        inner: float = min(float(config.inner_radius), radius * 0.9)
        center: QtCore.QPointF = QtCore.QPointF(rect.center())

        # --- wheel body, rotated so wedges and labels move together ---
        painter.save()
        painter.translate(center)
        painter.rotate(self.rotation)

        wheel_rect: QtCore.QRectF = QtCore.QRectF(-radius, -radius, size, size)
        painter.setPen(
            QtGui.QPen(
                QtGui.QBrush(QtGui.QColor(config.border_color)), config.border_width
            )
        )
        painter.setBrush(QtGui.QBrush(QtGui.QColor(config.background_color)))
        painter.drawEllipse(wheel_rect)

        for seg in segments:
            painter.setBrush(QtGui.QBrush(QtGui.QColor(seg.color)))
            path: QtGui.QPainterPath = QtGui.QPainterPath()
            path.moveTo(0, 0)
            # Qt arcs run counter-clockwise from 3 o'clock; wedges run clockwise from 12
            path.arcTo(wheel_rect, 90.0 - seg.start_angle, -seg.angular_width)
            path.closeSubpath()
            painter.drawPath(path)

        if inner > 0:
            painter.setBrush(QtGui.QBrush(QtGui.QColor(config.background_color)))
            painter.drawEllipse(QtCore.QPointF(0, 0), inner, inner)

        for seg in segments:
            self._draw_label(painter, seg, radius, inner)

        painter.restore()

        # --- fixed pointer at the top ---
        top: float = center.y() - radius
        pointer: QtGui.QPolygonF = QtGui.QPolygonF(
            [
                QtCore.QPointF(center.x(), top + knob * 0.4),
                QtCore.QPointF(center.x() - knob * 0.8, top - knob * 1.2),
                QtCore.QPointF(center.x() + knob * 0.8, top - knob * 1.2),
            ]
        )
        painter.setPen(QtGui.QPen(QtCore.Qt.GlobalColor.black, 2))
        painter.setBrush(QtGui.QBrush(QtCore.Qt.GlobalColor.red))
        painter.drawPolygon(pointer)
        painter.end()

    def _draw_label(
        self, painter: QtGui.QPainter, seg: Segment, radius: float, inner: float
    ) -> None:
        config: WheelConfig = self.controller.config
        mid_rad: float = math.radians(seg.mid_angle)
        # clockwise from 12 o'clock, y grows downwards
        ux: float = math.sin(mid_rad)
        uy: float = -math.cos(mid_rad)

        painter.save()
        painter.setPen(QtGui.QPen(QtGui.QColor(config.text_color)))

        pixmap: QtGui.QPixmap | None = self._pixmaps.get(seg.index)
        if pixmap is not None or config.text_angle == "horizontal":
            centroid: float = (radius + inner) / 2.0
            painter.translate(ux * centroid, uy * centroid)
            painter.rotate(seg.mid_angle)
            if pixmap is not None:
                target: QtCore.QRectF = QtCore.QRectF(
                    -IMAGE_SIZE / 2, -IMAGE_SIZE / 2, IMAGE_SIZE, IMAGE_SIZE
                )
                painter.drawPixmap(target, pixmap, QtCore.QRectF(pixmap.rect()))
            else:
                box: QtCore.QRectF = QtCore.QRectF(-radius / 2, -20, radius, 40)
                painter.drawText(box, QtCore.Qt.AlignmentFlag.AlignCenter, seg.label)
            painter.restore()
            return

        # vertical: characters stacked from the rim towards the hub
        fm: QtGui.QFontMetrics = painter.fontMetrics()
        char_height: int = fm.height()
        step: int = char_height + max(1, int(char_height * 0.05))
        label_radius: float = radius * 0.82
        painter.translate(ux * label_radius, uy * label_radius)
        painter.rotate(seg.mid_angle)
        for j, ch in enumerate(seg.label):
            y: int = j * step
            w: int = max(fm.horizontalAdvance(ch), char_height) + 6
            h: int = char_height + 4
            rect_char: QtCore.QRectF = QtCore.QRectF(-w / 2.0, y - h / 2.0, w, h)
            painter.drawText(rect_char, QtCore.Qt.AlignmentFlag.AlignCenter, ch)
        painter.restore()
