import logging
from PySide6 import QtCore, QtWidgets

from wheel_data import WheelConfig
from wheel_engine import AnimationDriver, SpinState

from .wheel import WheelWidget

logger = logging.getLogger(__name__)


class GameWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        config: WheelConfig,
        driver: AnimationDriver | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Prize Wheel")
        self.resize(600, 720)
        self.result_dlg: QtWidgets.QMessageBox | None = None
        self._build_ui(config, driver)

    # -------------------------
    # UI building
    # -------------------------
    def _build_ui(self, config: WheelConfig, driver: AnimationDriver | None) -> None:
        central: QtWidgets.QWidget = QtWidgets.QWidget()
        v: QtWidgets.QVBoxLayout = QtWidgets.QVBoxLayout()
        central.setLayout(v)

        self.wheel: WheelWidget = WheelWidget(config, self, driver=driver)
        self.wheel.spin_finished.connect(self.on_wheel_result)
        self.wheel.state_changed.connect(self.on_wheel_state)
        v.addWidget(self.wheel, 1)

        self.play_btn: QtWidgets.QPushButton = QtWidgets.QPushButton("Play")
        self.play_btn.setFixedHeight(48)
        self.play_btn.clicked.connect(self.do_spin)
        v.addWidget(self.play_btn, 0, QtCore.Qt.AlignmentFlag.AlignHCenter)

        self.setCentralWidget(central)

    # -------------------------
    # Actions
    # -------------------------
    def do_spin(self) -> None:
        self.wheel.spin()

    def on_wheel_state(self, state: SpinState) -> None:
        # the button only comes back once the wheel has been reset
        self.play_btn.setVisible(state is SpinState.IDLE)

    def on_wheel_result(self, index: int) -> None:
        label: str = self.wheel.config.rewards[index]
        logger.info("Winner: %d (%s)", index, label)
        self.result_dlg = QtWidgets.QMessageBox(
            QtWidgets.QMessageBox.Icon.Information,
            "Got one",
            f"It is at index {index}",
            QtWidgets.QMessageBox.StandardButton.Cancel,
            self,
        )
        self.result_dlg.setInformativeText(label)
        # any way of closing the dialog resets the wheel
        self.result_dlg.finished.connect(self.on_result_closed)
        self.result_dlg.open()

    def on_result_closed(self, _result: int) -> None:
        self.result_dlg = None
        self.wheel.reset()
