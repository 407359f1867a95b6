from .animation import FrameTimerDriver, QtAnimationDriver
from .wheel import WheelWidget, make_driver
from .window import GameWindow

__all__ = [
    "FrameTimerDriver",
    "GameWindow",
    "QtAnimationDriver",
    "WheelWidget",
    "make_driver",
]
