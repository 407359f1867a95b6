from .constants import (
    DEFAULT_COLORS,
    DEFAULT_DURATION_MS,
    DEMO_OPTIONS,
    FRAME_INTERVAL_MS,
    POINTER_OFFSET_DEG,
    RESET_DURATION_MS,
    TURNS_PER_SECOND,
)
from .config import WheelConfig, load_config

__all__ = [
    "WheelConfig",
    "load_config",
    "DEFAULT_COLORS",
    "DEFAULT_DURATION_MS",
    "DEMO_OPTIONS",
    "FRAME_INTERVAL_MS",
    "POINTER_OFFSET_DEG",
    "RESET_DURATION_MS",
    "TURNS_PER_SECOND",
]
