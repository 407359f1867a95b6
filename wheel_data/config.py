from dataclasses import dataclass, fields
import json
import logging
import math
from pathlib import Path
from typing import Any, Mapping, Sequence

from wheel_engine.errors import InvalidConfiguration

from .constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_WIDTH,
    DEFAULT_COLORS,
    DEFAULT_DURATION_MS,
    DEFAULT_INNER_RADIUS,
    DEFAULT_KNOB_SIZE,
    DEFAULT_TEXT_ANGLE,
    DEFAULT_TEXT_COLOR,
    TEXT_ANGLES,
)

logger = logging.getLogger(__name__)

# option names used by the mobile widget -> WheelConfig fields
OPTION_ALIASES: dict[str, str] = {
    "duration": "duration_ms",
    "imageSources": "image_sources",
    "textColor": "text_color",
    "textAngle": "text_angle",
    "innerRadius": "inner_radius",
    "backgroundColor": "background_color",
    "borderColor": "border_color",
    "borderWidth": "border_width",
    "knobSize": "knob_size",
    "uniformFallback": "uniform_fallback",
}

# mobile widget options with no meaning on the desktop wheel
IGNORED_OPTIONS: frozenset[str] = frozenset(
    {"playButton", "onRef", "getWinner", "knobSource"}
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(name: str, value: Any, minimum: int) -> None:
    if not _is_int(value):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value}")


def _check_str(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidConfiguration(f"{name} must be a string, got {value!r}")


def _as_tuple(name: str, value: Any) -> tuple:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidConfiguration(f"{name} must be a list, got {value!r}")
    return tuple(value)


@dataclass(frozen=True)
class WheelConfig:
    rewards: tuple[str, ...]
    weights: tuple[float, ...] | None = None
    duration_ms: int = DEFAULT_DURATION_MS
    winner: int | None = None
    uniform_fallback: bool = True
    colors: tuple[str, ...] = tuple(DEFAULT_COLORS)
    image_sources: tuple[str | None, ...] = ()
    text_color: str = DEFAULT_TEXT_COLOR
    text_angle: str = DEFAULT_TEXT_ANGLE
    inner_radius: int = DEFAULT_INNER_RADIUS
    background_color: str = DEFAULT_BACKGROUND_COLOR
    border_color: str = DEFAULT_BORDER_COLOR
    border_width: int = DEFAULT_BORDER_WIDTH
    knob_size: int = DEFAULT_KNOB_SIZE

    def __post_init__(self) -> None:
        # frozen: normalise sequences through object.__setattr__
        rewards: tuple[str, ...] = tuple(str(r) for r in _as_tuple("rewards", self.rewards))
        if not rewards:
            raise InvalidConfiguration("at least one reward is required")
        object.__setattr__(self, "rewards", rewards)

        if self.weights is not None:
            weights: tuple[float, ...] = _as_tuple("weights", self.weights)
            if len(weights) != len(rewards):
                raise InvalidConfiguration(
                    f"got {len(weights)} weights for {len(rewards)} rewards"
                )
            for w in weights:
                if isinstance(w, bool) or not isinstance(w, (int, float)):
                    raise InvalidConfiguration(f"weight {w!r} is not a number")
                if not math.isfinite(w) or w < 0:
                    raise InvalidConfiguration(
                        f"weight {w!r} must be a finite non-negative number"
                    )
            object.__setattr__(self, "weights", weights)

        # whole milliseconds; 4000.0 from a JSON file is fine, 4000.5 is not
        duration: Any = self.duration_ms
        if isinstance(duration, float) and duration.is_integer():
            duration = int(duration)
        _check_int("duration", duration, 1)
        object.__setattr__(self, "duration_ms", duration)

        if self.winner is not None:
            _check_int("winner", self.winner, 0)
            if self.winner >= len(rewards):
                raise InvalidConfiguration(
                    f"winner {self.winner} is outside 0..{len(rewards) - 1}"
                )

        if not isinstance(self.uniform_fallback, bool):
            raise InvalidConfiguration(
                f"uniform_fallback must be true or false, got {self.uniform_fallback!r}"
            )

        if self.text_angle not in TEXT_ANGLES:
            raise InvalidConfiguration(
                f"text angle must be one of {TEXT_ANGLES}, got {self.text_angle!r}"
            )

        _check_int("inner_radius", self.inner_radius, 0)
        _check_int("border_width", self.border_width, 0)
        _check_int("knob_size", self.knob_size, 0)
        for name in ("text_color", "background_color", "border_color"):
            _check_str(name, getattr(self, name))

        colors: tuple[str, ...] = _as_tuple("colors", self.colors) or tuple(DEFAULT_COLORS)
        for color in colors:
            _check_str("colors entry", color)
        object.__setattr__(self, "colors", colors)

        images: tuple[str | None, ...] = _as_tuple("image_sources", self.image_sources)
        for image in images:
            if image is not None:
                _check_str("image_sources entry", image)
        object.__setattr__(self, "image_sources", images)

    @property
    def reward_count(self) -> int:
        return len(self.rewards)

    @property
    def effective_weights(self) -> tuple[float, ...]:
        if self.weights is None:
            return (1.0,) * len(self.rewards)
        return self.weights

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WheelConfig":
        known: set[str] = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name: str = OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            elif key in IGNORED_OPTIONS:
                logger.debug("Ignoring widget-only option %r", key)
            else:
                raise InvalidConfiguration(f"unknown wheel option {key!r}")
        if "rewards" not in kwargs:
            raise InvalidConfiguration("missing 'rewards'")
        return cls(**kwargs)


def load_config(path: str | Path) -> WheelConfig:
    config_file: Path = Path(path)
    if not config_file.exists():
        raise InvalidConfiguration(f"no config file at {config_file}")
    raw: str = config_file.read_text(encoding="utf-8")
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"{config_file} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{config_file} must hold a JSON object")
    return WheelConfig.from_dict(data)
