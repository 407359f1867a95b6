import math
from dataclasses import dataclass
from typing import Sequence

from wheel_data.constants import DEFAULT_COLORS

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class Segment:
    index: int
    label: str
    angular_width: float
    color: str = DEFAULT_COLORS[0]
    image: str | None = None

    @property
    def start_angle(self) -> float:
        return self.index * self.angular_width

    @property
    def end_angle(self) -> float:
        return (self.index + 1) * self.angular_width

    @property
    def mid_angle(self) -> float:
        return self.start_angle + self.angular_width / 2.0


def compute_segments(
    labels: Sequence[str],
    colors: Sequence[str] | None = None,
    images: Sequence[str | None] | None = None,
) -> tuple[Segment, ...]:
    """Equal-width segments in reward order.

    Weights never reach this function: they change the odds of a segment,
    not its size on screen.
    """
    n: int = len(labels)
    if n == 0:
        raise InvalidConfiguration("a wheel needs at least one reward")
    palette: Sequence[str] = colors or DEFAULT_COLORS
    images = images or ()
    width: float = 360.0 / n
    return tuple(
        Segment(
            index=i,
            label=str(label),
            angular_width=width,
            color=palette[i % len(palette)],
            image=images[i] if i < len(images) and images[i] else None,
        )
        for i, label in enumerate(labels)
    )


def segment_at(angle: float, count: int, pointer_offset: float = 0.0) -> int:
    """Index of the segment under the pointer when the wheel is at `angle`.

    The wheel turns clockwise by `angle`; segment 0 starts at the top at
    angle 0 and the pointer sits `pointer_offset` degrees clockwise of the top.
    """
    if count < 1:
        raise InvalidConfiguration("a wheel needs at least one segment")
    width: float = 360.0 / count
    local: float = (pointer_offset - angle) % 360.0
    return int(math.floor(local / width)) % count
