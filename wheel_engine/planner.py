import math

from wheel_data.constants import POINTER_OFFSET_DEG, TURNS_PER_SECOND

from .errors import InvalidConfiguration

ONE_TURN = 360.0


def extra_turns_for(duration_ms: int, turns_per_second: float = TURNS_PER_SECOND) -> int:
    if duration_ms <= 0:
        raise InvalidConfiguration(f"duration must be positive, got {duration_ms}")
    return max(1, int(math.floor(duration_ms / 1000.0 * turns_per_second)))


def landing_angle(
    segment_count: int, winner_index: int, pointer_offset: float = POINTER_OFFSET_DEG
) -> float:
    """Wheel angle, modulo one turn, that puts the winner's centre under the pointer."""
    width: float = ONE_TURN / segment_count
    return (pointer_offset - (winner_index * width + width / 2.0)) % ONE_TURN


def plan_rotation(
    current_angle: float,
    segment_count: int,
    winner_index: int,
    extra_turns: int,
    pointer_offset: float = POINTER_OFFSET_DEG,
) -> float:
    """Absolute angle the wheel must turn to so that `winner_index` stops under the pointer.

    The result is always ahead of `current_angle` by at least `extra_turns`
    whole revolutions, so consecutive spins keep turning forward.
    """
    if segment_count < 1:
        raise InvalidConfiguration("a wheel needs at least one segment")
    if not 0 <= winner_index < segment_count:
        raise InvalidConfiguration(
            f"winner {winner_index} is outside 0..{segment_count - 1}"
        )
    if extra_turns < 0:
        raise InvalidConfiguration(f"extra turns must be >= 0, got {extra_turns}")

    residue: float = landing_angle(segment_count, winner_index, pointer_offset)
    floor_angle: float = current_angle + extra_turns * ONE_TURN

    # smallest angle >= floor_angle that lands on the residue
    target: float = floor_angle - (floor_angle % ONE_TURN) + residue
    if target < floor_angle:
        target += ONE_TURN
    if target <= current_angle:
        target += ONE_TURN
    return target
