from .errors import InvalidConfiguration, InvalidWeights, WheelError
from .segments import Segment, compute_segments, segment_at
from .selector import select
from .planner import extra_turns_for, landing_angle, plan_rotation
from .drivers import AnimationDriver, ImmediateDriver
from .controller import SpinController, SpinState

__all__ = [
    "AnimationDriver",
    "ImmediateDriver",
    "InvalidConfiguration",
    "InvalidWeights",
    "Segment",
    "SpinController",
    "SpinState",
    "WheelError",
    "compute_segments",
    "extra_turns_for",
    "landing_angle",
    "plan_rotation",
    "segment_at",
    "select",
]
