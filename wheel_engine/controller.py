from __future__ import annotations

import logging
import math
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Callable

from wheel_data.constants import POINTER_OFFSET_DEG, RESET_DURATION_MS, TURNS_PER_SECOND

from .drivers import AnimationDriver
from .planner import ONE_TURN, extra_turns_for, plan_rotation
from .segments import Segment, compute_segments
from .selector import RandomSource, select

if TYPE_CHECKING:
    from wheel_data.config import WheelConfig

logger = logging.getLogger(__name__)


class SpinState(Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    SETTLED = "settled"


class SpinController:
    """Owns the wheel angle and spin state; everything else only reads them."""

    def __init__(
        self,
        config: WheelConfig,
        driver: AnimationDriver,
        on_winner: Callable[[int], None] | None = None,
        rng: RandomSource | None = None,
        turns_per_second: float = TURNS_PER_SECOND,
        pointer_offset: float = POINTER_OFFSET_DEG,
        reset_duration_ms: int = RESET_DURATION_MS,
        start_angle: float = 0.0,
    ) -> None:
        self._config: WheelConfig = config
        self._driver: AnimationDriver = driver
        self.on_winner: Callable[[int], None] | None = on_winner
        self._rng: RandomSource | None = rng
        self.turns_per_second: float = turns_per_second
        self.pointer_offset: float = pointer_offset
        self.reset_duration_ms: int = reset_duration_ms

        self._segments: tuple[Segment, ...] = self._prepare_segments()
        self._state: SpinState = SpinState.IDLE
        self._angle: float = start_angle
        self._spin_start: float = start_angle
        self._winner: int | None = None
        self._generation: int = 0
        self._listeners: list[Callable[[SpinController], None]] = []

    # -------------------------
    # Read-only view
    # -------------------------
    @property
    def config(self) -> WheelConfig:
        return self._config

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def state(self) -> SpinState:
        return self._state

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def winner(self) -> int | None:
        return self._winner

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: Callable[[SpinController], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[SpinController], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -------------------------
    # Lifecycle
    # -------------------------
    def spin(self) -> int | None:
        if self._state is not SpinState.IDLE:
            logger.debug("Spin ignored while %s", self._state.value)
            return None

        winner: int = select(
            self._config.effective_weights,
            forced_index=self._config.winner,
            rng=self._rng,
            uniform_fallback=self._config.uniform_fallback,
        )
        turns: int = extra_turns_for(self._config.duration_ms, self.turns_per_second)
        target: float = plan_rotation(
            self._angle, len(self._segments), winner, turns, self.pointer_offset
        )
        label: str = self._segments[winner].label

        self._generation += 1
        token: int = self._generation
        self._spin_start = self._angle
        self._angle = target
        self._winner = winner
        self._set_state(SpinState.SPINNING)
        logger.info(
            "Spin #%d: winner %d (%s), target %.1f deg over %d ms",
            token,
            winner,
            label,
            target,
            self._config.duration_ms,
        )
        # an immediate driver may complete inside this call
        self._driver.animate_to(
            target, self._config.duration_ms, partial(self._on_spin_done, token)
        )
        return winner

    def reset(self) -> bool:
        if self._state is SpinState.IDLE:
            return False

        # an interrupted spin never reached its target; settle from where it stopped
        resting: float = self._angle
        if self._state is SpinState.SPINNING:
            resting = max(self._spin_start, self._driver.value)

        self._generation += 1
        self._driver.cancel()
        self._winner = None
        self._segments = self._prepare_segments()
        # back to the upright orientation, still turning forward
        neutral: float = math.ceil(resting / ONE_TURN) * ONE_TURN
        self._angle = neutral
        self._set_state(SpinState.IDLE)
        logger.info("Wheel reset to %.1f deg", neutral)
        self._driver.animate_to(neutral, self.reset_duration_ms, self._on_reset_done)
        return True

    def _on_spin_done(self, token: int) -> None:
        if token != self._generation or self._state is not SpinState.SPINNING:
            logger.debug(
                "Dropping completion for spin #%d (current #%d, %s)",
                token,
                self._generation,
                self._state.value,
            )
            return
        self._set_state(SpinState.SETTLED)
        winner: int = self._winner
        logger.info("Spin #%d settled on %d", token, winner)
        if self.on_winner is not None:
            self.on_winner(winner)

    def _on_reset_done(self) -> None:
        logger.debug("Reset animation finished")

    def _prepare_segments(self) -> tuple[Segment, ...]:
        return compute_segments(
            self._config.rewards, self._config.colors, self._config.image_sources
        )

    def _set_state(self, state: SpinState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(self)
