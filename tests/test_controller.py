"""Spin lifecycle: idle -> spinning -> settled -> idle, and stale completions."""

import random
import unittest

from wheel_data import WheelConfig
from wheel_engine import (
    AnimationDriver,
    ImmediateDriver,
    InvalidConfiguration,
    InvalidWeights,
    SpinController,
    SpinState,
    segment_at,
)


class ManualDriver(AnimationDriver):
    """Keeps every completion so the test decides when (and how often) it fires."""

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[tuple[float, int]] = []
        self.callbacks: list = []
        self.cancels = 0

    def animate_to(self, target, duration_ms, on_done) -> None:
        self.requests.append((target, duration_ms))
        self.callbacks.append(on_done)

    def cancel(self) -> None:
        self.cancels += 1

    def finish(self, i: int = -1) -> None:
        target, _ = self.requests[i]
        self._set_value(target)
        self.callbacks[i]()


class FixedRandom:
    def __init__(self, fraction: float) -> None:
        self.fraction = fraction

    def random(self) -> float:
        return self.fraction


def make_controller(rewards=("A", "B", "C"), driver=None, rng=None, **cfg):
    winners: list[int] = []
    driver = driver or ManualDriver()
    controller = SpinController(
        WheelConfig(rewards=rewards, **cfg),
        driver,
        on_winner=winners.append,
        rng=rng or FixedRandom(0.5),
    )
    return controller, driver, winners


class TestSpin(unittest.TestCase):

    def test_starts_idle(self):
        controller, _, _ = make_controller()
        self.assertIs(controller.state, SpinState.IDLE)
        self.assertEqual(controller.angle, 0.0)
        self.assertIsNone(controller.winner)
        self.assertEqual(len(controller.segments), 3)

    def test_spin_hands_target_and_duration_to_driver(self):
        controller, driver, winners = make_controller(duration_ms=4000)
        winner = controller.spin()

        self.assertEqual(winner, 1)
        self.assertIs(controller.state, SpinState.SPINNING)
        self.assertEqual(len(driver.requests), 1)
        target, duration = driver.requests[0]
        self.assertEqual(duration, 4000)
        self.assertEqual(controller.angle, target)
        self.assertGreaterEqual(target, 4 * 360)
        self.assertEqual(segment_at(target, 3), winner)
        self.assertEqual(winners, [])

    def test_completion_settles_and_reports_winner_once(self):
        controller, driver, winners = make_controller()
        controller.spin()
        driver.finish()

        self.assertIs(controller.state, SpinState.SETTLED)
        self.assertEqual(winners, [1])

        # duplicate completion signal
        driver.finish()
        self.assertEqual(winners, [1])
        self.assertIs(controller.state, SpinState.SETTLED)

    def test_spin_while_spinning_is_a_no_op(self):
        controller, driver, winners = make_controller()
        controller.spin()
        angle = controller.angle
        generation = controller.generation

        self.assertIsNone(controller.spin())
        self.assertEqual(len(driver.requests), 1)
        self.assertEqual(controller.angle, angle)
        self.assertEqual(controller.generation, generation)
        self.assertIs(controller.state, SpinState.SPINNING)

        driver.finish()
        self.assertEqual(winners, [1])

    def test_spin_while_settled_is_a_no_op(self):
        controller, driver, winners = make_controller()
        controller.spin()
        driver.finish()
        self.assertIsNone(controller.spin())
        self.assertEqual(len(driver.requests), 1)

    def test_failed_selection_leaves_wheel_idle(self):
        controller, driver, winners = make_controller(
            weights=[0, 0, 0], uniform_fallback=False
        )
        with self.assertRaises(InvalidWeights):
            controller.spin()
        self.assertIs(controller.state, SpinState.IDLE)
        self.assertEqual(controller.angle, 0.0)
        self.assertEqual(controller.generation, 0)
        self.assertEqual(driver.requests, [])

    def test_fractional_forced_winner_never_reaches_a_spin(self):
        with self.assertRaises(InvalidConfiguration):
            make_controller(winner=1.5)

    def test_forced_winner(self):
        controller, driver, winners = make_controller(winner=2, rng=FixedRandom(0.0))
        self.assertEqual(controller.spin(), 2)
        driver.finish()
        self.assertEqual(winners, [2])
        self.assertEqual(segment_at(controller.angle, 3), 2)

    def test_zero_weight_rewards_never_win(self):
        rng = random.Random(99)
        for _ in range(50):
            controller, driver, winners = make_controller(
                weights=[0, 0, 60], duration_ms=4000, rng=rng
            )
            controller.spin()
            driver.finish()
            self.assertEqual(winners, [2])

    def test_listeners_see_every_state_change(self):
        controller, driver, _ = make_controller()
        seen: list[SpinState] = []
        listener = lambda c: seen.append(c.state)
        controller.subscribe(listener)

        controller.spin()
        driver.finish()
        controller.reset()
        self.assertEqual(seen, [SpinState.SPINNING, SpinState.SETTLED, SpinState.IDLE])

        controller.unsubscribe(listener)
        controller.spin()
        self.assertEqual(len(seen), 3)


class TestReset(unittest.TestCase):

    def test_reset_from_settled(self):
        controller, driver, winners = make_controller()
        controller.spin()
        driver.finish()
        spin_angle = controller.angle

        self.assertTrue(controller.reset())
        self.assertIs(controller.state, SpinState.IDLE)
        self.assertIsNone(controller.winner)
        self.assertGreaterEqual(driver.cancels, 1)

        neutral, duration = driver.requests[-1]
        self.assertEqual(duration, controller.reset_duration_ms)
        self.assertGreaterEqual(neutral, spin_angle)
        self.assertEqual(neutral % 360.0, 0.0)
        self.assertEqual(controller.angle, neutral)

    def test_reset_mid_spin_drops_pending_completion(self):
        controller, driver, winners = make_controller()
        controller.spin()
        controller.reset()

        # the original spin's completion arrives late
        driver.finish(0)
        self.assertEqual(winners, [])
        self.assertIs(controller.state, SpinState.IDLE)

    def test_stale_completion_does_not_settle_next_spin(self):
        controller, driver, winners = make_controller()
        controller.spin()
        controller.reset()
        controller.spin()
        self.assertIs(controller.state, SpinState.SPINNING)

        driver.finish(0)
        self.assertIs(controller.state, SpinState.SPINNING)
        self.assertEqual(winners, [])

        driver.finish(-1)
        self.assertIs(controller.state, SpinState.SETTLED)
        self.assertEqual(winners, [1])

    def test_reset_mid_spin_settles_from_visible_angle(self):
        controller, driver, _ = make_controller(duration_ms=10000)
        controller.spin()
        spin_target = controller.angle
        # the wheel has only turned a little over one revolution
        driver._set_value(400.0)

        controller.reset()
        neutral, _ = driver.requests[-1]
        self.assertEqual(neutral, 720.0)
        self.assertEqual(controller.angle, 720.0)
        self.assertLess(neutral, spin_target)

        controller.spin()
        self.assertGreater(controller.angle, 720.0 + 10 * 360)

    def test_reset_before_first_frame_never_turns_backwards(self):
        controller = SpinController(
            WheelConfig(rewards=["a", "b"]), ManualDriver(), start_angle=1080.0
        )
        controller.spin()
        controller.reset()
        self.assertEqual(controller.angle, 1080.0)

    def test_reset_when_idle_does_nothing(self):
        controller, driver, _ = make_controller()
        self.assertFalse(controller.reset())
        self.assertEqual(driver.requests, [])

    def test_reset_recomputes_segments(self):
        controller, driver, _ = make_controller()
        before = controller.segments
        controller.spin()
        driver.finish()
        controller.reset()
        self.assertEqual(controller.segments, before)
        self.assertIsNot(controller.segments, before)


class TestAngle(unittest.TestCase):

    def test_angle_never_decreases_across_spins_and_resets(self):
        controller, driver, winners = make_controller(
            rewards=[str(i) for i in range(10)], rng=random.Random(5), duration_ms=2000
        )
        angles = [controller.angle]
        for _ in range(20):
            controller.spin()
            angles.append(controller.angle)
            driver.finish()
            self.assertEqual(segment_at(controller.angle, 10), winners[-1])
            controller.reset()
            angles.append(controller.angle)
        self.assertEqual(angles, sorted(angles))
        self.assertEqual(len(winners), 20)

    def test_immediate_driver_completes_inside_spin(self):
        winners: list[int] = []
        driver = ImmediateDriver()
        controller = SpinController(
            WheelConfig(rewards=["a", "b"], weights=[1, 0]),
            driver,
            on_winner=winners.append,
        )
        self.assertEqual(controller.spin(), 0)
        self.assertIs(controller.state, SpinState.SETTLED)
        self.assertEqual(winners, [0])
        self.assertEqual(driver.value, controller.angle)

    def test_start_angle(self):
        controller = SpinController(
            WheelConfig(rewards=["a", "b"]), ManualDriver(), start_angle=720.0
        )
        self.assertEqual(controller.angle, 720.0)
        controller.spin()
        self.assertGreater(controller.angle, 720.0 + 360 * 10)


if __name__ == "__main__":
    unittest.main()
