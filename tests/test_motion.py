"""
Unit tests for the animation clock and frame scheduler (fake time source, no sleeping).
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeTime:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestAnimationClock(unittest.TestCase):

    def _clock(self, **kwargs):
        from artgrid.procedural.motion import AnimationClock

        fake = FakeTime()
        return AnimationClock(time_source=fake, **kwargs), fake

    def test_paused_clock_does_not_advance(self):
        clock, fake = self._clock()
        fake.advance(5)
        self.assertFalse(clock.playing)
        self.assertEqual(clock.elapsed, 0.0)

    def test_accumulates_while_playing(self):
        clock, fake = self._clock(playing=True)
        fake.advance(2.5)
        self.assertAlmostEqual(clock.elapsed, 2.5)

    def test_pause_excludes_paused_duration(self):
        clock, fake = self._clock(playing=True)
        fake.advance(3)
        clock.pause()
        fake.advance(60)
        self.assertAlmostEqual(clock.elapsed, 3.0)
        clock.play()
        fake.advance(1)
        self.assertAlmostEqual(clock.elapsed, 4.0)

    def test_speed_change_is_not_retroactive(self):
        clock, fake = self._clock(playing=True)
        fake.advance(4)
        clock.set_speed(2.0)
        self.assertAlmostEqual(clock.elapsed, 4.0)
        fake.advance(1)
        self.assertAlmostEqual(clock.elapsed, 6.0)
        self.assertEqual(clock.speed, 2.0)

    def test_speed_change_while_paused(self):
        clock, fake = self._clock(playing=True, speed=0.5)
        fake.advance(2)
        clock.pause()
        clock.set_speed(3.0)
        fake.advance(10)
        self.assertAlmostEqual(clock.elapsed, 1.0)
        clock.play()
        fake.advance(1)
        self.assertAlmostEqual(clock.elapsed, 4.0)

    def test_reset_keeps_play_state(self):
        clock, fake = self._clock(playing=True)
        fake.advance(7)
        clock.reset()
        self.assertTrue(clock.playing)
        self.assertEqual(clock.elapsed, 0.0)
        fake.advance(1)
        self.assertAlmostEqual(clock.elapsed, 1.0)

        clock.pause()
        clock.reset()
        self.assertFalse(clock.playing)
        self.assertEqual(clock.elapsed, 0.0)

    def test_toggle_and_double_play(self):
        clock, fake = self._clock()
        self.assertTrue(clock.toggle())
        fake.advance(1)
        clock.play()  # no-op while playing
        fake.advance(1)
        self.assertAlmostEqual(clock.elapsed, 2.0)
        self.assertFalse(clock.toggle())
        clock.pause()  # no-op while paused
        self.assertAlmostEqual(clock.elapsed, 2.0)


class TestFrameScheduler(unittest.TestCase):

    def _scheduler(self):
        from artgrid.procedural.motion import AnimationClock, FrameScheduler

        fake = FakeTime()
        clock = AnimationClock(playing=True, time_source=fake)
        sleeps = []

        def sleep(seconds):
            sleeps.append(seconds)
            fake.advance(seconds)

        return FrameScheduler(clock, fps=10, sleep=sleep), clock, fake, sleeps

    def test_tick_passes_elapsed_time(self):
        scheduler, clock, fake, _ = self._scheduler()
        seen = []
        scheduler.subscribe(seen.append)
        fake.advance(1.5)
        self.assertAlmostEqual(scheduler.tick(), 1.5)
        self.assertEqual(len(seen), 1)
        self.assertAlmostEqual(seen[0], 1.5)

    def test_all_subscribers_see_the_same_time(self):
        scheduler, clock, fake, _ = self._scheduler()
        a, b = [], []
        scheduler.subscribe(a.append)
        scheduler.subscribe(b.append)
        fake.advance(0.25)
        scheduler.tick()
        self.assertEqual(a, b)

    def test_unsubscribe_cancels(self):
        scheduler, _, _, _ = self._scheduler()
        seen = []
        unsubscribe = scheduler.subscribe(seen.append)
        scheduler.tick()
        unsubscribe()
        unsubscribe()  # idempotent
        scheduler.tick()
        self.assertEqual(len(seen), 1)
        self.assertEqual(scheduler.subscriber_count, 0)

    def test_run_frame_budget(self):
        scheduler, _, _, sleeps = self._scheduler()
        seen = []
        scheduler.subscribe(seen.append)
        self.assertEqual(scheduler.run(frames=5), 5)
        self.assertEqual(len(seen), 5)
        self.assertEqual(sleeps, [0.1] * 5)
        for earlier, later in zip(seen, seen[1:]):
            self.assertGreater(later, earlier)

    def test_run_stops_without_subscribers(self):
        scheduler, _, _, _ = self._scheduler()
        self.assertEqual(scheduler.run(), 0)

    def test_run_should_stop(self):
        scheduler, _, _, _ = self._scheduler()
        seen = []
        scheduler.subscribe(seen.append)
        self.assertEqual(scheduler.run(should_stop=lambda: len(seen) >= 3), 3)

    def test_callback_can_unsubscribe_itself(self):
        scheduler, _, _, _ = self._scheduler()
        seen = []
        holder = {}

        def once(t):
            seen.append(t)
            holder["unsubscribe"]()

        holder["unsubscribe"] = scheduler.subscribe(once)
        self.assertEqual(scheduler.run(frames=10), 1)
        self.assertEqual(len(seen), 1)

    def test_failing_callback_is_logged(self):
        scheduler, _, _, _ = self._scheduler()
        seen = []

        def boom(t):
            raise RuntimeError("export failed")

        scheduler.subscribe(boom)
        scheduler.subscribe(seen.append)
        with self.assertLogs("artgrid.procedural.motion", level="WARNING"):
            scheduler.tick()
        self.assertEqual(len(seen), 1)


if __name__ == "__main__":
    unittest.main()
