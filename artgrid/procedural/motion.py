"""
Animation time: a pausable, speed-scaled clock and a single-threaded frame scheduler.
Generators only ever see the clock's elapsed seconds, so motion is continuous across pause/resume.
"""
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

TimeSource = Callable[[], float]
FrameCallback = Callable[[float], None]


class AnimationClock:
    """
    Elapsed animation time in seconds.
    Accumulates only while playing; speed changes apply to future accumulation only.
    """

    def __init__(
        self,
        *,
        playing: bool = False,
        speed: float = 1.0,
        time_source: TimeSource = time.perf_counter,
    ) -> None:
        self._now = time_source
        self._speed = float(speed)
        self._accumulated = 0.0
        self._resumed_at: float | None = None
        if playing:
            self.play()

    @property
    def playing(self) -> bool:
        return self._resumed_at is not None

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def elapsed(self) -> float:
        if self._resumed_at is None:
            return self._accumulated
        return self._accumulated + (self._now() - self._resumed_at) * self._speed

    def _fold(self) -> None:
        """Move the running segment into the accumulated total."""
        if self._resumed_at is not None:
            now = self._now()
            self._accumulated += (now - self._resumed_at) * self._speed
            self._resumed_at = now

    def play(self) -> None:
        if self._resumed_at is None:
            self._resumed_at = self._now()

    def pause(self) -> None:
        if self._resumed_at is not None:
            self._fold()
            self._resumed_at = None

    def toggle(self) -> bool:
        """Flip play state; returns the new playing flag."""
        if self.playing:
            self.pause()
        else:
            self.play()
        return self.playing

    def set_speed(self, speed: float) -> None:
        self._fold()
        self._speed = float(speed)

    def reset(self) -> None:
        """Zero elapsed time; play state is unchanged."""
        self._accumulated = 0.0
        if self._resumed_at is not None:
            self._resumed_at = self._now()


class FrameScheduler:
    """
    Tick source for one render loop. Each tick reads the clock once and hands that
    time to every subscriber; a frame is never interrupted. Unsubscribe to cancel.
    """

    def __init__(
        self,
        clock: AnimationClock,
        *,
        fps: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.clock = clock
        self.fps = max(1.0, float(fps))
        self._sleep = sleep
        self._subscribers: list[FrameCallback] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: FrameCallback) -> Callable[[], None]:
        """Register callback; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def tick(self) -> float:
        t = self.clock.elapsed
        for callback in list(self._subscribers):
            try:
                callback(t)
            except Exception as e:
                logger.warning("Frame callback %r failed at t=%.3f: %s", callback, t, e)
        return t

    def run(
        self,
        frames: int | None = None,
        *,
        should_stop: Callable[[], bool] | None = None,
    ) -> int:
        """
        Tick at the target fps until `frames` ticks ran, should_stop() is true,
        or nobody is subscribed. Returns the number of ticks.
        """
        interval = 1.0 / self.fps
        count = 0
        while self._subscribers:
            if frames is not None and count >= frames:
                break
            if should_stop is not None and should_stop():
                break
            self.tick()
            count += 1
            self._sleep(interval)
        return count
