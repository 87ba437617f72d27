"""
Tick driver for the simulation.

The window owns frame pacing (pygame clock); each rendered frame it pumps
the driver with the elapsed time. The driver decides how many simulation
ticks that frame is worth and guards each one with a cancel token, so a
stop() issued mid-frame turns every remaining tick into a no-op.
"""

from typing import Callable
import logging

logger = logging.getLogger(__name__)


class TickDriver:
    """
    Drives simulation ticks with start/stop control.

    Two stepping modes:
        Frame-coupled (default): exactly one tick per pumped frame. Elapsed
            time is tracked but not applied to the step, so game speed
            follows the display refresh rate.
        Fixed timestep: elapsed time feeds an accumulator drained in
            1/tick_rate steps, capped at max_ticks_per_frame per pump.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        tick_rate: int = 60,
        fixed_timestep: bool = False,
        max_ticks_per_frame: int = 5,
    ) -> None:
        self._on_tick = on_tick
        self._tick_ms = 1000.0 / tick_rate
        self._fixed_timestep = fixed_timestep
        self._max_ticks = max_ticks_per_frame
        self._running = False
        self._token = 0
        self._accumulator = 0.0
        self._elapsed_ms = 0.0
        self._tick_count = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def token(self) -> int:
        """Current cancel token. Changes on every start/stop."""
        return self._token

    @property
    def elapsed_ms(self) -> float:
        """Time pumped while running."""
        return self._elapsed_ms

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        """Begin ticking. Restarting an active driver invalidates its token."""
        self._token += 1
        self._running = True
        self._accumulator = 0.0
        logger.debug(f"Tick driver started (token {self._token})")

    def stop(self) -> None:
        """Halt ticking. Any tick still pending in this pump is dropped."""
        if not self._running:
            return
        self._token += 1
        self._running = False
        self._accumulator = 0.0
        logger.debug(f"Tick driver stopped (token {self._token})")

    def reset_counters(self) -> None:
        self._elapsed_ms = 0.0
        self._tick_count = 0

    def pump(self, delta_ms: float) -> int:
        """
        Advance by one rendered frame.

        Args:
            delta_ms: Wall time since the previous frame

        Returns:
            Number of ticks actually executed
        """
        if not self._running:
            return 0

        self._elapsed_ms += delta_ms

        if self._fixed_timestep:
            self._accumulator += delta_ms
            due = int(self._accumulator // self._tick_ms)
            if due > self._max_ticks:
                # Spiral-of-death guard: drop the backlog
                due = self._max_ticks
                self._accumulator = 0.0
            else:
                self._accumulator -= due * self._tick_ms
        else:
            due = 1

        token = self._token
        executed = 0
        for _ in range(due):
            if not self._running or self._token != token:
                break
            self._on_tick()
            self._tick_count += 1
            executed += 1
        return executed
