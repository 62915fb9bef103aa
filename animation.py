"""Hover fade timer used for square highlight visuals."""

import config


class FadeAnimation:
    """A timer that runs forwards to 1.0 or backwards to 0.0.

    The host advances it with ``update(dt)`` once per frame. ``progress`` is
    linear in time; ``curve_progress`` eases it for color blending.
    """

    def __init__(self, duration: float = config.fade_duration):
        if duration <= 0:
            raise ValueError("Animation duration must be positive.")
        self.duration = duration
        self.progress = 0.0
        self._direction = 0

    def go_forwards(self) -> None:
        self._direction = 1

    def go_backwards(self) -> None:
        self._direction = -1

    def reset(self) -> None:
        self.progress = 0.0
        self._direction = 0

    def is_running(self) -> bool:
        return self._direction != 0

    def update(self, dt: float) -> None:
        if not self._direction:
            return
        self.progress += self._direction * dt / self.duration
        if self._direction > 0 and self.progress >= 1.0:
            self.progress = 1.0
            self._direction = 0
        elif self._direction < 0 and self.progress <= 0.0:
            self.progress = 0.0
            self._direction = 0

    def curve_progress(self, power: float = config.fade_curve_power) -> float:
        """Ease-in-out of ``progress``: p^k / (p^k + (1-p)^k)."""
        p = self.progress
        if p <= 0.0:
            return 0.0
        if p >= 1.0:
            return 1.0
        a = p ** power
        return a / (a + (1.0 - p) ** power)
