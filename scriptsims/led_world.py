from __future__ import annotations

from typing import Dict, Iterable, Optional

import numpy as np

OFF = 0
# Lit value per LED is LIT_BASE + colour index.
LIT_BASE = 1
LED_COLORS = {1: "yellow", 2: "green", 3: "red"}


class LedWorld:
    """A fixed bank of on/off LEDs addressed by id."""

    def __init__(self, led_ids: Iterable[int] = (1, 2, 3)) -> None:
        self.led_ids = tuple(led_ids)
        if not self.led_ids:
            raise ValueError("Need at least one LED")
        self.leds: Dict[int, bool] = {led_id: False for led_id in self.led_ids}

    def set_led(self, led_id: Optional[int], action: Optional[int]) -> bool:
        """
        Switch ``led_id`` on (action 1) or off (action 0).

        Unknown ids and actions other than 0/1 are ignored; the return value
        tells whether anything was applied.
        """
        if led_id not in self.leds or action not in (0, 1):
            return False
        self.leds[led_id] = action == 1
        return True

    def clear(self) -> None:
        for led_id in self.leds:
            self.leds[led_id] = False

    def is_on(self, led_id: int) -> bool:
        return self.leds.get(led_id, False)

    @property
    def lit(self) -> tuple[int, ...]:
        return tuple(led_id for led_id in self.led_ids if self.leds[led_id])

    def color(self, led_id: int) -> str:
        return LED_COLORS.get(led_id, "white")

    def to_frame(self) -> np.ndarray:
        """One-row frame: OFF for dark LEDs, LIT_BASE + position for lit ones."""
        frame = np.full((1, len(self.led_ids)), OFF, dtype=np.int32)
        for col, led_id in enumerate(self.led_ids):
            if self.leds[led_id]:
                frame[0, col] = LIT_BASE + col
        return frame
