from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import json


@dataclass(frozen=True)
class Timing:
    """
    Pacing delays in milliseconds.

    ``blank`` follows an empty line, ``idle`` a command that changed nothing,
    ``action`` a command that moved, turned or switched something. ``error``
    is held after an invalid move before the run stops. ``pre_run`` and
    ``post_run`` frame a whole session.
    """

    blank: float = 100.0
    idle: float = 200.0
    action: float = 600.0
    error: float = 1000.0
    pre_run: float = 500.0
    post_run: float = 1000.0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"Timing.{f.name} must be non-negative")

    @classmethod
    def turtle(cls) -> "Timing":
        return cls()

    @classmethod
    def game(cls) -> "Timing":
        return cls(post_run=500.0)

    @classmethod
    def led(cls) -> "Timing":
        return cls(blank=100.0, idle=500.0, action=500.0, error=0.0, pre_run=0.0, post_run=0.0)

    def scaled(self, factor: float) -> "Timing":
        """Return a copy with every delay multiplied by ``factor`` (e.g. 0 for instant runs)."""
        if factor < 0:
            raise ValueError("Speed factor must be non-negative")
        return replace(self, **{f.name: getattr(self, f.name) * factor for f in fields(self)})


@dataclass(frozen=True)
class TurtleConfig:
    grid_size: int = 8
    epsilon: float = 0.001
    timing: Timing = field(default_factory=Timing.turtle)

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError("grid_size must be at least 1")
        if self.epsilon < 0:
            raise ValueError("epsilon must be non-negative")


@dataclass(frozen=True)
class LedConfig:
    led_ids: Tuple[int, ...] = (1, 2, 3)
    timing: Timing = field(default_factory=Timing.led)

    def __post_init__(self) -> None:
        if not self.led_ids:
            raise ValueError("At least one LED is required")
        if len(set(self.led_ids)) != len(self.led_ids):
            raise ValueError("LED ids must be unique")


def _timing_from(base: Timing, overrides: Optional[Dict[str, Any]]) -> Timing:
    if not overrides:
        return base
    known = {f.name for f in fields(Timing)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown timing keys: {sorted(unknown)}")
    return replace(base, **{k: float(v) for k, v in overrides.items()})


def turtle_config_from_dict(data: Dict[str, Any], game: bool = False) -> TurtleConfig:
    unknown = set(data) - {"grid_size", "epsilon", "timing"}
    if unknown:
        raise ValueError(f"Unknown turtle config keys: {sorted(unknown)}")
    base = Timing.game() if game else Timing.turtle()
    return TurtleConfig(
        grid_size=int(data.get("grid_size", 8)),
        epsilon=float(data.get("epsilon", 0.001)),
        timing=_timing_from(base, data.get("timing")),
    )


def led_config_from_dict(data: Dict[str, Any]) -> LedConfig:
    unknown = set(data) - {"led_ids", "timing"}
    if unknown:
        raise ValueError(f"Unknown LED config keys: {sorted(unknown)}")
    return LedConfig(
        led_ids=tuple(int(i) for i in data.get("led_ids", (1, 2, 3))),
        timing=_timing_from(Timing.led(), data.get("timing")),
    )


def load_config(path: str | Path) -> Dict[str, Any]:
    """
    Load a JSON settings file.

    The file holds optional ``"turtle"``, ``"game"`` and ``"led"`` sections,
    each in the shape accepted by the ``*_from_dict`` helpers.
    """
    source = Path(path)
    with source.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{source} must contain a JSON object")
    return data
