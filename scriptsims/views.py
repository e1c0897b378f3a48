from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Protocol, Sequence, Tuple

from .script import Line


class Renderer(Protocol):
    def render(self, world: Any) -> None: ...


class LineHighlighter(Protocol):
    def show_script(self, lines: Sequence[Line]) -> None: ...

    def set_active(self, index: int, active: bool) -> None: ...

    def set_error(self, index: int) -> None: ...

    def clear(self) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class NullView:
    """Renderer, highlighter and notifier that ignore everything."""

    def render(self, world: Any) -> None:
        pass

    def show_script(self, lines: Sequence[Line]) -> None:
        pass

    def set_active(self, index: int, active: bool) -> None:
        pass

    def set_error(self, index: int) -> None:
        pass

    def clear(self) -> None:
        pass

    def notify(self, message: str) -> None:
        pass


@dataclass
class RecordingView:
    """
    Records every collaborator call as an ``(event, payload)`` tuple.

    Worlds are captured through ``snapshot`` so later mutation doesn't
    rewrite what was rendered.
    """

    events: List[Tuple[str, Any]] = field(default_factory=list)

    @staticmethod
    def snapshot(world: Any) -> Any:
        if hasattr(world, "pose"):
            return world.pose
        if hasattr(world, "leds"):
            return dict(world.leds)
        return world

    def render(self, world: Any) -> None:
        self.events.append(("render", self.snapshot(world)))

    def show_script(self, lines: Sequence[Line]) -> None:
        self.events.append(("show_script", [line.text for line in lines]))

    def set_active(self, index: int, active: bool) -> None:
        self.events.append(("active" if active else "inactive", index))

    def set_error(self, index: int) -> None:
        self.events.append(("error", index))

    def clear(self) -> None:
        self.events.append(("clear", None))

    def notify(self, message: str) -> None:
        self.events.append(("notify", message))

    # --- Queries -----------------------------------------------------------
    def of(self, event: str) -> List[Any]:
        return [payload for name, payload in self.events if name == event]

    @property
    def messages(self) -> List[str]:
        return self.of("notify")

    @property
    def renders(self) -> List[Any]:
        return self.of("render")


class ConsoleNotifier:
    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def notify(self, message: str) -> None:
        print(f"{self.prefix}{message}")
