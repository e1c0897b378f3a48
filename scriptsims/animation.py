from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.colors import BoundaryNorm, ListedColormap
import numpy as np

from .led_world import LED_COLORS, LedWorld
from .script import Line
from .turtle_world import TurtleWorld

BOARD_COLORS = ["#334155", "#1e293b", "#ef4444", "#22c55e"]  # dark, light, apple, turtle
LED_OFF_COLOR = "#3f3f46"


def _listed(colors: Sequence[str]) -> tuple[ListedColormap, BoundaryNorm]:
    cmap = ListedColormap(list(colors))
    norm = BoundaryNorm(np.arange(-0.5, len(colors) + 0.5, 1.0), cmap.N)
    return cmap, norm


def board_cmap() -> tuple[ListedColormap, BoundaryNorm]:
    return _listed(BOARD_COLORS)


def led_cmap(led_ids: Iterable[int] = (1, 2, 3)) -> tuple[ListedColormap, BoundaryNorm]:
    return _listed([LED_OFF_COLOR] + [LED_COLORS.get(i, "white") for i in led_ids])


class FrameRecorder:
    """Renderer that stores every rendered world as a frame, building an animation history."""

    def __init__(self) -> None:
        self.history: List[np.ndarray] = []

    def render(self, world: Any) -> None:
        self.history.append(world.to_frame().copy())

    def clear(self) -> None:
        self.history.clear()


def _prepare_history(history: Iterable[np.ndarray]) -> np.ndarray:
    arr = np.asarray(list(history))
    if arr.ndim != 3:
        raise ValueError("History must be an array shaped (frames, rows, cols)")
    return arr


def animate_history(
    history: Iterable[np.ndarray],
    interval: int = 600,
    cmap: Any = None,
    norm: Optional[BoundaryNorm] = None,
    title: Optional[str] = None,
    repeat: bool = False,
    show: bool = True,
    save_path: str | Path | None = None,
):
    """
    Replay recorded frames as an animation.

    ``show=False`` is useful for headless runs when only saving output.
    """
    frames = _prepare_history(history)
    if cmap is None:
        cmap, norm = board_cmap()
    fig, ax = plt.subplots()
    im = ax.imshow(frames[0], cmap=cmap, norm=norm, interpolation="nearest")
    ax.set_xticks([])
    ax.set_yticks([])

    def update(frame_idx: int):
        im.set_data(frames[frame_idx])
        if title:
            ax.set_title(f"{title} (frame {frame_idx})")
        return [im]

    animation = FuncAnimation(fig, update, frames=len(frames), interval=interval, repeat=repeat, blit=False)

    if save_path:
        dest = Path(save_path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        animation.save(dest)

    if show:
        plt.show()
    else:
        plt.close(fig)

    return animation


class LiveBoard:
    """
    Matplotlib view acting as renderer, line highlighter and notifier.

    Pair it with ``simulator.run(text, sleep=board.pause)`` so pacing delays
    keep the figure responsive.
    """

    def __init__(self, title: str = "", show: bool = True) -> None:
        self.fig, (self.ax_world, self.ax_script) = plt.subplots(
            1, 2, figsize=(10, 5), gridspec_kw={"width_ratios": [2, 1]}
        )
        self.title = title
        self.show = show
        self.ax_world.set_xticks([])
        self.ax_world.set_yticks([])
        self.ax_script.axis("off")
        self._image = None
        self._marker = None
        self._texts: list = []
        self.messages: List[str] = []

    # --- Renderer ----------------------------------------------------------
    def render(self, world: Any) -> None:
        frame = world.to_frame()
        if isinstance(world, LedWorld):
            cmap, norm = led_cmap(world.led_ids)
        else:
            cmap, norm = board_cmap()
        if self._image is None:
            self._image = self.ax_world.imshow(frame, cmap=cmap, norm=norm, interpolation="nearest")
        else:
            self._image.set_data(frame)
        if isinstance(world, TurtleWorld):
            self._draw_heading(world)
        self._refresh()

    def _draw_heading(self, world: TurtleWorld) -> None:
        if self._marker is not None:
            self._marker.remove()
        dx, dy = world.displacement(0.4)
        self._marker = self.ax_world.annotate(
            "",
            xy=(world.x + dx, world.y + dy),
            xytext=(world.x, world.y),
            arrowprops={"arrowstyle": "-|>", "color": "white", "lw": 2},
        )

    # --- Highlighter -------------------------------------------------------
    def show_script(self, lines: Sequence[Line]) -> None:
        self.clear()
        count = max(1, len(lines))
        for line in lines:
            y = 1.0 - (line.index + 0.5) / count
            text = self.ax_script.text(0.02, y, line.text or " ", family="monospace", va="center")
            self._texts.append(text)
        self._refresh()

    def set_active(self, index: int, active: bool) -> None:
        if 0 <= index < len(self._texts):
            self._texts[index].set_backgroundcolor("#facc15" if active else "none")
            self._refresh()

    def set_error(self, index: int) -> None:
        if 0 <= index < len(self._texts):
            self._texts[index].set_backgroundcolor("#fca5a5")
            self._refresh()

    def clear(self) -> None:
        for text in self._texts:
            text.remove()
        self._texts = []

    # --- Notifier ----------------------------------------------------------
    def notify(self, message: str) -> None:
        self.messages.append(message)
        self.ax_world.set_title(message.splitlines()[0])
        print(message)
        self._refresh()

    # --- Pacing ------------------------------------------------------------
    def pause(self, seconds: float) -> None:
        if self.show:
            plt.pause(max(seconds, 0.001))

    def _refresh(self) -> None:
        if self.title and not self.messages:
            self.ax_world.set_title(self.title)
        self.fig.canvas.draw_idle()

    def close(self) -> None:
        plt.close(self.fig)
