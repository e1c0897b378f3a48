from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple
import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

# Rendering categories
DARK_SQUARE = 0
LIGHT_SQUARE = 1
APPLE = 2
TURTLE = 3

START_POSITION = (0.0, 0.0)
START_HEADING = 90.0  # 0 = up, 90 = right, 180 = down, 270 = left
WIN_DISTANCE = 0.5


class GameOutcome(Enum):
    WIN = "win"
    LOSE = "lose"


@dataclass(frozen=True)
class Pose:
    x: float
    y: float
    heading: float

    @property
    def display_heading(self) -> float:
        return self.heading % 360.0


class TurtleWorld:
    """
    A turtle on a square grid of ``grid_size`` cells per side.

    Headings are in degrees, 0 pointing up and growing clockwise, with the y
    axis pointing down the board. Moves that would leave the board are
    rejected and leave the turtle where it was.
    """

    def __init__(self, grid_size: int = 8, epsilon: float = 0.001) -> None:
        if grid_size < 1:
            raise ValueError("Grid must have at least one cell")
        self.grid_size = grid_size
        self.epsilon = epsilon
        self.x, self.y = START_POSITION
        self.heading = START_HEADING

    # Heading is kept as an exact fraction so opposite turns cancel exactly.
    @property
    def heading(self) -> float:
        return float(self._heading)

    @heading.setter
    def heading(self, degrees: float) -> None:
        self._heading = Fraction(degrees)

    @property
    def pose(self) -> Pose:
        return Pose(self.x, self.y, self.heading)

    @property
    def cell(self) -> Tuple[int, int]:
        return int(round(self.x)), int(round(self.y))

    # --- Operations --------------------------------------------------------
    def displacement(self, distance: float) -> Tuple[float, float]:
        rad = math.radians(self.heading - 90.0)
        return math.cos(rad) * distance, math.sin(rad) * distance

    def in_bounds(self, x: float, y: float) -> bool:
        limit = self.grid_size - 1 + self.epsilon
        return -self.epsilon <= x <= limit and -self.epsilon <= y <= limit

    def move(self, distance: float) -> bool:
        """Advance along the heading; returns False (and stays put) if the target is off the board."""
        dx, dy = self.displacement(distance)
        next_x = self.x + dx
        next_y = self.y + dy
        if not (math.isfinite(next_x) and math.isfinite(next_y)) or not self.in_bounds(next_x, next_y):
            logger.debug("Rejected move by %s to (%.3f, %.3f)", distance, next_x, next_y)
            return False
        self.x = next_x
        self.y = next_y
        return True

    def rotate(self, degrees: float) -> None:
        if not math.isfinite(degrees):
            raise ValueError("Rotation must be finite")
        self._heading += Fraction(degrees)

    def reset_pose(self) -> None:
        self.x, self.y = START_POSITION
        self.heading = START_HEADING

    # --- Rendering ---------------------------------------------------------
    def board(self) -> np.ndarray:
        rows, cols = np.indices((self.grid_size, self.grid_size))
        return np.where((rows + cols) % 2 == 0, DARK_SQUARE, LIGHT_SQUARE).astype(np.int32)

    def to_frame(self) -> np.ndarray:
        """Board as a (rows, cols) array with the turtle's cell marked."""
        frame = self.board()
        col, row = self.cell
        if 0 <= row < self.grid_size and 0 <= col < self.grid_size:
            frame[row, col] = TURTLE
        return frame


class TurtleGameWorld(TurtleWorld):
    """Turtle world with an apple to reach while a play session is active."""

    def __init__(self, grid_size: int = 8, epsilon: float = 0.001, rng_seed: Optional[int] = None) -> None:
        if grid_size < 2:
            raise ValueError("Game needs room for an apple away from the start cell")
        super().__init__(grid_size=grid_size, epsilon=epsilon)
        self.rng = np.random.default_rng(rng_seed)
        self.target: Optional[Tuple[int, int]] = None

    @property
    def playing(self) -> bool:
        return self.target is not None

    def place_target(self) -> Tuple[int, int]:
        start = (int(START_POSITION[0]), int(START_POSITION[1]))
        while True:
            target = (int(self.rng.integers(0, self.grid_size)), int(self.rng.integers(0, self.grid_size)))
            if target != start:
                break
        self.target = target
        return target

    def clear_target(self) -> None:
        self.target = None

    def distance_to_target(self) -> float:
        if self.target is None:
            raise ValueError("No target placed")
        ax, ay = self.target
        return math.hypot(self.x - ax, self.y - ay)

    def evaluate(self) -> GameOutcome:
        return GameOutcome.WIN if self.distance_to_target() < WIN_DISTANCE else GameOutcome.LOSE

    def to_frame(self) -> np.ndarray:
        frame = super().to_frame()
        if self.target is not None:
            ax, ay = self.target
            col, row = self.cell
            if (ax, ay) != (col, row):
                frame[ay, ax] = APPLE
        return frame
