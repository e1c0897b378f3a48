"""Script-driven turtle, apple-game and LED simulators with pluggable views."""

import logging

from .animation import FrameRecorder, LiveBoard, animate_history
from .config import LedConfig, Timing, TurtleConfig, load_config
from .led_world import LedWorld
from .script import Line, parse
from .simulators import LedSimulator, TurtleGameSimulator, TurtleSimulator
from .stepper import Pause, SessionOutcome, SessionReport, Simulator
from .turtle_world import GameOutcome, Pose, TurtleGameWorld, TurtleWorld
from .views import ConsoleNotifier, NullView, RecordingView

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConsoleNotifier",
    "FrameRecorder",
    "GameOutcome",
    "LedConfig",
    "LedSimulator",
    "LedWorld",
    "Line",
    "LiveBoard",
    "NullView",
    "Pause",
    "Pose",
    "RecordingView",
    "SessionOutcome",
    "SessionReport",
    "Simulator",
    "Timing",
    "TurtleConfig",
    "TurtleGameSimulator",
    "TurtleGameWorld",
    "TurtleSimulator",
    "TurtleWorld",
    "animate_history",
    "load_config",
    "parse",
]
