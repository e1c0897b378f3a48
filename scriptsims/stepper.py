from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional
import logging
import time

from .config import Timing
from .script import Line, parse
from .turtle_world import GameOutcome
from .views import LineHighlighter, Notifier, NullView, Renderer

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Any]


class SessionOutcome(Enum):
    COMPLETED = "completed"
    INVALID_MOVE = "invalid_move"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Pause:
    """A suspension point between steps; ``line_index`` is None for session-level pauses."""

    ms: float
    line_index: Optional[int] = None

    @property
    def seconds(self) -> float:
        return self.ms / 1000.0


@dataclass(frozen=True)
class StepEffect:
    """
    What dispatching one line did to the world.

    ``changed`` triggers a render and the action delay, ``failed`` aborts the
    run, ``delay`` overrides the pacing for this step only.
    """

    changed: bool = False
    failed: bool = False
    delay: Optional[float] = None


NO_EFFECT = StepEffect()


@dataclass(frozen=True)
class SessionReport:
    """``steps`` counts every line stepped, blank ones included."""

    outcome: SessionOutcome
    steps: int
    error_line: Optional[int] = None
    game_outcome: Optional[GameOutcome] = None


@dataclass
class Session:
    lines: List[Line]
    index: int = 0
    steps: int = 0
    cancelled: bool = False
    errored: bool = False
    error_line: Optional[int] = None
    game_outcome: Optional[GameOutcome] = None

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def outcome(self) -> SessionOutcome:
        if self.errored:
            return SessionOutcome.INVALID_MOVE
        if self.cancelled:
            return SessionOutcome.CANCELLED
        return SessionOutcome.COMPLETED

    def report(self) -> SessionReport:
        return SessionReport(
            outcome=self.outcome,
            steps=self.steps,
            error_line=self.error_line,
            game_outcome=self.game_outcome,
        )


class Simulator:
    """
    Steps a parsed script against one world, one line at a time.

    ``start`` returns a generator of :class:`Pause` objects; whoever drives it
    decides how long each pause really takes (``run`` uses ``time.sleep`` by
    default, tests pass a recorder, a matplotlib view passes ``plt.pause``).
    Only one session may be active; ``reset`` cancels it, and the cancellation
    is noticed at the next step boundary.

    Subclasses provide ``execute`` and may hook ``prepare``, ``finish`` and
    ``restore_world``.
    """

    invalid_move_message = "Invalid move"

    def __init__(
        self,
        world: Any,
        timing: Timing,
        renderer: Optional[Renderer] = None,
        highlighter: Optional[LineHighlighter] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        null = NullView()
        self.world = world
        self.timing = timing
        self.renderer = renderer or null
        self.highlighter = highlighter or null
        self.notifier = notifier or null
        self.session: Optional[Session] = None
        self.last_report: Optional[SessionReport] = None

    @property
    def running(self) -> bool:
        return self.session is not None

    # --- Control surface ---------------------------------------------------
    def start(self, text: str) -> Optional[Iterator[Pause]]:
        """Open a session for ``text``; returns None if one is already active or the script is refused."""
        if self.session is not None:
            logger.debug("Run ignored: a session is already active")
            return None
        if not self.accepts(text):
            logger.debug("Run ignored: script refused")
            return None
        session = Session(lines=parse(text))
        self.session = session
        logger.info("Session started with %d lines", len(session.lines))
        return self._steps(session)

    def run(self, text: str, sleep: Optional[Sleep] = None) -> Optional[SessionReport]:
        """Drive a whole session, sleeping through every pause."""
        steps = self.start(text)
        if steps is None:
            return None
        session = self.session
        pause = sleep or time.sleep
        for step in steps:
            pause(step.seconds)
        return session.report() if session is not None else None

    def reset(self) -> None:
        """Cancel any active session and restore the initial world."""
        if self.session is not None:
            self.session.cancel()
            logger.info("Session cancelled at line %d", self.session.index)
            self.session = None
        self.restore_world()
        self.renderer.render(self.world)
        self.highlighter.clear()

    # --- Hooks -------------------------------------------------------------
    def accepts(self, text: str) -> bool:
        return True

    def execute(self, line: Line) -> StepEffect:
        raise NotImplementedError("Subclasses must implement execute()")

    def prepare(self, session: Session) -> None:
        pass

    def finish(self, session: Session) -> None:
        pass

    def restore_world(self) -> None:
        pass

    # --- Execution loop ----------------------------------------------------
    def _steps(self, session: Session) -> Iterator[Pause]:
        timing = self.timing
        try:
            self.highlighter.show_script(session.lines)
            self.prepare(session)
            if timing.pre_run:
                yield Pause(timing.pre_run)

            for line in session.lines:
                if session.cancelled:
                    break
                i = line.index
                session.index = i
                self.highlighter.set_active(i, True)
                session.steps += 1

                if line.is_blank:
                    delay = timing.blank
                else:
                    logger.debug("Line %d: %s", i, line.text)
                    effect = self.execute(line)
                    if effect.failed:
                        session.errored = True
                        session.error_line = i
                        logger.warning("Invalid move on line %d: %s", i, line.text)
                        self.highlighter.set_error(i)
                        self.notifier.notify(self.invalid_move_message)
                        yield Pause(timing.error, i)
                        break
                    if effect.changed:
                        self.renderer.render(self.world)
                    if effect.delay is not None:
                        delay = effect.delay
                    else:
                        delay = timing.action if effect.changed else timing.idle

                yield Pause(delay, i)
                self.highlighter.set_active(i, False)

            if session.cancelled:
                return
            if timing.post_run:
                yield Pause(timing.post_run)
                if session.cancelled:
                    return

            self.finish(session)
            self.last_report = session.report()
            logger.info("Session finished: %s after %d steps", session.outcome.value, session.steps)
        finally:
            if session.cancelled:
                self.last_report = session.report()
            if self.session is session:
                self.session = None
                self.highlighter.clear()
