from __future__ import annotations

from typing import Dict, Optional, Tuple
import logging
import math

from .config import LedConfig, TurtleConfig, Timing
from .led_world import LedWorld
from .script import Line, is_blank_script
from .stepper import NO_EFFECT, Session, Simulator, StepEffect
from .turtle_world import GameOutcome, TurtleGameWorld, TurtleWorld
from .views import LineHighlighter, Notifier, Renderer

logger = logging.getLogger(__name__)

INVALID_MOVE_MESSAGE = "Movimento Inválido: A tartaruga sairia do tabuleiro!"
GAME_START_MESSAGE = "MODO JOGO INICIADO!\nObjetivo: Leve a tartaruga até a maçã."
GAME_MESSAGES = {GameOutcome.WIN: "Você venceu", GameOutcome.LOSE: "Você perdeu"}

# Command -> (operation, operand sign)
TURTLE_COMMANDS: Dict[str, Tuple[str, int]] = {
    "ANDA": ("move", 1),
    "TRAS": ("move", -1),
    "TRÁS": ("move", -1),
    "DIREITA": ("rotate", 1),
    "ESQUERDA": ("rotate", -1),
}


class TurtleSimulator(Simulator):
    """Moves a turtle around the board; every run starts from the initial pose."""

    invalid_move_message = INVALID_MOVE_MESSAGE

    def __init__(
        self,
        config: Optional[TurtleConfig] = None,
        renderer: Optional[Renderer] = None,
        highlighter: Optional[LineHighlighter] = None,
        notifier: Optional[Notifier] = None,
        world: Optional[TurtleWorld] = None,
    ) -> None:
        self.config = config or TurtleConfig()
        world = world or TurtleWorld(grid_size=self.config.grid_size, epsilon=self.config.epsilon)
        super().__init__(world, self.config.timing, renderer, highlighter, notifier)
        self.renderer.render(self.world)

    def execute(self, line: Line) -> StepEffect:
        entry = TURTLE_COMMANDS.get(line.command)
        if entry is None:
            return NO_EFFECT
        operation, sign = entry
        value = sign * line.number_operand(1)
        if operation == "move":
            moved = self.world.move(value)
            return StepEffect(changed=moved, failed=not moved)
        if not math.isfinite(value):
            value = 0.0  # overflowing turn reads as malformed
        self.world.rotate(value)
        return StepEffect(changed=True)

    def prepare(self, session: Session) -> None:
        self.world.reset_pose()
        self.renderer.render(self.world)

    def restore_world(self) -> None:
        self.world.reset_pose()


class TurtleGameSimulator(TurtleSimulator):
    """
    Turtle simulator with an apple game.

    ``play`` places an apple; the next clean run that finishes while playing
    is judged as a win (turtle within half a cell of the apple) or a loss.
    Either way the game ends and the board is reset.
    """

    def __init__(
        self,
        config: Optional[TurtleConfig] = None,
        renderer: Optional[Renderer] = None,
        highlighter: Optional[LineHighlighter] = None,
        notifier: Optional[Notifier] = None,
        rng_seed: Optional[int] = None,
    ) -> None:
        config = config or TurtleConfig(timing=Timing.game())
        world = TurtleGameWorld(grid_size=config.grid_size, epsilon=config.epsilon, rng_seed=rng_seed)
        super().__init__(config, renderer, highlighter, notifier, world=world)

    @property
    def playing(self) -> bool:
        return self.world.playing

    def play(self) -> Optional[Tuple[int, int]]:
        """Start a play session with a fresh apple; ignored while a run is active."""
        if self.running:
            logger.debug("Play ignored: a session is already active")
            return None
        self.reset()
        target = self.world.place_target()
        logger.info("Game started, apple at %s", target)
        self.renderer.render(self.world)
        self.notifier.notify(GAME_START_MESSAGE)
        return target

    def finish(self, session: Session) -> None:
        if not self.world.playing or session.errored:
            return
        outcome = self.world.evaluate()
        session.game_outcome = outcome
        logger.info("Game over: %s", outcome.value)
        self.notifier.notify(GAME_MESSAGES[outcome])
        self.world.clear_target()
        self.world.reset_pose()
        self.renderer.render(self.world)

    def restore_world(self) -> None:
        self.world.clear_target()
        self.world.reset_pose()


class LedSimulator(Simulator):
    """
    Drives a bank of LEDs.

    LED state carries over between runs; only ``LIMPAR`` or ``reset`` turns
    everything off.
    """

    def __init__(
        self,
        config: Optional[LedConfig] = None,
        renderer: Optional[Renderer] = None,
        highlighter: Optional[LineHighlighter] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.config = config or LedConfig()
        super().__init__(LedWorld(self.config.led_ids), self.config.timing, renderer, highlighter, notifier)
        self.renderer.render(self.world)

    def accepts(self, text: str) -> bool:
        return not is_blank_script(text)

    def execute(self, line: Line) -> StepEffect:
        command = line.command
        if command == "ACIONAR":
            applied = self.world.set_led(line.integer_operand(1), line.integer_operand(2))
            return StepEffect(changed=applied)
        if command == "ESPERAR":
            seconds = line.optional_number(1)
            if seconds is None or not math.isfinite(seconds):
                return NO_EFFECT
            return StepEffect(delay=max(0.0, seconds * 1000.0))
        if command == "LIMPAR":
            self.world.clear()
            return StepEffect(changed=True)
        return NO_EFFECT

    def restore_world(self) -> None:
        self.world.clear()
