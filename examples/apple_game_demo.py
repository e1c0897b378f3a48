from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow running directly.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scriptsims import ConsoleNotifier, FrameRecorder, LiveBoard, TurtleGameSimulator, animate_history  # noqa: E402
from scriptsims.config import TurtleConfig, load_config, turtle_config_from_dict  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Guide the turtle to a randomly placed apple")
    parser.add_argument("--seed", type=int, help="Random seed for the apple position")
    parser.add_argument("--script", type=Path, help="Script file to run once the apple is placed")
    parser.add_argument("--config", type=Path, help="JSON settings file with a 'game' section")
    parser.add_argument("--speed", type=float, default=1.0, help="Delay multiplier (0 runs instantly)")
    parser.add_argument("--video", type=Path, help="Record frames and save an animation (gif/mp4)")
    parser.add_argument("--no-show", action="store_true", help="Skip opening a window")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> TurtleConfig:
    data = load_config(args.config).get("game", {}) if args.config else {}
    config = turtle_config_from_dict(data, game=True)
    return TurtleConfig(grid_size=config.grid_size, epsilon=config.epsilon, timing=config.timing.scaled(args.speed))


def read_script(args: argparse.Namespace) -> str:
    if args.script:
        return args.script.read_text(encoding="utf-8")
    print("Type commands (ANDA, TRAS, DIREITA, ESQUERDA); finish with an empty line.")
    lines = []
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


def main():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper())
    config = build_config(args)

    if args.video or args.no_show:
        recorder = FrameRecorder()
        sim = TurtleGameSimulator(config, renderer=recorder, notifier=ConsoleNotifier(), rng_seed=args.seed)
        pause = lambda _: None  # noqa: E731
        board = None
    else:
        board = LiveBoard(title="Apple game")
        recorder = None
        sim = TurtleGameSimulator(config, renderer=board, highlighter=board, notifier=board, rng_seed=args.seed)
        pause = board.pause

    target = sim.play()
    print(f"Apple placed at column {target[0]}, row {target[1]}")
    report = sim.run(read_script(args), sleep=pause)
    result = report.game_outcome.value if report.game_outcome else report.outcome.value
    print(f"Result: {result}")

    if recorder is not None and args.video:
        animate_history(recorder.history, title="Apple game", show=not args.no_show, save_path=args.video)
        print(f"Saved {len(recorder.history)} frames to {args.video}")
    if board is not None:
        board.pause(1.0)
    return report


if __name__ == "__main__":
    main()
