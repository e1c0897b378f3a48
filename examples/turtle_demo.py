from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow running directly via ``python examples/turtle_demo.py``
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scriptsims import FrameRecorder, LiveBoard, TurtleConfig, TurtleSimulator, animate_history  # noqa: E402
from scriptsims.config import load_config, turtle_config_from_dict  # noqa: E402

SAMPLE_SCRIPT = """ANDA 3
DIREITA 90
ANDA 2

ESQUERDA 90
ANDA 2
TRAS 1"""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Move a turtle around an 8x8 board with a tiny script")
    parser.add_argument("--script", type=Path, help="Text file with one command per line")
    parser.add_argument("--text", type=str, help="Inline script; use '\\n' between commands")
    parser.add_argument("--config", type=Path, help="JSON settings file with a 'turtle' section")
    parser.add_argument("--grid-size", type=int, help="Override board size")
    parser.add_argument("--speed", type=float, default=1.0, help="Delay multiplier (0 runs instantly)")
    parser.add_argument("--video", type=Path, help="Record frames and save an animation (gif/mp4)")
    parser.add_argument("--no-show", action="store_true", help="Skip opening a window")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args()


def read_script(args: argparse.Namespace) -> str:
    if args.script:
        return args.script.read_text(encoding="utf-8")
    if args.text:
        return args.text.replace("\\n", "\n")
    return SAMPLE_SCRIPT


def build_config(args: argparse.Namespace) -> TurtleConfig:
    data = load_config(args.config).get("turtle", {}) if args.config else {}
    if args.grid_size is not None:
        data = {**data, "grid_size": args.grid_size}
    config = turtle_config_from_dict(data)
    return TurtleConfig(grid_size=config.grid_size, epsilon=config.epsilon, timing=config.timing.scaled(args.speed))


def main():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper())
    config = build_config(args)
    script = read_script(args)

    if args.video or args.no_show:
        recorder = FrameRecorder()
        sim = TurtleSimulator(config, renderer=recorder)
        report = sim.run(script, sleep=lambda _: None)
        print(f"Run {report.outcome.value} after {report.steps} steps; final pose {sim.world.pose}")
        if args.video:
            animate_history(recorder.history, title="Turtle", show=not args.no_show, save_path=args.video)
            print(f"Saved {len(recorder.history)} frames to {args.video}")
        return report

    board = LiveBoard(title="Turtle")
    sim = TurtleSimulator(config, renderer=board, highlighter=board, notifier=board)
    report = sim.run(script, sleep=board.pause)
    print(f"Run {report.outcome.value} after {report.steps} steps; final pose {sim.world.pose}")
    board.pause(1.0)
    return report


if __name__ == "__main__":
    main()
