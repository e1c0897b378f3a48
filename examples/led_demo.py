from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow running directly.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scriptsims import FrameRecorder, LedSimulator, LiveBoard, animate_history  # noqa: E402
from scriptsims.animation import led_cmap  # noqa: E402
from scriptsims.config import LedConfig, led_config_from_dict, load_config  # noqa: E402

TRAFFIC_LIGHT = """ACIONAR 2 1
ESPERAR 2
ACIONAR 2 0
ACIONAR 1 1
ESPERAR 1
ACIONAR 1 0
ACIONAR 3 1
ESPERAR 2
LIMPAR"""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Switch three LEDs on and off from a script")
    parser.add_argument("--script", type=Path, help="Text file with one command per line")
    parser.add_argument("--config", type=Path, help="JSON settings file with an 'led' section")
    parser.add_argument("--speed", type=float, default=1.0, help="Delay multiplier for default pacing")
    parser.add_argument("--video", type=Path, help="Record frames and save an animation (gif/mp4)")
    parser.add_argument("--no-show", action="store_true", help="Skip opening a window")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> LedConfig:
    data = load_config(args.config).get("led", {}) if args.config else {}
    config = led_config_from_dict(data)
    return LedConfig(led_ids=config.led_ids, timing=config.timing.scaled(args.speed))


def main():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper())
    config = build_config(args)
    script = args.script.read_text(encoding="utf-8") if args.script else TRAFFIC_LIGHT

    if args.video or args.no_show:
        recorder = FrameRecorder()
        sim = LedSimulator(config, renderer=recorder)
        report = sim.run(script, sleep=lambda _: None)
        if report is None:
            print("Nothing to run.")
            return None
        print(f"Run {report.outcome.value}; lit LEDs: {list(sim.world.lit) or 'none'}")
        if args.video:
            cmap, norm = led_cmap(config.led_ids)
            animate_history(recorder.history, cmap=cmap, norm=norm, title="LEDs", show=not args.no_show, save_path=args.video)
            print(f"Saved {len(recorder.history)} frames to {args.video}")
        return report

    board = LiveBoard(title="LEDs")
    sim = LedSimulator(config, renderer=board, highlighter=board, notifier=board)
    report = sim.run(script, sleep=board.pause)
    if report is None:
        print("Nothing to run.")
        return None
    print(f"Run {report.outcome.value}; lit LEDs: {list(sim.world.lit) or 'none'}")
    board.pause(1.0)
    return report


if __name__ == "__main__":
    main()
