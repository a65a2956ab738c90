import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stroop.app.loop import run_game


def main(argv=None):
    parser = argparse.ArgumentParser(description="Stroop Trainer Launcher")
    parser.add_argument("--game", default="stroop", help="Game folder name under games/")
    parser.add_argument("--screen", default="1280x720", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--rounds", type=int, default=None, help="Rounds per session (overrides manifest)")
    parser.add_argument("--games-dir", type=Path, default=None,
                        help="Folder holding <game>/manifest.yaml and main.py (default: games/ in the checkout)")
    parser.add_argument("--history-dir", type=Path, default=None,
                        help="Where session history is kept (default: ~/.stroop-trainer/history)")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--debug", action="store_true", help="Log pointer presses and debug output")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        w, h = map(int, args.screen.lower().split("x"))
    except ValueError:
        parser.error(f"--screen must look like 1280x720, got {args.screen!r}")

    run_game(
        game_id=args.game,
        screen_size=(w, h),
        mirror=args.mirror,
        debug=args.debug,
        total_rounds=args.rounds,
        games_dir=args.games_dir,
        history_dir=args.history_dir,
    )


if __name__ == "__main__":
    main()
