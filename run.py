"""Command-line entry point for the Python CHIP-8 emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 emulator (Python)",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM image",
    )
    parser.add_argument(
        "--clock-speed",
        type=int,
        default=600,
        help="Instructions executed per second (default: 600)",
    )
    parser.add_argument(
        "--no-sound",
        action="store_true",
        help="Disable the sound timer tone",
    )
    parser.add_argument(
        "--window-size",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=(640, 320),
        help="Window size in pixels (default: 640 320)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    parser.add_argument(
        "--truncate-jump",
        action="store_true",
        help="Narrow Bnnn jump targets to eight bits like some legacy interpreters",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        clock_speed=args.clock_speed,
        sound_enabled=not args.no_sound,
        window_size=(args.window_size[0], args.window_size[1]),
        fullscreen=args.fullscreen,
        truncate_jump_target=args.truncate_jump,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.clock_speed < 0:
        parser.error(f"clock speed must not be negative: {args.clock_speed}")
    if min(args.window_size) <= 0:
        parser.error("window size must be positive")

    app = Chip8App(build_config(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
