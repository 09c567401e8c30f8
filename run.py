"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import AMBER, MONOCHROME

PALETTES = {
    "mono": MONOCHROME,
    "amber": AMBER,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "--program",
        type=Path,
        required=True,
        help="Path to the CHIP-8 program image to load at 0x200",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--cpu-hz",
        type=int,
        default=700,
        help="Instructions executed per second (default: 700)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the CXNN random number generator",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cpu_hz <= 0:
        parser.error("--cpu-hz must be positive")

    config = AppConfig(
        program_path=args.program,
        scale=args.scale,
        fullscreen=args.fullscreen,
        cpu_hz=args.cpu_hz,
        palette=PALETTES[args.palette],
        seed=args.seed,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
