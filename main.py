"""
Entry point for the tangram puzzle.

Supports two modes:
  - play: Solve the puzzle interactively in a pygame window.
  - hint: Render the solved layout to the hint overlay image.

Usage:
    python main.py --mode play
    python main.py --mode play --seed 7
    python main.py --mode hint --output assets/hint.png
    python main.py --config config/tangram.yaml
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty for an empty file).

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, seed and output attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tangram puzzle: drag, rotate and flip seven pieces back into place.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "hint"],
        default="play",
        help="Run mode: 'play' (interactive puzzle), 'hint' (write the hint image).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/tangram.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for piece shuffles in 'play' mode (default: config value or random).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Where 'hint' mode writes the image (default: the config's hint_image).",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = parse_args()
    config = load_config(args.config)

    if args.mode == "play":
        from src.play import play_manual
        play_manual(config, seed=args.seed)

    elif args.mode == "hint":
        from src.game.board import Board
        from src.hint_image import save_hint
        output = args.output or config.get("hint_image")
        if not output:
            print("Error: --output or a 'hint_image' config entry is required for 'hint' mode.", file=sys.stderr)
            sys.exit(1)
        board = Board(config.get("board_size", 400), config.get("grid_size", 8))
        path = save_hint(board, output)
        print(f"Hint image saved: {path}")

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
