from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .board import load_board
from .config import EmitConfig
from .system_fonts import register_system_font
from .text import FontRegistry


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compile a board description into Gerber files.")
    parser.add_argument("board", type=Path, help="Board description (JSON)")
    parser.add_argument("output_dir", type=Path, help="Directory for the generated files")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an emit config JSON (overrides the board's config)",
    )
    parser.add_argument(
        "--font",
        type=Path,
        action="append",
        default=[],
        help="Font JSON to register before compiling (repeatable)",
    )
    parser.add_argument(
        "--system-font",
        action="append",
        default=[],
        metavar="FAMILY",
        help="Installed font family to register, e.g. 'DejaVu Sans' (repeatable)",
    )
    parser.add_argument("--zip", action="store_true", help="Also bundle the files into <prefix>.zip")
    args = parser.parse_args(argv)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    config = EmitConfig.from_json(args.config) if args.config else None
    fonts = FontRegistry()
    for font_path in args.font:
        fonts.load(font_path)
    for family in args.system_font:
        register_system_font(fonts, family)

    document = load_board(args.board, config=config, fonts=fonts)
    document.write(args.output_dir, bundle=args.zip)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
