"""
pms - CLI entry point
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pms import __version__
from pms.core import config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pms",
        description="Practical Music Search - interactive MPD client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n  pms\n  pms -c 'cursor home; play cursor'",
    )
    parser.add_argument("--version", action="version", version=f"pms {__version__}")
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--host", help="MPD host (overrides config and MPD_HOST)")
    parser.add_argument("--port", type=int, help="MPD port (overrides config and MPD_PORT)")
    parser.add_argument(
        "-c",
        "--command",
        help="Run one command line and exit instead of prompting",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the pms command."""
    args = build_parser().parse_args(argv)

    cfg = config.load_config(args.config)
    if args.host:
        cfg.mpd.host = args.host
    if args.port:
        cfg.mpd.port = args.port
    if args.command is not None:
        # One-shot runs have no use for background refresh
        cfg.mpd.poll_interval = 0

    from .main import interactive_mode

    sys.exit(interactive_mode(cfg, command=args.command))


if __name__ == "__main__":
    main()
