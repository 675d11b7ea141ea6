"""CLI entry point: python -m clicksim.mcp [--save-dir DIR]"""

from __future__ import annotations

import argparse
from pathlib import Path

from clicksim.config import EngineConfig, configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="python -m clicksim.mcp")
    parser.add_argument("--save-dir", default=None, help="Directory for the save file")
    args = parser.parse_args(argv)

    config = EngineConfig.from_env()
    if args.save_dir:
        config.save_dir = Path(args.save_dir)
    # Logs go to stderr; stdout carries the stdio transport.
    configure_logging(config.log_level)

    from clicksim.mcp.server import create_server

    server = create_server(config)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
