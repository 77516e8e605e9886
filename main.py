import argparse
import sys
from pathlib import Path

from pastry.config import PastrySettings
from pastry.runner import run


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pastebin server: write port, read/command port and web page"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Address to bind every port to (defaults to PASTRY_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--http-port",
        dest="http_port",
        type=int,
        default=None,
        help="Port for the web page (default: 9180)",
    )
    parser.add_argument(
        "--write-port",
        dest="write_port",
        type=int,
        default=None,
        help="Port that stores whatever is sent to it (default: 9181)",
    )
    parser.add_argument(
        "--read-port",
        dest="read_port",
        type=int,
        default=None,
        help="Port answering get/list/grep/drop commands (default: 9182)",
    )
    parser.add_argument(
        "--cache-file",
        dest="cache_file",
        type=Path,
        default=None,
        help="Snapshot file (defaults to $XDG_CACHE_HOME/pastry/pastes.json)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> PastrySettings:
    settings = PastrySettings.from_env()
    for name in ("host", "http_port", "write_port", "read_port", "cache_file", "log_level"):
        value = getattr(args, name)
        if value is not None:
            setattr(settings, name, value)
    return settings


def main(argv=None) -> None:
    args = parse_args(argv)
    sys.exit(run(build_settings(args)))


if __name__ == "__main__":
    main()
