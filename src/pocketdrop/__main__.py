"""PocketDrop entry point.

Changes:
  - 2026-10-14: Added --no-qr and --log-level flags.
  - 2026-10-12: Initial CLI (host/port/root/upload-dir overrides).
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

from pocketdrop.config import Settings, get_settings
from pocketdrop.errors import DirectoryUnavailableError
from pocketdrop.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return get_version("pocketdrop")
    except PackageNotFoundError:
        from pocketdrop import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pocketdrop",
        description="\U0001f4e5 PocketDrop - share files and text with devices on your network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pocketdrop                              Serve on 0.0.0.0:3000
  pocketdrop --port 8080                  Use another port
  pocketdrop --root ~/Pictures            Start browsing from ~/Pictures
  pocketdrop --upload-dir /tmp/inbox      Save uploads to /tmp/inbox
""",
    )
    parser.add_argument("--host", type=str, default=None, help="Host to bind (default: 0.0.0.0)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port (default: 3000)")
    parser.add_argument(
        "--root", type=str, default=None, help="Directory listed by default (default: home)"
    )
    parser.add_argument(
        "--upload-dir",
        type=str,
        default=None,
        help="Where uploads are saved (default: ~/Downloads/PhoneDrop)",
    )
    parser.add_argument("--no-qr", action="store_true", help="Don't print the QR code")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {_package_version()}"
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of *settings* with CLI flags applied."""
    overrides: dict = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.root is not None:
        overrides["browse_root"] = Path(args.root).expanduser()
    if args.upload_dir is not None:
        overrides["upload_dir"] = Path(args.upload_dir).expanduser()
    if args.no_qr:
        overrides["show_qr"] = False
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return settings.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    setup_logging(level=settings.log_level)

    from pocketdrop.api.serve import run_server

    try:
        run_server(settings)
    except DirectoryUnavailableError as e:
        logger.error(f"Cannot start: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Stopped")


if __name__ == "__main__":
    main()
