"""CLI entrypoint for modulegen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import ModulegenError
from .logging import configure_logging
from .orchestrator import Generator

_EPILOG = """\
Generate the Atomic Host module:
  modulegen ./data/Fedora/devel/atomic
Generate the complete Host & Platform set:
  modulegen ./data/Fedora/devel/hp
Generate the extended Bootstrap module only:
  modulegen ./data/Fedora/devel/bootstrap
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modulegen",
        description="Generate modulemd files for the Host & Platform.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Print progress information to stderr.",
    )
    parser.add_argument(
        "base",
        help=(
            "Path to the package lists. The last path segment selects the mode: "
            "'bootstrap', 'atomic', or anything else for host, shim and platform."
        ),
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for modulegen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    base = Path(args.base)
    if not base.is_dir():
        parser.print_help(sys.stderr)
        parser.exit(1)

    configure_logging(verbose=bool(args.verbose))

    try:
        Generator().run(base)
    except ModulegenError as exc:
        parser.exit(1, f"modulegen failed: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
