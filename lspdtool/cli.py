# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for lspdtool.

This module provides the ``lspd`` entry point. It resolves a Talos LightSPD
archive against a Snort version and architecture and prints the manifest
of files to extract.

Usage:

    lspd [options] <snort-version> <snort-arch> <path/to/Talos_LightSPD.tar.gz>

Example:
    Print the manifest for Snort 3.1.0.0 on Ubuntu:
        ```bash
        $ lspd 3.1.0.0 ubuntu-x64 Talos_LightSPD.tar.gz > manifest.txt
        ```

    Extract only the compatible files:
        ```bash
        $ lspd 3.1.0.0 ubuntu-x64 Talos_LightSPD.tar.gz \\
            | tar -xzf Talos_LightSPD.tar.gz -T -
        ```

    Use a site policy and show progress:
        ```bash
        $ lspd --policy site.yaml --verbose 3.1.0.0 ubuntu-x64 lspd.tar.gz
        ```

Exit Codes:

- 0: Success
- 1: Usage error, unreadable archive or policy file
- 2: Invalid target version

Note:
    stdout carries only the manifest. The report, errors and all log
    output go to stderr. Verbose mode shows full tracebacks on errors.

"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
import traceback

from lspdtool import __version__
from lspdtool.config import load_effective_policy
from lspdtool.core import parse_target_version, resolve_package
from lspdtool.exceptions import (
    ArchiveError,
    ConfigError,
    InvalidVersionString,
    LSPDError,
)
from lspdtool.logging import get_logger, set_global_logger
from lspdtool.manifest import emit

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ERROR = 1
EXIT_INVALID_TARGET = 2


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _print_error(err: Exception, args: argparse.Namespace) -> None:
    print(f"Error: {err}", file=sys.stderr)
    if args.verbose or args.debug:
        traceback.print_exc()


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for the 'lspd' command.

    Parses the target version, loads the policy, scans the archive once and
    writes the manifest (stdout) and report (stderr).

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 success, 1 error, 2 invalid target version).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        target_version = parse_target_version(args.snort_version)
    except InvalidVersionString:
        print(f"Error: invalid snort version: {args.snort_version}", file=sys.stderr)
        return EXIT_INVALID_TARGET

    try:
        policy = load_effective_policy(args.policy)
        result = resolve_package(
            target_version, args.snort_arch, Path(args.archive), policy
        )
    except (ArchiveError, ConfigError, InvalidVersionString) as err:
        _print_error(err, args)
        return EXIT_ERROR
    except LSPDError as err:
        # Catch any other lspdtool errors we might have missed
        _print_error(err, args)
        return EXIT_ERROR

    emit(result, policy)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the 'lspd' command."""
    parser = _ArgumentParser(
        prog="lspd",
        description=(
            "Print the manifest of Talos LightSPD files compatible with a "
            "Snort version and architecture."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"lspd {__version__}",
    )
    parser.add_argument(
        "snort_version",
        metavar="snort-version",
        help="Target Snort version (e.g. 3.1.0.0)",
    )
    parser.add_argument(
        "snort_arch",
        metavar="snort-arch",
        help="Target architecture (e.g. ubuntu-x64)",
    )
    parser.add_argument(
        "archive",
        metavar="path/to/Talos_LightSPD.tar.gz",
        help="LightSPD package archive",
    )
    parser.add_argument(
        "--policy",
        type=Path,
        default=None,
        help="YAML policy file layered over the built-in policy",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates on stderr",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show per-entry decisions on stderr (implies --verbose)",
    )
    parser.set_defaults(func=cmd_resolve)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the lspd CLI.

    This function is registered as the 'lspd' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
