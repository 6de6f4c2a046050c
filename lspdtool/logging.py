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

"""Diagnostic output for lspdtool.

Library modules fetch the process-wide logger with get_global_logger() and
never print directly. The lspd command installs a DefaultLogger built from
its -v/-d flags; library callers get a SilentLogger unless they install
their own.

Levels:
- step: numbered pipeline stage, shown with --verbose
- verbose: one line per stage result, e.g. "[RESOLVE] Removed 2 ..."
- debug: one line per archive entry or resolver decision

Everything is written to stderr. stdout belongs to the manifest.

Example:
    Capture debug output in a test or script:
        ```python
        import io
        from lspdtool.logging import DefaultLogger, set_global_logger

        buf = io.StringIO()
        set_global_logger(DefaultLogger(debug=True, stream=buf))
        ```
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """What lspdtool modules expect from a logger."""

    def step(self, step: int, total: int, message: str) -> None:
        """Report entering pipeline stage step of total."""
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Report a stage-level result tagged with prefix (e.g. "CATALOG")."""
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Report a per-entry decision tagged with prefix (e.g. "RESOLVE")."""
        ...


class DefaultLogger:
    """Writes "[prefix] message" lines to stderr or a given stream.

    A plain run prints nothing here, so the only stderr text is the report.
    """

    def __init__(
        self, verbose: bool = False, debug: bool = False, stream: TextIO | None = None
    ) -> None:
        """
        Args:
            verbose: Show step and verbose lines.
            debug: Also show debug lines. Turns verbose on.
            stream: Destination. None means sys.stderr as of each write, so
                pytest's capsys sees the output.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, text: str) -> None:
        print(text, file=self._stream or sys.stderr)

    def step(self, step: int, total: int, message: str) -> None:
        if self._verbose:
            self._write(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Discards everything. Installed until the CLI or a caller replaces it."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build a stderr logger for the lspd command's -v/-d flags."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger installed for this process."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install logger for every lspdtool module in this process."""
    global _global_logger
    _global_logger = logger
