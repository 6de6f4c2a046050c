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

"""Exception hierarchy for lspdtool.

This module defines a small exception hierarchy that lets callers tell
apart the different ways a resolution run can fail:

- InvalidVersionString: A version string could not be parsed
- ConfigError: Policy file errors (YAML parse, missing file, bad structure)
- ArchiveError: Archive errors (unreadable, corrupt, bad version label)

All exceptions inherit from LSPDError, allowing users to catch every
lspdtool error with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from lspdtool.core import resolve_package
        from lspdtool.exceptions import ArchiveError, InvalidVersionString

        try:
            result = resolve_package("3.1.0.0", "ubuntu-x64", Path("lspd.tar.gz"))
        except InvalidVersionString as e:
            print(f"Bad target version: {e}")
        except ArchiveError as e:
            print(f"Archive error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "LSPDError",
    "InvalidVersionString",
    "ConfigError",
    "ArchiveError",
]


class LSPDError(Exception):
    """Base exception for all lspdtool errors."""

    pass


class InvalidVersionString(LSPDError, ValueError):
    """Raised when a version string cannot be parsed.

    This exception is raised when:

    - The string has more than five dot/dash separated fields
    - A field is not a non-negative integer (strict parsing only)
    - A field does not fit in 32 bits (strict parsing only)

    It also subclasses ValueError so generic callers that only expect
    ValueError from parsing keep working.
    """

    pass


class ConfigError(LSPDError):
    """Raised for policy configuration errors.

    This exception is raised when there are problems with:

    - A policy file that does not exist
    - YAML parsing (syntax errors, empty file, non-mapping top level)
    - Fields with the wrong type (e.g. exclude is not a list)

    Example:
        Catching configuration errors:
            ```python
            from lspdtool.config import load_effective_policy
            from lspdtool.exceptions import ConfigError

            try:
                policy = load_effective_policy(Path("policy.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class ArchiveError(LSPDError):
    """Raised for archive read errors.

    This exception is raised when there are problems with:

    - Opening the archive file
    - Decompressing or parsing the tar stream (truncated or corrupt data)
    - Reading or decoding the reserved version label entry
    """

    pass
