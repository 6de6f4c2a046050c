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

"""Manifest and report output for lspdtool.

The manifest (one retained path per line) goes to the primary stream and
is meant to be fed to an extraction step, e.g. ``tar -xzf pkg.tar.gz -T -``.
The report goes to the secondary stream:

    LightSPD 2024-06-10-001
    Snort 3.1.0
     modules 3.1.0
     rules 3.0.0
"""

from __future__ import annotations

from collections.abc import Iterable
import sys
from typing import TextIO

from lspdtool.policy import Policy
from lspdtool.results import ResolveResult


def write_manifest(paths: Iterable[str], stream: TextIO) -> None:
    """Write one path per line."""
    for path in paths:
        stream.write(f"{path}\n")


def write_report(result: ResolveResult, stream: TextIO, policy: Policy) -> None:
    """Write the report to stream.

    The first line carries the captured version label with surrounding
    whitespace (usually the trailing newline of version.txt) stripped. The
    target line has no trailing space. Each retained non-"any" key gets one
    indented line, in catalog order.
    """
    stream.write(f"{policy.package_title} {result.package_version.strip()}\n")
    stream.write(f"{policy.runtime_title} {result.target_version}\n")
    for key in result.assets:
        stream.write(f" {key.name} {key.version}\n")


def emit(
    result: ResolveResult,
    policy: Policy,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Write the manifest to out (stdout) and the report to err (stderr)."""
    write_manifest(result.manifest, out if out is not None else sys.stdout)
    write_report(result, err if err is not None else sys.stderr, policy)
