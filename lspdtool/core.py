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

"""Core orchestration for lspdtool.

This module ties the pipeline together:

    archive entries -> CatalogBuilder -> resolve_conflicts -> ResolveResult

Design Principles:

- One forward pass over the archive; nothing is extracted to disk
- Functions return structured data (dataclasses) for easy testing
- Error handling uses exceptions; CLI layer formats for user display
- The policy is immutable once loaded

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from lspdtool.core import resolve_package

        result = resolve_package("3.1.0.0", "ubuntu-x64", Path("lightspd.tar.gz"))

        for path in result.manifest:
            print(path)
        ```

"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from lspdtool.archive import ArchiveEntry, iter_archive_entries
from lspdtool.catalog import CatalogBuilder
from lspdtool.config import load_effective_policy
from lspdtool.exceptions import InvalidVersionString
from lspdtool.logging import get_global_logger
from lspdtool.policy import Policy
from lspdtool.resolver import resolve_conflicts
from lspdtool.results import ResolveResult
from lspdtool.versioning import Version, parse_version


def parse_target_version(text: str) -> Version:
    """Parse the caller's target version strictly.

    Raises:
        InvalidVersionString: If the text does not parse or is the "any"
            sentinel (e.g. "0" or "").

    """
    version = parse_version(text, strict=True)
    if version.is_any():
        raise InvalidVersionString(f"invalid target version: {text!r}")
    return version


def resolve_entries(
    entries: Iterable[ArchiveEntry],
    target_version: Version | str,
    target_arch: str,
    policy: Policy | None = None,
) -> ResolveResult:
    """Resolve an entry sequence against a target version and architecture.

    Args:
        entries: Archive entries in archive order.
        target_version: Version ceiling, as a Version or a string.
        target_arch: Target architecture (e.g. "ubuntu-x64").
        policy: Resolution policy. Defaults to the built-in policy.

    Returns:
        The resolution result.

    Raises:
        InvalidVersionString: Bad target version or bad version directory.
        ArchiveError: The entries could not be read.

    """
    logger = get_global_logger()

    if isinstance(target_version, str):
        target_version = parse_target_version(target_version)
    elif target_version.is_any() or not target_version.in_range():
        raise InvalidVersionString(f"invalid target version: {target_version!r}")

    if policy is None:
        policy = load_effective_policy()

    logger.step(1, 2, f"Cataloguing assets for {target_version} ({target_arch})...")
    builder = CatalogBuilder(target_version, target_arch, policy)
    catalog = builder.scan(entries)

    logger.step(2, 2, "Resolving version conflicts...")
    removed = resolve_conflicts(catalog, target_version, policy)

    assets = tuple(key for key in catalog if not key.version.is_any())
    return ResolveResult(
        target_version=target_version,
        target_arch=target_arch,
        package_version=builder.package_version,
        manifest=tuple(catalog.paths()),
        assets=assets,
        removed=tuple(removed),
    )


def resolve_package(
    target_version: Version | str,
    target_arch: str,
    archive_path: Path,
    policy: Policy | None = None,
) -> ResolveResult:
    """Resolve a .tar.gz LightSPD archive against a target.

    This is the main entry point for the 'lspd' command.

    Args:
        target_version: Version ceiling, as a Version or a string.
        target_arch: Target architecture.
        archive_path: Path to the gzip-compressed tar archive.
        policy: Resolution policy. Defaults to the built-in policy.

    Returns:
        The resolution result.

    Raises:
        InvalidVersionString: Bad target version or bad version directory.
        ArchiveError: Unreadable or corrupt archive.

    """
    get_global_logger().verbose("CORE", f"Resolving {archive_path}")
    return resolve_entries(
        iter_archive_entries(archive_path), target_version, target_arch, policy
    )
