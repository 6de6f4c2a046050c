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

"""Asset catalog construction for lspdtool.

The catalog maps each (asset name, resolved version) to the archive paths
filed under it. Keys keep the order in which they were first seen in the
archive. Paths keep archive order, and that order is what the manifest is
printed in.

Archive Layout:

    lightspd/version.txt                              -> reserved label
    lightspd/rules/3.0.0.0/3.0.0.0.rules              -> (rules, 3.0.0)
    lightspd/modules/3.1.0.0/ubuntu-x64/libfoo.so     -> (modules, 3.1.0)
    lightspd/modules/stubs/libfoo.so                  -> (modules, any)
    lightspd/policies/common/README                   -> (policies, any)

Path component 0 is the archive root, 1 the asset name, 2 the version
directory and 3 the architecture (or a file name for assets that are not
architecture specific).

Example:
    Build a catalog from an archive:
        ```python
        from pathlib import Path
        from lspdtool.archive import iter_archive_entries
        from lspdtool.catalog import CatalogBuilder
        from lspdtool.config import load_effective_policy
        from lspdtool.versioning import parse_version

        builder = CatalogBuilder(
            parse_version("3.1.0.0", strict=True),
            "ubuntu-x64",
            load_effective_policy(),
        )
        builder.scan(iter_archive_entries(Path("lightspd.tar.gz")))
        for key, paths in builder.catalog.items():
            print(key, len(paths))
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import PurePosixPath

from lspdtool.archive import ArchiveEntry
from lspdtool.logging import get_global_logger
from lspdtool.policy import Policy, resolve_asset_version
from lspdtool.versioning import ANY, Version

ASSET_MIN_COMPONENTS = 4


@dataclass(frozen=True)
class AssetKey:
    """A distinct variant of a named asset.

    Attributes:
        name: Asset name (second path component).
        version: Resolved version after override policy.

    """

    name: str
    version: Version

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


class Catalog:
    """Ordered mapping of AssetKey to archive paths.

    Key order is first-insertion order and survives removals. Paths are
    also kept in insertion order across keys.
    """

    def __init__(self) -> None:
        self._entries: dict[AssetKey, list[str]] = {}
        self._order: list[tuple[AssetKey, str]] = []

    def add(self, key: AssetKey, path: str) -> None:
        """Append a path under key, creating the key at the end if new."""
        self._entries.setdefault(key, []).append(path)
        self._order.append((key, path))

    def remove(self, key: AssetKey) -> None:
        """Remove key and its paths. Missing keys are ignored."""
        if self._entries.pop(key, None) is not None:
            self._order = [(k, p) for k, p in self._order if k != key]

    def keys(self) -> list[AssetKey]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[AssetKey, list[str]]]:
        for key, paths in self._entries.items():
            yield key, list(paths)

    def paths(self) -> list[str]:
        """All paths in the order they were added."""
        return [path for _, path in self._order]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __getitem__(self, key: AssetKey) -> list[str]:
        return list(self._entries[key])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AssetKey]:
        return iter(list(self._entries))


def _prefix_parts(prefix: str) -> tuple[str, ...]:
    return PurePosixPath(prefix).parts


class CatalogBuilder:
    """Single-pass archive visitor that fills a Catalog.

    Call visit() once per entry, in archive order. The version label is
    read during its visit because the archive stream cannot be rewound.

    Attributes:
        catalog: The catalog being built.
        package_version: Raw text of the version label ("" if not seen).

    """

    def __init__(self, target_version: Version, target_arch: str, policy: Policy) -> None:
        self.target_version = target_version
        self.target_arch = target_arch
        self.policy = policy
        self.catalog = Catalog()
        self.package_version = ""
        self._label_path = PurePosixPath(policy.label_path)
        self._exclude = [_prefix_parts(p) for p in policy.exclude]

    def _is_excluded(self, parts: tuple[str, ...]) -> bool:
        return any(parts[: len(prefix)] == prefix for prefix in self._exclude)

    def visit(self, entry: ArchiveEntry) -> None:
        """Classify one archive entry.

        Raises:
            InvalidVersionString: A version directory has too many fields.
            ArchiveError: The version label could not be read.

        """
        logger = get_global_logger()

        if entry.is_dir:
            return

        path = PurePosixPath(entry.path)
        parts = path.parts
        if self._is_excluded(parts):
            logger.debug("CATALOG", f"Excluded: {entry.path}")
            return

        if len(parts) >= ASSET_MIN_COMPONENTS:
            name, nominal, arch = parts[1], parts[2], parts[3]
            version = resolve_asset_version(
                self.policy.rule_for(name),
                nominal=nominal,
                arch=arch,
                target_arch=self.target_arch,
            )
            if version > self.target_version:
                logger.debug(
                    "CATALOG", f"Skipped (newer than target): {entry.path}"
                )
            else:
                self.catalog.add(AssetKey(name, version), entry.path)
                logger.debug("CATALOG", f"Added {name} {version}: {entry.path}")

        if path == self._label_path:
            self.package_version = entry.read_text()
            self.catalog.add(AssetKey(self.policy.reserved_name, ANY), entry.path)
            logger.verbose(
                "CATALOG", f"Package version: {self.package_version.strip()}"
            )

    def scan(self, entries: Iterable[ArchiveEntry]) -> Catalog:
        """Visit every entry and return the catalog."""
        for entry in entries:
            self.visit(entry)
        get_global_logger().verbose(
            "CATALOG", f"Catalogued {len(self.catalog)} asset key(s)"
        )
        return self.catalog


def build_catalog(
    entries: Iterable[ArchiveEntry],
    target_version: Version,
    target_arch: str,
    policy: Policy,
) -> tuple[Catalog, str]:
    """Build a catalog in one pass.

    Returns:
        A tuple (catalog, package_version).

    """
    builder = CatalogBuilder(target_version, target_arch, policy)
    builder.scan(entries)
    return builder.catalog, builder.package_version
