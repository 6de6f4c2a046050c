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

"""Public API return types for lspdtool.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types
    (like Version and AssetKey) remain co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from lspdtool.catalog import AssetKey
from lspdtool.versioning import Version


@dataclass(frozen=True)
class ResolveResult:
    """Result from resolving an archive against a target.

    Attributes:
        target_version: Version ceiling used for resolution.
        target_arch: Architecture used for resolution.
        package_version: Raw text of the package version label ("" if the
            archive has none).
        manifest: Retained paths in archive order.
        assets: Retained keys with a real version (no "any" keys), in
            catalog order.
        removed: Keys dropped as superseded by the conflict resolver.
    """

    target_version: Version
    target_arch: str
    package_version: str
    manifest: tuple[str, ...]
    assets: tuple[AssetKey, ...]
    removed: tuple[AssetKey, ...]
