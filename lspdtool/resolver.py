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

"""Version conflict resolution for lspdtool.

Reduces a catalog to one version per asset name: the newest version that
does not exceed the target. Keys under the "any" sentinel are never
touched.

The reduction is a single pass in catalog order with a running selection
per name. Because the catalog builder already drops every key newer than
the target, every candidate here is <= target and the running selection
ends on the true maximum whatever order the archive lists versions in.

Example:
    ```python
    from lspdtool.resolver import resolve_conflicts

    removed = resolve_conflicts(catalog, target_version, policy)
    for key in removed:
        print(f"superseded: {key}")
    ```
"""

from __future__ import annotations

from lspdtool.catalog import AssetKey, Catalog
from lspdtool.logging import get_global_logger
from lspdtool.policy import Policy
from lspdtool.versioning import Version


def resolve_conflicts(
    catalog: Catalog, target_version: Version, policy: Policy | None = None
) -> list[AssetKey]:
    """Remove superseded asset versions from the catalog in place.

    For each name, the first key seen becomes the selection. A later key
    replaces it only if it is newer and not newer than the target; the
    loser (old selection or new key) is marked and removed after the scan.

    Args:
        catalog: Catalog to reduce. Mutated in place.
        target_version: Version ceiling.
        policy: If given, names whose rule has reduce=False are left alone.

    Returns:
        The removed keys, in the order they were marked.

    """
    logger = get_global_logger()

    selected: dict[str, Version] = {}
    marked: list[AssetKey] = []

    for key in catalog.keys():
        if key.version.is_any():
            continue
        if policy is not None and not policy.rule_for(key.name).reduce:
            continue

        current = selected.get(key.name)
        if current is None:
            selected[key.name] = key.version
            continue

        if key.version > current and key.version <= target_version:
            selected[key.name] = key.version
            marked.append(AssetKey(key.name, current))
            logger.debug("RESOLVE", f"{key.name}: {key.version} supersedes {current}")
        else:
            marked.append(key)
            logger.debug("RESOLVE", f"{key.name}: {current} supersedes {key.version}")

    for key in marked:
        catalog.remove(key)

    logger.verbose("RESOLVE", f"Removed {len(marked)} superseded asset key(s)")
    return marked
