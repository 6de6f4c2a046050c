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

"""Per-asset override policy for lspdtool.

Decides which version an asset directory is catalogued under. Most assets
keep the version named by their directory; a rule for the asset name can
instead force-keep (the "any" sentinel) or force-discard the entry.

Example:
    Resolve the version of a modules directory:

        from lspdtool.policy.overrides import OverrideRule, resolve_asset_version

        rule = OverrideRule(keep_versions=("stubs",), arch_scoped=True)
        resolved = resolve_asset_version(
            rule,
            nominal="3.1.0.0",
            arch="centos-x64",
            target_arch="ubuntu-x64",
        )
        # FORCE_DISCARD: wrong architecture

"""

from __future__ import annotations

from dataclasses import dataclass, field

from lspdtool.versioning import ANY, FORCE_DISCARD, Version, parse_version


@dataclass(frozen=True)
class OverrideRule:
    """Override rule for one asset name.

    Attributes:
        keep_versions: Version directory names that are always retained
            (mapped to the "any" sentinel), e.g. "stubs".
        arch_scoped: If True, the fourth path component is an architecture
            and entries for other architectures are discarded.
        keep_arches: Architectures accepted in addition to the target.
        reduce: If False, every version of this asset is retained instead
            of only the newest one not exceeding the target.

    """

    keep_versions: tuple[str, ...] = ()
    arch_scoped: bool = False
    keep_arches: tuple[str, ...] = ()
    reduce: bool = True


# Assets without an explicit rule
DEFAULT_RULE = OverrideRule()


@dataclass(frozen=True)
class Policy:
    """Static resolution policy.

    Attributes:
        label_path: Archive path of the package version label file.
        reserved_name: Catalog name the label file is stored under.
        exclude: Path prefixes that are never part of the manifest.
        overrides: Asset name to OverrideRule.
        package_title: Report title for the package version line.
        runtime_title: Report title for the target version line.

    """

    label_path: str = "lightspd/version.txt"
    reserved_name: str = "lightspd/version.txt"
    exclude: tuple[str, ...] = ()
    overrides: dict[str, OverrideRule] = field(default_factory=dict)
    package_title: str = "LightSPD"
    runtime_title: str = "Snort"

    def rule_for(self, name: str) -> OverrideRule:
        """Return the rule for an asset name, or DEFAULT_RULE."""
        return self.overrides.get(name, DEFAULT_RULE)


def resolve_asset_version(
    rule: OverrideRule,
    *,
    nominal: str,
    arch: str,
    target_arch: str,
) -> Version:
    """Resolve the version an asset directory is catalogued under.

    Rules are applied in order:

    1. nominal in rule.keep_versions -> ANY (always retained)
    2. arch-scoped rule and arch is neither the target nor allow-listed
       -> FORCE_DISCARD (dropped by the greater-than-target cutoff)
    3. otherwise the nominal version, parsed leniently

    Args:
        rule: Override rule for the asset name.
        nominal: Version directory name (third path component).
        arch: Declared architecture (fourth path component).
        target_arch: Architecture requested by the caller.

    Returns:
        The resolved Version.

    Raises:
        InvalidVersionString: If nominal has more than five fields.

    """
    if nominal in rule.keep_versions:
        return ANY
    if rule.arch_scoped and arch != target_arch and arch not in rule.keep_arches:
        return FORCE_DISCARD
    return parse_version(nominal)
