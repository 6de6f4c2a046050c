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

"""Override policy for lspdtool.

This package holds the static, declarative policy that drives resolution:
the exclusion list, the reserved version label path and the per-asset
override rules.

Modules:

overrides : module
    OverrideRule, Policy and resolve_asset_version.

Public API:

OverrideRule : class
    Per-asset rule (allow-listed versions, architecture scoping).
Policy : class
    Complete resolution policy.
resolve_asset_version : function
    Map a directory's nominal version to its catalogued version.

Example:
    from lspdtool.policy import OverrideRule, Policy

    policy = Policy(
        exclude=("lightspd/runsnort.sh",),
        overrides={"modules": OverrideRule(keep_versions=("stubs",), arch_scoped=True)},
    )

"""

from .overrides import DEFAULT_RULE, OverrideRule, Policy, resolve_asset_version

__all__ = ["DEFAULT_RULE", "OverrideRule", "Policy", "resolve_asset_version"]
