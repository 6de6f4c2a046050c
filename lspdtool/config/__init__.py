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

"""Configuration loading for lspdtool.

The resolution policy is built from two layers:

  - Built-in defaults for Talos LightSPD packages
  - An optional YAML policy file (``lspd --policy policy.yaml``)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins).

Public API:

- load_effective_config: Load and merge the raw configuration dict
- load_effective_policy: Load, merge and validate into a Policy

Example:
    Basic usage:

        from pathlib import Path
        from lspdtool.config import load_effective_policy

        policy = load_effective_policy(Path("site-policy.yaml"))
        print(policy.exclude)

"""

from .loader import DEFAULTS, build_policy, load_effective_config, load_effective_policy

__all__ = ["DEFAULTS", "build_policy", "load_effective_config", "load_effective_policy"]
