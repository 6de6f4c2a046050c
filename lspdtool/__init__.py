"""
lspdtool - LightSPD manifest resolver

A Python CLI tool that picks, from a Talos LightSPD package archive, the
files compatible with a given Snort version and architecture.

lspdtool provides:
  - One forward pass over a .tar.gz archive (nothing extracted to disk)
  - Loose version parsing for Snort versions and LightSPD directories
  - Declarative per-asset override rules (architecture scoping, stubs)
  - Newest-compatible-version selection per asset, in archive order
  - A manifest on stdout and a compatibility report on stderr

Quick Start
-----------
Print the manifest for Snort 3.1.0.0 on Ubuntu:

    $ lspd 3.1.0.0 ubuntu-x64 Talos_LightSPD.tar.gz

For full CLI documentation:

    $ lspd --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration functions.
catalog : module
    Single-pass archive visitor and the ordered asset catalog.
resolver : module
    Per-asset version conflict resolution.
manifest : module
    Manifest and report output.
archive : package
    Forward-only .tar.gz entry stream.
config : package
    Built-in policy and YAML policy loading.
policy : package
    Override rules.
versioning : package
    The Version type and parser.

Public API
----------
    from lspdtool.core import resolve_package
    from lspdtool.config import load_effective_policy
    from lspdtool.versioning import Version, parse_version

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "LightSPD manifest resolver for Snort"

# Re-export commonly used functions for convenience
from lspdtool.config import load_effective_policy
from lspdtool.core import resolve_package
from lspdtool.versioning import Version, parse_version

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "resolve_package",
    "load_effective_policy",
    "Version",
    "parse_version",
]
