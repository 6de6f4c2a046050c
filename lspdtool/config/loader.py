"""
Policy configuration loading and merging for lspdtool.

The resolution policy has two layers:

1. **Built-in defaults** (DEFAULTS in this module)
   - Exclusion prefixes for the known non-asset paths of a LightSPD package
   - The reserved version label path (lightspd/version.txt)
   - The override rule for "modules" (stubs always kept, arch scoped)

2. **Policy file** (optional YAML passed with --policy)
   - Overrides the defaults for site-specific archives
   - Unknown top-level keys are ignored

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

So a policy file that sets ``exclude`` replaces the whole default list,
while one that sets ``overrides.rules`` adds a rule and keeps ``modules``.

Example Policy File
-------------------
    exclude:
      - lightspd/runsnort.sh
      - lightspd/manifest.json
      - lightspd/modules/src/
      - lightspd/docs/
    overrides:
      modules:
        keep_versions: [stubs]
        arch_scoped: true
        keep_arches: [noarch]
      policies:
        reduce: false

Error Handling
--------------
- ConfigError: file missing, YAML parse error, empty file, wrong types
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from lspdtool.exceptions import ConfigError
from lspdtool.logging import get_global_logger
from lspdtool.policy import OverrideRule, Policy

DEFAULTS: dict[str, Any] = {
    "label_path": "lightspd/version.txt",
    "reserved_name": "lightspd/version.txt",
    "exclude": [
        "lightspd/runsnort.sh",
        "lightspd/manifest.json",
        "lightspd/modules/src/",
    ],
    "overrides": {
        "modules": {
            "keep_versions": ["stubs"],
            "arch_scoped": True,
        },
    },
    "report": {
        "package_title": "LightSPD",
        "runtime_title": "Snort",
    },
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - missing file, invalid YAML or empty file
    """
    if not p.exists():
        raise ConfigError(f"policy file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"cannot read policy file: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Validation
# -------------------------------


def _str_list(value: Any, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{where} must be a list of strings")
    return tuple(value)


def _str_value(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{where} must be a non-empty string")
    return value


def _bool_value(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{where} must be true or false")
    return value


def _build_rule(name: str, raw: Any) -> OverrideRule:
    where = f"overrides.{name}"
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be a mapping")

    unknown = set(raw) - {"keep_versions", "arch_scoped", "keep_arches", "reduce"}
    if unknown:
        raise ConfigError(f"{where} has unknown fields: {', '.join(sorted(unknown))}")

    return OverrideRule(
        keep_versions=_str_list(raw.get("keep_versions"), f"{where}.keep_versions"),
        arch_scoped=_bool_value(raw.get("arch_scoped", False), f"{where}.arch_scoped"),
        keep_arches=_str_list(raw.get("keep_arches"), f"{where}.keep_arches"),
        reduce=_bool_value(raw.get("reduce", True), f"{where}.reduce"),
    )


def build_policy(cfg: dict[str, Any]) -> Policy:
    """Validate a merged configuration dict and build a Policy.

    Args:
        cfg: Configuration dict with the same shape as DEFAULTS.

    Returns:
        The validated Policy.

    Raises:
        ConfigError: If any field has the wrong type.

    """
    overrides_raw = cfg.get("overrides") or {}
    if not isinstance(overrides_raw, dict):
        raise ConfigError("overrides must be a mapping of asset name to rule")

    report = cfg.get("report") or {}
    if not isinstance(report, dict):
        raise ConfigError("report must be a mapping")

    return Policy(
        label_path=_str_value(cfg.get("label_path"), "label_path"),
        reserved_name=_str_value(cfg.get("reserved_name"), "reserved_name"),
        exclude=_str_list(cfg.get("exclude"), "exclude"),
        overrides={
            str(name): _build_rule(str(name), raw)
            for name, raw in overrides_raw.items()
        },
        package_title=_str_value(
            report.get("package_title"), "report.package_title"
        ),
        runtime_title=_str_value(
            report.get("runtime_title"), "report.runtime_title"
        ),
    )


# -------------------------------
# Debug helpers
# -------------------------------


def _log_yaml_content(data: dict[str, Any]) -> None:
    """Dump a config dict as YAML to the debug log."""
    logger = get_global_logger()
    yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", "  " + line)


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(policy_path: Path | None = None) -> dict[str, Any]:
    """
    Load the merged configuration dict.

    Steps
      1) Start from DEFAULTS.
      2) If policy_path is given, load it and deep-merge it on top.

    Returns
      The merged configuration dict (DEFAULTS is never mutated).

    Raises
      ConfigError on a missing file, YAML parse errors or a non-mapping
      top level.
    """
    logger = get_global_logger()

    merged = copy.deepcopy(DEFAULTS)
    if policy_path is None:
        logger.verbose("CONFIG", "Using built-in policy")
        return merged

    policy_path = policy_path.resolve()
    logger.verbose("CONFIG", f"Loading policy: {policy_path}")

    overlay = _load_yaml_file(policy_path)
    if not isinstance(overlay, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {policy_path}")

    logger.debug("CONFIG", f"--- Content from {policy_path.name} ---")
    _log_yaml_content(overlay)

    return _deep_merge_dicts(merged, overlay)


def load_effective_policy(policy_path: Path | None = None) -> Policy:
    """
    Load, merge and validate the resolution policy.

    Args:
        policy_path: Optional YAML policy file layered over DEFAULTS.

    Returns:
        The validated Policy.

    Raises:
        ConfigError: On any load or validation failure.

    Example:
        ```python
        from lspdtool.config import load_effective_policy

        policy = load_effective_policy()
        policy.rule_for("modules").keep_versions  # ("stubs",)
        ```
    """
    cfg = load_effective_config(policy_path)
    policy = build_policy(cfg)
    get_global_logger().debug(
        "CONFIG",
        f"Policy: {len(policy.exclude)} exclusion(s), "
        f"{len(policy.overrides)} override rule(s)",
    )
    return policy
