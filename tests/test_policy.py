"""
Tests for lspdtool.policy module.

Tests override rule evaluation including:
- Allow-listed version directories
- Architecture scoping and allow-listed architectures
- Default rule for assets without overrides
"""

from __future__ import annotations

from lspdtool.policy import DEFAULT_RULE, OverrideRule, Policy, resolve_asset_version
from lspdtool.versioning import ANY, FORCE_DISCARD, Version

MODULES = OverrideRule(keep_versions=("stubs",), arch_scoped=True)


class TestResolveAssetVersion:
    """Tests for resolve_asset_version."""

    def test_matching_arch_keeps_nominal_version(self):
        """Test that the target architecture keeps the directory version."""
        v = resolve_asset_version(
            MODULES, nominal="3.1.0.0", arch="ubuntu-x64", target_arch="ubuntu-x64"
        )
        assert v == Version(3, 1, 0, 0, 0)

    def test_other_arch_is_force_discarded(self):
        """Test that other architectures map to FORCE_DISCARD."""
        v = resolve_asset_version(
            MODULES, nominal="3.1.0.0", arch="centos-x64", target_arch="ubuntu-x64"
        )
        assert v == FORCE_DISCARD

    def test_keep_version_is_any(self):
        """Test that allow-listed version directories are always kept."""
        v = resolve_asset_version(
            MODULES, nominal="stubs", arch="libstub.so", target_arch="ubuntu-x64"
        )
        assert v == ANY

    def test_keep_version_wins_over_arch_mismatch(self):
        """Test rule order: allow-list is checked before architecture."""
        rule = OverrideRule(keep_versions=("3.0.0.0",), arch_scoped=True)
        v = resolve_asset_version(
            rule, nominal="3.0.0.0", arch="centos-x64", target_arch="ubuntu-x64"
        )
        assert v == ANY

    def test_keep_arches(self):
        """Test that allow-listed architectures keep the nominal version."""
        rule = OverrideRule(arch_scoped=True, keep_arches=("noarch",))
        v = resolve_asset_version(
            rule, nominal="3.1.0.0", arch="noarch", target_arch="ubuntu-x64"
        )
        assert v == Version(3, 1, 0, 0, 0)

    def test_unscoped_rule_ignores_arch(self):
        """Test that the fourth component is ignored without arch scoping."""
        v = resolve_asset_version(
            DEFAULT_RULE,
            nominal="3.0.0-268",
            arch="balanced.lua",
            target_arch="ubuntu-x64",
        )
        assert v == Version(3, 0, 0, 0, 268)

    def test_non_numeric_directory_is_any(self):
        """Test that directories like "common" resolve to any."""
        v = resolve_asset_version(
            DEFAULT_RULE, nominal="common", arch="x.lua", target_arch="ubuntu-x64"
        )
        assert v.is_any()


class TestPolicy:
    """Tests for the Policy container."""

    def test_rule_for_known_name(self):
        """Test lookup of a configured rule."""
        policy = Policy(overrides={"modules": MODULES})
        assert policy.rule_for("modules") is MODULES

    def test_rule_for_unknown_name(self):
        """Test fallback to DEFAULT_RULE."""
        assert Policy().rule_for("rules") is DEFAULT_RULE
        assert DEFAULT_RULE.reduce is True
        assert DEFAULT_RULE.arch_scoped is False
