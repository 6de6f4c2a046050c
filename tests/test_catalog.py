"""
Tests for lspdtool.catalog module.

Tests catalog construction including:
- Ordered key insertion and removal
- Exclusion prefixes
- Asset classification from path components
- Override policy and the greater-than-target cutoff
- Version label capture
"""

from __future__ import annotations

import pytest

from lspdtool.catalog import AssetKey, Catalog, CatalogBuilder, build_catalog
from lspdtool.config import load_effective_policy
from lspdtool.exceptions import ArchiveError, InvalidVersionString
from lspdtool.versioning import ANY, Version, parse_version

TARGET = parse_version("3.1.0.0")
ARCH = "ubuntu-x64"


@pytest.fixture
def policy():
    """Provide the built-in policy."""
    return load_effective_policy()


@pytest.fixture
def builder(policy):
    """Provide a builder for Snort 3.1.0.0 on ubuntu-x64."""
    return CatalogBuilder(TARGET, ARCH, policy)


class TestCatalog:
    """Tests for the ordered Catalog container."""

    def test_first_seen_key_order(self):
        """Test that keys keep first-insertion order."""
        catalog = Catalog()
        a = AssetKey("rules", Version(3))
        b = AssetKey("modules", Version(3))
        catalog.add(a, "p1")
        catalog.add(b, "p2")
        catalog.add(a, "p3")

        assert catalog.keys() == [a, b]
        assert catalog[a] == ["p1", "p3"]
        assert catalog.paths() == ["p1", "p2", "p3"]

    def test_remove_preserves_order(self):
        """Test that removal keeps the order of the remaining keys."""
        catalog = Catalog()
        keys = [AssetKey("x", Version(i)) for i in (1, 2, 3)]
        for i, key in enumerate(keys):
            catalog.add(key, f"p{i}")

        catalog.remove(keys[1])
        catalog.remove(AssetKey("missing", ANY))

        assert catalog.keys() == [keys[0], keys[2]]
        assert catalog.paths() == ["p0", "p2"]
        assert keys[1] not in catalog
        assert len(catalog) == 2

    def test_returned_lists_are_copies(self):
        """Test that callers cannot mutate the catalog through views."""
        catalog = Catalog()
        key = AssetKey("x", Version(1))
        catalog.add(key, "p")

        catalog[key].append("q")

        assert catalog[key] == ["p"]


class TestVisit:
    """Tests for CatalogBuilder.visit."""

    def test_directories_skipped(self, builder, entry):
        """Test that directory entries never reach the catalog."""
        builder.visit(entry("lightspd/rules/3.0.0.0/sub/"))

        assert len(builder.catalog) == 0

    def test_asset_entry(self, builder, entry):
        """Test classification from path components."""
        builder.visit(entry("lightspd/rules/3.0.0.0/3.0.0.0.rules"))

        key = AssetKey("rules", Version(3, 0, 0, 0, 0))
        assert builder.catalog.keys() == [key]
        assert builder.catalog[key] == ["lightspd/rules/3.0.0.0/3.0.0.0.rules"]

    def test_short_paths_ignored(self, builder, entry):
        """Test that paths with fewer than four components are ignored."""
        builder.visit(entry("lightspd/README"))
        builder.visit(entry("lightspd/rules/notes.txt"))

        assert len(builder.catalog) == 0

    def test_excluded_prefixes(self, builder, entry):
        """Test that excluded paths are dropped even when compatible."""
        builder.visit(entry("lightspd/modules/src/3.0.0.0/ubuntu-x64/rules.c"))
        builder.visit(entry("lightspd/runsnort.sh"))
        builder.visit(entry("lightspd/manifest.json"))

        assert len(builder.catalog) == 0

    def test_exclusion_matches_whole_components(self, builder, entry):
        """Test that a prefix does not match a longer component name."""
        builder.visit(entry("lightspd/modules/srcx/ubuntu-x64/a.so"))

        assert builder.catalog.keys() == [AssetKey("modules", ANY)]

    def test_newer_than_target_skipped(self, builder, entry):
        """Test the forward-compatibility cutoff."""
        builder.visit(entry("lightspd/rules/3.2.0.0/3.2.0.0.rules"))

        assert len(builder.catalog) == 0

    def test_equal_to_target_kept(self, builder, entry):
        """Test that the target version itself is compatible."""
        builder.visit(entry("lightspd/rules/3.1.0.0/3.1.0.0.rules"))

        assert builder.catalog.keys() == [AssetKey("rules", TARGET)]

    def test_arch_mismatch_skipped(self, builder, entry):
        """Test that other architectures are force-discarded."""
        builder.visit(entry("lightspd/modules/3.0.0.0/centos-x64/libso.so"))

        assert len(builder.catalog) == 0

    def test_stubs_kept_as_any(self, builder, entry):
        """Test that allow-listed directories are catalogued under any."""
        builder.visit(entry("lightspd/modules/stubs/libstub.so"))

        assert builder.catalog.keys() == [AssetKey("modules", ANY)]

    def test_invalid_version_directory_raises(self, builder, entry):
        """Test that a version directory with too many fields is fatal."""
        with pytest.raises(InvalidVersionString):
            builder.visit(entry("lightspd/rules/1.2.3.4.5.6/a.rules"))


class TestVersionLabel:
    """Tests for the reserved version label entry."""

    def test_label_captured_and_kept(self, builder, entry):
        """Test that the label is read inline and catalogued under any."""
        builder.visit(entry("lightspd/version.txt", "2024-06-10-001\n"))

        assert builder.package_version == "2024-06-10-001\n"
        key = AssetKey("lightspd/version.txt", ANY)
        assert builder.catalog.keys() == [key]
        assert builder.catalog[key] == ["lightspd/version.txt"]

    def test_label_independent_of_target(self, policy, entry):
        """Test that the label is kept for any target and architecture."""
        builder = CatalogBuilder(Version(1), "other-arch", policy)
        builder.visit(entry("lightspd/version.txt", "v"))

        assert builder.catalog.paths() == ["lightspd/version.txt"]

    def test_label_unreadable(self, builder):
        """Test that a label read failure is fatal."""
        from lspdtool.archive import ArchiveEntry

        def _fail():
            raise OSError("disk error")

        with pytest.raises(ArchiveError, match="disk error"):
            builder.visit(ArchiveEntry(path="lightspd/version.txt", opener=_fail))

    def test_missing_label(self, builder, entry):
        """Test that an archive without a label reports an empty label."""
        builder.visit(entry("lightspd/rules/3.0.0.0/a.rules"))

        assert builder.package_version == ""


class TestBuildCatalog:
    """Tests for a full single-pass build."""

    def test_lightspd_layout(self, policy, entry, lightspd_members):
        """Test the catalog built from a LightSPD-shaped layout."""
        entries = [entry(path, content) for path, content in lightspd_members]

        catalog, label = build_catalog(entries, TARGET, ARCH, policy)

        assert label == "2024-06-10-001\n"
        assert catalog.keys() == [
            AssetKey("lightspd/version.txt", ANY),
            AssetKey("rules", Version(3, 0, 0, 0, 0)),
            AssetKey("rules", Version(3, 1, 0, 0, 0)),
            AssetKey("modules", ANY),
            AssetKey("modules", Version(3, 0, 0, 0, 0)),
            AssetKey("modules", Version(3, 1, 0, 0, 0)),
            AssetKey("policies", ANY),
            AssetKey("policies", Version(3, 0, 0, 0, 268)),
        ]
        assert catalog[AssetKey("modules", Version(3, 1, 0, 0, 0))] == [
            "lightspd/modules/3.1.0.0/ubuntu-x64/libso_rules.so",
            "lightspd/modules/3.1.0.0/ubuntu-x64/libso_extra.so",
        ]
