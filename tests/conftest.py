"""
Pytest configuration and shared fixtures for lspdtool tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import io
from pathlib import Path
import tarfile
from typing import Any

import pytest
import yaml

from lspdtool.archive import ArchiveEntry
from lspdtool.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after each test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("policy.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def create_archive(tmp_test_dir: Path):
    """
    Factory fixture for creating .tar.gz archives.

    Members are written in the given order. A path ending in "/" is
    written as a directory; any other path is a file whose content is the
    given string (or "" when None).

    Usage:
        archive = create_archive("pkg.tar.gz", [
            ("lightspd/", None),
            ("lightspd/version.txt", "2024-06-10-001\\n"),
        ])
    """

    def _create(filename: str, members: list[tuple[str, str | None]]) -> Path:
        path = tmp_test_dir / filename
        with tarfile.open(path, "w:gz") as tar:
            for name, content in members:
                if name.endswith("/"):
                    info = tarfile.TarInfo(name.rstrip("/"))
                    info.type = tarfile.DIRTYPE
                    info.mode = 0o755
                    tar.addfile(info)
                    continue
                data = (content or "").encode("utf-8")
                info = tarfile.TarInfo(name)
                info.size = len(data)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
        return path

    return _create


def make_entry(path: str, content: str | bytes | None = None) -> ArchiveEntry:
    """Build an in-memory ArchiveEntry (directory if path ends with "/")."""
    if path.endswith("/"):
        return ArchiveEntry(path=path.rstrip("/"), is_dir=True)
    if content is None:
        return ArchiveEntry(path=path)
    data = content.encode("utf-8") if isinstance(content, str) else content
    return ArchiveEntry(path=path, opener=lambda: io.BytesIO(data))


@pytest.fixture
def entry():
    """Provide the make_entry helper as a fixture."""
    return make_entry


@pytest.fixture
def lightspd_members() -> list[tuple[str, str | None]]:
    """
    Provide a small LightSPD-shaped archive layout.

    Contains two rules versions, modules for two architectures and
    versions, stubs, excluded helper files and the version label.
    """
    return [
        ("lightspd/", None),
        ("lightspd/version.txt", "2024-06-10-001\n"),
        ("lightspd/runsnort.sh", "#!/bin/sh\n"),
        ("lightspd/manifest.json", "{}\n"),
        ("lightspd/rules/", None),
        ("lightspd/rules/3.0.0.0/", None),
        ("lightspd/rules/3.0.0.0/3.0.0.0.rules", "alert ip any any -> any any\n"),
        ("lightspd/rules/3.1.0.0/3.1.0.0.rules", "alert tcp any any -> any any\n"),
        ("lightspd/rules/3.2.0.0/3.2.0.0.rules", "alert udp any any -> any any\n"),
        ("lightspd/modules/stubs/libstub.so", "stub"),
        ("lightspd/modules/3.0.0.0/ubuntu-x64/libso_rules.so", "u30"),
        ("lightspd/modules/3.0.0.0/centos-x64/libso_rules.so", "c30"),
        ("lightspd/modules/3.1.0.0/ubuntu-x64/libso_rules.so", "u31"),
        ("lightspd/modules/3.1.0.0/ubuntu-x64/libso_extra.so", "u31x"),
        ("lightspd/modules/3.1.0.0/centos-x64/libso_rules.so", "c31"),
        ("lightspd/modules/src/3.1.0.0/ubuntu-x64/rules.c", "int x;\n"),
        ("lightspd/policies/common/balanced.lua", "-- balanced\n"),
        ("lightspd/policies/3.0.0-268/balanced.lua", "-- 268\n"),
    ]
