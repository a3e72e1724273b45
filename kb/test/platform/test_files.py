"""Tests for kb.platform.files module."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from kb.platform.files import atomic_write_text


def test_creates_file(tmp_path: Path) -> None:
    target = tmp_path / "klarrio-build.json"
    atomic_write_text(target, "{}\n")
    assert target.read_text(encoding="utf-8") == "{}\n"


def test_replaces_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "klarrio-build.json"
    target.write_text("old", encoding="utf-8")

    atomic_write_text(target, "new")

    assert target.read_text(encoding="utf-8") == "new"


def test_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "klarrio-build.json"
    atomic_write_text(target, "a")
    atomic_write_text(target, "b")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["klarrio-build.json"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_preserves_permissions(tmp_path: Path) -> None:
    target = tmp_path / "klarrio-build.json"
    target.write_text("old", encoding="utf-8")
    os.chmod(target, 0o640)

    atomic_write_text(target, "new")

    assert stat.S_IMODE(target.stat().st_mode) == 0o640
