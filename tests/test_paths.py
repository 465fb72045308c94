"""Tests for next_affected.paths — path normalization."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from next_affected.paths import normalize_path, resolve_module


class TestNormalizePath:
    """normalize_path — absolute, forward-slash, comparable paths."""

    def test_absolute_path_unchanged(self) -> None:
        assert normalize_path("/project/pages/index.tsx") == "/project/pages/index.tsx"

    def test_relative_path_resolves_against_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        expected = os.path.abspath("pages/index.tsx").replace("\\", "/")
        assert normalize_path("pages/index.tsx") == expected
        assert normalize_path("pages/index.tsx").startswith(str(tmp_path).replace("\\", "/"))

    def test_dot_segments_collapsed(self) -> None:
        assert normalize_path("/project/src/../pages/./a.tsx") == "/project/pages/a.tsx"

    def test_backslashes_replaced(self) -> None:
        assert "\\" not in normalize_path("/project\\pages\\a.tsx")

    def test_idempotent(self) -> None:
        once = normalize_path("/project/src/../pages/a.tsx")
        assert normalize_path(once) == once

    def test_accepts_path_objects(self) -> None:
        assert normalize_path(Path("/project/pages")) == "/project/pages"


class TestResolveModule:
    """resolve_module — module ids resolved against the project root."""

    def test_relative_module(self) -> None:
        assert resolve_module("components/Button.tsx", "/project") == (
            "/project/components/Button.tsx"
        )

    def test_absolute_module_ignores_project(self) -> None:
        assert resolve_module("/elsewhere/a.ts", "/project") == "/elsewhere/a.ts"

    def test_parent_segments(self) -> None:
        assert resolve_module("../shared/a.ts", "/project/app") == "/project/shared/a.ts"
