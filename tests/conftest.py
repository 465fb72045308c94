"""Shared test fixtures for next-affected."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from next_affected.config import NextAffectedConfig


@pytest.fixture
def config() -> NextAffectedConfig:
    """Config with a single ``pages`` directory and CSS/SVG exclusions."""
    return NextAffectedConfig(
        pages_directories=("pages",),
        excluded_extensions=(".css", ".svg"),
        excluded_paths=(),
    )


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal Next.js-style project on disk.

    Layout::

        pages/index.tsx       -> components/Layout.tsx
        pages/blog/post.tsx   -> components/Layout.tsx, lib/posts.ts
        components/Layout.tsx -> components/Button.tsx, styles/layout.css
        components/Button.tsx
        lib/posts.ts
        styles/layout.css

    A ``graph.json`` in madge's ``--json`` format describes the same imports.
    """
    files = {
        "pages/index.tsx": "",
        "pages/blog/post.tsx": "",
        "components/Layout.tsx": "",
        "components/Button.tsx": "",
        "lib/posts.ts": "",
        "styles/layout.css": "",
    }
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    (tmp_path / "graph.json").write_text(json.dumps(make_project_graph()))
    return tmp_path


@pytest.fixture
def project_graph() -> dict[str, list[str]]:
    """The import graph of ``tmp_project``, as madge reports it."""
    return make_project_graph()


def make_project_graph() -> dict[str, list[str]]:
    return {
        "pages/index.tsx": ["components/Layout.tsx"],
        "pages/blog/post.tsx": ["components/Layout.tsx", "lib/posts.ts"],
        "components/Layout.tsx": ["components/Button.tsx", "styles/layout.css"],
        "components/Button.tsx": [],
        "lib/posts.ts": [],
        "styles/layout.css": [],
    }
