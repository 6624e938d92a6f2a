"""Shared fixtures for dirclip tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── docs/
        │   └── guide.md
        ├── src/
        │   ├── api/
        │   │   ├── auth.py
        │   │   └── user.py
        │   ├── models/
        │   │   └── user.py
        │   └── main.py
        ├── tests/
        │   └── test_user.py
        ├── README.md
        └── setup.py
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide")
    (tmp_path / "src" / "api").mkdir(parents=True)
    (tmp_path / "src" / "api" / "auth.py").write_text("auth")
    (tmp_path / "src" / "api" / "user.py").write_text("api user")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "src" / "models" / "user.py").write_text("model user")
    (tmp_path / "src" / "main.py").write_text("main")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_user.py").write_text("test")
    (tmp_path / "README.md").write_text("readme")
    (tmp_path / "setup.py").write_text("setup")
    return tmp_path


@pytest.fixture
def gitignore_tree(tmp_path: Path) -> Path:
    """Tree with .gitignore for gitignore-integration testing.

    Structure::

        root/
        ├── .gitignore          (*.pyc, *.log, node_modules/, dist/)
        ├── dist/
        │   └── bundle.js
        ├── logs/
        │   ├── x.log
        │   └── y.rs
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.py
        │   └── app.pyc
        └── README.md
    """
    (tmp_path / ".gitignore").write_text("*.pyc\n*.log\nnode_modules/\ndist/\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("bundle")
    (tmp_path / "logs").mkdir()
    (tmp_path / "logs" / "x.log").write_text("log line")
    (tmp_path / "logs" / "y.rs").write_text("fn main() {}")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("js")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("app")
    (tmp_path / "src" / "app.pyc").write_bytes(b"\x00")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


class FakeLister:
    """Lister returning a fixed body and recording requested paths."""

    def __init__(self, body: str = "listing\n", fail: bool = False) -> None:
        self.body = body
        self.fail = fail
        self.calls: list[Path] = []

    def list_directory(self, path: Path) -> str:
        self.calls.append(path)
        if self.fail:
            raise OSError("ls failed")
        return self.body


class FakeClipboard:
    """Clipboard sink that keeps the copied text in memory."""

    def __init__(self) -> None:
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        self.copied.append(text)


@pytest.fixture
def fake_lister() -> FakeLister:
    return FakeLister()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()
