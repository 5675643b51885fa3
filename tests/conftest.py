"""Shared fixtures for perch tests."""

from pathlib import Path

import pytest


def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """A small pages tree with a layout, index, nested and parameter pages."""
    pages = tmp_path / "pages"
    _write(pages / "$.py", "page = 'shell'\n")
    _write(pages / "$index.py", "page = 'home'\n")
    _write(pages / "$about.py", "page = 'about'\n")
    _write(pages / "helpers.py", "VALUE = 1\n")
    _write(pages / "settings" / "$.py", "page = 'settings-layout'\n")
    _write(pages / "settings" / "$index.py", "page = 'settings'\n")
    _write(pages / "user" / "$[id].py", "page = 'profile'\n")
    _write(pages / "_private" / "$index.py", "page = 'hidden'\n")
    _write(pages / ".cache" / "$index.py", "page = 'hidden'\n")
    return pages
