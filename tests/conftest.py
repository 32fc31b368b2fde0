"""Shared fixtures: an on-disk template tree shaped like the real one."""
from __future__ import annotations

from pathlib import Path

import pytest


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture()
def templates_root(tmp_path: Path) -> Path:
    """``<root>/react-express/{frontend,backend}`` with junk that must be skipped."""
    stack = tmp_path / "templates" / "react-express"
    _write(stack / "frontend" / "package.json", '{"name": "frontend"}\n')
    _write(stack / "frontend" / "src" / "App.tsx", "export default function App() { return null }\n")
    _write(stack / "frontend" / "node_modules" / "react" / "index.js", "module.exports = {}\n")
    _write(stack / "frontend" / ".git" / "config", "[core]\n")
    _write(stack / "frontend" / ".env", "SECRET=1\n")
    _write(stack / "backend" / "index.js", "console.log('up')\n" * 200)
    _write(stack / "backend" / "__pycache__" / "cache.pyc", "x")
    _write(stack / "backend" / ".hidden" / "notes.txt", "private\n")
    (stack / "backend" / "empty").mkdir()
    return tmp_path / "templates"
