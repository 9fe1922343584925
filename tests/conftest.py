"""Shared test fixtures."""

import logging
import pytest
import structlog
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def make_project(temp_dir):
    """Factory writing ``{relative path: content}`` into a temporary project.

    Returns the project root. Files are listed with ``project_files``.
    """

    def _make(files: dict, root_name: str = "project") -> Path:
        root = temp_dir / root_name
        root.mkdir(parents=True, exist_ok=True)
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def project_files():
    """Lists the absolute paths of every file below a root."""

    def _list(root: Path) -> list:
        return sorted(str(p) for p in root.rglob("*") if p.is_file())

    return _list


_HOOK_SOURCE = """import { useState } from 'react';

export function useToggle(initial = false) {
  const [on, setOn] = useState(initial);
  return [on, () => setOn(!on)];
}
"""

_COMPONENT_SOURCE = """import React from 'react';

export default function Card({ title }) {
  return (
    <div className="card">{title}</div>
  );
}
"""

_PURE_FUNCTIONS_SOURCE = """export function add(a, b) {
  return a + b;
}

export function subtract(a, b) {
  return a - b;
}

export const double = (x) => x * 2;
"""


@pytest.fixture
def hook_source():
    """A React hook module."""
    return _HOOK_SOURCE


@pytest.fixture
def component_source():
    """A React function component."""
    return _COMPONENT_SOURCE


@pytest.fixture
def pure_functions_source():
    """Three exported pure functions with no UI or network use."""
    return _PURE_FUNCTIONS_SOURCE


@pytest.fixture
def clean_logging():
    """Restore structlog and root logging after a test configures them."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()
