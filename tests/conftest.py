# Ensure `import wisp_icons` works from a fresh clone by putting repo/python on sys.path.
import sys
from pathlib import Path

import numpy as np
import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]

def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))

_ensure_python_path()


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "pillow: tests that decode PNG output with Pillow"
    )


@pytest.fixture
def rng():
    """Seeded generator so synthesis scenarios are reproducible."""
    return np.random.default_rng(1234)
