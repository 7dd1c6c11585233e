import os
import sys
from pathlib import Path

import pytest

# Disable colors before importing reporter (evaluated at import time)
os.environ["POLYBASE_NO_COLORS"] = "1"

# Ensure the project `src` directory is on sys.path so tests can import
# modules like `features`, `baseline`, `scanner`, etc.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test from an empty directory so no stray polybase.config.json or .env is picked up."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv("POLYBASE_CONFIG", raising=False)
    yield workdir


@pytest.fixture(scope="session")
def catalog():
    from catalog import build_catalog

    return build_catalog()


@pytest.fixture(scope="session")
def detector(catalog):
    from features.detector import FeatureDetector

    return FeatureDetector(catalog.registry)
