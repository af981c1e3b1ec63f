import sys
from pathlib import Path

# Ensure the project root is on sys.path so `trisolver` and `gui` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib

matplotlib.use("Agg")
import pytest

from trisolver import config


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path: Path) -> Path:
    """Keep every test away from the real ``data/trisolver.json``."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "_DATA_DIR", str(data_dir))
    monkeypatch.setattr(config, "_DATA_FILE", str(data_dir / "trisolver.json"))
    return data_dir / "trisolver.json"
