import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]

src_dir = repo_root / "src"
# "src/" layout: make top-level names (core, analyzer, settings, file_handler)
# importable without an install.
if src_dir.exists() and str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings store at a temp dir and clear env overrides."""
    import settings

    data_dir = tmp_path / "appdata"
    monkeypatch.setattr(settings, "_get_user_data_dir", lambda: data_dir)
    for var in ("SCRIPTCHECK_FONT", "SCRIPTCHECK_UPLOAD_DIR", "SCRIPTCHECK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return data_dir


@pytest.fixture
def sample_image(tmp_path):
    """A small real PNG on disk."""
    from PIL import Image

    path = tmp_path / "inbox" / "sample.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (64, 32), "white").save(path)
    return path
