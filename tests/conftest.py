import sys
from pathlib import Path

import pytest

# Ensure repo root is importable (so `import gallery` works without installing).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def app(tmp_path, monkeypatch):
    from gallery import create_app

    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "test.sqlite3"))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("SOURCE_DIR", str(tmp_path / "source"))

    app = create_app()
    app.config.update(TESTING=True)
    yield app
    app.extensions["gallery_reclaimer"].shutdown()


@pytest.fixture
def client(app):
    return app.test_client()
