import sqlite3

import pytest

from gallery import create_app
from gallery.db import GalleryRepository, connect, initialize
from gallery.errors import StoreUnavailable


def test_startup_keeps_existing_rows_and_skips_seed(tmp_path, monkeypatch):
    # An existing store with user data: startup must not seed on top of it.
    db_path = tmp_path / "existing.sqlite3"
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(
            """
            CREATE TABLE gallery_items (
                id TEXT PRIMARY KEY,
                type TEXT NOT NULL,
                src TEXT NOT NULL,
                alt TEXT,
                poster TEXT,
                isFavorite INTEGER DEFAULT 0,
                dateGroup TEXT NOT NULL,
                categories TEXT
            );
            INSERT INTO gallery_items (id, type, src, alt, poster, isFavorite, dateGroup, categories)
            VALUES ('uploaded-1', 'image', '/uploads/1-a.png', 'a.png', NULL, 1, 'June 2, 2025', '["trips"]');
            """
        )
        conn.commit()
    finally:
        conn.close()

    monkeypatch.setenv("DATABASE_PATH", str(db_path))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))

    create_app().extensions["gallery_reclaimer"].shutdown()

    conn2 = connect(str(db_path))
    try:
        items = GalleryRepository(conn2).list_all()
    finally:
        conn2.close()

    assert [i.id for i in items] == ["uploaded-1"]
    assert items[0].is_favorite is True
    assert items[0].categories == ["trips"]


def test_initialize_is_idempotent(tmp_path):
    db_path = str(tmp_path / "gallery.sqlite3")

    assert initialize(db_path) == 17
    assert initialize(db_path) == 0

    conn = connect(db_path)
    try:
        assert GalleryRepository(conn).count() == 17
    finally:
        conn.close()


def test_initialize_without_seed_leaves_table_empty(tmp_path):
    db_path = str(tmp_path / "gallery.sqlite3")
    assert initialize(db_path, seed=False) == 0

    conn = connect(db_path)
    try:
        assert GalleryRepository(conn).count() == 0
    finally:
        conn.close()


def test_unopenable_store_is_fatal_at_startup(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "no-such-dir" / "gallery.sqlite3"))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))

    with pytest.raises(StoreUnavailable):
        create_app()
