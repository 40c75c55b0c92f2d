import io
import logging
from datetime import date

import pytest
from werkzeug.datastructures import FileStorage

from gallery.core.uploads import (
    build_upload_item,
    classify_mimetype,
    default_date_group,
    new_item_id,
    parse_categories,
    save_upload,
    stored_filename,
)
from gallery.db import GalleryRepository, connect, initialize
from gallery.errors import MissingFile, StoreWriteFailure


@pytest.fixture
def repo(tmp_path):
    db_path = str(tmp_path / "gallery.sqlite3")
    initialize(db_path, seed=False)
    conn = connect(db_path)
    yield GalleryRepository(conn)
    conn.close()


def test_classify_mimetype():
    assert classify_mimetype("image/png") == "image"
    assert classify_mimetype("IMAGE/JPEG") == "image"
    assert classify_mimetype("video/mp4") == "video"
    assert classify_mimetype("application/octet-stream") == "video"
    assert classify_mimetype(None) == "video"


def test_parse_categories(caplog):
    assert parse_categories('["trips", "nature"]') == ["trips", "nature"]
    assert parse_categories(None) == []
    assert parse_categories("  ") == []

    log = logging.getLogger("test-uploads")
    with caplog.at_level(logging.WARNING, logger="test-uploads"):
        assert parse_categories("trips,nature", logger=log) == []
        assert parse_categories('{"x": 1}', logger=log) == []
    assert "trips,nature" in caplog.text


def test_new_item_ids_are_unique():
    ids = [new_item_id() for _ in range(2000)]
    assert len(set(ids)) == len(ids)
    assert all(i.startswith("uploaded-") for i in ids)


def test_stored_filename_is_safe():
    name = stored_filename("../../etc/my photo.png")
    assert "/" not in name
    assert name.endswith("-etc_my_photo.png")


def test_default_date_group():
    assert default_date_group(date(2025, 5, 1)) == "May 1, 2025"


def test_build_upload_item_defaults():
    item = build_upload_item(
        filename="1700000000000-cat.png",
        original_name="cat.png",
        mimetype="image/png",
        categories="not json",
        date_group="May 1, 2025",
    )

    assert item.type == "image"
    assert item.src == "/uploads/1700000000000-cat.png"
    assert item.alt == "cat.png"
    assert item.poster is None
    assert item.is_favorite is False
    assert item.categories == []
    assert item.date_group == "May 1, 2025"


def test_build_upload_item_uses_supplied_fields():
    item = build_upload_item(
        filename="1-clip.mp4",
        original_name="clip.mp4",
        mimetype="video/mp4",
        alt="Beach clip",
        categories='["videos", "trips"]',
        date_group="March 5, 2025",
    )
    assert item.type == "video"
    assert item.alt == "Beach clip"
    assert item.categories == ["videos", "trips"]


def test_save_upload_without_file_touches_nothing(repo, tmp_path):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()

    with pytest.raises(MissingFile):
        save_upload(repo, None, {"alt": "x"}, upload_dir=str(upload_dir))

    empty = FileStorage(stream=io.BytesIO(b""), filename="", content_type="image/png")
    with pytest.raises(MissingFile):
        save_upload(repo, empty, {}, upload_dir=str(upload_dir))

    assert repo.count() == 0
    assert list(upload_dir.iterdir()) == []


def test_save_upload_writes_file_and_record(repo, tmp_path):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    f = FileStorage(stream=io.BytesIO(b"png-bytes"), filename="cat.png", content_type="image/png")

    item = save_upload(
        repo,
        f,
        {"categories": '["animals"]', "dateGroup": "May 1, 2025"},
        upload_dir=str(upload_dir),
    )

    stored = upload_dir / item.src.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"png-bytes"
    assert repo.get_by_id(item.id) == item


def test_save_upload_removes_file_when_insert_fails(repo, tmp_path, monkeypatch):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()

    def _boom(_item):
        raise StoreWriteFailure("insert failed")

    monkeypatch.setattr(repo, "insert", _boom)
    f = FileStorage(stream=io.BytesIO(b"data"), filename="a.mp4", content_type="video/mp4")

    with pytest.raises(StoreWriteFailure):
        save_upload(repo, f, {"dateGroup": "May 1, 2025"}, upload_dir=str(upload_dir))

    assert list(upload_dir.iterdir()) == []


def test_stored_filename_keeps_extension_of_non_ascii_names():
    assert stored_filename("фото.png").endswith("-upload.png")
    assert stored_filename("Ünïcode clip.MP4").endswith("-Unicode_clip.MP4")
    assert stored_filename("README").endswith("-README")


def test_parse_categories_drops_non_string_entries():
    assert parse_categories('["trips", 1, null, {"a": 1}, "nature"]') == ["trips", "nature"]
    assert parse_categories("[1, 2]") == []
