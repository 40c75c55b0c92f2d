from __future__ import annotations

import json
import logging
import os
import secrets
import string
import threading
import time
from datetime import date
from typing import Any, Mapping

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from gallery.db import GalleryItem, GalleryRepository
from gallery.errors import GalleryError, MissingFile


UPLOAD_URL_PREFIX = "/uploads"

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LEN = 7

_id_lock = threading.Lock()
_last_id_millis = 0


def classify_mimetype(mimetype: str | None) -> str:
    if mimetype and mimetype.lower().startswith("image/"):
        return "image"
    return "video"


def _next_millis() -> int:
    # Strictly increasing per process, so ids never collide even within one millisecond.
    global _last_id_millis
    with _id_lock:
        now = time.time_ns() // 1_000_000
        _last_id_millis = max(now, _last_id_millis + 1)
        return _last_id_millis


def new_item_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LEN))
    return f"uploaded-{_next_millis()}-{suffix}"


def parse_categories(raw: str | None, *, logger: logging.Logger | None = None) -> list[str]:
    """Decode the `categories` form field (a JSON array of strings).

    Anything unreadable becomes an empty list; the upload itself never fails
    because of it.
    """
    if raw is None or not str(raw).strip():
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        value = None

    if not isinstance(value, list):
        if logger is not None:
            logger.warning("Categories not a valid JSON array, defaulting to empty list: %r", raw)
        return []
    # Non-string entries (numbers, null, objects) are dropped rather than stringified.
    return [c for c in value if isinstance(c, str)]


def default_date_group(today: date | None = None) -> str:
    d = today or date.today()
    return f"{d:%B} {d.day}, {d.year}"


def stored_filename(original_name: str) -> str:
    # Stem and extension are sanitized apart so a non-ASCII stem keeps its extension.
    stem, ext = os.path.splitext(original_name)
    safe_stem = secure_filename(stem) or "upload"
    safe_ext = secure_filename(ext.lstrip("."))
    safe_name = f"{safe_stem}.{safe_ext}" if safe_ext else safe_stem
    return f"{_next_millis()}-{safe_name}"


def public_src(filename: str) -> str:
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def build_upload_item(
    *,
    filename: str,
    original_name: str,
    mimetype: str | None,
    alt: str | None = None,
    categories: str | None = None,
    date_group: str | None = None,
    logger: logging.Logger | None = None,
) -> GalleryItem:
    """Turn a stored upload plus its form fields into a new gallery record."""
    alt_text = (alt or "").strip() or original_name
    label = (date_group or "").strip() or default_date_group()
    return GalleryItem(
        id=new_item_id(),
        type=classify_mimetype(mimetype),
        src=public_src(filename),
        date_group=label,
        alt=alt_text,
        poster=None,
        is_favorite=False,
        categories=parse_categories(categories, logger=logger),
    )


def save_upload(
    repo: GalleryRepository,
    file: FileStorage | None,
    form: Mapping[str, Any],
    *,
    upload_dir: str,
    logger: logging.Logger | None = None,
) -> GalleryItem:
    """Store the uploaded file and insert its record.

    Raises `MissingFile` before touching disk or database when no file was
    sent. If the insert fails the stored file is removed again.
    """
    if file is None or not file.filename:
        raise MissingFile("No file uploaded.")

    original_name = file.filename
    filename = stored_filename(original_name)
    dst = os.path.join(upload_dir, filename)
    file.save(dst)

    item = build_upload_item(
        filename=filename,
        original_name=original_name,
        mimetype=file.mimetype,
        alt=form.get("alt"),
        categories=form.get("categories"),
        date_group=form.get("dateGroup"),
        logger=logger,
    )

    try:
        repo.insert(item)
    except GalleryError:
        try:
            os.remove(dst)
        except OSError:
            if logger is not None:
                logger.exception("Failed to remove %s after insert failure", dst)
        raise

    return item
