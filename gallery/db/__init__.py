"""Database package.

- Schema, seeding and the repository live in `gallery.db.db`.
- The initial gallery records live in `gallery.db.seed`.
"""

from .db import (  # noqa: F401
    GALLERY_TABLE,
    GalleryItem,
    GalleryRepository,
    connect,
    decode_categories,
    encode_categories,
    get_db,
    get_repo,
    init_db,
    initialize,
    migrate,
    seed_if_empty,
)
