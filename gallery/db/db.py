from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Iterable

from flask import Flask, g

from gallery.errors import NotFound, StoreError, StoreUnavailable, StoreWriteFailure
from .seed import SEED_ITEMS


GALLERY_TABLE = "gallery_items"


def connect(database_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def encode_categories(categories: Iterable[str] | None) -> str:
    """Serialize an ordered category list into the single TEXT column."""
    return json.dumps([str(c) for c in (categories or [])])


def decode_categories(raw: str | None) -> list[str]:
    """Inverse of `encode_categories`.

    Empty, NULL or unreadable column values decode to an empty list so a
    single bad row never breaks a full listing.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(value, list):
        return []
    return [str(c) for c in value]


@dataclass(frozen=True)
class GalleryItem:
    id: str
    type: str
    src: str
    date_group: str
    alt: str | None = None
    poster: str | None = None
    is_favorite: bool = False
    categories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "src": self.src,
            "alt": self.alt,
            "poster": self.poster,
            "isFavorite": self.is_favorite,
            "dateGroup": self.date_group,
            "categories": list(self.categories),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GalleryItem":
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            src=str(data["src"]),
            date_group=str(data["dateGroup"]),
            alt=data.get("alt"),
            poster=data.get("poster"),
            is_favorite=bool(data.get("isFavorite", False)),
            categories=[str(c) for c in data.get("categories") or []],
        )


def _item_from_row(r: sqlite3.Row) -> GalleryItem:
    return GalleryItem(
        id=str(r["id"]),
        type=str(r["type"]),
        src=str(r["src"]),
        date_group=str(r["dateGroup"]),
        alt=r["alt"],
        poster=r["poster"],
        is_favorite=bool(r["isFavorite"]),
        categories=decode_categories(r["categories"]),
    )


def _item_params(item: GalleryItem) -> tuple[Any, ...]:
    return (
        item.id,
        item.type,
        item.src,
        item.alt,
        item.poster,
        1 if item.is_favorite else 0,
        item.date_group,
        encode_categories(item.categories),
    )


_INSERT_SQL = f"""
    INSERT INTO {GALLERY_TABLE} (id, type, src, alt, poster, isFavorite, dateGroup, categories)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""


def migrate(conn: sqlite3.Connection) -> None:
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {GALLERY_TABLE} (
            id TEXT PRIMARY KEY,
            type TEXT NOT NULL,
            src TEXT NOT NULL,
            alt TEXT,
            poster TEXT,
            isFavorite INTEGER NOT NULL DEFAULT 0 CHECK (isFavorite IN (0, 1)),
            dateGroup TEXT NOT NULL,
            categories TEXT
        )
        """
    )
    conn.commit()


def seed_if_empty(conn: sqlite3.Connection) -> int:
    """Insert the initial gallery when the table has no rows.

    Returns the number of records inserted (0 when data already exists).
    """
    row = conn.execute(f"SELECT COUNT(*) AS n FROM {GALLERY_TABLE}").fetchone()
    if int(row["n"]) > 0:
        return 0

    items = [GalleryItem.from_dict(d) for d in SEED_ITEMS]
    with conn:
        conn.executemany(_INSERT_SQL, [_item_params(i) for i in items])
    return len(items)


def initialize(database_path: str, *, seed: bool = True) -> int:
    """Open the store, ensure the schema, and seed an empty table.

    Idempotent. Returns the number of seed records inserted. Any failure is
    raised as `StoreUnavailable`.
    """
    try:
        conn = connect(database_path)
    except sqlite3.Error as e:
        raise StoreUnavailable(f"cannot open database at {database_path}") from e

    try:
        migrate(conn)
        return seed_if_empty(conn) if seed else 0
    except sqlite3.Error as e:
        raise StoreUnavailable(f"cannot initialize schema in {database_path}") from e
    finally:
        conn.close()


class GalleryRepository:
    """Data access for gallery items over an explicitly supplied connection.

    Each method is a single statement (or a lookup followed by a single
    statement); no locking beyond what SQLite provides.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def count(self) -> int:
        try:
            row = self.conn.execute(f"SELECT COUNT(*) AS n FROM {GALLERY_TABLE}").fetchone()
        except sqlite3.Error as e:
            raise StoreError("failed to count gallery items") from e
        return int(row["n"])

    def list_all(self) -> list[GalleryItem]:
        try:
            rows = self.conn.execute(f"SELECT * FROM {GALLERY_TABLE} ORDER BY rowid").fetchall()
        except sqlite3.Error as e:
            raise StoreError("failed to list gallery items") from e
        return [_item_from_row(r) for r in rows]

    def get_by_id(self, item_id: str) -> GalleryItem | None:
        try:
            r = self.conn.execute(f"SELECT * FROM {GALLERY_TABLE} WHERE id = ?", (item_id,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"failed to read gallery item {item_id}") from e
        if r is None:
            return None
        return _item_from_row(r)

    def insert(self, item: GalleryItem) -> GalleryItem:
        # Duplicate ids surface as IntegrityError from the primary key.
        try:
            with self.conn:
                self.conn.execute(_INSERT_SQL, _item_params(item))
        except sqlite3.Error as e:
            raise StoreWriteFailure(f"failed to insert gallery item {item.id}") from e
        return item

    def _favorite_flag(self, item_id: str) -> bool:
        try:
            r = self.conn.execute(
                f"SELECT isFavorite FROM {GALLERY_TABLE} WHERE id = ?",
                (item_id,),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"failed to read gallery item {item_id}") from e
        if r is None:
            raise NotFound(item_id)
        return bool(r["isFavorite"])

    def set_favorite(self, item_id: str, value: bool) -> bool:
        try:
            with self.conn:
                cur = self.conn.execute(
                    f"UPDATE {GALLERY_TABLE} SET isFavorite = ? WHERE id = ?",
                    (1 if value else 0, item_id),
                )
        except sqlite3.Error as e:
            raise StoreWriteFailure(f"failed to update favorite for {item_id}") from e
        if cur.rowcount == 0:
            raise NotFound(item_id)
        return bool(value)

    def toggle_favorite(self, item_id: str) -> bool:
        """Flip the favorite flag and return the new value."""
        return self.set_favorite(item_id, not self._favorite_flag(item_id))

    def delete(self, item_id: str) -> str:
        """Remove an item and return its `src` so the caller can reclaim the file."""
        item = self.get_by_id(item_id)
        if item is None:
            raise NotFound(item_id)

        try:
            with self.conn:
                cur = self.conn.execute(f"DELETE FROM {GALLERY_TABLE} WHERE id = ?", (item_id,))
        except sqlite3.Error as e:
            raise StoreWriteFailure(f"failed to delete gallery item {item_id}") from e

        # Another request removed it between the lookup and the delete.
        if cur.rowcount == 0:
            raise NotFound(item_id)
        return item.src


def init_db(app: Flask) -> None:
    # Schema and seed run once on startup; StoreUnavailable propagates.
    database_path = app.config["DATABASE_PATH"]
    seeded = initialize(database_path, seed=bool(app.config.get("SEED_ON_EMPTY", True)))
    app.logger.info("Database ready at %s (table %r checked/created)", database_path, GALLERY_TABLE)
    if seeded:
        app.logger.info("Seeded %d initial gallery items", seeded)

    @app.before_request
    def _open_db() -> None:
        g._db = connect(app.config["DATABASE_PATH"])

    @app.teardown_request
    def _close_db(_: BaseException | None = None) -> None:
        conn = getattr(g, "_db", None)
        if conn is not None:
            conn.close()
            g._db = None


def get_db() -> sqlite3.Connection:
    conn = getattr(g, "_db", None)
    if conn is None:
        raise RuntimeError("get_db requires a request opened by init_db")
    return conn


def get_repo() -> GalleryRepository:
    return GalleryRepository(get_db())
