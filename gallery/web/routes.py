from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, request, send_from_directory
from flask.typing import ResponseReturnValue

from gallery.core.file_cleanup import FileReclaimer
from gallery.core.grouping import group_by_date
from gallery.core.uploads import UPLOAD_URL_PREFIX, save_upload
from gallery.db import get_repo
from gallery.errors import MissingFile, NotFound, StoreError


web = Blueprint("web", __name__)

# The gallery web client posts the file as "mediaFile"; Dropzone defaults to "file".
UPLOAD_FIELD_NAMES = ("mediaFile", "file")

# Bundled media referenced by the seed gallery.
SOURCE_URL_PREFIX = "/source"


def _reclaimer() -> FileReclaimer:
    return current_app.extensions["gallery_reclaimer"]


def _not_found() -> ResponseReturnValue:
    return jsonify({"error": "Item not found"}), 404


@web.after_app_request
def _cors_headers(resp: Response) -> Response:
    if request.path.startswith("/api/"):
        resp.headers["Access-Control-Allow-Origin"] = current_app.config["CORS_ORIGIN"]
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    return resp


@web.get("/api/health")
def api_health() -> ResponseReturnValue:
    return jsonify({"ok": True})


@web.get("/api/gallery")
def api_gallery() -> ResponseReturnValue:
    try:
        items = get_repo().list_all()
    except StoreError:
        current_app.logger.exception("Error fetching gallery items")
        return jsonify({"error": "Failed to fetch gallery items"}), 500

    return jsonify([grp.to_dict() for grp in group_by_date(items)])


@web.post("/api/gallery")
def api_upload() -> ResponseReturnValue:
    f = None
    for name in UPLOAD_FIELD_NAMES:
        f = request.files.get(name)
        if f is not None:
            break

    try:
        item = save_upload(
            get_repo(),
            f,
            request.form,
            upload_dir=current_app.config["UPLOAD_DIR"],
            logger=current_app.logger,
        )
    except MissingFile as e:
        return jsonify({"error": str(e)}), 400
    except StoreError:
        current_app.logger.exception("Error uploading item")
        return jsonify({"error": "Failed to upload item"}), 500

    current_app.logger.info("Uploaded %s as %s", item.src, item.id)
    return jsonify(item.to_dict()), 201


@web.put("/api/gallery/<item_id>/favorite")
def api_toggle_favorite(item_id: str) -> ResponseReturnValue:
    try:
        is_favorite = get_repo().toggle_favorite(item_id)
    except NotFound:
        return _not_found()
    except StoreError:
        current_app.logger.exception("Error toggling favorite for %s", item_id)
        return jsonify({"error": "Failed to toggle favorite status"}), 500

    return jsonify({"message": "Favorite status updated", "id": item_id, "isFavorite": is_favorite})


@web.delete("/api/gallery/<item_id>")
def api_delete(item_id: str) -> ResponseReturnValue:
    try:
        src = get_repo().delete(item_id)
    except NotFound:
        return _not_found()
    except StoreError:
        current_app.logger.exception("Error deleting item %s", item_id)
        return jsonify({"error": "Failed to delete item"}), 500

    # The record is gone; the file follows on its own schedule.
    _reclaimer().reclaim(src, item_id=item_id)
    return jsonify({"message": "Item deleted successfully", "id": item_id})


@web.get(f"{UPLOAD_URL_PREFIX}/<path:filename>")
def uploaded_file(filename: str) -> ResponseReturnValue:
    return send_from_directory(current_app.config["UPLOAD_DIR"], filename, as_attachment=False)


@web.get(f"{SOURCE_URL_PREFIX}/<path:filename>")
def source_file(filename: str) -> ResponseReturnValue:
    return send_from_directory(current_app.config["SOURCE_DIR"], filename, as_attachment=False)
