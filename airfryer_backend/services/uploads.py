"""Helpers for handling uploaded files."""

from __future__ import annotations

import base64
import mimetypes

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


def _resolve_mime_type(image_file: FileStorage) -> str:
    mime_type = (image_file.mimetype or "").strip().lower()
    if mime_type and mime_type != "application/octet-stream":
        return mime_type

    safe_name = secure_filename(image_file.filename or "")
    guessed, _ = mimetypes.guess_type(safe_name)
    return guessed or DEFAULT_IMAGE_MIME_TYPE


def encode_image_upload(image_file: FileStorage) -> str:
    """Read an uploaded photo and return it as a base64 ``data:`` URL."""

    if image_file.filename == "":
        raise ValueError("empty filename")

    mime_type = _resolve_mime_type(image_file)
    if not mime_type.startswith("image/"):
        raise ValueError(f"unsupported file type '{mime_type}'")

    image_bytes = image_file.read()
    if not image_bytes:
        raise ValueError("uploaded file was empty")

    image_base64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{image_base64}"
