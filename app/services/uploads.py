from __future__ import annotations

import logging
import os
import time
import uuid

from fastapi import UploadFile

from app.core.errors import FieldError, StorageError, ValidationError
from app.services.storage import LocalObjectStore


log = logging.getLogger(__name__)


def stored_name(original: str | None) -> str:
    ext = os.path.splitext(original or "")[1].lower() or ".jpg"
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}{ext}"


async def ingest_images(
    files: list[UploadFile],
    *,
    store: LocalObjectStore,
    max_size: int,
) -> list[str]:
    """
    Store every uploaded image and return their references in upload order.

    Non-image content or a file above ``max_size`` bytes aborts the whole
    request: files already stored for it are removed and a ValidationError
    on ``images`` is raised.
    """
    refs: list[str] = []
    for upload in files:
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            store.remove_many(refs)
            raise ValidationError([FieldError("images", f"{upload.filename}: only images are allowed")])

        data = await upload.read(max_size + 1)
        if len(data) > max_size:
            store.remove_many(refs)
            raise ValidationError([FieldError("images", f"{upload.filename}: file exceeds {max_size} bytes")])

        try:
            refs.append(store.put_bytes(key=stored_name(upload.filename), data=data))
        except OSError as e:
            store.remove_many(refs)
            raise StorageError("Could not store uploaded image") from e

    log.debug("uploads: stored %d image(s)", len(refs))
    return refs
