# dental_api/services/uploads.py
"""Uploaded images are stored inline as ``data:`` URIs."""
from __future__ import annotations

import base64
from typing import Optional

from fastapi import UploadFile

from dental_api.core.errors import ClinicError, ErrorKind

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def to_data_uri(content_type: Optional[str], payload: bytes) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{content_type or DEFAULT_CONTENT_TYPE};base64,{encoded}"


async def read_image(upload: Optional[UploadFile], max_bytes: int) -> Optional[str]:
    """
    Encode an optional upload. Returns None when no file was sent; the
    declared content type is used as-is.
    """
    if upload is None or not upload.filename:
        return None
    # read one byte past the limit so oversize files are caught without loading them whole
    payload = await upload.read(max_bytes + 1)
    await upload.close()
    if len(payload) > max_bytes:
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, f"File too large (max {max_bytes} bytes)")
    return to_data_uri(upload.content_type, payload)


async def read_image_or_keep(
    upload: Optional[UploadFile], existing: Optional[str], max_bytes: int
) -> Optional[str]:
    """A new file replaces the image; otherwise keep what the client sent back."""
    new = await read_image(upload, max_bytes)
    return new if new is not None else existing
