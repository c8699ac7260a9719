# backend/travelmap/utils/upload_helpers.py
"""
Upload helpers.

Uploads are read with a hard size ceiling so oversize files are rejected
before any image processing happens.
"""

from typing import Optional

from fastapi import UploadFile

from ..exceptions import UploadTooLargeError

READ_CHUNK_SIZE = 1024 * 1024


async def read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    """
    Read an uploaded file, enforcing a maximum size.

    Args:
        upload: The multipart file
        max_bytes: Largest accepted size in bytes

    Returns:
        The file contents

    Raises:
        UploadTooLargeError: If the file exceeds ``max_bytes``
    """
    if upload.size is not None and upload.size > max_bytes:
        raise UploadTooLargeError(upload.size, max_bytes)

    chunks = []
    total = 0
    while True:
        chunk = await upload.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLargeError(total, max_bytes)
        chunks.append(chunk)

    return b"".join(chunks)


async def read_optional_upload(
    upload: Optional[UploadFile], max_bytes: int
) -> Optional[bytes]:
    """Read an optional upload; a missing or empty file yields None."""
    if upload is None or not upload.filename:
        return None
    data = await read_upload(upload, max_bytes)
    return data or None
