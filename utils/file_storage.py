"""
Blob storage for uploaded project files

Uploads are handled in two phases: every file of a submission is validated
first, then all of them are written. Nothing reaches the disk if any file of
the submission is rejected.
"""
import time
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from config.settings import UPLOADS_DIR
from utils.security_utils import UploadKind, validate_uploaded_file

logger = logging.getLogger(__name__)

ValidatedUpload = Tuple[str, bytes]


def generate_stored_name(sanitized_filename: str) -> str:
    """Prefix the name with the epoch in milliseconds so repeated uploads never collide"""
    return f"{int(time.time() * 1000)}-{sanitized_filename}"


async def validate_upload(file: Optional[UploadFile], kind: UploadKind) -> Optional[ValidatedUpload]:
    """
    Returns:
        (sanitized_filename, content), or None when no file was sent

    Raises:
        HTTPException: If the file fails validation
    """
    if file is None or not file.filename:
        return None
    return await validate_uploaded_file(file, kind)


async def write_upload(upload: Optional[ValidatedUpload], uploads_dir: Path = UPLOADS_DIR) -> Optional[str]:
    """
    Write validated bytes under a generated name.

    Returns:
        The stored path (e.g. "uploads/1700000000000-logo.png"), or None
    """
    if upload is None:
        return None

    sanitized_filename, content = upload
    uploads_dir.mkdir(parents=True, exist_ok=True)
    file_path = uploads_dir / generate_stored_name(sanitized_filename)

    # Save file asynchronously using aiofiles (non-blocking I/O)
    async with aiofiles.open(file_path, "wb") as f:
        await f.write(content)

    logger.info(f"File uploaded successfully: {file_path.name} (size: {len(content)} bytes)")
    return file_path.as_posix()


async def remove_uploads(paths: Iterable[Optional[str]]) -> List[str]:
    """Delete stored files that no record points to. Returns the paths removed."""
    removed = []
    for path in paths:
        if not path:
            continue
        try:
            await aiofiles.os.remove(path)
            removed.append(path)
        except FileNotFoundError:
            logger.warning(f"Orphaned upload already gone: {path}")
    if removed:
        logger.info(f"Removed {len(removed)} orphaned upload(s)")
    return removed
