"""
Upload validation for project submissions: filename sanitizing, extension
whitelist, size limit and a magic-byte check of the actual content.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from fastapi import HTTPException, UploadFile


# 10MB in bytes
MAX_FILE_SIZE = 10 * 1024 * 1024

MAX_FILENAME_LENGTH = 200

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._\-\s]")

# (prefix, mime type); WEBP is matched separately since its tag follows the RIFF size field
_MAGIC_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
)


@dataclass(frozen=True)
class UploadKind:
    """What a given upload field accepts."""
    label: str
    extensions: Tuple[str, ...]
    mime_types: Tuple[str, ...]
    max_size: int = MAX_FILE_SIZE


LOGO = UploadKind(
    label="logo",
    extensions=(".png", ".jpg", ".jpeg", ".gif", ".webp"),
    mime_types=("image/png", "image/jpeg", "image/gif", "image/webp"),
)

DOCUMENT = UploadKind(
    label="document",
    extensions=(".pdf",),
    mime_types=("application/pdf",),
)


def sanitize_filename(filename: str) -> str:
    """
    Reduce a client-supplied name to a safe basename.

    Separators, null bytes and ".." sequences are removed, then anything
    outside letters, digits, dots, hyphens, underscores and spaces.

    Raises:
        ValueError: If nothing usable is left
    """
    cleaned = (filename or "").replace("\x00", "").replace("/", "").replace("\\", "")
    while ".." in cleaned:
        cleaned = cleaned.replace("..", "")
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", cleaned).strip(". ")

    if not cleaned:
        raise ValueError("Filename is invalid after sanitization")

    if len(cleaned) > MAX_FILENAME_LENGTH:
        suffix = Path(cleaned).suffix
        cleaned = Path(cleaned).stem[:MAX_FILENAME_LENGTH - len(suffix)] + suffix

    return cleaned


def get_file_extension(filename: str) -> str:
    """Return the lowercase extension with leading dot (e.g. ".png") or empty string"""
    return Path(filename).suffix.lower()


def detect_mime_type_from_content(content: bytes) -> Optional[str]:
    """MIME type from the leading magic bytes, or None if unrecognized"""
    for prefix, mime_type in _MAGIC_SIGNATURES:
        if content.startswith(prefix):
            return mime_type
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return None


def validate_file_extension(filename: str, kind: UploadKind) -> None:
    ext = get_file_extension(filename)
    if ext not in kind.extensions:
        raise HTTPException(
            status_code=400,
            detail=f"File extension '{ext}' is not allowed for {kind.label}. Allowed extensions: {', '.join(kind.extensions)}"
        )


def validate_file_content(content: bytes, filename: str, kind: UploadKind) -> None:
    """
    Raises:
        HTTPException: 400 if the content is empty, too large or not one of
            the kind's MIME types
    """
    if len(content) > kind.max_size:
        size_mb = len(content) / (1024 * 1024)
        max_mb = kind.max_size / (1024 * 1024)
        raise HTTPException(
            status_code=400,
            detail=f"File size ({size_mb:.2f}MB) exceeds maximum allowed size ({max_mb}MB)"
        )

    if not content:
        raise HTTPException(status_code=400, detail="File is empty")

    if detect_mime_type_from_content(content) not in kind.mime_types:
        raise HTTPException(
            status_code=400,
            detail=f"Could not verify file type of '{filename}'. Allowed types: {', '.join(kind.mime_types)}"
        )


async def validate_uploaded_file(file: UploadFile, kind: UploadKind) -> Tuple[str, bytes]:
    """
    Returns:
        Tuple of (sanitized_filename, file_content)

    Raises:
        HTTPException: If any validation fails
    """
    try:
        sanitized_filename = sanitize_filename(file.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    validate_file_extension(sanitized_filename, kind)

    content = await file.read()
    validate_file_content(content, sanitized_filename, kind)

    return sanitized_filename, content
