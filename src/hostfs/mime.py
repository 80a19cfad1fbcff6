"""MIME type detection.

Detection sniffs the leading bytes first (magic numbers, then text versus
binary) and uses the file extension (``mimetypes``) only to refine the result.
Filesystem implementations accept any callable with the ``MimeDetector``
shape, so this module is only the default.
"""

from __future__ import annotations

import mimetypes
import os

__all__ = [
    "DIRECTORY_MIME_TYPE",
    "EMPTY_MIME_TYPE",
    "guess_mime_type",
    "detect_mime_type",
]

DIRECTORY_MIME_TYPE = "directory"
EMPTY_MIME_TYPE = "application/x-empty"
BINARY_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"

# Bytes read from the head of a file for sniffing
SAMPLE_SIZE = 2048

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
)


def _is_text(sample: bytes) -> bool:
    if b"\x00" in sample:
        return False
    try:
        sample.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte character cut at the sample boundary is still text
        return e.start >= len(sample) - 3 and e.reason == "unexpected end of data"
    return True


def guess_mime_type(path: str, sample: bytes) -> str:
    """Guess a MIME type from the leading bytes of a file.

    The content decides between known binary formats, text and other binary
    data. The extension only refines a result of the same kind: a ``.csv``
    holding text is ``text/csv``, but a ``.png`` holding text is
    ``text/plain``.

    Args:
        path: File path, used for the extension lookup.
        sample: Leading bytes of the file content.

    Returns:
        Detected MIME type string.
    """
    if not sample:
        return EMPTY_MIME_TYPE

    for signature, mime_type in _SIGNATURES:
        if sample.startswith(signature):
            return mime_type

    guessed, _ = mimetypes.guess_type(path, strict=False)
    if _is_text(sample):
        if guessed and guessed.startswith("text/"):
            return guessed
        return TEXT_MIME_TYPE
    if guessed and not guessed.startswith("text/"):
        return guessed
    return BINARY_MIME_TYPE


def detect_mime_type(path: str) -> str:
    """Detect the MIME type of a path on the host filesystem.

    Args:
        path: Existing file or directory.

    Returns:
        Detected MIME type; "directory" for directories.

    Raises:
        OSError: If the file cannot be opened.
    """
    if os.path.isdir(path):
        return DIRECTORY_MIME_TYPE
    with open(path, "rb") as f:
        sample = f.read(SAMPLE_SIZE)
    return guess_mime_type(path, sample)
