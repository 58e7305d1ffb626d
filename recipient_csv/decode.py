"""
Upload bytes -> text.

Rules:
- Uploads are expected to be UTF-8; a leading BOM is dropped.
- If strict UTF-8 fails, fall back to charset-normalizer's best guess.
- If nothing decodes, reject the upload rather than guess with replacement characters.
"""

from __future__ import annotations

import logging
from typing import Optional

from charset_normalizer import from_bytes

from .config import settings
from .errors import UndecodableUpload, UploadTooLarge

logger = logging.getLogger(__name__)


def check_upload_size(raw: bytes, limit: Optional[int] = None) -> None:
    limit = settings.max_upload_bytes if limit is None else limit
    if len(raw) > limit:
        raise UploadTooLarge(len(raw), limit)


def decode_upload(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise UndecodableUpload()

    logger.info("Upload is not UTF-8; decoding as %s", match.encoding)
    try:
        return raw.decode(match.encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise UndecodableUpload() from exc
