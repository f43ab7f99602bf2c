from dataclasses import dataclass
from typing import Optional, Union

from starlette.datastructures import UploadFile

from app.constants.constants import (
    ALLOWED_RESUME_EXTENSIONS,
    INVALID_RESUME_TYPE_MESSAGE,
    RESUME_TOO_LARGE_MESSAGE,
)
from app.core.config import settings
from app.core.errors import AttachmentRejected


@dataclass
class ResumeAttachment:
    filename: str
    content: bytes
    content_type: str


def resume_extension(filename: str) -> str:
    """Lower-cased text after the last dot ("" when there is none)."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def resume_too_large_message(max_size: int) -> str:
    return RESUME_TOO_LARGE_MESSAGE.format(max_mb=f"{max_size / (1024 * 1024):g}")


async def validate_resume(file: Union[UploadFile, str, None], max_size: Optional[int] = None) -> Optional[ResumeAttachment]:
    """
    Validate an uploaded resume and load it for attaching.
    Returns None when no file was chosen.

    The extension is checked before the size, so a disallowed type is
    rejected whatever its size. ``max_size`` defaults to RESUME_MAX_BYTES.
    """
    # An untouched file input arrives as a part with an empty filename
    if not isinstance(file, UploadFile) or not file.filename:
        return None

    if max_size is None:
        max_size = settings.RESUME_MAX_BYTES

    if resume_extension(file.filename) not in ALLOWED_RESUME_EXTENSIONS:
        raise AttachmentRejected(INVALID_RESUME_TYPE_MESSAGE)

    content = await file.read()
    if len(content) >= max_size:
        raise AttachmentRejected(resume_too_large_message(max_size))

    return ResumeAttachment(
        filename=file.filename,
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )
