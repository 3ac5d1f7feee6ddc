import asyncio
import mimetypes
from pathlib import Path
from typing import Optional

from shopfinder.config import MAX_FILE_SIZE
from shopfinder.errors import UploadValidationError
from shopfinder.models import ImageUpload


def validate_upload(size: int, mime_type: Optional[str], max_size: int = MAX_FILE_SIZE) -> None:
    """
    Reject files the recognizer should never see.

    Raises:
        UploadValidationError: If the file is larger than `max_size` or not an image.
    """
    if size > max_size:
        raise UploadValidationError(
            f"File too large! Maximum allowed: {max_size // (1024 * 1024)}MB"
        )
    if not mime_type or not mime_type.startswith("image/"):
        raise UploadValidationError("Please upload image files only.")


async def load_upload(path, max_size: int = MAX_FILE_SIZE) -> ImageUpload:
    """
    Validate and read an image file from disk.

    The size and mime type are checked before the file is read, so an
    oversized file is never loaded into memory.

    Args:
        path: Path to the image file.
        max_size (int): Upper bound in bytes.

    Returns:
        ImageUpload: The image bytes with their mime type.

    Raises:
        UploadValidationError: If the file is missing, unreadable, too large or not an image.
    """
    file_path = Path(path)
    mime_type, _ = mimetypes.guess_type(file_path.name)

    try:
        size = file_path.stat().st_size
    except OSError as e:
        raise UploadValidationError(f"Cannot read '{file_path}': {e}") from e

    validate_upload(size, mime_type, max_size)

    try:
        data = await asyncio.to_thread(file_path.read_bytes)
    except OSError as e:
        raise UploadValidationError(f"Cannot read '{file_path}': {e}") from e

    return ImageUpload(name=file_path.name, data=data, mime_type=mime_type)
