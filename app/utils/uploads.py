"""
==============================================================================
Upload Intake Module
==============================================================================

Writes uploaded image files into the image directory.

File Format:
-----------
{pid}_{epoch_ms}{ext}      e.g. 491772_1700000000000.png
image_{epoch_ms}{ext}      when no pid accompanies the upload

The extension is taken from the client's original filename and may be empty.

==============================================================================
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path, PurePath
from typing import BinaryIO, Callable, Optional

from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


FALLBACK_PREFIX = "image"


def current_millis() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


class UploadIntake:
    """
    Names and stores incoming image uploads.

    Attributes:
        _image_dir: Directory receiving uploads
        _clock: Callable returning epoch milliseconds

    Example:
        >>> intake = UploadIntake(Path("uploads"), clock=lambda: 1700000000000)
        >>> intake.build_filename("491772", "cap.png")
        '491772_1700000000000.png'
    """

    def __init__(
        self,
        image_dir: Path,
        clock: Optional[Callable[[], int]] = None
    ) -> None:
        self._image_dir = Path(image_dir)
        self._clock = clock or current_millis

    @staticmethod
    def extension_of(original_filename: Optional[str]) -> str:
        """Extension of the client filename including the dot, or ''."""
        if not original_filename:
            return ""
        return PurePath(original_filename).suffix

    def build_filename(
        self,
        pid: Optional[str],
        original_filename: Optional[str],
        timestamp_ms: Optional[int] = None
    ) -> str:
        """
        Build the stored filename for an upload.

        Args:
            pid: Product id sent with the upload (may be missing)
            original_filename: Client-side filename
            timestamp_ms: Override for the current time

        Returns:
            Filename relative to the image directory
        """
        if timestamp_ms is None:
            timestamp_ms = self._clock()
        prefix = pid if pid else FALLBACK_PREFIX
        return f"{prefix}_{timestamp_ms}{self.extension_of(original_filename)}"

    def save(
        self,
        pid: Optional[str],
        original_filename: Optional[str],
        source: BinaryIO
    ) -> str:
        """
        Stream an upload into the image directory.

        Args:
            pid: Product id sent with the upload
            original_filename: Client-side filename
            source: Readable binary stream of the upload body

        Returns:
            The stored filename

        Raises:
            AppException: INVALID_PARAMETER if the pid would place the
                file outside the image directory
        """
        filename = self.build_filename(pid, original_filename)
        if PurePath(filename).name != filename or "\\" in filename:
            raise exceptions.invalid_parameter("pid", "must not contain path separators")

        target = self._image_dir / filename

        with target.open("wb") as out:
            shutil.copyfileobj(source, out)

        logger.info(f"📥 Stored upload {original_filename!r} as {target}")
        return filename
