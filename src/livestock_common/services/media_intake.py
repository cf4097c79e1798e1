"""Media intake: validates an upload batch and stores it under unique names."""

import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import PurePath

from livestock_common.exceptions import (
    InternalError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from livestock_common.models.upload import UploadedFile
from livestock_common.services.file_storage import FileStorage

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILES = 8
DEFAULT_MAX_FILE_SIZE = 20 * 1024 * 1024
ALLOWED_MIME_PREFIXES = ("image/", "video/")

_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]{1,10}")
_NAME_ATTEMPTS = 3


@dataclass(frozen=True)
class IncomingFile:
    """One file of a multipart upload, already read into memory."""

    original_name: str
    content_type: str
    content: bytes


def _extension(original_name: str) -> str:
    ext = PurePath(original_name or "").suffix
    return ext if _EXTENSION_RE.fullmatch(ext) else ""


def generate_filename(original_name: str) -> str:
    """Millisecond timestamp plus 48 random bits plus the original extension."""
    millis = time.time_ns() // 1_000_000
    return f"{millis}-{secrets.token_hex(6)}{_extension(original_name)}"


class MediaIntake:
    """Turns uploaded files into stored files with servable URLs.

    A batch is validated as a whole before anything is written, so a
    rejected batch leaves no files behind.
    """

    def __init__(
        self,
        storage: FileStorage,
        max_files: int = DEFAULT_MAX_FILES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        url_prefix: str = "/uploads",
    ) -> None:
        self.storage = storage
        self.max_files = max_files
        self.max_file_size = max_file_size
        self.url_prefix = url_prefix.rstrip("/")

    def check_count(self, count: int) -> None:
        """Reject a batch by file count alone, before any content is read."""
        if count == 0:
            raise ValidationError("No files uploaded")
        if count > self.max_files:
            raise PayloadTooLargeError(f"Too many files: at most {self.max_files} per upload")

    def validate(self, files: list[IncomingFile]) -> None:
        """Validate count, MIME type and size of every file in the batch."""
        self.check_count(len(files))
        for incoming in files:
            content_type = (incoming.content_type or "").lower()
            if not content_type.startswith(ALLOWED_MIME_PREFIXES):
                raise UnsupportedMediaTypeError()
            if len(incoming.content) > self.max_file_size:
                raise PayloadTooLargeError(
                    f"File too large: {incoming.original_name or 'upload'} exceeds {self.max_file_size} bytes"
                )

    def upload(self, files: list[IncomingFile]) -> list[UploadedFile]:
        """Validate and store a batch of files.

        Returns:
            One UploadedFile per input file, in the same order

        Raises:
            ValidationError: If the batch is empty
            PayloadTooLargeError: If there are too many files or one is too large
            UnsupportedMediaTypeError: If a file is not an image or video
            InternalError: If writing fails; files already written are removed
        """
        self.validate(files)

        stored: list[UploadedFile] = []
        try:
            for incoming in files:
                filename = self._store(incoming)
                stored.append(
                    UploadedFile(
                        filename=filename,
                        url=f"{self.url_prefix}/{filename}",
                        mimetype=incoming.content_type,
                    )
                )
        except OSError as e:
            logger.error("Upload failed after %d of %d files: %s", len(stored), len(files), e, exc_info=True)
            for uploaded in stored:
                self.storage.delete_file(uploaded.filename)
            raise InternalError("Upload failed") from e

        logger.info("Stored %d uploaded files", len(stored))
        return stored

    def _store(self, incoming: IncomingFile) -> str:
        for _ in range(_NAME_ATTEMPTS):
            filename = generate_filename(incoming.original_name)
            try:
                self.storage.save_file(filename, incoming.content)
                return filename
            except FileExistsError:
                logger.warning("Filename collision on %s, retrying", filename)
        raise FileExistsError(f"Could not allocate a unique filename for {incoming.original_name!r}")
