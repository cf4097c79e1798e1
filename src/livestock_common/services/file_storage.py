"""Local disk file storage for uploaded media."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStorage(ABC):
    """Abstract interface for file storage."""

    @abstractmethod
    def save_file(self, filename: str, content: bytes) -> None:
        """Store a new file.

        Raises:
            FileExistsError: If a file with this name already exists
        """
        pass

    @abstractmethod
    def delete_file(self, filename: str) -> None:
        """Delete a file."""
        pass

    @abstractmethod
    def exists(self, filename: str) -> bool:
        """Whether a file with this name is stored."""
        pass


class LocalFileStorage(FileStorage):
    """Flat directory on local disk. Names are never reused or overwritten."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize local file storage.

        Args:
            directory: Target directory, created on first write if absent
        """
        self.directory = Path(directory)

    def _path(self, filename: str) -> Path:
        path = self.directory / filename
        if path.parent != self.directory or filename in {"", ".", ".."}:
            raise ValueError(f"Invalid filename: {filename!r}")
        return path

    def save_file(self, filename: str, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(filename), "xb") as fh:
            fh.write(content)
        logger.debug("Stored %d bytes as %s", len(content), filename)

    def delete_file(self, filename: str) -> None:
        try:
            self._path(filename).unlink()
            logger.info("Deleted file %s", filename)
        except FileNotFoundError:
            logger.warning("File %s not found for deletion", filename)

    def exists(self, filename: str) -> bool:
        return self._path(filename).is_file()
