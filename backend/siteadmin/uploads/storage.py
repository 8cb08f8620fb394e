"""Upload storage for the site admin service.

Uploaded images are written flat into the storage root:
``<root>/<resolved filename>``. Writing an existing name truncates and
replaces it; there is no versioning and no temp-file-then-rename.
"""
import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import get_config

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an upload cannot be written to the storage root."""


class UploadStorage:
    """Writes resolved uploads into a single shared directory."""

    _instance: Optional["UploadStorage"] = None

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    @classmethod
    def get_instance(cls) -> "UploadStorage":
        """Get or create the singleton rooted at ``storage.root``."""
        if cls._instance is None:
            cls._instance = cls(get_config().storage.root_dir)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, filename: str) -> Path:
        """Return the destination path for *filename* inside the root.

        Raises:
            StorageError: If *filename* would land anywhere but directly
                inside the root.
        """
        root = self._root.resolve()
        path = (root / filename).resolve()
        if not filename or path.parent != root:
            raise StorageError(f"Refusing to write outside storage root: {filename!r}")
        return path

    def save(self, filename: str, stream: BinaryIO) -> Path:
        """Copy *stream* to ``<root>/<filename>``, replacing any existing file.

        Args:
            filename: An already-resolved, sanitized filename.
            stream: Readable binary file object positioned at the start.

        Returns:
            Path of the written file.

        Raises:
            StorageError: If the destination is invalid or unwritable.
        """
        path = self.path_for(filename)
        try:
            with path.open("wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        logger.info("Saved upload: %s (%d bytes)", path, path.stat().st_size)
        return path
