"""Writer for the site content JSON document."""
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from ..config import get_config

logger = logging.getLogger(__name__)


class ConfigWriteError(Exception):
    """Raised when the site content document cannot be serialized or written."""


class SiteConfigWriter:
    """Overwrites the site content file with a new JSON document.

    No merging, no schema check and no backup of the previous version.
    """

    _instance: Optional["SiteConfigWriter"] = None

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @classmethod
    def get_instance(cls) -> "SiteConfigWriter":
        """Get or create the singleton writing to ``storage.config_file``."""
        if cls._instance is None:
            cls._instance = cls(get_config().storage.config_file)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None

    @property
    def path(self) -> Path:
        return self._path

    def write(self, document: Any) -> Path:
        """Serialize *document* with 2-space indentation and replace the file.

        Raises:
            ConfigWriteError: On serialization or filesystem errors.
        """
        try:
            text = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ConfigWriteError(f"Document is not JSON serializable: {e}") from e

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ConfigWriteError(f"Failed to write {self._path}: {e}") from e

        logger.info("Saved site config: %s (%d chars)", self._path, len(text))
        return self._path
