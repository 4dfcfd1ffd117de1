"""
Local filesystem storage for uploaded file content.

Content is written under a single root directory using random names, so
nothing from the request ever reaches the path.
"""

import base64
import binascii
import logging
import uuid
from pathlib import Path
from typing import Union

from files_manager.errors import PersistenceFailedError, ValidationFailedError

logger = logging.getLogger(__name__)


def decode_content(encoded: str) -> bytes:
    """Decode base64 content, tolerating whitespace and missing padding."""
    if not isinstance(encoded, str):
        raise ValidationFailedError("Invalid data")
    compact = "".join(encoded.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationFailedError("Invalid data")


class LocalContentStore:
    """Writes file content to `<root>/<uuid4>`."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def ensure_root(self) -> None:
        """Create the root directory if it is missing. Safe to repeat."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create storage directory {self.root}: {e}")
            raise PersistenceFailedError() from e

    def save(self, content: bytes) -> str:
        """Write content to a fresh path and return that path."""
        file_path = self.root / str(uuid.uuid4())
        try:
            with open(file_path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            # A partial file is never referenced by a record
            file_path.unlink(missing_ok=True)
            raise PersistenceFailedError() from e

        logger.info(f"Stored {len(content)} bytes at {file_path}")
        return str(file_path)

    def discard(self, path: Union[str, Path]) -> None:
        """Remove content whose record was never stored."""
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove orphaned content {path}: {e}")
