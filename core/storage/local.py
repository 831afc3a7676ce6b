"""Local file storage for uploaded resumes."""

import re
import uuid
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)

RESUME_FOLDER = "resumes"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and characters that are unsafe in a storage key."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


class LocalStorage:
    """Local file storage handler keyed by relative paths."""

    def __init__(self, base_path: str = "./storage"):
        """
        Initialize local storage.

        Args:
            base_path: Base directory for file storage
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        if self.base_path.resolve() not in path.parents:
            raise ValueError(f"Storage key escapes base path: {key}")
        return path

    def save(
        self,
        file_data: bytes,
        filename: str,
        subfolder: Optional[str] = None
    ) -> str:
        """
        Save bytes under ``subfolder/filename``.

        Returns:
            The storage key of the saved file
        """
        key = f"{subfolder}/{filename}" if subfolder else filename
        file_path = self._resolve(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(file_data)

        logger.info(f"Saved file to {key}")
        return key

    def save_resume(self, file_data: bytes, filename: str) -> str:
        """
        Store a resume under a collision-free key.

        Returns:
            Key of the form ``resumes/<uuid>_<safe name>``
        """
        return self.save(
            file_data, f"{uuid.uuid4()}_{safe_filename(filename)}", RESUME_FOLDER
        )

    def read(self, key: str) -> bytes:
        """
        Read a stored file.

        Raises:
            FileNotFoundError: If the key does not exist
        """
        file_path = self._resolve(key)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {key}")
        return file_path.read_bytes()

    def delete(self, key: str) -> bool:
        """Delete a stored file. Returns False when nothing was there."""
        file_path = self._resolve(key)
        if not file_path.exists():
            return False

        file_path.unlink()
        logger.info(f"Deleted file: {key}")
        return True

    def exists(self, key: str) -> bool:
        return self._resolve(key).exists()
