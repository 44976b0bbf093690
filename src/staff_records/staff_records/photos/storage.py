from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Protocol

from werkzeug.utils import secure_filename

from ..core.constants import PHOTO_SUBDIR

logger = logging.getLogger(__name__)


class PhotoStorage(Protocol):
    """Interface for storing staff photos.

    Paths returned by ``store`` are what gets saved in ``StaffRecord.photo_path``.
    """

    def store(self, content: bytes, original_filename: str) -> str:
        raise NotImplementedError

    def delete(self, photo_path: Optional[str]) -> bool:
        raise NotImplementedError

    def exists(self, photo_path: Optional[str]) -> bool:
        raise NotImplementedError


class FileSystemPhotoStorage(PhotoStorage):
    """Stores photos under ``<content_root>/<subdir>``.

    Stored paths are relative to ``content_root`` (``uploads/staff/<uuid>_<name>``)
    so templates can hand them straight to ``url_for('static', ...)``.
    """

    def __init__(self, content_root: str | Path, subdir: str = PHOTO_SUBDIR):
        self._content_root = Path(content_root)
        self._subdir = subdir.strip("/")

    @property
    def photo_dir(self) -> Path:
        return self._content_root / self._subdir

    def store(self, content: bytes, original_filename: str) -> str:
        self.photo_dir.mkdir(parents=True, exist_ok=True)

        # Sanitize the stem only; secure_filename drops non-ASCII names down to the bare extension text.
        stem, ext = os.path.splitext(original_filename or "")
        ext = ext.lower() if ext[1:].isalnum() else ""
        safe_name = (secure_filename(stem) or "photo") + ext
        file_name = f"{uuid.uuid4()}_{safe_name}"
        target = self.photo_dir / file_name

        # "xb": never overwrite an existing file.
        with open(target, "xb") as fh:
            fh.write(content)

        logger.debug("Stored photo %s (%d bytes)", target, len(content))
        return f"{self._subdir}/{file_name}"

    def delete(self, photo_path: Optional[str]) -> bool:
        if not photo_path:
            return False

        target = self._resolve(photo_path)
        if not target.exists():
            return False

        target.unlink()
        logger.debug("Deleted photo %s", target)
        return True

    def exists(self, photo_path: Optional[str]) -> bool:
        if not photo_path:
            return False
        return self._resolve(photo_path).is_file()

    def _resolve(self, photo_path: str) -> Path:
        # Bare file names (no directory part) live directly in the photo dir.
        if "/" not in photo_path and "\\" not in photo_path:
            candidate = self.photo_dir / photo_path
        else:
            candidate = self._content_root / photo_path

        resolved = candidate.resolve()
        root = self.photo_dir.resolve()
        if resolved.parent != root:
            raise ValueError(f"Photo path outside of photo directory: {photo_path!r}")
        return resolved
