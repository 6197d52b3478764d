"""
Private scratch directory holding every intermediate file of one session.
"""

import os
import shutil
import sys
import tempfile
from typing import Optional

from pdfrankenstein.core.errors import StagingError
from pdfrankenstein.utils.logging import get_logger

logger = get_logger(__name__)

SOURCE_PDF = "src.pdf"
OVERLAY_PDF = "overlay.pdf"
FINAL_PDF = "final.pdf"


class StagingDirectory:
    """
    Owns a directory created for a single session and the fixed file names in it.

    Per-page artifacts are addressed by zero-based page index. Writers produce
    a temporary sibling first and then ``commit`` it, so readers never see a
    half-written file.
    """

    def __init__(self, path: str):
        self.path = path
        self._destroyed = False

    @classmethod
    def create(cls, root: Optional[str] = None) -> "StagingDirectory":
        """
        Create a fresh, exclusively owned staging directory.

        Args:
            root: Parent directory, or None for the system temp directory

        Raises:
            StagingError: If the directory cannot be created
        """
        try:
            path = tempfile.mkdtemp(prefix="pdfrankenstein-", dir=root)
        except OSError as e:
            raise StagingError(f"failed to create temp directory: {e}", root) from e
        logger.debug(f"Created staging directory {path}")
        return cls(path)

    # File naming

    def join(self, name: str) -> str:
        return os.path.join(self.path, name)

    @property
    def source_pdf(self) -> str:
        return self.join(SOURCE_PDF)

    @property
    def overlay_pdf(self) -> str:
        return self.join(OVERLAY_PDF)

    @property
    def final_pdf(self) -> str:
        return self.join(FINAL_PDF)

    def source_svg(self, page: int) -> str:
        return self.join(f"src-{page}.svg")

    def annotation_svg(self, page: int) -> str:
        return self.join(f"annot-{page}.svg")

    def cleaned_svg(self, page: int) -> str:
        return self.annotation_svg(page) + ".cleaned.svg"

    def annotation_pdf(self, page: int) -> str:
        return self.annotation_svg(page) + ".pdf"

    def thumbnail(self, page: int) -> str:
        return self.join(f"thumb-{page}.png")

    @staticmethod
    def temp_path(path: str) -> str:
        """Temporary sibling of ``path`` that keeps its extension."""
        root, ext = os.path.splitext(path)
        return f"{root}{ext}.tmp{ext}"

    # File operations

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def commit(self, temp_path: str, final_path: str) -> None:
        """
        Atomically move a finished temporary file into place.

        Raises:
            StagingError: If the rename fails
        """
        try:
            os.replace(temp_path, final_path)
        except OSError as e:
            raise StagingError(
                f"failed to move '{temp_path}' into place: {e}", final_path
            ) from e

    def copy_in(self, src: str, dst: str) -> None:
        """
        Copy a file byte for byte.

        Raises:
            StagingError: If reading or writing fails
        """
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            raise StagingError(f"failed to copy '{src}' to '{dst}': {e}", dst) from e

    def read_bytes(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise StagingError(f"failed to read back '{path}': {e}", path) from e

    def write_bytes(self, path: str, data: bytes) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StagingError(f"failed to write '{path}': {e}", path) from e

    def write_atomic(self, path: str, data: bytes) -> None:
        """Write ``data`` to a temporary sibling, then rename it over ``path``."""
        temp = self.temp_path(path)
        self.write_bytes(temp, data)
        self.commit(temp, path)

    def mtime_ns(self, path: str) -> int:
        try:
            return os.stat(path).st_mtime_ns
        except OSError as e:
            raise StagingError(f"failed to stat '{path}': {e}", path) from e

    def remove(self, path: str) -> None:
        """Delete a file if present. Missing files and failures are ignored."""
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove '{path}': {e}")

    def destroy(self) -> None:
        """Recursively delete the directory. Failures are logged, never raised."""
        if self._destroyed:
            return
        self._destroyed = True

        def on_error(func, path, exc):
            if isinstance(exc, tuple):
                exc = exc[1]
            logger.warning(f"Failed to clean up '{path}': {exc}")

        if sys.version_info >= (3, 12):
            shutil.rmtree(self.path, onexc=on_error)
        else:
            shutil.rmtree(self.path, onerror=on_error)
        logger.debug(f"Removed staging directory {self.path}")
