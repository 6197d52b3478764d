"""
Background worker that renders every page thumbnail after a document opens.
"""

from PyQt5.QtCore import QThread, pyqtSignal

from pdfrankenstein.core.errors import PdfrankensteinError, SessionClosedError
from pdfrankenstein.core.session import Session
from pdfrankenstein.utils.logging import get_logger

logger = get_logger(__name__)


class ThumbnailWorker(QThread):
    """Loads thumbnails page by page so the grid fills in without blocking the UI."""

    # Signals
    thumbnail_ready = pyqtSignal(int, str)  # page, image path
    thumbnail_failed = pyqtSignal(int, str)  # page, error message
    progress = pyqtSignal(int, int)  # pages done, total pages
    finished = pyqtSignal(bool)  # True if every page was attempted

    def __init__(self, session: Session, parent=None):
        super().__init__(parent)
        self._session = session
        self._page_count = session.page_count
        self._cancelled = False

    def cancel(self):
        """
        Stop before the next page.

        A thumbnail that is already rendering is allowed to finish.
        """
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def run(self):
        """Render thumbnails in page order until done or cancelled."""
        for page in range(self._page_count):
            if self._cancelled or self._session.is_closed:
                logger.debug(f"Thumbnail loading stopped before page {page}")
                self.finished.emit(False)
                return

            try:
                path = self._session.thumbnail(page)
            except SessionClosedError:
                self.finished.emit(False)
                return
            except PdfrankensteinError as e:
                logger.warning(f"Failed to load thumbnail for page {page}: {e}")
                self.thumbnail_failed.emit(page, str(e))
            else:
                self.thumbnail_ready.emit(page, path)

            self.progress.emit(page + 1, self._page_count)

        self.finished.emit(True)
