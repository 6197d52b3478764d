# core/export/save_worker.py

from PyQt5.QtCore import QThread, pyqtSignal

from pdfrankenstein.core.errors import PdfrankensteinError
from pdfrankenstein.core.session import Session
from pdfrankenstein.utils.logging import get_logger

logger = get_logger(__name__)


class SaveWorker(QThread):
    """Worker thread for composing and writing the annotated PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message

    def __init__(self, session: Session, output_pdf: str, parent=None):
        super().__init__(parent)
        self.session = session
        self.output_pdf = output_pdf

    def run(self):
        """Execute the save in a background thread."""
        if self.session.has_annotations():
            self.progress.emit("Merging annotated pages...")
        else:
            self.progress.emit("Copying document...")

        try:
            self.session.save(self.output_pdf)
        except PdfrankensteinError as e:
            logger.warning(f"Failed to save '{self.output_pdf}': {e}")
            self.finished.emit(False, str(e))
            return

        self.finished.emit(True, f"Saved to {self.output_pdf}")
