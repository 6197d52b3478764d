"""
Worker thread that keeps the editor's blocking lifetime off the UI thread.
"""

from PyQt5.QtCore import QThread, pyqtSignal

from pdfrankenstein.core.errors import PdfrankensteinError
from pdfrankenstein.core.session import Session


class AnnotateWorker(QThread):
    """Runs Session.annotate for one page and reports the outcome by signal."""

    # Signals
    annotated = pyqtSignal(int, bool)  # page, changed
    failed = pyqtSignal(int, str)  # page, error message

    def __init__(self, session: Session, page: int, parent=None):
        super().__init__(parent)
        self.session = session
        self.page = page

    def run(self):
        try:
            changed = self.session.annotate(self.page)
        except PdfrankensteinError as e:
            self.failed.emit(self.page, str(e))
            return
        self.annotated.emit(self.page, changed)
