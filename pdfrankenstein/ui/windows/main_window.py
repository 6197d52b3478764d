"""
Main application window for PDFrankenstein.
"""

import os
from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSizePolicy,
    QSpacerItem,
    QStackedWidget,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from pdfrankenstein.core.annotations.edit_worker import AnnotateWorker
from pdfrankenstein.core.errors import PdfrankensteinError
from pdfrankenstein.core.export import SaveWorker
from pdfrankenstein.core.session import Session
from pdfrankenstein.core.thumbnails import ThumbnailWorker
from pdfrankenstein.ui.dialogs import confirm_clear, confirm_discard, show_error
from pdfrankenstein.ui.widgets import PageGrid
from pdfrankenstein.utils.logging import get_logger
from pdfrankenstein.utils.paths import (
    ensure_pdf_suffix,
    file_url_to_path,
    split_for_title,
)

logger = get_logger(__name__)

APP_NAME = "PDFrankenstein"

SPLASH_TEXT = "Open a PDF file or drop one here to start annotating."
EDITING_TEXT = "Continue in Inkscape.\nOnce done, save, close and return here."


class MainWindow(QMainWindow):
    """Main window showing the pages of the open document."""

    # Signals
    document_loaded = pyqtSignal(str)
    document_closed = pyqtSignal()

    def __init__(self, file_path: Optional[str] = None):
        super().__init__()

        self.session: Optional[Session] = None
        self.thumbnail_worker: Optional[ThumbnailWorker] = None
        self.annotate_worker: Optional[AnnotateWorker] = None
        self.save_worker: Optional[SaveWorker] = None
        self.changed_since_save = False

        self._setup_window()
        self._setup_ui()
        self._reset_ui()

        if file_path:
            self.load_pdf(file_path)

    def _setup_window(self):
        """Setup main window properties."""
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(640, 400)
        self.setAcceptDrops(True)

    def _setup_ui(self):
        """Setup the user interface."""
        self._create_toolbar()

        # Main stack: splash, editing notice, page grid
        self.stack = QStackedWidget()

        self.splash_label = QLabel(SPLASH_TEXT)
        self.splash_label.setAlignment(Qt.AlignCenter)
        self.stack.addWidget(self.splash_label)

        self.editing_label = QLabel(EDITING_TEXT)
        self.editing_label.setAlignment(Qt.AlignCenter)
        self.stack.addWidget(self.editing_label)

        self.page_grid = PageGrid()
        self.page_grid.page_clicked.connect(self.annotate_page)
        self.page_grid.clear_requested.connect(self.clear_page)
        self.stack.addWidget(self.page_grid)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.top_frame)
        layout.addWidget(self.stack)
        self.setCentralWidget(central)

    def _create_toolbar(self):
        """Create the top toolbar."""
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        self.open_button = self._add_toolbar_button(
            "Open PDF File", "Open PDF (Ctrl+O)", self.open_pdf
        )
        self.save_button = self._add_toolbar_button(
            "Save", "Save annotated PDF (Ctrl+S)", self.save_pdf
        )

        self.top_layout.addSpacerItem(
            QSpacerItem(15, 20, QSizePolicy.Fixed, QSizePolicy.Minimum)
        )

        # File info
        self.file_name_label = QLabel("", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold;")
        self.top_layout.addWidget(self.file_name_label)
        self.dir_label = QLabel("", self.top_frame)
        self.dir_label.setStyleSheet("color: #8899AA;")
        self.top_layout.addWidget(self.dir_label)

        self.top_layout.addSpacerItem(
            QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum)
        )

        self.close_button = self._add_toolbar_button(
            "Close", "Close PDF (Ctrl+W)", self.close_pdf
        )

    def _add_toolbar_button(self, text: str, tooltip: str, callback) -> QToolButton:
        """Add a button to the toolbar."""
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(callback)
        self.top_layout.addWidget(btn)
        return btn

    def _reset_ui(self):
        """Return to the splash screen with no document loaded."""
        self.file_name_label.setText("")
        self.dir_label.setText("")
        self.setWindowTitle(APP_NAME)
        self.open_button.show()
        self.save_button.hide()
        self.close_button.hide()
        self.stack.setCurrentWidget(self.splash_label)

    # Document lifecycle

    def open_pdf(self):
        """Open a PDF file dialog."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open PDF File", "", "PDF Document (*.pdf)"
        )
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path: str):
        """Start a new session for a PDF, closing the current one first."""
        if not self.close_pdf():
            return

        self.setEnabled(False)
        try:
            self.session = Session.open(file_path)
        except PdfrankensteinError as e:
            logger.error(f"Failed to open '{file_path}': {e}")
            self.setEnabled(True)
            show_error(self, "Cannot load file", str(e))
            return
        self.setEnabled(True)

        name, directory = split_for_title(file_path)
        self.file_name_label.setText(name)
        self.dir_label.setText(directory)
        self.setWindowTitle(f"{name} - {APP_NAME}")
        self.open_button.hide()
        self.save_button.show()
        self.close_button.show()

        self.page_grid.load_pages(self.session.page_count)
        self.stack.setCurrentWidget(self.page_grid)
        self._start_thumbnail_loading()

        self.document_loaded.emit(file_path)

    def _start_thumbnail_loading(self):
        self.thumbnail_worker = ThumbnailWorker(self.session)
        self.thumbnail_worker.thumbnail_ready.connect(self.page_grid.set_thumbnail)
        self.thumbnail_worker.thumbnail_failed.connect(
            lambda page, _message: self.page_grid.set_missing(page)
        )
        self.thumbnail_worker.start()

    def _stop_thumbnail_loading(self):
        """Cancel the loader and wait for its in-flight page to finish."""
        if self.thumbnail_worker is None:
            return
        self.thumbnail_worker.cancel()
        self.thumbnail_worker.wait()
        self.thumbnail_worker.deleteLater()
        self.thumbnail_worker = None

    def close_pdf(self) -> bool:
        """
        Close the current document.

        Returns:
            False if the user chose to keep editing
        """
        if self.session is None or self.session.is_closed:
            return True

        if self.changed_since_save and not confirm_discard(self):
            return False

        self._stop_thumbnail_loading()
        self.page_grid.clear_pages()
        self.session.close()
        self.session = None
        self.changed_since_save = False
        self._reset_ui()

        self.document_closed.emit()
        return True

    # Page actions

    def annotate_page(self, page: int):
        """Hand a page to Inkscape; the window stays disabled until it exits."""
        if self.session is None or self.annotate_worker is not None:
            return

        self.setEnabled(False)
        self.stack.setCurrentWidget(self.editing_label)

        self.annotate_worker = AnnotateWorker(self.session, page)
        self.annotate_worker.annotated.connect(self._on_annotated)
        self.annotate_worker.failed.connect(self._on_annotate_failed)
        self.annotate_worker.start()

    def _finish_annotate(self):
        self.setEnabled(True)
        self.stack.setCurrentWidget(self.page_grid)
        if self.annotate_worker is not None:
            self.annotate_worker.wait()
            self.annotate_worker.deleteLater()
        self.annotate_worker = None

    def _on_annotated(self, page: int, changed: bool):
        self._finish_annotate()
        if changed:
            self.changed_since_save = True
            self.page_grid.set_annotated(page, True)

    def _on_annotate_failed(self, page: int, message: str):
        self._finish_annotate()
        show_error(self, "Cannot annotate file", message)

    def clear_page(self, page: int):
        """Clear a page's annotations after confirmation."""
        if self.session is None or not self.session.is_annotated(page):
            return
        if confirm_clear(self, page):
            self.session.clear(page)
            self.page_grid.set_annotated(page, False)

    def save_pdf(self):
        """Ask for a destination and write the annotated document there."""
        if self.session is None or self.save_worker is not None:
            return

        output_path, _ = QFileDialog.getSaveFileName(
            self, "Save", "", "PDF documents (*.pdf *.PDF)"
        )
        if not output_path:
            return
        output_path = ensure_pdf_suffix(output_path)

        self.setEnabled(False)
        self.save_worker = SaveWorker(self.session, output_path)
        self.save_worker.finished.connect(self._on_save_finished)
        self.save_worker.start()

    def _on_save_finished(self, success: bool, message: str):
        self.setEnabled(True)
        if self.save_worker is not None:
            self.save_worker.wait()
            self.save_worker.deleteLater()
        self.save_worker = None

        if success:
            self.changed_since_save = False
            logger.info(message)
        else:
            show_error(self, "Cannot save file", message)

    # Events

    def dragEnterEvent(self, event):  # type: ignore[override]
        if event.mimeData().hasUrls() or event.mimeData().hasText():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):  # type: ignore[override]
        """Open a PDF dropped from a file manager."""
        mime = event.mimeData()
        path = None
        if mime.hasUrls():
            url = mime.urls()[0]
            if url.isLocalFile():
                path = url.toLocalFile()
        elif mime.hasText():
            path = file_url_to_path(mime.text())

        if not path or not os.path.isfile(path):
            event.ignore()
            return
        event.acceptProposedAction()
        self.load_pdf(path)

    def closeEvent(self, event):  # type: ignore[override]
        """Keep the window open while Inkscape is running or if the user cancels."""
        if self.annotate_worker is not None or self.save_worker is not None:
            event.ignore()
            return
        if self.close_pdf():
            event.accept()
        else:
            event.ignore()
