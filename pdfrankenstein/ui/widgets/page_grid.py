"""
Grid of page thumbnails with annotation badges.
"""
from typing import Dict, Optional

from PyQt5.QtCore import QPoint, QSize, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
from PyQt5.QtWidgets import QListView, QListWidget, QListWidgetItem, QMenu

TILE_SIZE = 200

CLEAN_BADGE = QColor(0, 0, 0, 0)
DIRTY_BADGE = QColor("orange")


def placeholder_pixmap(text: str, size: int = TILE_SIZE) -> QPixmap:
    """Draw a plain placeholder tile with centered text."""
    pixmap = QPixmap(int(size * 0.75), size)
    pixmap.fill(QColor("#e0e0e0"))
    painter = QPainter(pixmap)
    painter.setPen(QColor("#7A899C"))
    painter.drawRect(0, 0, pixmap.width() - 1, pixmap.height() - 1)
    painter.drawText(pixmap.rect(), Qt.AlignCenter, text)
    painter.end()
    return pixmap


class PageGrid(QListWidget):
    """Icon-mode list showing one tile per page."""

    page_clicked = pyqtSignal(int)
    clear_requested = pyqtSignal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListView.IconMode)
        self.setResizeMode(QListView.Adjust)
        self.setMovement(QListView.Static)
        self.setIconSize(QSize(TILE_SIZE, TILE_SIZE))
        self.setSpacing(10)
        self.setSelectionMode(QListWidget.NoSelection)
        self.setContextMenuPolicy(Qt.CustomContextMenu)

        self._loading_icon = QIcon(placeholder_pixmap("Loading..."))
        self._missing_icon = QIcon(placeholder_pixmap("No preview"))
        self._annotated: Dict[int, bool] = {}

        self.itemClicked.connect(self._item_clicked)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def load_pages(self, page_count: int):
        """Replace the grid with ``page_count`` loading tiles."""
        self.clear_pages()
        for page in range(page_count):
            item = QListWidgetItem(self._loading_icon, self._label(page, False))
            item.setData(Qt.UserRole, page)
            item.setTextAlignment(Qt.AlignHCenter | Qt.AlignBottom)
            self.addItem(item)
            self._annotated[page] = False

    def clear_pages(self):
        self.clear()
        self._annotated.clear()

    def set_thumbnail(self, page: int, path: str):
        item = self.item(page)
        if item is None:
            return
        pixmap = QPixmap(path)
        if pixmap.isNull():
            item.setIcon(self._missing_icon)
        else:
            item.setIcon(QIcon(pixmap))

    def set_missing(self, page: int):
        item = self.item(page)
        if item is not None:
            item.setIcon(self._missing_icon)

    def set_loading(self, page: int):
        item = self.item(page)
        if item is not None:
            item.setIcon(self._loading_icon)

    def set_annotated(self, page: int, annotated: bool):
        """Update a tile's label and badge color."""
        item = self.item(page)
        if item is None:
            return
        self._annotated[page] = annotated
        item.setText(self._label(page, annotated))
        item.setBackground(QBrush(DIRTY_BADGE if annotated else CLEAN_BADGE))
        item.setForeground(QBrush(QColor("white") if annotated else QColor("black")))

    def is_annotated(self, page: int) -> bool:
        return self._annotated.get(page, False)

    @staticmethod
    def _label(page: int, annotated: bool) -> str:
        if annotated:
            return f"{page + 1} : clear"
        return str(page + 1)

    def _page_of(self, item: Optional[QListWidgetItem]) -> Optional[int]:
        if item is None:
            return None
        return item.data(Qt.UserRole)

    def _item_clicked(self, item: QListWidgetItem):
        page = self._page_of(item)
        if page is not None:
            self.page_clicked.emit(page)

    def _show_context_menu(self, pos: QPoint):
        page = self._page_of(self.itemAt(pos))
        if page is None or not self.is_annotated(page):
            return
        menu = QMenu(self)
        clear_action = menu.addAction("Clear annotations")
        if menu.exec_(self.viewport().mapToGlobal(pos)) is clear_action:
            self.clear_requested.emit(page)
