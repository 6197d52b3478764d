"""
Thread-safe record of which pages carry a saved annotation.
"""
import threading
from typing import List, Set


class AnnotationTracker:
    """
    Set of annotated page indices guarded by a single lock.

    Background thumbnail loading reads it while foreground edits write it,
    so every check and every mutation holds the lock for its whole duration.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pages: Set[int] = set()

    def mark(self, page: int) -> bool:
        """
        Mark a page as annotated.

        Returns:
            True if the page was not annotated before
        """
        with self._lock:
            added = page not in self._pages
            self._pages.add(page)
            return added

    def unmark(self, page: int) -> bool:
        """
        Forget a page's annotation.

        Returns:
            True if the page had been annotated
        """
        with self._lock:
            if page in self._pages:
                self._pages.remove(page)
                return True
            return False

    def is_annotated(self, page: int) -> bool:
        with self._lock:
            return page in self._pages

    def has_annotations(self) -> bool:
        with self._lock:
            return len(self._pages) > 0

    def snapshot(self) -> List[int]:
        """Annotated pages in ascending order, copied under the lock."""
        with self._lock:
            return sorted(self._pages)

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
