"""
Writing the annotated document.
"""
from .save_worker import SaveWorker

__all__ = ["SaveWorker"]
