"""
Progressive thumbnail loading.
"""
from .thumbnail_worker import ThumbnailWorker

__all__ = ["ThumbnailWorker"]
