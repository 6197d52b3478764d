"""
Custom widgets for the page overview.
"""

from .page_grid import PageGrid

__all__ = ["PageGrid"]
