"""
Utility functions and helpers.
"""
from .logging import get_logger, set_level
from .paths import ensure_pdf_suffix, file_url_to_path, shrink_home, split_for_title

__all__ = [
    "get_logger",
    "set_level",
    "ensure_pdf_suffix",
    "file_url_to_path",
    "shrink_home",
    "split_for_title",
]
