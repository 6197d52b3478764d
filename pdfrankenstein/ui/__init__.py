"""
Qt user interface for PDFrankenstein.
"""
from .windows import MainWindow

__all__ = ["MainWindow"]
