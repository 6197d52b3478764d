"""
Adapters for the external PDF toolkit and vector editor.
"""
from .adapter import ExternalTools
from .base import ToolAdapter

__all__ = ["ExternalTools", "ToolAdapter"]
