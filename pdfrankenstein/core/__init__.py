"""
Core session logic for PDFrankenstein.
"""

from .errors import (
    ContractViolation,
    DocumentReadError,
    EditorError,
    ExportError,
    ExternalToolError,
    MergeError,
    PdfrankensteinError,
    SessionClosedError,
    StagingError,
    ThumbnailError,
)
from .session import Session

__all__ = [
    "Session",
    "ContractViolation",
    "DocumentReadError",
    "EditorError",
    "ExportError",
    "ExternalToolError",
    "MergeError",
    "PdfrankensteinError",
    "SessionClosedError",
    "StagingError",
    "ThumbnailError",
]
