"""
PDFrankenstein: annotate PDF pages in Inkscape and merge them back.

    >>> from pdfrankenstein import Session
    >>> with Session.open("paper.pdf") as session:
    ...     session.annotate(0)
    ...     session.save("paper-annotated.pdf")
"""

from pdfrankenstein.core import (
    ContractViolation,
    DocumentReadError,
    ExternalToolError,
    PdfrankensteinError,
    Session,
    SessionClosedError,
    StagingError,
)

__version__ = "0.1.0"

__all__ = [
    "Session",
    "ContractViolation",
    "DocumentReadError",
    "ExternalToolError",
    "PdfrankensteinError",
    "SessionClosedError",
    "StagingError",
]
