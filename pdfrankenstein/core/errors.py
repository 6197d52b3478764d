"""
Error types raised by the annotation session and its collaborators.
"""

from typing import Optional, Sequence


class PdfrankensteinError(Exception):
    """Base class for every recoverable error the session reports."""


class DocumentReadError(PdfrankensteinError):
    """The input file is not a readable PDF or its page count is unusable."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class StagingError(PdfrankensteinError):
    """A filesystem operation on a staged artifact failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ExternalToolError(PdfrankensteinError):
    """
    An external program exited with failure or could not be started.

    The message is the program's standard error output, unmodified apart
    from trailing whitespace, because that is the most useful diagnostic
    available to the user.
    """

    def __init__(
        self,
        stderr: str,
        program: str = "",
        args: Sequence[str] = (),
        returncode: Optional[int] = None,
    ):
        self.stderr = stderr.rstrip()
        self.program = program
        self.args_list = list(args)
        self.returncode = returncode
        message = self.stderr
        if not message:
            message = f"{program or 'external tool'} exited with status {returncode}"
        super().__init__(message)

    @classmethod
    def wrap(cls, error: "ExternalToolError", page: Optional[int] = None):
        """Re-type a tool failure, keeping its message and process details."""
        wrapped = cls(error.stderr, error.program, error.args_list, error.returncode)
        wrapped.page = page
        return wrapped


class ThumbnailError(ExternalToolError):
    """Rasterizing a page thumbnail failed."""

    page: Optional[int] = None


class ExportError(ExternalToolError):
    """Exporting a page to SVG, or an annotation to PDF, failed."""

    page: Optional[int] = None


class EditorError(ExternalToolError):
    """The interactive editor exited with failure."""

    page: Optional[int] = None


class MergeError(ExternalToolError):
    """Merging annotation pages or overlaying them onto the document failed."""

    page: Optional[int] = None


class ContractViolation(AssertionError):
    """
    A caller broke a precondition, such as passing an out-of-range page.

    This signals a programming error, so it does not derive from
    PdfrankensteinError and is not caught by handlers for runtime failures.
    """


class SessionClosedError(ContractViolation):
    """An operation was attempted on a session that has been closed."""
