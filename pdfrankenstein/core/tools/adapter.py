"""
Subprocess implementation of the tool adapter using qpdf, pdftocairo and Inkscape.
"""

import subprocess
from typing import List, Optional, Sequence

from pdfrankenstein.config import Settings, get_settings
from pdfrankenstein.core.errors import ExternalToolError
from pdfrankenstein.utils.logging import get_logger

from .base import ToolAdapter

logger = get_logger(__name__)


class ExternalTools(ToolAdapter):
    """Runs the external programs as blocking child processes without timeouts."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _run(self, args: List[str], capture_stdout: bool = True) -> str:
        """
        Run a program and return its standard output.

        Raises:
            ExternalToolError: If the program cannot be started or exits non-zero
        """
        logger.debug(f"Running {args}")
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE if capture_stdout else subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExternalToolError(
                f"cannot run '{args[0]}': program not found", args[0], args
            ) from e
        except OSError as e:
            raise ExternalToolError(f"cannot run '{args[0]}': {e}", args[0], args) from e

        stderr = completed.stderr.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            logger.warning(
                f"{args[0]} exited with status {completed.returncode}: {stderr.strip()}"
            )
            raise ExternalToolError(stderr, args[0], args, completed.returncode)

        if not capture_stdout:
            return ""
        return completed.stdout.decode("utf-8", errors="replace")

    def page_count(self, pdf_path: str) -> str:
        return self._run(
            [self.settings.qpdf_bin, "--warning-exit-0", "--show-npages", pdf_path]
        )

    def render_thumbnail(
        self, pdf_path: str, page_number: int, out_root: str, size: int
    ) -> str:
        self._run(
            [
                self.settings.pdftocairo_bin,
                "-f",
                str(page_number),
                "-png",
                "-singlefile",
                "-cropbox",
                "-scale-to",
                str(size),
                pdf_path,
                out_root,
            ]
        )
        # pdftocairo appends the extension itself
        return out_root + ".png"

    def export_page_svg(self, pdf_path: str, page_number: int, out_path: str) -> None:
        self._run(
            [
                self.settings.inkscape_bin,
                f"--pages={page_number}",
                "--export-type=svg",
                "--pdf-poppler",
                f"--export-filename={out_path}",
                pdf_path,
            ]
        )

    def edit(self, svg_path: str) -> None:
        self._run([self.settings.inkscape_bin, svg_path], capture_stdout=False)

    def export_pdf(self, svg_path: str, out_path: str) -> None:
        self._run(
            [
                self.settings.inkscape_bin,
                "--export-type=pdf",
                f"--export-filename={out_path}",
                svg_path,
            ]
        )

    def merge(self, pdf_paths: Sequence[str], out_path: str) -> None:
        args = [self.settings.qpdf_bin, "--warning-exit-0", "--empty", "--pages"]
        args.extend(pdf_paths)
        args.extend(["--", out_path])
        self._run(args)

    def overlay(
        self, base_path: str, overlay_path: str, page_list: str, out_path: str
    ) -> None:
        self._run(
            [
                self.settings.qpdf_bin,
                "--warning-exit-0",
                base_path,
                "--overlay",
                overlay_path,
                f"--to={page_list}",
                "--",
                out_path,
            ]
        )
