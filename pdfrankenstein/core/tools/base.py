"""
Interface to the external PDF toolkit and vector editor.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class ToolAdapter(ABC):
    """
    Abstract base class for the programs a session drives.

    Page numbers passed to adapters are one-based, as the external tools
    expect. Every method raises ExternalToolError when the program fails.
    """

    @abstractmethod
    def page_count(self, pdf_path: str) -> str:
        """
        Ask the PDF toolkit for the number of pages in a document.

        Returns:
            The tool's raw standard output; the caller parses it
        """

    @abstractmethod
    def render_thumbnail(
        self, pdf_path: str, page_number: int, out_root: str, size: int
    ) -> str:
        """
        Rasterize one page to PNG with its longest side scaled to ``size``.

        Args:
            pdf_path: Source PDF
            page_number: One-based page number
            out_root: Output path without extension
            size: Longest side of the image in pixels

        Returns:
            Path of the PNG that was written
        """

    @abstractmethod
    def export_page_svg(self, pdf_path: str, page_number: int, out_path: str) -> None:
        """Export one page of a PDF to an SVG document at ``out_path``."""

    @abstractmethod
    def edit(self, svg_path: str) -> None:
        """Open the editor on ``svg_path`` and block until the user closes it."""

    @abstractmethod
    def export_pdf(self, svg_path: str, out_path: str) -> None:
        """Export an SVG document to a single-page PDF."""

    @abstractmethod
    def merge(self, pdf_paths: Sequence[str], out_path: str) -> None:
        """Concatenate the pages of ``pdf_paths``, in order, into one PDF."""

    @abstractmethod
    def overlay(
        self, base_path: str, overlay_path: str, page_list: str, out_path: str
    ) -> None:
        """
        Overlay the pages of ``overlay_path`` onto ``base_path``.

        Args:
            base_path: Document receiving the overlay
            overlay_path: Document whose pages are laid on top, in order
            page_list: Comma-separated, ascending one-based page numbers of
                ``base_path`` matched positionally with the overlay pages
            out_path: Where the composed document is written
        """
