"""
Annotation session: stages a private copy of a PDF, hands single pages to the
vector editor, and composes the edited pages back into one document.
"""

import os
from typing import List, Optional

from pdfrankenstein.config import Settings, get_settings
from pdfrankenstein.core.annotations.background import (
    PageSpecsError,
    compose_annotation_svg,
    read_page_specs,
    strip_background,
)
from pdfrankenstein.core.annotations.tracker import AnnotationTracker
from pdfrankenstein.core.errors import (
    ContractViolation,
    DocumentReadError,
    EditorError,
    ExportError,
    ExternalToolError,
    MergeError,
    SessionClosedError,
    StagingError,
    ThumbnailError,
)
from pdfrankenstein.core.staging import StagingDirectory
from pdfrankenstein.core.tools import ExternalTools, ToolAdapter
from pdfrankenstein.utils.logging import get_logger

logger = get_logger(__name__)


class Session:
    """
    One open annotation workflow over a single PDF document.

    Pages are addressed by zero-based index. Calls for different pages may run
    concurrently; calls for the same page must be serialized by the caller.
    The set of annotated pages is the only state shared between threads and
    is guarded by AnnotationTracker.
    """

    def __init__(
        self,
        staging: StagingDirectory,
        page_count: int,
        tools: ToolAdapter,
        settings: Settings,
    ):
        self._staging = staging
        self._page_count = page_count
        self._tools = tools
        self._settings = settings
        self._annotations = AnnotationTracker()
        self._closed = False

    @classmethod
    def open(
        cls,
        path: str,
        tools: Optional[ToolAdapter] = None,
        settings: Optional[Settings] = None,
    ) -> "Session":
        """
        Open a PDF and stage a private copy of it.

        Args:
            path: PDF supplied by the user; it is never modified
            tools: Adapter for the external programs
            settings: Configuration, defaults to the process-wide settings

        Returns:
            A new session

        Raises:
            DocumentReadError: If the page count cannot be determined
            StagingError: If the staging directory or the copy cannot be made
        """
        settings = settings or get_settings()
        tools = tools or ExternalTools(settings)

        try:
            output = tools.page_count(path)
        except ExternalToolError as e:
            raise DocumentReadError(str(e), path) from e

        try:
            page_count = int(output.strip())
        except ValueError as e:
            raise DocumentReadError(f"cannot convert page count: {e}", path) from e
        if page_count < 1:
            raise DocumentReadError(f"document has no pages: {page_count}", path)

        staging = StagingDirectory.create(settings.staging_root)
        try:
            staging.copy_in(path, staging.source_pdf)
        except StagingError:
            staging.destroy()
            raise

        logger.info(f"Opened '{path}' ({page_count} pages) in {staging.path}")
        return cls(staging, page_count, tools, settings)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # State

    @property
    def page_count(self) -> int:
        self._check_open()
        return self._page_count

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def staging_dir(self) -> str:
        self._check_open()
        return self._staging.path

    def is_annotated(self, page: int) -> bool:
        """Return True if the page has an annotation that will be saved."""
        self._check_page(page)
        return self._annotations.is_annotated(page)

    def has_annotations(self) -> bool:
        """Return True if any page has an annotation."""
        self._check_open()
        return self._annotations.has_annotations()

    def annotated_pages(self) -> List[int]:
        """Annotated page indices in ascending order."""
        self._check_open()
        return self._annotations.snapshot()

    def _check_open(self) -> None:
        if self._closed:
            raise SessionClosedError("session is closed")

    def _check_page(self, page: int) -> None:
        self._check_open()
        if isinstance(page, bool) or not isinstance(page, int):
            raise ContractViolation(f"invalid page number: {page!r}")
        if page < 0 or page >= self._page_count:
            raise ContractViolation(
                f"invalid page number: {page} (document has {self._page_count} pages)"
            )

    # Page operations

    def thumbnail(self, page: int) -> str:
        """
        Return the path of a small PNG preview of a page, rendering it if needed.

        The image is rendered from the private copy of the original document
        and cached for the rest of the session.

        Raises:
            ThumbnailError: If the rasterizer fails
            StagingError: If the rendered image cannot be moved into place
        """
        self._check_page(page)
        thumb_path = self._staging.thumbnail(page)

        if self._staging.exists(thumb_path):
            logger.debug(f"Thumbnail cache hit for page {page}")
            return thumb_path

        temp_root, _ = os.path.splitext(self._staging.temp_path(thumb_path))
        try:
            rendered = self._tools.render_thumbnail(
                self._staging.source_pdf,
                page + 1,
                temp_root,
                self._settings.thumbnail_size,
            )
        except ExternalToolError as e:
            raise ThumbnailError.wrap(e, page) from e

        self._staging.commit(rendered, thumb_path)
        return thumb_path

    def annotate(self, page: int) -> bool:
        """
        Open the editor on a page and block until the user closes it.

        Stages the page's source SVG and the annotation document if they do
        not exist yet, then compares the annotation document's modification
        time before and after editing.

        Returns:
            True if the annotation document was modified during this call

        Raises:
            ExportError: If the page cannot be exported to SVG
            EditorError: If the editor exits with failure
            StagingError: If a staged file cannot be read or written
        """
        self._check_page(page)

        self._ensure_source_svg(page)
        annotation_path = self._ensure_annotation_svg(page)

        before = self._staging.mtime_ns(annotation_path)
        try:
            self._tools.edit(annotation_path)
        except ExternalToolError as e:
            raise EditorError.wrap(e, page) from e
        after = self._staging.mtime_ns(annotation_path)

        modified = after != before
        if modified:
            self._staging.remove(self._staging.thumbnail(page))
            self._annotations.mark(page)
            logger.info(f"Page {page} was annotated")
        else:
            logger.info(f"Page {page} was not modified in the editor")
        return modified

    def _ensure_source_svg(self, page: int) -> str:
        source_path = self._staging.source_svg(page)
        if self._staging.exists(source_path):
            logger.debug(f"Source SVG cache hit for page {page}")
            return source_path

        temp_path = self._staging.temp_path(source_path)
        try:
            self._tools.export_page_svg(self._staging.source_pdf, page + 1, temp_path)
        except ExternalToolError as e:
            raise ExportError.wrap(e, page) from e
        self._staging.commit(temp_path, source_path)
        return source_path

    def _ensure_annotation_svg(self, page: int) -> str:
        annotation_path = self._staging.annotation_svg(page)
        if self._staging.exists(annotation_path):
            return annotation_path

        source_path = self._staging.source_svg(page)
        try:
            with open(source_path, "rb") as f:
                specs = read_page_specs(f)
        except OSError as e:
            raise StagingError(f"failed to open '{source_path}': {e}", source_path) from e
        except PageSpecsError as e:
            raise StagingError(
                f"failed to parse svg at '{source_path}': {e}", source_path
            ) from e

        document = compose_annotation_svg(
            specs, source_path, dpi=self._settings.background_dpi
        )
        self._staging.write_atomic(annotation_path, document)
        return annotation_path

    def clear(self, page: int) -> None:
        """
        Discard a page's annotation document and thumbnail.

        Clearing a page without annotations does nothing.
        """
        self._check_page(page)
        self._staging.remove(self._staging.annotation_svg(page))
        self._staging.remove(self._staging.thumbnail(page))
        if self._annotations.unmark(page):
            logger.info(f"Cleared annotations on page {page}")

    # Output

    def save(self, path: str) -> None:
        """
        Write the annotated document to ``path``.

        With no annotated pages the private copy is written unchanged.
        Otherwise each annotated page is exported without its background,
        the pages are merged, and the merge is overlaid onto exactly those
        pages of the original. ``path`` is only written once every step has
        succeeded.

        Raises:
            StagingError: If a staged file or the destination cannot be written
            ExportError: If an annotation cannot be exported to PDF
            MergeError: If merging or overlaying fails
        """
        self._check_open()
        pages = self._annotations.snapshot()

        if not pages:
            logger.info(f"No annotated pages, copying original to '{path}'")
            self._staging.copy_in(self._staging.source_pdf, path)
            return

        page_pdfs = [self._export_annotation_pdf(page) for page in pages]

        overlay_path = self._staging.overlay_pdf
        try:
            self._tools.merge(page_pdfs, overlay_path)
        except ExternalToolError as e:
            raise MergeError.wrap(e) from e

        page_list = ",".join(str(page + 1) for page in pages)
        final_path = self._staging.final_pdf
        try:
            self._tools.overlay(
                self._staging.source_pdf, overlay_path, page_list, final_path
            )
        except ExternalToolError as e:
            raise MergeError.wrap(e) from e

        logger.info(f"Saving pages {page_list} with annotations to '{path}'")
        self._staging.copy_in(final_path, path)

    def _export_annotation_pdf(self, page: int) -> str:
        annotation_path = self._staging.annotation_svg(page)
        cleaned_path = self._staging.cleaned_svg(page)
        pdf_path = self._staging.annotation_pdf(page)

        document = self._staging.read_bytes(annotation_path)
        self._staging.write_bytes(cleaned_path, strip_background(document))

        try:
            self._tools.export_pdf(cleaned_path, pdf_path)
        except ExternalToolError as e:
            raise ExportError.wrap(e, page) from e
        return pdf_path

    def close(self) -> None:
        """
        Delete the staging directory and end the session.

        Cleanup is best effort. The session cannot be used afterwards;
        closing it again does nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._annotations.clear()
        self._staging.destroy()
        logger.info(f"Closed session in {self._staging.path}")

