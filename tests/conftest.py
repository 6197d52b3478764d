"""Shared fixtures: a recording tool adapter and headless Qt."""

import os
from typing import Dict, List, Optional, Sequence

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pdfrankenstein.config import Settings
from pdfrankenstein.core.errors import ExternalToolError
from pdfrankenstein.core.session import Session
from pdfrankenstein.core.tools import ToolAdapter

SOURCE_SVG = b"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<svg width="612pt" height="792pt" viewBox="0 0 612 792" version="1.1"
     xmlns="http://www.w3.org/2000/svg">
  <g id="page1"><path d="M 0 0 L 10 10" /></g>
</svg>
"""

USER_DRAWING = b'<path id="user-stroke" d="M 1 1 L 50 50" />'


class RecordingTools(ToolAdapter):
    """
    Stand-in for the external programs.

    Writes small placeholder files where the real tools would, counts calls,
    and raises ExternalToolError for any method named in ``failures``.
    """

    def __init__(self, page_count_output: str = "5\n"):
        self.page_count_output = page_count_output
        self.calls: Dict[str, int] = {}
        self.failures: Dict[str, str] = {}
        self.edit_modifies = True
        self.merged: List[List[str]] = []
        self.overlays: List[tuple] = []
        self.exported_svgs: Dict[str, bytes] = {}

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.failures:
            raise ExternalToolError(self.failures[name], name, [name], 1)

    def count(self, name: str) -> int:
        return self.calls.get(name, 0)

    def page_count(self, pdf_path: str) -> str:
        self._record("page_count")
        return self.page_count_output

    def render_thumbnail(
        self, pdf_path: str, page_number: int, out_root: str, size: int
    ) -> str:
        self._record("render_thumbnail")
        path = out_root + ".png"
        with open(path, "wb") as f:
            f.write(b"\x89PNG page %d" % page_number)
        return path

    def export_page_svg(self, pdf_path: str, page_number: int, out_path: str) -> None:
        self._record("export_page_svg")
        with open(out_path, "wb") as f:
            f.write(SOURCE_SVG)

    def edit(self, svg_path: str) -> None:
        self._record("edit")
        if not self.edit_modifies:
            return
        with open(svg_path, "rb") as f:
            document = f.read()
        document = document.replace(b"</g>", USER_DRAWING + b"\n  </g>", 1)
        with open(svg_path, "wb") as f:
            f.write(document)
        # Push the timestamp forward so coarse filesystem clocks still register a change
        st = os.stat(svg_path)
        os.utime(svg_path, ns=(st.st_atime_ns, st.st_mtime_ns + 2_000_000_000))

    def export_pdf(self, svg_path: str, out_path: str) -> None:
        self._record("export_pdf")
        with open(svg_path, "rb") as f:
            self.exported_svgs[svg_path] = f.read()
        with open(out_path, "wb") as f:
            f.write(b"%PDF-annotation " + os.path.basename(svg_path).encode())

    def merge(self, pdf_paths: Sequence[str], out_path: str) -> None:
        self._record("merge")
        self.merged.append(list(pdf_paths))
        with open(out_path, "wb") as f:
            f.write(b"%PDF-overlay")

    def overlay(
        self, base_path: str, overlay_path: str, page_list: str, out_path: str
    ) -> None:
        self._record("overlay")
        self.overlays.append((base_path, overlay_path, page_list, out_path))
        with open(out_path, "wb") as f:
            f.write(b"%PDF-final " + page_list.encode())


@pytest.fixture
def tools() -> RecordingTools:
    return RecordingTools()


@pytest.fixture
def settings(tmp_path) -> Settings:
    staging_root = tmp_path / "staging"
    staging_root.mkdir()
    return Settings(staging_root=str(staging_root))


@pytest.fixture
def pdf_file(tmp_path) -> str:
    path = tmp_path / "input.pdf"
    path.write_bytes(b"%PDF-1.7\n% original document bytes\n%%EOF\n")
    return str(path)


@pytest.fixture
def session(pdf_file, tools, settings):
    s = Session.open(pdf_file, tools=tools, settings=settings)
    yield s
    s.close()


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication

    app: Optional[QApplication] = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
