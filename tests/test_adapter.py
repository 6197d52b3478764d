"""Tests for the subprocess tool adapter."""

from types import SimpleNamespace
from typing import List

import pytest

from pdfrankenstein.config import Settings
from pdfrankenstein.core.errors import ExternalToolError
from pdfrankenstein.core.tools import ExternalTools
from pdfrankenstein.core.tools import adapter as adapter_module


class FakeRun:
    """Replacement for subprocess.run that records argument lists."""

    def __init__(self, returncode: int = 0, stdout: bytes = b"", stderr: bytes = b""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: List[List[str]] = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        return SimpleNamespace(
            returncode=self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun(stdout=b"12\n")
    monkeypatch.setattr(adapter_module.subprocess, "run", fake)
    return fake


@pytest.fixture
def tools() -> ExternalTools:
    return ExternalTools(Settings())


class TestCommandLines:
    """Tests for the exact arguments passed to each program."""

    def test_page_count(self, fake_run, tools) -> None:
        """Test the qpdf page count query."""
        assert tools.page_count("/tmp/a.pdf") == "12\n"
        assert fake_run.calls == [
            ["qpdf", "--warning-exit-0", "--show-npages", "/tmp/a.pdf"]
        ]

    def test_render_thumbnail(self, fake_run, tools) -> None:
        """Test that pdftocairo gets a one-based page and a bounded size."""
        out = tools.render_thumbnail("/s/src.pdf", 3, "/s/thumb-2.png.tmp", 200)

        assert out == "/s/thumb-2.png.tmp.png"
        assert fake_run.calls == [
            [
                "pdftocairo", "-f", "3", "-png", "-singlefile", "-cropbox",
                "-scale-to", "200", "/s/src.pdf", "/s/thumb-2.png.tmp",
            ]
        ]

    def test_export_page_svg(self, fake_run, tools) -> None:
        """Test the Inkscape page import and SVG export."""
        tools.export_page_svg("/s/src.pdf", 1, "/s/src-0.svg.tmp.svg")

        assert fake_run.calls == [
            [
                "inkscape", "--pages=1", "--export-type=svg", "--pdf-poppler",
                "--export-filename=/s/src-0.svg.tmp.svg", "/s/src.pdf",
            ]
        ]

    def test_edit(self, fake_run, tools) -> None:
        """Test that editing only passes the document path."""
        tools.edit("/s/annot-0.svg")

        assert fake_run.calls == [["inkscape", "/s/annot-0.svg"]]

    def test_export_pdf(self, fake_run, tools) -> None:
        """Test the SVG to PDF export."""
        tools.export_pdf("/s/a.svg.cleaned.svg", "/s/a.svg.pdf")

        assert fake_run.calls == [
            [
                "inkscape", "--export-type=pdf",
                "--export-filename=/s/a.svg.pdf", "/s/a.svg.cleaned.svg",
            ]
        ]

    def test_merge(self, fake_run, tools) -> None:
        """Test that pages are merged in the given order."""
        tools.merge(["/s/b.pdf", "/s/a.pdf"], "/s/overlay.pdf")

        assert fake_run.calls == [
            [
                "qpdf", "--warning-exit-0", "--empty", "--pages",
                "/s/b.pdf", "/s/a.pdf", "--", "/s/overlay.pdf",
            ]
        ]

    def test_overlay(self, fake_run, tools) -> None:
        """Test the overlay page range argument."""
        tools.overlay("/s/src.pdf", "/s/overlay.pdf", "1,3,5", "/s/final.pdf")

        assert fake_run.calls == [
            [
                "qpdf", "--warning-exit-0", "/s/src.pdf", "--overlay",
                "/s/overlay.pdf", "--to=1,3,5", "--", "/s/final.pdf",
            ]
        ]

    def test_configured_executables(self, fake_run) -> None:
        """Test that executable names come from settings."""
        tools = ExternalTools(Settings(qpdf_bin="/opt/qpdf/bin/qpdf"))

        tools.page_count("a.pdf")

        assert fake_run.calls[0][0] == "/opt/qpdf/bin/qpdf"


class TestFailures:
    """Tests for failure classification."""

    def test_nonzero_exit_uses_stderr(self, monkeypatch, tools) -> None:
        """Test that stderr becomes the error message verbatim."""
        fake = FakeRun(returncode=2, stderr=b"qpdf: a.pdf: file is damaged\n")
        monkeypatch.setattr(adapter_module.subprocess, "run", fake)

        with pytest.raises(ExternalToolError) as excinfo:
            tools.page_count("a.pdf")

        assert str(excinfo.value) == "qpdf: a.pdf: file is damaged"
        assert excinfo.value.returncode == 2
        assert excinfo.value.program == "qpdf"

    def test_empty_stderr_names_program(self, monkeypatch, tools) -> None:
        """Test the fallback message when the tool prints nothing."""
        monkeypatch.setattr(adapter_module.subprocess, "run", FakeRun(returncode=1))

        with pytest.raises(ExternalToolError, match="inkscape exited with status 1"):
            tools.edit("a.svg")

    def test_missing_program(self, monkeypatch, tools) -> None:
        """Test that a missing executable is reported by name."""

        def missing(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(adapter_module.subprocess, "run", missing)

        with pytest.raises(ExternalToolError, match="'pdftocairo': program not found"):
            tools.render_thumbnail("a.pdf", 1, "out", 200)
