"""
Shared fixtures: a recording stand-in for Playwright and a tiny PDF builder.
"""

from pathlib import Path
from typing import List, Optional

import pytest


def build_pdf(page_texts: List[str]) -> bytes:
    """Build a minimal valid PDF with one Helvetica text line per page."""
    objects = {}
    num_pages = len(page_texts)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(num_pages))

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {num_pages} >>".encode()
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    for i, text in enumerate(page_texts):
        page_id = 4 + 2 * i
        content_id = page_id + 1
        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        ).encode()
        stream = f"BT /F1 24 Tf 72 700 Td ({text}) Tj ET".encode()
        objects[content_id] = (
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for object_id in sorted(objects):
        offsets[object_id] = len(out)
        out += b"%d 0 obj\n" % object_id + objects[object_id] + b"\nendobj\n"

    xref_offset = len(out)
    size = max(objects) + 1
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for object_id in range(1, size):
        out += b"%010d 00000 n \n" % offsets[object_id]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_offset)
    return bytes(out)


class FakePage:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    def set_default_timeout(self, timeout):
        self.engine.default_timeout = timeout

    def set_content(self, html, wait_until=None, timeout=None):
        self.engine.calls.append("set_content")
        self.engine.load_args = {"html": html, "wait_until": wait_until, "timeout": timeout}
        if self.engine.load_error is not None:
            raise self.engine.load_error

    def goto(self, url, wait_until=None, timeout=None):
        self.engine.calls.append("goto")
        self.engine.load_args = {"url": url, "wait_until": wait_until, "timeout": timeout}
        if self.engine.load_error is not None:
            raise self.engine.load_error

    def pdf(self, path=None, **kwargs):
        self.engine.calls.append("pdf")
        self.engine.pdf_kwargs = kwargs
        if self.engine.pdf_error is not None:
            raise self.engine.pdf_error
        Path(path).write_bytes(self.engine.pdf_bytes)
        return self.engine.pdf_bytes


class FakeBrowser:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    def new_page(self):
        self.engine.calls.append("new_page")
        if self.engine.new_page_error is not None:
            raise self.engine.new_page_error
        return FakePage(self.engine)

    def close(self):
        self.engine.calls.append("close")
        self.engine.browser_closed = True


class FakeChromium:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    def launch(self, **kwargs):
        self.engine.calls.append("launch")
        self.engine.launch_kwargs = kwargs
        if self.engine.launch_error is not None:
            raise self.engine.launch_error
        self.engine.browser_launched = True
        return FakeBrowser(self.engine)


class FakeEngine:
    """
    Stands in for playwright.sync_api.sync_playwright.

    Calling the engine returns a context manager whose value exposes .chromium,
    like the real entry point. Every step is appended to .calls.
    """

    def __init__(self):
        self.calls: List[str] = []
        self.launch_error: Optional[Exception] = None
        self.new_page_error: Optional[Exception] = None
        self.load_error: Optional[Exception] = None
        self.pdf_error: Optional[Exception] = None
        self.pdf_bytes = build_pdf(["Hi"])
        self.launch_kwargs = None
        self.load_args = None
        self.pdf_kwargs = None
        self.default_timeout = None
        self.browser_launched = False
        self.browser_closed = False
        self.stopped = False
        self.chromium = FakeChromium(self)

    def __call__(self):
        return self

    def __enter__(self):
        self.calls.append("start")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.calls.append("stop")
        self.stopped = True
        return False

    @property
    def session_released(self) -> bool:
        """Driver stopped and, if a browser was launched, the browser closed."""
        return self.stopped and (self.browser_closed or not self.browser_launched)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def resume_html(tmp_path):
    """A minimal self-contained HTML document on disk."""
    path = tmp_path / "resume.html"
    path.write_text("<html><body>Hi</body></html>", encoding="utf-8")
    return path


@pytest.fixture
def make_pdf(tmp_path):
    """Factory writing a small valid PDF with the given page texts."""

    def _make(page_texts=("Hi",), name="doc.pdf"):
        path = tmp_path / name
        path.write_bytes(build_pdf(list(page_texts)))
        return path

    return _make


@pytest.fixture
def repo_config_dir():
    return Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def pdf_builder():
    """The raw build_pdf() function, for tests that need bytes rather than a file."""
    return build_pdf
