"""Shared fixtures: temp folders and small generated PDFs."""

import os
import shutil
import tempfile

import pytest
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, NumberObject


def make_pdf(path, pages=1, rotate=None, shared_resources=False):
    """Write a PDF with ``pages`` blank pages and return its path.

    Page i is (100 + i) points wide so tests can tell pages apart by their
    MediaBox. With ``shared_resources`` every page points at one indirect
    /Resources dictionary.
    """
    writer = PdfWriter()
    resources = None
    if shared_resources:
        resources = writer._add_object(DictionaryObject({
            NameObject("/ProcSet"): ArrayObject([NameObject("/PDF")]),
        }))

    for i in range(pages):
        page = writer.add_blank_page(width=100 + i, height=200)
        if resources is not None:
            page[NameObject("/Resources")] = resources
        if rotate is not None:
            page[NameObject("/Rotate")] = NumberObject(rotate)

    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    dir_path = tempfile.mkdtemp(prefix="petprint_test_")
    yield dir_path
    # Cleanup
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def pdf_factory(temp_dir):
    """Return a function creating PDFs inside temp_dir."""
    def factory(name, pages=1, **kwargs):
        return make_pdf(os.path.join(temp_dir, name), pages=pages, **kwargs)
    return factory


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep state files out of the real Application Support folder."""
    from petprint import PetPrint

    monkeypatch.setattr(PetPrint, "state_dir", str(tmp_path / "state"))
    monkeypatch.setattr(PetPrint, "_app", None)
