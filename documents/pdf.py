"""pypdf-backed document operations used by the indexer and assembler.

Sources are opened with ``PdfReader``; the assembled output is a
``PdfWriter``. Page dictionaries are built by hand and their attribute values
are copied ("grafted") across through a per-source ``GraftSession``.
"""

import os
import tempfile
from typing import BinaryIO, Dict, List, Sequence, Tuple, Union

from pypdf import PdfReader, PdfWriter, PageObject
from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, NameObject, PdfObject

from .base import DocumentError

# US Letter in PDF points (72 per inch)
LETTER = (612, 792)

# Page attributes copied verbatim from a source page. Inherited values
# (set on an ancestor /Pages node) are not looked up.
COPIED_PAGE_KEYS = ("/MediaBox", "/Rotate", "/Resources", "/Contents")


def open_document(path: str) -> PdfReader:
    """Open a PDF for reading.

    Raises:
        DocumentError: If the file is missing or is not a readable PDF
    """
    try:
        return PdfReader(path, strict=False)
    except Exception as e:
        raise DocumentError(f"Failed to open {path}: {e}") from e


def source_pages(document: PdfReader) -> List[DictionaryObject]:
    """Leaf page dictionaries in document order, exactly as stored.

    The page tree is walked directly instead of through ``document.pages``,
    which copies inherited attributes into every page.

    Raises:
        DocumentError: If the page tree is missing or malformed
    """
    try:
        stack = [document.root_object["/Pages"].get_object()]
        pages: List[DictionaryObject] = []
        seen = set()
        while stack:
            node = stack.pop()
            if node.get("/Type") == "/Pages" or "/Kids" in node:
                if id(node) in seen:
                    continue
                seen.add(id(node))
                kids = node["/Kids"] if "/Kids" in node else ArrayObject()
                stack.extend(kid.get_object() for kid in reversed(kids))
            else:
                pages.append(node)
        return pages
    except Exception as e:
        raise DocumentError(f"Failed to read page tree: {e}") from e


def page_count(document: PdfReader) -> int:
    """Number of pages in an opened document."""
    return len(source_pages(document))


def page_count_of(path: str) -> int:
    """Open ``path`` and return its page count."""
    return page_count(open_document(path))


def find_page(pages: Sequence[DictionaryObject], index: int) -> DictionaryObject:
    """Return the page at a zero-based index of ``source_pages()`` output.

    Raises:
        DocumentError: If the index is negative or past the last page
    """
    if index < 0 or index >= len(pages):
        raise DocumentError(f"Page index {index} out of range (document has {len(pages)} pages)")
    return pages[index]


def new_document() -> PdfWriter:
    """Create an empty destination document."""
    return PdfWriter()


class GraftSession:
    """Copies objects from one source document into a destination.

    Indirect objects are remembered by their (object number, generation) in
    the source, so a font or image referenced from several selected pages
    of the same source is copied once and shared in the destination. A new
    session is used for every source, so objects of different sources are
    never mixed up even when their object numbers collide.
    """

    def __init__(self, destination: PdfWriter, source: PdfReader) -> None:
        self.destination = destination
        self.source = source
        self._grafted: Dict[Tuple[int, int], PdfObject] = {}

    def graft(self, obj: PdfObject) -> PdfObject:
        """Copy ``obj`` (and everything it references) into the destination.

        Raises:
            DocumentError: If the object graph cannot be copied
        """
        try:
            if isinstance(obj, IndirectObject):
                key = (obj.idnum, obj.generation)
                if key not in self._grafted:
                    self._grafted[key] = obj.clone(self.destination)
                return self._grafted[key]
            return obj.clone(self.destination)
        except DocumentError:
            raise
        except Exception as e:
            raise DocumentError(f"Failed to copy object {obj!r}: {e}") from e


def build_page(session: GraftSession, source_page: DictionaryObject) -> PageObject:
    """Create a destination page carrying the copied attributes of ``source_page``.

    Only keys the source page defines itself are copied; absent keys stay
    absent on the new page.
    """
    page = PageObject()
    page[NameObject("/Type")] = NameObject("/Page")
    for key in COPIED_PAGE_KEYS:
        if key in source_page:
            page[NameObject(key)] = session.graft(source_page.raw_get(key))
    return page


def append_page(document: PdfWriter, page: PageObject) -> None:
    """Append ``page`` after the last page of ``document``."""
    try:
        document.add_page(page)
    except Exception as e:
        raise DocumentError(f"Failed to add page: {e}") from e


def append_blank_page(document: PdfWriter, size: Tuple[float, float] = LETTER) -> None:
    """Append an empty page of the given (width, height)."""
    width, height = size
    try:
        document.add_blank_page(width=width, height=height)
    except Exception as e:
        raise DocumentError(f"Failed to add blank page: {e}") from e


def _write_file(document: PdfWriter, path: str) -> None:
    # Sibling temp file, renamed over ``path`` once complete
    directory = os.path.dirname(os.path.abspath(path))
    fd, temp_path = tempfile.mkstemp(prefix=".petprint-", suffix=".pdf", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            document.write(f)
        os.replace(temp_path, path)
    except Exception:
        os.unlink(temp_path)
        raise


def serialize(document: PdfWriter, sink: Union[str, BinaryIO]) -> None:
    """Write ``document`` to a file path or binary stream.

    A path is replaced only once the whole document has been written.

    Raises:
        DocumentError: If the output cannot be written
    """
    try:
        if isinstance(sink, (str, os.PathLike)):
            _write_file(document, sink)
        else:
            document.write(sink)
    except Exception as e:
        raise DocumentError(f"Failed to write document: {e}") from e
