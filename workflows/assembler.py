"""Document assembler: merge selected pages of several PDFs into one."""

from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Sequence, Union

from pypdf import PdfWriter

import documents
from documents import DocumentError, GraftSession
from petprint import PetPrint, PetPrintError


class AssemblyError(PetPrintError):
    """Raised when the combined document cannot be built."""
    pass


@dataclass
class PrintSelection:
    """A source document and the pages to take from it.

    Attributes:
        path: Absolute path of the source PDF
        pages: Page count as reported by the indexer (informational)
        size: File size in bytes (informational)
        name: Display name
        print_range: Zero-based page indices in output order; may repeat or
                     reorder pages. None means every page in order.
    """
    path: str
    pages: int = 0
    size: int = 0
    name: str = ""
    print_range: Optional[List[int]] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PrintSelection":
        print_range = data.get("print_range")
        return cls(
            path=data["path"],
            pages=int(data.get("pages", 0)),
            size=int(data.get("size", 0)),
            name=data.get("name", ""),
            print_range=[int(i) for i in print_range] if print_range is not None else None,
        )


@dataclass
class AssembledDocument:
    """The combined output, ready to be printed or saved."""
    writer: PdfWriter
    blank_pages: int = 0
    sources: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.writer.pages)

    def write(self, sink: Union[str, BinaryIO]) -> None:
        """Serialize to a path or binary stream.

        Raises:
            DocumentError: If writing fails
        """
        documents.serialize(self.writer, sink)


def _add_selection(destination: PdfWriter, selection: PrintSelection) -> int:
    """Copy one selection's pages into ``destination``.

    Returns:
        Number of pages taken from the source
    """
    source = documents.open_document(selection.path)
    pages = documents.source_pages(source)
    session = GraftSession(destination, source)

    if selection.print_range is not None:
        indices = list(selection.print_range)
    else:
        indices = list(range(len(pages)))

    for index in indices:
        source_page = documents.find_page(pages, index)
        page = documents.build_page(session, source_page)
        documents.append_page(destination, page)

    return len(indices)


def assemble(selections: Sequence[PrintSelection]) -> AssembledDocument:
    """Build one document from the selected pages of each source, in order.

    After each source, a blank Letter page is appended if an odd number of
    pages was taken from it, so the next source starts on a new sheet when
    printing double-sided.

    Args:
        selections: Sources and page selections, in output order

    Returns:
        AssembledDocument holding the combined pages

    Raises:
        AssemblyError: If a source can't be opened, a page index is invalid,
                       or an object can't be copied. Nothing partial is returned.
    """
    destination = documents.new_document()
    result = AssembledDocument(writer=destination)

    for selection in selections:
        try:
            taken = _add_selection(destination, selection)
            if taken % 2 == 1:
                documents.append_blank_page(destination, documents.LETTER)
                result.blank_pages += 1
        except DocumentError as e:
            raise AssemblyError(f"Failed to add {selection.name or selection.path}: {e}") from e
        result.sources.append(selection.path)

    PetPrint.print_right(
        f"Assembled {result.page_count} pages from {len(result.sources)} documents"
        f" ({result.blank_pages} blank)"
    )
    return result
