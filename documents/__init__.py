"""Document library wrapper for petprint.

Thin layer over pypdf exposing only what page selection and assembly need:
- open_document / source_pages / page_count / find_page: read side
- new_document / GraftSession / build_page / append_page / append_blank_page: write side
- serialize: output to a path or stream
"""

from .base import DocumentError
from .pdf import (
    LETTER,
    COPIED_PAGE_KEYS,
    open_document,
    source_pages,
    page_count,
    page_count_of,
    find_page,
    new_document,
    GraftSession,
    build_page,
    append_page,
    append_blank_page,
    serialize,
)


__all__ = [
    'DocumentError',
    'LETTER',
    'COPIED_PAGE_KEYS',
    'open_document',
    'source_pages',
    'page_count',
    'page_count_of',
    'find_page',
    'new_document',
    'GraftSession',
    'build_page',
    'append_page',
    'append_blank_page',
    'serialize',
]
