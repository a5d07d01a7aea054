"""Parsing of user-entered page ranges like "1-5, 7, 10"."""

import os
import re
from typing import List, Optional

from .assembler import PrintSelection

# "file.pdf:1-3,5" → range part after the last colon
_RANGE_SUFFIX_RE = re.compile(r'^(.*):([\d\s,\-]+)$')


def page_span(start: Optional[int], end: Optional[int]) -> List[int]:
    """Inclusive list of page numbers; an open end yields nothing."""
    if end is None:
        return []
    if start is None:
        start = 1
    return list(range(start, end + 1))


def _parse_number(text: str, part: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return None
    if not text.isdigit():
        raise ValueError(f"Invalid page range: {part.strip()!r}")
    number = int(text)
    if number < 1:
        raise ValueError(f"Page numbers start at 1: {part.strip()!r}")
    return number


def parse_print_range(print_range: str) -> List[int]:
    """Parse a comma separated list of pages and ranges.

    Page numbers are 1-based as a user would type them. Ranges are
    inclusive, "-3" means "1-3", and "5-" selects nothing. The result is
    de-duplicated and sorted.

    Raises:
        ValueError: If a part is not a number or range
    """
    pages = set()
    for part in print_range.split(','):
        if not part.strip():
            continue
        if '-' in part:
            start_text, _, end_text = part.partition('-')
            start = _parse_number(start_text, part)
            end = _parse_number(end_text, part)
            pages.update(page_span(start, end))
        else:
            pages.add(_parse_number(part, part))
    return sorted(pages)


def to_page_indices(page_numbers: List[int]) -> List[int]:
    """Convert 1-based page numbers to zero-based indices."""
    return [number - 1 for number in page_numbers]


def parse_selection_arg(arg: str) -> PrintSelection:
    """Build a PrintSelection from "path" or "path:RANGE" (CLI syntax)."""
    match = _RANGE_SUFFIX_RE.match(arg)
    if match:
        path, range_text = match.group(1), match.group(2)
        print_range = to_page_indices(parse_print_range(range_text))
    else:
        path, print_range = arg, None

    return PrintSelection(
        path=os.path.abspath(path),
        name=os.path.basename(path),
        print_range=print_range,
    )
