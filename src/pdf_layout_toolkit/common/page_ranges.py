"""Page range parsing ("1-3, 5, 8-") into zero-based page indices."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^(\d*)\s*(-)?\s*(\d*)$")


def parse_page_ranges(spec: str | None, page_count: int) -> tuple[int, ...]:
    """
    Parse a human page range into zero-based indices.

    Accepted tokens, separated by commas:
    - "5"    single page
    - "2-4"  inclusive range
    - "7-"   page 7 to the last page
    - "-3"   first page to page 3

    A blank spec selects every page. Pages beyond ``page_count`` are
    dropped; duplicates keep their first position.

    Args:
        spec: Range text (1-based page numbers)
        page_count: Number of pages in the document

    Returns:
        Ordered tuple of zero-based page indices

    Raises:
        ValueError: If a token is malformed or a range is reversed

    Example:
        >>> parse_page_ranges("1-3, 5", 10)
        (0, 1, 2, 4)
    """
    if page_count <= 0:
        return ()
    if spec is None or not spec.strip():
        return tuple(range(page_count))

    indices: list[int] = []
    seen: set[int] = set()

    for raw in spec.split(","):
        token = raw.strip()
        if not token:
            continue
        match = _TOKEN_RE.match(token)
        if match is None or token == "-":
            raise ValueError(f"Malformed page range token: {token!r}")

        start_text, dash, end_text = match.groups()
        if not dash:
            if not start_text:
                raise ValueError(f"Malformed page range token: {token!r}")
            start = end = int(start_text)
        else:
            start = int(start_text) if start_text else 1
            end = int(end_text) if end_text else page_count

        if start < 1:
            raise ValueError(f"Page numbers start at 1: {token!r}")
        if end < start:
            raise ValueError(f"Reversed page range: {token!r}")

        for number in range(start, min(end, page_count) + 1):
            index = number - 1
            if index not in seen:
                seen.add(index)
                indices.append(index)

        if end > page_count:
            logger.debug(f"Range {token!r} extends past last page {page_count}; clipped")

    return tuple(indices)
