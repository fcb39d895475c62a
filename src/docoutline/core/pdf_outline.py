"""Bookmark outline for PDF documents."""

import io
import logging

# Suppress warnings about malformed PDF object references
logging.getLogger("pypdf").setLevel(logging.ERROR)

import pypdf
from pypdf.errors import PyPdfError

from docoutline.core.unifier import bookmarks_to_outline
from docoutline.models.outline import BookmarkNode, DocOutline

log = logging.getLogger(__name__)

# What pypdf raises while dereferencing broken or hostile object graphs
PDF_ERRORS = (
    PyPdfError,
    KeyError,
    IndexError,
    ValueError,
    TypeError,
    AttributeError,
    RecursionError,
    EOFError,
    OSError,
)


def _pair_outline(items: list) -> list[tuple[object, list]]:
    """Group pypdf's flat outline list into (destination, children) pairs.

    pypdf places a node's children as a nested list right after the node.
    A nested list with no preceding node is kept at the same level.
    """
    pairs: list[tuple[object, list]] = []
    for item in items:
        if isinstance(item, list):
            if pairs and not pairs[-1][1]:
                pairs[-1] = (pairs[-1][0], item)
            else:
                pairs.extend(_pair_outline(item))
        else:
            pairs.append((item, []))
    return pairs


def resolve_page_number(reader, destination) -> int | None:
    """1-based page of a destination, or None when it cannot be resolved.

    Tries the reader's page-number lookup first, then scans the page list
    for the destination's page object.
    """
    try:
        index = reader.get_destination_page_number(destination)
        if isinstance(index, int) and index >= 0:
            return index + 1
    except PDF_ERRORS as e:
        log.debug(f"Direct page lookup failed: {e}")

    try:
        target = getattr(destination, "page", None)
        if target is None:
            return None
        target_id = getattr(target, "idnum", None)
        for index, page in enumerate(reader.pages):
            ref = getattr(page, "indirect_reference", None)
            if page is target or (ref is not None and ref == target):
                return index + 1
            if target_id is not None and getattr(ref, "idnum", None) == target_id:
                return index + 1
    except PDF_ERRORS as e:
        log.debug(f"Page scan failed: {e}")

    return None


def read_bookmarks(reader) -> list[BookmarkNode]:
    """Walk the reader's outline depth-first into a BookmarkNode tree."""
    try:
        outline = reader.outline
    except PDF_ERRORS as e:
        log.warning(f"Unable to read PDF outline: {e}")
        return []
    if not outline:
        return []

    roots: list[BookmarkNode] = []
    stack = [(outline, roots)]
    while stack:
        items, sink = stack.pop()
        for destination, children in _pair_outline(items):
            title = getattr(destination, "title", None)
            node = BookmarkNode(
                title=str(title) if title is not None else "",
                page_number=resolve_page_number(reader, destination),
            )
            sink.append(node)
            if children:
                stack.append((children, node.children))

    return roots


def build_pdf_outline(data: bytes) -> DocOutline:
    """Build a DocOutline from the bookmarks of a PDF.

    Unreadable PDFs and PDFs without bookmarks give an empty outline.
    """
    if not data:
        return DocOutline()
    try:
        reader = pypdf.PdfReader(io.BytesIO(data))
    except PDF_ERRORS as e:
        log.warning(f"PDF unreadable, no bookmarks extracted: {e}")
        return DocOutline()

    outline = bookmarks_to_outline(read_bookmarks(reader))
    log.info(f"PDF outline: {len(outline)} bookmarks")
    return outline
