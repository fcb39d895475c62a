"""Heading outline for HTML documents."""

import copy
import logging
import re

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from soupsieve import SelectorSyntaxError

from docoutline.core.headings import Heading, build_heading_outline
from docoutline.models.options import HeadingOptions
from docoutline.models.outline import DocOutline

log = logging.getLogger(__name__)

HEADING_TAG = re.compile(r"^h[1-6]$")
SHELL_DOCUMENT = "<html><head></head><body></body></html>"


def _select(soup: BeautifulSoup, selector: str, label: str) -> list | None:
    try:
        return soup.select(selector)
    except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
        log.warning(f"Ignoring invalid {label} selector {selector!r}: {e}")
        return None


def prepare_working_tree(data: bytes, options: HeadingOptions) -> BeautifulSoup | None:
    """Parse HTML and apply script stripping, include and exclude filters.

    The include selector runs first and copies matched subtrees into a fresh
    shell document; the exclude selector then removes matches from whatever
    tree remains. Invalid selectors are ignored. Returns None for empty or
    unparseable input.
    """
    if not data:
        return None
    try:
        soup = BeautifulSoup(data, "lxml")
    except ParserRejectedMarkup as e:
        log.warning(f"HTML rejected by parser: {e}")
        return None

    if options.strip_scripts:
        for tag in soup(["script", "noscript"]):
            tag.decompose()

    working = soup
    if options.include_css and options.include_css.strip():
        matched = _select(soup, options.include_css, "include")
        if matched is not None:
            working = BeautifulSoup(SHELL_DOCUMENT, "lxml")
            for element in matched:
                working.body.append(copy.copy(element))

    if options.exclude_css and options.exclude_css.strip():
        for element in _select(working, options.exclude_css, "exclude") or []:
            element.extract()

    return working


def extract_html_headings(data: bytes, options: HeadingOptions | None = None) -> list[Heading]:
    """Collect h1..h6 elements of the filtered tree in document order."""
    options = options or HeadingOptions()
    working = prepare_working_tree(data, options)
    if working is None:
        return []

    headings: list[Heading] = []
    for element in working.find_all(HEADING_TAG):
        natural_id = str(element.get("id") or "").strip() or None
        headings.append(
            Heading(
                level=int(element.name[1]),
                title=" ".join(element.get_text().split()),
                id=natural_id,
                href=f"#{natural_id}" if natural_id else None,
            )
        )
    return headings


def build_html_outline(data: bytes, options: HeadingOptions | None = None) -> DocOutline:
    """Build a DocOutline from HTML headings.

    Sections are tagged "heading" plus the element's tag name.
    """
    options = options or HeadingOptions()
    headings = extract_html_headings(data, options)
    outline = build_heading_outline(
        headings,
        min_level=options.min_heading_level,
        max_level=options.max_heading_level,
        generate_ids=options.generate_ids,
        tag_for=lambda h: f"h{h.level}",
    )
    log.info(f"HTML outline: {len(outline)} sections from {len(headings)} headings")
    return outline
