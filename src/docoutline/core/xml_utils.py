"""Strict XML parsing helpers for container documents."""

import logging

from lxml import etree

log = logging.getLogger(__name__)


def _make_parser() -> etree.XMLParser:
    # No DTD loading, entity expansion or network access
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=False,
    )


def parse_xml(data: bytes | None, label: str = "document") -> etree._Element | None:
    """Parse XML bytes, returning None when they are missing or malformed."""
    if not data:
        return None
    try:
        return etree.fromstring(data, parser=_make_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        log.warning(f"Malformed XML in {label}: {e}")
        return None


def local_name(element: etree._Element) -> str:
    """Tag name without namespace ("" for comments and processing instructions)."""
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def first_child(element: etree._Element, name: str) -> etree._Element | None:
    """First direct child element with the given local name."""
    for child in element:
        if local_name(child) == name:
            return child
    return None


def text_of(element: etree._Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext()).strip()
