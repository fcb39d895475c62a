"""Build the EPUB table of contents from the NCX or the navigation document."""

import logging
import warnings
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag, XMLParsedAsHTMLWarning
from bs4.builder import ParserRejectedMarkup

from docoutline.core.container import ContainerEntry
from docoutline.core.paths import parent_dir, resolve
from docoutline.core.xml_utils import first_child, local_name, parse_xml, text_of
from docoutline.models.epub import PackageDocument, TocItem, TocResolution, TocSource

# Navigation documents are XHTML; the HTML fallback parse is intentional
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

log = logging.getLogger(__name__)

NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
OPS_NAMESPACE = "http://www.idpf.org/2007/ops"


# =============================================================================
# Legacy NCX
# =============================================================================


def build_ncx_toc(data: bytes, label: str = "toc.ncx") -> list[TocItem]:
    """Read navPoint elements under navMap into a TocItem tree."""
    root = parse_xml(data, label)
    if root is None:
        return []

    nav_map = next(root.iter("{*}navMap"), None)
    if nav_map is None:
        return []

    items: list[TocItem] = []
    stack = [(nav_map, 0, items)]
    while stack:
        parent, level, sink = stack.pop()
        play_order = 0
        for nav_point in parent:
            if local_name(nav_point) != "navPoint":
                continue
            content = first_child(nav_point, "content")
            src = content.get("src") if content is not None else None
            item = TocItem(
                label=text_of(next(nav_point.iter("{*}text"), None)),
                href=src or None,
                level=level,
                play_order=play_order,
            )
            sink.append(item)
            play_order += 1
            stack.append((nav_point, level + 1, item.children))

    return items


# =============================================================================
# EPUB 3 navigation document
# =============================================================================


def _parse_nav_document(data: bytes) -> BeautifulSoup | None:
    try:
        soup = BeautifulSoup(data, "xml")
        if soup.find("nav") is None:
            soup = BeautifulSoup(data, "lxml")
    except ParserRejectedMarkup as e:
        log.warning(f"Navigation document rejected by parser: {e}")
        return None
    return soup


def _nav_type(nav: Tag) -> str:
    """epub:type of a nav, as a plain attribute or in the OPS namespace."""
    value = nav.get("epub:type")
    if value:
        return str(value)
    for key, attr_value in nav.attrs.items():
        if getattr(key, "namespace", None) == OPS_NAMESPACE and getattr(key, "name", None) == "type":
            return str(attr_value)
    return ""


def find_toc_nav(soup: BeautifulSoup) -> Tag | None:
    """First nav in document order typed "toc" or with role doc-toc."""
    for nav in soup.find_all("nav"):
        if "toc" in _nav_type(nav).lower():
            return nav
        if str(nav.get("role") or "").lower() == "doc-toc":
            return nav
    return None


def _own_element(li: Tag, name: str) -> Tag | None:
    """First descendant of li with the given name that is not inside a nested list."""
    for element in li.find_all(name):
        if element.find_parent("ol") is li.parent:
            return element
    return None


def _first_list(parent: Tag) -> Tag | None:
    return parent.find("ol", recursive=False) or parent.find("ol")


def _resolve_nav_href(nav_dir: str, href: str) -> str:
    if urlparse(href).scheme:
        return href
    return resolve(nav_dir, href)


def build_nav_toc(data: bytes, nav_path: str) -> list[TocItem]:
    """Read the toc nav of a navigation document into a TocItem tree.

    Hrefs are resolved against the navigation document's own directory.
    """
    soup = _parse_nav_document(data)
    if soup is None:
        return []

    nav = find_toc_nav(soup)
    if nav is None:
        return []

    root_list = _first_list(nav)
    if root_list is None:
        return []

    nav_dir = parent_dir(nav_path)
    items: list[TocItem] = []
    stack = [(root_list, 0, items)]
    while stack:
        ol, level, sink = stack.pop()
        for play_order, li in enumerate(ol.find_all("li", recursive=False)):
            anchor = _own_element(li, "a")
            label_el = anchor if anchor is not None else _own_element(li, "span")
            href = str(anchor.get("href") or "") if anchor is not None else ""
            item = TocItem(
                label=" ".join(label_el.get_text().split()) if label_el is not None else "",
                href=_resolve_nav_href(nav_dir, href) if href else None,
                level=level,
                play_order=play_order,
            )
            sink.append(item)
            child_list = _first_list(li)
            if child_list is not None:
                stack.append((child_list, level + 1, item.children))

    return items


# =============================================================================
# Source resolution
# =============================================================================


def resolve_toc(
    entries: dict[str, ContainerEntry], package: PackageDocument | None
) -> TocResolution:
    """Pick the table of contents: the navigation document wins over the NCX."""
    if package is None:
        return TocResolution()

    nav_path = package.navigation_document_path
    if nav_path and nav_path in entries:
        items = build_nav_toc(entries[nav_path].content, nav_path)
        if items:
            log.info(f"TOC from navigation document {nav_path}: {len(items)} top-level entries")
            return TocResolution(source=TocSource.NAV, items=items)
        log.info(f"Navigation document {nav_path} has no usable toc")

    ncx = package.find_by_media_type(NCX_MEDIA_TYPE)
    if ncx is not None and ncx.href in entries:
        items = build_ncx_toc(entries[ncx.href].content, ncx.href)
        if items:
            log.info(f"TOC from NCX {ncx.href}: {len(items)} top-level entries")
            return TocResolution(source=TocSource.NCX, items=items)

    return TocResolution()
