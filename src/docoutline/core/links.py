"""Hyperlink discovery for HTML and Markdown documents."""

import logging
from urllib.parse import urljoin, urlparse

from docoutline.core.html_outline import prepare_working_tree
from docoutline.core.markdown_outline import inline_text, iter_nodes, parse_markdown
from docoutline.models.links import LinkReference
from docoutline.models.options import HeadingOptions

log = logging.getLogger(__name__)


def _host(url: str) -> str | None:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def is_external(url: str, base_uri: str | None) -> bool:
    """True when both urls have a host and the hosts differ."""
    if not base_uri:
        return False
    base_host = _host(base_uri)
    link_host = _host(url)
    if not base_host or not link_host:
        return False
    return link_host.lower() != base_host.lower()


def _absolute(href: str, base_uri: str | None) -> str:
    if not base_uri:
        return href
    try:
        return urljoin(base_uri, href)
    except ValueError:
        return href


def extract_html_links(
    data: bytes,
    base_uri: str | None = None,
    options: HeadingOptions | None = None,
) -> list[LinkReference]:
    """Every a[href] of the filtered HTML tree, in document order."""
    working = prepare_working_tree(data, options or HeadingOptions())
    if working is None:
        return []

    links: list[LinkReference] = []
    for anchor in working.find_all("a", href=True):
        href = str(anchor["href"]).strip()
        url = _absolute(href, base_uri)
        text = " ".join(anchor.get_text().split())
        rel = anchor.get("rel")
        if isinstance(rel, list):
            rel = " ".join(rel)
        links.append(
            LinkReference(
                url=url,
                text=text or None,
                rel=rel or None,
                title=anchor.get("title") or None,
                is_external=is_external(url, base_uri),
            )
        )
    log.info(f"HTML links: {len(links)} found")
    return links


def extract_markdown_links(data: bytes, base_uri: str | None = None) -> list[LinkReference]:
    """Every Markdown link node, in document order."""
    root = parse_markdown(data)
    if root is None:
        return []

    links: list[LinkReference] = []
    for node in iter_nodes(root):
        if node.type != "link":
            continue
        url = _absolute(str(node.attrGet("href") or ""), base_uri)
        title = node.attrGet("title")
        links.append(
            LinkReference(
                url=url,
                text=inline_text(node) or None,
                title=str(title) if title else None,
                is_external=is_external(url, base_uri),
            )
        )
    log.info(f"Markdown links: {len(links)} found")
    return links
