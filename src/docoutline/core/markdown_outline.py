"""Heading outline for Markdown documents (CommonMark via markdown-it-py)."""

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from docoutline.core.headings import Heading, build_heading_outline
from docoutline.models.options import HeadingOptions
from docoutline.models.outline import DocOutline

log = logging.getLogger(__name__)

LINE_BREAKS = {"softbreak", "hardbreak"}
LITERAL_NODES = {"text", "code_inline"}


def parse_markdown(data: bytes) -> SyntaxTreeNode | None:
    """Parse Markdown bytes into a syntax tree (None for empty input)."""
    if not data:
        return None
    text = data.decode("utf-8", errors="replace")
    return SyntaxTreeNode(MarkdownIt("commonmark").parse(text))


def iter_nodes(root: SyntaxTreeNode, skip: set[str] | None = None):
    """Yield nodes depth-first in document order without recursion.

    Children of node types in ``skip`` are not visited.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if skip and node.type in skip:
            continue
        stack.extend(reversed(node.children))


def inline_text(node: SyntaxTreeNode) -> str:
    """Concatenate the text below node.

    Line breaks become a single space, emphasis and link wrappers are
    transparent and images contribute nothing.
    """
    parts: list[str] = []
    for child in iter_nodes(node, skip={"image"}):
        if child.type in LITERAL_NODES:
            parts.append(child.content)
        elif child.type in LINE_BREAKS:
            parts.append(" ")
    return "".join(parts).strip()


def extract_markdown_headings(data: bytes) -> list[Heading]:
    """Collect ATX and setext headings in document order."""
    root = parse_markdown(data)
    if root is None:
        return []

    return [
        Heading(level=int(node.tag[1]), title=inline_text(node))
        for node in iter_nodes(root)
        if node.type == "heading"
    ]


def build_markdown_outline(data: bytes, options: HeadingOptions | None = None) -> DocOutline:
    """Build a DocOutline from Markdown headings.

    Markdown has no natural anchors, so ids are sec-<order_index> when
    generation is requested and empty otherwise.
    """
    options = options or HeadingOptions()
    headings = extract_markdown_headings(data)
    outline = build_heading_outline(
        headings,
        min_level=options.min_heading_level,
        max_level=options.max_heading_level,
        generate_ids=options.generate_ids,
        tag_for=lambda h: f"h{h.level}",
    )
    log.info(f"Markdown outline: {len(outline)} sections from {len(headings)} headings")
    return outline
