"""Flatten format-native trees into the neutral DocOutline."""

from dataclasses import dataclass, field

from docoutline.models.epub import TocItem
from docoutline.models.outline import BookmarkNode, DocOutline, Section, generated_id


@dataclass
class FlattenContext:
    """Per-call traversal state: order counter and ids already handed out."""

    order: int = 0
    used_ids: set[str] = field(default_factory=set)

    def next_order(self) -> int:
        value = self.order
        self.order += 1
        return value


def toc_to_outline(items: list[TocItem]) -> DocOutline:
    """Convert a TOC tree into pre-order sections tagged "nav".

    The href is used as id when present and not yet taken, so ids stay
    stable across re-extraction; otherwise sec-<order_index>.
    """
    ctx = FlattenContext()
    sections: list[Section] = []
    stack: list[tuple[TocItem, str | None, int]] = [
        (item, None, 0) for item in reversed(items)
    ]
    while stack:
        item, parent_id, depth = stack.pop()
        order_index = ctx.next_order()
        section_id = (
            item.href
            if item.href and item.href not in ctx.used_ids
            else generated_id(order_index, ctx.used_ids)
        )
        ctx.used_ids.add(section_id)
        sections.append(
            Section(
                id=section_id,
                title=item.label,
                depth=depth,
                order_index=order_index,
                parent_id=parent_id,
                href=item.href,
                tags=frozenset({"nav"}),
            )
        )
        stack.extend((child, section_id, depth + 1) for child in reversed(item.children))

    return DocOutline(sections=sections)


def bookmarks_to_outline(nodes: list[BookmarkNode]) -> DocOutline:
    """Convert a bookmark tree into pre-order sections tagged nav/bookmark."""
    ctx = FlattenContext()
    sections: list[Section] = []
    stack: list[tuple[BookmarkNode, str | None, int]] = [
        (node, None, 0) for node in reversed(nodes)
    ]
    while stack:
        node, parent_id, depth = stack.pop()
        order_index = ctx.next_order()
        section_id = f"sec-{order_index}"
        page = node.page_number
        sections.append(
            Section(
                id=section_id,
                title=node.title,
                depth=depth,
                order_index=order_index,
                parent_id=parent_id,
                href=f"page={page}" if page is not None else None,
                page_start=page,
                tags=frozenset({"nav", "bookmark"}),
            )
        )
        stack.extend((child, section_id, depth + 1) for child in reversed(node.children))

    return DocOutline(sections=sections)
