"""Infer an outline hierarchy from a flat sequence of headings.

Shared by the HTML and Markdown front ends. Each heading's parent is the
most recent heading at the nearest shallower level; a heading at level L
invalidates every recorded level deeper than L.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from docoutline.models.outline import DocOutline, Section, generated_id

MAX_HEADING_LEVEL = 6


class Heading(NamedTuple):
    """One heading in document order."""

    level: int
    title: str
    id: str | None = None
    href: str | None = None


@dataclass
class HeadingTraversal:
    """Per-call state: order counter and the last section seen at each level.

    Levels map to positions in ``sections`` (the order index), independent of
    the id scheme in use.
    """

    order: int = 0
    last_at_level: dict[int, int] = field(default_factory=dict)
    sections: list[Section] = field(default_factory=list)
    used_ids: set[str] = field(default_factory=set)

    def parent_of(self, level: int) -> Section | None:
        for candidate in range(level - 1, 0, -1):
            if candidate in self.last_at_level:
                return self.sections[self.last_at_level[candidate]]
        return None

    def record(self, level: int, section: Section) -> None:
        self.sections.append(section)
        self.last_at_level[level] = section.order_index
        for deeper in range(level + 1, MAX_HEADING_LEVEL + 1):
            self.last_at_level.pop(deeper, None)
        if section.id:
            self.used_ids.add(section.id)
        self.order += 1


def build_heading_outline(
    headings: Iterable[Heading],
    *,
    min_level: int = 1,
    max_level: int = MAX_HEADING_LEVEL,
    generate_ids: bool = True,
    tag_for: Callable[[Heading], str] = lambda h: f"h{h.level}",
) -> DocOutline:
    """Build a parent-linked outline from headings.

    Args:
        headings: Headings in document order
        min_level: Smallest heading level to keep (inclusive)
        max_level: Largest heading level to keep (inclusive)
        generate_ids: Assign sec-<order_index> when a heading has no natural id
        tag_for: Format-specific sub-tag added next to "heading"

    Returns:
        DocOutline with sections in document order. Skipped levels never act
        as parents; their descendants attach to the nearest kept ancestor.
        A heading whose parent has no id cannot link to it, so it is emitted
        as a root with depth 0.
    """
    ctx = HeadingTraversal()

    for heading in headings:
        if heading.level < min_level or heading.level > max_level:
            continue

        order_index = ctx.order
        if heading.id and heading.id not in ctx.used_ids:
            section_id = heading.id
            href = heading.href
        else:
            section_id = generated_id(order_index, ctx.used_ids) if generate_ids else ""
            href = heading.href if heading.id else None

        parent = ctx.parent_of(heading.level)
        parent_id = parent.id if parent and parent.id else None
        ctx.record(
            heading.level,
            Section(
                id=section_id,
                title=heading.title,
                depth=parent.depth + 1 if parent_id else 0,
                heading_level=heading.level,
                order_index=order_index,
                parent_id=parent_id,
                href=href,
                tags=frozenset({"heading", tag_for(heading)}),
            ),
        )

    return DocOutline(sections=ctx.sections)
