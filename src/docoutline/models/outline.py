"""Data models for the neutral document outline."""

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Section(BaseModel):
    """One node of an outline, flattened into pre-order."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    depth: int = 0
    heading_level: int = 0  # 0 = not derived from a heading
    order_index: int
    parent_id: str | None = None
    href: str | None = None
    page_start: int | None = None  # 1-based, bookmark source only
    tags: frozenset[str] = Field(default_factory=frozenset)

    @field_serializer("tags")
    def _serialize_tags(self, tags: frozenset[str]) -> list[str]:
        return sorted(tags)


class DocOutline(BaseModel):
    """Ordered sections of a document (depth-first pre-order)."""

    sections: list[Section] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sections)

    def get(self, section_id: str) -> Section | None:
        """Return the first section with the given id."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def roots(self) -> list[Section]:
        return [s for s in self.sections if s.parent_id is None]

    def children_of(self, section_id: str) -> list[Section]:
        return [s for s in self.sections if s.parent_id == section_id]


class BookmarkNode(BaseModel):
    """Single entry of a PDF bookmark tree, with its page resolved."""

    title: str = ""
    page_number: int | None = None  # 1-based
    children: list["BookmarkNode"] = Field(default_factory=list)


def generated_id(order_index: int, used_ids: set[str]) -> str:
    """sec-<order_index>, suffixed until it does not clash with a taken id."""
    candidate = f"sec-{order_index}"
    suffix = 1
    while candidate in used_ids:
        candidate = f"sec-{order_index}-{suffix}"
        suffix += 1
    return candidate
