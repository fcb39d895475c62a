"""Data models for discovered hyperlinks."""

from pydantic import BaseModel


class LinkReference(BaseModel):
    """A hyperlink found in an HTML or Markdown document."""

    url: str
    text: str | None = None
    rel: str | None = None
    title: str | None = None
    is_external: bool = False
