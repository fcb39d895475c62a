"""Outline extraction options."""

import json
from pathlib import Path

from pydantic import BaseModel, Field


class HeadingOptions(BaseModel):
    """Options for heading-based outlines (HTML and Markdown).

    The level range is not validated: an empty or inverted range simply
    matches no headings.
    """

    min_heading_level: int = 1
    max_heading_level: int = 6
    generate_ids: bool = True
    strip_scripts: bool = True
    include_css: str | None = None
    exclude_css: str | None = None


class OutlineOptions(BaseModel):
    """Per-format switches plus heading options."""

    enable_epub_outline: bool = True
    enable_html_outline: bool = True
    enable_markdown_outline: bool = True
    enable_pdf_outline: bool = True
    heading: HeadingOptions = Field(default_factory=HeadingOptions)

    @classmethod
    def default(cls) -> "OutlineOptions":
        return cls()

    @classmethod
    def from_file(cls, path: Path) -> "OutlineOptions":
        """Load options from a JSON file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the content is not valid JSON or fails validation
        """
        data = json.loads(path.read_text())
        return cls.model_validate(data)
