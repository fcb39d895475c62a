"""Pick and run the outline extractor for a document format."""

import logging
from collections.abc import Callable
from pathlib import PurePath

from docoutline.core.epub_structure import build_epub_outline, extract_epub_structure
from docoutline.core.html_outline import build_html_outline
from docoutline.core.links import extract_html_links, extract_markdown_links
from docoutline.core.markdown_outline import build_markdown_outline
from docoutline.core.pdf_outline import build_pdf_outline
from docoutline.models.epub import EpubStructure
from docoutline.models.links import LinkReference
from docoutline.models.options import OutlineOptions
from docoutline.models.outline import DocOutline

log = logging.getLogger(__name__)


class UnsupportedFormatError(ValueError):
    """Requested format name has no extractor."""


class ExtractorFactory:
    """Map file names and mime types to outline extractors."""

    SUPPORTED_FORMATS = {
        ".epub": "epub",
        ".html": "html",
        ".htm": "html",
        ".xhtml": "html",
        ".md": "markdown",
        ".markdown": "markdown",
        ".pdf": "pdf",
    }

    MIME_TYPES = {
        "application/epub+zip": "epub",
        "text/html": "html",
        "application/xhtml+xml": "html",
        "text/markdown": "markdown",
        "text/x-markdown": "markdown",
        "application/pdf": "pdf",
    }

    FORMATS = ("epub", "html", "markdown", "pdf")

    @classmethod
    def detect_format(cls, name: str | None = None, mime_type: str | None = None) -> str:
        """Detect format from mime type, then file extension.

        Returns:
            Format string ("epub", "html", "markdown", "pdf" or "unknown")
        """
        if mime_type:
            base = mime_type.split(";", 1)[0].strip().lower()
            if base in cls.MIME_TYPES:
                return cls.MIME_TYPES[base]
        if name:
            suffix = PurePath(name).suffix.lower()
            return cls.SUPPORTED_FORMATS.get(suffix, "unknown")
        return "unknown"

    @classmethod
    def is_supported(cls, name: str) -> bool:
        return cls.detect_format(name) != "unknown"

    @classmethod
    def create(cls, fmt: str, options: OutlineOptions | None = None) -> Callable[[bytes], DocOutline]:
        """Return the outline builder for a format.

        Raises:
            UnsupportedFormatError: If the format name is unknown
        """
        options = options or OutlineOptions()
        if fmt == "epub":
            return build_epub_outline
        elif fmt == "html":
            return lambda data: build_html_outline(data, options.heading)
        elif fmt == "markdown":
            return lambda data: build_markdown_outline(data, options.heading)
        elif fmt == "pdf":
            return build_pdf_outline

        supported = ", ".join(cls.FORMATS)
        raise UnsupportedFormatError(f"Unsupported format: {fmt}. Supported formats: {supported}")


def _is_enabled(fmt: str, options: OutlineOptions) -> bool:
    return {
        "epub": options.enable_epub_outline,
        "html": options.enable_html_outline,
        "markdown": options.enable_markdown_outline,
        "pdf": options.enable_pdf_outline,
    }.get(fmt, False)


def extract_outline(data: bytes, fmt: str, options: OutlineOptions | None = None) -> DocOutline:
    """Extract the outline of a document.

    Never raises for malformed document bytes: any failure is logged and
    yields an empty outline. A disabled format also yields an empty outline.

    Raises:
        UnsupportedFormatError: If the format name is unknown
    """
    options = options or OutlineOptions()
    builder = ExtractorFactory.create(fmt, options)
    if not _is_enabled(fmt, options):
        log.info(f"Outline extraction disabled for {fmt}")
        return DocOutline()

    try:
        return builder(data)
    except Exception as e:
        log.warning(f"Outline extraction for {fmt} failed: {e}")
        return DocOutline()


def extract_links(
    data: bytes,
    fmt: str,
    base_uri: str | None = None,
    options: OutlineOptions | None = None,
) -> list[LinkReference]:
    """Discover links in HTML or Markdown; other formats have none."""
    options = options or OutlineOptions()
    try:
        if fmt == "html":
            return extract_html_links(data, base_uri, options.heading)
        elif fmt == "markdown":
            return extract_markdown_links(data, base_uri)
    except Exception as e:
        log.warning(f"Link extraction for {fmt} failed: {e}")
    return []


def extract_structure(data: bytes) -> EpubStructure:
    """EPUB structure and outline; any failure yields an empty structure."""
    try:
        return extract_epub_structure(data)
    except Exception as e:
        log.warning(f"EPUB structure extraction failed: {e}")
        return EpubStructure()
