"""Data models."""

from docoutline.models.epub import (
    EmbeddedResource,
    EncryptionInfo,
    EpubStructure,
    ManifestItem,
    PackageDocument,
    SpineItem,
    TocItem,
    TocResolution,
    TocSource,
)
from docoutline.models.links import LinkReference
from docoutline.models.options import HeadingOptions, OutlineOptions
from docoutline.models.outline import BookmarkNode, DocOutline, Section

__all__ = [
    # Outline models
    "Section",
    "DocOutline",
    "BookmarkNode",
    # EPUB models
    "ManifestItem",
    "SpineItem",
    "EmbeddedResource",
    "TocItem",
    "TocSource",
    "TocResolution",
    "EncryptionInfo",
    "PackageDocument",
    "EpubStructure",
    # Links
    "LinkReference",
    # Options
    "HeadingOptions",
    "OutlineOptions",
]
