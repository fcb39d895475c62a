"""EPUB structure extraction straight from the container bytes."""

import logging

from docoutline.core.container import read_container
from docoutline.core.encryption import detect_encryption
from docoutline.core.navigation import resolve_toc
from docoutline.core.package_document import locate_package_document, parse_package_document
from docoutline.core.unifier import toc_to_outline
from docoutline.models.epub import EpubStructure
from docoutline.models.outline import DocOutline

log = logging.getLogger(__name__)


def extract_epub_structure(data: bytes) -> EpubStructure:
    """Parse manifest, spine, encryption and table of contents of an EPUB.

    Every stage degrades independently: a missing or malformed package
    document leaves manifest, spine and TOC empty while encryption detection
    still runs.
    """
    entries = read_container(data)
    if not entries:
        return EpubStructure()

    package = None
    package_path = locate_package_document(entries)
    if package_path is None:
        log.warning("No package document found in container")
    else:
        package = parse_package_document(entries, package_path)

    encryption = detect_encryption(entries)
    toc = resolve_toc(entries, package)

    return EpubStructure(
        package=package,
        encryption=encryption,
        toc=toc,
        outline=toc_to_outline(toc.items),
    )


def build_epub_outline(data: bytes) -> DocOutline:
    """DocOutline of an EPUB's table of contents."""
    return extract_epub_structure(data).outline
