"""Locate and parse the OPF package document of an EPUB container."""

import logging

from docoutline.core.container import ContainerEntry
from docoutline.core.paths import normalize, parent_dir, resolve
from docoutline.core.xml_utils import parse_xml
from docoutline.models.epub import (
    EmbeddedResource,
    ManifestItem,
    PackageDocument,
    SpineItem,
)

log = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
PACKAGE_EXTENSIONS = (".opf",)
PACKAGE_MEDIA_TYPE_MARKER = "package+xml"


def locate_package_document(entries: dict[str, ContainerEntry]) -> str | None:
    """Find the package document path.

    Tries META-INF/container.xml first, then the first archive entry with a
    package extension. Returns None when the container has no package.
    """
    path = _package_path_from_container(entries)
    if path and path in entries:
        return path
    if path:
        log.warning(f"Package path {path!r} from container.xml not in archive")

    for name in entries:
        if name.lower().endswith(PACKAGE_EXTENSIONS):
            log.info(f"Using fallback package document: {name}")
            return name

    return None


def _package_path_from_container(entries: dict[str, ContainerEntry]) -> str | None:
    entry = entries.get(CONTAINER_PATH)
    root = parse_xml(entry.content if entry else None, CONTAINER_PATH)
    if root is None:
        return None

    first_path: str | None = None
    for rootfile in root.iter("{*}rootfile"):
        full_path = normalize(rootfile.get("full-path") or "")
        if not full_path:
            continue
        media_type = rootfile.get("media-type") or ""
        if PACKAGE_MEDIA_TYPE_MARKER in media_type:
            return full_path
        if first_path is None:
            first_path = full_path
    return first_path


def parse_package_document(
    entries: dict[str, ContainerEntry], path: str
) -> PackageDocument | None:
    """Parse manifest, spine and metadata hints of the package document.

    Returns None when the document is missing or is not well-formed XML.
    """
    entry = entries.get(path)
    root = parse_xml(entry.content if entry else None, path)
    if root is None:
        return None

    package_dir = parent_dir(path)
    package = PackageDocument(path=path)

    direction = root.get("page-progression-direction")
    if not direction:
        spine_el = next(root.iter("{*}spine"), None)
        if spine_el is not None:
            direction = spine_el.get("page-progression-direction")
    package.reading_direction = direction or None

    for meta in root.iter("{*}meta"):
        if (meta.get("name") or "").lower() == "cover":
            package.cover_id = meta.get("content") or None
            break

    package.manifest = _parse_manifest(root, package_dir, entries)

    for item in package.manifest:
        if package.navigation_document_path is None and "nav" in item.properties:
            package.navigation_document_path = item.href
        if package.cover_image_path is None and (
            "cover-image" in item.properties
            or (package.cover_id is not None and item.id == package.cover_id)
        ):
            package.cover_image_path = item.href

    package.spine = _parse_spine(root, package.manifest)
    _classify_resources(package)

    log.info(
        f"Package {path}: {len(package.manifest)} manifest items, "
        f"{len(package.spine)} spine items"
    )
    return package


def _parse_manifest(root, package_dir: str, entries: dict[str, ContainerEntry]) -> list[ManifestItem]:
    manifest_el = next(root.iter("{*}manifest"), None)
    if manifest_el is None:
        return []

    items: list[ManifestItem] = []
    for item in manifest_el.iter("{*}item"):
        href = resolve(package_dir, item.get("href") or "")
        entry = entries.get(href)
        items.append(
            ManifestItem(
                id=item.get("id") or "",
                href=href,
                media_type=item.get("media-type") or "",
                properties=split_properties(item.get("properties")),
                file_size=entry.declared_size if entry else -1,
            )
        )
    return items


def _parse_spine(root, manifest: list[ManifestItem]) -> list[SpineItem]:
    spine_el = next(root.iter("{*}spine"), None)
    if spine_el is None:
        return []

    by_id = {item.id: item for item in manifest}
    spine: list[SpineItem] = []
    for itemref in spine_el.iter("{*}itemref"):
        idref = itemref.get("idref") or ""
        item = by_id.get(idref)
        spine.append(
            SpineItem(
                id=idref,
                href=item.href if item else "",
                media_type=item.media_type if item else "",
                spine_index=len(spine),
                is_linear=(itemref.get("linear") or "").lower() != "no",
                properties=item.properties if item else [],
            )
        )
    return spine


def _classify_resources(package: PackageDocument) -> None:
    """Sort manifest items outside the spine into resource buckets."""
    spine_ids = {item.id for item in package.spine}
    for item in package.manifest:
        if item.id in spine_ids:
            continue
        resource = EmbeddedResource(
            id=item.id,
            href=item.href,
            media_type=item.media_type,
            file_size=item.file_size,
        )
        media_type = item.media_type.lower()
        if media_type.startswith("image/"):
            package.images.append(resource)
        elif is_font_type(media_type):
            package.fonts.append(resource)
        elif media_type == "text/css":
            package.stylesheets.append(resource)
        else:
            package.other_resources.append(resource)


def is_font_type(media_type: str) -> bool:
    """True for font/* and legacy font media types (woff, opentype)."""
    value = media_type.lower()
    return value.startswith("font/") or "woff" in value or "opentype" in value


def split_properties(value: str | None) -> list[str]:
    if not value:
        return []
    return value.split()
