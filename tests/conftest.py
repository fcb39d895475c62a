import io
import zipfile

import pytest
from pypdf import PdfWriter

from docoutline.models.outline import DocOutline

CONTAINER_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<container xmlns="urn:oasis:names:tc:opendocument:xmlns:container" version="1.0">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""

OPF_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" xmlns:dc="http://purl.org/dc/elements/1.1/"
         version="3.0"{direction}>
  <metadata>
    <dc:title>Test Book</dc:title>
{meta}
  </metadata>
  <manifest>
{manifest}
  </manifest>
  <spine>
{spine}
  </spine>
</package>"""

NAV_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
  <head><title>Nav</title></head>
  <body>
{body}
  </body>
</html>"""

NCX_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head/>
  <docTitle><text>Test Book</text></docTitle>
  <navMap>
{points}
  </navMap>
</ncx>"""


def build_opf(
    manifest: list[tuple[str, str, str, str]],
    spine: list[str | tuple[str, str]],
    meta: str = "",
    direction: str | None = None,
) -> str:
    """Build an OPF package document.

    manifest: [(id, href, media_type, properties), ...]
    spine: [idref, ...] or [(idref, linear), ...]
    """
    manifest_lines = []
    for item_id, href, media_type, props in manifest:
        props_attr = f' properties="{props}"' if props else ""
        manifest_lines.append(
            f'    <item id="{item_id}" href="{href}" media-type="{media_type}"{props_attr}/>'
        )
    spine_lines = []
    for ref in spine:
        if isinstance(ref, tuple):
            spine_lines.append(f'    <itemref idref="{ref[0]}" linear="{ref[1]}"/>')
        else:
            spine_lines.append(f'    <itemref idref="{ref}"/>')
    return OPF_TEMPLATE.format(
        direction=f' page-progression-direction="{direction}"' if direction else "",
        meta=meta,
        manifest="\n".join(manifest_lines),
        spine="\n".join(spine_lines),
    )


def nav_point(label: str, src: str, children: str = "") -> str:
    return (
        f"<navPoint><navLabel><text>{label}</text></navLabel>"
        f'<content src="{src}"/>{children}</navPoint>'
    )


def build_ncx(points: list[str]) -> str:
    return NCX_TEMPLATE.format(points="\n".join(points))


def build_nav(body: str) -> str:
    return NAV_TEMPLATE.format(body=body)


def make_zip(files: dict[str, str | bytes]) -> bytes:
    """Assemble an in-memory zip, mimetype first like a real EPUB."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def make_epub(
    opf: str,
    extra: dict[str, str | bytes] | None = None,
    opf_path: str = "OEBPS/content.opf",
) -> bytes:
    files: dict[str, str | bytes] = {
        "META-INF/container.xml": CONTAINER_XML.format(opf_path=opf_path),
        opf_path: opf,
    }
    files.update(extra or {})
    return make_zip(files)


def make_pdf(pages: int, outline: bool = True) -> bytes:
    """Blank pages with a two-level bookmark tree (one bookmark per page)."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    if outline:
        chapter = writer.add_outline_item("Chapter 1", 0)
        writer.add_outline_item("Section 1.1", 1, parent=chapter)
        writer.add_outline_item("Chapter 2", 2)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def assert_outline_invariants(outline: DocOutline) -> None:
    """Order, parent precedence and depth consistency."""
    assert [s.order_index for s in outline.sections] == list(range(len(outline.sections)))

    seen: dict[str, int] = {}
    for section in outline.sections:
        if section.parent_id is None:
            assert section.depth == 0
        else:
            assert section.parent_id in seen, f"{section.id} emitted before its parent"
            assert section.depth == seen[section.parent_id] + 1
        if section.id:
            seen[section.id] = section.depth


@pytest.fixture
def check_outline():
    return assert_outline_invariants
