"""Read a zip-based container into memory."""

import io
import logging
import zipfile
import zlib
from typing import NamedTuple

from docoutline.core.paths import normalize

log = logging.getLogger(__name__)

# Everything zipfile can raise on a truncated, corrupt or unsupported archive
ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
    ValueError,
    OSError,
)


class ContainerEntry(NamedTuple):
    content: bytes
    declared_size: int


def read_container(data: bytes) -> dict[str, ContainerEntry]:
    """Unpack every archive entry, keyed by normalized path.

    Archive order is preserved. An unreadable archive yields an empty map,
    the same as an empty one.
    """
    if not data:
        return {}

    entries: dict[str, ContainerEntry] = {}
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                name = normalize(info.filename)
                if not name:
                    continue
                entries[name] = ContainerEntry(zf.read(info), info.file_size)
    except ARCHIVE_ERRORS as e:
        log.warning(f"Container unreadable, treating as empty: {e}")
        return {}

    return entries
