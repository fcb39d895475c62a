"""Detect DRM from META-INF/encryption.xml."""

import logging

from docoutline.core.container import ContainerEntry
from docoutline.core.xml_utils import parse_xml
from docoutline.models.epub import EncryptionInfo

log = logging.getLogger(__name__)

ENCRYPTION_PATH = "META-INF/encryption.xml"


def detect_encryption(entries: dict[str, ContainerEntry]) -> EncryptionInfo:
    """Flag DRM and list encrypted resources.

    The presence of the descriptor alone sets the flag, even when it is
    malformed or lists no cipher references.
    """
    entry = entries.get(ENCRYPTION_PATH)
    if entry is None:
        return EncryptionInfo()

    info = EncryptionInfo(has_drm=True)
    root = parse_xml(entry.content, ENCRYPTION_PATH)
    if root is None:
        return info

    for ref in root.iter("{*}CipherReference"):
        uri = ref.get("URI")
        if uri:
            info.encrypted_resources.append(uri)

    log.info(f"Encryption descriptor lists {len(info.encrypted_resources)} resources")
    return info
