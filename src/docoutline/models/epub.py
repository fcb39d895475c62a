"""Data models for EPUB container structure."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field

from docoutline.models.outline import DocOutline


class ManifestItem(BaseModel):
    """One resource declared in the package manifest."""

    id: str
    href: str
    media_type: str = ""
    properties: list[str] = Field(default_factory=list)
    file_size: int = -1  # -1 = unknown


class SpineItem(BaseModel):
    """Entry of the linear reading order."""

    id: str
    href: str = ""
    media_type: str = ""
    spine_index: int
    is_linear: bool = True
    properties: list[str] = Field(default_factory=list)


class EmbeddedResource(BaseModel):
    """Manifest item outside the spine (image, font, stylesheet, ...)."""

    id: str
    href: str
    media_type: str = ""
    file_size: int = -1


class TocItem(BaseModel):
    """Single entry in the container's table of contents."""

    label: str = ""
    href: str | None = None
    level: int = 0
    play_order: int = 0
    children: list["TocItem"] = Field(default_factory=list)


class TocSource(str, Enum):
    """Which table-of-contents source produced the TOC."""

    NONE = "none"
    NCX = "ncx"
    NAV = "nav"


class TocResolution(BaseModel):
    """Winning TOC source and its tree."""

    source: TocSource = TocSource.NONE
    items: list[TocItem] = Field(default_factory=list)


class EncryptionInfo(BaseModel):
    """DRM flag and the resources listed in META-INF/encryption.xml."""

    has_drm: bool = False
    encrypted_resources: list[str] = Field(default_factory=list)


class PackageDocument(BaseModel):
    """Parsed OPF package document."""

    path: str
    reading_direction: str | None = None
    cover_id: str | None = None
    manifest: list[ManifestItem] = Field(default_factory=list)
    spine: list[SpineItem] = Field(default_factory=list)
    navigation_document_path: str | None = None
    cover_image_path: str | None = None
    images: list[EmbeddedResource] = Field(default_factory=list)
    fonts: list[EmbeddedResource] = Field(default_factory=list)
    stylesheets: list[EmbeddedResource] = Field(default_factory=list)
    other_resources: list[EmbeddedResource] = Field(default_factory=list)

    def find_by_media_type(self, media_type: str) -> ManifestItem | None:
        for item in self.manifest:
            if item.media_type.lower() == media_type.lower():
                return item
        return None


class EpubStructure(BaseModel):
    """Complete structure extracted from an EPUB container."""

    package: PackageDocument | None = None
    encryption: EncryptionInfo = Field(default_factory=EncryptionInfo)
    toc: TocResolution = Field(default_factory=TocResolution)
    outline: DocOutline = Field(default_factory=DocOutline)

    @computed_field
    @property
    def root_package_path(self) -> str | None:
        return self.package.path if self.package else None

    @computed_field
    @property
    def content_file_count(self) -> int:
        return len(self.package.spine) if self.package else 0

    @computed_field
    @property
    def embedded_resource_count(self) -> int:
        if not self.package:
            return 0
        return max(0, len(self.package.manifest) - len(self.package.spine))
