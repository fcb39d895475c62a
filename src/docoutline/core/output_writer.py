"""Write extracted outlines to JSON files."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from docoutline.models.epub import EpubStructure
from docoutline.models.outline import DocOutline


class OutlineOutput(BaseModel):
    """JSON document written for one source file."""

    source_path: str
    source_format: str
    extracted_at: datetime = Field(default_factory=datetime.now)
    section_count: int
    outline: DocOutline
    epub: EpubStructure | None = None


class OutputWriter:
    """Write extracted outlines to disk."""

    def __init__(self, output_path: Path, source_path: Path):
        """Initialize output writer.

        Args:
            output_path: JSON file to write
            source_path: Path to the source document
        """
        self.output_path = output_path
        self.source_path = source_path

    def write(
        self,
        outline: DocOutline,
        source_format: str,
        epub: EpubStructure | None = None,
    ) -> Path:
        """Write the outline (and EPUB structure when given) as JSON."""
        output = OutlineOutput(
            source_path=str(self.source_path),
            source_format=source_format,
            section_count=len(outline),
            outline=outline,
            epub=epub,
        )
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(output.model_dump_json(indent=2))
        return self.output_path
