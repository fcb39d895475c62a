import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from docoutline.models.options import HeadingOptions, OutlineOptions


def test_defaults() -> None:
    options = OutlineOptions.default()
    assert options.enable_epub_outline and options.enable_pdf_outline
    assert options.heading == HeadingOptions()
    assert (options.heading.min_heading_level, options.heading.max_heading_level) == (1, 6)
    assert options.heading.generate_ids
    assert options.heading.strip_scripts
    assert options.heading.include_css is None


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "outline.json"
    path.write_text(json.dumps({"enable_pdf_outline": False, "heading": {"max_heading_level": 3, "exclude_css": "nav"}}))

    options = OutlineOptions.from_file(path)

    assert not options.enable_pdf_outline
    assert options.heading.max_heading_level == 3
    assert options.heading.exclude_css == "nav"
    assert options.heading.min_heading_level == 1


def test_from_file_rejects_bad_values(tmp_path: Path) -> None:
    path = tmp_path / "outline.json"
    path.write_text(json.dumps({"heading": {"min_heading_level": "deep"}}))
    with pytest.raises(ValidationError):
        OutlineOptions.from_file(path)


def test_from_file_rejects_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "outline.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        OutlineOptions.from_file(path)
