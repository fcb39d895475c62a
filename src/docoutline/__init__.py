"""Outline (table of contents) extraction for EPUB, HTML, Markdown and PDF."""

__version__ = "0.1.0"
