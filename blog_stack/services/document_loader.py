# -*- coding: utf-8 -*-
"""
Document Loader
================
Reads a locally authored blog post into a SourceDocument.

  - .txt / .md and unknown extensions: UTF-8 text, used as-is
  - .docx: paragraphs via python-docx, with heading and list styles mapped
    to the "#" / "-" markers the text normalizer understands, plus the
    embedded pictures (read lazily, only when they are uploaded)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Union

import docx
from docx.oxml.ns import qn

logger = logging.getLogger("blog.document")

DOCX_SUFFIXES = {".docx"}

_LIST_STYLE_PREFIXES = ("List Bullet", "List Number", "List Paragraph")


@dataclass
class EmbeddedImage:
    """A picture embedded in a word-processor file."""

    name: str
    content_type: str
    _loader: Callable[[], bytes] = field(repr=False)

    def read(self) -> bytes:
        return self._loader()

    @property
    def size(self) -> int:
        return len(self.read())


@dataclass
class SourceDocument:
    path: Path
    text: str
    images: list[EmbeddedImage] = field(default_factory=list)


def _paragraph_marker(style_name: str) -> str:
    if style_name == "Title" or style_name == "Heading 1":
        return "# "
    if style_name == "Heading 2":
        return "## "
    if style_name.startswith("Heading "):
        return "### "
    if style_name.startswith(_LIST_STYLE_PREFIXES):
        return "- "
    return ""


def _docx_images(document) -> list[EmbeddedImage]:
    """Pictures in document order, each image part listed once."""
    related = document.part.related_parts
    images = []
    seen = set()
    for blip in document.element.body.iter(qn("a:blip")):
        rel_id = blip.get(qn("r:embed"))
        if not rel_id or rel_id in seen or rel_id not in related:
            continue
        seen.add(rel_id)
        part = related[rel_id]
        images.append(
            EmbeddedImage(
                name=Path(str(part.partname)).name,
                content_type=part.content_type,
                _loader=lambda part=part: part.blob,
            )
        )
    return images


def _load_docx(path: Path) -> SourceDocument:
    document = docx.Document(str(path))
    lines = []
    for para in document.paragraphs:
        text = para.text
        if not text.strip():
            lines.append("")
            continue
        style_name = para.style.name if para.style is not None else ""
        lines.append(_paragraph_marker(style_name) + text)

    images = _docx_images(document)
    logger.info(
        "Loaded DOCX %s (%d paragraphs, %d embedded images)",
        path.name,
        len(lines),
        len(images),
    )
    return SourceDocument(path=path, text="\n".join(lines), images=images)


def load_document(path: Union[str, Path]) -> SourceDocument:
    """
    Load a blog source file.

    Args:
        path: Text, Markdown or DOCX file.

    Returns:
        SourceDocument with the body text and any embedded images.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    if source.suffix.lower() in DOCX_SUFFIXES:
        return _load_docx(source)

    text = source.read_text(encoding="utf-8")
    logger.info("Loaded %s (%d chars)", source.name, len(text))
    return SourceDocument(path=source, text=text)
