# -*- coding: utf-8 -*-
"""
Metadata Deriver
=================
Derives the title, category and lead description of a blog post from its
body text when they are not given on the command line.
"""

import logging
import re

from blog_stack.config.settings import CATEGORIES
from blog_stack.models import DerivedMetadata

logger = logging.getLogger("blog.metadata")

UNTITLED = "無題の記事"
ELLIPSIS = "..."
TITLE_MAX = 60
DESCRIPTION_MAX = 120

_HEADING_MARKER_RE = re.compile(r"^#+\s*")
_WHITESPACE_RE = re.compile(r"\s+")


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def _content_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def derive_title(text: str) -> str:
    """First non-blank line without heading markers, at most 60 chars."""
    lines = _content_lines(text)
    if not lines:
        return UNTITLED
    title = _HEADING_MARKER_RE.sub("", lines[0]).strip()
    return _truncate(title, TITLE_MAX)


def category_scores(text: str) -> dict[str, int]:
    """Case-insensitive keyword hit counts per category, in declared order."""
    scores = {}
    for cat in CATEGORIES:
        scores[cat.label] = sum(
            len(re.findall(re.escape(kw), text, flags=re.IGNORECASE))
            for kw in cat.keywords
        )
    return scores


def derive_category(text: str) -> str:
    """
    Pick the category whose keywords occur most often.

    Ties, and a text with no keyword at all, resolve to the first declared
    category.
    """
    scores = category_scores(text)
    best = CATEGORIES[0].label
    best_score = 0
    for label, score in scores.items():
        if score > best_score:
            best, best_score = label, score
    logger.debug("Category scores: %s -> %s", scores, best)
    return best


def derive_description(text: str) -> str:
    """Everything after the title line, whitespace-collapsed, at most 120 chars."""
    body = " ".join(_content_lines(text)[1:])
    body = _WHITESPACE_RE.sub(" ", body).strip()
    return _truncate(body, DESCRIPTION_MAX)


def derive_metadata(text: str) -> DerivedMetadata:
    return DerivedMetadata(
        title=derive_title(text),
        category=derive_category(text),
        description=derive_description(text),
    )
