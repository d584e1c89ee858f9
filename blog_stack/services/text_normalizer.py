# -*- coding: utf-8 -*-
"""
Text Normalizer
================
Converts a plain-text / light-Markdown blog body into the HTML accepted by
the microCMS rich editor field.

Supported syntax, one construct per line:
  - "# ", "## ", "### " headings
  - "- " or "* " bullet items (grouped into a single <ul>)
  - blank lines (paragraph / list separators)
  - anything else becomes a <p>

Inline formatting (bold, links, ...) is intentionally not interpreted.
"""

import html
import re

HEADING_RE = re.compile(r"^(#{1,3})\s+(.+)")
LIST_ITEM_RE = re.compile(r"^[-*]\s+(.+)")


def escape(text: str) -> str:
    """Escape &, < and > (in that order); quotes are left alone."""
    return html.escape(text, quote=False)


def normalize(text: str) -> str:
    """
    Convert blog text to HTML.

    Args:
        text: Raw document body.

    Returns:
        HTML fragments joined by newlines.
    """
    out: list[str] = []
    in_list = False

    def close_list():
        nonlocal in_list
        if in_list:
            out.append("</ul>")
            in_list = False

    for raw in text.split("\n"):
        line = raw.rstrip()

        heading = HEADING_RE.match(line)
        if heading:
            close_list()
            level = len(heading.group(1))
            out.append(f"<h{level}>{escape(heading.group(2))}</h{level}>")
            continue

        item = LIST_ITEM_RE.match(line)
        if item:
            if not in_list:
                out.append("<ul>")
                in_list = True
            out.append(f"<li>{escape(item.group(1))}</li>")
            continue
        close_list()

        if not line.strip():
            continue

        out.append(f"<p>{escape(line)}</p>")

    close_list()
    return "\n".join(out)
