#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Post Blog
=========
Registers a blog post in microCMS from a local text / Markdown / DOCX file.
Title, category and lead text are derived from the body unless given.
The largest of the given images is uploaded as the eyecatch.

Usage:
    python -m blog_stack.pipeline.post_blog --text blog.txt --images a.jpg b.jpg
    python -m blog_stack.pipeline.post_blog -t blog.docx -c 制度 -w "Hanako" --featured
    python -m blog_stack.pipeline.post_blog -t blog.md --dry-run

Output (stdout JSON):
    dry run:  the record that would be registered
    real run: {"success": true, "id": "...", "url": "..."}
"""

import argparse
import html
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from blog_stack.config.settings import CATEGORY_LABELS, get_category, get_settings
from blog_stack.models import DerivedMetadata, PublishRecord
from blog_stack.services.document_loader import EmbeddedImage, load_document
from blog_stack.services.image_selector import first_largest, select_best
from blog_stack.services.metadata_deriver import derive_metadata
from blog_stack.services.microcms_service import MicroCMSError, MicroCMSService
from blog_stack.services.text_normalizer import normalize

logger = logging.getLogger("pipeline.post_blog")


def build_record(
    metadata: DerivedMetadata,
    content: str,
    title: Optional[str] = None,
    category: Optional[str] = None,
    writer: Optional[str] = None,
    featured: bool = False,
    eyecatch: Optional[str] = None,
) -> PublishRecord:
    """Assemble the entry; explicit values win over derived ones."""
    return PublishRecord(
        title=title or metadata.title,
        content=content,
        category=[category or metadata.category],
        description=metadata.description,
        is_featured=featured,
        writer=writer or None,
        eyecatch=eyecatch,
    )


def upload_eyecatch(store, image_path) -> Optional[str]:
    """Upload the eyecatch; a failure is logged and yields None."""
    try:
        url = store.upload_image(image_path)
    except (MicroCMSError, OSError) as exc:
        logger.error("Eyecatch upload failed: %s", exc)
        logger.info("Continuing without an eyecatch.")
        return None
    logger.info("Eyecatch uploaded: %s", url)
    return url


def upload_embedded_images(store, images: List[EmbeddedImage]) -> list:
    """Upload embedded pictures one by one; returns (image, url) pairs."""
    uploaded = []
    for image in images:
        try:
            url = store.upload_media(image.read(), image.content_type, image.name)
        except MicroCMSError as exc:
            logger.error("Embedded image upload failed (%s): %s", image.name, exc)
            continue
        uploaded.append((image, url))
    return uploaded


def _figure(url: str) -> str:
    return f'<figure><img src="{html.escape(url)}" alt=""></figure>'


def run(args: argparse.Namespace, store) -> int:
    """
    Execute the publish flow for already-validated arguments.

    Args:
        args: Parsed CLI arguments.
        store: microCMS client (or a stand-in with the same methods).

    Returns:
        Process exit status.
    """
    document = load_document(args.text)
    metadata = derive_metadata(document.text)
    content = normalize(document.text)
    category = args.category or metadata.category

    logger.info("=== microCMS blog post ===")
    logger.info("Title:       %s", args.title or metadata.title)
    logger.info("Category:    %s", category)
    logger.info("Description: %s", metadata.description)
    logger.info("Writer:      %s", args.writer or "(not set)")
    logger.info("Featured:    %s", args.featured)
    logger.info("Images:      %d", len(args.images))

    eyecatch = None
    if args.images:
        best = select_best(args.images)
        if best is not None:
            logger.info("Eyecatch:    %s", Path(best).name)
            if args.dry_run:
                logger.info("(dry-run: skipping image upload)")
            else:
                eyecatch = upload_eyecatch(store, best)

    if document.images:
        if args.dry_run:
            logger.info(
                "(dry-run: skipping upload of %d embedded images)",
                len(document.images),
            )
        else:
            uploaded = upload_embedded_images(store, document.images)
            if uploaded:
                content = "\n".join([content] + [_figure(url) for _, url in uploaded])
                if eyecatch is None and not args.images:
                    _, eyecatch = first_largest(uploaded, lambda pair: pair[0].size)

    record = build_record(
        metadata,
        content,
        title=args.title,
        category=category,
        writer=args.writer,
        featured=args.featured,
        eyecatch=eyecatch,
    )

    if args.dry_run:
        print(json.dumps(record.to_payload(), ensure_ascii=False, indent=2))
        logger.info("Dry run: re-run without --dry-run to register the post.")
        return 0

    logger.info("Registering the post in microCMS...")
    try:
        entry_id = store.create_blog(record)
    except MicroCMSError as exc:
        logger.error("Registration failed: %s", exc)
        return 1

    result = {"success": True, "id": entry_id, "url": store.entry_url(entry_id)}
    logger.info("Registered: %s (%s)", entry_id, result["url"])
    print(json.dumps(result, ensure_ascii=False))
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Register a blog post in microCMS from a local file."
    )
    parser.add_argument(
        "--text", "-t", required=True, help="Blog body (.txt, .md or .docx)."
    )
    parser.add_argument(
        "--images",
        "-i",
        nargs="*",
        default=[],
        help="Candidate images; the largest becomes the eyecatch.",
    )
    parser.add_argument("--title", help="Title (default: first line of the body).")
    parser.add_argument(
        "--category",
        "-c",
        help=f"One of {' / '.join(CATEGORY_LABELS)} (default: detected).",
    )
    parser.add_argument("--writer", "-w", help="Writer name.")
    parser.add_argument(
        "--featured", action="store_true", help="Mark the post as featured."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the record instead of registering it.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, store=None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    args = parse_args(argv)

    if args.category:
        try:
            get_category(args.category)
        except ValueError as exc:
            logger.error("%s", exc)
            return 1

    if not Path(args.text).is_file():
        logger.error("Source file not found: %s", args.text)
        return 1

    if store is None:
        store = MicroCMSService(get_settings().microcms)

    return run(args, store)


if __name__ == "__main__":
    sys.exit(main())
