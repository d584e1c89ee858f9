#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
List Blogs
==========
Reads published blog entries from microCMS and prints them as JSON.

Usage:
    python -m blog_stack.pipeline.list_blogs --limit 5 --orders -publishedAt
    python -m blog_stack.pipeline.list_blogs --id abc123
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from blog_stack.config.settings import get_settings
from blog_stack.services.microcms_service import MicroCMSError, MicroCMSService

logger = logging.getLogger("pipeline.list_blogs")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List microCMS blog entries.")
    parser.add_argument("--id", dest="content_id", help="Fetch a single entry.")
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--orders", help="e.g. -publishedAt")
    parser.add_argument("--q", help="Full-text search query.")
    parser.add_argument("--filters", help="e.g. category[contains]制度")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, store=None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    args = parse_args(argv)
    if store is None:
        store = MicroCMSService(get_settings().microcms)

    try:
        if args.content_id:
            result = store.get_blog(args.content_id)
        else:
            result = store.list_blogs(
                {
                    "limit": args.limit,
                    "offset": args.offset,
                    "orders": args.orders,
                    "q": args.q,
                    "filters": args.filters,
                }
            )
    except MicroCMSError as exc:
        logger.error("Fetch failed: %s", exc)
        return 1

    print(
        json.dumps(
            result.model_dump(mode="json", by_alias=True),
            ensure_ascii=False,
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
