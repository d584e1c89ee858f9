# -*- coding: utf-8 -*-
"""
Image Selector
===============
Chooses the eyecatch image among several candidates. The largest file is
taken as the best one (higher resolution suits a cover image).
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, TypeVar, Union

logger = logging.getLogger("blog.images")

T = TypeVar("T")
PathLike = Union[str, Path]


def first_largest(items: Iterable[T], size_of: Callable[[T], int]) -> Optional[T]:
    """
    Return the item with the strictly largest size; the earliest wins ties.

    Items whose size raises OSError are skipped.
    """
    best = None
    best_size = -1
    for item in items:
        try:
            size = size_of(item)
        except OSError as exc:
            logger.warning("Skipping image candidate %s: %s", item, exc)
            continue
        if size > best_size:
            best, best_size = item, size
    return best


def select_best(paths: Sequence[PathLike]) -> Optional[PathLike]:
    """
    Pick the eyecatch candidate from local image paths.

    Args:
        paths: Candidate image files.

    Returns:
        The largest readable file, the only path when given just one,
        or None.
    """
    if not paths:
        return None
    if len(paths) == 1:
        return paths[0]
    best = first_largest(paths, lambda p: Path(p).stat().st_size)
    if best is None:
        logger.warning("None of the %d image candidates could be read.", len(paths))
    return best
