"""
tags.py - Keyword matching over extracted comments.

Matching is plain case-insensitive substring containment on the raw
comment text: no word boundaries, no stemming, so "noted" matches "note".
"""

from __future__ import annotations

from typing import Iterable

from anot.models import AnnotationRecord, CommentRecord


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Strip tags, drop empty ones and case-insensitive duplicates.

    The first spelling of a duplicated tag wins and configured order is kept.
    """
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if not tag or tag.lower() in seen:
            continue
        seen.add(tag.lower())
        result.append(tag)
    return result


def parse_tag_list(raw: str) -> list[str]:
    """Split a comma-separated tag string, e.g. ``"todo,note"``."""
    return normalize_tags(raw.split(","))


def match_tags(
    comments: Iterable[CommentRecord],
    tags: list[str],
    file_path: str,
) -> list[AnnotationRecord]:
    """Emit one AnnotationRecord per (comment, tag) pair that matches.

    Comments keep their source order; within a comment, tags keep the
    order in which they were configured.
    """
    lowered = [(tag, tag.lower()) for tag in tags]
    annotations: list[AnnotationRecord] = []
    for comment in comments:
        haystack = comment.text.lower()
        for tag, needle in lowered:
            if needle in haystack:
                annotations.append(AnnotationRecord(
                    file_path=file_path,
                    line=comment.line,
                    tag=tag,
                    comment=comment.text,
                ))
    return annotations
