"""
extractor.py - Tree-sitter based comment extraction.

Parses source text with the variant's grammar and runs the variant's
comment query over the whole tree. Captures come back in tree order
(depth-first, left-to-right) and are not re-sorted.

Malformed input is not an error: tree-sitter always returns a tree, with
ERROR nodes where it had to recover, and the query simply runs over
whatever comment nodes were recognised.
"""

from __future__ import annotations

import logging
from typing import Optional

from tree_sitter import Node, QueryCursor

from anot.language_queries import COMMENT_CAPTURE
from anot.models import CommentRecord, LanguageVariant
from anot.registry import LanguageRegistry, default_registry

logger = logging.getLogger(__name__)


def extract(
    text: str,
    variant: LanguageVariant,
    registry: Optional[LanguageRegistry] = None,
) -> list[CommentRecord]:
    """Return every comment in *text* as a CommentRecord, in source order."""
    registry = registry or default_registry()
    source = text.encode("utf-8")
    tree = registry.parser_for(variant).parse(source)
    if tree.root_node.has_error:
        logger.debug("Recovered from syntax errors while parsing %s source", variant.value)

    cursor = QueryCursor(registry.query_for(variant))
    records: list[CommentRecord] = []
    # matches() yields in tree order; captures() does not guarantee it.
    for _, md in cursor.matches(tree.root_node):
        captured = md.get(COMMENT_CAPTURE)
        if captured is None:
            continue
        items = captured if isinstance(captured, list) else [captured]
        records.extend(_to_record(node, source) for node in items)
    return records


def _to_record(node: Node, source: bytes) -> CommentRecord:
    start_line = node.start_point[0] + 1
    end_line = node.end_point[0] + 1
    # A line comment's node can end at column 0 of the next row when the
    # grammar includes the trailing newline (Rust line_comment does).
    if end_line > start_line and node.end_point[1] == 0:
        end_line -= 1
    return CommentRecord(
        line=start_line,
        text=_node_text(node, source),
        end_line=end_line if end_line > start_line else None,
    )


def _node_text(node: Node, source: bytes) -> str:
    """Exact UTF-8 text of a node, delimiters included."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
