"""
language_queries.py - Tree-sitter comment queries per language.

Each query captures every comment-shaped node of its grammar under the
single capture name @comment, so one traversal yields all comments.
Grammars that distinguish line and block comments list both node kinds.
"""

from __future__ import annotations

from anot.models import LanguageVariant

COMMENT_CAPTURE = "comment"

PYTHON_COMMENT_QUERY = """
(comment) @comment
"""

RUST_COMMENT_QUERY = """
(line_comment) @comment
(block_comment) @comment
"""

JAVASCRIPT_COMMENT_QUERY = """
(comment) @comment
"""

TYPESCRIPT_COMMENT_QUERY = """
(comment) @comment
"""

# ---------------------------------------------------------------------------
# Registry (used by registry.py)
# ---------------------------------------------------------------------------

COMMENT_QUERIES: dict[LanguageVariant, str] = {
    LanguageVariant.PYTHON: PYTHON_COMMENT_QUERY,
    LanguageVariant.RUST: RUST_COMMENT_QUERY,
    LanguageVariant.JAVASCRIPT: JAVASCRIPT_COMMENT_QUERY,
    LanguageVariant.TYPESCRIPT: TYPESCRIPT_COMMENT_QUERY,
}
