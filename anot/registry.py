"""
registry.py - Language registry for comment extraction.

Responsibilities:
- Classify a file by extension into a LanguageVariant (no content sniffing).
- Lazily build and cache one tree-sitter Language and one compiled comment
  Query per variant. Both are immutable once built and are shared
  read-only by every extraction call.

A registry is normally created once per process via default_registry()
and passed explicitly into the extractor and scanner.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Union

import tree_sitter_javascript as tsjavascript
import tree_sitter_python as tspython
import tree_sitter_rust as tsrust
import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser, Query

from anot.errors import UnsupportedFileError
from anot.language_queries import COMMENT_QUERIES
from anot.models import LanguageVariant

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Extension → LanguageVariant mapping (exact, case-sensitive)
# ---------------------------------------------------------------------------

EXT_TO_LANG: dict[str, LanguageVariant] = {
    ".py": LanguageVariant.PYTHON,
    ".rs": LanguageVariant.RUST,
    ".js": LanguageVariant.JAVASCRIPT,
    ".ts": LanguageVariant.TYPESCRIPT,
}

# Grammar bindings are loaded only when a variant is first used.
_GRAMMAR_LOADERS: dict[LanguageVariant, Callable[[], object]] = {
    LanguageVariant.PYTHON: tspython.language,
    LanguageVariant.RUST: tsrust.language,
    LanguageVariant.JAVASCRIPT: tsjavascript.language,
    LanguageVariant.TYPESCRIPT: tsts.language_typescript,
}


class LanguageRegistry:
    """Classifies files and hands out per-variant grammars and queries.

    Usage::

        registry = LanguageRegistry()
        variant = registry.classify("src/main.rs")
        if variant is not None:
            query = registry.query_for(variant)
    """

    def __init__(self) -> None:
        self._languages: dict[LanguageVariant, Language] = {}
        self._queries: dict[LanguageVariant, Query] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, path: Union[str, Path]) -> Optional[LanguageVariant]:
        """Return the variant for *path*, or None if its extension is unsupported."""
        return EXT_TO_LANG.get(Path(path).suffix)

    def require(self, path: Union[str, Path]) -> LanguageVariant:
        """Like classify(), but raise UnsupportedFileError for unsupported files."""
        variant = self.classify(path)
        if variant is None:
            raise UnsupportedFileError(path)
        return variant

    @staticmethod
    def supported_extensions() -> dict[str, LanguageVariant]:
        return dict(EXT_TO_LANG)

    # ------------------------------------------------------------------
    # Lazy grammar / query access
    # ------------------------------------------------------------------

    def grammar_for(self, variant: LanguageVariant) -> Language:
        """Return the tree-sitter Language for *variant*, building it once."""
        language = self._languages.get(variant)
        if language is not None:
            return language
        with self._lock:
            language = self._languages.get(variant)
            if language is None:
                language = Language(_GRAMMAR_LOADERS[variant]())
                self._languages[variant] = language
                logger.debug("Loaded grammar for '%s'", variant.value)
        return language

    def query_for(self, variant: LanguageVariant) -> Query:
        """Return the compiled comment Query for *variant*, building it once."""
        query = self._queries.get(variant)
        if query is not None:
            return query
        language = self.grammar_for(variant)
        with self._lock:
            query = self._queries.get(variant)
            if query is None:
                query = Query(language, COMMENT_QUERIES[variant])
                self._queries[variant] = query
                logger.debug("Compiled comment query for '%s'", variant.value)
        return query

    def parser_for(self, variant: LanguageVariant) -> Parser:
        """Return a new Parser bound to the variant's grammar.

        Parsers carry mutable state, so each extraction gets its own.
        """
        return Parser(self.grammar_for(variant))


# ---------------------------------------------------------------------------
# Process-wide default registry
# ---------------------------------------------------------------------------

_default_registry: Optional[LanguageRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> LanguageRegistry:
    """Return the process-wide registry, creating it on first call."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = LanguageRegistry()
    return _default_registry
