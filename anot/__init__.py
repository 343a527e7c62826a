"""
anot - find tagged annotations in source-code comments.

Comments are located with tree-sitter queries (Python, Rust, JavaScript,
TypeScript) and matched against keywords such as "todo" or "note".
Results can be restricted to lines added or modified in the git working tree.
"""

__version__ = "0.1.0"
__author__ = "anot contributors"
