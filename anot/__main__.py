"""
__main__.py - Entry point for `python -m anot`.

Delegates to the Typer CLI defined in cli.py.
"""

from anot.cli import app

if __name__ == "__main__":
    app()
