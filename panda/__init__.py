# panda/__init__.py
"""
Panda - incremental markdown to PDF rendering.

Converts a tree of markdown documents into PDF artifacts, invoking pandoc
only for documents that are new, missing their PDF, or changed since the
last successful render.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
