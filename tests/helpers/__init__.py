"""Test helper modules for the html-stitcher test suite.

- tree: write small source trees of root and partial files
"""
from __future__ import annotations

from .tree import write_tree

__all__ = ["write_tree"]
