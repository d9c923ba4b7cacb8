"""Data models for vibeguide.

- guide: categories and streams from the API, and the generated grid
  (blocks, rows, layout)
"""

from vibeguide.models.guide import Block, Category, Layout, Row, Stream

__all__ = ["Block", "Category", "Layout", "Row", "Stream"]
