"""Line scanner module.

Exports the ``LineScanner`` class and the comment / attribute-block
splitting helpers.
"""
from __future__ import annotations

from pinmap.lexer.scanner import (
    AttributeSplit,
    CommentSplit,
    LineScanner,
    split_attributes,
    split_comment,
)

__all__ = [
    "AttributeSplit",
    "CommentSplit",
    "LineScanner",
    "split_attributes",
    "split_comment",
]
