"""Quote- and brace-aware scanning of a single annotation line.

Two questions about a line cannot be answered with a regular expression
alone, because both depend on whether a character sits inside a quoted
string or a ``{...}`` attribute block:

- Where does the trailing ``#`` comment start?  A ``#`` inside quotes or
  braces is ordinary text, so ``{"color": "#ff0000"}`` keeps its hex
  color.
- Does the text after the closing ``]`` end with a complete top-level
  ``{...}`` block, and where does that block begin?

``LineScanner`` walks the line once, left to right, keeping an explicit
state of the open quote character (or none) and the current brace depth.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

_QUOTES: Final[frozenset[str]] = frozenset({'"', "'"})
_COMMENT: Final[str] = "#"


@dataclass(frozen=True, slots=True)
class CommentSplit:
    """A line separated from its trailing comment.

    ``comment`` is ``None`` when the line has no comment marker; it is the
    trimmed comment text (possibly empty) otherwise.
    """

    body: str
    comment: str | None


@dataclass(frozen=True, slots=True)
class AttributeSplit:
    """Trailer text separated into a label part and a brace block.

    ``block`` is ``None`` when the text does not end with a top-level
    ``{...}`` block.
    """

    label: str
    block: str | None


class LineScanner:
    """Single-pass scanner over one annotation line.

    Parameters
    ----------
    text:
        The line (or line fragment) to scan.
    """

    __slots__ = ("_text", "_pos", "_quote", "_depth")

    def __init__(self, text: str) -> None:
        self._text: str = text
        self._pos: int = 0
        self._quote: str | None = None
        self._depth: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def split_comment(self) -> CommentSplit:
        """Split off a trailing comment.

        A ``#`` starts a comment only when no quote is open and the brace
        depth is zero.  Both quote styles are tracked, and a quote
        character inside the other style's string is ordinary text.
        """
        self._reset()
        while self._pos < len(self._text):
            ch = self._advance()
            if self._quote is not None:
                if ch == "\\":
                    self._skip()
                elif ch == self._quote:
                    self._quote = None
                continue
            if ch in _QUOTES:
                self._quote = ch
            elif ch == "{":
                self._depth += 1
            elif ch == "}":
                if self._depth > 0:
                    self._depth -= 1
            elif ch == _COMMENT and self._depth == 0:
                start = self._pos - 1
                return CommentSplit(
                    body=self._text[:start].rstrip(),
                    comment=self._text[self._pos :].strip(),
                )
        return CommentSplit(body=self._text, comment=None)

    def split_attributes(self) -> AttributeSplit:
        """Split trailing text into a label and a final ``{...}`` block.

        The text has a block when it ends with ``}`` and contains a
        top-level ``{``.  Braces are balanced left to right; double-quoted
        strings are only recognized inside a block (where JSON strings
        live), so quotes and apostrophes in a label never hide the block.
        The block starts at the last ``{`` opened at depth zero; whether
        its contents are valid JSON is the caller's concern.
        """
        self._reset()
        text = self._text.rstrip()
        block_start: int | None = None
        while self._pos < len(text):
            ch = self._advance()
            if self._quote is not None:
                if ch == "\\":
                    self._skip()
                elif ch == self._quote:
                    self._quote = None
                continue
            if ch == '"' and self._depth > 0:
                self._quote = ch
            elif ch == "{":
                if self._depth == 0:
                    block_start = self._pos - 1
                self._depth += 1
            elif ch == "}" and self._depth > 0:
                self._depth -= 1
        if block_start is None or not text.endswith("}"):
            return AttributeSplit(label=text.strip(), block=None)
        return AttributeSplit(
            label=text[:block_start].strip(),
            block=text[block_start:],
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._pos = 0
        self._quote = None
        self._depth = 0

    def _advance(self) -> str:
        """Consume and return the current character."""
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def _skip(self) -> None:
        """Consume the next character, if any, without inspecting it."""
        if self._pos < len(self._text):
            self._pos += 1


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def split_comment(line: str) -> CommentSplit:
    """Split ``line`` into its body and trailing comment.

    Example
    -------
    ::

        split_comment('[1, 2] {"color": "#f00"} # note')
        # CommentSplit(body='[1, 2] {"color": "#f00"}', comment='note')
    """
    return LineScanner(line).split_comment()


def split_attributes(trailer: str) -> AttributeSplit:
    """Split the text after ``]`` into a label part and a JSON block."""
    return LineScanner(trailer).split_attributes()
