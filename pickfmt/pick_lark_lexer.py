"""
Lark Lexer for single lines of Pick BASIC source

The formatter never parses statements. It only needs to know where the
string literals and the trailing comment of a line are, so that keyword
matching never fires inside string data or comments, and where a
leading line label ends.
"""

import os
import re
from lark import Lark, Token
from typing import List, Optional


STRING_TYPES = ("DQ_STRING", "SQ_STRING")

# NAME: or a bare statement number, followed by whitespace or end of line
LABEL_RE = re.compile(r"^([A-Za-z_][\w.$%]*:|\d+(?:\.\d+)?:?)(?=\s|$)")


class PickLineLexer:
    """Splits one physical source line into Lark tokens."""

    def __init__(self):
        self._parser = _load_lark_parser()

    def tokenize(self, text: str) -> List[Token]:
        """
        Lex one line.

        Args:
            text: A single source line without its line ending

        Returns:
            The tokens of the line in order; joining their values gives
            back the input
        """
        tree = self._parser.parse(text)
        return [child for child in tree.children if isinstance(child, Token)]

    def remove_quoted_strings(self, text: str) -> str:
        """Empty every string literal, keeping its delimiters."""
        parts = []
        for token in self.tokenize(text):
            if token.type in STRING_TYPES:
                parts.append(token.value[0] * 2)
            else:
                parts.append(token.value)
        return "".join(parts)

    def get_trailing_comment(self, text: str) -> Optional[str]:
        """Return the ``;*`` comment of the line, marker included."""
        for token in self.tokenize(text):
            if token.type == "COMMENT":
                return token.value
        return None

    def remove_trailing_comment(self, text: str) -> str:
        parts = []
        for token in self.tokenize(text):
            if token.type == "COMMENT":
                break
            parts.append(token.value)
        return "".join(parts).rstrip()

    def code_text(self, text: str) -> str:
        """
        The part of a line that keyword matching may look at.

        The trailing comment is dropped, string literals are emptied and
        the result is trimmed.
        """
        parts = []
        for token in self.tokenize(text):
            if token.type == "COMMENT":
                break
            if token.type in STRING_TYPES:
                parts.append(token.value[0] * 2)
            else:
                parts.append(token.value)
        return "".join(parts).strip()


def get_label(text: str) -> Optional[str]:
    """Return the leading label of a line (``NAME:`` or ``100``), if any."""
    match = LABEL_RE.match(text.strip())
    if match:
        return match.group(1)
    return None


def strip_label(text: str) -> str:
    """Return the trimmed line without its leading label."""
    text = text.strip()
    label = get_label(text)
    if label is None:
        return text
    return text[len(label):].strip()


def is_directive(text: str) -> bool:
    """Lines starting with ``!`` are never reformatted."""
    return text.strip().startswith("!")


def _load_lark_parser() -> Lark:
    """Load the Lark line parser from the grammar file."""
    grammar_path = os.path.join(os.path.dirname(__file__), "grammars", "pick_line.lark")

    with open(grammar_path, "r") as f:
        grammar = f.read()

    return Lark(
        grammar,
        parser="lalr",
        lexer="basic",
        start="start",
        maybe_placeholders=False,
    )
