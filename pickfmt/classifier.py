"""
Line classification for Pick BASIC block structure.

A line is matched against the keyword table after its label, trailing
comment and string contents are removed. Classification is pure: the
CASE bookkeeping that depends on earlier lines lives in the formatter.
"""

import re
from typing import NamedTuple, Optional

from pickfmt.keywords import CASE, CONTINUATION_KEYWORDS, Keyword, keyword_table
from pickfmt.pick_lark_lexer import PickLineLexer, is_directive, strip_label


class Token(NamedTuple):
    """Classification of one source line."""

    keyword: Optional[Keyword]
    opens: bool
    closes: bool
    text: str
    # the line also holds the statement that closes its block
    single_line: bool = False

    @property
    def name(self):
        return self.keyword.text if self.keyword else None


class Classifier:
    """Decides whether a line opens a block, closes one, both or neither."""

    def __init__(self, lexer=None, ignore_case=False, return_closes_block=False):
        self._lexer = lexer if lexer is not None else PickLineLexer()
        self._flags = re.IGNORECASE if ignore_case else 0
        self._table = [
            (keyword, self._keyword_pattern(keyword.text))
            for keyword in keyword_table(return_closes_block)
        ]
        self._continuation = re.compile(
            r"(?:^|\W)(?:%s)\s*;?$" % "|".join(CONTINUATION_KEYWORDS), self._flags
        )
        self._closers = {}
        for keyword, _ in self._table:
            if keyword.closer and keyword.closer not in self._closers:
                word = re.escape(keyword.closer)
                self._closers[keyword.closer] = (
                    re.compile(r"^%s(?=\s|$|\()" % word, self._flags),
                    re.compile(r"(?:^|\s)%s$" % word, self._flags),
                )

    def _keyword_pattern(self, text):
        words = r"\s+".join(re.escape(word) for word in text.split())
        return re.compile(r"^%s(?=\s|$|\()" % words, self._flags)

    @property
    def lexer(self):
        return self._lexer

    def code_text(self, text: str) -> str:
        """Line text with label, trailing comment and string contents removed."""
        return self._lexer.code_text(strip_label(text))

    def match_keyword(self, code: str) -> Optional[Keyword]:
        """First table entry the stripped line starts with."""
        for keyword, pattern in self._table:
            if pattern.match(code):
                return keyword
        return None

    def get_token(self, text: str) -> Token:
        if is_directive(text):
            return Token(None, False, False, text.strip())

        code = self.code_text(text)
        keyword = self.match_keyword(code)
        if keyword is None:
            return Token(None, False, False, code)

        single_line = self._is_single_line(keyword, code)
        opens = keyword.opens_block and not single_line
        if opens and keyword.inline_only:
            opens = bool(self._continuation.search(code))
        if opens and keyword.text == CASE.text:
            opens = not self._is_case_one_liner(code)

        return Token(keyword, opens, keyword.closes_block, code, single_line)

    def is_block_start(self, text: str):
        """Return the opening keyword of the line, or False."""
        token = self.get_token(text)
        return token.keyword if token.opens else False

    def is_block_end(self, text: str):
        """
        Return the closing keyword of the line, or False.

        A CASE line is reported too: it ends the previous branch when
        one is open, which only the formatter can tell.
        """
        token = self.get_token(text)
        if token.closes or token.name == CASE.text:
            return token.keyword
        return False

    def _is_single_line(self, keyword, code):
        if not keyword.closer:
            return False
        statements = [part.strip() for part in code.split(";") if part.strip()]
        if not statements:
            return False
        starts, ends = self._closers[keyword.closer]
        last = statements[-1]
        if len(statements) > 1 and starts.match(last):
            return True
        return bool(ends.search(last))

    @staticmethod
    def _is_case_one_liner(code):
        body = code[:-1] if code.endswith(";") else code
        return ";" in body
