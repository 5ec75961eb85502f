from enum import Enum
from typing import List, NamedTuple, Optional

from pickfmt.classifier import Classifier, Token
from pickfmt.errors import FormatError, NestingError, UnbalancedCaseError
from pickfmt.keywords import BEGIN_CASE, CASE, END, END_CASE, RETURN
from pickfmt.pick_lark_lexer import PickLineLexer, get_label, is_directive


class FormatOptions(NamedTuple):
    margin: int = 5
    indent: int = 3
    ignore_case: bool = False
    return_closes_block: bool = False
    labels_in_margin: bool = True


class TextEdit(NamedTuple):
    """Replacement of characters ``start:end`` of a 0-based line."""

    line: int
    start: int
    end: int
    new_text: str


class FormatResult(NamedTuple):
    edits: List[TextEdit]
    text: Optional[str] = None
    error: Optional[FormatError] = None

    @property
    def ok(self):
        return self.error is None

    @property
    def changed(self):
        return bool(self.edits)


class Transition(Enum):
    """Depth change of one line, as (closes, opens)."""

    STAY = (False, False)
    CLOSE = (True, False)
    OPEN = (False, True)
    CLOSE_OPEN = (True, True)

    @property
    def closes(self):
        return self.value[0]

    @property
    def opens(self):
        return self.value[1]


class NestingState:
    """Nesting depth and open BEGIN CASE groups of one format pass.

    Each entry of ``case_stack`` is True while a CASE branch is open
    inside that BEGIN CASE.
    """

    def __init__(self):
        self.nest_level = 0
        self.case_stack = []

    @property
    def in_case_branch(self):
        return bool(self.case_stack) and self.case_stack[-1]

    def transition(self, token: Token) -> Transition:
        closes = token.closes
        if self.in_case_branch:
            if token.name == CASE.text:
                # the next CASE ends the branch before it
                closes = True
            elif token.name == RETURN.text:
                closes = False
        return Transition((closes, token.opens))

    def close(self, token: Token):
        self.nest_level -= 1
        if token.name == END_CASE.text and self.in_case_branch:
            self.nest_level -= 1

    def open(self):
        self.nest_level += 1

    def track_case(self, token: Token, line_number: int):
        if token.name == BEGIN_CASE.text:
            self.case_stack.append(False)
        elif token.name == CASE.text:
            if not self.case_stack:
                raise UnbalancedCaseError(line_number, CASE.text)
            self.case_stack[-1] = token.opens
        elif token.name == END_CASE.text:
            if not self.case_stack:
                raise UnbalancedCaseError(line_number, END_CASE.text)
            self.case_stack.pop()


class PickFormatter:
    """Re-indents Pick BASIC source from its block structure."""

    def __init__(self, options=None, lexer=None):
        self.options = options if options is not None else FormatOptions()
        self.classifier = Classifier(
            lexer=lexer if lexer is not None else PickLineLexer(),
            ignore_case=self.options.ignore_case,
            return_closes_block=self.options.return_closes_block,
        )

    def format_line(self, text: str, nest_level: int) -> str:
        """Render one non-blank line at the given depth."""
        if is_directive(text):
            return text.rstrip()

        text = text.strip()
        margin = self.options.margin
        indent = " " * (self.options.indent * nest_level)

        label = get_label(text)
        if label is None:
            return " " * margin + indent + text

        if not self.options.labels_in_margin:
            return text

        rest = text[len(label):].strip()
        if not rest:
            return label
        if len(label) < margin or indent:
            return label.ljust(margin) + indent + rest
        return label + " " + rest

    def format_lines(self, lines: List[str]) -> List[str]:
        """
        Re-indent a list of lines.

        Args:
            lines: Source lines without line endings

        Returns:
            The rendered lines, one per input line

        Raises:
            NestingError: a line closes more blocks than are open
            UnbalancedCaseError: CASE or END CASE outside BEGIN CASE
        """
        state = NestingState()
        last = _last_code_line(lines)
        result = []

        for i, line in enumerate(lines):
            if not line.strip():
                result.append("")
                continue

            line_number = i + 1
            token = self.classifier.get_token(line)
            step = state.transition(token)

            if step.closes:
                state.close(token)
            state.track_case(token, line_number)

            # RETURN is fine on level 0
            if token.name == RETURN.text and state.nest_level < 0:
                state.nest_level = 0

            # the END that ends the program is never indented
            if i == last and token.name == END.text:
                state.nest_level = 0

            if state.nest_level < 0:
                raise NestingError(line_number)

            result.append(self.format_line(line, state.nest_level))

            if step.opens:
                state.open()

        return result

    def format_file(self, text: str) -> str:
        """Return the whole document re-indented."""
        return _join_lines(self.format_lines(_split_lines(text)), _line_ending(text))

    def format_edits(self, text: str) -> FormatResult:
        """
        Re-indent a document as a list of per-line edits.

        Only lines whose text changes get an edit. When the pass aborts
        the result carries the error and no edits.
        """
        lines = _split_lines(text)
        try:
            formatted = self.format_lines(lines)
        except FormatError as e:
            return FormatResult(edits=[], text=None, error=e)

        edits = [
            TextEdit(i, 0, len(old), new)
            for i, (old, new) in enumerate(zip(lines, formatted))
            if old != new
        ]
        return FormatResult(edits=edits, text=_join_lines(formatted, _line_ending(text)))


def format_text(text, options=None):
    """Format Pick BASIC source with a fresh formatter."""
    return PickFormatter(options).format_file(text)


def _split_lines(text):
    return text.replace("\r\n", "\n").split("\n")


def _join_lines(lines, newline):
    # one output line per input line, so the text matches the edits
    return newline.join(lines)


def _line_ending(text):
    crlf = text.count("\r\n")
    if crlf and crlf * 2 >= text.count("\n"):
        return "\r\n"
    return "\n"


def _last_code_line(lines):
    for i in range(len(lines) - 1, -1, -1):
        if lines[i].strip():
            return i
    return -1
