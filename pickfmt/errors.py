"""Errors raised while formatting a Pick BASIC file."""


class FormatError(ValueError):
    """A structural problem that aborts the whole format pass."""

    def __init__(self, line_number, message):
        super().__init__(message)
        self.line_number = line_number


class NestingError(FormatError):
    """More block closers than openers."""

    def __init__(self, line_number):
        super().__init__(
            line_number, f"Format: nest less than zero on line {line_number}"
        )


class UnbalancedCaseError(FormatError):
    """CASE or END CASE without an enclosing BEGIN CASE."""

    def __init__(self, line_number, keyword="CASE"):
        super().__init__(
            line_number,
            f"Format: {keyword} without BEGIN CASE on line {line_number}",
        )
        self.keyword = keyword
