from pickfmt.main import (
    FormatOptions,
    FormatResult,
    PickFormatter,
    TextEdit,
    format_text,
)
from pickfmt.errors import FormatError, NestingError, UnbalancedCaseError

__all__ = [
    "FormatError",
    "FormatOptions",
    "FormatResult",
    "NestingError",
    "PickFormatter",
    "TextEdit",
    "UnbalancedCaseError",
    "format_text",
]
