"""
Keyword table for Pick BASIC block structure.

Matching walks KEYWORDS in order and the first entry wins, so every
multi-word spelling sits before its one-word prefix.
"""

from typing import NamedTuple, Optional


class Keyword(NamedTuple):
    text: str
    opens_block: bool = False
    closes_block: bool = False
    # opens only when the line ends with a continuation keyword
    inline_only: bool = False
    # statement that ends this block when it is written on one line
    closer: Optional[str] = None


BEGIN_CASE = Keyword("BEGIN CASE", opens_block=True)
END_CASE = Keyword("END CASE", closes_block=True)
CASE = Keyword("CASE", opens_block=True)
END = Keyword("END", closes_block=True)
RETURN = Keyword("RETURN")
RETURN_CLOSING = RETURN._replace(closes_block=True)

# statements that may carry THEN / ELSE / LOCKED clauses or blocks
INLINE_STATEMENTS = (
    "IF",
    "GET",
    "INPUT",
    "LOCATE",
    "LOCK",
    "MATREAD",
    "MATREADL",
    "MATREADU",
    "MATWRITE",
    "MATWRITEU",
    "OPEN",
    "OPENSEQ",
    "PROCREAD",
    "PROCWRITE",
    "READ",
    "READBLK",
    "READL",
    "READNEXT",
    "READSEQ",
    "READT",
    "READU",
    "READV",
    "READVL",
    "READVU",
    "REWIND",
    "SEEK",
    "WEOF",
    "WRITEBLK",
    "WRITESEQ",
    "WRITET",
)

KEYWORDS = (
    BEGIN_CASE,
    END_CASE,
    Keyword("END ELSE", opens_block=True, closes_block=True, inline_only=True),
    Keyword("END THEN", opens_block=True, closes_block=True, inline_only=True),
    Keyword("ELSE", opens_block=True, closes_block=True, inline_only=True),
    Keyword("THEN", opens_block=True, inline_only=True),
    CASE,
    Keyword("FOR", opens_block=True, closer="NEXT"),
    Keyword("LOOP", opens_block=True, closer="REPEAT"),
    Keyword("UNTIL", opens_block=True, closes_block=True, closer="REPEAT"),
    Keyword("WHILE", opens_block=True, closes_block=True, closer="REPEAT"),
) + tuple(
    Keyword(text, opens_block=True, inline_only=True) for text in INLINE_STATEMENTS
) + (
    END,
    Keyword("NEXT", closes_block=True),
    Keyword("REPEAT", closes_block=True),
    RETURN,
)

CONTINUATION_KEYWORDS = ("THEN", "ELSE", "DO", "LOCKED")


def keyword_table(return_closes_block=False):
    """Return the keyword table, with RETURN as a block closer if asked."""
    if not return_closes_block:
        return KEYWORDS
    return tuple(RETURN_CLOSING if kw is RETURN else kw for kw in KEYWORDS)
