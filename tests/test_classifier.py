"""
Tests for keyword classification of single lines.
"""

import pytest
from pickfmt.classifier import Classifier
from pickfmt.keywords import KEYWORDS


@pytest.fixture(scope="module")
def classifier():
    return Classifier()


# (line, matched keyword, opens, closes)
CLASSIFIED_LINES = [
    ("FOR I = 1 TO 10", "FOR", True, False),
    ("NEXT I", "NEXT", False, True),
    ("LOOP", "LOOP", True, False),
    ("UNTIL X > 5 DO", "UNTIL", True, True),
    ("WHILE READNEXT ID DO", "WHILE", True, True),
    ("UNTIL X > 5 REPEAT", "UNTIL", False, True),
    ("LOOP X += 1 UNTIL X > 5 REPEAT", "LOOP", False, False),
    ("FOR I = 1 TO 3; PRINT I; NEXT I", "FOR", False, False),
    ("REPEAT", "REPEAT", False, True),
    ("IF X THEN", "IF", True, False),
    ("IF X THEN PRINT X", "IF", False, False),
    ('IF X THEN PRINT "ELSE"', "IF", False, False),
    ("IF X THEN ;* ELSE PRINT", "IF", True, False),
    ("IF X THEN;", "IF", True, False),
    ("READ REC FROM F, ID ELSE", "READ", True, False),
    ("READ REC FROM F, ID ELSE STOP", "READ", False, False),
    ("READU REC FROM F, ID LOCKED", "READU", True, False),
    ("READVU X FROM F, ID, 1 THEN", "READVU", True, False),
    ("GET X", "GET", False, False),
    ("GET X THEN", "GET", True, False),
    ("THEN", "THEN", True, False),
    ("ELSE", "ELSE", True, True),
    ("END ELSE", "END ELSE", True, True),
    ("END   ELSE", "END ELSE", True, True),
    ("END ELSE STOP", "END ELSE", False, True),
    ("END THEN", "END THEN", True, True),
    ("END", "END", False, True),
    ("END ;* of program", "END", False, True),
    ("BEGIN CASE", "BEGIN CASE", True, False),
    ("END CASE", "END CASE", False, True),
    ("CASE X = 1", "CASE", True, False),
    ("CASE X = 1;", "CASE", True, False),
    ("CASE X = 1; PRINT 1", "CASE", False, False),
    ('CASE X = ";"', "CASE", True, False),
    ("RETURN", "RETURN", False, False),
    ("MAIN: FOR I = 1 TO 2", "FOR", True, False),
    ("10 NEXT I", "NEXT", False, True),
    ("ENDX = 1", None, False, False),
    ("FORMAT = 1", None, False, False),
    ("PRINT 'IF X THEN'", None, False, False),
    ("* END OF PROGRAM", None, False, False),
    ("!END", None, False, False),
    ("   !IF X THEN", None, False, False),
]


class TestKeywordTable:
    def test_longer_spellings_come_first(self):
        names = [keyword.text for keyword in KEYWORDS]
        for i, name in enumerate(names):
            for later in names[i + 1 :]:
                assert not later.startswith(name + " "), f"{later} is shadowed by {name}"

    def test_table_is_immutable(self):
        with pytest.raises(AttributeError):
            KEYWORDS[0].opens_block = False


@pytest.mark.parametrize(
    "line, name, opens, closes",
    CLASSIFIED_LINES,
    ids=[entry[0] for entry in CLASSIFIED_LINES],
)
def test_get_token(classifier, line, name, opens, closes):
    token = classifier.get_token(line)
    assert token.name == name
    assert token.opens == opens
    assert token.closes == closes


class TestClassifier:
    def test_one_line_loop_is_marked(self, classifier):
        assert classifier.get_token("UNTIL X REPEAT").single_line
        assert not classifier.get_token("UNTIL X DO").single_line

    def test_token_keeps_stripped_text(self, classifier):
        token = classifier.get_token('  LBL: IF X = "A" THEN ;* note')
        assert token.text == 'IF X = "" THEN'

    def test_is_block_start(self, classifier):
        assert classifier.is_block_start("GET X") is False
        assert classifier.is_block_start("GET X THEN").text == "GET"
        assert classifier.is_block_start("NEXT I") is False

    def test_is_block_end(self, classifier):
        assert classifier.is_block_end("NEXT I").text == "NEXT"
        assert classifier.is_block_end("CASE 1").text == "CASE"
        assert classifier.is_block_end("PRINT X") is False
        assert classifier.is_block_end("!NEXT") is False

    def test_classification_does_not_change_table(self, classifier):
        before = list(KEYWORDS)
        classifier.get_token("READ X FROM F, ID ELSE")
        classifier.get_token("UNTIL X REPEAT")
        assert list(KEYWORDS) == before

    def test_case_sensitive_by_default(self, classifier):
        assert classifier.get_token("for i = 1 to 3").keyword is None

    def test_ignore_case(self):
        classifier = Classifier(ignore_case=True)
        token = classifier.get_token("if x then")
        assert token.name == "IF"
        assert token.opens

    def test_return_closes_block(self):
        classifier = Classifier(return_closes_block=True)
        token = classifier.get_token("RETURN")
        assert token.name == "RETURN"
        assert token.closes
