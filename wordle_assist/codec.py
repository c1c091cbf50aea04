"""
codec.py

Single-line text encodings used to pass state between invocations.

State:    {n1 n2}[s1 s2](p1 p2 p3 p4 p5)
          nowhere letters, somewhere letters, then one descriptor per
          position: a bare letter when fixed, [a,b] for excluded letters.
Feedback: five space-separated tokens, {x} absent, [x] present and a bare
          x (or "(x)") correct.
Merge:    <state>;<feedback>
"""

from .patterns import FeedbackRow, Mark
from .state import Is, KnowledgeState, Not
from .words import ALPHABET, WORD_LENGTH


class ParseError(ValueError):
    """Malformed state or feedback text. `field` names the offending part."""

    def __init__(self, field, message):
        super().__init__(f"{field}: {message}")
        self.field = field


def _letter(token, field):
    if len(token) != 1 or token not in ALPHABET:
        raise ParseError(field, f"expected a single lowercase letter, got {token!r}")
    return token


def _letters(text, sep, field):
    if not text:
        return ()
    return tuple(_letter(token, field) for token in text.split(sep))


def _format_info(info):
    if isinstance(info, Is):
        return info.letter
    return "[" + ",".join(info.letters) + "]"


def serialize_state(state: KnowledgeState) -> str:
    nowhere = " ".join(state.nowhere)
    somewhere = " ".join(state.somewhere)
    chars = " ".join(_format_info(info) for info in state.chars)
    return f"{{{nowhere}}}[{somewhere}]({chars})"


def deserialize_state(text: str) -> KnowledgeState:
    """Parse a state string; the empty string is the empty state."""
    text = text.strip()
    if not text:
        return KnowledgeState.empty()

    if not text.startswith("{"):
        raise ParseError("nowhere", "state must start with '{'")
    nowhere, sep, rest = text[1:].partition("}[")
    if not sep:
        raise ParseError("nowhere", "no '}[' found")
    somewhere, sep, rest = rest.partition("](")
    if not sep:
        raise ParseError("somewhere", "no '](' found")
    if not rest.endswith(")"):
        raise ParseError("positions", "state must end with ')'")

    descriptors = rest[:-1].split(" ")
    if len(descriptors) != WORD_LENGTH:
        raise ParseError(
            "positions",
            f"expected {WORD_LENGTH} descriptors, got {len(descriptors)}",
        )

    chars = []
    for i, desc in enumerate(descriptors):
        field = f"position {i + 1}"
        if desc.startswith("["):
            if not desc.endswith("]"):
                raise ParseError(field, f"unterminated exclusion list {desc!r}")
            chars.append(Not(_letters(desc[1:-1], ",", field)))
        else:
            chars.append(Is(_letter(desc, field)))

    return KnowledgeState(
        chars=tuple(chars),
        nowhere=_letters(nowhere, " ", "nowhere"),
        somewhere=_letters(somewhere, " ", "somewhere"),
    )


_WRAPPERS = {"{}": Mark.ABSENT, "[]": Mark.PRESENT, "()": Mark.CORRECT}


def parse_feedback(text: str) -> FeedbackRow:
    tokens = text.split()
    if len(tokens) != WORD_LENGTH:
        raise ParseError(
            "feedback", f"expected {WORD_LENGTH} tokens, got {len(tokens)}"
        )

    letters = []
    marks = []
    for i, token in enumerate(tokens):
        field = f"feedback token {i + 1}"
        if len(token) == 1:
            letters.append(_letter(token, field))
            marks.append(Mark.CORRECT)
        elif len(token) == 3 and token[0] + token[2] in _WRAPPERS:
            letters.append(_letter(token[1], field))
            marks.append(_WRAPPERS[token[0] + token[2]])
        else:
            raise ParseError(field, f"unrecognized token {token!r}")

    return FeedbackRow("".join(letters), tuple(marks))


def format_feedback(row: FeedbackRow) -> str:
    tokens = []
    for ch, mark in zip(row.word, row.marks):
        if mark is Mark.ABSENT:
            tokens.append(f"{{{ch}}}")
        elif mark is Mark.PRESENT:
            tokens.append(f"[{ch}]")
        else:
            tokens.append(ch)
    return " ".join(tokens)


def merge_text(text: str) -> str:
    """Apply `<state>;<feedback>` and return the new state's text."""
    state_text, sep, row_text = text.partition(";")
    if not sep:
        raise ParseError("merge", "expected '<state>;<feedback>'")
    state = deserialize_state(state_text)
    row = parse_feedback(row_text)
    return serialize_state(state.merge(row))
