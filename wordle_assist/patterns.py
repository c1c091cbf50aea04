"""
patterns.py

Feedback rows and the simulated feedback used to partition answers.

Each tile of a row is one of:

    0 = absent  (gray)
    1 = present (yellow)
    2 = correct (green)

A whole row can be encoded as an integer 0..242 in base-3, first tile most
significant, which lets numpy bucket thousands of simulated outcomes at once.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .words import WORD_LENGTH


POWERS = 3 ** np.arange(WORD_LENGTH - 1, -1, -1)


class Mark(IntEnum):
    ABSENT = 0
    PRESENT = 1
    CORRECT = 2


@dataclass(frozen=True)
class FeedbackRow:
    """One guessed word together with the mark shown for each tile."""

    word: str
    marks: tuple

    def __post_init__(self):
        if len(self.word) != WORD_LENGTH or len(self.marks) != WORD_LENGTH:
            raise ValueError(
                f"a feedback row needs {WORD_LENGTH} letters and marks"
            )

    def is_win(self) -> bool:
        return all(mark is Mark.CORRECT for mark in self.marks)

    def matches(self, target: str) -> bool:
        """
        Could `target` have produced this row for the guessed word?

        Absent is read as "no instance of the letter at all" and present as
        "not here, but somewhere else", the exact inverse of compute_feedback.
        """
        for i, mark in enumerate(self.marks):
            ch = self.word[i]
            if mark is Mark.CORRECT:
                if target[i] != ch:
                    return False
            elif mark is Mark.ABSENT:
                if ch in target:
                    return False
            elif target[i] == ch:
                return False
            elif not any(tc == ch for j, tc in enumerate(target) if j != i):
                return False
        return True

    @property
    def code(self) -> int:
        code = 0
        for mark in self.marks:
            code = code * 3 + int(mark)
        return code

    @classmethod
    def from_code(cls, word: str, code: int) -> "FeedbackRow":
        marks = []
        for _ in range(WORD_LENGTH):
            code, digit = divmod(int(code), 3)
            marks.append(Mark(digit))
        return cls(word, tuple(reversed(marks)))


def compute_feedback(guess: str, target: str) -> FeedbackRow:
    """
    Simulate the row a guess would receive if `target` were the answer.

    This is the simplified single-pass scorer: a letter is present whenever
    it occurs anywhere in the target, with no duplicate-letter accounting.
    The merge and matching rules in state.py assume exactly this behavior.
    """
    marks = []
    for i, ch in enumerate(guess):
        if ch == target[i]:
            marks.append(Mark.CORRECT)
        elif ch in target:
            marks.append(Mark.PRESENT)
        else:
            marks.append(Mark.ABSENT)
    return FeedbackRow(guess, tuple(marks))


def encode_pattern(guess: str, target: str) -> int:
    """Encode compute_feedback(guess, target) as a base-3 integer."""
    return compute_feedback(guess, target).code


def word_array(words) -> np.ndarray:
    """Stack words into an (n_words, WORD_LENGTH) uint8 array of ASCII codes."""
    words = list(words)
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    buffer = "".join(words).encode("ascii")
    return np.frombuffer(buffer, dtype=np.uint8).reshape(len(words), WORD_LENGTH)


def _letters(word: str) -> np.ndarray:
    return np.frombuffer(word.encode("ascii"), dtype=np.uint8)


def pattern_codes(guess: str, targets: np.ndarray) -> np.ndarray:
    """Vectorized encode_pattern of one guess against every row of `targets`."""
    g = _letters(guess)
    correct = targets == g
    present = np.stack(
        [(targets == g[i]).any(axis=1) for i in range(WORD_LENGTH)], axis=1
    )
    marks = np.where(correct, 2, np.where(present, 1, 0))
    return marks @ POWERS


def row_mask(row: FeedbackRow, targets: np.ndarray) -> np.ndarray:
    """Vectorized FeedbackRow.matches over every row of `targets`."""
    mask = np.ones(len(targets), dtype=bool)
    for i, (ch, mark) in enumerate(zip(_letters(row.word), row.marks)):
        if mark is Mark.CORRECT:
            mask &= targets[:, i] == ch
        elif mark is Mark.ABSENT:
            mask &= ~(targets == ch).any(axis=1)
        else:
            mask &= targets[:, i] != ch
            others = np.delete(targets, i, axis=1)
            mask &= (others == ch).any(axis=1)
    return mask
