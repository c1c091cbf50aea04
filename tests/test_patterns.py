import numpy as np
import pytest

from wordle_assist.patterns import (
    FeedbackRow,
    Mark,
    compute_feedback,
    encode_pattern,
    pattern_codes,
    row_mask,
    word_array,
)

C, P, A = Mark.CORRECT, Mark.PRESENT, Mark.ABSENT

WORDS = [
    "crane", "react", "trace", "cater", "slate", "apple", "apply", "ample",
    "bough", "light", "might", "eerie", "there", "geese", "sassy",
]


def test_apple_against_apply():
    row = compute_feedback("apple", "apply")
    assert row == FeedbackRow("apple", (C, C, C, C, A))
    assert not row.is_win()


def test_present_letters_ignore_duplicate_counts():
    # Single-pass scoring: both misplaced e's are yellow, not just one.
    row = compute_feedback("eerie", "there")
    assert row.marks == (P, P, P, A, C)


def test_code_round_trip():
    row = compute_feedback("crane", "react")
    assert row.marks == (P, P, C, A, P)
    assert row.code == 127
    assert FeedbackRow.from_code("crane", 127) == row
    assert encode_pattern("crane", "react") == 127
    assert compute_feedback("crane", "crane").code == 242


def test_win_row():
    assert compute_feedback("slate", "slate").is_win()


def test_row_needs_five_marks():
    with pytest.raises(ValueError):
        FeedbackRow("crane", (C, C))


@pytest.mark.parametrize("guess", WORDS)
def test_simulated_row_matches_its_target(guess):
    for target in WORDS:
        assert compute_feedback(guess, target).matches(target)


def test_present_rejects_letter_at_same_position():
    row = FeedbackRow("ebbbb", (P, A, A, A, A))
    assert not row.matches("eezzz")
    assert row.matches("zezzz")
    assert not row.matches("ezzzz")
    assert not row.matches("zezzb")


def test_absent_rejects_letter_anywhere():
    row = FeedbackRow("xbbbb", (A, A, A, A, A))
    assert row.matches("zzzzz")
    assert not row.matches("zzzzx")


def test_word_array_shape():
    arr = word_array(["crane", "react"])
    assert arr.shape == (2, 5)
    assert bytes(arr[1]) == b"react"
    assert word_array([]).shape == (0, 5)


@pytest.mark.parametrize("guess", ["crane", "geese", "apple", "sassy"])
def test_vectorized_helpers_agree_with_scalar(guess):
    targets = word_array(WORDS)
    codes = pattern_codes(guess, targets)
    assert list(codes) == [encode_pattern(guess, t) for t in WORDS]

    for code in np.unique(codes):
        row = FeedbackRow.from_code(guess, code)
        mask = row_mask(row, targets)
        assert list(mask) == [row.matches(t) for t in WORDS]


def test_present_row_is_not_reproduced_by_same_position_letter():
    row = compute_feedback("lzzzz", "hello")
    assert row.marks == (P, A, A, A, A)
    assert row.matches("hello")
    assert not row.matches("lolly")

    mask = row_mask(row, word_array(["hello", "lolly"]))
    assert list(mask) == [True, False]


@pytest.mark.parametrize("guess", WORDS)
def test_rows_select_exactly_the_targets_that_produce_them(guess):
    targets = word_array(WORDS)
    codes, counts = np.unique(pattern_codes(guess, targets), return_counts=True)
    for code, count in zip(codes, counts):
        row = FeedbackRow.from_code(guess, code)
        assert int(row_mask(row, targets).sum()) == count
        assert [t for t in WORDS if row.matches(t)] == [
            t for t in WORDS if compute_feedback(guess, t) == row
        ]
