"""
entropy.py

Expected information of a guess over the answers that are still possible.
"""

from dataclasses import dataclass, field

import numpy as np
from tqdm import tqdm

from .patterns import FeedbackRow, pattern_codes, row_mask, word_array
from .words import parse_word


@dataclass(frozen=True)
class Win:
    """The guess is certain to be the only remaining answer."""

    word: str


@dataclass
class Ranking:
    """(word, bits) pairs, best first."""

    scores: list = field(default_factory=list)


def entropy_from_counts(counts):
    """Compute Shannon entropy from bucket counts."""
    total = counts.sum()
    probs = counts[counts > 0] / total
    return -np.sum(probs * np.log2(probs))


def expected_information(counts, remaining, total):
    """
    Expected bits for a guess.

    counts[k] is how many answers produced outcome k and remaining[k] how
    many answers are consistent with that outcome's row. The two agree
    whenever the row predicate inverts compute_feedback, and then this is
    plain Shannon entropy.
    """
    counts = np.asarray(counts, dtype=np.float64)
    remaining = np.asarray(remaining, dtype=np.float64)
    if counts.size == 0:
        return 0.0
    if np.array_equal(counts, remaining) and counts.sum() == total:
        return float(entropy_from_counts(counts))
    bits = -np.log2(remaining / total)
    return float(np.sum(bits * (counts / total)))


def score_guess(guess: str, targets: np.ndarray):
    """
    Score one guess against the surviving answers in `targets`.

    Returns a Win if the guess is the single remaining answer, else the
    expected information in bits.
    """
    total = len(targets)
    if total == 0:
        return 0.0

    codes, counts = np.unique(pattern_codes(guess, targets), return_counts=True)

    kept_counts = []
    kept_remaining = []
    for code, count in zip(codes, counts):
        row = FeedbackRow.from_code(guess, code)
        # targets already fit the state, so only the row needs checking.
        remaining = int(row_mask(row, targets).sum())
        if remaining == 0:
            continue
        if count == total and row.is_win():
            return Win(guess)
        kept_counts.append(count)
        kept_remaining.append(remaining)

    return expected_information(kept_counts, kept_remaining, total)


def sort_scores(scores):
    return sorted(scores, key=lambda item: item[1], reverse=True)


def score_shard(state, search, dictionary, progress=False, position=0):
    """Score every guess in `search`; stops early on a Win."""
    survivors = state.survivors(dictionary)
    if not survivors:
        return Ranking()

    targets = word_array(survivors)
    scores = []
    for guess in tqdm(
        search,
        desc=f"Shard {position + 1}",
        position=position,
        leave=False,
        disable=not progress,
    ):
        result = score_guess(parse_word(guess), targets)
        if isinstance(result, Win):
            return result
        scores.append((guess, result))

    return Ranking(sort_scores(scores))
