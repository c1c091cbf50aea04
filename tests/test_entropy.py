import numpy as np
import pytest

from wordle_assist.codec import parse_feedback
from wordle_assist.entropy import (
    Ranking,
    Win,
    entropy_from_counts,
    expected_information,
    score_guess,
    score_shard,
)
from wordle_assist.patterns import word_array
from wordle_assist.state import KnowledgeState

DICTIONARY = ["apple", "apply", "ample"]

WORDS = [
    "crane", "react", "trace", "cater", "slate", "apple", "apply", "ample",
    "bough", "light", "might", "sight", "fight", "night", "tight", "there",
]


def test_apple_over_three_words():
    # apple splits the three into singletons.
    bits = score_guess("apple", word_array(DICTIONARY))
    assert bits == pytest.approx(np.log2(3))


def test_two_answers_split_apart_give_one_bit():
    assert score_guess("lzzzz", word_array(["hello", "lolly"])) == pytest.approx(1.0)


def test_singleton_survivor_is_a_win():
    state = KnowledgeState.empty().merge(parse_feedback("a p p l {e}"))
    assert state.survivors(DICTIONARY) == ["apply"]
    assert score_guess("apply", word_array(["apply"])) == Win("apply")

    result = score_shard(state, ["ample", "apply", "apple"], DICTIONARY)
    assert result == Win("apply")


def test_non_answer_guess_on_singleton_scores_zero():
    assert score_guess("ample", word_array(["apply"])) == 0.0


@pytest.mark.parametrize("guess", WORDS)
def test_entropy_bounds(guess):
    targets = word_array(WORDS)
    bits = score_guess(guess, targets)
    assert 0.0 <= bits <= np.log2(len(WORDS)) + 1e-9


def test_expected_information_matches_entropy_when_counts_agree():
    counts = np.array([4, 2, 1, 1])
    assert expected_information(counts, counts, 8) == pytest.approx(
        entropy_from_counts(counts)
    )
    assert expected_information([], [], 8) == 0.0


def test_no_survivors_gives_empty_ranking():
    state = KnowledgeState.empty().merge(parse_feedback("z z z z z"))
    assert score_guess("crane", word_array([])) == 0.0
    assert score_shard(state, WORDS, WORDS) == Ranking([])


def test_shard_ranking_is_sorted():
    state = KnowledgeState.empty().merge(parse_feedback("{b} {o} {u} {g} {h}"))
    result = score_shard(state, WORDS, WORDS)
    assert isinstance(result, Ranking)
    bits = [b for _, b in result.scores]
    assert bits == sorted(bits, reverse=True)
    assert {word for word, _ in result.scores} == set(WORDS)


def test_expected_information_with_disagreeing_counts():
    # one outcome seen once but consistent with two answers out of three
    assert expected_information([1], [2], 3) == pytest.approx(np.log2(3 / 2) / 3)


def test_shard_rejects_malformed_guess():
    with pytest.raises(ValueError, match="ab"):
        score_shard(KnowledgeState.empty(), ["crane", "ab"], WORDS)
