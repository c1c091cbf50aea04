"""
words.py

Handles loading and validating the word lists.
No numpy here, just clean text handling.
"""

from pathlib import Path
import string


WORD_LENGTH = 5
ALPHABET = frozenset(string.ascii_lowercase)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DICTIONARY_PATH = DATA_DIR / "words.txt"
VALID_PATH = DATA_DIR / "valid.txt"


class EmptyDictionaryError(ValueError):
    """Raised when there is no dictionary to search."""


def is_word(token: str) -> bool:
    return len(token) == WORD_LENGTH and all(ch in ALPHABET for ch in token)


def parse_word(token: str) -> str:
    """Validate one word, raising ValueError if it is not 5 lowercase letters."""
    if not is_word(token):
        raise ValueError(
            f"expected {WORD_LENGTH} lowercase letters, got {token!r}"
        )
    return token


def parse_words(text: str) -> list[str]:
    """Parse newline-separated words, skipping blank lines."""
    words = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        token = line.strip()
        if not token:
            continue
        try:
            words.append(parse_word(token))
        except ValueError as exc:
            raise ValueError(f"line {line_no}: {exc}") from exc
    return words


def load_word_list(path) -> list[str]:
    """Load a newline-separated word list into a Python list."""
    with open(path, "r", encoding="ascii") as f:
        return parse_words(f.read())


def load_words(dictionary_path=DICTIONARY_PATH, valid_path=VALID_PATH):
    """
    Returns:
        dictionary: every word the solver may suggest as a guess
        valid: possible answers (defaults to the dictionary when empty)
    """
    dictionary = load_word_list(dictionary_path)
    if not dictionary:
        raise EmptyDictionaryError(f"no words found in {dictionary_path}")

    # A missing answer list behaves like an empty one.
    valid = load_word_list(valid_path) if Path(valid_path).exists() else []
    if not valid:
        valid = list(dictionary)
    return dictionary, valid
