"""
state.py

Accumulated knowledge about the answer, built up one feedback row at a time.

Each position is either fixed to one letter (Is) or excludes a set of
letters (Not). On top of that the state tracks letters known to be absent
from the whole word and letters known to appear at an unknown position.
Letter collections are tuples kept in insertion order, since that order is
visible in the serialized form.
"""

from dataclasses import dataclass, replace

from .patterns import FeedbackRow, Mark
from .words import WORD_LENGTH


@dataclass(frozen=True)
class Is:
    letter: str


@dataclass(frozen=True)
class Not:
    letters: tuple = ()


def _add(letters: tuple, letter: str) -> tuple:
    return letters if letter in letters else letters + (letter,)


def _remove(letters: tuple, letter: str) -> tuple:
    return tuple(ch for ch in letters if ch != letter)


@dataclass(frozen=True)
class KnowledgeState:
    chars: tuple = (Not(),) * WORD_LENGTH
    nowhere: tuple = ()
    somewhere: tuple = ()

    @classmethod
    def empty(cls) -> "KnowledgeState":
        return cls()

    def matches(self, word: str) -> bool:
        for info, ch in zip(self.chars, word):
            if isinstance(info, Is):
                if info.letter != ch:
                    return False
            elif ch in info.letters:
                return False
            if ch in self.nowhere:
                return False
        return all(ch in word for ch in self.somewhere)

    def merge(self, row: FeedbackRow) -> "KnowledgeState":
        """Return a new state with `row` folded in; self is left untouched."""
        chars = list(self.chars)
        nowhere = self.nowhere
        somewhere = self.somewhere

        for i, (ch, mark) in enumerate(zip(row.word, row.marks)):
            if mark is Mark.CORRECT:
                chars[i] = Is(ch)
                somewhere = _remove(somewhere, ch)
                nowhere = _remove(nowhere, ch)
            elif mark is Mark.PRESENT:
                if isinstance(chars[i], Not):
                    chars[i] = Not(_add(chars[i].letters, ch))
                somewhere = _add(somewhere, ch)
            else:
                pinned = ch in somewhere or any(
                    isinstance(info, Is) and info.letter == ch for info in chars
                )
                if not pinned:
                    nowhere = _add(nowhere, ch)
                elif isinstance(chars[i], Not):
                    # The letter is in the word, just not here.
                    chars[i] = Not(_add(chars[i].letters, ch))

        return replace(self, chars=tuple(chars), nowhere=nowhere, somewhere=somewhere)

    def survivors(self, words) -> list[str]:
        return [word for word in words if self.matches(word)]


def matches_both(state: KnowledgeState, row: FeedbackRow, word: str) -> bool:
    """Compound matcher: `word` fits the accumulated state and the single row."""
    return state.matches(word) and row.matches(word)
