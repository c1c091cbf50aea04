"""
assist.py

Command line front end for the Wordle entropy assistant.

Subcommands:
calc: read a state string and rank the best next guesses.
merge: read "<state>;<feedback>" and print the merged state string.
run: interactive loop that keeps the state between guesses.

State and feedback strings are read from stdin unless -state is given.

Feedback format: five space-separated tokens, {x} gray, [x] yellow, x green.
Example: "{c} [r] a {n} e"
"""

import argparse
import sys

from wordle_assist.codec import (
    ParseError,
    deserialize_state,
    merge_text,
    parse_feedback,
    serialize_state,
)
from wordle_assist.entropy import Win
from wordle_assist.scoring import score_guesses
from wordle_assist.state import KnowledgeState
from wordle_assist.words import (
    DICTIONARY_PATH,
    VALID_PATH,
    load_words,
)


TOP_N = 25
FEW_REMAINING = 10

MENU = """
(a) Add info
(v) View state
(c) Calc
(r) Reset
(q) Quit"""


def run_calc(state, dictionary, valid, top=TOP_N, workers=None, progress=True):
    """Print the best guesses for `state`, or the winning word if it is certain."""
    remaining = state.survivors(valid)
    print(f"{len(remaining)} remaining words to search")

    result = score_guesses(
        state, dictionary, valid, workers=workers, progress=progress
    )
    if isinstance(result, Win):
        print(f"Winning word found: {result.word}")
        return result

    print(f"\nDisplaying top {top} options")
    for rank, (word, bits) in enumerate(result.scores[:top], start=1):
        print(f"{rank}. {word}: {bits:.4f} bits")

    if len(remaining) <= FEW_REMAINING:
        print(f"\n{len(remaining)} possible answers remaining")
        for rank, word in enumerate(remaining, start=1):
            print(f"{rank}. {word}")

    return result


def run_merge(text):
    print(merge_text(text.strip()))


def run_session(dictionary, valid, top=TOP_N, workers=None, progress=True, read=input):
    """Interactive menu. Returns the final state when the user quits."""
    state = KnowledgeState.empty()
    while True:
        print(MENU)
        try:
            choice = read("Enter input: ").strip()
        except EOFError:
            return state

        if choice == "a":
            try:
                row = parse_feedback(read("Enter new info: "))
            except EOFError:
                return state
            except ParseError as exc:
                print(f"Invalid feedback, {exc}")
                continue
            state = state.merge(row)
        elif choice == "v":
            print(f"Current state: {serialize_state(state)}")
        elif choice == "c":
            run_calc(state, dictionary, valid, top=top, workers=workers, progress=progress)
        elif choice == "r":
            state = KnowledgeState.empty()
            print("State reset!")
        elif choice == "q":
            return state
        else:
            print(f"Unknown option: {choice!r}")


def _read_input(args):
    if args.state is not None:
        return args.state
    return sys.stdin.read()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Wordle solver assistant ranking guesses by expected information."
    )
    parser.add_argument(
        "-dictionary",
        default=str(DICTIONARY_PATH),
        help="Newline-separated list of guess words (default: data/words.txt).",
    )
    parser.add_argument(
        "-valid",
        default=str(VALID_PATH),
        help="Newline-separated list of possible answers; empty or missing "
        "means the dictionary (default: data/valid.txt).",
    )
    parser.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for scoring (default: CPU count).",
    )
    parser.add_argument(
        "-top",
        type=int,
        default=TOP_N,
        help=f"Number of ranked guesses to display (default: {TOP_N}).",
    )
    parser.add_argument(
        "-progress",
        choices=("bar", "off"),
        default="bar",
        help="Per-worker progress bars on stderr (default: bar).",
    )
    parser.add_argument(
        "-state",
        type=str,
        default=None,
        help="State (calc) or '<state>;<feedback>' (merge) instead of stdin.",
    )
    parser.add_argument(
        "command",
        choices=("calc", "merge", "run"),
        help="calc: rank guesses, merge: fold feedback into a state, run: interactive.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    progress = args.progress == "bar"

    try:
        if args.command == "merge":
            run_merge(_read_input(args))
            return

        dictionary, valid = load_words(args.dictionary, args.valid)

        if args.command == "calc":
            state = deserialize_state(_read_input(args))
            run_calc(
                state,
                dictionary,
                valid,
                top=args.top,
                workers=args.workers,
                progress=progress,
            )
            return

        run_session(
            dictionary, valid, top=args.top, workers=args.workers, progress=progress
        )
    except ValueError as exc:
        # ParseError, EmptyDictionaryError and malformed word lists.
        raise SystemExit(str(exc)) from exc
    except FileNotFoundError as exc:
        raise SystemExit(f"word list not found: {exc.filename}") from exc


if __name__ == "__main__":
    main()
