"""
Sequence and Repetition Detection
==================================

Pure, non-raising predicates that find "obvious" runs inside a password
candidate:

- Monotonic runs: a window of digits or ASCII letters whose adjacent
  code points all differ by +1 ("1234", "abcd") or all by -1 ("4321").
- Keyboard runs: slices of the three letter rows, forwards or backwards
  ("qwer", "lkjh", "mnbv").
- Repeated runs: the same character several times in a row ("aaaa").

All detectors use a window of four characters by default; shorter runs
are tolerated.

References:
    - NIST SP 800-63B (2017), Section 5.1.1.2 -- "repetitive or
      sequential characters (e.g. 'aaaaaa', '1234abcd')".
    - Weir, M. et al. (2010). Testing Metrics for Password Creation
      Policies by Attacking Large Sets of Revealed Passwords. CCS.
"""

from __future__ import annotations

import re
import string
from functools import lru_cache
from typing import Optional

DEFAULT_WINDOW = 4

KEYBOARD_ROWS: tuple[str, ...] = (
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_lowercase)


# ===================================================================== #
#  Monotonic runs
# ===================================================================== #


def _is_monotonic(chunk: str) -> bool:
    if not (set(chunk) <= _DIGITS or set(chunk) <= _LETTERS):
        return False
    deltas = {ord(b) - ord(a) for a, b in zip(chunk, chunk[1:])}
    return deltas == {1} or deltas == {-1}


def find_monotonic_run(
    candidate: str, window: int = DEFAULT_WINDOW
) -> Optional[str]:
    """Return the first ascending/descending numeric or alphabetic run.

    Letters are compared case-insensitively, so "AbCd" is a run.

    Args:
        candidate: Password candidate.
        window: Run length that counts as a sequence.

    Returns:
        The matching slice of the lower-cased candidate, or ``None``.
    """
    lowered = candidate.lower()
    for start in range(len(lowered) - window + 1):
        chunk = lowered[start : start + window]
        if _is_monotonic(chunk):
            return chunk
    return None


# ===================================================================== #
#  Keyboard runs
# ===================================================================== #


@lru_cache(maxsize=8)
def keyboard_runs(window: int = DEFAULT_WINDOW) -> frozenset[str]:
    """All *window*-sized slices of the keyboard rows and their reverses."""
    runs: set[str] = set()
    for row in KEYBOARD_ROWS:
        for line in (row, row[::-1]):
            for start in range(len(line) - window + 1):
                runs.add(line[start : start + window])
    return frozenset(runs)


def find_keyboard_run(
    candidate: str, window: int = DEFAULT_WINDOW
) -> Optional[str]:
    """Return the leftmost keyboard-adjacent run of *window* characters."""
    runs = keyboard_runs(window)
    lowered = candidate.lower()
    for start in range(len(lowered) - window + 1):
        chunk = lowered[start : start + window]
        if chunk in runs:
            return chunk
    return None


def find_sequence(candidate: str, window: int = DEFAULT_WINDOW) -> Optional[str]:
    """Return the first monotonic or keyboard run, monotonic runs first."""
    return find_monotonic_run(candidate, window) or find_keyboard_run(
        candidate, window
    )


def has_sequence(candidate: str, window: int = DEFAULT_WINDOW) -> bool:
    return find_sequence(candidate, window) is not None


# ===================================================================== #
#  Repeated characters
# ===================================================================== #


@lru_cache(maxsize=8)
def _repeat_pattern(window: int) -> re.Pattern[str]:
    return re.compile(r"(.)\1{%d,}" % (window - 1), re.DOTALL)


def find_repeated_run(
    candidate: str, window: int = DEFAULT_WINDOW
) -> Optional[str]:
    """Return the first run of *window* or more identical characters."""
    match = _repeat_pattern(window).search(candidate)
    return match.group() if match else None


def has_repeated_run(candidate: str, window: int = DEFAULT_WINDOW) -> bool:
    return find_repeated_run(candidate, window) is not None
