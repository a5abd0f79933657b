# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Reusable Hypothesis strategies for literal parsing properties."""

from __future__ import annotations

from hypothesis import strategies as st

from typeconf.numeric import INT64_MAX, INT64_MIN


def mixed_case(word: str) -> st.SearchStrategy[str]:
    """Return a strategy re-casing each letter of ``word`` independently."""
    flips = st.lists(st.booleans(), min_size=len(word), max_size=len(word))
    return flips.map(
        lambda upper: "".join(char.upper() if flip else char for char, flip in zip(word, upper, strict=True)),
    )


def boolean_literals(words: tuple[str, ...]) -> st.SearchStrategy[str]:
    """Return a strategy emitting any of ``words`` in arbitrary letter case.

    Args:
        words: Accepted boolean literals in lower case.

    Returns:
        Hypothesis strategy producing re-cased literals, optionally padded
        with surrounding whitespace.
    """
    padding = st.sampled_from(["", " ", "\t", "  "])
    return st.tuples(padding, st.sampled_from(words).flatmap(mixed_case), padding).map("".join)


def integer_literals(
    min_value: int = 0,
    max_value: int = INT64_MAX,
) -> st.SearchStrategy[tuple[int, str]]:
    """Strategy pairing an integer with one of its accepted literal spellings.

    Args:
        min_value: Smallest integer emitted; clamped to the signed 64-bit range.
        max_value: Largest integer emitted; clamped to the signed 64-bit range.

    Returns:
        Hypothesis strategy producing ``(number, literal)`` tuples where the
        literal is decimal or carries a ``0x``/``0o``/``0b`` prefix.
    """
    numbers = st.integers(min_value=max(min_value, INT64_MIN), max_value=min(max_value, INT64_MAX))
    spellings = st.sampled_from(["{:d}", "0x{:x}", "0X{:X}", "0o{:o}", "0O{:o}", "0b{:b}", "0B{:b}"])
    return st.tuples(numbers, spellings).map(lambda pair: (pair[0], pair[1].format(pair[0])))


def list_items(min_size: int = 1, max_size: int = 8) -> st.SearchStrategy[list[str]]:
    """Return a strategy that yields lists of separator-free, non-blank tokens."""
    token = st.from_regex(r"[a-z0-9_.]+", fullmatch=True)
    return st.lists(token, min_size=min_size, max_size=max_size)
