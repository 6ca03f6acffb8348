# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Cursor-adjacency predicates computed from the text before the insertion point.

Hosts that can report these themselves should do so; these are the fallbacks.
An unknown (None) document counts as the start of a sentence and of a word.
"""
import typing

SENTENCE_DELIMITERS = frozenset(".!?¡¿。？！؟۔")

# Apostrophes and hyphens are left out so that "don't" and "well-known" stay one word.
WORD_DELIMITERS = SENTENCE_DELIMITERS | frozenset(",;:()[]{}<>\"“”«»/\\|…—–")


def is_cursor_at_new_sentence(before: typing.Optional[str]) -> bool:
    if not before:
        return True
    trimmed = before.rstrip()
    return not trimmed or trimmed[-1] in SENTENCE_DELIMITERS


def is_cursor_at_new_sentence_with_trailing_whitespace(before: typing.Optional[str]) -> bool:
    if not before:
        return True
    if before.endswith("\n"):
        return True
    return before[-1].isspace() and is_cursor_at_new_sentence(before)


def is_cursor_at_new_word(before: typing.Optional[str]) -> bool:
    if not before:
        return True
    last = before[-1]
    return last.isspace() or last in WORD_DELIMITERS


def ends_with_single_space(before: typing.Optional[str]) -> bool:
    # a double space is the end-of-sentence convention, so it does not count
    if before is None:
        return False
    return before.endswith(" ") and not before.endswith("  ")
