# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Decide which keyboard type should be shown next.

Precedence, first match wins:

1. caps lock is kept as it is;
2. on an alphabetic keyboard, the host's autocapitalization mode picks the case;
3. on a numeric or symbolic keyboard, a single trailing space returns to letters
   (the keyboard type is reassigned to lowercased, then rule 2 is applied to it);
4. otherwise the current type is kept.
"""
from __future__ import annotations

import logging
import typing

import msgspec

from . import textutil
from .commontypes import (
    LOWERCASED,
    UPPERCASED,
    AutocapitalizationMode,
    KeyboardCase,
    KeyboardKind,
    KeyboardType,
)
from .context import InputContext

logger = logging.getLogger(__name__)


class Resolution(msgspec.Struct, frozen=True):
    keyboard_type: KeyboardType
    # set when the current keyboard type itself must be replaced before using keyboard_type
    persist_type: typing.Optional[KeyboardType] = None


def preferred_autocapitalized_keyboard_type(context: InputContext) -> typing.Optional[KeyboardType]:
    mode = context.autocapitalization_mode
    if mode is None or not context.keyboard_type.is_alphabetic:
        return None
    if context.locale.is_right_to_left:
        return LOWERCASED
    match mode:
        case AutocapitalizationMode.ALL_CHARACTERS:
            return UPPERCASED
        case AutocapitalizationMode.SENTENCES:
            return UPPERCASED if context.is_cursor_at_new_sentence else LOWERCASED
        case AutocapitalizationMode.WORDS:
            return UPPERCASED if context.is_cursor_at_new_word else LOWERCASED
        case _:
            return LOWERCASED


def returns_to_letters_after_space(context: InputContext) -> bool:
    if context.keyboard_type.kind not in (KeyboardKind.NUMERIC, KeyboardKind.SYMBOLIC):
        return False
    return textutil.ends_with_single_space(context.text_before_cursor)


class KeyboardTypeResolver:
    def evaluate(self, context: InputContext) -> Resolution:
        current = context.keyboard_type
        if current.is_alphabetic_case(KeyboardCase.CAPS_LOCKED):
            return Resolution(keyboard_type=current)

        preferred = preferred_autocapitalized_keyboard_type(context)
        if preferred is not None:
            logger.debug("autocapitalization (%s) picked %s over %s", context.autocapitalization_mode, preferred, current)
            return Resolution(keyboard_type=preferred)

        if returns_to_letters_after_space(context):
            switched = context.with_keyboard_type(LOWERCASED)
            preferred = preferred_autocapitalized_keyboard_type(switched)
            if preferred is None:
                preferred = switched.keyboard_type
            logger.debug("space after %s; returning to letters as %s", current, preferred)
            return Resolution(keyboard_type=preferred, persist_type=switched.keyboard_type)

        return Resolution(keyboard_type=current)

    def resolve(self, context: InputContext) -> KeyboardType:
        return self.evaluate(context).keyboard_type
