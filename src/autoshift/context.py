# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import attr
import msgspec

from . import textutil
from .commontypes import LOWERCASED, AutocapitalizationMode, KeyboardType
from .locales import KeyboardLocale

if typing.TYPE_CHECKING:
    from .resolver import KeyboardTypeResolver, Resolution

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = KeyboardLocale("en")


class InputContext(msgspec.Struct, frozen=True, kw_only=True):
    """A snapshot of everything the resolver looks at.

    The two cursor predicates may be supplied by the host; when left as None they are
    derived from text_before_cursor. autocapitalization_mode is None when the host
    cannot report one at all, which is not the same as AutocapitalizationMode.NONE.
    """

    keyboard_type: KeyboardType
    autocapitalization_mode: typing.Optional[AutocapitalizationMode] = None
    text_before_cursor: typing.Optional[str] = None
    cursor_at_new_sentence: typing.Optional[bool] = None
    cursor_at_new_word: typing.Optional[bool] = None
    locale: KeyboardLocale = msgspec.field(default_factory=lambda: DEFAULT_LOCALE)

    @property
    def is_cursor_at_new_sentence(self) -> bool:
        if self.cursor_at_new_sentence is not None:
            return self.cursor_at_new_sentence
        return textutil.is_cursor_at_new_sentence_with_trailing_whitespace(self.text_before_cursor)

    @property
    def is_cursor_at_new_word(self) -> bool:
        if self.cursor_at_new_word is not None:
            return self.cursor_at_new_word
        return textutil.is_cursor_at_new_word(self.text_before_cursor)

    def with_keyboard_type(self, keyboard_type: KeyboardType):
        return msgspec.structs.replace(self, keyboard_type=keyboard_type)


@attr.define(kw_only=True)
class KeyboardContext:
    """Host-side state: owns the current keyboard type and the text before the cursor."""

    keyboard_type: KeyboardType = attr.field(default=LOWERCASED)
    autocapitalization_mode: typing.Optional[AutocapitalizationMode] = attr.field(default=AutocapitalizationMode.SENTENCES)
    text_before_cursor: typing.Optional[str] = attr.field(default="")
    locale: KeyboardLocale = attr.field(default=DEFAULT_LOCALE)

    def snapshot(self) -> InputContext:
        return InputContext(
            keyboard_type=self.keyboard_type,
            autocapitalization_mode=self.autocapitalization_mode,
            text_before_cursor=self.text_before_cursor,
            locale=self.locale,
        )

    def apply(self, resolution: Resolution) -> KeyboardType:
        if resolution.persist_type is not None:
            logger.debug("keyboard type reassigned from %s to %s", self.keyboard_type, resolution.persist_type)
            self.keyboard_type = resolution.persist_type
        return resolution.keyboard_type

    def preferred_keyboard_type(self, resolver: KeyboardTypeResolver) -> KeyboardType:
        return self.apply(resolver.evaluate(self.snapshot()))

    def sync_keyboard_type(self, resolver: KeyboardTypeResolver) -> KeyboardType:
        self.keyboard_type = self.preferred_keyboard_type(resolver)
        return self.keyboard_type

    def insert_text(self, text: str):
        self.text_before_cursor = (self.text_before_cursor or "") + text

    def delete_backward(self, count: int = 1):
        if not self.text_before_cursor or count <= 0:
            return
        self.text_before_cursor = self.text_before_cursor[:-count]
