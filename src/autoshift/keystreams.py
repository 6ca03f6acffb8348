# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import logging
import typing
from contextlib import aclosing, asynccontextmanager
from typing import Any, AsyncIterable, cast

import msgspec
import trio

from .commontypes import AutocapitalizationMode, KeyboardType
from .context import KeyboardContext
from .resolver import KeyboardTypeResolver

logger = logging.getLogger(__name__)


class InsertText(msgspec.Struct, frozen=True, tag=True):
    text: str


class DeleteBackward(msgspec.Struct, frozen=True, tag=True):
    count: int = 1


class SwitchKeyboardType(msgspec.Struct, frozen=True, tag=True):
    keyboard_type: KeyboardType


class ChangeAutocapitalization(msgspec.Struct, frozen=True, tag=True):
    mode: typing.Optional[AutocapitalizationMode]


TextInputEvent = InsertText | DeleteBackward | SwitchKeyboardType | ChangeAutocapitalization


class KeyboardTypeUpdate(msgspec.Struct, frozen=True):
    previous: KeyboardType
    current: KeyboardType
    trigger: TextInputEvent
    text_before_cursor: typing.Optional[str] = None

    @property
    def changed(self):
        return self.previous != self.current


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: apply each event to the host context, then switch to the preferred keyboard type.
# No await between applying and resolving, so each update reflects exactly one event.
class TrackKeyboardType(Section):
    def __init__(self, context: KeyboardContext, resolver: KeyboardTypeResolver):
        self.context = context
        self.resolver = resolver

    def _apply(self, event: TextInputEvent):
        match event:
            case InsertText(text=text):
                self.context.insert_text(text)
            case DeleteBackward(count=count):
                self.context.delete_backward(count)
            case SwitchKeyboardType(keyboard_type=keyboard_type):
                self.context.keyboard_type = keyboard_type
            case ChangeAutocapitalization(mode=mode):
                self.context.autocapitalization_mode = mode

    async def pump(self, source: trio.MemoryReceiveChannel[TextInputEvent], sink: trio.MemorySendChannel[KeyboardTypeUpdate]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                previous = self.context.keyboard_type
                self._apply(event)
                # an explicit switch is shown as chosen; only later typing can move away from it
                if not isinstance(event, SwitchKeyboardType):
                    self.context.sync_keyboard_type(self.resolver)
                await sink.send(
                    KeyboardTypeUpdate(
                        previous=previous,
                        current=self.context.keyboard_type,
                        trigger=event,
                        text_before_cursor=self.context.text_before_cursor,
                    )
                )


# stage 2: drop updates that left the keyboard type alone
class OnlyChanges(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[KeyboardTypeUpdate], sink: trio.MemorySendChannel[KeyboardTypeUpdate]):
        async with aclosing(source), aclosing(sink):
            async for update in source:
                if update.changed:
                    logger.debug("keyboard type %s -> %s after %r", update.previous, update.current, update.trigger)
                    await sink.send(update)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_typestream(
    event_channel: trio.MemoryReceiveChannel[TextInputEvent],
    context: KeyboardContext,
    resolver: typing.Optional[KeyboardTypeResolver] = None,
):
    if resolver is None:
        resolver = KeyboardTypeResolver()
    sections = [
        TrackKeyboardType(context, resolver),
        OnlyChanges(),
    ]

    async with pump_all(event_channel, *sections) as typestream:
        yield cast(trio.MemoryReceiveChannel[KeyboardTypeUpdate], typestream)
