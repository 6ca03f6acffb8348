# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing
from contextlib import aclosing

import msgspec
import pytest
import trio
from autoshift.commontypes import CAPS_LOCKED, LOWERCASED, NUMERIC, UPPERCASED, AutocapitalizationMode, KeyboardType
from autoshift.context import KeyboardContext
from autoshift.keystreams import (
    ChangeAutocapitalization,
    DeleteBackward,
    InsertText,
    KeyboardTypeUpdate,
    OnlyChanges,
    SwitchKeyboardType,
    TextInputEvent,
    TrackKeyboardType,
    make_typestream,
    pump_all,
)
from autoshift.resolver import KeyboardTypeResolver
from trio.lowlevel import checkpoint

T = typing.TypeVar("T")


async def make_async_source(
    items: collections.abc.Sequence[T],
):
    for item in items:
        await checkpoint()
        yield item


def typed(text: str):
    return [InsertText(ch) for ch in text]


@pytest.mark.trio
async def test_track_keyboard_type_reports_every_event():
    context = KeyboardContext(keyboard_type=UPPERCASED)
    async with (
        aclosing(make_async_source(typed("Hi"))) as keysource,
        pump_all(keysource, TrackKeyboardType(context, KeyboardTypeResolver())) as resultsource,
    ):
        results = [update async for update in resultsource]
    assert results == [
        KeyboardTypeUpdate(previous=UPPERCASED, current=LOWERCASED, trigger=InsertText("H"), text_before_cursor="H"),
        KeyboardTypeUpdate(previous=LOWERCASED, current=LOWERCASED, trigger=InsertText("i"), text_before_cursor="Hi"),
    ]


@pytest.mark.trio
async def test_only_changes():
    updates = [
        KeyboardTypeUpdate(previous=LOWERCASED, current=LOWERCASED, trigger=InsertText("a")),
        KeyboardTypeUpdate(previous=LOWERCASED, current=UPPERCASED, trigger=InsertText(" ")),
        KeyboardTypeUpdate(previous=UPPERCASED, current=UPPERCASED, trigger=DeleteBackward()),
    ]
    async with (
        aclosing(make_async_source(updates)) as source,
        pump_all(source, OnlyChanges()) as resultsource,
    ):
        results = [update async for update in resultsource]
    assert results == [updates[1]]


@pytest.mark.trio
async def test_sentences():
    context = KeyboardContext(keyboard_type=UPPERCASED, autocapitalization_mode=AutocapitalizationMode.SENTENCES)
    async with (
        aclosing(make_async_source(typed("Hi. there"))) as keysource,
        make_typestream(keysource, context) as typestream,
    ):
        results = [(update.text_before_cursor, update.current) async for update in typestream]
    assert results == [
        ("H", LOWERCASED),
        ("Hi. ", UPPERCASED),
        ("Hi. t", LOWERCASED),
    ]
    assert context.keyboard_type == LOWERCASED
    assert context.text_before_cursor == "Hi. there"


@pytest.mark.trio
async def test_numbers_then_space_return_to_letters():
    context = KeyboardContext(keyboard_type=LOWERCASED, autocapitalization_mode=AutocapitalizationMode.SENTENCES, text_before_cursor="I have ")
    events = [SwitchKeyboardType(NUMERIC), *typed("12"), InsertText(" ")]
    async with (
        aclosing(make_async_source(events)) as keysource,
        make_typestream(keysource, context) as typestream,
    ):
        results = [update async for update in typestream]
    assert results == [
        KeyboardTypeUpdate(previous=LOWERCASED, current=NUMERIC, trigger=SwitchKeyboardType(NUMERIC), text_before_cursor="I have "),
        KeyboardTypeUpdate(previous=NUMERIC, current=LOWERCASED, trigger=InsertText(" "), text_before_cursor="I have 12 "),
    ]


@pytest.mark.trio
async def test_double_space_keeps_numbers():
    context = KeyboardContext(keyboard_type=NUMERIC, text_before_cursor="12")
    async with (
        aclosing(make_async_source([InsertText("  ")])) as keysource,
        make_typestream(keysource, context) as typestream,
    ):
        results = [update async for update in typestream]
    assert results == []
    assert context.keyboard_type == NUMERIC


@pytest.mark.trio
async def test_caps_lock_survives_typing():
    context = KeyboardContext(keyboard_type=LOWERCASED, autocapitalization_mode=AutocapitalizationMode.SENTENCES, text_before_cursor="a")
    events = [SwitchKeyboardType(CAPS_LOCKED), *typed("BC. D")]
    async with (
        aclosing(make_async_source(events)) as keysource,
        make_typestream(keysource, context) as typestream,
    ):
        results = [update.current async for update in typestream]
    assert results == [CAPS_LOCKED]
    assert context.keyboard_type == CAPS_LOCKED


@pytest.mark.trio
async def test_delete_and_autocapitalization_changes():
    context = KeyboardContext(keyboard_type=LOWERCASED, autocapitalization_mode=AutocapitalizationMode.SENTENCES, text_before_cursor="Done. x")
    events = [
        DeleteBackward(),
        ChangeAutocapitalization(AutocapitalizationMode.NONE),
        ChangeAutocapitalization(AutocapitalizationMode.ALL_CHARACTERS),
        ChangeAutocapitalization(None),
        InsertText("y"),
    ]
    async with (
        aclosing(make_async_source(events)) as keysource,
        make_typestream(keysource, context) as typestream,
    ):
        results = [(update.trigger, update.current) async for update in typestream]
    assert results == [
        (DeleteBackward(), UPPERCASED),
        (ChangeAutocapitalization(AutocapitalizationMode.NONE), LOWERCASED),
        (ChangeAutocapitalization(AutocapitalizationMode.ALL_CHARACTERS), UPPERCASED),
    ]
    assert context.keyboard_type == UPPERCASED
    assert context.text_before_cursor == "Done. y"


@pytest.mark.trio
async def test_memory_channel_source():
    context = KeyboardContext(keyboard_type=LOWERCASED)
    send_channel, receive_channel = trio.open_memory_channel(0)
    results = []
    async with trio.open_nursery() as nursery:

        async def feed():
            async with send_channel:
                for event in typed("Ok. "):
                    await send_channel.send(event)

        nursery.start_soon(feed)
        async with make_typestream(receive_channel, context) as typestream:
            async for update in typestream:
                results.append(update.current)
    assert results == [UPPERCASED]


def test_switch_event_decoding_rejects_mismatched_keyboard_type():
    decoded = msgspec.json.decode(
        b'{"type": "SwitchKeyboardType", "keyboard_type": {"kind": "custom", "name": "phone"}}',
        type=TextInputEvent,
    )
    assert decoded == SwitchKeyboardType(KeyboardType.custom("phone"))
    with pytest.raises(msgspec.ValidationError):
        msgspec.json.decode(b'{"type": "SwitchKeyboardType", "keyboard_type": {"kind": "alphabetic"}}', type=TextInputEvent)
