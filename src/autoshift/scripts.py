import argparse
import logging
import pathlib

import trio

from .commontypes import AutocapitalizationMode, parse_keyboard_type
from .context import InputContext
from .keystreams import InsertText, make_typestream
from .locales import KeyboardLocale
from .resolver import KeyboardTypeResolver
from .settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(root_level=logging.WARNING):
    handler = logging.StreamHandler()
    handler.setLevel(root_level)
    logging.basicConfig(handlers=[handler])
    logging.getLogger("autoshift").setLevel(root_level)


def autocapitalization_arg(value: str):
    if value == "unsupported":
        return None
    return AutocapitalizationMode.parse(value)


resolve_parser = argparse.ArgumentParser(prog="autoshift-resolve", description="Print the keyboard type that should be shown next.")
resolve_parser.add_argument("--type", dest="keyboard_type", type=parse_keyboard_type, required=True)
resolve_parser.add_argument(
    "--autocap",
    type=autocapitalization_arg,
    default=None,
    help="none, allCharacters, sentences, words, or unsupported (the default)",
)
resolve_parser.add_argument("--locale", type=KeyboardLocale, default=KeyboardLocale("en"))
resolve_parser.add_argument("--text", default=None, help="text before the cursor")
resolve_parser.add_argument("--new-sentence", action=argparse.BooleanOptionalAction, default=None)
resolve_parser.add_argument("--new-word", action=argparse.BooleanOptionalAction, default=None)
resolve_parser.add_argument("-v", "--verbose", action="store_true")


def resolve_cli(argv=None):
    args = resolve_parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    context = InputContext(
        keyboard_type=args.keyboard_type,
        autocapitalization_mode=args.autocap,
        text_before_cursor=args.text,
        cursor_at_new_sentence=args.new_sentence,
        cursor_at_new_word=args.new_word,
        locale=args.locale,
    )
    print(KeyboardTypeResolver().resolve(context))


replay_parser = argparse.ArgumentParser(prog="autoshift-replay", description="Type text one character at a time and print each keyboard type change.")
replay_parser.add_argument("settings", type=pathlib.Path)
replay_parser.add_argument("text")
replay_parser.add_argument("-v", "--verbose", action="store_true")


async def replay(settings: Settings, text: str, out=None):
    context = settings.make_context()
    print(f"start: {context.keyboard_type}", file=out)
    send_channel, receive_channel = trio.open_memory_channel(0)
    async with trio.open_nursery() as nursery:

        async def feed():
            async with send_channel:
                for ch in text:
                    await send_channel.send(InsertText(ch))

        nursery.start_soon(feed)
        async with make_typestream(receive_channel, context) as typestream:
            async for change in typestream:
                print(f"{change.text_before_cursor!r}: {change.previous} -> {change.current}", file=out)
    return context.keyboard_type


def replay_cli(argv=None):
    args = replay_parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    settings = Settings.load(args.settings)
    logger.debug("loaded settings from %s", args.settings)
    trio.run(replay, settings, args.text)
