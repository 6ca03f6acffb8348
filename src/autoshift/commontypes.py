# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import re
import typing

import msgspec


class AutoshiftError(Exception):
    pass


class KeyboardTypeParseError(AutoshiftError, ValueError):
    pass


class AutocapitalizationModeError(AutoshiftError, ValueError):
    pass


class LocaleError(AutoshiftError, ValueError):
    pass


class SettingsError(AutoshiftError):
    pass


class KeyboardCase(enum.Enum):
    LOWERCASED = "lowercased"
    UPPERCASED = "uppercased"
    CAPS_LOCKED = "capsLocked"


class KeyboardKind(enum.Enum):
    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"
    SYMBOLIC = "symbolic"
    EMOJI = "emoji"
    CUSTOM = "custom"


class AutocapitalizationMode(enum.Enum):
    NONE = "none"
    ALL_CHARACTERS = "allCharacters"
    SENTENCES = "sentences"
    WORDS = "words"

    @classmethod
    def parse(cls, value: str) -> AutocapitalizationMode:
        for mode in cls:
            if value == mode.value or value.upper() == mode.name:
                return mode
        raise AutocapitalizationModeError(f"Unexpected autocapitalization mode {value!r}")


class KeyboardType(msgspec.Struct, frozen=True):
    """The kind of keyboard being shown. Only alphabetic keyboards carry a case; only custom keyboards carry a name."""

    kind: KeyboardKind
    case: typing.Optional[KeyboardCase] = None
    name: typing.Optional[str] = None

    def __post_init__(self):
        if self.is_alphabetic != (self.case is not None):
            raise KeyboardTypeParseError(f"Alphabetic keyboards need a case and no others take one (got {self.kind.value}, case {self.case})")
        if (self.kind is KeyboardKind.CUSTOM) != bool(self.name):
            raise KeyboardTypeParseError(f"Custom keyboards need a name and no others take one (got {self.kind.value}, name {self.name!r})")

    @classmethod
    def alphabetic(cls, case: KeyboardCase = KeyboardCase.LOWERCASED):
        return cls(kind=KeyboardKind.ALPHABETIC, case=case)

    @classmethod
    def numeric(cls):
        return cls(kind=KeyboardKind.NUMERIC)

    @classmethod
    def symbolic(cls):
        return cls(kind=KeyboardKind.SYMBOLIC)

    @classmethod
    def emoji(cls):
        return cls(kind=KeyboardKind.EMOJI)

    @classmethod
    def custom(cls, name: str):
        return cls(kind=KeyboardKind.CUSTOM, name=name)

    @property
    def is_alphabetic(self):
        return self.kind is KeyboardKind.ALPHABETIC

    def is_alphabetic_case(self, case: KeyboardCase):
        return self.is_alphabetic and self.case is case

    def __str__(self):
        match self.kind:
            case KeyboardKind.ALPHABETIC:
                return f"alphabetic({self.case.value})"
            case KeyboardKind.CUSTOM:
                return f"custom({self.name})"
            case _:
                return self.kind.value


_KEYBOARD_TYPE_FORM = re.compile(r"^(?P<kind>[a-z]+)(?:\((?P<arg>[^()]*)\))?$")


def parse_keyboard_type(value: str) -> KeyboardType:
    "Parse the string form produced by str(KeyboardType), e.g. 'alphabetic(uppercased)' or 'custom(phone)'."
    found = _KEYBOARD_TYPE_FORM.match(value.strip())
    if found is None:
        raise KeyboardTypeParseError(f"Unexpected keyboard type {value!r}")
    try:
        kind = KeyboardKind(found["kind"])
    except ValueError:
        raise KeyboardTypeParseError(f"Unknown keyboard kind {found['kind']!r}") from None
    arg = found["arg"]
    match kind:
        case KeyboardKind.ALPHABETIC:
            if arg is None or arg == "":
                return KeyboardType.alphabetic()
            try:
                return KeyboardType.alphabetic(KeyboardCase(arg))
            except ValueError:
                raise KeyboardTypeParseError(f"Unknown keyboard case {arg!r}") from None
        case KeyboardKind.CUSTOM:
            if not arg:
                raise KeyboardTypeParseError("Custom keyboard types need a name")
            return KeyboardType.custom(arg)
        case _:
            if arg is not None:
                raise KeyboardTypeParseError(f"{kind.value} keyboards take no argument")
            return KeyboardType(kind=kind)


LOWERCASED = KeyboardType.alphabetic(KeyboardCase.LOWERCASED)
UPPERCASED = KeyboardType.alphabetic(KeyboardCase.UPPERCASED)
CAPS_LOCKED = KeyboardType.alphabetic(KeyboardCase.CAPS_LOCKED)
NUMERIC = KeyboardType.numeric()
SYMBOLIC = KeyboardType.symbolic()
