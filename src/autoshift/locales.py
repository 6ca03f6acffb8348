import re
import typing

import msgspec

from .commontypes import LocaleError

RTL_SCRIPTS = frozenset({"arab", "hebr", "thaa", "syrc", "nkoo", "adlm", "rohg", "mand", "samr"})

RTL_LANGUAGES = frozenset(
    {
        "ar",
        "arc",
        "ckb",
        "dv",
        "fa",
        "he",
        "iw",
        "ks",
        "lrc",
        "mzn",
        "ps",
        "sd",
        "ug",
        "ur",
        "yi",
    }
)

_SUBTAG_SEPARATORS = re.compile(r"[-_]")


class KeyboardLocale(msgspec.Struct, frozen=True):
    identifier: str

    def __post_init__(self):
        language, _ = self._split()
        if not language.isalpha():
            raise LocaleError(f"Unexpected locale identifier {self.identifier!r}")

    def _split(self) -> tuple[str, typing.Optional[str]]:
        # POSIX identifiers may carry an encoding or modifier, e.g. "he_IL.UTF-8@euro"
        base = self.identifier.split(".", 1)[0].split("@", 1)[0]
        subtags = [s for s in _SUBTAG_SEPARATORS.split(base) if s]
        if not subtags:
            return "", None
        language = subtags[0].lower()
        script = None
        if len(subtags) > 1 and len(subtags[1]) == 4 and subtags[1].isalpha():
            script = subtags[1].lower()
        return language, script

    @property
    def language_code(self) -> str:
        return self._split()[0]

    @property
    def script_code(self) -> typing.Optional[str]:
        return self._split()[1]

    @property
    def is_right_to_left(self) -> bool:
        language, script = self._split()
        if script is not None:
            return script in RTL_SCRIPTS
        return language in RTL_LANGUAGES

    def __str__(self):
        return self.identifier
