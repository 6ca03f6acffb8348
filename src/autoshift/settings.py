import dataclasses
import json
import pathlib
import typing

import cattrs

from .commontypes import AutocapitalizationMode, KeyboardType, SettingsError, parse_keyboard_type
from .context import KeyboardContext
from .locales import KeyboardLocale

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(KeyboardType, str)
settings_converter.register_structure_hook(KeyboardType, lambda v, _: parse_keyboard_type(v))
settings_converter.register_unstructure_hook(KeyboardLocale, str)
settings_converter.register_structure_hook(KeyboardLocale, lambda v, _: KeyboardLocale(v))
settings_converter.register_unstructure_hook(AutocapitalizationMode, lambda m: m.value)
settings_converter.register_structure_hook(AutocapitalizationMode, lambda v, _: AutocapitalizationMode.parse(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    locale: KeyboardLocale
    # None means the host has no autocapitalization support at all
    autocapitalization_mode: typing.Optional[AutocapitalizationMode]
    initial_keyboard_type: KeyboardType

    def make_context(self) -> KeyboardContext:
        return KeyboardContext(
            keyboard_type=self.initial_keyboard_type,
            autocapitalization_mode=self.autocapitalization_mode,
            locale=self.locale,
        )

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as f:
            json.dump(raw, f, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        try:
            with src.open() as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsError(f"Could not read settings from {src}: {exc}") from exc
        if not isinstance(raw, dict):
            raise SettingsError(f"Settings in {src} must be a JSON object")
        raw["_path"] = src
        try:
            return settings_converter.structure(raw, cls)
        except (cattrs.BaseValidationError, ValueError, KeyError) as exc:
            raise SettingsError(f"Invalid settings in {src}: {exc}") from exc

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "locale": "en-US",
                "autocapitalization_mode": "sentences",
                "initial_keyboard_type": "alphabetic(uppercased)",
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
