from __future__ import annotations

import html
from dataclasses import dataclass, replace
from enum import IntEnum


class Preset(IntEnum):
    DO_NOTHING = 0
    # "--" for em dashes; no en dash support
    EM_DASH = 1
    # "---" for em dashes; "--" for en dashes
    LONG_EM_DASH_SHORT_EN = 2
    # "--" for em dashes; "---" for en dashes
    SHORT_EM_DASH_LONG_EN = 3
    # LONG_EM_DASH_SHORT_EN plus international characters
    INTL = 4
    # Reverse glyphs back to ASCII only.
    STUPEFY = -1


DEFAULT_PRESET = Preset.INTL


class BacktickMode(IntEnum):
    OFF = 0
    DOUBLE = 1
    DOUBLE_AND_SINGLE = 2


class DashMode(IntEnum):
    OFF = 0
    EM = 1
    OLD_SCHOOL = 2
    INVERTED = 3


DEFAULT_TAGS_TO_SKIP = "pre|code|kbd|script|style|math"
# Pipe-separated element names; anything else would be regex syntax.
TAGS_TO_SKIP_PATTERN = r"^[-A-Za-z0-9:]+(\|[-A-Za-z0-9:]+)*$"

GLYPH_FIELDS = (
    "smart_doublequote_open",
    "smart_doublequote_close",
    "smart_singlequote_open",
    "smart_singlequote_close",
    "backtick_doublequote_open",
    "backtick_doublequote_close",
    "backtick_singlequote_open",
    "backtick_singlequote_close",
    "em_dash",
    "en_dash",
    "ellipsis",
)


@dataclass(frozen=True)
class TypographyConfig:
    # Disables every pass; transform() returns its input.
    do_nothing: bool = False

    quotes: bool = False
    backticks: BacktickMode = BacktickMode.OFF
    dashes: DashMode = DashMode.OFF
    ellipses: bool = False
    intl: bool = False
    stupefy: bool = False
    # Turn "&quot;" back into '"' so it gets educated too.
    convert_quot: bool = False

    # Smart quote glyphs.
    smart_doublequote_open: str = "&#8220;"
    smart_doublequote_close: str = "&#8221;"
    smart_singlequote_open: str = "&#8216;"
    smart_singlequote_close: str = "&#8217;"  # also the apostrophe

    # ``Backtick quotes''
    backtick_doublequote_open: str = "&#8220;"
    backtick_doublequote_close: str = "&#8221;"
    backtick_singlequote_open: str = "&#8216;"
    backtick_singlequote_close: str = "&#8217;"

    em_dash: str = "&#8212;"
    en_dash: str = "&#8211;"
    ellipsis: str = "&#8230;"

    # Regex alternation of elements whose content is left alone.
    tags_to_skip: str = DEFAULT_TAGS_TO_SKIP

    @classmethod
    def from_preset(cls, preset: Preset | int, **overrides: object) -> TypographyConfig:
        preset = Preset(preset)
        if preset == Preset.DO_NOTHING:
            opts: dict[str, object] = {"do_nothing": True}
        elif preset == Preset.STUPEFY:
            opts = {"stupefy": True}
        else:
            dashes = {
                Preset.EM_DASH: DashMode.EM,
                Preset.LONG_EM_DASH_SHORT_EN: DashMode.OLD_SCHOOL,
                Preset.SHORT_EM_DASH_LONG_EN: DashMode.INVERTED,
                Preset.INTL: DashMode.OLD_SCHOOL,
            }[preset]
            opts = {
                "quotes": True,
                "backticks": BacktickMode.DOUBLE,
                "dashes": dashes,
                "ellipses": True,
                "intl": preset == Preset.INTL,
            }
        opts.update(overrides)
        return cls(**opts)  # type: ignore[arg-type]

    @classmethod
    def from_options(cls, letters: str, **overrides: object) -> TypographyConfig:
        """Build a config from compact option letters.

        q quotes, b ``double'' backticks, B ``double'' and `single' backticks,
        d "--" em dashes, D old school dashes, i inverted old school dashes,
        e ellipses, w convert &quot; entities. Anything else is ignored.
        """

        opts: dict[str, object] = {}
        for c in letters:
            if c == "q":
                opts["quotes"] = True
            elif c == "b":
                opts["backticks"] = BacktickMode.DOUBLE
            elif c == "B":
                opts["backticks"] = BacktickMode.DOUBLE_AND_SINGLE
            elif c == "d":
                opts["dashes"] = DashMode.EM
            elif c == "D":
                opts["dashes"] = DashMode.OLD_SCHOOL
            elif c == "i":
                opts["dashes"] = DashMode.INVERTED
            elif c == "e":
                opts["ellipses"] = True
            elif c == "w":
                opts["convert_quot"] = True
        opts.update(overrides)
        return cls(**opts)  # type: ignore[arg-type]

    @classmethod
    def from_attr(cls, attr: Preset | int | str = DEFAULT_PRESET, **overrides: object) -> TypographyConfig:
        """Accept either a preset (enum, int or numeric string) or option letters."""

        preset = preset_from_value(attr)
        if preset is not None:
            return cls.from_preset(preset, **overrides)
        return cls.from_options(str(attr), **overrides)

    def with_literal_glyphs(self) -> TypographyConfig:
        """Return a copy whose glyph strings are entity-decoded characters."""

        return replace(self, **{name: html.unescape(getattr(self, name)) for name in GLYPH_FIELDS})


def preset_from_value(value: object) -> Preset | None:
    if isinstance(value, Preset):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        raw = value
    else:
        s = str(value).strip()
        try:
            raw = int(s)
        except ValueError:
            return None
    try:
        return Preset(raw)
    except ValueError:
        return None


def preset_from_name(name: str) -> Preset:
    """Resolve a preset given by name ("intl", "EM_DASH") or by number ("4")."""

    key = str(name or "").strip()
    preset = preset_from_value(key)
    if preset is not None:
        return preset
    try:
        return Preset[key.upper().replace("-", "_")]
    except KeyError:
        raise ValueError(f"unknown preset: {name!r}") from None
