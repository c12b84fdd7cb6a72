from __future__ import annotations

import re
from functools import lru_cache

from punct_educator.typography.config import BacktickMode, DashMode, TypographyConfig
from punct_educator.typography.intl import INTL_ENTITIES, INTL_TRANSLATION


def _replace_all(text: str, pairs: tuple[tuple[str, str], ...]) -> tuple[str, int]:
    """Apply literal replacements one after another, counting hits."""

    count = 0
    for old, new in pairs:
        n = text.count(old)
        if n:
            text = text.replace(old, new)
            count += n
    return text, count


_ESCAPES = (
    ("\\\\", "&#92;"),
    ('\\"', "&#34;"),
    ("\\'", "&#39;"),
    ("\\.", "&#46;"),
    ("\\-", "&#45;"),
    ("\\`", "&#96;"),
)


def process_escapes(text: str) -> tuple[str, int]:
    r"""Turn backslash escapes into numeric references.

    Escape  Value
    ------  -----
    \\      &#92;
    \"      &#34;
    \'      &#39;
    \.      &#46;
    \-      &#45;
    \`      &#96;

    Escaped characters are no longer seen by any later pass, which is how a
    writer forces a "dumb" quote, period or hyphen through.
    """

    return _replace_all(text, _ESCAPES)


def convert_quot_entities(text: str) -> tuple[str, int]:
    return _replace_all(text, (("&quot;", '"'),))


def educate_dashes(text: str, config: TypographyConfig) -> tuple[str, int]:
    """Replace "--" and "---" according to `config.dashes`.

    Three-hyphen runs are replaced first so that "---" is never read as
    "--" followed by a stray hyphen.
    """

    if config.dashes == DashMode.EM:
        return _replace_all(text, (("--", config.em_dash),))
    if config.dashes == DashMode.OLD_SCHOOL:
        return _replace_all(text, (("---", config.em_dash), ("--", config.en_dash)))
    if config.dashes == DashMode.INVERTED:
        return _replace_all(text, (("---", config.en_dash), ("--", config.em_dash)))
    return text, 0


def educate_ellipses(text: str, config: TypographyConfig) -> tuple[str, int]:
    return _replace_all(text, (("...", config.ellipsis), (". . .", config.ellipsis)))


def educate_backticks(text: str, config: TypographyConfig) -> tuple[str, int]:
    """``Backtick'' style double quotes."""

    return _replace_all(
        text,
        (("``", config.backtick_doublequote_open), ("''", config.backtick_doublequote_close)),
    )


def educate_single_backticks(text: str, config: TypographyConfig) -> tuple[str, int]:
    """`Backtick' style single quotes. Every remaining ' becomes a closing quote."""

    return _replace_all(
        text,
        (("`", config.backtick_singlequote_open), ("'", config.backtick_singlequote_close)),
    )


# POSIX [:punct:] minus '&', spelled out.
_PUNCT = r"""[!"#$%'()*+,\-./:;<=>?@\[\\\]^_`{|}~]"""

_leading_single_re = re.compile(r"^'(?=" + _PUNCT + r"\B)")
_leading_double_re = re.compile(r'^"(?=' + _PUNCT + r"\B)")

_double_single_re = re.compile(r"""(?:"')(?=\w)""")
_single_double_re = re.compile(r"""(?:'")(?=\w)""")

_decade_re = re.compile(r"'(?=\d{2}s)")

_OPENING_CONTEXT = (
    r"\s",
    "&nbsp;",
    "--",
    "&[mn]dash;",
    "&#821[12];",
    "&#x201[34];",
)

# Anything but whitespace, an opening bracket or a hyphen before a quote
# makes it a closing one.
_CLOSE_CLASS = r"[^ \t\r\n\[{(\-]"

# When nothing precedes the quote, it only closes if followed by whitespace,
# or (single quotes) by a possessive "s": <i>Custer</i>'s Last Stand.
_closing_single_re = re.compile("(" + _CLOSE_CLASS + r")?'(?(1)|(?=\s|s\b))", re.IGNORECASE)
_closing_double_re = re.compile("(" + _CLOSE_CLASS + r')?"(?(1)|(?=\s))')


@lru_cache(maxsize=64)
def _opening_re(quote: str, dash_glyphs: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = list(_OPENING_CONTEXT)
    alternatives += [re.escape(g) for g in dash_glyphs if g and g not in ("&#8211;", "&#8212;")]
    return re.compile("(" + "|".join(alternatives) + ")" + re.escape(quote) + r"(?=\w)")


def educate_quotes(text: str, config: TypographyConfig) -> tuple[str, int]:
    """Curl straight quotes using the characters around them.

    Example input:  "Isn't this fun?"
    Example output: &#8220;Isn&#8217;t this fun?&#8221;

    Rules run in order and each one only sees the quotes the previous ones
    left behind:

    - a quote at the very start followed by punctuation at a non-word-break
      is closing;
    - "' and '" before a word character open both quotes (nested quotes);
    - ' before two digits and an "s" is an apostrophe ('80s);
    - a quote after whitespace, &nbsp; or a dash and before a word character
      is opening;
    - a quote after any other non-space character is closing;
    - whatever is left is opening.
    """

    count = text.count("'") + text.count('"')
    if not count:
        return text, 0

    dq_open = config.smart_doublequote_open
    dq_close = config.smart_doublequote_close
    sq_open = config.smart_singlequote_open
    sq_close = config.smart_singlequote_close
    dash_glyphs = (config.em_dash, config.en_dash)

    text = _leading_single_re.sub(lambda _m: sq_close, text)
    text = _leading_double_re.sub(lambda _m: dq_close, text)

    text = _double_single_re.sub(lambda _m: dq_open + sq_open, text)
    text = _single_double_re.sub(lambda _m: sq_open + dq_open, text)

    text = _decade_re.sub(lambda _m: sq_close, text)

    text = _opening_re("'", dash_glyphs).sub(lambda m: m.group(1) + sq_open, text)
    text = _closing_single_re.sub(lambda m: (m.group(1) or "") + sq_close, text)
    text = text.replace("'", sq_open)

    text = _opening_re('"', dash_glyphs).sub(lambda m: m.group(1) + dq_open, text)
    text = _closing_double_re.sub(lambda m: (m.group(1) or "") + dq_close, text)
    text = text.replace('"', dq_open)

    return text, count


def educate_quote_token(quote: str, config: TypographyConfig, prev_last_char: str) -> str:
    """Curl a token that is nothing but one quote character.

    Such tokens show up between two tags, e.g. <p>"<em>Hi</em>"</p>. The
    last character of the previous text token decides the direction.
    """

    closing = bool(prev_last_char) and not prev_last_char.isspace()
    if quote == "'":
        return config.smart_singlequote_close if closing else config.smart_singlequote_open
    return config.smart_doublequote_close if closing else config.smart_doublequote_open


def educate_intl(text: str) -> tuple[str, int]:
    count = sum(1 for ch in text if ch in INTL_ENTITIES)
    if not count:
        return text, 0
    return text.translate(INTL_TRANSLATION), count


_STUPEFY = (
    # en dash, em dash
    ("&#8211;", "-"),
    ("&#8212;", "--"),
    ("\u2013", "-"),
    ("\u2014", "--"),
    # single quotes
    ("&#8216;", "'"),
    ("&#8217;", "'"),
    ("\u2018", "'"),
    ("\u2019", "'"),
    # double quotes
    ("&#8220;", '"'),
    ("&#8221;", '"'),
    ("\u201c", '"'),
    ("\u201d", '"'),
    # ellipsis
    ("&#8230;", "..."),
    ("\u2026", "..."),
)


def stupefy_entities(text: str) -> tuple[str, int]:
    """Translate typographic glyphs back to their ASCII counterparts.

    Example input:  &#8220;Hello &#8212; world.&#8221;
    Example output: "Hello -- world."
    """

    return _replace_all(text, _STUPEFY)


def educate(text: str, config: TypographyConfig, prev_last_char: str = "") -> tuple[str, dict[str, int]]:
    """Run every enabled pass over one text token.

    `prev_last_char` is the last character of the previous text token and
    only matters when the whole token is a single quote character.
    """

    stats: dict[str, int] = {}

    text, n = process_escapes(text)
    if n:
        stats["escapes"] = stats.get("escapes", 0) + n

    if config.convert_quot:
        text, n = convert_quot_entities(text)
        if n:
            stats["convert_quot"] = stats.get("convert_quot", 0) + n

    if config.dashes != DashMode.OFF:
        text, n = educate_dashes(text, config)
        if n:
            stats["dashes"] = stats.get("dashes", 0) + n

    if config.ellipses:
        text, n = educate_ellipses(text, config)
        if n:
            stats["ellipses"] = stats.get("ellipses", 0) + n

    # Backticks must run before quotes: '' has its own glyph.
    if config.backticks != BacktickMode.OFF:
        text, n = educate_backticks(text, config)
        if config.backticks == BacktickMode.DOUBLE_AND_SINGLE:
            text, n2 = educate_single_backticks(text, config)
            n += n2
        if n:
            stats["backticks"] = stats.get("backticks", 0) + n

    if config.quotes:
        if text in ("'", '"'):
            text = educate_quote_token(text, config, prev_last_char)
            n = 1
        else:
            text, n = educate_quotes(text, config)
        if n:
            stats["quotes"] = stats.get("quotes", 0) + n

    if config.intl:
        text, n = educate_intl(text)
        if n:
            stats["intl"] = stats.get("intl", 0) + n

    if config.stupefy:
        text, n = stupefy_entities(text)
        if n:
            stats["stupefy"] = stats.get("stupefy", 0) + n

    return text, stats
