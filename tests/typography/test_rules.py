from __future__ import annotations

import pytest

from punct_educator.typography.config import BacktickMode, DashMode, Preset, TypographyConfig
from punct_educator.typography.rules import (
    convert_quot_entities,
    educate,
    educate_backticks,
    educate_dashes,
    educate_ellipses,
    educate_intl,
    educate_quote_token,
    educate_quotes,
    educate_single_backticks,
    process_escapes,
    stupefy_entities,
)

CFG = TypographyConfig()


def test_process_escapes_all_sequences():
    out, n = process_escapes(r'\\ \" \' \. \- \`')
    assert out == "&#92; &#34; &#39; &#46; &#45; &#96;"
    assert n == 6


def test_process_escapes_leaves_other_backslashes():
    out, n = process_escapes(r"C:\temp\n")
    assert out == r"C:\temp\n"
    assert n == 0


def test_convert_quot_entities():
    assert convert_quot_entities("&quot;hi&quot;") == ('"hi"', 2)


def test_educate_dashes_modes():
    em = TypographyConfig(dashes=DashMode.EM)
    old = TypographyConfig(dashes=DashMode.OLD_SCHOOL)
    inverted = TypographyConfig(dashes=DashMode.INVERTED)

    assert educate_dashes("foo -- bar", em) == ("foo &#8212; bar", 1)
    assert educate_dashes("a---b--c", old) == ("a&#8212;b&#8211;c", 2)
    assert educate_dashes("a---b--c", inverted) == ("a&#8211;b&#8212;c", 2)
    assert educate_dashes("a -- b", CFG) == ("a -- b", 0)


def test_old_school_triple_hyphen_is_one_em_dash():
    out, _ = educate_dashes("---", TypographyConfig(dashes=DashMode.OLD_SCHOOL))
    assert out == "&#8212;"


def test_educate_ellipses():
    assert educate_ellipses("Huh...?", CFG) == ("Huh&#8230;?", 1)
    assert educate_ellipses("Wait. . . what", CFG) == ("Wait&#8230; what", 1)
    assert educate_ellipses("One. Two.", CFG) == ("One. Two.", 0)


def test_educate_backticks():
    out, n = educate_backticks("``Isn't this fun?''", CFG)
    assert out == "&#8220;Isn't this fun?&#8221;"
    assert n == 2

    out, n = educate_single_backticks("`Isn't this fun?'", CFG)
    assert out == "&#8216;Isn&#8217;t this fun?&#8217;"
    assert n == 3


def test_backtick_glyphs_are_separate_from_smart_quote_glyphs():
    cfg = TypographyConfig(backtick_doublequote_open="<<", backtick_doublequote_close=">>")
    assert educate_backticks("``x''", cfg) == ("<<x>>", 2)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        # Basic pairs and apostrophes.
        ('"Isn\'t this fun?"', "&#8220;Isn&#8217;t this fun?&#8221;"),
        ("Isn't this \"fun\"?", "Isn&#8217;t this &#8220;fun&#8221;?"),
        ("'single'", "&#8216;single&#8217;"),
        # Nested quotes.
        (
            "He said, \"'Quoted' words in a larger quote.\"",
            "He said, &#8220;&#8216;Quoted&#8217; words in a larger quote.&#8221;",
        ),
        ("'\"Quoted\" inside'", "&#8216;&#8220;Quoted&#8221; inside&#8217;"),
        # Decade abbreviations.
        ("the '80s", "the &#8217;80s"),
        ("'90s music", "&#8217;90s music"),
        # Leading quote followed by punctuation at a non-word-break.
        ('"...', "&#8221;..."),
        # Possessive right after a tag boundary.
        ("'s Last Stand.", "&#8217;s Last Stand."),
        ("'S", "&#8217;S"),
        # Opening after whitespace-like context.
        ("&nbsp;'tis", "&nbsp;&#8216;tis"),
        ("foo --'bar'", "foo --&#8216;bar&#8217;"),
        ('&#8212;"Hi"', "&#8212;&#8220;Hi&#8221;"),
        ("&mdash;'x'", "&mdash;&#8216;x&#8217;"),
        ("&#x2013;\"x\"", "&#x2013;&#8220;x&#8221;"),
        # Brackets never close a quote.
        ("('foo')", "(&#8216;foo&#8217;)"),
        ('["foo"]', "[&#8220;foo&#8221;]"),
        # Foot and inch marks get curled; escapes are the way out.
        ("6'2\"", "6&#8217;2&#8221;"),
        # Leading single quote before punctuation closes.
        ("'. foo", "&#8217;. foo"),
        # Nothing captured before the quote, whitespace after it: closing.
        ("(' x", "(&#8217; x"),
        ('(" x', "(&#8221; x"),
        # '" not followed by a word character falls through to the later rules.
        ("x '\" y", "x &#8216;&#8221; y"),
    ],
)
def test_educate_quotes(text: str, expected: str):
    out, _ = educate_quotes(text, CFG)
    assert out == expected


def test_educate_quotes_leftovers_default_to_opening():
    # Quote preceded by a bracket and not followed by whitespace.
    out, _ = educate_quotes("(\"", CFG)
    assert out == "(&#8220;"
    out, _ = educate_quotes("['", CFG)
    assert out == "[&#8216;"


def test_educate_quotes_counts_and_noop():
    assert educate_quotes("no quotes here", CFG) == ("no quotes here", 0)
    _, n = educate_quotes("\"a\" 'b'", CFG)
    assert n == 4


def test_educate_quotes_uses_literal_dash_glyph_as_opening_context():
    cfg = TypographyConfig.from_preset(Preset.EM_DASH).with_literal_glyphs()
    out, _ = educate_quotes('yes—"no"', cfg)
    assert out == "yes—“no”"


def test_educate_quotes_glyphs_are_inserted_literally():
    cfg = TypographyConfig(smart_doublequote_open=r"\1", smart_doublequote_close=r"\g<0>")
    out, _ = educate_quotes('say "x"', cfg)
    assert out == r"say \1x\g<0>"


@pytest.mark.parametrize(
    ("quote", "prev", "expected"),
    [
        ("'", "", "&#8216;"),
        ("'", " ", "&#8216;"),
        ("'", "\n", "&#8216;"),
        ("'", "o", "&#8217;"),
        ('"', "", "&#8220;"),
        ('"', "\t", "&#8220;"),
        ('"', ".", "&#8221;"),
    ],
)
def test_educate_quote_token(quote: str, prev: str, expected: str):
    assert educate_quote_token(quote, CFG, prev) == expected


def test_educate_intl():
    assert educate_intl("café") == ("caf&eacute;", 1)
    assert educate_intl("Œuvre ſ") == ("&OElig;uvre &#383;", 2)
    assert educate_intl("$5 ~ 10% ^") == ("&#36;5 &#126; 10&#37; &#94;", 4)
    assert educate_intl("“a” ‘b’") == ("&#8220;a&#8221; &#8216;b&#8217;", 4)
    assert educate_intl("plain ascii & <b>") == ("plain ascii & <b>", 0)


def test_stupefy_entities():
    out, n = stupefy_entities("&#8220;Hello &#8212; world.&#8221;")
    assert out == '"Hello -- world."'
    assert n == 3

    out, _ = stupefy_entities("&#8216;a&#8217; &#8211; b&#8230;")
    assert out == "'a' - b..."

    out, _ = stupefy_entities("“Hi” — ‘there’ – ok…")
    assert out == "\"Hi\" -- 'there' - ok..."


def test_educate_escape_keeps_periods_out_of_ellipsis():
    cfg = TypographyConfig.from_preset(Preset.INTL)
    out, stats = educate(r"Wait\.\.\. really?", cfg)
    assert out == "Wait&#46;&#46;&#46; really?"
    assert stats == {"escapes": 3}


def test_educate_escaped_quotes_stay_dumb():
    cfg = TypographyConfig.from_preset(Preset.EM_DASH)
    out, _ = educate(r"6\'2\" tall", cfg)
    assert out == "6&#39;2&#34; tall"


def test_educate_default_preset_scenario():
    cfg = TypographyConfig.from_preset(Preset.INTL)
    out, stats = educate("Isn't this \"fun\"?", cfg)
    assert out == "Isn&#8217;t this &#8220;fun&#8221;?"
    assert stats == {"quotes": 3}


def test_educate_all_passes_with_stats():
    cfg = TypographyConfig.from_preset(Preset.INTL)
    out, stats = educate("``Café''--really... \"no\"", cfg)
    assert out == "&#8220;Caf&eacute;&#8221;&#8211;really&#8230; &#8220;no&#8221;"
    assert stats == {"backticks": 2, "dashes": 1, "ellipses": 1, "quotes": 2, "intl": 1}


def test_educate_convert_quot_then_quotes():
    cfg = TypographyConfig.from_options("qw")
    out, stats = educate("&quot;Hi&quot;", cfg)
    assert out == "&#8220;Hi&#8221;"
    assert stats == {"convert_quot": 2, "quotes": 2}


def test_educate_single_backticks_run_before_quotes():
    cfg = TypographyConfig(quotes=True, backticks=BacktickMode.DOUBLE_AND_SINGLE, backtick_singlequote_close="[c]")
    out, _ = educate("`it' is", cfg)
    assert out == "&#8216;it[c] is"


def test_educate_single_quote_token_uses_previous_context():
    cfg = TypographyConfig(quotes=True)
    assert educate("'", cfg, "x") == ("&#8217;", {"quotes": 1})
    assert educate("'", cfg, "") == ("&#8216;", {"quotes": 1})
    assert educate('"', cfg, " ") == ("&#8220;", {"quotes": 1})


def test_educate_everything_off_is_identity():
    text = "Isn't -- this... ``fun''? café"
    assert educate(text, TypographyConfig()) == (text, {})


def test_educate_stupefy_after_forward_passes():
    cfg = TypographyConfig.from_preset(Preset.EM_DASH, stupefy=True)
    out, _ = educate('"Hello" -- world...', cfg)
    assert out == '"Hello" -- world...'
