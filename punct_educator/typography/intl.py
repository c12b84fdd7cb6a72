from __future__ import annotations

from html.entities import codepoint2name

# Latin-1 Supplement, Latin Extended-A/B and the tail of the IPA block that
# the table has always covered.
_LETTER_RANGES = (
    (0x00A1, 0x00FF),
    (0x0100, 0x024F),
    (0x0287, 0x029D),
)


def _reference(cp: int) -> str:
    name = codepoint2name.get(cp)
    return f"&{name};" if name else f"&#{cp};"


def _build_table() -> dict[str, str]:
    table = {
        "$": "&#36;",
        "%": "&#37;",
        "^": "&#94;",
        "~": "&#126;",
        "\u00a0": "&nbsp;",
    }
    for first, last in _LETTER_RANGES:
        for cp in range(first, last + 1):
            table[chr(cp)] = _reference(cp)
    # Curly quotes typed directly into the source.
    table.update(
        {
            "\u2018": "&#8216;",
            "\u2019": "&#8217;",
            "\u201c": "&#8220;",
            "\u201d": "&#8221;",
        }
    )
    return table


INTL_ENTITIES: dict[str, str] = _build_table()

INTL_TRANSLATION = str.maketrans(INTL_ENTITIES)
