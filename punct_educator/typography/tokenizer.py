from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    TAG = "tag"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str


# Quoted attribute values are matched as whole units so that a tag such as
# <a href="<MTFoo>"> is not closed by the '>' inside the quotes. The atomic
# group stops backtracking within one attempt, but an unterminated tag still
# rescans to the end of the input from every "<", so worst-case time is
# quadratic and callers must cap the input size.
_markup_re = re.compile(
    r"(?s:<!--.*?-->)"  # comment
    r"|(?s:<\?.*?\?>)"  # processing instruction
    r"""|(?:<[/!$]?[-a-zA-Z0-9:]+\b(?>[^"'>]+|"[^"]*"|'[^']*')*>)"""  # tag
)


def tokenize(text: str) -> list[Token]:
    """Split HTML into tag and text tokens.

    Every character of `text` ends up in exactly one token, in order, so
    joining the token values gives back the input. Text between two adjacent
    tags is never emitted as an empty token. Markup that never closes stays
    part of the surrounding text.
    """

    tokens: list[Token] = []
    pos = 0
    for m in _markup_re.finditer(text):
        if m.start() > pos:
            tokens.append(Token(TokenKind.TEXT, text[pos : m.start()]))
        tokens.append(Token(TokenKind.TAG, m.group(0)))
        pos = m.end()
    if pos < len(text):
        tokens.append(Token(TokenKind.TEXT, text[pos:]))
    return tokens
