from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from functools import lru_cache

from punct_educator.typography.config import DEFAULT_PRESET, Preset, TypographyConfig, preset_from_value
from punct_educator.typography.rules import educate
from punct_educator.typography.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


@dataclass
class EducateResult:
    text: str
    stats: dict[str, int]


@dataclass(frozen=True)
class TokenContext:
    """State carried from one token to the next within a single transform."""

    in_verbatim: bool = False
    # Last character of the previous text token, before any substitution.
    last_char: str = ""


@lru_cache(maxsize=32)
def _verbatim_tag_re(tags_to_skip: str) -> re.Pattern[str]:
    return re.compile(r"^<(/?)(?:" + tags_to_skip + r")[\s>]", re.IGNORECASE)


def _verbatim_after_tag(tag: str, ctx: TokenContext, tags_to_skip: str) -> bool:
    m = _verbatim_tag_re(tags_to_skip).match(tag)
    if m is None:
        return ctx.in_verbatim
    if m.group(1) == "/":
        return False
    if tag.endswith("/>"):
        # <pre/> opens nothing.
        return ctx.in_verbatim
    return True


def educate_token(
    token: Token, config: TypographyConfig, ctx: TokenContext
) -> tuple[str, TokenContext, dict[str, int]]:
    """Process one token and return its output along with the next context."""

    if token.kind == TokenKind.TAG:
        in_verbatim = _verbatim_after_tag(token.value, ctx, config.tags_to_skip)
        return token.value, TokenContext(in_verbatim=in_verbatim, last_char=ctx.last_char), {}

    next_ctx = TokenContext(in_verbatim=ctx.in_verbatim, last_char=token.value[-1:])
    if ctx.in_verbatim:
        return token.value, next_ctx, {}

    text, stats = educate(token.value, config, ctx.last_char)
    return text, next_ctx, stats


def educate_html(text: str, config: TypographyConfig) -> EducateResult:
    if config.do_nothing:
        return EducateResult(text=text, stats={})

    stats: dict[str, int] = {}
    out_parts: list[str] = []
    ctx = TokenContext()
    for token in tokenize(text):
        out, ctx, token_stats = educate_token(token, config, ctx)
        out_parts.append(out)
        for k, v in token_stats.items():
            stats[k] = stats.get(k, 0) + v

    if stats:
        logger.debug("educated %s chars: %s", len(text), stats)
    return EducateResult(text="".join(out_parts), stats=stats)


def transform(text: str, config: TypographyConfig) -> str:
    return educate_html(text, config).text


class Educator:
    """A configured transformer; safe to share between threads."""

    def __init__(self, config: TypographyConfig | None = None) -> None:
        self.config = config if config is not None else TypographyConfig.from_preset(DEFAULT_PRESET)

    def transform(self, text: str) -> str:
        return transform(text, self.config)

    def educate(self, text: str) -> EducateResult:
        return educate_html(text, self.config)


@dataclass
class EducatorCache:
    """Lazily built educators keyed by preset or option letters.

    The cache belongs to whoever creates it; nothing here is process-global.
    """

    tags_to_skip: str | None = None
    literal_glyphs: bool = False
    _educators: dict[Preset | str, Educator] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _build(self, attr: Preset | str) -> Educator:
        overrides: dict[str, object] = {}
        if self.tags_to_skip is not None:
            overrides["tags_to_skip"] = self.tags_to_skip
        config = TypographyConfig.from_attr(attr, **overrides)
        if self.literal_glyphs:
            config = config.with_literal_glyphs()
        return Educator(config)

    def get(self, attr: Preset | int | str = DEFAULT_PRESET) -> Educator:
        preset = preset_from_value(attr)
        key: Preset | str = preset if preset is not None else str(attr)
        with self._lock:
            educator = self._educators.get(key)
            if educator is None:
                educator = self._build(key)
                self._educators[key] = educator
        return educator

    def run_with_preset(self, text: str, preset: Preset | int | str = DEFAULT_PRESET) -> str:
        return self.get(preset).transform(text)
