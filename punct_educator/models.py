from __future__ import annotations

from pydantic import BaseModel, Field

from punct_educator.typography.config import TAGS_TO_SKIP_PATTERN


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class EducateRequest(BaseModel):
    text: str
    # Preset name ("INTL", "em_dash") or number ("4", "-1").
    preset: str | None = None
    # Compact option letters, e.g. "qBDe". Mutually exclusive with preset.
    options: str | None = None
    tags_to_skip: str | None = Field(default=None, pattern=TAGS_TO_SKIP_PATTERN)
    literal_glyphs: bool = False


class EducateResponse(BaseModel):
    text: str
    stats: dict[str, int] = Field(default_factory=dict)


class TokenizeRequest(BaseModel):
    text: str


class TokenOut(BaseModel):
    kind: str
    value: str


class TokenizeResponse(BaseModel):
    tokens: list[TokenOut]


class PresetOut(BaseModel):
    name: str
    value: int
    default: bool = False


class PresetListResponse(BaseModel):
    presets: list[PresetOut]
