from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from punct_educator.env import max_input_chars
from punct_educator.logging_setup import default_log_dir, ensure_file_logging
from punct_educator.models import (
    EducateRequest,
    EducateResponse,
    ErrorEnvelope,
    PresetListResponse,
    PresetOut,
    TokenizeRequest,
    TokenizeResponse,
    TokenOut,
)
from punct_educator.typography.config import DEFAULT_PRESET, Preset, TypographyConfig, preset_from_name
from punct_educator.typography.educator import Educator, EducatorCache
from punct_educator.typography.tokenizer import tokenize

logger = logging.getLogger(__name__)

WORKDIR = Path(__file__).resolve().parent.parent
LOG_DIR = default_log_dir(WORKDIR)

# Educators for the stock presets/option strings, built on first use.
EDUCATORS = EducatorCache()
LITERAL_EDUCATORS = EducatorCache(literal_glyphs=True)


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


def _check_size(text: str) -> None:
    limit = max_input_chars()
    if len(text) > limit:
        raise HTTPException(status_code=413, detail=f"text too large (> {limit} chars)")


def _educator_for(req: EducateRequest) -> Educator:
    if req.preset is not None and req.options is not None:
        raise HTTPException(status_code=400, detail="preset and options are mutually exclusive")

    attr: Preset | str = DEFAULT_PRESET
    if req.preset is not None:
        try:
            attr = preset_from_name(req.preset)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    elif req.options is not None:
        attr = req.options

    if req.tags_to_skip is None:
        cache = LITERAL_EDUCATORS if req.literal_glyphs else EDUCATORS
        return cache.get(attr)

    config = TypographyConfig.from_attr(attr, tags_to_skip=req.tags_to_skip)
    if req.literal_glyphs:
        config = config.with_literal_glyphs()
    return Educator(config)


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_file = ensure_file_logging(log_dir=LOG_DIR)
    logger.info("file logging enabled: %s", log_file)
    yield


app = FastAPI(lifespan=_lifespan)


@app.exception_handler(HTTPException)
async def _http_exception_handler(_request: Request, exc: HTTPException):
    return _error(int(exc.status_code), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError):
    msg = "bad request"
    try:
        errors = exc.errors()
        if errors:
            msg = errors[0].get("msg") or msg
    except Exception:
        pass
    return _error(400, msg)


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error")
    return _error(500, str(exc))


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/api/v1/presets", response_model=PresetListResponse)
async def list_presets():
    return PresetListResponse(
        presets=[PresetOut(name=p.name, value=int(p), default=p == DEFAULT_PRESET) for p in Preset]
    )


@app.post("/api/v1/educate", response_model=EducateResponse)
async def educate_text(body: EducateRequest = Body(...)):
    _check_size(body.text)
    educator = _educator_for(body)
    result = educator.educate(body.text)
    return EducateResponse(text=result.text, stats=result.stats)


@app.post("/api/v1/tokenize", response_model=TokenizeResponse)
async def tokenize_text(body: TokenizeRequest = Body(...)):
    _check_size(body.text)
    return TokenizeResponse(tokens=[TokenOut(kind=t.kind.value, value=t.value) for t in tokenize(body.text)])
