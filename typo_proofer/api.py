from __future__ import annotations

import json
import logging
import os
import re
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

from fastapi import Body, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from typo_proofer.env import env_str
from typo_proofer.formatting.config import FormatterConfig
from typo_proofer.formatting.fixer import format_txt
from typo_proofer.formatting.rules import TRANSFORMS, UnknownTransformError, resolve_transforms
from typo_proofer.logging_setup import ensure_file_logging
from typo_proofer.models import (
    ErrorEnvelope,
    FileOptions,
    FormatOptions,
    FormatRequest,
    FormatResponse,
    TransformListResponse,
    TransformOut,
)

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 50 * 1024 * 1024

_INTERNAL_ERROR_MESSAGE = "internal server error"

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

_filename_strip_re = re.compile(r"[^0-9A-Za-zÀ-ÖØ-öø-ÿ._ -]+")


def _safe_filename(name: str) -> str:
    base = os.path.basename(name or "")
    base = base.replace("\\", "_").replace("/", "_").strip()
    if not base:
        return "input.txt"
    base = _filename_strip_re.sub("_", base)
    return base[:200]


def _derive_output_filename(input_name: str, suffix: str) -> str:
    input_name = _safe_filename(input_name)
    suffix = (suffix or "").strip()
    if not suffix:
        suffix = "_typo"

    p = Path(input_name)
    stem = p.stem or "output"
    ext = p.suffix if p.suffix else ".txt"

    out = f"{stem}{suffix}{ext}"
    return _safe_filename(out)


def _decode_text(data: bytes) -> str:
    for enc in ("utf-8-sig", "utf-8", "cp1252"):
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _request_id_from_request(request: Request) -> str:
    existing = getattr(getattr(request, "state", object()), "request_id", None)
    if isinstance(existing, str) and existing:
        return existing

    incoming = str(request.headers.get("x-request-id", "") or "").strip()
    request_id = incoming if incoming and _REQUEST_ID_RE.fullmatch(incoming) else uuid.uuid4().hex

    request.state.request_id = request_id
    return request_id


def _error(status_code: int, message: str, *, request_id: str | None = None) -> JSONResponse:
    headers = {"x-request-id": request_id} if request_id else None
    return JSONResponse(
        status_code=status_code,
        content={
            "error": ErrorEnvelope(
                code=_error_code_for_status(status_code), message=message, request_id=request_id
            ).model_dump()
        },
        headers=headers,
    )


def _config_from_options(opts: FormatOptions) -> FormatterConfig:
    return FormatterConfig(
        currency_len=int(opts.currency_len),
        unit_len=int(opts.unit_len),
        quote_len=int(opts.quote_len),
        real_word_len=int(opts.real_word_len),
        typographic_quotes=bool(opts.typographic_quotes),
        typographic_ellipsis=bool(opts.typographic_ellipsis),
        ligature_dashes=bool(opts.ligature_dashes),
        ligature_guillemets=bool(opts.ligature_guillemets),
    )


def _check_transforms(names: list[str]) -> None:
    try:
        resolve_transforms(names)
    except UnknownTransformError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _parse_file_options(options: str) -> FileOptions:
    if not options.strip():
        return FileOptions()
    try:
        data = json.loads(options)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"options must be valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="options must be a JSON object")
    try:
        return FileOptions.model_validate(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"invalid options: {e}") from e


async def _read_upload_limited(upload: UploadFile, limit: int) -> bytes:
    total = 0
    parts: list[bytes] = []
    while True:
        chunk = await upload.read(1024 * 1024)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(status_code=413, detail=f"file too large (> {limit} bytes)")
        parts.append(chunk)
    return b"".join(parts)


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_dir = env_str("TYPO_PROOFER_LOG_DIR")
    if log_dir:
        log_file = ensure_file_logging(log_dir=Path(log_dir))
        logger.info("file logging enabled: %s", log_file)
    yield


app = FastAPI(title="typo-proofer", lifespan=_lifespan)


@app.middleware("http")
async def _request_id_middleware(request: Request, call_next):
    request_id = _request_id_from_request(request)
    response = await call_next(request)
    response.headers.setdefault("x-request-id", request_id)
    return response


@app.exception_handler(HTTPException)
async def _http_exception_handler(request: Request, exc: HTTPException):
    return _error(int(exc.status_code), str(exc.detail), request_id=_request_id_from_request(request))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    msg = "bad request"
    errors = exc.errors()
    if errors:
        msg = str(errors[0].get("msg") or msg)
    return _error(400, msg, request_id=_request_id_from_request(request))


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    request_id = _request_id_from_request(request)
    logger.exception("unhandled error (request_id=%s)", request_id, exc_info=exc)
    return _error(500, _INTERNAL_ERROR_MESSAGE, request_id=request_id)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/api/v1/transforms", response_model=TransformListResponse)
async def list_transforms():
    return TransformListResponse(
        transforms=[TransformOut(name=t.name, description=t.description) for t in TRANSFORMS.values()]
    )


@app.post("/api/v1/format", response_model=FormatResponse)
def format_text(body: FormatRequest = Body(...)):
    _check_transforms(body.transforms)
    result = format_txt(body.text, body.transforms, _config_from_options(body.options))
    logger.info("formatted %s chars with %s", len(body.text), ",".join(body.transforms))
    return FormatResponse(text=result.text, stats=result.stats)


@app.post("/api/v1/format/file")
async def format_file(file: UploadFile = File(...), options: str = Form("")):
    opts = _parse_file_options(options)
    _check_transforms(opts.transforms)

    data = await _read_upload_limited(file, MAX_UPLOAD_BYTES)
    text = _decode_text(data)
    result = format_txt(text, opts.transforms, _config_from_options(opts.format))

    out_name = _derive_output_filename(file.filename or "input.txt", opts.suffix)
    logger.info("formatted upload %s -> %s (%s lines)", file.filename, out_name, result.stats.get("lines", 0))
    return Response(
        content=result.text.encode("utf-8"),
        media_type="text/plain; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(out_name)}",
            "x-changed-lines": str(result.stats.get("changed_lines", 0)),
        },
    )
