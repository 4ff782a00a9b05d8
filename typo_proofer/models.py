from __future__ import annotations

from pydantic import BaseModel, Field

from typo_proofer.formatting.fixer import DEFAULT_TRANSFORMS


class ErrorEnvelope(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class FormatOptions(BaseModel):
    currency_len: int = Field(default=3, ge=0, le=1_000)
    unit_len: int = Field(default=2, ge=0, le=1_000)
    quote_len: int = Field(default=20, ge=0, le=100_000)
    real_word_len: int = Field(default=3, ge=0, le=1_000)
    typographic_quotes: bool = True
    typographic_ellipsis: bool = True
    ligature_dashes: bool = False
    ligature_guillemets: bool = False


class FormatRequest(BaseModel):
    text: str
    transforms: list[str] = Field(default_factory=lambda: list(DEFAULT_TRANSFORMS))
    options: FormatOptions = Field(default_factory=FormatOptions)


class FormatResponse(BaseModel):
    text: str
    stats: dict[str, int] = Field(default_factory=dict)


class TransformOut(BaseModel):
    name: str
    description: str


class TransformListResponse(BaseModel):
    transforms: list[TransformOut]


class FileOptions(BaseModel):
    transforms: list[str] = Field(default_factory=lambda: list(DEFAULT_TRANSFORMS))
    format: FormatOptions = Field(default_factory=FormatOptions)
    suffix: str = "_typo"
