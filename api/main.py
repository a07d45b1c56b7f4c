from __future__ import annotations

import logging
import os
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Security, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import APIKeyHeader
from pydantic import BaseModel, Field

from iban_check import (
    IbanCheck,
    IbanDetector,
    check_iban,
    compute_check_digits,
    normalize,
)

logger = logging.getLogger(__name__)

# ── Auth / API key ───────────────────────────────────────────────────────────

_API_KEY = os.getenv("API_KEY")
_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

_MAX_BATCH_SIZE = int(os.getenv("MAX_BATCH_SIZE", "1000"))
_MAX_IBAN_LENGTH = int(os.getenv("MAX_IBAN_LENGTH", "128"))
_MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", "100000"))


async def verify_api_key(key: Annotated[str | None, Security(_api_key_header)]) -> None:
    if not _API_KEY:
        return  # Auth disabled — no env var configured
    if key == _API_KEY:
        return
    logger.warning("Rejected request with %s API key", "invalid" if key else "missing")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing API key",
    )


# ── Pydantic models ──────────────────────────────────────────────────────────


class ValidateRequest(BaseModel):
    iban: str = Field(max_length=_MAX_IBAN_LENGTH)


class ValidateResponse(BaseModel):
    iban: str
    normalized: str
    country_code: str
    checksum: int | None
    valid: bool


class BatchValidateRequest(BaseModel):
    ibans: list[Annotated[str, Field(max_length=_MAX_IBAN_LENGTH)]]


class BatchValidateResponse(BaseModel):
    results: list[ValidateResponse]
    valid_count: int


class CheckDigitsResponse(BaseModel):
    check_digits: str
    iban: str


class ScanRequest(BaseModel):
    text: str = Field(max_length=_MAX_TEXT_LENGTH)
    only_valid: bool = False


class FindingOut(BaseModel):
    start: int
    end: int
    text: str
    normalized: str
    valid: bool
    confidence: float


class ScanResponse(BaseModel):
    findings: list[FindingOut]


def _to_response(result: IbanCheck) -> ValidateResponse:
    return ValidateResponse(
        iban=result.raw,
        normalized=result.normalized,
        country_code=result.country_code,
        checksum=result.checksum,
        valid=result.valid,
    )


# ── FastAPI app ──────────────────────────────────────────────────────────────

app = FastAPI(title="iban-check")

_CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── JSON API routes ──────────────────────────────────────────────────────────


@app.get("/health")
async def health() -> dict[str, Any]:
    return {"status": "ok"}


@app.post(
    "/validate",
    response_model=ValidateResponse,
    dependencies=[Depends(verify_api_key)],
)
async def validate(request: ValidateRequest) -> ValidateResponse:
    return _to_response(check_iban(request.iban))


@app.post(
    "/validate/batch",
    response_model=BatchValidateResponse,
    dependencies=[Depends(verify_api_key)],
)
async def validate_batch(request: BatchValidateRequest) -> BatchValidateResponse:
    if len(request.ibans) > _MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"At most {_MAX_BATCH_SIZE} IBANs per request",
        )
    results = [_to_response(check_iban(iban)) for iban in request.ibans]
    valid_count = sum(1 for r in results if r.valid)
    logger.debug("Batch of %d IBANs, %d valid", len(results), valid_count)
    return BatchValidateResponse(results=results, valid_count=valid_count)


@app.post(
    "/check-digits",
    response_model=CheckDigitsResponse,
    dependencies=[Depends(verify_api_key)],
)
async def check_digits(request: ValidateRequest) -> CheckDigitsResponse:
    try:
        digits = compute_check_digits(request.iban)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    clean = normalize(request.iban)
    return CheckDigitsResponse(check_digits=digits, iban=clean[:2] + digits + clean[4:])


@app.post("/scan", response_model=ScanResponse, dependencies=[Depends(verify_api_key)])
async def scan(request: ScanRequest) -> ScanResponse:
    findings = IbanDetector(only_valid=request.only_valid).detect(request.text)
    return ScanResponse(
        findings=[
            FindingOut(
                start=f.start,
                end=f.end,
                text=f.text,
                normalized=f.normalized,
                valid=f.valid,
                confidence=f.confidence,
            )
            for f in findings
        ]
    )
