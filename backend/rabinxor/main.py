import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from rabinxor import __version__
from rabinxor.config import get_settings
from rabinxor.crypto import (
    GenerationTimeout,
    RabinXorError,
    byte_length,
    from_fixed_width_bytes,
    generate_key,
    generate_prime,
    is_probable_prime,
    rabin_square,
    rabin_transform,
    roots,
)
from rabinxor.logger import setup_logging

logger = logging.getLogger(__name__)

INT_PATTERN = r"^-?[0-9]+$"
INT_MAX_LENGTH = 4096


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    yield


app = FastAPI(
    title="Rabin XOR Transform API",
    version=__version__,
    lifespan=lifespan,
)

# ── Security: CORS ───────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)


# ── Security: HTTP headers ───────────────────────────────────
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Cache-Control"] = "no-store"
    return response


# ── Models ───────────────────────────────────────────────────

class PrimeRequest(BaseModel):
    bits: int = Field(ge=2)
    rounds: Optional[int] = Field(default=None, ge=1, le=128)
    max_attempts: Optional[int] = Field(default=None, ge=1)


class PrimeCheckRequest(BaseModel):
    n: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)
    rounds: Optional[int] = Field(default=None, ge=0, le=128)


class KeypairRequest(BaseModel):
    bits: Optional[int] = Field(default=None, ge=5)


class RootsRequest(BaseModel):
    c: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)
    p: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)
    q: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)


class TransformRequest(BaseModel):
    m: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)
    p: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)
    q: str = Field(pattern=INT_PATTERN, max_length=INT_MAX_LENGTH)


def _check_bits(bits: int) -> None:
    limit = get_settings().max_prime_bits
    if bits > limit:
        raise HTTPException(status_code=400, detail=f"bits must not exceed {limit}")


def _check_modulus_size(p: int, q: int) -> None:
    # keeps n and its roots well inside the int/str conversion limit
    limit = get_settings().max_prime_bits
    if p.bit_length() > limit or q.bit_length() > limit:
        raise HTTPException(status_code=400, detail=f"p and q must not exceed {limit} bits")


def _to_http(exc: RabinXorError, path: str) -> HTTPException:
    logger.info("rejected %s: %s", path, exc)
    if isinstance(exc, GenerationTimeout):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


# ── Endpoints ────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/primes/generate")
async def primes_generate(payload: PrimeRequest):
    """Generate a probable prime congruent to 3 mod 4."""
    _check_bits(payload.bits)
    settings = get_settings()
    rounds = payload.rounds or settings.mr_rounds
    max_attempts = payload.max_attempts or settings.attempts_cap
    try:
        prime = await run_in_threadpool(generate_prime, payload.bits, rounds, max_attempts)
    except RabinXorError as e:
        raise _to_http(e, "/primes/generate")
    return {"prime": str(prime), "bits": payload.bits, "rounds": rounds}


@app.post("/primes/check")
async def primes_check(payload: PrimeCheckRequest):
    """Run Miller-Rabin on n."""
    rounds = get_settings().mr_rounds if payload.rounds is None else payload.rounds
    n = int(payload.n)
    try:
        result = await run_in_threadpool(is_probable_prime, n, rounds)
    except RabinXorError as e:
        raise _to_http(e, "/primes/check")
    return {"n": payload.n, "rounds": rounds, "probable_prime": result}


@app.post("/rabin/keypair")
async def rabin_keypair(payload: KeypairRequest):
    """Generate a fresh (p, q) pair. Nothing is stored server-side."""
    settings = get_settings()
    bits = payload.bits or settings.prime_bits
    _check_bits(bits)
    try:
        key = await run_in_threadpool(generate_key, bits, settings.mr_rounds, settings.attempts_cap)
    except RabinXorError as e:
        raise _to_http(e, "/rabin/keypair")
    return {"p": str(key.p), "q": str(key.q), "n": str(key.n), "bits": bits}


@app.post("/rabin/roots")
async def rabin_roots(payload: RootsRequest):
    """Return the four square roots of c modulo p*q."""
    p, q = int(payload.p), int(payload.q)
    _check_modulus_size(p, q)
    try:
        rs = await run_in_threadpool(roots, int(payload.c), p, q)
    except RabinXorError as e:
        raise _to_http(e, "/rabin/roots")
    return {"n": str(p * q), "roots": [str(r) for r in rs]}


@app.post("/rabin/transform")
async def rabin_transform_endpoint(payload: TransformRequest):
    """XOR-combine the four square roots of m^2 mod p*q."""
    m, p, q = int(payload.m), int(payload.p), int(payload.q)
    _check_modulus_size(p, q)
    try:
        output = await run_in_threadpool(rabin_transform, m, p, q)
    except RabinXorError as e:
        raise _to_http(e, "/rabin/transform")
    n = p * q
    return {
        "n": str(n),
        "c": str(rabin_square(m, n)),
        "width": byte_length(n),
        "output_hex": output.hex(),
        "output": str(from_fixed_width_bytes(output)),
    }
