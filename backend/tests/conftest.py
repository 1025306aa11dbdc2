"""Shared pytest fixtures for the rabinxor test suite."""

from random import Random

import pytest
from httpx import ASGITransport, AsyncClient

from rabinxor.crypto import RabinKey
from rabinxor.main import app

# Mersenne primes, both congruent to 3 mod 4
M61 = 2**61 - 1
M127 = 2**127 - 1


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def rng():
    """Seeded randomness so prime searches and witnesses are reproducible."""
    return Random(0x5EED)


@pytest.fixture()
def small_key():
    return RabinKey(p=7, q=11)


@pytest.fixture()
def big_key():
    return RabinKey(p=M127, q=M61)


@pytest.fixture()
async def client():
    """Provide an async HTTP test client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
