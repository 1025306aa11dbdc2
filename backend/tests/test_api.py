import pytest

import rabinxor.main
from rabinxor.config import get_settings
from rabinxor.crypto import GenerationTimeout, NoInverseExists, Overflow

M61 = 2**61 - 1
M127 = 2**127 - 1


@pytest.mark.anyio
async def test_transform_worked_example(client):
    response = await client.post("/rabin/transform", json={"m": "20", "p": "7", "q": "11"})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["n"] == "77"
    assert body["c"] == "15"
    assert body["width"] == 1
    assert body["output_hex"] == "60"
    assert body["output"] == "96"


@pytest.mark.anyio
async def test_transform_big_modulus(client):
    response = await client.post("/rabin/transform", json={"m": str(M61 + 12345), "p": str(M127), "q": str(M61)})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["width"] == 24
    assert len(body["output_hex"]) == 48


@pytest.mark.anyio
@pytest.mark.parametrize("m", ["0", "77", "-5"])
async def test_transform_message_out_of_range(client, m):
    response = await client.post("/rabin/transform", json={"m": m, "p": "7", "q": "11"})

    assert response.status_code == 400
    assert "0 < m < n" in response.json()["detail"]


@pytest.mark.anyio
async def test_transform_bad_modulus(client):
    response = await client.post("/rabin/transform", json={"m": "2", "p": "7", "q": "13"})

    assert response.status_code == 400
    assert "3 mod 4" in response.json()["detail"]


@pytest.mark.anyio
async def test_transform_rejects_non_integer_strings(client):
    response = await client.post("/rabin/transform", json={"m": "0x14", "p": "7", "q": "11"})

    assert response.status_code == 422


@pytest.mark.anyio
async def test_roots_endpoint(client):
    response = await client.post("/rabin/roots", json={"c": "15", "p": "7", "q": "11"})

    assert response.status_code == 200
    assert response.json() == {"n": "77", "roots": ["64", "13", "20", "57"]}


@pytest.mark.anyio
async def test_roots_endpoint_rejects_equal_primes(client):
    response = await client.post("/rabin/roots", json={"c": "4", "p": "7", "q": "7"})

    assert response.status_code == 400


@pytest.mark.anyio
async def test_generate_prime_endpoint(client):
    response = await client.post("/primes/generate", json={"bits": 64})

    assert response.status_code == 200
    body = response.json()
    prime = int(body["prime"])
    assert prime.bit_length() == 64
    assert prime % 4 == 3
    assert body["rounds"] == get_settings().mr_rounds


@pytest.mark.anyio
async def test_generate_prime_endpoint_limits_size(client):
    response = await client.post("/primes/generate", json={"bits": get_settings().max_prime_bits + 1})

    assert response.status_code == 400


@pytest.mark.anyio
async def test_generate_prime_endpoint_validates_bits(client):
    response = await client.post("/primes/generate", json={"bits": 1})

    assert response.status_code == 422


@pytest.mark.anyio
async def test_check_prime_endpoint(client):
    prime = await client.post("/primes/check", json={"n": str(M127)})
    composite = await client.post("/primes/check", json={"n": str(M127 * M61), "rounds": 20})

    assert prime.status_code == 200
    assert prime.json()["probable_prime"] is True
    assert prime.json()["rounds"] == get_settings().mr_rounds
    assert composite.json() == {"n": str(M127 * M61), "rounds": 20, "probable_prime": False}


@pytest.mark.anyio
async def test_keypair_endpoint(client):
    response = await client.post("/rabin/keypair", json={"bits": 32})

    assert response.status_code == 200
    body = response.json()
    p, q, n = int(body["p"]), int(body["q"]), int(body["n"])
    assert p != q
    assert p * q == n
    assert p % 4 == 3 and q % 4 == 3
    assert body["bits"] == 32

    transformed = await client.post("/rabin/transform", json={"m": "12345", "p": body["p"], "q": body["q"]})
    assert transformed.status_code == 200


# a distinct pair, both 3 mod 4, far above the configured size limit
HUGE_P = str(10**2500 + 3)
HUGE_Q = str(10**2500 + 7)


@pytest.mark.anyio
async def test_transform_rejects_oversized_modulus(client):
    response = await client.post("/rabin/transform", json={"m": "2", "p": HUGE_P, "q": HUGE_Q})

    assert response.status_code == 400
    assert "bits" in response.json()["detail"]


@pytest.mark.anyio
async def test_roots_rejects_oversized_modulus(client):
    response = await client.post("/rabin/roots", json={"c": "4", "p": HUGE_P, "q": HUGE_Q})

    assert response.status_code == 400
    assert "bits" in response.json()["detail"]


@pytest.mark.anyio
async def test_transform_at_size_limit_serialises(client):
    limit = get_settings().max_prime_bits
    p = str(2**limit - 1)
    q = str(2**(limit - 1) - 1)
    response = await client.post("/rabin/transform", json={"m": "12345", "p": p, "q": q})

    # 2**k - 1 is 3 mod 4 for k >= 2; gcd(2**a - 1, 2**b - 1) == 2**gcd(a, b) - 1 == 1
    assert response.status_code == 200, response.text
    assert response.json()["width"] == (2 * limit - 1 + 7) // 8


@pytest.mark.anyio
async def test_generation_timeout_maps_to_503(client, monkeypatch):
    def never_found(bits, rounds, max_attempts):
        raise GenerationTimeout(f"no {bits}-bit prime found in {max_attempts} attempts")

    monkeypatch.setattr(rabinxor.main, "generate_prime", never_found)
    response = await client.post("/primes/generate", json={"bits": 64, "max_attempts": 1})

    assert response.status_code == 503
    assert "no 64-bit prime" in response.json()["detail"]


@pytest.mark.anyio
async def test_keypair_timeout_maps_to_503(client, monkeypatch):
    def never_found(bits, rounds, max_attempts):
        raise GenerationTimeout("budget exhausted")

    monkeypatch.setattr(rabinxor.main, "generate_key", never_found)
    response = await client.post("/rabin/keypair", json={"bits": 32})

    assert response.status_code == 503


@pytest.mark.anyio
async def test_no_inverse_maps_to_400(client, monkeypatch):
    def no_inverse(c, p, q):
        raise NoInverseExists(f"{q} has no inverse modulo {p}")

    monkeypatch.setattr(rabinxor.main, "roots", no_inverse)
    response = await client.post("/rabin/roots", json={"c": "4", "p": "7", "q": "11"})

    assert response.status_code == 400
    assert "no inverse" in response.json()["detail"]


@pytest.mark.anyio
async def test_overflow_maps_to_400(client, monkeypatch):
    def overflow(m, p, q):
        raise Overflow("value does not fit in 1 byte(s)")

    monkeypatch.setattr(rabinxor.main, "rabin_transform", overflow)
    response = await client.post("/rabin/transform", json={"m": "20", "p": "7", "q": "11"})

    assert response.status_code == 400
    assert "does not fit" in response.json()["detail"]
