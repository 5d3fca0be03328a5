"""Tests for the FastAPI host endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import create_app
from bounds import INT128, UINT128


@pytest.fixture
def client(kernel_128):
    return TestClient(create_app(kernel=kernel_128))


@pytest.fixture
def tiny_client(tiny_kernel):
    return TestClient(create_app(kernel=tiny_kernel))


# ---------------------------------------------------------------------------
# GET /kernel
# ---------------------------------------------------------------------------

class TestKernelEndpoint:

    def test_describes_128_bit_kernel(self, client):
        resp = client.get("/kernel")
        assert resp.status_code == 200
        data = resp.json()
        assert data["bits"] == 128
        assert data["signed_min"] == INT128.lo
        assert data["signed_max"] == INT128.hi
        assert data["unsigned_max"] == UINT128.hi
        assert data["factorial_ceiling"] == 20
        assert data["fibonacci_ceiling"] == 100

    def test_describes_injected_kernel(self, tiny_client):
        data = tiny_client.get("/kernel").json()
        assert data["bits"] == 4
        assert data["signed_max"] == 7


# ---------------------------------------------------------------------------
# GET /ops
# ---------------------------------------------------------------------------

class TestListEndpoint:

    def test_lists_core_operations(self, client):
        resp = client.get("/ops")
        assert resp.status_code == 200
        data = resp.json()
        names = {item["name"] for item in data["items"]}
        assert {"add", "divide_with_fallback", "power", "lcm", "signed_to_unsigned"} <= names
        assert data["total"] == len(data["items"])

    def test_arity(self, client):
        items = {item["name"]: item["arity"] for item in client.get("/ops").json()["items"]}
        assert items["add"] == 2
        assert items["absolute"] == 1
        assert items["divide_with_fallback"] == 3


# ---------------------------------------------------------------------------
# POST /ops/{name}
# ---------------------------------------------------------------------------

class TestEvaluateEndpoint:

    def test_success(self, client):
        resp = client.post("/ops/add", json={"args": [2, 3]})
        assert resp.status_code == 200
        assert resp.json() == {"operation": "add", "ok": True, "value": 5, "error": None}

    def test_failure_is_not_an_http_error(self, client):
        resp = client.post("/ops/add", json={"args": [INT128.hi, 1]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is False
        assert data["value"] is None
        assert data["error"] == "arithmetic_overflow"

    def test_underflow(self, client):
        data = client.post("/ops/subtract", json={"args": [INT128.lo, 1]}).json()
        assert data["error"] == "arithmetic_underflow"

    def test_division_by_zero(self, client):
        data = client.post("/ops/divide", json={"args": [1, 0]}).json()
        assert data["error"] == "division_by_zero"

    def test_fallback_returns_plain_value(self, client):
        data = client.post("/ops/divide_with_fallback", json={"args": [1, 0, 42]}).json()
        assert data == {
            "operation": "divide_with_fallback", "ok": True, "value": 42, "error": None,
        }

    def test_big_values_round_trip(self, client):
        data = client.post("/ops/power", json={"args": [-2, 127]}).json()
        assert data["value"] == INT128.lo

    def test_algorithms(self, client):
        assert client.post("/ops/square_root", json={"args": [16]}).json()["value"] == 4
        assert client.post("/ops/factorial", json={"args": [21]}).json()["ok"] is False
        assert client.post("/ops/fibonacci", json={"args": [10]}).json()["value"] == 55
        assert client.post("/ops/gcd", json={"args": [12, 18]}).json()["value"] == 6
        assert client.post("/ops/lcm", json={"args": [4, 6]}).json()["value"] == 12

    def test_conversion(self, client):
        data = client.post("/ops/signed_to_unsigned", json={"args": [-1]}).json()
        assert data["error"] == "invalid_conversion"

    def test_tiny_kernel_overflows_early(self, tiny_client):
        data = tiny_client.post("/ops/multiply", json={"args": [4, 2]}).json()
        assert data["error"] == "arithmetic_overflow"


class TestEvaluateErrors:

    def test_unknown_operation(self, client):
        resp = client.post("/ops/sqrt2", json={"args": [1]})
        assert resp.status_code == 404

    def test_wrong_arity(self, client):
        resp = client.post("/ops/add", json={"args": [1]})
        assert resp.status_code == 422

    def test_out_of_domain(self, client):
        resp = client.post("/ops/add", json={"args": [INT128.hi + 1, 0]})
        assert resp.status_code == 422

    def test_negative_exponent(self, client):
        resp = client.post("/ops/power", json={"args": [2, -1]})
        assert resp.status_code == 422

    def test_booleans_rejected(self, client):
        resp = client.post("/ops/add", json={"args": [True, 1]})
        assert resp.status_code == 422

    def test_too_many_args(self, client):
        resp = client.post("/ops/add", json={"args": [1, 2, 3, 4]})
        assert resp.status_code == 422
