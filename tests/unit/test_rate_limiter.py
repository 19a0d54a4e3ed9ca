"""
Unit Tests for Rate Limiting

Tests the token bucket, endpoint classification and client keys.
"""

import pytest
from starlette.requests import Request

from senali.api.middleware.rate_limiter import (
    RateLimitConfig,
    RateLimiter,
    RateLimitMiddleware,
    TokenBucket,
    client_key,
)


async def noop_app(scope, receive, send):
    return None


def make_request(headers: dict, client=("10.0.0.1", 5000)) -> Request:
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/api/tips/categories",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    })


@pytest.fixture
def middleware():
    return RateLimitMiddleware(noop_app, api_prefix="/api")


class TestTokenBucket:

    async def test_exhausts_capacity(self):
        bucket = TokenBucket(rate=0.0, capacity=2)

        assert await bucket.acquire()
        assert await bucket.acquire()
        assert not await bucket.acquire()
        assert bucket.available_tokens == 0


class TestRateLimiter:

    async def test_llm_bucket_is_separate_and_smaller(self):
        limiter = RateLimiter(RateLimitConfig(
            requests_per_minute=5,
            llm_requests_per_minute=1,
            burst_size=0,
        ))

        allowed, _ = await limiter.check_rate_limit("token:a", is_llm_endpoint=True)
        assert allowed
        allowed, _ = await limiter.check_rate_limit("token:a", is_llm_endpoint=True)
        assert not allowed

        allowed, remaining = await limiter.check_rate_limit("token:a")
        assert allowed
        assert remaining == 4

    async def test_clients_are_isolated(self):
        limiter = RateLimiter(RateLimitConfig(llm_requests_per_minute=1))

        assert (await limiter.check_rate_limit("ip:1", is_llm_endpoint=True))[0]
        assert (await limiter.check_rate_limit("ip:2", is_llm_endpoint=True))[0]


class TestEndpointClassification:

    @pytest.mark.parametrize("method,path", [
        ("POST", "/api/chat"),
        ("POST", "/api/chat/"),
        ("POST", "/api/tips/generate"),
        ("GET", "/api/tips/today"),
        ("POST", "/api/profiles/3f1c/diagnostic-summary"),
    ])
    def test_llm_endpoints(self, middleware, method, path):
        assert middleware.is_llm_endpoint(method, path)

    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/chat/history"),
        ("GET", "/api/tips"),
        ("POST", "/api/profiles"),
    ])
    def test_standard_endpoints(self, middleware, method, path):
        assert not middleware.is_llm_endpoint(method, path)

    @pytest.mark.parametrize("path", ["/api/health", "/api/health/ready", "/metrics", "/docs"])
    def test_exempt_paths(self, middleware, path):
        assert middleware.is_exempt(path)

    def test_api_paths_not_exempt(self, middleware):
        assert not middleware.is_exempt("/api/chat")


class TestClientKey:

    def test_bearer_token_does_not_choose_bucket(self):
        first = client_key(make_request({"Authorization": "Bearer junk1"}))
        second = client_key(make_request({"Authorization": "Bearer junk2"}))

        assert first == second == "ip:10.0.0.1"

    def test_verified_user_gets_own_bucket(self):
        request = make_request({})
        request.state.user_id = "parent1"

        assert client_key(request) == "user:parent1"

    def test_forwarded_for_ignored_by_default(self):
        request = make_request({"X-Forwarded-For": "203.0.113.9"})
        assert client_key(request) == "ip:10.0.0.1"

    def test_forwarded_for_used_behind_trusted_proxy(self):
        request = make_request({"X-Forwarded-For": "203.0.113.9, 10.0.0.2"})
        assert client_key(request, trust_forwarded_for=True) == "ip:203.0.113.9"

    def test_missing_client(self):
        assert client_key(make_request({}, client=None)) == "ip:unknown"
