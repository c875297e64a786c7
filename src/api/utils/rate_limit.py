"""
Rate limit wiring for the HTTP layer.

Builds the named limiters of one application instance and turns an
exhausted window into a 429 response.
"""

from fastapi import Request, status

from src.libs.result import Error
from src.api.error import ClientError
from src.app.services.rate_limiter import RateLimiter, RateLimitResult, RateLimitStore


class RateLimiters:
    """Named limiters sharing one store, namespaced by prefix"""

    def __init__(self, store: RateLimitStore, config):
        self.store = store
        self.login = RateLimiter(
            store,
            interval_ms=config.LOGIN_RATE_LIMIT_INTERVAL_MS,
            max_requests=config.LOGIN_RATE_LIMIT_MAX_REQUESTS,
            prefix="login",
        )
        self.otp_send = RateLimiter(
            store,
            interval_ms=config.OTP_SEND_RATE_LIMIT_INTERVAL_MS,
            max_requests=config.OTP_SEND_RATE_LIMIT_MAX_REQUESTS,
            prefix="otp-send",
        )
        self.otp_verify = RateLimiter(
            store,
            interval_ms=config.OTP_VERIFY_RATE_LIMIT_INTERVAL_MS,
            max_requests=config.OTP_VERIFY_RATE_LIMIT_MAX_REQUESTS,
            prefix="otp-verify",
        )


def get_rate_limiters(request: Request) -> RateLimiters:
    return request.app.state.rate_limiters


def client_identity(request: Request, trust_proxy_headers: bool = False) -> str:
    """
    Rate limit key for the caller.

    The socket peer address, or the first X-Forwarded-For hop when the app
    runs behind a proxy that sets that header. Clients can put anything in
    X-Forwarded-For, so it is ignored unless trust_proxy_headers is set.
    """
    forwarded_for = request.headers.get("x-forwarded-for") if trust_proxy_headers else None
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_rate_limit(limiter: RateLimiter, key: str) -> RateLimitResult:
    """
    Record a request against limiter.

    Raises:
        ClientError: 429 with Retry-After when the window is full
    """
    result = limiter.check(key)
    if not result.success:
        raise ClientError(
            Error(
                "RATE_LIMITED",
                f"Too many requests. Please try again in {result.reset_in} seconds.",
            ),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(result.reset_in)},
        )
    return result
