"""Monitoring and observability middleware"""
import time
from typing import Callable
from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from videotube.utils.identifiers import generate_id
from videotube.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "videotube_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "videotube_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

http_errors_total = Counter(
    "videotube_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

# Session metrics
login_attempts_total = Counter(
    "videotube_login_attempts_total",
    "Total login attempts",
    ["result"]  # success, not_found, bad_password
)

token_refreshes_total = Counter(
    "videotube_token_refreshes_total",
    "Total refresh token rotations",
    ["result"]  # success, missing, invalid, unknown_user, mismatch, lost_race
)

# Engagement metrics
reaction_toggles_total = Counter(
    "videotube_reaction_toggles_total",
    "Total reaction toggles",
    ["target_type", "outcome"]  # outcome: added, removed, raced
)

subscription_toggles_total = Counter(
    "videotube_subscription_toggles_total",
    "Total subscription toggles",
    ["outcome"]
)


SLOW_REQUEST_SECONDS = 1.0


def _route_template(request: Request) -> str:
    """Matched route path (``/api/v1/likes/toggle/v/{video_id}``) so ids don't become label values"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Request ids, latency headers and per-route request metrics"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method

        request_id = request.headers.get("x-request-id") or generate_id()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            endpoint = _route_template(request)
            http_errors_total.labels(method=method, endpoint=endpoint, status=500).inc()
            logger.error(
                f"Request failed: {method} {request.url.path}",
                extra={"request_id": request_id, "action": "http_request", "result": str(e)},
                exc_info=True
            )
            raise

        duration = time.perf_counter() - start_time
        endpoint = _route_template(request)
        status = response.status_code

        http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
        if status >= 400:
            http_errors_total.labels(method=method, endpoint=endpoint, status=status).inc()

        if duration > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request: {method} {endpoint} took {duration:.3f}s",
                extra={"request_id": request_id, "action": "http_request", "result": str(status)}
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


def record_login(result: str):
    """Record a login attempt outcome"""
    login_attempts_total.labels(result=result).inc()


def record_refresh(result: str):
    """Record a refresh token rotation outcome"""
    token_refreshes_total.labels(result=result).inc()


def record_reaction_toggle(target_type: str, outcome: str):
    reaction_toggles_total.labels(target_type=target_type, outcome=outcome).inc()


def record_subscription_toggle(outcome: str):
    subscription_toggles_total.labels(outcome=outcome).inc()
