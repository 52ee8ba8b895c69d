"""Monitoring and observability middleware"""
import time
from typing import Callable
from fastapi import Request, Response
from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from app.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "agriadvisor_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "agriadvisor_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

http_errors_total = Counter(
    "agriadvisor_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

# Domain metrics
recommendations_total = Counter(
    "agriadvisor_recommendations_total",
    "Total crop recommendations served",
    ["season", "soil_type", "fallback"]
)

ledger_entries_gauge = Gauge(
    "agriadvisor_ledger_entries",
    "Number of entries in the recommendation ledger"
)

weather_failures_total = Counter(
    "agriadvisor_weather_failures_total",
    "Total failed upstream weather lookups"
)

login_failures_total = Counter(
    "agriadvisor_login_failures_total",
    "Total rejected logins"
)


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for monitoring and metrics collection"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics"""
        start_time = time.time()

        method = request.method
        endpoint = request.url.path

        # Add request ID for tracing
        request_id = request.headers.get("x-request-id", f"req_{int(time.time() * 1000)}")
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            status = response.status_code

            duration = time.time() - start_time
            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            http_request_duration_seconds.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            if duration > 1.0:
                logger.warning(
                    f"Slow request detected: {method} {endpoint}",
                    extra={
                        "request_id": request_id,
                        "method": method,
                        "path": endpoint,
                        "duration": duration,
                        "status": status
                    }
                )

            if status >= 400:
                http_errors_total.labels(
                    method=method,
                    endpoint=endpoint,
                    status=status
                ).inc()

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.3f}s"

            return response

        except Exception as e:
            duration = time.time() - start_time
            http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                status=500
            ).inc()

            logger.error(
                f"Request failed: {method} {endpoint}",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": endpoint,
                    "duration": duration,
                    "error": str(e)
                },
                exc_info=True
            )
            raise


def record_recommendation(season: str, soil_type: str, fallback: bool):
    """Record a served recommendation"""
    recommendations_total.labels(
        season=season or "none",
        soil_type=soil_type or "none",
        fallback=str(fallback)
    ).inc()


def record_ledger_size(size: int):
    """Publish the current ledger length"""
    ledger_entries_gauge.set(size)


def record_weather_failure():
    weather_failures_total.inc()


def record_login_failure():
    login_failures_total.inc()
