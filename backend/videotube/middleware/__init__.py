"""Middleware modules for production-ready features"""
from videotube.middleware.monitoring import (
    MonitoringMiddleware,
    record_login,
    record_reaction_toggle,
    record_refresh,
    record_subscription_toggle,
)
from videotube.middleware.rate_limit import credential_limit, limiter

__all__ = [
    "MonitoringMiddleware",
    "record_login",
    "record_refresh",
    "record_reaction_toggle",
    "record_subscription_toggle",
    "credential_limit",
    "limiter",
]
