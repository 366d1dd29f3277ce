"""
Sentry instrumentation for the FastAPI service.
Server-side only. Strips sensitive headers, and the OpenWeatherMap API key
(the `appid` query parameter), from breadcrumbs and request data.
"""

import re
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from services.weatherapi.config import settings

SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}
FILTERED = "[FILTERED]"

_APPID_RE = re.compile(r"(appid=)[^&\s]*", re.IGNORECASE)


def _redact_appid(value: Any) -> Any:
    if isinstance(value, str):
        return _APPID_RE.sub(r"\g<1>" + FILTERED, value)
    return value


def _filter_headers(headers: Any) -> None:
    if isinstance(headers, dict):
        for key in list(headers.keys()):
            if key.lower() in SENSITIVE_HEADERS:
                headers[key] = FILTERED


def _strip_sensitive_data(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """before_send hook: strip auth headers, cookies and provider API keys."""
    if "breadcrumbs" in event:
        for breadcrumb in event["breadcrumbs"].get("values", []):
            data = breadcrumb.get("data", {})
            if isinstance(data, dict):
                _filter_headers(data.get("headers", {}))
                # httpx breadcrumbs carry the full provider URL
                for key in ("url", "http.query"):
                    if key in data:
                        data[key] = _redact_appid(data[key])
            if "message" in breadcrumb:
                breadcrumb["message"] = _redact_appid(breadcrumb["message"])

    request = event.get("request", {})
    if isinstance(request, dict):
        _filter_headers(request.get("headers", {}))
        for key in ("url", "query_string"):
            if key in request:
                request[key] = _redact_appid(request[key])
    return event


def setup_sentry() -> None:
    if not settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.app_name}@{settings.app_version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        before_send=_strip_sensitive_data,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )
