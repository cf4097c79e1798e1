"""Middleware setup for the FastAPI application."""

import logging
import re
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from starlette.middleware.base import RequestResponseEndpoint

from livestock_api.config import Settings

logger = logging.getLogger(__name__)

DEV_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


class CorsPolicy(BaseModel):
    """Single cross-origin policy: exact origins plus hostname suffixes.

    A suffix such as ".vercel.app" admits any http(s) origin whose host ends
    with it. An allowed origin of "*" admits every origin.
    """

    model_config = ConfigDict(frozen=True)

    allowed_origins: frozenset[str] = frozenset()
    allowed_suffixes: frozenset[str] = frozenset()
    allow_credentials: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "CorsPolicy":
        origins: list[str] = []

        if settings.ui_url:
            ui_url = settings.ui_url.rstrip("/")
            origins.append(ui_url)
            if ui_url.startswith("http://"):
                origins.append(ui_url.replace("http://", "https://", 1))
            if ui_url.startswith("https://"):
                origins.append(ui_url.replace("https://", "http://", 1))

        origins.extend(origin.rstrip("/") for origin in settings.extra_allowed_origins)

        if settings.is_development:
            origins.extend(DEV_ORIGINS)

        return cls(
            allowed_origins=frozenset(origins),
            allowed_suffixes=frozenset(settings.allowed_suffixes),
            allow_credentials=settings.cors_allow_credentials,
        )

    @property
    def allows_any(self) -> bool:
        return "*" in self.allowed_origins

    def origin_regex(self) -> str | None:
        """Regex matching any origin whose host ends with an allowed suffix."""
        if not self.allowed_suffixes:
            return None
        alternatives = "|".join(
            re.escape(suffix if suffix.startswith(".") else f".{suffix}") for suffix in sorted(self.allowed_suffixes)
        )
        return rf"https?://[A-Za-z0-9.-]+(?:{alternatives})(?::\d+)?"

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return False
        if self.allows_any or origin in self.allowed_origins:
            return True
        regex = self.origin_regex()
        return regex is not None and re.fullmatch(regex, origin) is not None

    def headers_for(self, origin: str | None) -> dict[str, str]:
        """CORS headers for a response built outside the CORS middleware.

        Returns:
            Dictionary of CORS headers, empty if origin is not allowed
        """
        if not self.is_allowed(origin):
            return {}
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": "*",
            "Vary": "Origin",
        }
        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        return headers


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Log method, path, status and duration of each request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


def setup_middleware(app: FastAPI, policy: CorsPolicy) -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        policy: Cross-origin policy to enforce
    """
    app.middleware("http")(log_requests)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if policy.allows_any else sorted(policy.allowed_origins),
        allow_origin_regex=policy.origin_regex(),
        allow_credentials=policy.allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    logger.info(
        "CORS enabled for origins: %s, suffixes: %s",
        sorted(policy.allowed_origins),
        sorted(policy.allowed_suffixes),
    )
