# gateway/api/shared.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from gateway.config import Settings, load_settings
from gateway.errors import GatewayError, ProviderError, RateLimited
from gateway.tools.notifications import TwilioProvider

logger = logging.getLogger(__name__)

# One counter per client across every limited route
RATE_LIMIT_SCOPE = "gateway"


def client_address(request: Request) -> str:
    """
    Rate-limit key for a request.

    Behind a reverse proxy (Render, Fly.io) every request arrives from the
    proxy's address. The proxy appends the address it saw to
    X-Forwarded-For, so with a trusted proxy the last hop is the real
    client; earlier hops are whatever the client chose to send.
    """
    settings: Settings = request.app.state.settings
    if settings.trust_proxy:
        forwarded = request.headers.get("X-Forwarded-For", "")
        last_hop = forwarded.split(",")[-1].strip()
        if last_hop:
            return last_hop
    return get_remote_address(request)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_provider(request: Request) -> TwilioProvider:
    return request.app.state.provider


async def rate_limit(request: Request):
    """Dependency that counts the request against the client's shared window."""
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return
    item = request.app.state.rate_limit_item
    key = client_address(request)
    if not limiter.limiter.hit(item, RATE_LIMIT_SCOPE, key):
        logger.warning(f"Rate limit exceeded for {key} on {request.url.path}")
        raise RateLimited(
            f"Too many requests from this IP, please try again later "
            f"(limit: {request.app.state.settings.rate_limit})."
        )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if isinstance(exc, ProviderError):
        content = {"error": f"Twilio Error: {exc.message}"}
        if exc.code is not None:
            content["code"] = exc.code
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
        content = {"error": exc.message}
    return JSONResponse(status_code=exc.status_code, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


def create_app(
    settings: Optional[Settings] = None, provider: Optional[TwilioProvider] = None
) -> FastAPI:
    """
    Build the gateway application.

    Settings are loaded from the environment when not given, so a missing
    credential raises ``ConfigurationError`` before any route is served.
    Each application owns its own rate limiter.
    """
    if settings is None:
        settings = load_settings()
    if provider is None:
        provider = TwilioProvider.from_settings(settings)

    app = FastAPI(
        title="Messaging Gateway API",
        description="Send SMS, WhatsApp messages and voice calls through Twilio",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.provider = provider

    # Rate limiting: sliding window, in memory, owned by this app
    app.state.limiter = Limiter(
        key_func=client_address,
        strategy="moving-window",
        storage_uri="memory://",
    )
    app.state.rate_limit_item = parse(settings.rate_limit)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from . import messages, system, uploads

    app.include_router(system.router)
    app.include_router(messages.router)
    app.include_router(uploads.router)

    logger.info(
        f"Messaging gateway configured: CORS origin {settings.frontend_url}, "
        f"rate limit {settings.rate_limit}, "
        f"uploads {'enabled' if settings.uploads_enabled else 'disabled'}"
    )
    return app
