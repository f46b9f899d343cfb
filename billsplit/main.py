import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from billsplit.api.assignments import router as assignments_router
from billsplit.api.participants import router as participants_router
from billsplit.api.sessions import router as sessions_router
from billsplit.api.summary import router as summary_router
from billsplit.core.config import settings
from billsplit.services.session_service import SessionStore

logger = logging.getLogger(__name__)


class TimingMiddleware:
    """Lightweight ASGI middleware, no BaseHTTPMiddleware overhead."""
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        t0 = time.perf_counter()
        status_code = 0

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        await self.app(scope, receive, send_wrapper)
        ms = int((time.perf_counter() - t0) * 1000)
        method = scope.get("method", "?")
        path = scope.get("path", "?")
        qs = scope.get("query_string", b"").decode()
        qs_str = f"?{qs}" if qs else ""
        logger.info(f"TIMING: {method} {path}{qs_str} -> {status_code} in {ms}ms")


def create_app(sessions: SessionStore | None = None) -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title=settings.app_name, version="0.1.0")
    # Split sessions only live as long as this process
    app.state.sessions = sessions if sessions is not None else SessionStore()

    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(sessions_router)
    app.include_router(participants_router)
    app.include_router(assignments_router)
    app.include_router(summary_router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
