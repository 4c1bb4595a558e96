"""Greeting Service: FastAPI application factory.

Builds the app served by the serverless entry points in
src/serverless.py and src/lambda_handler.py.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.router import build_api_router
from src.config.settings import get_settings
from src.logging.structured import (
    RequestTimer,
    generate_request_id,
    get_logger,
    request_id_var,
    setup_logging,
)

VERSION = "1.0.0"

INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}


def create_app() -> FastAPI:
    """Build the FastAPI app: root route, API router, request logging."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(title=settings.app_name, version=VERSION)

    @app.get("/")
    async def root():
        """Fixed payload showing the server is up."""
        return {"oi": "mãe"}

    app.include_router(build_api_router(settings.api_prefix))

    app.middleware("http")(log_requests)
    app.add_exception_handler(Exception, internal_error_handler)

    get_logger().info(
        "Application built",
        extra={"log_data": {"version": VERSION, "api_prefix": settings.api_prefix}},
    )
    return app


async def log_requests(request: Request, call_next):
    """Tag each request with an id and log its outcome and latency.

    Reuses the id assigned by the serverless entry point when there is one.
    """
    rid = request_id_var.get() or generate_request_id()
    token = request_id_var.set(rid)
    try:
        with RequestTimer() as timer:
            response = await call_next(request)

        get_logger().info(
            "Request completed",
            extra={"log_data": {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": timer.elapsed_ms,
            }},
        )
        response.headers["X-Request-Id"] = rid
        return response
    finally:
        request_id_var.reset(token)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected errors with the generic 500 body.

    Logging happens at the serverless boundary, which sees the exception
    after this response is sent.
    """
    rid = request_id_var.get()
    headers = {"X-Request-Id": rid} if rid else None
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY, headers=headers)
