from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.limits import ApiLimits, RateLimiter
from app.logging.logger import Log
from app.pipeline.submission_pipeline import SubmissionPipeline
from app.submission.exceptions import SubmissionError

SUCCESS_MESSAGE = "Gutachten erfolgreich übermittelt"
INVALID_BODY_MESSAGE = "Ungültige Formulardaten"
TOO_MANY_REQUESTS_MESSAGE = (
    "Zu viele Anfragen von dieser IP-Adresse. Versuchen Sie es später erneut."
)
TOO_MANY_SUBMISSIONS_MESSAGE = "Zu viele Formulareinsendungen. Bitte warten Sie 10 Minuten."
BODY_TOO_LARGE_MESSAGE = "Anfrage zu groß"
NOT_FOUND_MESSAGE = "Route nicht gefunden"
INTERNAL_ERROR_MESSAGE = SubmissionError.user_message

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def create_app(
    pipeline: SubmissionPipeline,
    cors_origins: list[str] | None = None,
    limits: ApiLimits | None = None,
) -> FastAPI:
    """Build the HTTP surface around an already configured pipeline."""
    limits = limits or ApiLimits()
    request_limiter = RateLimiter(limits.requests_per_window, limits.window_seconds)
    submit_limiter = RateLimiter(limits.submissions_per_window, limits.submission_window_seconds)

    app = FastAPI(title="DS Gutachten API", version="1.0.0")
    app.state.pipeline = pipeline

    # added before CORS so 413/429 responses still carry CORS headers
    @app.middleware("http")
    async def enforce_limits(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if not request_limiter.is_allowed(_client_key(request)):
            Log.warning(f"Rate limit hit by {_client_key(request)} on {request.url.path}")
            return _failure(429, TOO_MANY_REQUESTS_MESSAGE)
        if request.method in _BODY_METHODS and await _body_size(request) > limits.max_body_bytes:
            Log.warning(f"Rejected oversized body from {_client_key(request)}")
            return _failure(413, BODY_TOO_LARGE_MESSAGE)
        return await call_next(request)

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
        Log.warning(f"Rejected submission body: {exc.errors()}")
        return _failure(400, INVALID_BODY_MESSAGE)

    @app.exception_handler(404)
    async def not_found(request: Request, _exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": NOT_FOUND_MESSAGE, "path": request.url.path},
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        Log.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _failure(500, INTERNAL_ERROR_MESSAGE)

    @app.get("/health")
    def health() -> dict[str, Any]:
        services = pipeline.services
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {"notion": services.notion, "googleDrive": services.google_drive},
        }

    @app.post("/api/submit-gutachten")
    def submit_gutachten(request: Request, payload: dict[str, Any] = Body(...)) -> JSONResponse:
        if not submit_limiter.is_allowed(_client_key(request)):
            Log.warning(f"Submission limit hit by {_client_key(request)}")
            return _failure(429, TOO_MANY_SUBMISSIONS_MESSAGE)

        try:
            result = pipeline.run(payload)
        except SubmissionError as exc:
            Log.error(f"Form submission rejected: {exc}")
            return _failure(500, exc.user_message)

        if not result.success:
            return _failure(500, result.message)
        return JSONResponse(
            status_code=200,
            content={"success": True, "message": SUCCESS_MESSAGE, "data": result.to_dict()},
        )

    return app


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def _body_size(request: Request) -> int:
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit():
        return int(declared)
    # chunked upload: buffer it once, the route reads the cached body
    return len(await request.body())
