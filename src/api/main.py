import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import BadRequest, TodoApiError
from .logging_setup import setup_logging
from .settings import get_settings
from .routers import todos as todos_router

openapi_tags = [
    {
        "name": "todos",
        "description": "List todos with due/completion filters and create new todos.",
    },
]

_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_file)

logger = logging.getLogger(__name__)

# Only the todo routes answer; docs and schema routes are disabled so every other
# path falls through to the not_found handler.
app = FastAPI(
    title="Todo List API",
    description="Minimal API for listing and creating todos stored in SQLite.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("request.received method=%s path=%s", request.method, request.url.path)
    response = await call_next(request)
    logger.info(
        "request.completed method=%s path=%s status=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Unknown paths and known paths with the wrong method both answer 404 not_found.
    """
    if exc.status_code in (404, 405):
        logger.info("request.not_found method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=404, content={"error": "not_found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for malformed query strings and bodies.

    Response format:
        {
            "error": "<loc>: <msg>; ...",
            "detail": [{"loc": [...], "msg": "...", "type": "..."}, ...]
        }
    """
    detail = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in detail
    )
    error = BadRequest(message or "Bad request")
    logger.warning("request.invalid method=%s path=%s error=%s", request.method, request.url.path, error.message)
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message, "detail": detail},
    )


@app.exception_handler(TodoApiError)
async def todo_api_exception_handler(request: Request, exc: TodoApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request.failed method=%s path=%s kind=%s error=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
    else:
        logger.warning(
            "request.rejected method=%s path=%s kind=%s error=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Include routers
app.include_router(todos_router.router)
