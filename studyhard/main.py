"""
StudyHard — Assignment submission & peer grading backend
FastAPI entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from studyhard.core.config import settings
from studyhard.core.middleware import RequestLoggingMiddleware
from studyhard.routers import auth, assignments, submissions
from studyhard.utils.response import error_response

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("studyhard")

app = FastAPI(
    title=settings.APP_NAME,
    description="Assignments, submissions and peer grading with cookie-based JWT sessions",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(auth.router)
app.include_router(assignments.router)
app.include_router(submissions.router)


# ---------------------------------------------------------------------------
# Error rendering — every failure is {"success": false, "message": ...}
# ---------------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=error_response(
            message="Invalid request body",
            data=jsonable_encoder(exc.errors()),
        ),
    )


@app.exception_handler(APIError)
async def database_exception_handler(request: Request, exc: APIError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_response(message="Internal server error"),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_response(message="Internal server error"),
    )


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "study hard is started"


@app.get("/api/health")
async def health():
    return {"name": settings.APP_NAME, "status": "healthy", "environment": settings.ENVIRONMENT}
