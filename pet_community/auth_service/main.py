"""
Pet Community auth service - registration, login and profile API
"""
from collections import defaultdict
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from .config import settings
from .db import init_db, close_db
from .errors import DomainError
from .routes import auth

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables on startup and release the connection pool on shutdown"""
    init_db()
    yield
    close_db()


app = FastAPI(
    title="Pet Community Auth Service",
    description="User registration, login and profile management",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    errors = defaultdict(list)
    for error in exc.errors():
        # Drop the leading "body"/"query" segment from the location
        field = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        errors[field].append(error["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Input validation failed", "errors": dict(errors)},
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(_request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Resource not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"message": "Internal server error"}
    if settings.is_development:
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Welcome to the Pet Community API"}


def run() -> None:
    logger.info("Starting server on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
