import logging
import os
import sys
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.blog.routes import router as blog_router
from blog_api.database import connection
from blog_api.errors import BlogApiError, ValidationFailed
from blog_api.models.schemas import format_errors

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5000


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    connection.connect()
    yield
    connection.close()


app = FastAPI(title="Blog API", lifespan=lifespan)

# allow any origin, method and header
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BlogApiError)
async def blog_api_exception_handler(request: Request, exc: BlogApiError):
    if exc.status_code < 500:
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Malformed JSON bodies are reported like field errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    failure = ValidationFailed(format_errors(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=failure.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # the server logs the traceback once the exception is re-raised past this handler
    logger.error("Unhandled error on %s %s: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Something went wrong!"},
    )


app.include_router(blog_router, prefix="/api/blogs", tags=["blogs"])


@app.get("/api/health")
def health():
    return {"message": "Server is running successfully!"}


def run() -> None:
    setup_logging()
    try:
        connection.connect()
    except Exception:
        logger.exception("MongoDB connection error")
        sys.exit(1)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", DEFAULT_PORT))
    # uvicorn reports "Uvicorn running on ..." once the socket is bound
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "INFO").lower())


if __name__ == "__main__":
    run()
