"""
bnfparse Web - Main FastAPI Application

Entry point for the grammar parsing service. Serves the parse endpoint,
the playground page and the API description.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bnfparse import __version__
from bnfparse.config import BnfParseConfig
from bnfparse.web.api.routes import meta, parse

logger = logging.getLogger("bnfparse.web")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    config = app.state.config
    logger.info("Starting bnfparse web service...")
    logger.info(f"Playground: http://{config.host}:{config.port}/")
    logger.info(f"API docs: http://{config.host}:{config.port}/api/docs")

    yield

    logger.info("bnfparse web service shut down")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": True}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "error": True}
    )


async def health_check():
    """Simple health check endpoint."""
    return {
        "status": "ok",
        "service": "bnfparse",
        "version": __version__
    }


def create_app(config: Optional[BnfParseConfig] = None) -> FastAPI:
    """Build the FastAPI application for `config` (defaults when omitted)."""
    app = FastAPI(
        title="bnfparse API",
        description="Parses BNF grammar text into structured JSON",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.config = config or BnfParseConfig()

    # CORS middleware (the playground may be opened from another origin)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(parse.router, tags=["parse"])
    app.include_router(meta.router, tags=["meta"])
    app.add_api_route("/health", health_check, methods=["GET"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bnfparse.web.api.main:app",
        host=app.state.config.host,
        port=app.state.config.port,
        log_level="info"
    )
