"""
Main API module for urlalias.

Responsibilities:
    - Expose REST endpoints to create aliases, redirect by alias and delete records
    - Gate write endpoints behind HTTP Basic Auth
    - Map AliasStore errors to HTTP status codes and the response envelope

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - Storage, generator and logger are built from settings unless injected.
    - AliasStore owns the alias rules; routes only parse input and map results.

Run:
    uvicorn main:create_app --factory
    python main.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.config import build_users
from auth.dependencies import get_current_user
from urlalias.api.middleware import RequestContextMiddleware
from urlalias.api.response import STATUS_OK, Response, SaveResponse, error_response, ok
from urlalias.api.schemas import RESERVED_ALIASES, URLRequest, validation_message
from urlalias.config import Settings, load_settings
from urlalias.logger import setup_logger
from urlalias.manager.alias_store import AliasStore
from urlalias.manager.strategies import BaseStrategy
from urlalias.storage.base import BaseStorage
from urlalias.storage.errors import (
    AliasExistsError,
    AliasSpaceExhaustedError,
    InvalidInputError,
    StorageError,
    URLNotFoundError,
)
from urlalias.storage.storage_factory import get_storage


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[BaseStorage] = None,
    generator: Optional[BaseStrategy] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        settings (Optional[Settings]): Configuration; loaded from env when omitted.
        storage (Optional[BaseStorage]): Backend; chosen from settings when omitted.
        generator (Optional[BaseStrategy]): Alias candidate source; random when omitted.
        logger (Optional[logging.Logger]): Service logger; set up from settings.env when omitted.

    Returns:
        FastAPI: A configured application with its own AliasStore.
    """
    settings = settings or load_settings()
    log = logger or setup_logger(settings.env)
    if storage is None:
        storage = get_storage(
            settings.storage_backend,
            dsn=settings.db_dsn,
            statement_timeout_ms=int(settings.http_timeout * 1000),
        )

    alias_store = AliasStore(
        storage=storage,
        generator=generator,
        alias_length=settings.alias_length,
        max_attempts=settings.max_attempts,
        logger=log,
        reserved=RESERVED_ALIASES,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("starting urlalias", extra={"env": settings.env, "storage": type(storage).__name__})
        storage.init_schema()
        yield
        storage.close()
        log.info("storage closed")

    app = FastAPI(
        title="urlalias",
        description="URL shortener: short aliases that redirect to target URLs",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.users = build_users(settings)
    app.state.alias_store = alias_store
    app.add_middleware(RequestContextMiddleware, logger=log, timeout=settings.http_timeout)

    # ----------------------------------------------------------------
    # Error envelopes
    # ----------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        msg = validation_message(exc)
        log.info("invalid request", extra={"request_id": request.state.request_id, "error": msg})
        return error_response(400, msg)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        log.error("unhandled error", exc_info=exc)
        return error_response(500, "internal error")

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/health")
    def health():
        return {"status": STATUS_OK}

    @app.post(
        "/url",
        response_model=SaveResponse,
        response_model_exclude_none=True,
        dependencies=[Depends(get_current_user)],
    )
    def save_url(req: URLRequest, request: Request):
        """
        Store a URL under the requested alias, or a generated one.

        Errors:
            400 malformed alias, 409 alias taken, 503 alias space exhausted,
            500 storage failure.
        """
        extra = {"op": "handlers.url.save", "request_id": request.state.request_id}
        try:
            record = alias_store.create(req.url, req.alias or "")
        except InvalidInputError as exc:
            log.info("invalid input", extra={**extra, "error": str(exc)})
            return error_response(400, str(exc))
        except AliasExistsError:
            log.info("alias already exists", extra={**extra, "alias": req.alias})
            return error_response(409, "alias already exists")
        except AliasSpaceExhaustedError:
            log.error("alias space exhausted", extra=extra)
            return error_response(503, "alias space exhausted")
        except StorageError:
            log.error("failed to add url", extra=extra, exc_info=True)
            return error_response(500, "failed to add url")

        log.info("url added", extra={**extra, "alias": record.alias, "id": record.id})
        return SaveResponse(status=STATUS_OK, alias=record.alias, id=record.id)

    @app.delete(
        "/url/{record_id}",
        response_model=Response,
        response_model_exclude_none=True,
        dependencies=[Depends(get_current_user)],
    )
    def delete_url(record_id: str, request: Request):
        """Delete a record by id. 400 for a non-integer id, 404 when absent."""
        extra = {"op": "handlers.url.delete", "request_id": request.state.request_id}
        try:
            parsed_id = int(record_id)
        except ValueError:
            log.info("can't parse url id", extra={**extra, "raw_id": record_id})
            return error_response(400, "invalid id")

        try:
            alias_store.delete(parsed_id)
        except URLNotFoundError:
            log.info("url id not found", extra={**extra, "id": parsed_id})
            return error_response(404, "url id not found")
        except StorageError:
            log.error("failed to delete url", extra=extra, exc_info=True)
            return error_response(500, "failed to delete url")

        log.info("url deleted", extra={**extra, "id": parsed_id})
        return ok()

    @app.get("/{alias}")
    def redirect(alias: str, request: Request):
        """Redirect (302) to the URL stored under `alias`."""
        extra = {"op": "handlers.redirect", "request_id": request.state.request_id, "alias": alias}
        try:
            url = alias_store.get(alias)
        except URLNotFoundError:
            log.info("url not found", extra=extra)
            return error_response(404, "not found")
        except StorageError:
            log.error("failed to get url", extra=extra, exc_info=True)
            return error_response(500, "internal error")

        log.info("got url", extra={**extra, "url": url})
        return RedirectResponse(url=url, status_code=302)

    return app


def run() -> None:
    """Start the HTTP server with settings from the environment."""
    settings = load_settings()
    log = setup_logger(settings.env)
    log.info("starting http-server", extra={"address": f"{settings.http_host}:{settings.http_port}"})
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=settings.http_host,
        port=settings.http_port,
        timeout_keep_alive=settings.http_idle_timeout,
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )
    log.info("server stopped")


if __name__ == "__main__":
    run()
