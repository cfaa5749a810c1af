"""
Application entrypoint.

``create_app`` configures logging, installs the session store on
``app.state`` and registers the routers and the error handlers that turn
every failure into the ``{"success": false, "message": ...}`` envelope.
Run with::

    uvicorn app.main:app --reload
"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import MarketplaceError
from app.core.logging_config import setup_logging
from app.core.sessions import SessionStore
from app.db.base import Base, engine
from app.api.routes import auth
from app.api.routes import sitters as sitters_router
from app.api.routes import bookings as bookings_router
from app.api.routes import review as review_router
from app.api.routes import contact as contact_router

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict:
    return {"success": False, "message": message, "data": None}


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown routes, wrong methods and other framework-raised errors
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=400, content=_error_body("; ".join(problems) or "Invalid request"))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def create_app(session_store: Optional[SessionStore] = None) -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.session_store = session_store or SessionStore(ttl=timedelta(hours=settings.session_ttl_hours))

    @app.on_event("startup")
    def startup():
        Base.metadata.create_all(bind=engine)

    @app.get("/")
    def root():
        return {"message": "Purrfect Sitters API running"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth.router)
    app.include_router(sitters_router.router)
    app.include_router(bookings_router.router)
    app.include_router(review_router.router)
    app.include_router(contact_router.router)

    return app


app = create_app()
