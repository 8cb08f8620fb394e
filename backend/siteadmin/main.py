"""Site Admin Backend Application.

This is the main entry point for the site admin service. The service backs
the static site's admin UI: it stores uploaded images next to the site and
saves the site content document.

Modules:
    - uploads: cover and event image uploads with filename sanitization
    - site_config: site content JSON writer
    - admin: credentials passthrough and ping
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from siteadmin import __version__
from siteadmin.admin.router import router as admin_router
from siteadmin.config import get_config
from siteadmin.site_config.router import router as site_config_router
from siteadmin.uploads.router import router as uploads_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# python-multipart logs every parsed part at DEBUG.
for _noisy in ("multipart", "python_multipart"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def registered_routes(app: FastAPI) -> list:
    """Return ``"METHODS /path"`` lines for every API route."""
    routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ",".join(sorted(route.methods))
            routes.append(f"{methods} {route.path}")
    return routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config = get_config()

    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    logger.info("Storage root: %s", config.storage.root)
    logger.info("Registered routes:\n%s", "\n".join(registered_routes(app)))

    yield  # Application runs here

    # Shutdown
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Site Admin API",
    description="Backend service for the site admin UI - uploads and content config",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        logger.warning("No route matched: %s %s", request.method, request.url)
        return JSONResponse({"error": "not_found"}, status_code=404)
    return await http_exception_handler(request, exc)


# Register all routers
app.include_router(uploads_router)
app.include_router(site_config_router)
app.include_router(admin_router)


def run() -> None:
    """Serve the application with uvicorn on the configured host/port."""
    config = get_config()
    logger.info("Admin server listening on http://%s:%s", config.server.host, config.server.port)
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    run()
