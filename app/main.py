from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from datetime import datetime, timezone
import logging
import json
import os

from app.api.endpoints import contact, portfolio
from app.core.config import settings
from app.core.logging import setup_logging
from app.utils.request_logging_middleware import RequestLoggingMiddleware

setup_logging()

logger = logging.getLogger(__name__)

with open(os.path.join(os.path.dirname(__file__), "log_config.json"), "r") as file:
    LOGGING_CONFIG = json.load(file)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API serving portfolio data and relaying contact form messages",
    version="0.1.0",
    debug=settings.DEBUG,
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins(),
    allow_credentials="*" not in settings.allowed_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(
    contact.router,
    prefix=f"{settings.API_PREFIX}/contact",
    tags=["contact"],
)

app.include_router(
    portfolio.router,
    prefix=f"{settings.API_PREFIX}/portfolio",
    tags=["portfolio"],
)


@app.get("/api/health", tags=["status"])
async def health_check():
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def mount_frontend(application: FastAPI, directory: str) -> bool:
    """Serve a built front-end from ``directory`` at the site root.

    Must run after the API routers are included so that /api paths win.

    Returns:
        True if the directory exists and was mounted
    """
    if not directory or not os.path.isdir(directory):
        if directory:
            logger.warning(f"Front-end build directory not found: {directory}")
        return False

    application.mount("/", StaticFiles(directory=directory, html=True), name="frontend")
    logger.info(f"Serving front-end from {directory}")
    return True


if not mount_frontend(app, settings.FRONTEND_BUILD_DIR):

    @app.get("/", tags=["status"])
    async def root():
        return {"status": "online", "service": settings.PROJECT_NAME}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.DEBUG,
        log_config=LOGGING_CONFIG,
    )
