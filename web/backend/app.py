#!/usr/bin/env python3
"""
Match Engine API - FastAPI Application

Serves stored matches and lets clients trigger recomputes.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:4004/docs - API Documentation (Swagger UI)
    - http://localhost:4004/redoc - Alternative API Documentation
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import get_config
from .dependencies import get_db
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import matches_router, pipeline_router
from .routers.pipeline import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Match Engine API",
    description="API for computing and viewing user-to-user matches",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Pipeline routes first: /calculate must win over /{user_id}
app.include_router(pipeline_router)
app.include_router(matches_router)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/health")
def health_check():
    """Liveness check endpoint."""
    return {"status": "UP", "service": "match-engine", "timestamp": _now_iso()}


@app.get("/readyz")
def readiness_check(db: Session = Depends(get_db)):
    """Readiness check: the database must answer."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "NOT_READY", "error": str(e), "timestamp": _now_iso()}
        )
    return {"status": "READY", "checks": {"database": "UP"}, "timestamp": _now_iso()}


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting Match Engine API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
