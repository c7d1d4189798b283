"""
Service metadata endpoints: landing, health and build information.
"""
import logging
import os

from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

from woodys.db.database import get_db

logger = logging.getLogger(__name__)

SERVICE_NAME = "woodys-service"

router = APIRouter(tags=["support"])


@router.get("/")
def home():
    return {"service_name": SERVICE_NAME, "message": "Welcome to the Woodys API"}


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Report service health including database reachability."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("health_check_failed error=%s", exc)
        return JSONResponse(
            {"status": "unhealthy", "service": SERVICE_NAME, "database": "unreachable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "healthy", "service": SERVICE_NAME, "database": "ok"}


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    return {
        "build_sha": os.getenv("BUILD_SHA") or None,
        "build_timestamp": os.getenv("BUILD_TIMESTAMP") or None,
        "image_tag": os.getenv("IMAGE_TAG") or None,
        "service_name": SERVICE_NAME,
        "version": os.getenv("VERSION", "unknown"),
    }
