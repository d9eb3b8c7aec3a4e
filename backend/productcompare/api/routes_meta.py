import os
from fastapi import APIRouter

from productcompare.core.config import settings

router = APIRouter(tags=["meta"])


# GET /
@router.get("/")
def root():
    return {
        "name": "Amazon Product Comparison API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "version": "/version",
    }


# GET /health
@router.get("/health")
def health():
    return {"ok": True}


# GET /version
@router.get("/version")
def version():
    return {
        "version": settings.APP_VERSION,
        "build": settings.BUILD_ID,
        "git_commit": os.environ.get("GIT_COMMIT"),
    }
