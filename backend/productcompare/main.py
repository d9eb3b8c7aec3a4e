"""
Amazon Product Comparison API - FastAPI Main Entry

LOCAL:
    cd backend
    python -m uvicorn productcompare.main:app --reload --host 0.0.0.0 --port 3000

    Needs SCRAPINGDOG_API_KEY (or API_KEY) in the environment or backend/.env.

TEST:
    curl -i http://127.0.0.1:3000/health
    curl -i "http://127.0.0.1:3000/api/product?asin=B07ZPKN6YR"
    curl -i "http://127.0.0.1:3000/api/compare?product1=B07ZPKN6YR&product2=B07ZPKBL9V"

PRODUCTION:
    Start Command:
        python -m uvicorn productcompare.main:app --host 0.0.0.0 --port $PORT
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from productcompare.api.routes_compare import router as compare_router
from productcompare.api.routes_meta import router as meta_router
from productcompare.api.routes_product import router as product_router
from productcompare.core.config import settings
from productcompare.core.errors import ProductCompareError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


async def product_compare_error_handler(request: Request, exc: ProductCompareError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Amazon Product Comparison API",
        version=settings.APP_VERSION,
        description="Fetches Amazon products via ScrapingDog and compares them side by side",
    )

    # The browser front end may be served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    app.add_exception_handler(ProductCompareError, product_compare_error_handler)

    # Mount routers
    app.include_router(meta_router)
    app.include_router(product_router)
    app.include_router(compare_router)

    return app


app = create_app()
