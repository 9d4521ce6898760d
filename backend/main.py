from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings
from core.exceptions import StockError
from core.logging import configure_logging
from core.stock import StockService
from db.store import JsonStore
from routers.logs import router as logs_router
from routers.stock import router as stock_router
from routers.uploads import router as uploads_router

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    store = JsonStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init()
        logger.info("Stock service ready", sections=list(settings.sections), data_dir=settings.data_dir)
        yield

    app = FastAPI(
        title="Stock Sections API",
        description="Per-size stock across fixed sections, with a transaction log",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.stock_service = StockService(store, settings.sections)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StockError)
    async def stock_error_handler(request: Request, exc: StockError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body", path=request.url.path, errors=exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid input data"})

    # Stock adjustment routes
    app.include_router(stock_router, prefix="/stock", tags=["stock"])
    app.include_router(uploads_router, tags=["uploads"])
    app.include_router(logs_router, tags=["logs"])

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server starting", port=default_settings.port)
    uvicorn.run("main:app", host=default_settings.host, port=default_settings.port)
