from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .core.config import Settings
from .core.errors import StockflowError, ValidationError
from .core.logging import configure_logging, get_logger
from .db.database import create_db_and_tables, create_engine_and_session_maker
from .routers.alerts import router as alerts_router
from .routers.products import router as products_router

logger = get_logger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    missing: list[str] = []
    invalid: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {err.get('msg', 'invalid value')}")
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    return "Invalid request: " + "; ".join(invalid)


async def stockflow_error_handler(request: Request, exc: StockflowError):
    if exc.status_code < 500:
        logger.info("rejected %s %s [%s]: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server Error"})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return await stockflow_error_handler(request, ValidationError(_validation_message(exc)))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine, session_maker = create_engine_and_session_maker(settings)
        app.state.engine = engine
        app.state.session_maker = session_maker
        await create_db_and_tables(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title="StockFlow API",
        description="Product provisioning and low-stock alerts",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StockflowError, stockflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(products_router, prefix="/products", tags=["products"])
    app.include_router(alerts_router, prefix="/companies", tags=["alerts"])
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("stockflow.main:app", host="0.0.0.0", port=8000, reload=True)
