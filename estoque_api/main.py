import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from estoque_api.core.config import settings
from estoque_api.db.database import EntityStore
from estoque_api.routers.categoria import router as categoria_router
from estoque_api.routers.estoque import router as estoque_router
from estoque_api.routers.produto import router as produto_router
from estoque_api.services.exceptions import (
    ConflictError,
    ForeignKeyError,
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
    ValidationError,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ForeignKeyError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = EntityStore(
        settings.database_url,
        echo=settings.database_echo,
        pool_timeout=settings.database_pool_timeout,
    )
    await store.init()
    app.state.store = store
    yield
    await store.teardown()


app = FastAPI(
    title="Estoque API",
    description="API for managing categorias, produtos and estoque records",
    version="0.1.0",
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


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing or mistyped body fields are a 400, same as manager-side validation
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "error": "ValidationError"},
    )


app.include_router(categoria_router)
app.include_router(produto_router)
app.include_router(estoque_router)

if __name__ == "__main__":
    uvicorn.run("estoque_api.main:app", host=settings.api_host, port=settings.api_port, reload=settings.api_reload)
