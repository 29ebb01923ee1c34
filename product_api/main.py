# product_api/main.py
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Depends, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .core import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic,
)
from .database import RecordStore
from .errors import NotFound, PersistenceFailure, StorageUnavailable
from .logging_config import setup_logging
from .models import Product, ProductIn

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("product_api.access")

DESCRIPTION = "A FastAPI Product Management API with CRUD Operations"


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# ---------------------------
# Exception handlers
# ---------------------------
async def _not_found_handler(request: Request, exc: NotFound):
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return Response(status_code=404)


async def _persistence_failure_handler(request: Request, exc: PersistenceFailure):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ---------------------------
# Product endpoints
# ---------------------------
def _register_routes(app: FastAPI) -> None:
    # sync handlers: they run in the threadpool and store.lock serializes writers
    not_found = {404: {"description": "The product was not found"}}
    server_error = {500: {"description": "Some server error"}}

    @app.get("/products", tags=["Products"], summary="Returns the list of all the products",
             responses={200: {"description": "The list of the products"}})
    def list_products(store: RecordStore = Depends(get_store)):
        return list_products_logic(store)

    @app.get("/products/{product_id}", tags=["Products"], summary="Get the product by id",
             responses={200: {"model": Product}, **not_found})
    def get_product(product_id: str, store: RecordStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post("/products", tags=["Products"], summary="Create a new product",
              responses={200: {"model": Product}, **server_error})
    def create_product(payload: ProductIn, store: RecordStore = Depends(get_store),
                             cfg: Settings = Depends(get_settings)):
        return create_product_logic(store, payload.supplied_fields(), id_length=cfg.id_length)

    @app.put("/products/{product_id}", tags=["Products"], summary="Update the product by the id",
             responses={200: {"model": Product}, **not_found, **server_error})
    def update_product(product_id: str, payload: ProductIn, store: RecordStore = Depends(get_store)):
        return update_product_logic(store, product_id, payload.supplied_fields())

    @app.delete("/products/{product_id}", tags=["Products"], summary="Remove the product by id",
                responses={200: {"description": "The product was deleted"}, **server_error})
    def delete_product(product_id: str, store: RecordStore = Depends(get_store)):
        delete_product_logic(store, product_id)
        return Response(status_code=200)


# ---------------------------
# App factory
# ---------------------------
def create_app(store: Optional[RecordStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around ``store``.

    Without a store, one is opened on ``settings.db_path``. The store is
    loaded here, so an unreadable data file raises ``StorageUnavailable``
    before the app can serve anything.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file, settings.access_log)

    if store is None:
        store = RecordStore(settings.db_path, indent=settings.json_indent)
    store.load()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=DESCRIPTION,
        docs_url="/api-docs",
        openapi_tags=[{"name": "Products", "description": "The product inventory management API"}],
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        client = request.client.host if request.client else "-"
        access_logger.info('%s "%s %s" %d %.1fms', client, request.method,
                           request.url.path, response.status_code, elapsed_ms)
        return response

    app.add_exception_handler(NotFound, _not_found_handler)
    app.add_exception_handler(PersistenceFailure, _persistence_failure_handler)

    _register_routes(app)

    # front-end build, if one was shipped next to the API
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info("Serving static files from %s", static_dir.resolve())

    return app


def main() -> None:
    import uvicorn

    setup_logging(default_settings.log_level, default_settings.log_file, default_settings.access_log)
    try:
        app = create_app()
    except StorageUnavailable as e:
        logger.critical("Cannot start: %s", e)
        sys.exit(1)

    logger.info("The server is running on port %d", default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, access_log=False)


if __name__ == "__main__":
    main()
