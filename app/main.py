from contextlib import asynccontextmanager
import logging
from typing import Callable, Iterable, Optional

import aiohttp
from fastapi import FastAPI, Request
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette import status

from app.controllers.home_controller import HomeController
from app.routes.contracts import router as contracts_router
from app.routes.customers import router as customers_router
from app.routes.inventory import router as inventory_router
from app.routes.orders import router as orders_router
from app.routes.products import router as products_router
from app.services.config import AppConfig, StorageConfig
from app.services.setup.storage_setup_service import StorageSetupService
from app.services.storage_clients import StorageClients
from app.services.storage_errors import StorageNotFoundError, StorageServiceError
from app.web.controllers import Controller, map_controller_route
from app.web.middleware import StrictTransportSecurityMiddleware, error_page_redirect_handler

logger = logging.getLogger(__name__)

StorageClientsFactory = Callable[[StorageConfig, aiohttp.ClientSession], StorageClients]

DEFAULT_ROUTE_PATTERN = "{controller=Home}/{action=Index}/{id?}"


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


def _default_storage_clients(config: StorageConfig, session: aiohttp.ClientSession) -> StorageClients:
    return StorageClients.from_config(config, session=session)


def _build_lifespan(storage_clients_factory: StorageClientsFactory):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _ensure_logging()
        storage_config = StorageConfig.from_env()

        app.state.http_session = aiohttp.ClientSession()
        try:
            clients = storage_clients_factory(storage_config, app.state.http_session)
            app.state.storage_clients = clients
            app.state.storage_resources = storage_config.resources
            try:
                setup = StorageSetupService(clients=clients, resources=storage_config.resources)
                app.state.ensured_resources = await setup.ensure_resources()
                yield
            finally:
                await clients.close()
        finally:
            await app.state.http_session.close()

    return lifespan


async def storage_not_found_handler(request: Request, exc: StorageNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def storage_service_error_handler(request: Request, exc: StorageServiceError) -> JSONResponse:
    """Map storage service-layer failures to a consistent HTTP response.

    This keeps Azure SDK errors from leaking internal details to API consumers while still
    returning a predictable payload the frontend/clients can handle.

    Returns:
        502 Bad Gateway with a JSON body: {"detail": "..."}
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


def create_app(
    config: Optional[AppConfig] = None,
    *,
    storage_clients_factory: StorageClientsFactory = _default_storage_clients,
    controllers: Optional[Iterable[type[Controller]]] = None,
) -> FastAPI:
    cfg = config or AppConfig.from_env()
    app = FastAPI(
        title="ABC Retail",
        debug=cfg.is_development,
        lifespan=_build_lifespan(storage_clients_factory),
    )
    app.state.config = cfg

    # Starlette runs the last-added middleware first: HSTS wraps the HTTPS redirect.
    app.add_middleware(HTTPSRedirectMiddleware)
    if not cfg.is_development:
        app.add_middleware(
            StrictTransportSecurityMiddleware,
            max_age_seconds=cfg.hsts_max_age_seconds,
            include_subdomains=cfg.hsts_include_subdomains,
            preload=cfg.hsts_preload,
        )
        app.add_exception_handler(Exception, error_page_redirect_handler(cfg.error_path))

    app.add_exception_handler(StorageNotFoundError, storage_not_found_handler)
    app.add_exception_handler(StorageServiceError, storage_service_error_handler)

    app.mount("/static", StaticFiles(directory=str(cfg.static_dir)), name="static")

    app.include_router(products_router)
    app.include_router(orders_router)
    app.include_router(inventory_router)
    app.include_router(customers_router)
    app.include_router(contracts_router)

    map_controller_route(
        app,
        name="default",
        pattern=DEFAULT_ROUTE_PATTERN,
        controllers=controllers or [HomeController],
        templates=Jinja2Templates(directory=str(cfg.templates_dir)),
    )
    return app


app = create_app()
