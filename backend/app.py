import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide

from core.config import AppConfig
from core.auth import provide_current_user
from core.db import init_pool, close_pool
from core.errors import exception_handlers
from core.middleware import SessionMiddleware
from core.observability import build_logging_config
from core.password import configure_hasher
from core.store import StoreFactory, pg_store, provide_store
from api.addresses import AddressesController
from api.contacts import ContactsController
from api.health import HealthController
from api.users import UsersController


logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    store_factory: StoreFactory | None = None,
) -> Litestar:
    """Build the API.

    With no store_factory the app opens a PostgreSQL pool on startup and
    serves every request from it.
    """
    config = config or AppConfig.load()
    configure_hasher(config.password)

    lifespan = []
    if store_factory is None:
        store_factory = pg_store

        @asynccontextmanager
        async def database_lifespan(app: Litestar) -> AsyncGenerator[None, None]:
            logger.info("Config loaded: database=%s", config.database.host)
            if config.database.host:
                await init_pool(config.database.conninfo)
            yield
            await close_pool()

        lifespan.append(database_lifespan)

    return Litestar(
        route_handlers=[
            HealthController,
            UsersController,
            ContactsController,
            AddressesController,
        ],
        dependencies={
            "store": Provide(provide_store),
            "current_user": Provide(provide_current_user),
        },
        middleware=[SessionMiddleware],
        exception_handlers=exception_handlers,
        logging_config=build_logging_config(config.logging),
        state=State({"config": config, "store_factory": store_factory}),
        lifespan=lifespan,
    )


app = create_app()
