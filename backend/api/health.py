from dataclasses import dataclass

from litestar import Controller, get
from litestar.datastructures import State

import core.db as db


@dataclass
class HealthResponse:
    status: str
    config_loaded: bool
    database_host: str | None = None
    database_connected: bool = False


class HealthController(Controller):
    path = "/api/health"
    tags = ["health"]

    @get()
    async def health_check(self, state: State) -> HealthResponse:
        config = state.config
        return HealthResponse(
            status="ok",
            config_loaded=config.loaded_from is not None,
            database_host=config.database.host or None,
            database_connected=await db.ping(),
        )
