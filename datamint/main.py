import uvicorn

from datamint.api.app import create_app
from datamint.config.settings import Settings
from datamint.database.connection import close_pool, init_pool
from datamint.database.repositories.mint_record_repository import MintRecordRepository
from datamint.logging.logger import Log


def main() -> None:
    """Entry point: settings -> logging -> optional registry pool -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)

    registry: MintRecordRepository | None = None
    if settings.mint_registry_enabled:
        init_pool(settings)
        registry = MintRecordRepository()

    try:
        app = create_app(settings, registry=registry)
        Log.info(
            f"Starting datamint API on {settings.api_host}:{settings.api_port}",
            network=settings.ledger_network,
            provider=settings.ledger_provider,
        )
        uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
