import logging

import uvicorn

from .core.config import get_settings
from .main import create_app

logger = logging.getLogger("wealth_ranker")


def main() -> None:
    settings = get_settings()
    app = create_app(settings)
    base = f"http://localhost:{settings.port}"
    logger.info(
        "%s %s listening on %s (health: %s/api/health)",
        settings.app_name,
        settings.version,
        base,
        base,
        extra={
            "rates_ttl_seconds": settings.rates_cache_ttl_seconds,
            "countries_ttl_seconds": settings.countries_cache_ttl_seconds,
        },
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
