"""Run the standalone server: ``python -m app``."""

import uvicorn

from app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,  # app.core.logging owns the configuration
    )


if __name__ == "__main__":
    main()
