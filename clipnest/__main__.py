"""Run the clipnest API with uvicorn: ``python -m clipnest``."""

from urllib.parse import urlparse

import uvicorn

from clipnest.api.main import create_app
from clipnest.core.settings import get_clipnest_config


def main() -> None:
    settings = get_clipnest_config()
    url = urlparse(settings.URL)
    uvicorn.run(
        create_app(settings),
        host=url.hostname or "0.0.0.0",
        port=url.port or 8080,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
