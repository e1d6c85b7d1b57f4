from __future__ import annotations

import logging
import sys

import uvicorn

from .main import app
from .settings import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.env.carousel_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    uvicorn.run(
        app,
        host=settings.env.carousel_host,
        port=settings.env.carousel_port,
        log_level=settings.env.carousel_log_level.lower(),
    )


if __name__ == "__main__":
    main()
