"""
Run the weather cache API under uvicorn.

Usage:
    python -m services.weatherapi
"""

import logging

import uvicorn

from services.weatherapi.config import settings


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "services.weatherapi.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
