"""Run the parkrank server: ``python -m parkrank``."""

import logging

import uvicorn

from parkrank.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("parkrank.web.app:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
