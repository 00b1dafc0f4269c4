"""Run the hub with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from apkhub.app import create_app
from apkhub.config import HubConfig

logger = logging.getLogger(__name__)


def main() -> None:
    config = HubConfig()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    app = create_app(config)
    logger.info("APK Hub listening on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
