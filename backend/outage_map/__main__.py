import logging
import sys

import uvicorn

from outage_map.errors import ConfigError

logger = logging.getLogger("outage_map")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        from outage_map.config import settings
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info("Starting server on http://%s:%d", settings.host, settings.port)
    uvicorn.run("outage_map.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
