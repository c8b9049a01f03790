import logging
import sys

from cinelog.core.config import settings

TMDB_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] tmdb: %(message)s"

logger = logging.getLogger("tmdb_client")
logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

# Attach once, the module may be imported from several entry points.
if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(TMDB_LOG_FORMAT, "%H:%M:%S"))
    logger.addHandler(stream)

logger.propagate = False
