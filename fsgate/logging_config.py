from __future__ import annotations

import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level_name: str = 'info') -> logging.Logger:
    """Send all records to stderr; stdout is reserved for the MCP stdio transport."""
    root_logger = logging.getLogger()
    level = getattr(logging, level_name.upper(), None)
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.INFO

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logger = logging.getLogger('fsgate')
    if unknown:
        logger.warning('Unknown log level %r, falling back to INFO', level_name)
    return logger
