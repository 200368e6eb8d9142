"""Logging configuration for content negotiation.

What the package logs, by level:

- DEBUG: middleware setup options, the negotiated format and which signal
  chose it (extension, query parameter, Accept entry), resolved API versions,
  skipped Accept entries, request bodies left unparsed or failing to decode.
- INFO: the versioning strategy picked by build_pipeline, requests rejected
  for an unsupported API version.
- WARNING: responses sent without Content-Type because the format has no
  registered content type.
- ERROR: response values that an encoder failed on or returned a non-bytes
  value for.

The default level is ERROR, so only encoding failures show up unless
CONTENT_NEGOTIATION_LOG_LEVEL (or LOG_LEVEL) lowers it.
"""

import logging
import os
import sys


def get_logger(name: str = "content_negotiation") -> logging.Logger:
    """Get a configured logger for the package.

    The logger uses CONTENT_NEGOTIATION_LOG_LEVEL (or LOG_LEVEL) to determine the log level.
    If not set, defaults to ERROR level, which effectively disables most package logging.

    Returns:
        Configured logger instance for the package.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = os.getenv(
            "CONTENT_NEGOTIATION_LOG_LEVEL", os.getenv("LOG_LEVEL", "ERROR")
        ).upper()

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "[%(levelname)s] %(name)s - %(filename)s:%(lineno)d: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        # Numeric levels ("10") are passed through as ints
        logger.setLevel(int(level) if level.isdigit() else level)

        logger.propagate = False

    return logger


# Package logger instance
logger = get_logger()
