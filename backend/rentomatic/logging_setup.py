"""
Rentomatic Backend - Logging Configuration
===========================================

What:  Configures the root logger for the web application and the CLI.
How:   One stdout handler (Docker captures stdout) with a fixed format, and
       quieter levels for chatty third-party loggers.

Format: 2024-01-15T12:00:00 [INFO] rentomatic.access: GET /rooms 200 3.1ms [a1b2c3d4] from 10.0.0.2
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing logging config (gunicorn, pytest)
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
