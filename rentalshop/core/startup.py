"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from rentalshop.core.config import get_config
from rentalshop.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration (fail-fast)."""
    configure_logging()
    config = get_config()
    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "api_base_url": config.API_BASE_URL,
        },
    )
