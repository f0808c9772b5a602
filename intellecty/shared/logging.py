"""Logging configuration for the application."""

import logging
import sys

from intellecty.core.config import get_settings
from intellecty.core.tenant_context import get_tenant_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [tenant=%(tenant_id)s] %(message)s"


class TenantContextFilter(logging.Filter):
    """Attach the current request's tenant ID (or "-") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tenant_id = get_tenant_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TenantContextFilter())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
    )
