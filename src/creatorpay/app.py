"""Application wiring: structlog configuration and service initialization.

Configures:
- **structlog** with JSON rendering (production) or colored console (development),
  written to stderr so command output on stdout stays machine-readable
- **State database** (SQLite, WAL mode) holding the creator and lead collections
- **Stores** and a **Calculator** seeded with the configured defaults
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from creatorpay.calculator import Calculator
from creatorpay.config import Settings, get_settings
from creatorpay.domain.models import CreatorRecord, Lead
from creatorpay.store.creators import CreatorRecordStore
from creatorpay.store.leads import LeadStore
from creatorpay.store.repository import SqliteRepository
from creatorpay.store.schema import close_state_db, init_state_db

logger = structlog.get_logger()


def configure_logging(production: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Resolve the output stream on every call so reconfiguration takes effect.
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.bind_contextvars(service="creatorpay")


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Set up all shared services for the application.

    Opens the state database (creating its parent directory if needed),
    then builds the creator store, lead store, and a calculator seeded with
    the configured defaults.

    Args:
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        A dict of initialized service instances keyed by name.
    """
    if settings is None:
        settings = get_settings()

    services: dict[str, Any] = {"settings": settings}

    db_path = settings.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = init_state_db(db_path)
    services["state_conn"] = conn

    services["creator_store"] = CreatorRecordStore(
        SqliteRepository(conn, settings.creators_key, CreatorRecord)
    )
    services["lead_store"] = LeadStore(SqliteRepository(conn, settings.leads_key, Lead))
    services["calculator"] = Calculator(
        campaign_type=settings.default_campaign_type,
        payment_package=settings.default_payment_package,
        revenue_share_percent=settings.default_revenue_share_percent,
    )

    logger.info("services_initialized", db_path=str(db_path))
    return services


def shutdown_services(services: dict[str, Any]) -> None:
    """Release resources opened by ``initialize_services``."""
    conn = services.get("state_conn")
    if conn is not None:
        close_state_db(conn)
