"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, and a cached ``get_settings()`` accessor.

IMPORTANT: This module imports only ``creatorpay.domain.types`` from the
package, to prevent circular imports.
"""

from __future__ import annotations

import sys
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from creatorpay.domain.types import CampaignType, PaymentPackage

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    Environment variables use the ``CREATORPAY_`` prefix, e.g.
    ``CREATORPAY_DB_PATH``.
    """

    model_config = SettingsConfigDict(
        env_prefix="creatorpay_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- General ---------------------------------------------------------------
    production: bool = False

    # -- Storage ---------------------------------------------------------------
    db_path: Path = Path("data/creatorpay.db")
    creators_key: str = "creators"
    leads_key: str = "creator_leads"

    # -- Calculator defaults ---------------------------------------------------
    default_revenue_share_percent: Decimal = Decimal("15")
    default_campaign_type: CampaignType = CampaignType.LINK_IN_BIO
    default_payment_package: PaymentPackage = PaymentPackage.SINGLE

    @field_validator("default_revenue_share_percent")
    @classmethod
    def share_within_bounds(cls, v: Decimal) -> Decimal:
        """Ensure the default revenue share lies in ``[10, 30]``."""
        if not Decimal("10") <= v <= Decimal("30"):
            raise ValueError("default_revenue_share_percent must be between 10 and 30")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    The ``@lru_cache`` decorator ensures environment variables are parsed
    exactly once.  Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
