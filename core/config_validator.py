# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings.
    """
    warnings = []

    if settings.DEFAULT_INQUIRY_PRIORITY not in ("low", "medium", "high", "urgent"):
        warnings.append(
            f"DEFAULT_INQUIRY_PRIORITY={settings.DEFAULT_INQUIRY_PRIORITY!r} is not a valid priority"
        )
    if settings.DEFAULT_PAGE_SIZE > settings.MAX_PAGE_SIZE:
        warnings.append("DEFAULT_PAGE_SIZE is larger than MAX_PAGE_SIZE")

    return warnings


def validate_config_on_startup(strict: bool = False):
    """
    Validate configuration on application startup.

    Missing database credentials are logged; with strict=True they raise
    RuntimeError instead, which is what production deploys use.
    """
    missing_required = validate_required_config()
    warnings = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        if strict:
            raise RuntimeError(error_msg)

    for warning in warnings:
        logger.warning(f"Configuration warning: {warning}")

    if not missing_required and not warnings:
        logger.info("Configuration validation passed")
