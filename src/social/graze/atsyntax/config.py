"""
Configuration for applications embedding the syntax validators.

The validators themselves take no configuration: grammar tables such as the
disallowed TLDs and TID alphabets are module constants. This module only sets
up the ambient concerns around them, namely logging and Sentry error
reporting, from environment variables via Pydantic settings.
"""

import json
import logging
from logging.config import dictConfig
from typing import Optional

import sentry_sdk
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Environment variable names match the field names (case-insensitive).
    """

    debug: bool = False
    """
    Enable DEBUG level logging, including the reasons behind rejected AT-URI
    authorities and collections.
    Set with DEBUG=true environment variable.
    """

    logging_config_file: str = ""
    """
    Path to a JSON file in ``logging.config.dictConfig`` format. When set it
    replaces the default logging setup.
    Set with LOGGING_CONFIG_FILE environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for reporting unexpected validator errors. Optional, no error
    reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    sentry_environment: str = Field(
        "development",
        validation_alias=AliasChoices("sentry_environment", "environment"),
    )
    """
    Environment name attached to Sentry events.
    Set with SENTRY_ENVIRONMENT or ENVIRONMENT environment variables.
    """


def configure_logging(settings: Settings) -> None:
    if len(settings.logging_config_file) > 0:
        with open(settings.logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if settings.debug else logging.INFO)


def configure_sentry(settings: Settings) -> bool:
    """Initialise Sentry if a DSN is configured. Returns whether it was."""
    if settings.sentry_dsn is None:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        debug=settings.debug,
    )
    return True


def configure(settings: Optional[Settings] = None) -> Settings:
    """Apply logging and Sentry configuration and return the settings used."""
    if settings is None:
        settings = Settings()
    configure_logging(settings)
    if configure_sentry(settings):
        logger.info("Sentry error reporting enabled")
    return settings
