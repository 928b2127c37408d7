"""
Settings module, the single place where configuration is read.
Each settings class reads its own group of environment variables.
"""

import logging

from .app import AppSettings
from .highrise import HighriseSettings
from .sentry import SentrySettings
from .slack import SlackSettings

logger = logging.getLogger(__name__)

# Private variables holding the settings instances
_app_settings = None
_highrise_settings = None
_slack_settings = None
_sentry_settings = None


# Lazy loading functions
def get_app_settings():
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def get_highrise_settings():
    global _highrise_settings
    if _highrise_settings is None:
        _highrise_settings = HighriseSettings()
        if not _highrise_settings.is_configured():
            logger.warning(
                "HIGHRISE_URL or HIGHRISE_TOKEN is not set. Sync cycles will fail."
            )
    return _highrise_settings


def get_slack_settings():
    global _slack_settings
    if _slack_settings is None:
        _slack_settings = SlackSettings()
    return _slack_settings


def get_sentry_settings():
    global _sentry_settings
    if _sentry_settings is None:
        _sentry_settings = SentrySettings()
    return _sentry_settings


app_settings = get_app_settings()
highrise_settings = get_highrise_settings()
slack_settings = get_slack_settings()
sentry_settings = get_sentry_settings()

__all__ = [
    "AppSettings",
    "HighriseSettings",
    "SlackSettings",
    "SentrySettings",
    "app_settings",
    "highrise_settings",
    "slack_settings",
    "sentry_settings",
    "get_app_settings",
    "get_highrise_settings",
    "get_slack_settings",
    "get_sentry_settings",
]
