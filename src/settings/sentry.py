import logging
from typing import Any, Callable, Dict, List, Optional

from .base import BaseSettings

logger = logging.getLogger(__name__)


class SentrySettings(BaseSettings):
    """
    Settings for Sentry error tracking.
    """

    def __init__(self):
        self.dsn = self.get_env("SENTRY_DSN", "")

        self.environment = self.get_env("SENTRY_ENVIRONMENT", "development")

        self.release = self.get_env("SENTRY_RELEASE", "0.1.0")

        self.traces_sample_rate = self.get_float_env(
            "SENTRY_TRACES_SAMPLE_RATE", 0.0
        )

        # Exception class names that are never reported
        self.non_reported_exceptions = self._get_non_reported_exceptions()

        self.enabled = self.get_bool_env("SENTRY_ENABLED", False)

    def _get_non_reported_exceptions(self) -> List[str]:
        """
        Exception class names that should not be sent to Sentry.

        Per-record failures are logged and skipped by the sync cycle, so
        they are excluded by default.
        """
        exceptions_str = self.get_env(
            "SENTRY_NON_REPORTED_EXCEPTIONS", "ParseError,DeliveryError"
        )
        return [ex.strip() for ex in exceptions_str.split(",") if ex.strip()]

    def is_configured(self) -> bool:
        """
        Check whether Sentry is enabled and has a DSN.

        Returns:
            bool: True if Sentry should be initialised
        """
        return self.enabled and bool(self.dsn)

    def get_before_send(
        self,
    ) -> Callable[[Dict[str, Any], Dict[str, Any]], Optional[Dict[str, Any]]]:
        """
        Build the before_send hook that drops non-reported exceptions.

        Returns:
            Callable: before_send function for the Sentry SDK
        """

        def before_send(
            event: Dict[str, Any], hint: Dict[str, Any]
        ) -> Optional[Dict[str, Any]]:
            if "exc_info" in hint:
                exc_type, exc_value, tb = hint["exc_info"]
                if exc_type.__name__ in self.non_reported_exceptions:
                    return None

            return event

        return before_send
