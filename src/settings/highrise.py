import logging
from typing import FrozenSet

from .base import BaseSettings

logger = logging.getLogger(__name__)


class HighriseSettings(BaseSettings):
    """
    Settings for the Highrise CRM account being polled.
    """

    def __init__(self):
        # Always ends with exactly one slash so links can be appended
        self.url = self._normalize_url(self.get_env("HIGHRISE_URL", ""))

        self.token = self.get_env("HIGHRISE_TOKEN", "")

        # Recordings visible to one of these groups are posted
        self.groups: FrozenSet[int] = frozenset(
            self.get_int_list_env("HIGHRISE_GROUPS", [])
        )

        # Post recordings visible to everyone
        self.show_everyone = self.get_bool_env("EVERYONE", False)

        self.timeout = self.get_float_env("HIGHRISE_TIMEOUT", 30.0)

        self.page_size = self.get_int_env("HIGHRISE_PAGE_SIZE", 25)

    @staticmethod
    def _normalize_url(url: str) -> str:
        if not url:
            return ""
        return url.rstrip("/") + "/"

    def is_configured(self) -> bool:
        """
        Check that the account URL and API token are set.

        Returns:
            bool: True when both are present
        """
        return bool(self.url) and bool(self.token)
