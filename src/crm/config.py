from dataclasses import dataclass, field
from typing import FrozenSet

from src.settings.slack import DEFAULT_ICON_URL


@dataclass(frozen=True)
class SyncConfig:
    """Configuration consumed by a sync cycle."""

    # Highrise account URL, ending with a slash
    crm_base_url: str

    # Slack incoming webhook
    webhook_url: str

    # Group ids whose recordings are posted
    groups: FrozenSet[int] = field(default_factory=frozenset)

    # Post recordings visible to everyone
    show_everyone: bool = False

    # Message appearance
    username: str = "highrise"
    icon_url: str = DEFAULT_ICON_URL

    @classmethod
    def from_settings(cls, highrise_settings, slack_settings) -> "SyncConfig":
        """
        Build the sync configuration from the settings objects.

        Raises:
            ValueError: If the Highrise URL, token or Slack webhook is missing
        """
        missing = []
        if not highrise_settings.url:
            missing.append("HIGHRISE_URL")
        if not highrise_settings.token:
            missing.append("HIGHRISE_TOKEN")
        if not slack_settings.webhook_url:
            missing.append("SLACK_URL")
        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}"
            )

        return cls(
            crm_base_url=highrise_settings.url,
            webhook_url=slack_settings.webhook_url,
            groups=frozenset(highrise_settings.groups),
            show_everyone=highrise_settings.show_everyone,
            username=slack_settings.username,
            icon_url=slack_settings.icon_url,
        )
