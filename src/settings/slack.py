from .base import BaseSettings

DEFAULT_ICON_URL = "http://68.media.tumblr.com/avatar_079aaa3d2066_128.png"


class SlackSettings(BaseSettings):
    """
    Settings for the Slack incoming webhook that receives the messages.
    """

    def __init__(self):
        self.webhook_url = self.get_env("SLACK_URL", "")

        self.username = self.get_env("SLACK_USERNAME", "highrise")

        self.icon_url = self.get_env("SLACK_ICON_URL", DEFAULT_ICON_URL)

        self.timeout = self.get_float_env("SLACK_TIMEOUT", 30.0)

        # Message body truncation, off unless enabled
        self.truncate = self.get_bool_env("SLACK_TRUNCATE", False)
        self.truncate_max_chars = self.get_int_env(
            "SLACK_TRUNCATE_MAX_CHARS", 700
        )
        self.truncate_max_lines = self.get_int_env(
            "SLACK_TRUNCATE_MAX_LINES", 5
        )

    def is_configured(self) -> bool:
        return bool(self.webhook_url)
