from pathlib import Path

from .base import BaseSettings


class AppSettings(BaseSettings):
    """
    General application settings.
    """

    def __init__(self):
        self.app_name = self.get_env("APP_NAME", "highrise-slack")

        self.debug = self.get_bool_env("DEBUG", False)

        # Checkpoint file and optional log files live here
        self.data_dir = self.get_env("DATA_DIR", "/var/lib/highrise-slack")

        # Logging
        self.log_level = self.get_env(
            "LOG_LEVEL", "DEBUG" if self.debug else "INFO"
        ).upper()
        self.log_json = self.get_bool_env("LOG_JSON", False)
        self.log_to_file = self.get_bool_env("LOG_TO_FILE", False)

        # Celery broker/backend
        self.redis_url = self.get_env("REDIS_URL", "redis://localhost:6379")

        # How often a sync cycle is scheduled
        self.sync_interval_seconds = self.get_int_env(
            "SYNC_INTERVAL_SECONDS", 60
        )

    @property
    def checkpoint_file(self) -> Path:
        """Path of the JSON file holding the last synced checkpoint."""
        return Path(
            self.get_env(
                "CHECKPOINT_FILE", str(Path(self.data_dir) / "checkpoint.json")
            )
        )
