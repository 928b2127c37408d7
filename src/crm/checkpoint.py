import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from src.util.date_utils import ensure_utc, parse_datetime, utc_now
from src.util.logging import get_logger

logger = get_logger(__name__)


class CheckpointStore:
    """Persists the last synced checkpoint in a small JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self, default: Optional[datetime] = None) -> datetime:
        """
        Read the stored checkpoint.

        Args:
            default: Returned when nothing is stored yet. Defaults to now, so
                a first run does not replay the account's history.

        Raises:
            ValueError: If the file exists but cannot be read as a checkpoint
        """
        if not self.path.exists():
            value = ensure_utc(default) if default else utc_now()
            logger.info(
                f"No checkpoint at {self.path}, starting from {value.isoformat()}"
            )
            return value

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return parse_datetime(data["checkpoint"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid checkpoint file {self.path}: {e}") from e

    def save(self, checkpoint: datetime) -> None:
        """Write the checkpoint, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(
            json.dumps({"checkpoint": ensure_utc(checkpoint).isoformat()}),
            encoding="utf-8",
        )
        tmp_path.replace(self.path)
        logger.debug(f"Saved checkpoint {checkpoint.isoformat()} to {self.path}")
