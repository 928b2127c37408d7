"""
Wiring of settings, collaborators and checkpoint storage around a sync cycle.
"""

import asyncio
from datetime import datetime
from typing import Dict, Optional

from src.crm.body import truncation_from_settings
from src.crm.checkpoint import CheckpointStore
from src.crm.config import SyncConfig
from src.crm.flow import HighriseSync
from src.crm.highrise import HighriseClient
from src.settings import app_settings, highrise_settings, slack_settings
from src.util.http_utils import SlackWebhook
from src.util.logging import get_logger

logger = get_logger(__name__)


def build_sync() -> HighriseSync:
    """
    Create a HighriseSync from the environment settings.

    Raises:
        ValueError: If required settings are missing
    """
    config = SyncConfig.from_settings(highrise_settings, slack_settings)
    client = HighriseClient(
        config.crm_base_url,
        highrise_settings.token,
        timeout=highrise_settings.timeout,
        page_size=highrise_settings.page_size,
    )
    webhook = SlackWebhook(timeout=slack_settings.timeout)
    return HighriseSync(
        config, client, webhook, truncate=truncation_from_settings(slack_settings)
    )


def run_sync_cycle(
    store: Optional[CheckpointStore] = None,
    since: Optional[datetime] = None,
    highrise_sync: Optional[HighriseSync] = None,
) -> Dict[str, str]:
    """
    Load the checkpoint, run one cycle and save the new checkpoint.

    Args:
        store: Checkpoint storage, defaults to the configured checkpoint file
        since: Use this checkpoint instead of the stored one
        highrise_sync: Preconfigured sync, defaults to one built from settings

    Returns:
        dict: Status with the previous and the new checkpoint
    """
    store = store or CheckpointStore(app_settings.checkpoint_file)
    highrise_sync = highrise_sync or build_sync()

    checkpoint = since or store.load()
    logger.info(f"Syncing Highrise recordings since {checkpoint.isoformat()}")

    new_checkpoint = asyncio.run(highrise_sync.sync(checkpoint))
    store.save(new_checkpoint)

    if new_checkpoint != checkpoint:
        logger.info(f"Checkpoint advanced to {new_checkpoint.isoformat()}")

    return {
        "status": "success",
        "previous_checkpoint": checkpoint.isoformat(),
        "checkpoint": new_checkpoint.isoformat(),
    }
