"""
Sync cycle: fetch new Highrise recordings, post the matching ones to Slack
and compute the next checkpoint.
"""

import asyncio
from datetime import datetime
from typing import List

from pydantic import ValidationError

from src.crm.body import TruncatePolicy, no_truncation
from src.crm.config import SyncConfig
from src.crm.enrich import enrich_recording
from src.crm.errors import PER_RECORD_ERRORS
from src.crm.filters import describe_filter, filter_record
from src.crm.formatter import format_webhook
from src.crm.models import Recording
from src.util.date_utils import ensure_utc, format_since
from src.util.logging import get_logger, log_error_with_context

logger = get_logger(__name__)


def next_checkpoint(checkpoint: datetime, recordings: List[Recording]) -> datetime:
    """
    Latest `updated_at` across every fetched recording, including those that
    were filtered out or skipped. Never earlier than the current checkpoint.
    """
    return max([checkpoint] + [r.updated_at for r in recordings])


class HighriseSync:
    """
    Runs sync cycles against one Highrise account and one Slack webhook.

    The checkpoint is owned by the caller: `sync` takes the last checkpoint
    and returns the next one. Cycles must not overlap.
    """

    def __init__(
        self,
        config: SyncConfig,
        client,
        webhook,
        truncate: TruncatePolicy = no_truncation,
    ):
        self.config = config
        self.client = client
        self.webhook = webhook
        self.truncate = truncate

    async def fetch_recordings(self, checkpoint: datetime) -> List[Recording]:
        """Fetch every recording created or updated since the checkpoint."""
        data = await self.client.get_all(
            "recordings.xml", {"since": format_since(checkpoint)}
        )

        recordings = []
        for item in data:
            try:
                recordings.append(Recording.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Ignoring malformed recording {item.get('id') if isinstance(item, dict) else item!r}: {e}"
                )
        return recordings

    async def process_recording(self, recording: Recording) -> bool:
        """
        Enrich, format and post one recording.

        Returns:
            bool: True if the message was posted, False if it was skipped
        """
        enriched = await enrich_recording(self.client, recording)
        if enriched is None:
            return False

        try:
            payload = await format_webhook(enriched, self.config, self.truncate)
            await self.webhook.post(self.config.webhook_url, payload.to_json())
        except PER_RECORD_ERRORS as e:
            log_error_with_context(
                logger,
                e,
                {"recording_id": recording.id, "type": recording.type},
                message=f"Skipping recording {recording.id}",
            )
            return False

        logger.info(f"Posted {recording.type} {recording.id} to Slack")
        return True

    async def sync(self, checkpoint: datetime) -> datetime:
        """
        Run one sync cycle.

        Args:
            checkpoint: Last synced point; naive values are taken as UTC

        Returns:
            datetime: The next checkpoint

        Raises:
            FetchError: If the recordings list cannot be fetched
            Exception: Any unexpected error raised while processing a
                recording; the checkpoint is not advanced
        """
        checkpoint = ensure_utc(checkpoint)

        recordings = await self.fetch_recordings(checkpoint)
        logger.info(f"Found {len(recordings)} new recordings in Highrise")
        if not recordings:
            return checkpoint

        logger.info(describe_filter(self.config))
        candidates = sorted(
            (r for r in recordings if filter_record(r, checkpoint, self.config)),
            key=lambda r: r.created_at,
        )

        if not candidates:
            logger.info("No matching recordings found")
            return checkpoint

        logger.info(f"Found {len(candidates)} filtered recordings")

        results = await asyncio.gather(
            *(self.process_recording(r) for r in candidates),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.error(
                f"{len(errors)} of {len(candidates)} recordings failed unexpectedly, "
                "checkpoint not advanced"
            )
            raise errors[0]

        posted = sum(1 for r in results if r)
        logger.info(f"Sent {posted} of {len(candidates)} new recordings to Slack")

        return next_checkpoint(checkpoint, recordings)


async def sync(
    checkpoint: datetime,
    config: SyncConfig,
    client,
    webhook,
    truncate: TruncatePolicy = no_truncation,
) -> datetime:
    """Run a single sync cycle with the given collaborators."""
    return await HighriseSync(config, client, webhook, truncate).sync(checkpoint)
