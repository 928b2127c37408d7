import asyncio
from typing import Optional

from pydantic import ValidationError

from src.crm.errors import FetchError
from src.crm.models import Author, EnrichedRecording, Recording
from src.crm.subjects import resolve_subject
from src.util.logging import get_logger, log_error_with_context

logger = get_logger(__name__)


async def fetch_author(client, author_id: Optional[int]) -> Author:
    """
    Fetch the Highrise user who created a recording.

    Raises:
        FetchError: If the user cannot be fetched
    """
    if author_id is None:
        raise FetchError("Recording has no author id")

    data = await client.get(f"users/{author_id}.xml")
    if not isinstance(data, dict):
        raise FetchError(f"users/{author_id}.xml did not return an entity")
    try:
        return Author.model_validate(data)
    except ValidationError as e:
        raise FetchError(f"users/{author_id}.xml is not a valid user: {e}") from e


async def _cancel_pending(tasks):
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def enrich_recording(client, recording: Recording) -> Optional[EnrichedRecording]:
    """
    Fetch the author and subject of a recording concurrently.

    Both lookups must succeed. If either fails the recording is skipped:
    the failure is logged and None is returned. Errors other than
    FetchError propagate.
    """
    tasks = [
        asyncio.ensure_future(fetch_author(client, recording.author_id)),
        asyncio.ensure_future(
            resolve_subject(client, recording.subject_id, recording.subject_type)
        ),
    ]

    try:
        author, subject = await asyncio.gather(*tasks)
    except FetchError as e:
        log_error_with_context(
            logger,
            e,
            {
                "recording_id": recording.id,
                "author_id": recording.author_id,
                "subject": f"{recording.subject_type} {recording.subject_id}",
                "status": e.status,
                "body": e.body[:500],
            },
            message=f"Skipping recording {recording.id}",
        )
        return None
    finally:
        await _cancel_pending(tasks)

    return EnrichedRecording(recording=recording, author=author, subject=subject)
