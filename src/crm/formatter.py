"""
Formatting of enriched recordings as Slack webhook messages.
"""

from src.crm.body import TruncatePolicy, no_truncation, parse_body
from src.crm.config import SyncConfig
from src.crm.models import (
    Attachment,
    EnrichedRecording,
    Recording,
    RecordingType,
    Subject,
    WebhookPayload,
)
from src.crm.subjects import subject_path_for
from src.util.date_utils import to_epoch_seconds

RECORDING_LABELS = {
    RecordingType.EMAIL: "an email",
    RecordingType.NOTE: "a note",
    RecordingType.COMMENT: "a comment",
}

DEFAULT_LABEL = "a note"


def recording_label(recording_type: str) -> str:
    try:
        return RECORDING_LABELS[RecordingType(recording_type)]
    except ValueError:
        return DEFAULT_LABEL


def recording_link(base_url: str, recording: Recording) -> str:
    return f"{base_url}{recording.type}s/{recording.id}"


def subject_link(base_url: str, recording: Recording, subject: Subject) -> str:
    return f"{base_url}{subject_path_for(recording.subject_type)}/{subject.id}"


async def format_webhook(
    enriched: EnrichedRecording,
    config: SyncConfig,
    truncate: TruncatePolicy = no_truncation,
) -> WebhookPayload:
    """
    Build the Slack message for an enriched recording.

    Raises:
        ParseError: If the recording body cannot be parsed
    """
    recording = enriched.recording
    author_first_name = enriched.author.first_name
    label = recording_label(recording.type)

    link = recording_link(config.crm_base_url, recording)
    about = subject_link(config.crm_base_url, recording, enriched.subject)

    body = await parse_body(recording)
    truncated = truncate(body)
    if truncated != body:
        body = f"{truncated} <{link}|Read more…>"

    attachment = Attachment(
        fallback=recording.body,
        text=body,
        ts=to_epoch_seconds(recording.created_at),
        mrkdwn_in=["text", "pretext"],
        title=recording.title or None,
        title_link=link if recording.title else None,
    )

    return WebhookPayload(
        text=(
            f"{author_first_name} shared <{link}|{label}> "
            f"about <{about}|{recording.subject_name}>"
        ),
        username=config.username,
        icon_url=config.icon_url,
        attachments=[attachment],
    )
