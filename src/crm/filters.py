from datetime import datetime

from src.crm.config import SyncConfig
from src.crm.models import Recording, RecordingType

EVERYONE = "Everyone"

RECORDING_TYPES = frozenset(t.value for t in RecordingType)


def filter_record(record: Recording, checkpoint: datetime, config: SyncConfig) -> bool:
    """Decide whether a fetched recording should be posted."""
    # only post emails, notes or comments
    if record.type not in RECORDING_TYPES:
        return False

    # visible to everyone and everyone is shown, or visible to a configured group
    visible = (record.visible_to == EVERYONE and config.show_everyone) or (
        record.group_id is not None and record.group_id in config.groups
    )
    if not visible:
        return False

    # created after the checkpoint; edits to older recordings are not re-posted
    return record.created_at > checkpoint


def describe_filter(config: SyncConfig) -> str:
    """Human readable summary of the active filter, for logging."""
    msg = "Filtering recordings of type " + ", ".join(t.value for t in RecordingType)
    visibility = []
    if config.show_everyone:
        visibility.append("visible to everyone")
    if config.groups:
        visibility.append(
            "visible to groups " + ", ".join(str(g) for g in sorted(config.groups))
        )
    if visibility:
        msg += " that are " + " or ".join(visibility)
    return msg
