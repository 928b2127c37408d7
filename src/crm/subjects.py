"""
Resolution of a recording's subject to a Highrise entity.
"""

from typing import Optional

from pydantic import ValidationError

from src.crm.errors import FetchError
from src.crm.models import Subject, SubjectType
from src.util.logging import get_logger

logger = get_logger(__name__)

PEOPLE = "people"
COMPANIES = "companies"


def subject_path_for(subject_type: str) -> str:
    """
    Collection path for a subject type.
    Unknown types are treated as parties.
    """
    try:
        kind = SubjectType(subject_type)
    except ValueError:
        return PEOPLE

    if kind is SubjectType.PARTY:
        return PEOPLE
    elif kind is SubjectType.DEAL:
        return "deals"
    elif kind is SubjectType.KASE:
        return "kases"
    return PEOPLE


async def fetch_subject(client, subject_id: Optional[int], path: str) -> Subject:
    if subject_id is None:
        raise FetchError(f"Recording has no subject id for {path}")
    data = await client.get(f"{path}/{subject_id}.xml")
    if not isinstance(data, dict):
        raise FetchError(f"{path}/{subject_id}.xml did not return an entity")
    try:
        return Subject.model_validate(data)
    except ValidationError as e:
        raise FetchError(f"{path}/{subject_id}.xml is not a valid subject: {e}") from e


async def resolve_subject(client, subject_id: Optional[int], subject_type: str) -> Subject:
    """
    Fetch the subject of a recording.

    A Party can be either a person or a company, so a failed lookup in
    `people` is retried once against `companies`. Failures for any other
    collection propagate immediately.

    Raises:
        FetchError: If the subject cannot be fetched
    """
    path = subject_path_for(subject_type)
    try:
        return await fetch_subject(client, subject_id, path)
    except FetchError as e:
        if path != PEOPLE:
            raise
        logger.debug(
            f"Subject {subject_id} not found in {PEOPLE} ({e}), trying {COMPANIES}"
        )

    return await fetch_subject(client, subject_id, COMPANIES)
